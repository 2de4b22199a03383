"""
AI service integration — HTTP client and wire schema for the external
analysis engine.
"""

from quote_analyzer.ai_service.client import AIServiceClient

__all__ = ["AIServiceClient"]
