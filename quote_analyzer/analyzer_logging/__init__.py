"""
Structured logging for Quote Analyzer.

JSON logs with timestamp, event_type, request_id and per-event fields.
Use get_logger() in all modules for aggregation-friendly output.
"""

from quote_analyzer.analyzer_logging.logger import get_logger

__all__ = ["get_logger"]
