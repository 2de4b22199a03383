"""
FastAPI/ASGI application entrypoint.

Run with: uvicorn quote_analyzer.api_server.app:app --host 0.0.0.0 --port 3000
"""

from quote_analyzer.api_server.server import app

__all__ = ["app"]
