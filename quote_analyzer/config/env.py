"""
Environment variable loading for Quote Analyzer.

- AI_SERVICE_URL: base URL of the AI analysis service (default: http://localhost:8000)
- AI_SERVICE_TIMEOUT_SEC: timeout for POST /analyze (default: 30, the AI step is slow)
- AI_SERVICE_HEALTH_TIMEOUT_SEC: timeout for the health check (default: 5)
- API_HOST / PORT: bind address for the HTTP server
- CORS_ORIGINS: comma-separated allowed origins
- LOG_LEVEL / LOG_FORMAT: log threshold and renderer (json | console)
- Loads .env from project root when available.
"""

from __future__ import annotations

import os
from pathlib import Path

from dotenv import load_dotenv

# Project root: config is quote_analyzer/config/, root is 2 levels up
_CONFIG_DIR = Path(__file__).resolve().parent
_PACKAGE_DIR = _CONFIG_DIR.parent
_ROOT = _PACKAGE_DIR.parent
_ENV_PATH = _ROOT / ".env"

DEFAULT_AI_SERVICE_URL = "http://localhost:8000"
DEFAULT_AI_SERVICE_TIMEOUT_SEC = 30.0
DEFAULT_AI_SERVICE_HEALTH_TIMEOUT_SEC = 5.0
DEFAULT_API_HOST = "0.0.0.0"
DEFAULT_API_PORT = 3000
# Vite dev server defaults
DEFAULT_CORS_ORIGINS = ("http://localhost:5173", "http://localhost:5174")
DEFAULT_LOG_LEVEL = "INFO"
DEFAULT_LOG_FORMAT = "json"


def load_analyzer_env() -> None:
    """Load .env from project root. Safe to call multiple times; never overrides real env."""
    load_dotenv(_ENV_PATH, override=False)


def _get_str(name: str, default: str) -> str:
    return (os.getenv(name) or "").strip() or default


def _get_float(name: str, default: float) -> float:
    raw = (os.getenv(name) or "").strip()
    if not raw:
        return default
    try:
        value = float(raw)
    except ValueError as e:
        raise ValueError(f"{name} must be a number, got {raw!r}") from e
    if value <= 0:
        raise ValueError(f"{name} must be positive, got {raw!r}")
    return value


def get_ai_service_url() -> str:
    """Return AI_SERVICE_URL without trailing slash."""
    load_analyzer_env()
    return _get_str("AI_SERVICE_URL", DEFAULT_AI_SERVICE_URL).rstrip("/")


def get_ai_service_timeout() -> float:
    load_analyzer_env()
    return _get_float("AI_SERVICE_TIMEOUT_SEC", DEFAULT_AI_SERVICE_TIMEOUT_SEC)


def get_ai_service_health_timeout() -> float:
    load_analyzer_env()
    return _get_float("AI_SERVICE_HEALTH_TIMEOUT_SEC", DEFAULT_AI_SERVICE_HEALTH_TIMEOUT_SEC)


def get_api_host() -> str:
    load_analyzer_env()
    return _get_str("API_HOST", DEFAULT_API_HOST)


def get_api_port() -> int:
    """Return PORT from env (default 3000)."""
    load_analyzer_env()
    raw = (os.getenv("PORT") or "").strip()
    if not raw:
        return DEFAULT_API_PORT
    try:
        port = int(raw)
    except ValueError as e:
        raise ValueError(f"PORT must be an integer, got {raw!r}") from e
    if not (0 < port < 65536):
        raise ValueError(f"PORT out of range: {port}")
    return port


def get_cors_origins() -> tuple[str, ...]:
    """Return CORS_ORIGINS as a tuple; empty entries are dropped."""
    load_analyzer_env()
    raw = (os.getenv("CORS_ORIGINS") or "").strip()
    if not raw:
        return DEFAULT_CORS_ORIGINS
    return tuple(o.strip() for o in raw.split(",") if o.strip())


def get_log_level() -> str:
    """Return LOG_LEVEL (default INFO), upper-cased."""
    load_analyzer_env()
    return _get_str("LOG_LEVEL", DEFAULT_LOG_LEVEL).upper()


def get_log_format() -> str:
    """Return LOG_FORMAT: json (default) or console."""
    load_analyzer_env()
    return _get_str("LOG_FORMAT", DEFAULT_LOG_FORMAT).lower()
