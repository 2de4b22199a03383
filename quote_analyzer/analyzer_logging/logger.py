"""
Structured JSON logging: timestamp, event_type, request_id.

structlog with ISO timestamps, log level, and consistent keys for aggregation.
All modules should use get_logger() and log a snake_case event name first,
followed by key/value fields (vendor_name, quote_count, status_code, ...).

LOG_LEVEL and LOG_FORMAT come from the environment or the project .env, read
through quote_analyzer.config.env before structlog is configured. That module
only depends on python-dotenv, so importing it here cannot loop back to logging.
"""

from __future__ import annotations

import logging
import sys
from datetime import datetime, timezone
from typing import Any

import structlog

from quote_analyzer.config import env

# Resolved once at import; .env is loaded by these getters
LOG_LEVEL = env.get_log_level()
LOG_FORMAT = env.get_log_format()


def _add_timestamp(
    logger: Any,
    method_name: str,
    event_dict: dict[str, Any],
) -> dict[str, Any]:
    """Ensure timestamp is always present (ISO 8601)."""
    if "timestamp" not in event_dict:
        event_dict["timestamp"] = datetime.now(timezone.utc).isoformat()
    return event_dict


def _normalize_event(
    logger: Any,
    method_name: str,
    event_dict: dict[str, Any],
) -> dict[str, Any]:
    """Rename structlog 'event' to event_type; keep message if present."""
    if "event" in event_dict and "event_type" not in event_dict:
        event_dict["event_type"] = event_dict.pop("event")
    if "message" not in event_dict and "event_type" in event_dict:
        event_dict["message"] = str(event_dict["event_type"])
    return event_dict


def configure_structlog(level: str, fmt: str) -> None:
    """Configure structlog: JSON or console output, timestamp, level, event_type."""
    level_value = getattr(logging, level.upper(), logging.INFO)
    fmt = fmt.strip().lower()
    shared_processors: list[Any] = [
        structlog.contextvars.merge_contextvars,
        structlog.processors.add_log_level,
        structlog.processors.StackInfoRenderer(),
        structlog.processors.format_exc_info,
        _add_timestamp,
        _normalize_event,
    ]
    if fmt == "json":
        shared_processors.append(structlog.processors.JSONRenderer(ensure_ascii=False))
    else:
        shared_processors.append(
            structlog.dev.ConsoleRenderer(colors=sys.stderr.isatty())
        )
    structlog.configure(
        processors=shared_processors,
        wrapper_class=structlog.make_filtering_bound_logger(level_value),
        context_class=dict,
        logger_factory=structlog.PrintLoggerFactory(file=sys.stdout),
        cache_logger_on_first_use=True,
    )


# One-time configuration on first import
if not structlog.is_configured():
    configure_structlog(LOG_LEVEL, LOG_FORMAT)


def get_logger(name: str) -> structlog.BoundLogger:
    """
    Return a structured logger for the given module name.

        logger = get_logger(__name__)
        logger.info("quotes_analyzed", quote_count=3, top_score=82.0)

    Output (JSON): {"event_type": "quotes_analyzed", "quote_count": 3, "top_score": 82.0,
    "timestamp": "...", "level": "info", "logger": "module.name"}
    """
    return structlog.get_logger(name).bind(logger=name)
