"""
Configuration management for Quote Analyzer.

Loads settings from environment variables and an optional .env file.
Exposes a single frozen Settings value built once at process startup.
"""

from quote_analyzer.config.settings import Settings, get_settings  # noqa: F401

__all__ = ["Settings", "get_settings"]
