# src/bounded_http/core/__init__.py
"""Core infrastructure: Configuration, Logging, Security policy."""

from bounded_http.core.config import (
    LoggingSettings,
    SenderSettings,
    load_settings,
)
from bounded_http.core.logging import apply_logging_settings, configure_logging, get_logger
from bounded_http.core.security import is_local, validate_url_scheme

__all__ = [
    "LoggingSettings",
    "SenderSettings",
    "apply_logging_settings",
    "configure_logging",
    "get_logger",
    "is_local",
    "load_settings",
    "validate_url_scheme",
]
