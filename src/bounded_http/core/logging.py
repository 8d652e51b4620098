# src/bounded_http/core/logging.py
"""Structured logging for request lifecycle events.

The engine emits structlog events (redirect_followed, redirect_body_dropped,
request_completed, request_failed, transport_send_failed). httpx and httpcore
log through stdlib logging, so both are rendered by one ProcessorFormatter
handler on the root logger and come out in the same format.

    from bounded_http.core.logging import configure_logging, get_logger

    configure_logging(json_output=True, level="DEBUG")
    get_logger(__name__).debug("redirect_followed", status_code=302)

Services loading a settings file apply its logging section with
apply_logging_settings() (RequestSender.from_settings does this).
"""

from __future__ import annotations

import logging
import sys
from typing import TYPE_CHECKING, Any, TextIO

import structlog
from structlog.stdlib import ProcessorFormatter

if TYPE_CHECKING:
    from bounded_http.core.config import LoggingSettings

# The transport stack logs every connection, TLS handshake and header frame.
# These never go below WARNING, even when the sender itself runs at DEBUG.
TRANSPORT_LOGGERS: tuple[str, ...] = (
    "httpx",
    "httpcore",
    "httpcore.connection",
    "httpcore.http11",
    "httpcore.http2",
    "hpack",
)


def _drop_formatter_bookkeeping(
    logger: logging.Logger | None,
    method_name: str,
    event_dict: dict[str, Any],
) -> dict[str, Any]:
    """Strip the _record/_from_structlog keys ProcessorFormatter always adds."""
    del event_dict["_record"]
    del event_dict["_from_structlog"]
    return event_dict


def _pre_chain() -> list[Any]:
    """Processors run for every record, structlog-born or stdlib-born."""
    return [
        structlog.contextvars.merge_contextvars,
        structlog.stdlib.add_logger_name,
        structlog.processors.add_log_level,
        structlog.processors.TimeStamper(fmt="iso"),
        structlog.stdlib.PositionalArgumentsFormatter(),
        structlog.processors.StackInfoRenderer(),
    ]


def _render_chain(json_output: bool) -> list[Any]:
    if json_output:
        return [
            _drop_formatter_bookkeeping,
            structlog.processors.format_exc_info,
            structlog.processors.JSONRenderer(),
        ]
    return [
        _drop_formatter_bookkeeping,
        structlog.dev.ConsoleRenderer(colors=False),
    ]


def _quiet_transport_loggers(root_level: int) -> None:
    # Never looser than the root level (an ERROR root keeps them at ERROR)
    level = max(root_level, logging.WARNING)
    for name in TRANSPORT_LOGGERS:
        logging.getLogger(name).setLevel(level)


def configure_logging(
    *,
    json_output: bool = False,
    level: str = "INFO",
    stream: TextIO | None = None,
) -> None:
    """Route structlog and stdlib logging through one handler.

    Replaces the root logger's handlers, so calling it again reconfigures
    cleanly (loggers are not cached).

    Args:
        json_output: JSON lines if True, plain console lines otherwise
        level: Root level name, case-insensitive (DEBUG, INFO, ...)
        stream: Output stream; defaults to sys.stdout at call time
    """
    root_level = logging.getLevelName(level.upper())
    if not isinstance(root_level, int):
        raise ValueError(f"Unknown log level: {level}")

    pre_chain = _pre_chain()

    structlog.configure(
        processors=[*pre_chain, ProcessorFormatter.wrap_for_formatter],
        wrapper_class=structlog.stdlib.BoundLogger,
        context_class=dict,
        logger_factory=structlog.stdlib.LoggerFactory(),
        cache_logger_on_first_use=False,
    )

    handler = logging.StreamHandler(stream if stream is not None else sys.stdout)
    handler.setFormatter(
        ProcessorFormatter(
            processors=_render_chain(json_output),
            foreign_pre_chain=pre_chain,
        )
    )

    root = logging.getLogger()
    root.handlers = [handler]
    root.setLevel(root_level)

    _quiet_transport_loggers(root_level)


def apply_logging_settings(settings: LoggingSettings, *, stream: TextIO | None = None) -> None:
    """configure_logging() from the logging section of SenderSettings."""
    configure_logging(json_output=settings.json_output, level=settings.level, stream=stream)


def get_logger(name: str) -> structlog.stdlib.BoundLogger:
    """Return the structlog logger for a module (pass __name__)."""
    logger: structlog.stdlib.BoundLogger = structlog.get_logger(name)
    return logger
