# tests/core/test_logging.py
"""Tests for structured logging configuration."""

import json
import logging

import pytest


class TestLoggingConfig:
    """Tests for logging configuration."""

    def test_get_logger_returns_logger(self) -> None:
        """get_logger returns a bound logger."""
        from bounded_http.core.logging import get_logger

        logger = get_logger("test")
        assert hasattr(logger, "info")
        assert hasattr(logger, "warning")
        assert hasattr(logger, "bind")

    def test_logger_outputs_structured(self, capsys: pytest.CaptureFixture[str]) -> None:
        """Logger outputs structured JSON."""
        from bounded_http.core.logging import configure_logging, get_logger

        configure_logging(json_output=True)
        logger = get_logger("test")

        logger.info("redirect_followed", status_code=302)

        captured = capsys.readouterr()
        log_line = captured.out.strip().split("\n")[-1]
        data = json.loads(log_line)
        assert data["event"] == "redirect_followed"
        assert data["status_code"] == 302

    def test_json_output_omits_internal_fields(self, capsys: pytest.CaptureFixture[str]) -> None:
        """ProcessorFormatter bookkeeping keys never reach the output."""
        from bounded_http.core.logging import configure_logging, get_logger

        configure_logging(json_output=True)
        get_logger("test").info("event")

        data = json.loads(capsys.readouterr().out.strip().split("\n")[-1])
        assert "_record" not in data
        assert "_from_structlog" not in data

    def test_logger_console_output(self, capsys: pytest.CaptureFixture[str]) -> None:
        """Logger outputs human-readable in console mode."""
        from bounded_http.core.logging import configure_logging, get_logger

        configure_logging(json_output=False)
        logger = get_logger("test")

        logger.info("test message", key="value")

        captured = capsys.readouterr()
        assert "test message" in captured.out
        # Should NOT be JSON
        assert not captured.out.strip().startswith("{")

    def test_level_filters_debug(self, capsys: pytest.CaptureFixture[str]) -> None:
        """DEBUG events are dropped at the default INFO level."""
        from bounded_http.core.logging import configure_logging, get_logger

        configure_logging(json_output=True)
        get_logger("test").debug("request_completed")

        assert "request_completed" not in capsys.readouterr().out

    def test_level_is_case_insensitive(self) -> None:
        from bounded_http.core.logging import configure_logging

        configure_logging(level="debug")

        assert logging.getLogger().level == logging.DEBUG

    def test_noisy_transport_loggers_silenced(self) -> None:
        """httpx/httpcore loggers stay at WARNING even in DEBUG mode.

        Connection and header-frame chatter from the transport stack would
        otherwise drown the sender's own redirect events.
        """
        from bounded_http.core.logging import TRANSPORT_LOGGERS, configure_logging

        configure_logging(level="DEBUG")

        assert logging.getLogger().level == logging.DEBUG

        for name in TRANSPORT_LOGGERS:
            logger = logging.getLogger(name)
            assert logger.getEffectiveLevel() >= logging.WARNING, (
                f"Logger '{name}' should be WARNING or higher, got level {logger.getEffectiveLevel()}"
            )

    def test_noisy_loggers_follow_stricter_root(self) -> None:
        """A root level above WARNING is not loosened for noisy loggers."""
        from bounded_http.core.logging import configure_logging

        configure_logging(level="ERROR")

        assert logging.getLogger("httpx").level == logging.ERROR

    def test_stdlib_loggers_emit_json_when_json_output_enabled(self, capsys: pytest.CaptureFixture[str]) -> None:
        """stdlib loggers (httpx uses them) emit JSON when json_output=True."""
        from bounded_http.core.logging import configure_logging

        configure_logging(json_output=True)

        stdlib_logger = logging.getLogger("test.stdlib.module")
        stdlib_logger.info("message from stdlib logger")

        captured = capsys.readouterr()
        log_line = captured.out.strip().split("\n")[-1]

        data = json.loads(log_line)
        assert data["event"] == "message from stdlib logger"
        assert "level" in data
        assert "timestamp" in data

    def test_events_carry_logger_name(self, capsys: pytest.CaptureFixture[str]) -> None:
        from bounded_http.core.logging import configure_logging, get_logger

        configure_logging(json_output=True)
        get_logger("bounded_http.engine.sender").info("request_completed")

        data = json.loads(capsys.readouterr().out.strip().split("\n")[-1])
        assert data["logger"] == "bounded_http.engine.sender"

    def test_unknown_level_rejected(self) -> None:
        from bounded_http.core.logging import configure_logging

        with pytest.raises(ValueError, match="Unknown log level"):
            configure_logging(level="CHATTY")

    def test_explicit_stream(self) -> None:
        import io

        from bounded_http.core.logging import configure_logging, get_logger

        stream = io.StringIO()
        configure_logging(json_output=True, stream=stream)
        get_logger("test").warning("redirect_body_dropped", status_code=307)

        data = json.loads(stream.getvalue().strip().split("\n")[-1])
        assert data["event"] == "redirect_body_dropped"
        assert data["level"] == "warning"


class TestApplyLoggingSettings:
    """The logging section of SenderSettings drives configure_logging()."""

    def test_settings_level_and_format_applied(self) -> None:
        import io

        from bounded_http.core.config import LoggingSettings
        from bounded_http.core.logging import apply_logging_settings, get_logger

        stream = io.StringIO()
        apply_logging_settings(LoggingSettings(level="debug", json_output=True), stream=stream)
        get_logger("test").debug("redirect_followed", hops_remaining=4)

        assert logging.getLogger().level == logging.DEBUG
        data = json.loads(stream.getvalue().strip().split("\n")[-1])
        assert data["event"] == "redirect_followed"
        assert data["hops_remaining"] == 4

    def test_sender_from_settings_applies_logging(self) -> None:
        from bounded_http.core.config import SenderSettings
        from bounded_http.engine.sender import RequestSender
        from tests.fixtures.transport import FakeTransport

        settings = SenderSettings(logging={"level": "WARNING"})

        RequestSender.from_settings(settings, transport=FakeTransport())

        assert logging.getLogger().level == logging.WARNING

    def test_sender_from_settings_can_leave_logging_alone(self) -> None:
        from bounded_http.core.config import SenderSettings
        from bounded_http.engine.sender import RequestSender
        from tests.fixtures.transport import FakeTransport

        root = logging.getLogger()
        handlers_before = root.handlers[:]
        level_before = root.level

        RequestSender.from_settings(
            SenderSettings(logging={"level": "ERROR"}),
            transport=FakeTransport(),
            configure_logs=False,
        )

        assert root.handlers == handlers_before
        assert root.level == level_before
