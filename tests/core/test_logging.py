# tests/core/test_logging.py
"""Tests for structured logging configuration."""

import io
import json
import logging

import pytest


def _json_lines(text: str) -> list[dict[str, object]]:
    return [json.loads(line) for line in text.splitlines() if line.startswith("{")]


class TestLoggingConfig:
    """Tests for logging configuration."""

    def test_get_logger_returns_logger(self) -> None:
        from spatialmin.core.logging import get_logger

        logger = get_logger("test")
        assert hasattr(logger, "info")
        assert hasattr(logger, "debug")
        assert hasattr(logger, "bind")

    def test_json_output_goes_to_stderr(self, capsys: pytest.CaptureFixture[str]) -> None:
        """stdout is reserved for the run report."""
        from spatialmin.core.logging import configure_logging, get_logger

        configure_logging(json_output=True)
        get_logger("test").info("test message", key="value")

        captured = capsys.readouterr()
        assert captured.out == ""
        data = _json_lines(captured.err)[-1]
        assert data["event"] == "test message"
        assert data["key"] == "value"

    def test_console_output_is_not_json(self, capsys: pytest.CaptureFixture[str]) -> None:
        from spatialmin.core.logging import configure_logging, get_logger

        configure_logging(json_output=False)
        get_logger("test").info("test message", key="value")

        captured = capsys.readouterr()
        assert "test message" in captured.err
        assert not captured.err.strip().startswith("{")

    def test_explicit_stream(self) -> None:
        from spatialmin.core.logging import configure_logging, get_logger

        stream = io.StringIO()
        configure_logging(json_output=True, stream=stream)
        get_logger("test").warning("to stream")

        assert _json_lines(stream.getvalue())[-1]["event"] == "to stream"

    def test_level_filters_debug(self, capsys: pytest.CaptureFixture[str]) -> None:
        from spatialmin.core.logging import configure_logging, get_logger

        configure_logging(json_output=True, level="INFO")
        logger = get_logger("test")

        logger.debug("hidden")
        logger.info("shown")

        captured = capsys.readouterr()
        assert "hidden" not in captured.err
        assert "shown" in captured.err

    def test_unknown_level_rejected(self) -> None:
        from spatialmin.core.logging import configure_logging

        with pytest.raises(ValueError, match="Unknown log level"):
            configure_logging(level="LOUD")

    def test_dynaconf_held_at_warning(self) -> None:
        from spatialmin.core.logging import configure_logging

        configure_logging(level="DEBUG")

        assert logging.getLogger().level == logging.DEBUG
        assert logging.getLogger("dynaconf").getEffectiveLevel() >= logging.WARNING

    def test_stdlib_loggers_share_json_format(self, capsys: pytest.CaptureFixture[str]) -> None:
        """Records from logging.getLogger(__name__) render like structlog events."""
        from spatialmin.core.logging import configure_logging

        configure_logging(json_output=True)
        logging.getLogger("test.stdlib.module").info("message from stdlib logger")

        data = _json_lines(capsys.readouterr().err)[-1]
        assert data["event"] == "message from stdlib logger"
        assert "level" in data
        assert "timestamp" in data


class TestRunEvents:
    """Events the minifier stages emit at DEBUG."""

    def test_precision_reduction_event(self, capsys: pytest.CaptureFixture[str]) -> None:
        from spatialmin.core.logging import configure_logging
        from spatialmin.core.precision import reduce_precision

        configure_logging(json_output=True, level="DEBUG")
        reduce_precision('{"x":1.23456,"y":2.5,"n":3,"s":"4.56789"}', 2)

        events = [e for e in _json_lines(capsys.readouterr().err) if e["event"] == "precision_reduced"]
        assert len(events) == 1
        assert events[0]["max_digits"] == 2
        assert events[0]["literals"] == 2
        assert events[0]["changed"] == 1
        assert events[0]["saved_chars"] == 3

    def test_run_events_hidden_at_info(self, capsys: pytest.CaptureFixture[str]) -> None:
        from spatialmin.core.config import MinifierSettings
        from spatialmin.core.logging import configure_logging
        from spatialmin.core.minifier import minify_document

        configure_logging(json_output=True, level="INFO")
        minify_document({"name": "TEAM_1_HQ", "x": 1.23456789}, MinifierSettings())

        captured = capsys.readouterr()
        assert captured.out == ""
        assert captured.err == ""
