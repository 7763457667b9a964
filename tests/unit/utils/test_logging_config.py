"""Unit tests for logging setup, formatters and the Rich handler."""

from __future__ import annotations

import io
import json
import logging

import pytest
from rich.console import Console

from bfset.models import LogLevel, ObservabilityConfig
from bfset.utils.logging_config import (
    CorrelationFilter,
    LoggingContext,
    StructuredFormatter,
    get_correlation_id,
    get_logger,
    set_correlation_id,
    setup_logging,
)
from bfset.utils.rich_logging import FileFormatter, create_rich_handler, strip_rich_markup

pytestmark = [pytest.mark.unit, pytest.mark.utils]


def make_record(message: str = "hello", **extra) -> logging.LogRecord:
    record = logging.LogRecord(
        name="bfset.test",
        level=logging.INFO,
        pathname=__file__,
        lineno=10,
        msg=message,
        args=(),
        exc_info=None,
    )
    for key, value in extra.items():
        setattr(record, key, value)
    return record


class TestFormatters:
    """Tests for the structured and file formatters."""

    def test_structured_formatter_emits_json(self):
        record = make_record("parsed bitfield", size=15)
        record.correlation_id = "abc"
        data = json.loads(StructuredFormatter().format(record))
        assert data["message"] == "parsed bitfield"
        assert data["level"] == "INFO"
        assert data["logger"] == "bfset.test"
        assert data["correlation_id"] == "abc"
        assert data["size"] == 15

    def test_file_formatter_strips_markup(self):
        formatter = FileFormatter("%(message)s")
        assert formatter.format(make_record("[red]rejected[/red]")) == "rejected"

    def test_strip_rich_markup(self):
        assert strip_rich_markup("[bold]a[/bold] b [#ff69b4]c[/#ff69b4]") == "a b c"


class TestCorrelation:
    """Tests for correlation ID handling."""

    def test_filter_adds_correlation_id(self):
        set_correlation_id("corr-1")
        record = make_record()
        assert CorrelationFilter().filter(record) is True
        assert record.correlation_id == "corr-1"

    def test_set_generates_id(self):
        corr_id = set_correlation_id()
        assert corr_id
        assert get_correlation_id() == corr_id


class TestSetupLogging:
    """Tests for setup_logging."""

    def test_log_file_plain(self, tmp_path):
        log_file = tmp_path / "bfset.log"
        setup_logging(
            ObservabilityConfig(
                log_level=LogLevel.INFO,
                log_file=str(log_file),
                log_format="%(levelname)s %(message)s",
            )
        )
        get_logger("test").info("stored %d pieces", 3)
        assert "INFO stored 3 pieces" in log_file.read_text(encoding="utf-8")

    def test_log_file_structured(self, tmp_path):
        log_file = tmp_path / "bfset.jsonl"
        setup_logging(
            ObservabilityConfig(
                log_level=LogLevel.DEBUG,
                log_file=str(log_file),
                structured_logging=True,
            )
        )
        get_logger("test").debug("payload=aa", extra={"size": 8})
        line = log_file.read_text(encoding="utf-8").strip().splitlines()[-1]
        data = json.loads(line)
        assert data["message"] == "payload=aa"
        assert data["size"] == 8
        assert data["correlation_id"] != "no-correlation-id"

    def test_level_filters_records(self, tmp_path):
        log_file = tmp_path / "bfset.log"
        setup_logging(
            ObservabilityConfig(log_level=LogLevel.WARNING, log_file=str(log_file))
        )
        get_logger("test").info("hidden")
        get_logger("test").warning("shown")
        text = log_file.read_text(encoding="utf-8")
        assert "hidden" not in text
        assert "shown" in text

    def test_log_file_directory_is_created(self, tmp_path):
        log_file = tmp_path / "missing" / "bfset.log"
        setup_logging(ObservabilityConfig(log_level=LogLevel.INFO, log_file=str(log_file)))
        get_logger("test").info("created")
        assert "created" in log_file.read_text(encoding="utf-8")

    def test_console_handler_is_rich(self):
        setup_logging(ObservabilityConfig())
        handlers = logging.getLogger("bfset").handlers
        assert any(type(h).__name__ == "CorrelationRichHandler" for h in handlers)


class TestRichHandler:
    """Tests for CorrelationRichHandler."""

    def test_renders_message(self):
        stream = io.StringIO()
        handler = create_rich_handler(
            console=Console(file=stream, width=200), level=logging.DEBUG
        )
        logger = logging.getLogger("bfset.test.rich")
        logger.addHandler(handler)
        logger.setLevel(logging.DEBUG)
        logger.warning("Rejected payload=8001 [size 15]")
        output = stream.getvalue()
        assert "8001" in output
        assert "[size 15]" in output

    def test_does_not_modify_shared_record(self):
        handler = create_rich_handler(console=Console(file=io.StringIO()))
        record = make_record("payload=aa")
        handler.handle(record)
        assert record.getMessage() == "payload=aa"


class TestLoggingContext:
    """Tests for LoggingContext."""

    def test_logs_completion(self, caplog):
        caplog.set_level(logging.DEBUG, logger="bfset.operations")
        with LoggingContext("parse_bitfield", size=8):
            pass
        assert "Starting parse_bitfield" in caplog.text
        assert "Completed parse_bitfield" in caplog.text

    def test_logs_failure_and_propagates(self, caplog):
        caplog.set_level(logging.DEBUG, logger="bfset.operations")
        with pytest.raises(ValueError), LoggingContext("combine"):
            raise ValueError("boom")
        assert "Failed combine" in caplog.text
        assert any(r.levelno == logging.ERROR for r in caplog.records)
