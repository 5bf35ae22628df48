"""Tests for logging, the logging transport and settings."""

import json
import logging

import pytest

from modelsync.config import Settings, get_settings
from modelsync.domain.entities import Action, ActionKind
from modelsync.infrastructure.telemetry import get_logger, unit_of_work_id_var
from modelsync.infrastructure.telemetry.logging import StructuredFormatter, TextFormatter
from modelsync.infrastructure.transport import LoggingTransport
from tests.fakes import Todo


def make_record(**extra) -> logging.LogRecord:
    record = logging.LogRecord("modelsync.test", logging.INFO, __file__, 1, "hello", (), None)
    for key, value in extra.items():
        setattr(record, key, value)
    return record


class TestStructuredFormatter:
    """Test JSON log output."""

    def test_includes_extra_fields(self):
        output = json.loads(StructuredFormatter().format(make_record(channel="/todos")))

        assert output["message"] == "hello"
        assert output["level"] == "info"
        assert output["logger"] == "modelsync.test"
        assert output["channel"] == "/todos"

    def test_includes_unit_of_work_id(self):
        token = unit_of_work_id_var.set("abc123")
        try:
            output = json.loads(StructuredFormatter().format(make_record()))
        finally:
            unit_of_work_id_var.reset(token)

        assert output["unit_of_work_id"] == "abc123"


class TestTextFormatter:
    """Test human-readable log output."""

    def test_format(self):
        line = TextFormatter().format(make_record())
        assert "INFO" in line
        assert "modelsync.test | hello" in line


class TestContextLogger:
    """Test logger adapter extras."""

    def test_bound_extra_added(self, caplog):
        logger = get_logger("modelsync.test", component="hub")

        with caplog.at_level(logging.INFO, logger="modelsync.test"):
            logger.info("bound", extra={"channel": "/todos"})

        record = caplog.records[-1]
        assert record.component == "hub"
        assert record.channel == "/todos"


class TestLoggingTransport:
    """Test the log-only transport."""

    def test_logs_action(self, caplog):
        transport = LoggingTransport()
        action = Action(Todo(id=1), ActionKind.UPDATE)

        with caplog.at_level(logging.INFO):
            transport.publish("/todos/1", action)

        record = caplog.records[-1]
        assert record.getMessage() == "sync update on /todos/1"
        assert record.action["id"] == 1


class TestSettings:
    """Test environment-driven settings."""

    def test_defaults(self, settings: Settings):
        assert settings.environment == "test"
        assert settings.enabled_by_default is False
        assert settings.is_production is False

    def test_reads_prefixed_environment(self, monkeypatch):
        monkeypatch.setenv("MODELSYNC_ENVIRONMENT", "production")
        monkeypatch.setenv("MODELSYNC_LOG_LEVEL", "WARNING")

        settings = get_settings()

        assert settings.is_production
        assert settings.log_level == "WARNING"

    def test_invalid_environment(self, monkeypatch):
        monkeypatch.setenv("MODELSYNC_ENVIRONMENT", "moon")
        with pytest.raises(ValueError):
            get_settings()

    def test_cached(self):
        assert get_settings() is get_settings()
