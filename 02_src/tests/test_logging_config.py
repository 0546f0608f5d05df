"""Tests for logging configuration."""

import json
import logging

from babybot.logging_config import (
    JSONFormatter,
    QUIET_LOGGERS,
    build_logging_config,
    log_context,
)


def _record(msg="hello", **extra):
    record = logging.LogRecord("babybot.test", logging.INFO, __file__, 10, msg, None, None)
    for key, value in extra.items():
        setattr(record, key, value)
    return record


class TestLogContext:
    def test_drops_none_values(self):
        assert log_context(conversation_id="c1", flow_id=None) == {
            "context": {"conversation_id": "c1"}
        }


class TestJSONFormatter:
    def test_renders_one_json_line(self):
        line = JSONFormatter().format(_record())

        data = json.loads(line)
        assert data["level"] == "INFO"
        assert data["logger"] == "babybot.test"
        assert data["message"] == "hello"
        assert "context" not in data

    def test_includes_context(self):
        record = _record(**log_context(conversation_id="c1"))

        data = json.loads(JSONFormatter().format(record))

        assert data["context"] == {"conversation_id": "c1"}


class TestBuildLoggingConfig:
    def test_level_and_handlers(self, tmp_path):
        log_file = str(tmp_path / "app.log")

        config = build_logging_config("debug", log_file)

        assert config["root"] == {"level": "DEBUG", "handlers": ["file", "console"]}
        assert config["handlers"]["file"]["filename"] == log_file
        for name in QUIET_LOGGERS:
            assert config["loggers"][name]["level"] == "WARNING"
