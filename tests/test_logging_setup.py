"""Tests for logging setup and public API."""

import logging
import os
import time
from logging.handlers import QueueHandler
from unittest.mock import patch

import pytest

from factories import IN, event, full_publish
from mqttlog.formatter import format_event
from mqttlog.logging import (
    JsonFormatter,
    MessageFormatter,
    PlainFormatter,
    SmartFormatter,
    StructuredLogger,
    get_logger,
    setup_logging,
)
from mqttlog.logging.setup import _listeners, _shutdown_listeners
from mqttlog.packets import EventKind
from mqttlog.profile import FeatureProfile
from mqttlog.sinks import LoggerSink


@pytest.fixture(autouse=True)
def _restore_loggers():
    root = logging.getLogger()
    level = root.level
    messages = logging.getLogger("mqttlog.messages")
    saved = (messages.handlers[:], messages.level, messages.propagate)
    yield
    _shutdown_listeners()
    for handler in root.handlers[:]:
        if isinstance(handler, QueueHandler) or type(handler) is logging.StreamHandler:
            root.removeHandler(handler)
    root.setLevel(level)
    handlers, messages_level, propagate = saved
    messages.handlers[:] = handlers
    messages.setLevel(messages_level)
    messages.propagate = propagate


class TestSetupLogging:
    def test_creates_log_directory(self, tmp_path):
        log_dir = tmp_path / "testlogs"
        setup_logging(level="DEBUG", log_dir=str(log_dir))
        assert log_dir.exists()

    def test_creates_main_log_file(self, tmp_path):
        log_dir = tmp_path / "testlogs2"
        setup_logging(level="DEBUG", log_dir=str(log_dir))
        get_logger("test.setup").info("setup test")
        time.sleep(0.2)
        assert (log_dir / "mqttlog.log").exists()

    def test_creates_error_log_file(self, tmp_path):
        log_dir = tmp_path / "testlogs3"
        setup_logging(level="DEBUG", log_dir=str(log_dir))
        get_logger("test.error_setup").error("error test")
        time.sleep(0.2)
        assert (log_dir / "mqttlog_error.log").exists()

    def test_json_logging_opt_in(self, tmp_path):
        log_dir = tmp_path / "testlogs4"
        with patch.dict(os.environ, {"LOG_JSON": "true"}):
            setup_logging(level="DEBUG", log_dir=str(log_dir))
        get_logger("test.json").info("json test")
        time.sleep(0.2)
        assert (log_dir / "mqttlog.jsonl").exists()

    def test_explicit_level_wins(self, tmp_path):
        with patch.dict(os.environ, {"LOG_LEVEL": "ERROR"}):
            setup_logging(level="DEBUG", log_dir=str(tmp_path))
        assert logging.getLogger().level == logging.DEBUG

    def test_env_level_used_without_arg(self, tmp_path):
        with patch.dict(os.environ, {"LOG_LEVEL": "WARNING"}):
            setup_logging(log_dir=str(tmp_path))
        assert logging.getLogger().level == logging.WARNING

    def test_log_dir_from_env(self, tmp_path):
        log_dir = tmp_path / "fromenv"
        with patch.dict(os.environ, {"LOG_DIR": str(log_dir)}):
            setup_logging(level="INFO")
        assert log_dir.is_dir()

    def test_reinit_does_not_stack_handlers(self, tmp_path):
        setup_logging(level="INFO", log_dir=str(tmp_path))
        count = len(logging.getLogger().handlers)
        setup_logging(level="INFO", log_dir=str(tmp_path))
        assert len(logging.getLogger().handlers) == count
        assert len(_listeners) == 3
        assert len(logging.getLogger("mqttlog.messages").handlers) == 1


class TestMessageFile:
    def test_packet_records_land_in_message_file(self, tmp_path):
        setup_logging(level="INFO", log_dir=str(tmp_path))
        line = format_event(event(EventKind.PUBLISH, IN, full_publish()), FeatureProfile())
        LoggerSink()(line)
        time.sleep(0.2)
        _shutdown_listeners()

        content = (tmp_path / "mqtt-messages.log").read_text()
        assert content.rstrip("\n").endswith(line)
        assert line not in (tmp_path / "mqttlog.log").read_text()

    def test_messages_kept_when_diagnostics_quiet(self, tmp_path):
        setup_logging(level="ERROR", log_dir=str(tmp_path))
        LoggerSink()("Received PINGREQ from client 'c1'")
        get_logger("mqttlog.gate").info("not written")
        time.sleep(0.2)
        _shutdown_listeners()

        assert "PINGREQ" in (tmp_path / "mqtt-messages.log").read_text()
        assert "not written" not in (tmp_path / "mqttlog.log").read_text()

    def test_message_logger_does_not_propagate(self, tmp_path):
        setup_logging(level="INFO", log_dir=str(tmp_path))
        assert logging.getLogger("mqttlog.messages").propagate is False


class TestPublicAPI:
    def test_get_logger_accessible(self):
        assert isinstance(get_logger("test.api"), StructuredLogger)

    def test_formatters_exported(self):
        for cls in (SmartFormatter, PlainFormatter, JsonFormatter, MessageFormatter):
            assert issubclass(cls, logging.Formatter)
