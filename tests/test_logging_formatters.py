"""Tests for logging formatters."""

import json
import logging

from mqttlog.logging.formatters import JsonFormatter, MessageFormatter, PlainFormatter, SmartFormatter


def _make_record(msg="test message", level=logging.INFO, name="mqttlog.gate", client_id=None, **extra):
    """Helper to create a LogRecord with extra_data."""
    record = logging.LogRecord(
        name=name, level=level, pathname="", lineno=0,
        msg=msg, args=(), exc_info=None,
    )
    record.extra_data = extra
    if client_id is not None:
        record.client_id = client_id
    return record


class TestSmartFormatter:
    def test_output_contains_module_abbrev(self):
        line = SmartFormatter().format(_make_record(name="mqttlog.gate"))
        assert "GTE" in line
        assert "gate" in line

    def test_output_contains_kv_pairs(self):
        line = SmartFormatter().format(_make_record(path="conf/config.xml", attempt=2))
        assert "path=conf/config.xml" in line
        assert "attempt=2" in line

    def test_output_contains_level(self):
        line = SmartFormatter().format(_make_record(level=logging.WARNING))
        assert "WARNI" in line or "WARNING" in line

    def test_unknown_module_abbreviated(self):
        line = SmartFormatter().format(_make_record(name="broker.session"))
        assert "SES" in line

    def test_client_context_shown(self):
        line = SmartFormatter().format(_make_record(client_id="c-1"))
        assert "client=c-1" in line


class TestPlainFormatter:
    def test_no_ansi_codes(self):
        line = PlainFormatter().format(_make_record(name="mqttlog.messages"))
        assert "\033[" not in line

    def test_contains_full_date(self):
        line = PlainFormatter().format(_make_record())
        assert "-" in line.split(" ")[0]

    def test_contains_kv_pairs(self):
        line = PlainFormatter().format(_make_record(attempt=3))
        assert "attempt=3" in line

    def test_includes_traceback(self):
        try:
            raise ValueError("boom")
        except ValueError:
            import sys
            record = _make_record()
            record.exc_info = sys.exc_info()
        line = PlainFormatter().format(record)
        assert "ValueError: boom" in line


class TestJsonFormatter:
    def test_output_is_valid_json(self):
        data = json.loads(JsonFormatter().format(_make_record(port=8000)))
        assert data["msg"] == "test message"

    def test_includes_extra_data(self):
        data = json.loads(JsonFormatter().format(_make_record(port=8000, env="prod")))
        assert data["port"] == 8000
        assert data["env"] == "prod"

    def test_includes_level_and_logger(self):
        data = json.loads(JsonFormatter().format(_make_record(name="mqttlog.reader", level=logging.ERROR)))
        assert data["level"] == "ERROR"
        assert data["logger"] == "mqttlog.reader"

    def test_non_json_values_stringified(self):
        from pathlib import Path

        data = json.loads(JsonFormatter().format(_make_record(path=Path("conf"))))
        assert data["path"] == "conf"

    def test_includes_client(self):
        data = json.loads(JsonFormatter().format(_make_record(client_id="c-2")))
        assert data["client"] == "c-2"


class TestMessageFormatter:
    def test_record_written_verbatim_after_timestamp(self):
        line = "Received PINGREQ from client 'c1'"
        output = MessageFormatter().format(_make_record(msg=line, name="mqttlog.messages"))
        assert output.endswith(" " + line)
        assert output[:4].isdigit()

    def test_no_level_module_or_kv_pairs(self):
        output = MessageFormatter().format(_make_record(msg='{"messageType":"PINGREQ"}', client_id="c1", k="v"))
        assert "INFO" not in output
        assert "k=v" not in output
        assert "client=" not in output
        assert json.loads(output.split(" ", 2)[2]) == {"messageType": "PINGREQ"}

    def test_percent_in_record_kept(self):
        output = MessageFormatter().format(_make_record(msg="Payload: '100%'"))
        assert output.endswith("Payload: '100%'")
