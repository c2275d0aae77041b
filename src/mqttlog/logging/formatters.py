"""Log formatters: colored console, plain file, JSON lines, packet messages."""

from __future__ import annotations

import json
import logging
from datetime import datetime, timezone

from mqttlog.logging.constants import (
    MODULE_MAP, LEVEL_COLORS, RESET, DIM, module_key,
)


def _kv_parts(record: logging.LogRecord) -> list[str]:
    """``k=v`` strings from ``extra_data``, client id first when present."""
    extra_data: dict = getattr(record, "extra_data", None) or {}
    parts = []
    client = getattr(record, "client_id", None)
    if client is not None and "client" not in extra_data:
        parts.append(f"client={client}")
    parts.extend(f"{k}={v}" for k, v in extra_data.items())
    return parts


def _iso_timestamp(record: logging.LogRecord) -> str:
    dt = datetime.fromtimestamp(record.created, tz=timezone.utc).astimezone()
    return dt.strftime("%Y-%m-%d %H:%M:%S.") + f"{int(record.created * 1000) % 1000:03d}"


class SmartFormatter(logging.Formatter):
    """Console formatter: colored output with k=v pairs."""

    def format(self, record: logging.LogRecord) -> str:
        ts = self.formatTime(record, "%H:%M:%S")
        ms = int(record.created * 1000) % 1000
        timestamp = f"{ts}.{ms:03d}"

        mod = module_key(record.name)
        abbrev, color = MODULE_MAP.get(mod, (mod[:3].upper(), "\033[37m"))
        level_color = LEVEL_COLORS.get(record.levelname, "")

        kv_parts = _kv_parts(record)
        kv_str = f" {DIM}| {' '.join(kv_parts)}{RESET}" if kv_parts else ""

        line = (
            f"{DIM}{timestamp}{RESET}  "
            f"{level_color}{record.levelname:<5}{RESET} "
            f"[{color}{abbrev}{RESET}|{color}{mod:<9}{RESET}] "
            f"{record.getMessage()}{kv_str}"
        )

        if record.exc_info and not record.exc_text:
            record.exc_text = self.formatException(record.exc_info)
        if record.exc_text:
            line += "\n" + record.exc_text
        return line


class PlainFormatter(logging.Formatter):
    """File formatter: no ANSI codes, full date, k=v pairs."""

    def format(self, record: logging.LogRecord) -> str:
        kv_parts = _kv_parts(record)
        kv_str = f" | {' '.join(kv_parts)}" if kv_parts else ""
        mod = module_key(record.name)

        line = f"{_iso_timestamp(record)} {record.levelname:<8} [{mod}] {record.getMessage()}{kv_str}"

        if record.exc_info and not record.exc_text:
            record.exc_text = self.formatException(record.exc_info)
        if record.exc_text:
            line += "\n" + record.exc_text
        return line


class JsonFormatter(logging.Formatter):
    """JSONL formatter: one object per record, extra_data merged in.

    Values that are not JSON types are written with ``str()``.
    """

    def format(self, record: logging.LogRecord) -> str:
        data: dict = {
            "ts": _iso_timestamp(record),
            "level": record.levelname,
            "logger": record.name,
            "msg": record.getMessage(),
        }
        client = getattr(record, "client_id", None)
        if client is not None:
            data["client"] = client
        for key, value in (getattr(record, "extra_data", None) or {}).items():
            data.setdefault(key, value)
        if record.exc_info:
            data["exc"] = self.formatException(record.exc_info)
        return json.dumps(data, ensure_ascii=False, default=str)


class MessageFormatter(logging.Formatter):
    """Message-file formatter: local timestamp, then the record verbatim.

    Packet records are already formatted (text line or JSON object), so
    nothing else is added to them.
    """

    def format(self, record: logging.LogRecord) -> str:
        return f"{_iso_timestamp(record)} {record.getMessage()}"
