"""Logging setup: diagnostics on the root logger, packet records in their own file."""

from __future__ import annotations

import atexit
import logging
import os
from pathlib import Path

from mqttlog.logging.formatters import SmartFormatter, PlainFormatter, JsonFormatter
from mqttlog.logging.handlers import (
    create_async_handler, create_error_handler, create_message_handler,
)

MAIN_LOG = "mqttlog.log"
ERROR_LOG = "mqttlog_error.log"
JSON_LOG = "mqttlog.jsonl"
MESSAGE_LOG = "mqtt-messages.log"

_listeners: list = []

_TRUTHY = ("1", "true", "yes")


def setup_logging(
    level: str | None = None,
    log_dir: str | None = None,
) -> None:
    """Configure root logger with console + async file handlers.

    Level resolution: explicit arg > LOG_LEVEL env > settings.log_level.
    Directory resolution: explicit arg > LOG_DIR env > settings.log_dir.

    Diagnostics go to ``mqttlog.log`` (everything), ``mqttlog_error.log``
    (ERROR+), and ``mqttlog.jsonl`` when LOG_JSON is set or
    ``settings.log_json``. Packet records on ``settings.message_logger`` go
    only to ``mqtt-messages.log``; that logger stops propagating so they
    never mix with diagnostics. Calling again replaces everything.
    """
    from mqttlog.config import settings

    resolved = level or os.environ.get("LOG_LEVEL") or settings.log_level
    log_dir = log_dir or os.environ.get("LOG_DIR") or settings.log_dir
    root = logging.getLogger()
    root.setLevel(getattr(logging, resolved.upper(), logging.INFO))

    messages = logging.getLogger(settings.message_logger)

    # Re-init replaces handlers and listeners rather than stacking them
    root.handlers.clear()
    messages.handlers.clear()
    _stop_listeners()

    # 1. Console handler (colored)
    console = logging.StreamHandler()
    console.setFormatter(SmartFormatter())
    root.addHandler(console)

    # 2. File handlers (async)
    log_path = Path(log_dir)
    log_path.mkdir(parents=True, exist_ok=True)

    # 2a. Main log file (rotated, plain text)
    _attach(root, *create_async_handler(
        str(log_path / MAIN_LOG), formatter=PlainFormatter(),
    ))

    # 2b. Error-only log file
    _attach(root, *create_error_handler(
        str(log_path / ERROR_LOG), formatter=PlainFormatter(),
    ))

    # 3. Optional JSONL handler
    env_json = os.environ.get("LOG_JSON", "").lower() in _TRUTHY
    if env_json or settings.log_json:
        _attach(root, *create_async_handler(
            str(log_path / JSON_LOG), formatter=JsonFormatter(),
        ))

    # 4. Packet message file; independent of the diagnostics level
    messages.setLevel(logging.INFO)
    messages.propagate = False
    _attach(messages, *create_message_handler(str(log_path / MESSAGE_LOG)))

    atexit.register(_shutdown_listeners)


def _attach(logger: logging.Logger, handler: logging.Handler, listener) -> None:
    logger.addHandler(handler)
    listener.start()
    _listeners.append(listener)


def _stop_listeners() -> None:
    for listener in _listeners:
        listener.stop()
    _listeners.clear()


def _shutdown_listeners() -> None:
    for listener in _listeners:
        try:
            listener.stop()
        except Exception:
            pass
    _listeners.clear()
