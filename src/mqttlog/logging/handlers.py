"""Rotating file handlers fed through a queue, so broker threads never block on disk.

Three flavours share one builder: diagnostics (everything at the logger's
level), errors only, and the packet message file.
"""

from __future__ import annotations

import logging
from logging.handlers import QueueHandler, QueueListener, RotatingFileHandler
from queue import Queue

from mqttlog.logging.formatters import MessageFormatter

MAX_BYTES = 10 * 1024 * 1024
BACKUP_COUNT = 5

# Packet traffic outgrows diagnostics by far; keep more of it around
MESSAGE_MAX_BYTES = 50 * 1024 * 1024
MESSAGE_BACKUP_COUNT = 10


def create_async_handler(
    log_path: str,
    max_bytes: int = MAX_BYTES,
    backup_count: int = BACKUP_COUNT,
    formatter: logging.Formatter | None = None,
    level: int | None = None,
) -> tuple[QueueHandler, QueueListener]:
    """Create an async rotating file handler.

    Returns (queue_handler, listener). Caller must call listener.start()
    and listener.stop() at shutdown.
    """
    queue: Queue = Queue(-1)
    file_handler = RotatingFileHandler(
        log_path, maxBytes=max_bytes, backupCount=backup_count, encoding="utf-8",
    )
    if level is not None:
        file_handler.setLevel(level)
    file_handler.setFormatter(formatter or logging.Formatter("%(message)s"))
    listener = QueueListener(queue, file_handler, respect_handler_level=True)
    return QueueHandler(queue), listener


def create_error_handler(
    log_path: str,
    formatter: logging.Formatter | None = None,
    max_bytes: int = MAX_BYTES,
    backup_count: int = BACKUP_COUNT,
) -> tuple[QueueHandler, QueueListener]:
    """Async handler that only writes ERROR and above."""
    return create_async_handler(
        log_path, max_bytes=max_bytes, backup_count=backup_count,
        formatter=formatter, level=logging.ERROR,
    )


def create_message_handler(
    log_path: str,
    max_bytes: int = MESSAGE_MAX_BYTES,
    backup_count: int = MESSAGE_BACKUP_COUNT,
) -> tuple[QueueHandler, QueueListener]:
    """Async handler for packet records: one timestamped record per line.

    Records below INFO are dropped; ``LoggerSink`` writes at INFO.
    """
    return create_async_handler(
        log_path, max_bytes=max_bytes, backup_count=backup_count,
        formatter=MessageFormatter(), level=logging.INFO,
    )
