"""Record sinks. Any ``Callable[[str], None]`` works as a sink."""

from __future__ import annotations

import logging
from collections.abc import Callable

Sink = Callable[[str], None]

MESSAGE_LOGGER = "mqttlog.messages"


class LoggerSink:
    """Writes each record as one INFO line on a stdlib logger.

    The record is passed as an argument, never as the format string, so
    ``%`` characters in payloads stay literal.
    """

    __slots__ = ("_logger", "_level")

    def __init__(self, name: str = MESSAGE_LOGGER, level: int = logging.INFO) -> None:
        self._logger = logging.getLogger(name)
        self._level = level

    @property
    def name(self) -> str:
        return self._logger.name

    def __call__(self, record: str) -> None:
        self._logger.log(self._level, "%s", record)


class MemorySink(list):
    """Keeps records in order; handy for embedding and tests."""

    def __call__(self, record: str) -> None:
        self.append(record)
