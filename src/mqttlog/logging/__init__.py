"""mqttlog structured logging package.

Public API:
    get_logger      - Get a StructuredLogger for a module
    setup_logging   - Configure root logger (call once at startup)
    client_context  - ContextVar holding the client id being handled
    current_client  - Read client_context
    StructuredLogger, SmartFormatter, PlainFormatter, JsonFormatter,
    MessageFormatter
"""

from mqttlog.logging.structured_logger import (
    StructuredLogger,
    get_logger,
    client_context,
    current_client,
)
from mqttlog.logging.formatters import (
    SmartFormatter, PlainFormatter, JsonFormatter, MessageFormatter,
)
from mqttlog.logging.setup import setup_logging

__all__ = [
    "get_logger",
    "setup_logging",
    "client_context",
    "current_client",
    "StructuredLogger",
    "SmartFormatter",
    "PlainFormatter",
    "JsonFormatter",
    "MessageFormatter",
]
