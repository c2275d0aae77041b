"""Selective MQTT packet-event logger.

Public API:
    EventDispatchGate, dispatch  - enablement check + format + sink write
    FeatureProfile               - which events are logged, and how
    format_event                 - one event to one text or JSON line
    read_profile                 - profile from an extension home
    MessageLogExtension          - start/stop entry point
    LoggerSink, MemorySink       - record sinks
"""

from mqttlog.packets import Direction, EventKind, PacketEvent
from mqttlog.profile import FeatureProfile
from mqttlog.formatter import format_event, formatter_for
from mqttlog.sinks import LoggerSink, MemorySink
from mqttlog.gate import EventDispatchGate, dispatch
from mqttlog.reader import read_profile
from mqttlog.extension import MessageLogExtension, StartupPreventedError

__version__ = "1.0.0"

__all__ = [
    "Direction",
    "EventKind",
    "PacketEvent",
    "FeatureProfile",
    "format_event",
    "formatter_for",
    "LoggerSink",
    "MemorySink",
    "EventDispatchGate",
    "dispatch",
    "read_profile",
    "MessageLogExtension",
    "StartupPreventedError",
]
