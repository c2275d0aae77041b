"""Dispatch gate: enablement check, formatting, sink write.

Nothing raised while building or writing a record may escape into the
caller's packet handling. Failures are logged at DEBUG and dropped.
"""

from __future__ import annotations

from collections.abc import Callable
from typing import Union

from mqttlog import formatter
from mqttlog.logging import client_context, get_logger
from mqttlog.packets import Direction, EventKind, PacketEvent
from mqttlog.profile import FeatureProfile
from mqttlog.sinks import Sink

logger = get_logger(__name__)

# A ready event, or a zero-argument factory that is only called when enabled.
EventSource = Union[PacketEvent, Callable[[], PacketEvent]]


def dispatch(
    kind: EventKind,
    direction: Direction,
    event: EventSource,
    profile: FeatureProfile,
    sink: Sink,
) -> bool:
    """Format ``event`` and write it to ``sink`` if the profile enables it.

    Returns True when a record was written.
    """
    if not profile.is_enabled(kind, direction):
        return False

    token = None
    try:
        if not isinstance(event, PacketEvent):
            event = event()
        token = client_context.set(event.client_id)
        record = formatter.FORMATTERS[kind](event, profile)
        sink(record)
        return True
    except Exception as e:
        side = "inbound" if direction is Direction.INBOUND else "outbound"
        logger.debug(
            f"Exception thrown at {side} {kind.label.lower()} logging", exc_info=True,
            error=type(e).__name__,
        )
        return False
    finally:
        if token is not None:
            client_context.reset(token)


class EventDispatchGate:
    """``dispatch`` bound to one profile and one sink."""

    __slots__ = ("profile", "sink")

    def __init__(self, profile: FeatureProfile, sink: Sink) -> None:
        self.profile = profile
        self.sink = sink

    def dispatch(
        self,
        kind: EventKind,
        direction: Direction,
        event: EventSource,
    ) -> bool:
        return dispatch(kind, direction, event, self.profile, self.sink)

    def submit(self, event: PacketEvent) -> bool:
        """Dispatch a ready event using its own kind and direction."""
        return dispatch(event.kind, event.direction, event, self.profile, self.sink)

    def is_enabled(self, kind: EventKind, direction: Direction) -> bool:
        return self.profile.is_enabled(kind, direction)
