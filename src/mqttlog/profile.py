"""FeatureProfile: which packet events get logged, and how."""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any

from pydantic import BaseModel, ConfigDict, field_validator

from mqttlog.packets import Direction, EventKind

_IN = Direction.INBOUND
_OUT = Direction.OUTBOUND

# (kind, direction) -> profile field. Pairs missing here are never logged.
FLAG_FIELDS: dict[tuple[EventKind, Direction], str] = {
    (EventKind.CONNECT, _IN): "client_connect",
    (EventKind.CONNACK, _OUT): "connack_send",
    (EventKind.DISCONNECT, _IN): "client_disconnect",
    (EventKind.DISCONNECT, _OUT): "client_disconnect",
    (EventKind.PUBLISH, _IN): "publish_received",
    (EventKind.PUBLISH, _OUT): "publish_send",
    (EventKind.SUBSCRIBE, _IN): "subscribe_received",
    (EventKind.SUBACK, _OUT): "suback_send",
    (EventKind.UNSUBSCRIBE, _IN): "unsubscribe_received",
    (EventKind.UNSUBACK, _OUT): "unsuback_send",
    (EventKind.PINGREQ, _IN): "ping_request_received",
    (EventKind.PINGRESP, _OUT): "ping_response_send",
    (EventKind.PUBACK, _IN): "puback_received",
    (EventKind.PUBACK, _OUT): "puback_send",
    (EventKind.PUBREC, _IN): "pubrec_received",
    (EventKind.PUBREC, _OUT): "pubrec_send",
    (EventKind.PUBREL, _IN): "pubrel_received",
    (EventKind.PUBREL, _OUT): "pubrel_send",
    (EventKind.PUBCOMP, _IN): "pubcomp_received",
    (EventKind.PUBCOMP, _OUT): "pubcomp_send",
}

EVENT_FLAGS: tuple[str, ...] = tuple(dict.fromkeys(FLAG_FIELDS.values()))


def _config_key(name: str) -> str:
    """'client_connect' -> 'client-connect'; 'json_format' -> 'json'."""
    if name == "json_format":
        return "json"
    return name.replace("_", "-")


class FeatureProfile(BaseModel):
    """Immutable logging toggles, shared read-only by every formatting call.

    Event flags default to ``True``; ``verbose``, ``json`` and
    ``redact-password`` default to ``False``; ``payload`` defaults to
    ``True``. String values count as true only when they equal ``"true"``
    (any case), so a typo disables rather than enables a modifier.
    """

    model_config = ConfigDict(
        frozen=True,
        extra="ignore",
        populate_by_name=True,
        alias_generator=_config_key,
    )

    client_connect: bool = True
    connack_send: bool = True
    client_disconnect: bool = True
    publish_received: bool = True
    publish_send: bool = True
    subscribe_received: bool = True
    suback_send: bool = True
    unsubscribe_received: bool = True
    unsuback_send: bool = True
    ping_request_received: bool = True
    ping_response_send: bool = True
    puback_received: bool = True
    puback_send: bool = True
    pubrec_received: bool = True
    pubrec_send: bool = True
    pubrel_received: bool = True
    pubrel_send: bool = True
    pubcomp_received: bool = True
    pubcomp_send: bool = True

    verbose: bool = False
    payload: bool = True
    json_format: bool = False
    redact_password: bool = False

    @field_validator("*", mode="before")
    @classmethod
    def _parse_flag(cls, value: Any) -> Any:
        if isinstance(value, str):
            return value.strip().lower() == "true"
        return value

    @classmethod
    def from_mapping(cls, values: Mapping[str, Any] | None = None) -> FeatureProfile:
        """Build from flat ``key -> value`` config.

        Unknown keys are ignored; a key whose value is ``None`` keeps its default.
        """
        present = {k: v for k, v in (values or {}).items() if v is not None}
        return cls.model_validate(present)

    def is_enabled(self, kind: EventKind, direction: Direction) -> bool:
        name = FLAG_FIELDS.get((kind, direction))
        return name is not None and getattr(self, name)

    def is_verbose(self) -> bool:
        return self.verbose

    def is_payload(self) -> bool:
        return self.payload

    def is_json(self) -> bool:
        return self.json_format

    def all_disabled(self) -> bool:
        """True iff every event flag is off; the modifiers do not count."""
        return not any(getattr(self, name) for name in EVENT_FLAGS)

    def as_config(self) -> dict[str, bool]:
        """Flat view keyed by config-file names."""
        return self.model_dump(by_alias=True)
