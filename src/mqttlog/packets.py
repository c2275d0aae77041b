"""Read-only packet events handed over by the broker's interception hook.

Every intercepted control packet arrives as one ``PacketEvent``: a kind tag,
a direction, the client identifier and the already-decoded packet. Packets
are frozen dataclasses; list-valued fields are tuples in protocol order.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum, IntEnum
from typing import Union


class Direction(str, Enum):
    INBOUND = "INBOUND"
    OUTBOUND = "OUTBOUND"


class EventKind(str, Enum):
    CONNECT = "CONNECT"
    CONNACK = "CONNACK"
    DISCONNECT = "DISCONNECT"
    PUBLISH = "PUBLISH"
    SUBSCRIBE = "SUBSCRIBE"
    SUBACK = "SUBACK"
    UNSUBSCRIBE = "UNSUBSCRIBE"
    UNSUBACK = "UNSUBACK"
    PINGREQ = "PINGREQ"
    PINGRESP = "PINGRESP"
    PUBACK = "PUBACK"
    PUBREC = "PUBREC"
    PUBREL = "PUBREL"
    PUBCOMP = "PUBCOMP"

    @property
    def label(self) -> str:
        """Name used in text log lines."""
        return _LABELS.get(self, self.value)


_LABELS = {
    EventKind.PINGREQ: "PING REQUEST",
    EventKind.PINGRESP: "PING RESPONSE",
}


class MqttVersion(Enum):
    V_3_1 = 3
    V_3_1_1 = 4
    V_5 = 5


class Qos(IntEnum):
    AT_MOST_ONCE = 0
    AT_LEAST_ONCE = 1
    EXACTLY_ONCE = 2


class RetainHandling(Enum):
    SEND = 0
    SEND_IF_NEW_SUBSCRIPTION = 1
    DO_NOT_SEND = 2


class PayloadFormatIndicator(Enum):
    UNSPECIFIED = 0
    UTF_8 = 1


# Reason codes are passed through by name; an Enum member or its name both work.
ReasonCode = Union[Enum, str]


@dataclass(frozen=True)
class UserProperty:
    name: str
    value: str


UserProperties = tuple[UserProperty, ...]


@dataclass(frozen=True)
class Subscription:
    topic_filter: str
    qos: Qos = Qos.AT_MOST_ONCE
    retain_handling: RetainHandling = RetainHandling.SEND
    retain_as_published: bool = False
    no_local: bool = False


@dataclass(frozen=True)
class PublishPacket:
    """PUBLISH fields.

    ``payload`` and ``correlation_data`` keep ``None`` (absent) distinct
    from ``b""`` (present, zero length).
    """

    topic: str
    qos: Qos = Qos.AT_MOST_ONCE
    retain: bool = False
    payload: bytes | None = None
    dup: bool = False
    message_expiry_interval: int | None = None
    correlation_data: bytes | None = None
    response_topic: str | None = None
    content_type: str | None = None
    payload_format_indicator: PayloadFormatIndicator | None = None
    subscription_identifiers: tuple[int, ...] = ()
    user_properties: UserProperties | None = ()


@dataclass(frozen=True)
class WillPublishPacket(PublishPacket):
    will_delay: int = 0


@dataclass(frozen=True)
class ConnectPacket:
    mqtt_version: MqttVersion = MqttVersion.V_5
    clean_start: bool = True
    session_expiry_interval: int = 0
    keep_alive: int = 0
    maximum_packet_size: int = 0
    receive_maximum: int = 0
    topic_alias_maximum: int = 0
    request_problem_information: bool = False
    request_response_information: bool = False
    user_name: str | None = None
    password: bytes | None = None
    authentication_method: str | None = None
    authentication_data: bytes | None = None
    user_properties: UserProperties | None = ()
    will_publish: WillPublishPacket | None = None


@dataclass(frozen=True)
class ConnackPacket:
    reason_code: ReasonCode = "SUCCESS"
    session_present: bool = False
    session_expiry_interval: int | None = None
    assigned_client_identifier: str | None = None
    maximum_qos: Qos | None = None
    maximum_packet_size: int = 0
    receive_maximum: int = 0
    topic_alias_maximum: int = 0
    reason_string: str | None = None
    response_information: str | None = None
    server_keep_alive: int | None = None
    server_reference: str | None = None
    shared_subscriptions_available: bool = False
    wildcard_subscriptions_available: bool = False
    retain_available: bool = False
    subscription_identifiers_available: bool = False
    authentication_method: str | None = None
    authentication_data: bytes | None = None
    user_properties: UserProperties | None = ()


@dataclass(frozen=True)
class DisconnectPacket:
    reason_code: ReasonCode | None = "NORMAL_DISCONNECTION"
    reason_string: str | None = None
    server_reference: str | None = None
    session_expiry_interval: int | None = None
    user_properties: UserProperties | None = ()


@dataclass(frozen=True)
class SubscribePacket:
    subscriptions: tuple[Subscription, ...] = ()
    subscription_identifier: int | None = None
    user_properties: UserProperties | None = ()


@dataclass(frozen=True)
class SubackPacket:
    reason_codes: tuple[ReasonCode, ...] = ()
    reason_string: str | None = None
    user_properties: UserProperties | None = ()


@dataclass(frozen=True)
class UnsubscribePacket:
    topic_filters: tuple[str, ...] = ()
    user_properties: UserProperties | None = ()


@dataclass(frozen=True)
class UnsubackPacket:
    reason_codes: tuple[ReasonCode, ...] = ()
    reason_string: str | None = None
    user_properties: UserProperties | None = ()


@dataclass(frozen=True)
class AckPacket:
    """PUBACK, PUBREC, PUBREL and PUBCOMP share one field set."""

    reason_code: ReasonCode = "SUCCESS"
    reason_string: str | None = None
    user_properties: UserProperties | None = ()


Packet = Union[
    ConnectPacket, ConnackPacket, DisconnectPacket, PublishPacket,
    SubscribePacket, SubackPacket, UnsubscribePacket, UnsubackPacket,
    AckPacket, None,
]

PACKET_TYPES: dict[EventKind, type | None] = {
    EventKind.CONNECT: ConnectPacket,
    EventKind.CONNACK: ConnackPacket,
    EventKind.DISCONNECT: DisconnectPacket,
    EventKind.PUBLISH: PublishPacket,
    EventKind.SUBSCRIBE: SubscribePacket,
    EventKind.SUBACK: SubackPacket,
    EventKind.UNSUBSCRIBE: UnsubscribePacket,
    EventKind.UNSUBACK: UnsubackPacket,
    EventKind.PINGREQ: None,
    EventKind.PINGRESP: None,
    EventKind.PUBACK: AckPacket,
    EventKind.PUBREC: AckPacket,
    EventKind.PUBREL: AckPacket,
    EventKind.PUBCOMP: AckPacket,
}


@dataclass(frozen=True)
class PacketEvent:
    """One intercepted control packet, tagged with kind and direction.

    Invariants:
        - ``packet`` is an instance of the variant registered for ``kind``
        - ping kinds carry no packet
    """

    kind: EventKind
    direction: Direction
    client_id: str
    packet: Packet = field(default=None)

    def __post_init__(self):
        expected = PACKET_TYPES[self.kind]
        if expected is None:
            if self.packet is not None:
                raise ValueError(f"{self.kind.value} events carry no packet")
        elif not isinstance(self.packet, expected):
            raise TypeError(
                f"{self.kind.value} event needs {expected.__name__}, "
                f"got {type(self.packet).__name__}"
            )
