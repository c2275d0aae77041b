"""Packet event formatting: one builder per event kind, two encoders.

A builder turns ``(PacketEvent, FeatureProfile)`` into a ``Record``: the
event header plus an ordered tuple of ``Field``s. Each field carries both
its text fragment (``QoS: '1'``) and its JSON value, so the text line and
the JSON object always hold the same fields in the same order. Absent
optional values render as ``null`` in both.

Text line shape::

    Received CONNECT from client 'c1': Protocol version: 'V_5', Clean Start: 'false', ...
    Sent PUBLISH to client 'c1' on topic 't': Payload: 'hi', QoS: '1', Retained: 'false'
"""

from __future__ import annotations

import json
from collections.abc import Callable, Sequence
from dataclasses import dataclass
from typing import Any, NamedTuple

from mqttlog.codec import is_ascii_printable, to_base64, to_hex, to_text
from mqttlog.packets import (
    AckPacket,
    ConnackPacket,
    ConnectPacket,
    Direction,
    DisconnectPacket,
    EventKind,
    PacketEvent,
    PublishPacket,
    SubackPacket,
    SubscribePacket,
    UnsubackPacket,
    UnsubscribePacket,
    UserProperty,
    WillPublishPacket,
)
from mqttlog.profile import FeatureProfile
from mqttlog.render import (
    json_value,
    reason_codes_json,
    render_int_list,
    render_reason_codes,
    render_subscriptions,
    render_topic_filters,
    render_user_properties,
    subscriptions_json,
    text_value,
    topic_filters_json,
    user_properties_json,
)

REDACTED = "<redacted>"


class Field(NamedTuple):
    key: str
    text: str
    value: Any


@dataclass(frozen=True)
class Record:
    event: PacketEvent
    fields: tuple[Field, ...]
    topic: str | None = None

    @property
    def header(self) -> str:
        ev = self.event
        if ev.direction is Direction.INBOUND:
            head = f"Received {ev.kind.label} from client '{ev.client_id}'"
            if self.topic is not None:
                head += f" for topic '{self.topic}'"
        else:
            head = f"Sent {ev.kind.label} to client '{ev.client_id}'"
            if self.topic is not None:
                head += f" on topic '{self.topic}'"
        return head


Builder = Callable[[PacketEvent, FeatureProfile], Record]
Formatter = Callable[[PacketEvent, FeatureProfile], str]


# ---------------------------------------------------------------------------
# Field helpers
# ---------------------------------------------------------------------------

def _quoted(label: str, key: str, value: Any) -> Field:
    return Field(key, f"{label}: '{text_value(value)}'", json_value(value))


def _qos(qos) -> int | None:
    return None if qos is None else int(qos)


def _binary(label: str, key: str, data: bytes | None) -> Field:
    """Printable (or absent) bytes as text, anything else as labelled binary.

    The text line shows hex; the JSON object carries ``<key>Base64``.
    """
    text = to_text(data)
    if data is None or is_ascii_printable(text):
        return _quoted(label, key, text)
    return Field(f"{key}Base64", f"{label} (Hex): '{to_hex(data)}'", to_base64(data))


def _base64(label: str, key: str, data: bytes | None) -> Field:
    return _quoted(label, key, to_base64(data))


def _user_properties(props: Sequence[UserProperty] | None) -> Field:
    return Field("userProperties", render_user_properties(props), user_properties_json(props))


def _password(packet: ConnectPacket, profile: FeatureProfile) -> Field:
    if profile.redact_password:
        return Field("password", f"Password: {REDACTED}", REDACTED)
    return _binary("Password", "password", packet.password)


# ---------------------------------------------------------------------------
# PUBLISH and will
# ---------------------------------------------------------------------------

def publish_fields(packet: PublishPacket, verbose: bool, payload: bool) -> list[Field]:
    """Fields after the topic; ``packet.payload`` is untouched unless ``payload``."""
    fields = []
    if payload:
        fields.append(_binary("Payload", "payload", packet.payload))
    fields.append(_quoted("QoS", "qos", _qos(packet.qos)))
    fields.append(_quoted("Retained", "retained", packet.retain))
    if not verbose:
        return fields

    ids = packet.subscription_identifiers or ()
    fields += [
        _quoted("Message Expiry Interval", "messageExpiryInterval", packet.message_expiry_interval),
        _quoted("Duplicate Delivery", "duplicateDelivery", packet.dup),
        _quoted("Correlation Data", "correlationData", to_text(packet.correlation_data)),
        _quoted("Response Topic", "responseTopic", packet.response_topic),
        _quoted("Content Type", "contentType", packet.content_type),
        _quoted("Payload Format Indicator", "payloadFormatIndicator", packet.payload_format_indicator),
        Field(
            "subscriptionIdentifiers",
            f"Subscription Identifiers: '{render_int_list(ids)}'",
            list(ids),
        ),
        _user_properties(packet.user_properties),
    ]
    return fields


def _will(will: WillPublishPacket, payload: bool) -> Field:
    inner = [
        _quoted("Topic", "topic", will.topic),
        *publish_fields(will, True, payload),
        _quoted("Will Delay", "willDelay", will.will_delay),
    ]
    text = "Will: { " + ", ".join(f.text for f in inner) + " }"
    return Field("will", text, {f.key: f.value for f in inner})


def _build_publish(event: PacketEvent, profile: FeatureProfile) -> Record:
    packet: PublishPacket = event.packet
    fields = publish_fields(packet, profile.verbose, profile.payload)
    return Record(event, tuple(fields), topic=packet.topic)


# ---------------------------------------------------------------------------
# CONNECT / CONNACK / DISCONNECT
# ---------------------------------------------------------------------------

def _build_connect(event: PacketEvent, profile: FeatureProfile) -> Record:
    p: ConnectPacket = event.packet
    fields = [
        _quoted("Protocol version", "protocolVersion", p.mqtt_version),
        _quoted("Clean Start", "cleanStart", p.clean_start),
        _quoted("Session Expiry Interval", "sessionExpiryInterval", p.session_expiry_interval),
    ]
    if profile.verbose:
        fields += [
            _quoted("Keep Alive", "keepAlive", p.keep_alive),
            _quoted("Maximum Packet Size", "maximumPacketSize", p.maximum_packet_size),
            _quoted("Receive Maximum", "receiveMaximum", p.receive_maximum),
            _quoted("Topic Alias Maximum", "topicAliasMaximum", p.topic_alias_maximum),
            _quoted("Request Problem Information", "requestProblemInformation",
                    p.request_problem_information),
            _quoted("Request Response Information", "requestResponseInformation",
                    p.request_response_information),
            _quoted("Username", "username", p.user_name),
            _password(p, profile),
            _quoted("Auth Method", "authMethod", p.authentication_method),
            _base64("Auth Data (Base64)", "authDataBase64", p.authentication_data),
            _user_properties(p.user_properties),
        ]
        if p.will_publish is not None:
            fields.append(_will(p.will_publish, profile.payload))
    return Record(event, tuple(fields))


def _build_connack(event: PacketEvent, profile: FeatureProfile) -> Record:
    p: ConnackPacket = event.packet
    fields = [
        _quoted("Reason Code", "reasonCode", p.reason_code),
        _quoted("Session Present", "sessionPresent", p.session_present),
    ]
    if profile.verbose:
        fields += [
            _quoted("Session Expiry Interval", "sessionExpiryInterval", p.session_expiry_interval),
            # the connack line has always printed this label without a colon
            Field(
                "assignedClientId",
                f"Assigned ClientId '{text_value(p.assigned_client_identifier)}'",
                p.assigned_client_identifier,
            ),
            Field(
                "maximumQoS",
                f"Maximum QoS: '{text_value(p.maximum_qos)}'",
                _qos(p.maximum_qos),
            ),
            _quoted("Maximum Packet Size", "maximumPacketSize", p.maximum_packet_size),
            _quoted("Receive Maximum", "receiveMaximum", p.receive_maximum),
            _quoted("Topic Alias Maximum", "topicAliasMaximum", p.topic_alias_maximum),
            _quoted("Reason String", "reasonString", p.reason_string),
            _quoted("Response Information", "responseInformation", p.response_information),
            _quoted("Server Keep Alive", "serverKeepAlive", p.server_keep_alive),
            _quoted("Server Reference", "serverReference", p.server_reference),
            _quoted("Shared Subscription Available", "sharedSubscriptionsAvailable",
                    p.shared_subscriptions_available),
            _quoted("Wildcards Available", "wildCardSubscriptionAvailable",
                    p.wildcard_subscriptions_available),
            _quoted("Retain Available", "retainAvailable", p.retain_available),
            _quoted("Subscription Identifiers Available", "subscriptionIdentifiersAvailable",
                    p.subscription_identifiers_available),
            _quoted("Auth Method", "authMethod", p.authentication_method),
            _base64("Auth Data (Base64)", "authDataBase64", p.authentication_data),
            _user_properties(p.user_properties),
        ]
    return Record(event, tuple(fields))


def _build_disconnect(event: PacketEvent, profile: FeatureProfile) -> Record:
    p: DisconnectPacket = event.packet
    fields = [_quoted("Reason Code", "reasonCode", p.reason_code)]
    if profile.verbose:
        fields += [
            _quoted("Reason String", "reasonString", p.reason_string),
            _quoted("Server Reference", "serverReference", p.server_reference),
            _quoted("Session Expiry", "sessionExpiryInterval", p.session_expiry_interval),
            _user_properties(p.user_properties),
        ]
    return Record(event, tuple(fields))


# ---------------------------------------------------------------------------
# SUBSCRIBE / SUBACK / UNSUBSCRIBE / UNSUBACK
# ---------------------------------------------------------------------------

def _build_subscribe(event: PacketEvent, profile: FeatureProfile) -> Record:
    p: SubscribePacket = event.packet
    verbose = profile.verbose
    fields = [
        Field(
            "subscriptions",
            render_subscriptions(p.subscriptions, verbose),
            subscriptions_json(p.subscriptions, verbose),
        ),
    ]
    if verbose:
        fields += [
            _quoted("Subscription Identifier", "subscriptionIdentifier", p.subscription_identifier),
            _user_properties(p.user_properties),
        ]
    return Record(event, tuple(fields))


def _ack_list(event: PacketEvent, profile: FeatureProfile, label: str) -> Record:
    p: SubackPacket | UnsubackPacket = event.packet
    fields = [
        Field("reasonCodes", render_reason_codes(p.reason_codes, label), reason_codes_json(p.reason_codes)),
    ]
    if profile.verbose:
        fields += [
            _quoted("Reason String", "reasonString", p.reason_string),
            _user_properties(p.user_properties),
        ]
    return Record(event, tuple(fields))


def _build_suback(event: PacketEvent, profile: FeatureProfile) -> Record:
    return _ack_list(event, profile, "Suback Reason Codes")


def _build_unsuback(event: PacketEvent, profile: FeatureProfile) -> Record:
    return _ack_list(event, profile, "Unsuback Reason Codes")


def _build_unsubscribe(event: PacketEvent, profile: FeatureProfile) -> Record:
    p: UnsubscribePacket = event.packet
    fields = [
        Field("topicFilters", render_topic_filters(p.topic_filters), topic_filters_json(p.topic_filters)),
    ]
    if profile.verbose:
        fields.append(_user_properties(p.user_properties))
    return Record(event, tuple(fields))


# ---------------------------------------------------------------------------
# PINGREQ / PINGRESP and the QoS acknowledgements
# ---------------------------------------------------------------------------

def _build_ping(event: PacketEvent, profile: FeatureProfile) -> Record:
    return Record(event, ())


def _build_ack(event: PacketEvent, profile: FeatureProfile) -> Record:
    p: AckPacket = event.packet
    fields = [_quoted("Reason Code", "reasonCode", p.reason_code)]
    if profile.verbose:
        fields += [
            _quoted("Reason String", "reasonString", p.reason_string),
            _user_properties(p.user_properties),
        ]
    return Record(event, tuple(fields))


BUILDERS: dict[EventKind, Builder] = {
    EventKind.CONNECT: _build_connect,
    EventKind.CONNACK: _build_connack,
    EventKind.DISCONNECT: _build_disconnect,
    EventKind.PUBLISH: _build_publish,
    EventKind.SUBSCRIBE: _build_subscribe,
    EventKind.SUBACK: _build_suback,
    EventKind.UNSUBSCRIBE: _build_unsubscribe,
    EventKind.UNSUBACK: _build_unsuback,
    EventKind.PINGREQ: _build_ping,
    EventKind.PINGRESP: _build_ping,
    EventKind.PUBACK: _build_ack,
    EventKind.PUBREC: _build_ack,
    EventKind.PUBREL: _build_ack,
    EventKind.PUBCOMP: _build_ack,
}


# ---------------------------------------------------------------------------
# Encoders
# ---------------------------------------------------------------------------

def encode_text(record: Record) -> str:
    if not record.fields:
        return record.header
    return f"{record.header}: " + ", ".join(f.text for f in record.fields)


def encode_json(record: Record) -> str:
    ev = record.event
    data: dict[str, Any] = {
        "messageType": ev.kind.value,
        "direction": ev.direction.value,
        "clientId": ev.client_id,
    }
    if record.topic is not None:
        data["topic"] = record.topic
    for f in record.fields:
        data[f.key] = f.value
    return json.dumps(data, ensure_ascii=False, separators=(",", ":"))


def formatter_for(kind: EventKind) -> Formatter:
    """Formatter bound to ``kind``'s builder; output encoding follows the profile."""
    builder = BUILDERS[kind]

    def _format(event: PacketEvent, profile: FeatureProfile) -> str:
        record = builder(event, profile)
        if profile.json_format:
            return encode_json(record)
        return encode_text(record)

    _format.__name__ = f"format_{kind.value.lower()}"
    return _format


FORMATTERS: dict[EventKind, Formatter] = {kind: formatter_for(kind) for kind in EventKind}


def format_event(event: PacketEvent, profile: FeatureProfile) -> str:
    return FORMATTERS[event.kind](event, profile)
