"""Packet builders: one with every optional field set, one with none."""

from mqttlog.packets import (
    AckPacket,
    ConnackPacket,
    ConnectPacket,
    Direction,
    DisconnectPacket,
    EventKind,
    MqttVersion,
    PacketEvent,
    PayloadFormatIndicator,
    PublishPacket,
    Qos,
    RetainHandling,
    SubackPacket,
    SubscribePacket,
    Subscription,
    UnsubackPacket,
    UnsubscribePacket,
    UserProperty,
    WillPublishPacket,
)
from mqttlog.profile import FeatureProfile

IN = Direction.INBOUND
OUT = Direction.OUTBOUND


def user_properties(n: int) -> tuple[UserProperty, ...]:
    return tuple(UserProperty(f"name{i}", f"value{i}") for i in range(n))


def event(kind: EventKind, direction: Direction, packet=None, client_id: str = "clientid") -> PacketEvent:
    return PacketEvent(kind, direction, client_id, packet)


def profile(**flags) -> FeatureProfile:
    return FeatureProfile(**flags)


# ---------------------------------------------------------------------------
# Packets with every optional field set, and with none set
# ---------------------------------------------------------------------------

def full_will() -> WillPublishPacket:
    return WillPublishPacket(
        topic="willtopic",
        qos=Qos.AT_LEAST_ONCE,
        retain=False,
        payload=b"payload",
        message_expiry_interval=1234,
        correlation_data=b"data",
        response_topic="response topic",
        content_type="content type",
        payload_format_indicator=PayloadFormatIndicator.UTF_8,
        subscription_identifiers=(1, 2, 3, 4),
        user_properties=user_properties(3),
        will_delay=100,
    )


def full_connect(**overrides) -> ConnectPacket:
    fields = dict(
        mqtt_version=MqttVersion.V_5,
        clean_start=False,
        session_expiry_interval=10000,
        keep_alive=20000,
        maximum_packet_size=40000,
        receive_maximum=30000,
        topic_alias_maximum=50000,
        request_problem_information=True,
        request_response_information=False,
        user_name="the username",
        password=b"the password",
        authentication_method="auth method",
        authentication_data=b"auth data",
        user_properties=user_properties(2),
        will_publish=full_will(),
    )
    fields.update(overrides)
    return ConnectPacket(**fields)


def empty_connect() -> ConnectPacket:
    return ConnectPacket(
        mqtt_version=MqttVersion.V_5,
        clean_start=False,
        session_expiry_interval=10000,
        user_properties=None,
    )


def full_connack() -> ConnackPacket:
    return ConnackPacket(
        reason_code="SUCCESS",
        session_present=False,
        session_expiry_interval=100,
        assigned_client_identifier="overwriteClientId",
        maximum_qos=Qos.AT_MOST_ONCE,
        maximum_packet_size=5,
        receive_maximum=10,
        topic_alias_maximum=5,
        reason_string="Okay",
        response_information="Everything fine",
        server_keep_alive=100,
        server_reference="Server2",
        authentication_method="JSON",
        authentication_data=b"auth data",
        user_properties=user_properties(2),
    )


def empty_connack() -> ConnackPacket:
    return ConnackPacket(
        reason_code="SUCCESS",
        maximum_packet_size=2,
        receive_maximum=1,
        topic_alias_maximum=3,
        user_properties=None,
    )


def full_publish() -> PublishPacket:
    return PublishPacket(
        topic="topic",
        qos=Qos.AT_LEAST_ONCE,
        payload=b"message",
        message_expiry_interval=10000,
        correlation_data=b"data",
        response_topic="response topic",
        content_type="content type",
        payload_format_indicator=PayloadFormatIndicator.UTF_8,
        subscription_identifiers=(1, 2, 3, 4),
        user_properties=user_properties(2),
    )


def empty_publish() -> PublishPacket:
    return PublishPacket(topic="topic", qos=Qos.AT_LEAST_ONCE, payload=b"message", user_properties=None)


def full_disconnect() -> DisconnectPacket:
    return DisconnectPacket(
        reason_code="NOT_AUTHORIZED",
        reason_string="Okay",
        server_reference="Server2",
        session_expiry_interval=123,
        user_properties=user_properties(2),
    )


def empty_disconnect() -> DisconnectPacket:
    return DisconnectPacket(reason_code="NOT_AUTHORIZED", user_properties=None)


def full_subscribe() -> SubscribePacket:
    return SubscribePacket(
        subscriptions=(
            Subscription("topic1", Qos.EXACTLY_ONCE, RetainHandling.DO_NOT_SEND, False, False),
            Subscription("topic2", Qos.AT_MOST_ONCE, RetainHandling.SEND_IF_NEW_SUBSCRIPTION, True, True),
        ),
        subscription_identifier=10,
        user_properties=user_properties(2),
    )


def empty_subscribe() -> SubscribePacket:
    return SubscribePacket(subscriptions=(Subscription("topic"),), user_properties=None)


def full_suback() -> SubackPacket:
    return SubackPacket(
        reason_codes=("GRANTED_QOS_1", "GRANTED_QOS_0"),
        reason_string="Okay",
        user_properties=user_properties(2),
    )


def empty_suback() -> SubackPacket:
    return SubackPacket(reason_codes=("GRANTED_QOS_1",), user_properties=None)


def full_unsuback() -> UnsubackPacket:
    return UnsubackPacket(
        reason_codes=("NOT_AUTHORIZED", "SUCCESS"),
        reason_string="Okay",
        user_properties=user_properties(3),
    )


def empty_unsuback() -> UnsubackPacket:
    return UnsubackPacket(reason_codes=("NOT_AUTHORIZED",), user_properties=None)


def full_unsubscribe() -> UnsubscribePacket:
    return UnsubscribePacket(topic_filters=("topic1",), user_properties=user_properties(2))


def empty_unsubscribe() -> UnsubscribePacket:
    return UnsubscribePacket(topic_filters=("topic1", "topic2"), user_properties=None)


def full_ack() -> AckPacket:
    return AckPacket(reason_code="NO_MATCHING_SUBSCRIBERS", reason_string="Okay", user_properties=user_properties(2))


def empty_ack() -> AckPacket:
    return AckPacket(reason_code="NO_MATCHING_SUBSCRIBERS", user_properties=None)


