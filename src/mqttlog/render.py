"""Rendering of repeated fields: user properties, reason codes, topic lists.

Each list has a text fragment form and a JSON form. Empty and absent lists
collapse to the ``'null'`` sentinel (text) or ``None`` (JSON). Fragments are
joined, so there is never a trailing separator before a closing brace.
"""

from __future__ import annotations

from collections.abc import Iterable, Sequence
from enum import Enum
from typing import Any

from mqttlog.packets import Subscription, UserProperty

NULL = "null"


def text_value(value: Any) -> str:
    """Text form of a scalar: ``null``, ``true``/``false``, enum name, str()."""
    if value is None:
        return NULL
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, Enum):
        return value.name
    return str(value)


def json_value(value: Any) -> Any:
    """JSON form of a scalar: enums by name, everything else unchanged."""
    if isinstance(value, Enum):
        return value.name
    return value


def _braced(label: str, fragments: list[str]) -> str:
    if not fragments:
        return f"{label}: '{NULL}'"
    return f"{label}: {{ {', '.join(fragments)} }}"


# ---------------------------------------------------------------------------
# User properties
# ---------------------------------------------------------------------------

def render_user_properties(props: Sequence[UserProperty] | None) -> str:
    if not props:
        return f"User Properties: '{NULL}'"
    parts = [f"[Name: '{p.name}', Value: '{p.value}']" for p in props]
    return "User Properties: " + ", ".join(parts)


def user_properties_json(props: Sequence[UserProperty] | None) -> list[dict] | None:
    if not props:
        return None
    return [{"name": p.name, "value": p.value} for p in props]


# ---------------------------------------------------------------------------
# Reason codes
# ---------------------------------------------------------------------------

def render_reason_codes(codes: Iterable[Any] | None, label: str) -> str:
    fragments = [f"[Reason Code: '{text_value(c)}']" for c in codes or ()]
    return _braced(label, fragments)


def reason_codes_json(codes: Iterable[Any] | None) -> list[str] | None:
    names = [text_value(c) for c in codes or ()]
    return names or None


# ---------------------------------------------------------------------------
# Subscriptions / topic filters
# ---------------------------------------------------------------------------

def render_subscriptions(subs: Sequence[Subscription] | None, verbose: bool) -> str:
    fragments = []
    for sub in subs or ():
        fragment = f"[Topic: '{sub.topic_filter}', QoS: '{int(sub.qos)}'"
        if verbose:
            fragment += (
                f", Retain As Published: '{text_value(sub.retain_as_published)}'"
                f", No Local: '{text_value(sub.no_local)}'"
                f", Retain Handling: '{text_value(sub.retain_handling)}'"
            )
        fragments.append(fragment + "]")
    return _braced("Topics", fragments)


def subscriptions_json(subs: Sequence[Subscription] | None, verbose: bool) -> list[dict] | None:
    if not subs:
        return None
    out = []
    for sub in subs:
        entry: dict[str, Any] = {"topicFilter": sub.topic_filter, "qos": int(sub.qos)}
        if verbose:
            entry["retainAsPublished"] = sub.retain_as_published
            entry["noLocal"] = sub.no_local
            entry["retainHandling"] = json_value(sub.retain_handling)
        out.append(entry)
    return out


def render_topic_filters(filters: Sequence[str] | None) -> str:
    return _braced("Topics", [f"[Topic: '{t}']" for t in filters or ()])


def topic_filters_json(filters: Sequence[str] | None) -> list[str] | None:
    return list(filters) if filters else None


def render_int_list(values: Sequence[int] | None) -> str:
    """``[1, 2, 3]`` shape used for subscription identifiers; ``[]`` when empty."""
    return "[" + ", ".join(str(v) for v in values or ()) + "]"
