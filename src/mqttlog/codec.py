"""Binary field rendering: UTF-8 text, hex, Base64 and a printability check.

All functions map an absent value (``None``) to ``None`` so callers can feed
the result straight into the ``null`` sentinel rule.
"""

from __future__ import annotations

import base64

_PRINTABLE_MIN = 0x20
_PRINTABLE_MAX = 0x7E


def to_text(data: bytes | None) -> str | None:
    """Decode as UTF-8; malformed sequences become U+FFFD."""
    if data is None:
        return None
    return bytes(data).decode("utf-8", errors="replace")


def to_hex(data: bytes | None) -> str | None:
    """Lowercase hex, two characters per byte, no separators."""
    if data is None:
        return None
    return bytes(data).hex()


def to_base64(data: bytes | None) -> str | None:
    if data is None:
        return None
    return base64.b64encode(bytes(data)).decode("ascii")


def is_ascii_printable(text: str | None) -> bool:
    """True if every character is in the space..tilde range.

    The empty string is printable; ``None`` is not.
    """
    if text is None:
        return False
    return all(_PRINTABLE_MIN <= ord(ch) <= _PRINTABLE_MAX for ch in text)
