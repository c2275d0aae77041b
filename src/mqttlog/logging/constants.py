"""Logging constants: module map and colors."""

from __future__ import annotations

# ---------------------------------------------------------------------------
# Module color / abbreviation map
# ---------------------------------------------------------------------------

MODULE_MAP: dict[str, tuple[str, str]] = {
    "messages":  ("MSG", "\033[92m"),
    "gate":      ("GTE", "\033[96m"),
    "formatter": ("FMT", "\033[94m"),
    "reader":    ("CFG", "\033[93m"),
    "config":    ("CFG", "\033[93m"),
    "profile":   ("PRF", "\033[95m"),
    "extension": ("EXT", "\033[38;5;208m"),
    "sinks":     ("SNK", "\033[90m"),
}

RESET = "\033[0m"
DIM = "\033[2m"

LEVEL_COLORS: dict[str, str] = {
    "DEBUG":    "\033[37m",
    "INFO":     "\033[97m",
    "WARNING":  "\033[93m",
    "ERROR":    "\033[91m",
    "CRITICAL": "\033[91;1m",
}


def module_key(name: str) -> str:
    """Extract last dotted segment: 'mqttlog.gate' -> 'gate'."""
    return name.rsplit(".", 1)[-1]
