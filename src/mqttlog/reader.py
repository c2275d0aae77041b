"""Load a FeatureProfile from the extension home.

``conf/config.xml`` wins when it exists. Otherwise the legacy
``mqttMessageLog.properties`` is read, with a warning about its location.
A missing, unreadable or malformed file never stops startup: the problem is
logged at WARNING and defaults are used for everything it would have set.
"""

from __future__ import annotations

import xml.etree.ElementTree as ET
from pathlib import Path

from mqttlog.config import CONFIG_XML_LOCATION, PROPERTIES_LOCATION, XML_ROOT
from mqttlog.logging import get_logger
from mqttlog.profile import FeatureProfile

logger = get_logger(__name__)

EXTENSION_NAME = "MQTT Message Log Extension"


class ConfigFileError(Exception):
    """Raised for a config file that exists but cannot be used."""


# ---------------------------------------------------------------------------
# File formats
# ---------------------------------------------------------------------------

def _split_property(line: str) -> tuple[str, str]:
    key_end = len(line)
    for i, ch in enumerate(line):
        if ch in "=: \t":
            key_end = i
            break
    rest = line[key_end:].lstrip(" \t")
    if rest[:1] in ("=", ":"):
        rest = rest[1:].lstrip(" \t")
    return line[:key_end], rest


def parse_properties(text: str) -> dict[str, str]:
    """Parse ``.properties`` text: ``k=v``, ``k: v`` or ``k v`` per line.

    ``#`` and ``!`` start comment lines; a trailing backslash continues the
    value on the next line. Later keys override earlier ones.
    """
    values: dict[str, str] = {}
    pending = ""
    for raw in text.splitlines():
        line = raw.strip()
        if not pending and (not line or line[0] in "#!"):
            continue
        if line.endswith("\\") and not line.endswith("\\\\"):
            pending += line[:-1]
            continue
        key, value = _split_property(pending + line)
        values[key] = value
        pending = ""
    if pending:
        key, value = _split_property(pending)
        values[key] = value
    return values


def parse_config_xml(text: str) -> dict[str, str]:
    """Children of the extension root element as ``tag -> text``."""
    try:
        root = ET.fromstring(text)
    except ET.ParseError as e:
        raise ConfigFileError(f"malformed XML: {e}") from e
    if root.tag != XML_ROOT:
        raise ConfigFileError(f"unexpected root element '{root.tag}', expected '{XML_ROOT}'")
    return {child.tag: (child.text or "").strip() for child in root}


# ---------------------------------------------------------------------------
# Loading
# ---------------------------------------------------------------------------

def _read_xml(path: Path) -> dict[str, str]:
    logger.debug("Reading configuration", path=CONFIG_XML_LOCATION)
    try:
        return parse_config_xml(path.read_text(encoding="utf-8"))
    except (OSError, UnicodeDecodeError, ConfigFileError) as e:
        logger.warning(
            f"{EXTENSION_NAME}: Could not read configuration file, reason: {e}, using defaults",
            path=str(path),
        )
        return {}


def _read_properties(home: Path) -> dict[str, str]:
    path = home / PROPERTIES_LOCATION
    logger.debug("Reading configuration", path=PROPERTIES_LOCATION)
    if not path.exists():
        logger.info(f"{EXTENSION_NAME}: No configuration file found, using defaults")
        return {}

    logger.warning(
        f"{EXTENSION_NAME}: The configuration file is using the legacy location and format "
        f"'{path}'. Please update the configuration file to the new location and format "
        f"'{home / CONFIG_XML_LOCATION}'. Support for the legacy location and format "
        "will be removed in a future release.",
    )
    try:
        # latin-1 is the .properties file encoding
        return parse_properties(path.read_text(encoding="latin-1"))
    except OSError as e:
        logger.warning(f"{EXTENSION_NAME}: Could not load properties file, reason {e}")
        return {}


def read_profile(extension_home: str | Path) -> FeatureProfile:
    """Profile from ``extension_home``'s config file, or defaults."""
    home = Path(extension_home)
    xml_path = home / CONFIG_XML_LOCATION
    try:
        if xml_path.exists():
            values = _read_xml(xml_path)
        else:
            values = _read_properties(home)
    except OSError as e:
        # an unreadable extension home is reported like an unreadable file
        logger.warning(
            f"{EXTENSION_NAME}: Could not read configuration file, reason: {e}, using defaults",
            path=str(home),
        )
        values = {}

    profile = FeatureProfile.from_mapping(values)
    logger.info(f"{EXTENSION_NAME}: Properties initialized to: {profile.as_config()}")
    return profile
