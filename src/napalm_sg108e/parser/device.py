"""Parser for the TL-SG108E system information page (SystemInfoRpm.htm)."""

from __future__ import annotations

import logging

from napalm_sg108e.model.device import DeviceInfo
from napalm_sg108e.parser.script import extract_attribute, extract_tag_content, strip_quotes

logger = logging.getLogger(__name__)

# ---------------------------------------------------------------------------
# Script key → DeviceInfo field mapping
# ---------------------------------------------------------------------------

_KEY_MAP: dict[str, str] = {
    "hardware": "hardwareStr",
    "firmware": "firmwareStr",
    "name": "descriStr",
    "mac": "macStr",
    "ip": "ipStr",
    "netmask": "netmaskStr",
    "gateway": "gatewayStr",
}


def parse_device_info(html: str) -> DeviceInfo | None:
    """Parse the system information page into a :class:`.DeviceInfo`.

    The page carries an ``info_ds`` object whose values are one-element
    lists of double-quoted strings::

        var info_ds = {
          descriStr: [
            "TL-SG108E"
          ],
          macStr: [
            "70:4F:57:6B:94:AE"
          ],
          ...
        };

    Args:
        html: Raw HTML from ``SystemInfoRpm.htm``.

    Returns:
        A :class:`.DeviceInfo` whose missing keys are ``None``, or ``None``
        if the page has no script block at all.
    """
    script = extract_tag_content(html, "script", 0)
    if script is None:
        logger.debug("No script block in system info page")
        return None

    fields: dict[str, str | None] = {}
    for attr, key in _KEY_MAP.items():
        value = strip_quotes(extract_attribute(script, key))
        if value is None:
            logger.debug("System info page has no %s", key)
        fields[attr] = value
    return DeviceInfo(**fields)
