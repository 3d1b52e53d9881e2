"""Read the full switch state from the four status pages."""

from __future__ import annotations

import logging

from napalm_sg108e.client.session import SG108ESession
from napalm_sg108e.model.device import SwitchInfo
from napalm_sg108e.parser.device import parse_device_info
from napalm_sg108e.parser.port import (
    merge_port_statistics,
    parse_port_settings,
    parse_port_statistics,
)
from napalm_sg108e.parser.vlan import parse_vlan_page
from napalm_sg108e.vendor.sg108e.endpoints import (
    PORT_SETTINGS,
    PORT_STATS,
    SYSTEM_INFO,
    VLAN_8021Q,
)

logger = logging.getLogger(__name__)


def read_switch_info(session: SG108ESession) -> SwitchInfo:
    """Fetch identity, port settings, port statistics and VLAN pages in order.

    A page that lacks its script block or some keys leaves the corresponding
    fields ``None``/empty; later pages are still read.  Ports are allocated
    from the settings page and the statistics page is merged into them by
    index.

    Args:
        session: Active authenticated session.

    Returns:
        A freshly built :class:`.SwitchInfo`.

    Raises:
        SG108EParseError: If a page holds malformed codes, or the statistics
            page reports ports the settings page did not.
        SG108ERequestError: On a transport-level failure.
        SG108EResponseError: On a non-2xx HTTP status code.
    """
    device = parse_device_info(session.get(SYSTEM_INFO))
    if device is None:
        logger.warning("System info page could not be parsed; identity fields left empty")
    info = SwitchInfo.from_device_info(device)

    info.ports = parse_port_settings(session.get(PORT_SETTINGS))
    merge_port_statistics(info.ports, parse_port_statistics(session.get(PORT_STATS)))

    info.vlan_enabled, info.vlans = parse_vlan_page(session.get(VLAN_8021Q))

    logger.debug(
        "Read %s: %d port(s), %d VLAN(s)",
        session.base_url,
        len(info.ports),
        len(info.vlans),
    )
    return info
