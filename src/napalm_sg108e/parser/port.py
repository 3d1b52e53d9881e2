"""Parsers for the TL-SG108E port pages (PortSettingRpm.htm, PortStatisticsRpm.htm)."""

from __future__ import annotations

import logging
from collections.abc import Callable
from typing import TypeVar

from napalm_sg108e.client.errors import SG108EParseError
from napalm_sg108e.model.port import PORT_COUNT, Port, PortStatistics
from napalm_sg108e.parser.script import (
    extract_attribute,
    extract_tag_content,
    extract_variable,
    split_list,
)
from napalm_sg108e.vendor.sg108e.mappings import decode_speed, decode_state

logger = logging.getLogger(__name__)

_T = TypeVar("_T")

# The statistics page packs four counters per port into one flat list.
_COUNTERS_PER_PORT: int = 4


def parse_port_settings(html: str) -> list[Port]:
    """Parse the port settings page and allocate one :class:`.Port` per port.

    The first script block looks like::

        var max_port_num = 8;
        var all_info = {
          state: [1, 1, 1, 1, 1, 1, 1, 1, 0, 0],
          trunk_info: [0, 0, 0, 0, 0, 0, 0, 0, 0, 0],
          spd_cfg: [1, 1, 1, 1, 1, 1, 1, 1, 0, 0],
          spd_act: [6, 0, 0, 0, 0, 0, 0, 0, 0, 0],
          ...
        };

    Args:
        html: Raw HTML from ``PortSettingRpm.htm``.

    Returns:
        Ports ``1..max_port_num``; empty if the page carries no port count.

    Raises:
        SG108EParseError: If a state or speed code is out of range.
    """
    script = extract_tag_content(html, "script", 0)
    if script is None:
        logger.debug("No script block in port settings page")
        return []
    count = _port_count(script)
    states = split_list(extract_attribute(script, "state"))
    speeds = split_list(extract_attribute(script, "spd_cfg"))

    return [
        Port(
            number=idx + 1,
            state=_decode_at(states, idx, decode_state, "state"),
            speed=_decode_at(speeds, idx, decode_speed, "spd_cfg"),
        )
        for idx in range(count)
    ]


def parse_port_statistics(html: str) -> list[PortStatistics]:
    """Parse the port statistics page into index-aligned entries.

    The first script block looks like::

        var max_port_num = 8;
        var all_info = {
          state: [1, 1, 1, 1, 1, 1, 1, 1, 0, 0],
          link_status: [6, 0, 0, 0, 0, 0, 0, 0, 0, 0],
          pkts: [786, 0, 1080, 0, 0, 0, ...]
        };

    ``pkts`` holds TxGood, TxBad, RxGood, RxBad for port 1, then port 2, etc.

    Args:
        html: Raw HTML from ``PortStatisticsRpm.htm``.

    Returns:
        One :class:`.PortStatistics` per reported port.

    Raises:
        SG108EParseError: If a link code is out of range or a counter is
            not an integer.
    """
    script = extract_tag_content(html, "script", 0)
    if script is None:
        logger.debug("No script block in port statistics page")
        return []
    count = _port_count(script)
    links = split_list(extract_attribute(script, "link_status"))
    pkts = split_list(extract_attribute(script, "pkts"))

    stats: list[PortStatistics] = []
    for idx in range(count):
        base = idx * _COUNTERS_PER_PORT
        stats.append(
            PortStatistics(
                index=idx,
                link=_decode_at(links, idx, decode_speed, "link_status"),
                tx_good=_decode_at(pkts, base, int, "pkts"),
                tx_bad=_decode_at(pkts, base + 1, int, "pkts"),
                rx_good=_decode_at(pkts, base + 2, int, "pkts"),
                rx_bad=_decode_at(pkts, base + 3, int, "pkts"),
            )
        )
    return stats


def merge_port_statistics(ports: list[Port], statistics: list[PortStatistics]) -> None:
    """Copy link status and counters from *statistics* into *ports* in place.

    The two port pages are fetched independently, so the statistics page may
    report ports that the settings page never allocated.

    Raises:
        SG108EParseError: If a statistics entry has no allocated port.
    """
    for entry in statistics:
        if entry.index >= len(ports):
            raise SG108EParseError(
                f"Port statistics reference port index {entry.index} but only "
                f"{len(ports)} port(s) were read from the settings page"
            )
        port = ports[entry.index]
        port.link = entry.link
        port.tx_good = entry.tx_good
        port.tx_bad = entry.tx_bad
        port.rx_good = entry.rx_good
        port.rx_bad = entry.rx_bad


# ---------------------------------------------------------------------------
# Internals
# ---------------------------------------------------------------------------

def _port_count(script: str) -> int:
    """Return ``max_port_num`` (0 if absent)."""
    raw = extract_variable(script, "max_port_num")
    if raw is None:
        logger.debug("Port page has no max_port_num")
        return 0
    try:
        count = int(raw)
    except ValueError as exc:
        raise SG108EParseError(f"max_port_num is not an integer: {raw!r}") from exc
    if not 0 <= count <= PORT_COUNT:
        raise SG108EParseError(f"max_port_num {count} outside 0..{PORT_COUNT}")
    return count


def _decode_at(
    items: list[str],
    idx: int,
    decoder: Callable[[str], _T],
    key: str,
) -> _T | None:
    """Decode ``items[idx]``; ``None`` if the list is too short or the slot empty."""
    if idx >= len(items) or not items[idx]:
        return None
    try:
        return decoder(items[idx])
    except ValueError as exc:
        raise SG108EParseError(f"Bad {key}[{idx}] value {items[idx]!r}: {exc}") from exc
