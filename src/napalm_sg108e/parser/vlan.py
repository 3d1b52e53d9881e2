"""Parser for the TL-SG108E 802.1Q VLAN page (Vlan8021QRpm.htm)."""

from __future__ import annotations

import logging

from napalm_sg108e.client.errors import SG108EParseError
from napalm_sg108e.model.vlan import Vlan
from napalm_sg108e.parser.script import (
    extract_attribute,
    extract_tag_content,
    split_list,
    strip_quotes,
)
from napalm_sg108e.vendor.sg108e.mappings import decode_members

logger = logging.getLogger(__name__)


def parse_vlan_page(html: str) -> tuple[bool | None, list[Vlan]]:
    """Parse the 802.1Q VLAN page into the VLAN mode flag and VLAN list.

    The first script block carries parallel, index-aligned arrays::

        var qvlan_ds = {
          state: 1,
          portNum: 8,
          vids: [
            1, 3
          ],
          count: 2,
          maxVids: 32,
          names: [
            'Default', 'alpha'
          ],
          tagMbrs: [
            0x0, 0xAA
          ],
          untagMbrs: [
            0xFF, 0x0
          ],
          ...
        };

    Args:
        html: Raw HTML from ``Vlan8021QRpm.htm``.

    Returns:
        ``(vlan_enabled, vlans)``.  ``vlan_enabled`` is ``None`` when the page
        reports no ``state``; entries without a VLAN id or without member
        ports are skipped.

    Raises:
        SG108EParseError: If ``count``, a VLAN id or a membership mask is
            malformed.
    """
    script = extract_tag_content(html, "script", 0)
    if script is None:
        logger.debug("No script block in VLAN page")
        return None, []

    raw_state = extract_attribute(script, "state")
    vlan_enabled = None if raw_state is None else _to_int(raw_state, "state") == 1

    raw_count = extract_attribute(script, "count")
    count = 0 if raw_count is None else _to_int(raw_count, "count")
    vids = split_list(extract_attribute(script, "vids"))
    names = split_list(extract_attribute(script, "names"))
    tagged = split_list(extract_attribute(script, "tagMbrs"))
    untagged = split_list(extract_attribute(script, "untagMbrs"))

    vlans: list[Vlan] = []
    for idx in range(count):
        if idx >= len(vids) or not vids[idx]:
            logger.debug("VLAN page entry %d has no id; skipping", idx)
            continue
        vlan_id = _to_int(vids[idx], "vids")
        tagged_ports = _members_at(tagged, idx, "tagMbrs")
        untagged_ports = _members_at(untagged, idx, "untagMbrs")
        if not tagged_ports | untagged_ports:
            logger.debug("VLAN %d has no member ports; skipping", vlan_id)
            continue
        name = strip_quotes(names[idx]) if idx < len(names) else None
        vlans.append(
            Vlan(
                name=name or "",
                vlan_id=vlan_id,
                tagged=tagged_ports,
                untagged=untagged_ports,
            )
        )
    return vlan_enabled, vlans


# ---------------------------------------------------------------------------
# Internals
# ---------------------------------------------------------------------------

def _to_int(raw: str, key: str) -> int:
    try:
        return int(raw)
    except ValueError as exc:
        raise SG108EParseError(f"VLAN page {key} is not an integer: {raw!r}") from exc


def _members_at(masks: list[str], idx: int, key: str) -> frozenset[int]:
    if idx >= len(masks) or not masks[idx]:
        return frozenset()
    try:
        return decode_members(masks[idx])
    except ValueError as exc:
        raise SG108EParseError(f"Bad {key}[{idx}] mask {masks[idx]!r}") from exc
