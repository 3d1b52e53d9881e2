"""Typed model for 802.1Q VLAN data."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Literal

# VLAN 1 is the port VLAN; user VLANs live in 2..MAX_VLAN_ID.
DEFAULT_VLAN_ID: int = 1
MAX_VLAN_ID: int = 32


@dataclass
class Vlan:
    """Represents a single 802.1Q VLAN entry.

    Attributes:
        name: Human-readable VLAN name.
        vlan_id: 802.1Q VLAN identifier (1 is the default VLAN).
        tagged: 1-based port numbers that carry this VLAN tagged.
        untagged: 1-based port numbers that carry this VLAN untagged.
    """

    name: str
    vlan_id: int
    tagged: frozenset[int] = field(default_factory=frozenset)
    untagged: frozenset[int] = field(default_factory=frozenset)

    @property
    def members(self) -> frozenset[int]:
        """Union of tagged and untagged member ports."""
        return self.tagged | self.untagged

    def as_dict(self) -> dict[str, Any]:
        return {
            "name": self.name,
            "id": self.vlan_id,
            "tagged": sorted(self.tagged),
            "untagged": sorted(self.untagged),
        }


@dataclass(frozen=True)
class VlanChange:
    """A validated request to add, modify or delete one VLAN.

    The switch decides between "add" and "modify" by VLAN id, so both share
    ``"add_modify"``; an empty member set means ``"delete"``.

    Attributes:
        action: ``"add_modify"`` or ``"delete"``.
        vlan_id: VLAN identifier (2..32).
        name: VLAN name.
        members: 1-based member ports (written as tagged members).
    """

    action: Literal["add_modify", "delete"]
    vlan_id: int
    name: str
    members: frozenset[int] = field(default_factory=frozenset)
