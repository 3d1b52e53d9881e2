"""Typed model for the full switch state read from the web UI."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any

from napalm_sg108e.model.port import Port
from napalm_sg108e.model.vlan import Vlan


@dataclass
class DeviceInfo:
    """Identity fields parsed from ``SystemInfoRpm.htm``.

    Every field is ``None`` when the page does not carry it.
    """

    hardware: str | None = None
    firmware: str | None = None
    name: str | None = None
    mac: str | None = None
    ip: str | None = None
    netmask: str | None = None
    gateway: str | None = None


@dataclass
class SwitchInfo:
    """Configuration and status of the switch, its ports and VLANs.

    Built fresh by every full read and never cached.

    Attributes:
        hardware: Hardware model string (e.g. ``"TL-SG108E 3.0"``).
        firmware: Firmware version string.
        name: Device description / system name.
        mac: Base MAC address as reported (``"70:4F:57:35:BE:36"``).
        ip: Management IPv4 address.
        netmask: Management netmask.
        gateway: Default gateway.
        vlan_enabled: ``True`` if 802.1Q VLAN mode is on, ``None`` if the
            VLAN page could not be parsed.
        ports: Ports in ascending port number order.
        vlans: VLANs in the order the switch lists them.
    """

    hardware: str | None = None
    firmware: str | None = None
    name: str | None = None
    mac: str | None = None
    ip: str | None = None
    netmask: str | None = None
    gateway: str | None = None
    vlan_enabled: bool | None = None
    ports: list[Port] = field(default_factory=list)
    vlans: list[Vlan] = field(default_factory=list)

    @classmethod
    def from_device_info(cls, info: DeviceInfo | None) -> SwitchInfo:
        """Start a :class:`SwitchInfo` from the identity page result."""
        if info is None:
            return cls()
        return cls(
            hardware=info.hardware,
            firmware=info.firmware,
            name=info.name,
            mac=info.mac,
            ip=info.ip,
            netmask=info.netmask,
            gateway=info.gateway,
        )

    def port(self, number: int) -> Port | None:
        """Return the port with 1-based *number*, or ``None``."""
        for p in self.ports:
            if p.number == number:
                return p
        return None

    def vlan(self, vlan_id: int) -> Vlan | None:
        """Return the VLAN with *vlan_id*, or ``None``."""
        for v in self.vlans:
            if v.vlan_id == vlan_id:
                return v
        return None

    def as_dict(self) -> dict[str, Any]:
        """Serialize to the ``{"switch": {...}}`` mapping used by the web UI tooling."""
        if self.vlan_enabled is None:
            vlan_mode = None
        else:
            vlan_mode = "Enabled" if self.vlan_enabled else "Disabled"
        return {
            "switch": {
                "hardware": self.hardware,
                "firmware": self.firmware,
                "name": self.name,
                "mac": self.mac,
                "ip": self.ip,
                "netmask": self.netmask,
                "gateway": self.gateway,
                "vlan-mode": vlan_mode,
                "ports": [p.as_dict() for p in self.ports],
                "vlans": [v.as_dict() for v in self.vlans],
            }
        }


@dataclass(frozen=True)
class SwitchChange:
    """Validated system-level changes; ``None`` fields are left untouched.

    Attributes:
        name: New system name.
        vlan_mode: ``1`` to enable 802.1Q VLANs, ``0`` to disable.
    """

    name: str | None = None
    vlan_mode: int | None = None

    @property
    def empty(self) -> bool:
        return self.name is None and self.vlan_mode is None
