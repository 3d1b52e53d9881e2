"""Typed models for port/interface data."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Any

# Fixed size of the TL-SG108E family.
PORT_COUNT: int = 8


class PortState(str, Enum):
    """Administrative port state as shown in the switch UI."""

    DISABLED = "Disabled"
    ENABLED = "Enabled"


class PortSpeed(str, Enum):
    """Speed/duplex tokens as shown in the switch UI.

    Declaration order matches the firmware's wire codes; see
    :data:`~napalm_sg108e.vendor.sg108e.mappings.SPEEDS`.
    """

    DOWN = "down"
    AUTO = "Auto"
    M10_HALF = "10MH"
    M10_FULL = "10MF"
    M100_HALF = "100MH"
    M100_FULL = "100MF"
    M1000_FULL = "1000MF"
    UNSET = ""


@dataclass
class Port:
    """State of a single switch port.

    Allocated from the port settings page and enriched in place from the
    port statistics page, so the counter and link fields stay ``None`` until
    the second page has been merged.

    Attributes:
        number: 1-based port number.
        state: Administrative state, ``None`` if not reported.
        speed: Configured speed/duplex, ``None`` if not reported.
        link: Observed link speed (``PortSpeed.DOWN`` when no link).
        tx_good: Transmitted good packets.
        tx_bad: Transmitted bad packets.
        rx_good: Received good packets.
        rx_bad: Received bad packets.
    """

    number: int
    state: PortState | None = None
    speed: PortSpeed | None = None
    link: PortSpeed | None = None
    tx_good: int | None = None
    tx_bad: int | None = None
    rx_good: int | None = None
    rx_bad: int | None = None

    @property
    def name(self) -> str:
        """Interface name used by the NAPALM getters (e.g. ``"Port 1"``)."""
        return f"Port {self.number}"

    def as_dict(self) -> dict[str, Any]:
        return {
            "number": self.number,
            "state": _display(self.state),
            "speed": _display(self.speed),
            "link": _display(self.link),
            "TxGoodPkt": self.tx_good,
            "TxBadPkt": self.tx_bad,
            "RxGoodPkt": self.rx_good,
            "RxBadPkt": self.rx_bad,
        }


@dataclass
class PortStatistics:
    """One entry of the port statistics page, prior to merging.

    Attributes:
        index: 0-based position in the page's per-port arrays.
        link: Observed link speed, ``None`` if not reported.
        tx_good: Transmitted good packets.
        tx_bad: Transmitted bad packets.
        rx_good: Received good packets.
        rx_bad: Received bad packets.
    """

    index: int
    link: PortSpeed | None = None
    tx_good: int | None = None
    tx_bad: int | None = None
    rx_good: int | None = None
    rx_bad: int | None = None


def _display(value: Enum | None) -> str | None:
    return None if value is None else str(value.value)


@dataclass(frozen=True)
class PortChange:
    """A validated request to reconfigure one port.

    Attributes:
        port: 1-based port number.
        state: ``0`` to disable, ``1`` to enable.
        speed: Configured speed/duplex to apply.
    """

    port: int
    state: int
    speed: PortSpeed
