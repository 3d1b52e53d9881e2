"""NAPALM NetworkDriver for TP-Link TL-SG108E switches."""

from __future__ import annotations

import logging
from collections.abc import Collection
from typing import Any

from napalm.base.base import NetworkDriver

from napalm_sg108e.client.errors import SG108EError, SG108EVerificationError
from napalm_sg108e.client.port_ops import apply_port_change, plan_port_change, verify_port_change
from napalm_sg108e.client.session import (
    DIAGNOSE_TIMEOUT_S,
    ConnectionState,
    SG108ECredentials,
    SG108ESession,
    diagnose,
)
from napalm_sg108e.client.state import read_switch_info
from napalm_sg108e.client.system_ops import (
    apply_switch_change,
    plan_switch_change,
    verify_switch_change,
)
from napalm_sg108e.client.vlan_ops import apply_vlan_change, plan_vlan_change, verify_vlan_change
from napalm_sg108e.model.device import SwitchInfo
from napalm_sg108e.model.port import PortSpeed, PortState
from napalm_sg108e.vendor.sg108e.mappings import SPEED_MBPS

logger = logging.getLogger(__name__)

_VENDOR: str = "TP-Link"
_DEFAULT_PORT: int = 80

# Counter value for statistics the switch does not keep.
_NOT_REPORTED: int = -1


class SG108EDriver(NetworkDriver):  # type: ignore[misc]
    """NAPALM driver for TP-Link TL-SG108E easy smart switches.

    Communicates with the switch through its HTTP web UI.  State is scraped
    from inline scripts of the ``*Rpm.htm`` pages; changes are GET requests
    against the ``*.cgi`` handlers.

    The switch offers a single web UI session slot, so :meth:`open` does not
    log in.  Every public method logs in, does its work and logs out again,
    even when the work fails.

    Args:
        hostname: IP address or hostname of the switch, optionally including
            the ``http://`` scheme.
        username: Login username.
        password: Login password.
        timeout: Default request timeout in seconds.
        optional_args: Optional driver configuration overrides.
            Supported keys:

            - ``port`` (int): HTTP port (default 80).
            - ``strict_validation`` (bool): Raise
              :exc:`~napalm_sg108e.client.errors.SG108EValidationError` on
              invalid write parameters instead of skipping them
              (default ``False``).
            - ``verify_changes`` (bool): Re-read the switch after every write
              and raise on mismatch (default ``False``).
            - ``diagnose_timeout`` (float): Login timeout of
              :meth:`diagnose` in seconds (default 1.0).
    """

    def __init__(
        self,
        hostname: str,
        username: str,
        password: str,
        timeout: int = 60,
        optional_args: dict[str, Any] | None = None,
    ) -> None:
        self.hostname = hostname
        self.username = username
        self.password = password
        self.timeout = timeout
        self.optional_args: dict[str, Any] = optional_args or {}

        self._port: int = int(self.optional_args.get("port", _DEFAULT_PORT))
        self._strict: bool = bool(self.optional_args.get("strict_validation", False))
        self._verify_changes: bool = bool(self.optional_args.get("verify_changes", False))
        self._diagnose_timeout: float = float(
            self.optional_args.get("diagnose_timeout", DIAGNOSE_TIMEOUT_S)
        )
        self._credentials = SG108ECredentials(username=username, password=password)
        self._base_url: str | None = None

        logger.debug(
            "SG108EDriver initialised: host=%s port=%d user=%s",
            self.hostname,
            self._port,
            self.username,
        )

    # ------------------------------------------------------------------
    # Connection lifecycle
    # ------------------------------------------------------------------

    def open(self) -> None:
        """Resolve the switch base URL; no session is held between calls."""
        self._base_url = self._build_base_url()
        logger.info("Driver ready for %s", self._base_url)

    def close(self) -> None:
        """Forget the base URL.  Sessions are already closed after each call."""
        if self._base_url is not None:
            logger.info("Closing driver for %s", self.hostname)
        self._base_url = None

    def is_alive(self) -> dict[str, bool]:
        """Return whether :meth:`open` has been called (no session is kept)."""
        return {"is_alive": self._base_url is not None}

    def diagnose(self) -> ConnectionState:
        """Check connectivity and credentials; works without :meth:`open`.

        Returns:
            ``NOT_ACCESSIBLE``, ``NOT_AUTHORIZED`` or ``AUTHORIZED``.

        Raises:
            SG108ERequestError: On a transport failure other than the login
                timeout.
        """
        return diagnose(
            self._base_url or self._build_base_url(),
            self._credentials,
            timeout_s=self._diagnose_timeout,
            request_timeout_s=float(self.timeout),
        )

    # ------------------------------------------------------------------
    # Switch operations
    # ------------------------------------------------------------------

    def get_switch_info(self) -> SwitchInfo:
        """Return configuration and status of the switch, its ports and VLANs.

        Raises:
            SG108EError: If the driver is not open.
            SG108EParseError: If a status page holds malformed codes.
        """
        with self._new_session() as session:
            return read_switch_info(session)

    def set_switch(
        self,
        name: str | None = None,
        vlan_mode: int | None = None,
        *,
        verify: bool | None = None,
    ) -> dict[str, Any]:
        """Rename the switch and/or enable or disable 802.1Q VLANs.

        The two settings are validated independently; an invalid one is
        skipped (or raised in strict mode) without blocking the other.

        Args:
            name: New system name (``[a-zA-Z0-9_-]``, under 32 characters).
            vlan_mode: ``1`` to enable 802.1Q VLANs, ``0`` to disable.
            verify: Read back and compare; ``None`` uses ``verify_changes``.

        Returns:
            ``{"changed": bool, "name": str | None, "vlan_mode": int | None}``
            with the values actually sent.

        Raises:
            SG108EValidationError: In strict mode, on invalid input.
            SG108EVerificationError: If read-back shows the change missing.
        """
        change = plan_switch_change(name, vlan_mode, strict=self._strict)
        result: dict[str, Any] = {
            "changed": not change.empty,
            "name": change.name,
            "vlan_mode": change.vlan_mode,
        }
        if change.empty:
            logger.info("No valid switch settings to apply")
            return result

        with self._new_session() as session:
            apply_switch_change(session, change)
            if self._should_verify(verify):
                _raise_on_mismatch(verify_switch_change(read_switch_info(session), change))
        return result

    def set_port(
        self,
        port: int,
        state: int | PortState,
        speed: str | PortSpeed,
        *,
        verify: bool | None = None,
    ) -> dict[str, Any]:
        """Set administrative state and speed of one port.

        Args:
            port: Port number 1..8.
            state: ``0``/``1`` (or :class:`PortState`) to disable/enable.
            speed: ``"Auto"``, ``"10MH"``, ``"10MF"``, ``"100MH"``,
                ``"100MF"`` or ``"1000MF"``.
            verify: Read back and compare; ``None`` uses ``verify_changes``.

        Returns:
            ``{"changed": False}`` if the request was skipped, else
            ``{"changed": True, "port": int, "state": int, "speed": str}``.

        Raises:
            SG108EValidationError: In strict mode, on invalid input.
            SG108EVerificationError: If read-back shows the change missing.
        """
        change = plan_port_change(port, state, speed, strict=self._strict)
        if change is None:
            return {"changed": False}

        with self._new_session() as session:
            apply_port_change(session, change)
            if self._should_verify(verify):
                _raise_on_mismatch(verify_port_change(read_switch_info(session), change))
        return {
            "changed": True,
            "port": change.port,
            "state": change.state,
            "speed": change.speed.value,
        }

    def set_vlan(
        self,
        vlan_id: int,
        name: str,
        members: Collection[int],
        *,
        verify: bool | None = None,
    ) -> dict[str, Any]:
        """Add, modify or delete an 802.1Q VLAN.

        An empty *members* collection deletes the VLAN; otherwise the VLAN is
        created or updated with *members* as tagged ports.

        Args:
            vlan_id: VLAN identifier 2..32 (VLAN 1 cannot be changed).
            name: VLAN name (``[a-zA-Z0-9_-]``), required even for a delete.
            members: Member port numbers 1..8.
            verify: Read back and compare; ``None`` uses ``verify_changes``.

        Returns:
            ``{"changed": False}`` if the request was skipped, else
            ``{"changed": True, "action": "add_modify" | "delete",
            "vlan_id": int, "members": list[int]}``.

        Raises:
            SG108EValidationError: In strict mode, on invalid input.
            SG108EVerificationError: If read-back shows the change missing.
        """
        change = plan_vlan_change(vlan_id, name, members, strict=self._strict)
        if change is None:
            return {"changed": False}

        with self._new_session() as session:
            apply_vlan_change(session, change)
            if self._should_verify(verify):
                _raise_on_mismatch(verify_vlan_change(read_switch_info(session), change))
        return {
            "changed": True,
            "action": change.action,
            "vlan_id": change.vlan_id,
            "members": sorted(change.members),
        }

    # ------------------------------------------------------------------
    # NAPALM getters
    # ------------------------------------------------------------------

    def get_facts(self) -> dict[str, Any]:
        """Return general device facts conforming to the NAPALM schema.

        The web UI does not report a serial number or uptime; they come back
        as ``""`` and ``-1.0``.
        """
        info = self.get_switch_info()
        hostname = info.name or self.hostname
        return {
            "hostname": hostname,
            "fqdn": hostname,
            "vendor": _VENDOR,
            "model": info.hardware or "unknown",
            "serial_number": "",
            "os_version": info.firmware or "",
            "uptime": -1.0,
            "interface_list": [p.name for p in info.ports],
        }

    def get_interfaces(self) -> dict[str, Any]:
        """Return interface information conforming to the NAPALM schema.

        Keyed by interface name (``"Port 1"`` .. ``"Port 8"``).  ``speed`` is
        the negotiated link speed in Mbps, ``0.0`` when the link is down.
        """
        info = self.get_switch_info()
        result: dict[str, Any] = {}
        for port in info.ports:
            link_up = port.link is not None and port.link is not PortSpeed.DOWN
            result[port.name] = {
                "is_up": link_up,
                "is_enabled": port.state is PortState.ENABLED,
                "description": "",
                "last_flapped": -1.0,
                "speed": float(SPEED_MBPS.get(port.link, 0)) if port.link is not None else 0.0,
                "mtu": 0,
                "mac_address": "",
            }
        return result

    def get_interfaces_counters(self) -> dict[str, Any]:
        """Return per-port packet counters conforming to the NAPALM schema.

        The switch only counts good and bad packets per direction: good
        packets are reported as unicast packets, bad packets as errors, and
        every other counter as ``-1``.
        """
        info = self.get_switch_info()
        result: dict[str, Any] = {}
        for port in info.ports:
            result[port.name] = {
                "tx_errors": _count(port.tx_bad),
                "rx_errors": _count(port.rx_bad),
                "tx_discards": _NOT_REPORTED,
                "rx_discards": _NOT_REPORTED,
                "tx_octets": _NOT_REPORTED,
                "rx_octets": _NOT_REPORTED,
                "tx_unicast_packets": _count(port.tx_good),
                "rx_unicast_packets": _count(port.rx_good),
                "tx_multicast_packets": _NOT_REPORTED,
                "rx_multicast_packets": _NOT_REPORTED,
                "tx_broadcast_packets": _NOT_REPORTED,
                "rx_broadcast_packets": _NOT_REPORTED,
            }
        return result

    def get_vlans(self) -> dict[int, Any]:
        """Return VLAN information conforming to the NAPALM schema.

        Returns:
            Dict keyed by VLAN ID, each value being::

                {"name": str, "interfaces": [str, ...]}

            ``interfaces`` lists tagged and untagged member ports together,
            in port order.
        """
        info = self.get_switch_info()
        return {
            vlan.vlan_id: {
                "name": vlan.name,
                "interfaces": [f"Port {p}" for p in sorted(vlan.members)],
            }
            for vlan in info.vlans
        }

    # ------------------------------------------------------------------
    # Internals
    # ------------------------------------------------------------------

    def _build_base_url(self) -> str:
        """Construct the switch base URL from hostname and port."""
        if "://" in self.hostname:
            return self.hostname.rstrip("/")
        if self._port == _DEFAULT_PORT:
            return f"http://{self.hostname}"
        return f"http://{self.hostname}:{self._port}"

    def _new_session(self) -> SG108ESession:
        """Return a fresh, not yet logged-in session or raise :exc:`.SG108EError`."""
        if self._base_url is None:
            raise SG108EError("Driver not open; call open() first.")
        return SG108ESession(
            base_url=self._base_url,
            credentials=self._credentials,
            timeout_s=float(self.timeout),
        )

    def _should_verify(self, verify: bool | None) -> bool:
        return self._verify_changes if verify is None else verify


def _raise_on_mismatch(mismatches: list[str]) -> None:
    if mismatches:
        raise SG108EVerificationError(mismatches=mismatches)


def _count(value: int | None) -> int:
    return _NOT_REPORTED if value is None else value
