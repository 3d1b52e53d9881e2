"""System-level write operations: device name and 802.1Q VLAN mode.

Captured requests::

    GET /system_name_set.cgi?sysName=Switch-007
    GET /qvlanSet.cgi?qvlan_en=1&qvlan_mode=Apply
"""

from __future__ import annotations

import logging

from napalm_sg108e.client.session import SG108ESession
from napalm_sg108e.model.device import SwitchChange, SwitchInfo
from napalm_sg108e.utils.validate import flag_problem, name_problem, reject
from napalm_sg108e.vendor.sg108e.endpoints import SYSTEM_NAME_SET, VLAN_SET

logger = logging.getLogger(__name__)


def plan_switch_change(
    name: str | None = None,
    vlan_mode: int | None = None,
    *,
    strict: bool = False,
) -> SwitchChange:
    """Validate the name and VLAN mode independently.

    An invalid name does not block a valid VLAN mode change and vice versa;
    ``None`` means "leave unchanged".

    Args:
        name: New system name: non-empty, under 32 characters,
            ``[a-zA-Z0-9_-]`` only.
        vlan_mode: ``1`` to enable 802.1Q VLANs, ``0`` to disable them.
        strict: Raise instead of skipping on invalid input.

    Raises:
        SG108EValidationError: In strict mode, if either value is invalid.
    """
    new_name: str | None = None
    if name is not None:
        problem = name_problem(name)
        if problem is None:
            new_name = name
        else:
            reject("name", name, problem, strict=strict)

    new_mode: int | None = None
    if vlan_mode is not None:
        problem = flag_problem(vlan_mode)
        if problem is None:
            new_mode = int(vlan_mode)
        else:
            reject("vlan_mode", vlan_mode, problem, strict=strict)

    return SwitchChange(name=new_name, vlan_mode=new_mode)


def apply_switch_change(session: SG108ESession, change: SwitchChange) -> None:
    """Send the rename and/or VLAN mode requests in *change*.

    Raises:
        SG108ERequestError: On a transport-level failure.
        SG108EResponseError: On a non-2xx HTTP status code.
    """
    if change.name is not None:
        session.get(SYSTEM_NAME_SET, params={"sysName": change.name})
        logger.info("System name set to %r", change.name)
    if change.vlan_mode is not None:
        session.get(
            VLAN_SET,
            params={"qvlan_en": str(change.vlan_mode), "qvlan_mode": "Apply"},
        )
        logger.info("802.1Q VLAN mode %s", "enabled" if change.vlan_mode else "disabled")


def verify_switch_change(info: SwitchInfo, change: SwitchChange) -> list[str]:
    """Return mismatches between *change* and the state read back in *info*."""
    mismatches: list[str] = []
    if change.name is not None and info.name != change.name:
        mismatches.append(f"name is {info.name!r}, expected {change.name!r}")
    if change.vlan_mode is not None and info.vlan_enabled != bool(change.vlan_mode):
        mismatches.append(
            f"VLAN mode is {info.vlan_enabled}, expected {bool(change.vlan_mode)}"
        )
    return mismatches
