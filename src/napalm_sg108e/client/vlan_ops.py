"""Low-level 802.1Q VLAN write operations for TL-SG108E switches.

Each function translates a strongly-typed request into the exact query
parameters the web UI sends and delegates to
:class:`~napalm_sg108e.client.session.SG108ESession` for dispatch.

Captured requests::

    ADD/MODIFY: GET /qvlanSet.cgi
        vid=3&vname=alpha&selType_1=2&selType_2=1&...&selType_8=1&qvlan_add=Add%2FModify

    DELETE: GET /qvlanSet.cgi
        selVlans=3&qvlan_del=Delete

``selType_<n>`` is ``1`` for a member port and ``2`` for a non-member; see
:func:`~napalm_sg108e.vendor.sg108e.mappings.encode_member_selectors`.
"""

from __future__ import annotations

import logging
from collections.abc import Collection

from napalm_sg108e.client.session import SG108ESession
from napalm_sg108e.model.device import SwitchInfo
from napalm_sg108e.model.vlan import VlanChange
from napalm_sg108e.utils.validate import members_problem, name_problem, reject, vlan_id_problem
from napalm_sg108e.vendor.sg108e.endpoints import VLAN_SET
from napalm_sg108e.vendor.sg108e.mappings import encode_member_selectors

logger = logging.getLogger(__name__)


def plan_vlan_change(
    vlan_id: int,
    name: str,
    members: Collection[int],
    *,
    strict: bool = False,
) -> VlanChange | None:
    """Validate a VLAN request and classify it as add/modify or delete.

    Args:
        vlan_id: VLAN identifier, 2..32 (1 is the reserved default VLAN).
        name: VLAN name; required even for a delete.
        members: Member port numbers.  Empty deletes the VLAN.
        strict: Raise instead of skipping on invalid input.

    Returns:
        A :class:`VlanChange`, or ``None`` if any parameter is invalid.

    Raises:
        SG108EValidationError: In strict mode, on the first invalid parameter.
    """
    for field, value, problem in (
        ("vlan_id", vlan_id, vlan_id_problem(vlan_id)),
        ("name", name, name_problem(name)),
        ("members", members, members_problem(members)),
    ):
        if problem is not None:
            reject(field, value, problem, strict=strict)
            return None
    ports = frozenset(members)
    return VlanChange(
        action="add_modify" if ports else "delete",
        vlan_id=vlan_id,
        name=name,
        members=ports,
    )


def apply_vlan_change(session: SG108ESession, change: VlanChange) -> None:
    """Send one ``qvlanSet.cgi`` request for *change*.

    Raises:
        SG108ERequestError: On a transport-level failure.
        SG108EResponseError: On a non-2xx HTTP status code.
    """
    params = _build_vlan_params(change)
    logger.debug("VLAN %d %s: %s", change.vlan_id, change.action, params)
    session.get(VLAN_SET, params=params)
    if change.action == "delete":
        logger.info("Deleted VLAN %d", change.vlan_id)
    else:
        logger.info(
            "Added/modified VLAN %d (%s) members=%s",
            change.vlan_id,
            change.name,
            sorted(change.members),
        )


def verify_vlan_change(info: SwitchInfo, change: VlanChange) -> list[str]:
    """Return mismatches between *change* and the state read back in *info*."""
    vlan = info.vlan(change.vlan_id)
    if change.action == "delete":
        return [] if vlan is None else [f"VLAN {change.vlan_id} still present"]
    if vlan is None:
        return [f"VLAN {change.vlan_id} missing from read-back"]
    mismatches: list[str] = []
    if vlan.name != change.name:
        mismatches.append(f"VLAN {change.vlan_id} name is {vlan.name!r}, expected {change.name!r}")
    if vlan.members != change.members:
        mismatches.append(
            f"VLAN {change.vlan_id} members are {sorted(vlan.members)}, "
            f"expected {sorted(change.members)}"
        )
    return mismatches


def _build_vlan_params(change: VlanChange) -> dict[str, str]:
    """Build the ``qvlanSet.cgi`` query parameters for *change*."""
    if change.action == "delete":
        return {"selVlans": str(change.vlan_id), "qvlan_del": "Delete"}
    params: dict[str, str] = {"vid": str(change.vlan_id), "vname": change.name}
    params.update(encode_member_selectors(change.members))
    params["qvlan_add"] = "Add/Modify"
    return params
