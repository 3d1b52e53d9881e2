"""Parameter validation for TL-SG108E write operations.

Each ``*_problem`` helper returns ``None`` for an acceptable value or a short
reason string.  :func:`reject` turns a reason into either a logged skip (the
web UI's own behaviour) or, in strict mode, a raised
:exc:`~napalm_sg108e.client.errors.SG108EValidationError`.
"""

from __future__ import annotations

import logging
import re
from collections.abc import Collection

from napalm_sg108e.client.errors import SG108EValidationError
from napalm_sg108e.model.port import PORT_COUNT, PortSpeed
from napalm_sg108e.model.vlan import DEFAULT_VLAN_ID, MAX_VLAN_ID
from napalm_sg108e.vendor.sg108e.mappings import SPEEDS, encode_speed

logger = logging.getLogger(__name__)

# Charset accepted by the web UI for the system name and VLAN names.
NAME_RE: re.Pattern[str] = re.compile(r"[a-zA-Z0-9_-]+")
MAX_NAME_LEN: int = 32

# Speeds that may be written: everything except the link-down and unset codes.
CONFIGURABLE_SPEEDS: tuple[PortSpeed, ...] = tuple(
    s for s in SPEEDS if s not in (PortSpeed.DOWN, PortSpeed.UNSET)
)


def reject(field: str, value: object, reason: str, *, strict: bool) -> None:
    """Skip (log) or, when *strict*, raise for an invalid parameter.

    Raises:
        SG108EValidationError: If *strict* is true.
    """
    if strict:
        raise SG108EValidationError(field=field, value=value, reason=reason)
    logger.warning("Skipping invalid %s=%r: %s", field, value, reason)


def name_problem(name: object) -> str | None:
    """Check a system or VLAN name."""
    if not isinstance(name, str) or not name:
        return "must be a non-empty string"
    if len(name) >= MAX_NAME_LEN:
        return f"must be shorter than {MAX_NAME_LEN} characters"
    if not NAME_RE.fullmatch(name):
        return "may only contain letters, digits, '_' and '-'"
    return None


def flag_problem(value: object) -> str | None:
    """Check a 0/1 flag (port state, VLAN mode)."""
    if not isinstance(value, int) or isinstance(value, bool) or value not in (0, 1):
        return "must be 0 or 1"
    return None


def port_problem(port: object) -> str | None:
    if not isinstance(port, int) or isinstance(port, bool) or not 1 <= port <= PORT_COUNT:
        return f"must be a port number 1..{PORT_COUNT}"
    return None


def speed_problem(speed: object) -> str | None:
    """Check a configured speed token (``"Auto"``, ``"100MH"``, ...)."""
    if not isinstance(speed, str):
        return "must be a speed token"
    code = encode_speed(speed)
    if code is None or SPEEDS[code] not in CONFIGURABLE_SPEEDS:
        return "must be one of " + ", ".join(s.value for s in CONFIGURABLE_SPEEDS)
    return None


def vlan_id_problem(vlan_id: object) -> str | None:
    if not isinstance(vlan_id, int) or isinstance(vlan_id, bool):
        return "must be an integer"
    if vlan_id == DEFAULT_VLAN_ID:
        return f"VLAN {DEFAULT_VLAN_ID} is reserved for the default VLAN"
    if not DEFAULT_VLAN_ID < vlan_id <= MAX_VLAN_ID:
        return f"must be in {DEFAULT_VLAN_ID + 1}..{MAX_VLAN_ID}"
    return None


def members_problem(members: object) -> str | None:
    """Check a VLAN member set (empty means delete)."""
    if not isinstance(members, Collection) or isinstance(members, (str, bytes)):
        return "must be a collection of port numbers"
    for port in members:
        if port_problem(port) is not None:
            return f"member {port!r} is not a port number 1..{PORT_COUNT}"
    return None
