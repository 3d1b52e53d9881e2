"""Low-level port write operations for TL-SG108E switches.

Each function translates a strongly-typed request into the exact query
parameters the web UI sends and delegates to
:class:`~napalm_sg108e.client.session.SG108ESession` for dispatch.

Captured request (port 4 disabled, 100M half duplex)::

    GET /port_setting.cgi?portid=4&state=0&speed=4&flowcontrol=0&apply=Apply

Fields:
    portid:      1-based port number
    state:       "1" = Enable, "0" = Disable
    speed:       wire code from :data:`~napalm_sg108e.vendor.sg108e.mappings.SPEEDS`
    flowcontrol: always "0"; flow control is not managed by this driver
"""

from __future__ import annotations

import logging

from napalm_sg108e.client.session import SG108ESession
from napalm_sg108e.model.device import SwitchInfo
from napalm_sg108e.model.port import PortChange, PortSpeed, PortState
from napalm_sg108e.utils.validate import flag_problem, port_problem, reject, speed_problem
from napalm_sg108e.vendor.sg108e.endpoints import PORT_SET
from napalm_sg108e.vendor.sg108e.mappings import STATES, encode_speed

logger = logging.getLogger(__name__)


def plan_port_change(
    port: int,
    state: int | PortState,
    speed: str | PortSpeed,
    *,
    strict: bool = False,
) -> PortChange | None:
    """Validate a port request.

    Args:
        port: 1-based port number (1..8).
        state: ``0``/``1`` or a :class:`PortState`.
        speed: A configurable speed token (``"Auto"``, ``"10MH"``, ``"10MF"``,
            ``"100MH"``, ``"100MF"``, ``"1000MF"``).  ``"down"`` is a link
            status, not a setting, and is rejected.
        strict: Raise instead of skipping on invalid input.

    Returns:
        A :class:`PortChange`, or ``None`` if any parameter is invalid.

    Raises:
        SG108EValidationError: In strict mode, on the first invalid parameter.
    """
    if isinstance(state, PortState):
        state = STATES.index(state)
    for field, value, problem in (
        ("port", port, port_problem(port)),
        ("state", state, flag_problem(state)),
        ("speed", speed, speed_problem(speed)),
    ):
        if problem is not None:
            reject(field, value, problem, strict=strict)
            return None
    return PortChange(port=port, state=int(state), speed=PortSpeed(speed))


def apply_port_change(session: SG108ESession, change: PortChange) -> None:
    """Send one ``port_setting.cgi`` request.

    Raises:
        SG108ERequestError: On a transport-level failure.
        SG108EResponseError: On a non-2xx HTTP status code.
    """
    params = _build_port_params(change)
    logger.debug("Setting port %d: %s", change.port, params)
    session.get(PORT_SET, params=params)
    logger.info("Port %d configuration applied", change.port)


def verify_port_change(info: SwitchInfo, change: PortChange) -> list[str]:
    """Return mismatches between *change* and the state read back in *info*."""
    port = info.port(change.port)
    if port is None:
        return [f"port {change.port} missing from read-back"]
    wanted_state = STATES[change.state]
    mismatches: list[str] = []
    if port.state is not wanted_state:
        mismatches.append(
            f"port {change.port} state is {_value(port.state)!r}, expected {wanted_state.value!r}"
        )
    if port.speed is not change.speed:
        mismatches.append(
            f"port {change.port} speed is {_value(port.speed)!r}, expected {change.speed.value!r}"
        )
    return mismatches


def _value(member: PortState | PortSpeed | None) -> str | None:
    return None if member is None else member.value


def _build_port_params(change: PortChange) -> dict[str, str]:
    """Build the ``port_setting.cgi`` query parameters for *change*."""
    return {
        "portid": str(change.port),
        "state": str(change.state),
        "speed": str(encode_speed(change.speed)),
        "flowcontrol": "0",
        "apply": "Apply",
    }
