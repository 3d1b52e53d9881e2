"""Unit tests for system-level write operations (rename, VLAN mode)."""

from __future__ import annotations

import pytest
import responses as rsps_lib

from napalm_sg108e.client.errors import SG108EValidationError
from napalm_sg108e.client.session import SG108ECredentials, SG108ESession
from napalm_sg108e.client.system_ops import (
    apply_switch_change,
    plan_switch_change,
    verify_switch_change,
)
from napalm_sg108e.model.device import SwitchChange, SwitchInfo
from napalm_sg108e.vendor.sg108e.endpoints import LOGIN, SYSTEM_NAME_SET, VLAN_SET

BASE_URL = "http://192.168.0.1"


# ---------------------------------------------------------------------------
# plan_switch_change
# ---------------------------------------------------------------------------

def test_plan_both() -> None:
    assert plan_switch_change("Switch-007", 1) == SwitchChange(name="Switch-007", vlan_mode=1)


def test_plan_vlan_mode_zero_is_accepted() -> None:
    change = plan_switch_change(vlan_mode=0)
    assert change.vlan_mode == 0
    assert not change.empty


def test_plan_nothing_is_empty() -> None:
    assert plan_switch_change().empty


@pytest.mark.parametrize("name", ["", "a" * 32, "has space", "dot.ted", "ümlaut"])
def test_plan_invalid_name_keeps_valid_mode(name: str) -> None:
    change = plan_switch_change(name, 1)
    assert change == SwitchChange(name=None, vlan_mode=1)


def test_plan_invalid_mode_keeps_valid_name() -> None:
    change = plan_switch_change("core_sw-1", 2)
    assert change == SwitchChange(name="core_sw-1", vlan_mode=None)


@pytest.mark.parametrize("mode", [True, False, "1", 1.0])
def test_plan_non_integer_mode_is_skipped(mode: object) -> None:
    change = plan_switch_change(vlan_mode=mode)  # type: ignore[arg-type]
    assert change.vlan_mode is None
    assert change.empty


def test_plan_name_at_limit() -> None:
    assert plan_switch_change("a" * 31).name == "a" * 31


def test_plan_strict_raises_for_name() -> None:
    with pytest.raises(SG108EValidationError) as exc_info:
        plan_switch_change("bad name", 1, strict=True)
    assert exc_info.value.field == "name"


def test_plan_strict_raises_for_mode() -> None:
    with pytest.raises(SG108EValidationError) as exc_info:
        plan_switch_change(vlan_mode=5, strict=True)
    assert exc_info.value.field == "vlan_mode"


# ---------------------------------------------------------------------------
# apply_switch_change
# ---------------------------------------------------------------------------

def _session() -> SG108ESession:
    rsps_lib.add(rsps_lib.POST, f"{BASE_URL}{LOGIN}", body="", status=200)
    session = SG108ESession(BASE_URL, SG108ECredentials("admin", "admin"))
    session.login()
    return session


@rsps_lib.activate
def test_apply_rename_then_mode() -> None:
    rsps_lib.add(rsps_lib.GET, f"{BASE_URL}{SYSTEM_NAME_SET}", body="", status=200)
    rsps_lib.add(rsps_lib.GET, f"{BASE_URL}{VLAN_SET}", body="", status=200)
    apply_switch_change(_session(), SwitchChange(name="Switch-007", vlan_mode=0))
    urls = [c.request.url for c in rsps_lib.calls[1:]]
    assert urls == [
        f"{BASE_URL}{SYSTEM_NAME_SET}?sysName=Switch-007",
        f"{BASE_URL}{VLAN_SET}?qvlan_en=0&qvlan_mode=Apply",
    ]


@rsps_lib.activate
def test_apply_mode_only() -> None:
    rsps_lib.add(rsps_lib.GET, f"{BASE_URL}{VLAN_SET}", body="", status=200)
    apply_switch_change(_session(), SwitchChange(vlan_mode=1))
    assert len(rsps_lib.calls) == 2
    assert rsps_lib.calls[1].request.url.endswith("?qvlan_en=1&qvlan_mode=Apply")


# ---------------------------------------------------------------------------
# verify_switch_change
# ---------------------------------------------------------------------------

def test_verify_ok() -> None:
    info = SwitchInfo(name="Switch-007", vlan_enabled=False)
    assert verify_switch_change(info, SwitchChange(name="Switch-007", vlan_mode=0)) == []


def test_verify_mismatches() -> None:
    info = SwitchInfo(name="old", vlan_enabled=None)
    assert verify_switch_change(info, SwitchChange(name="new", vlan_mode=1)) == [
        "name is 'old', expected 'new'",
        "VLAN mode is None, expected True",
    ]


def test_verify_ignores_unrequested_fields() -> None:
    info = SwitchInfo(name="anything", vlan_enabled=True)
    assert verify_switch_change(info, SwitchChange()) == []
