"""Unit tests for 802.1Q VLAN write operations."""

from __future__ import annotations

from urllib.parse import parse_qsl, urlparse

import pytest
import responses as rsps_lib

from napalm_sg108e.client.errors import SG108EValidationError
from napalm_sg108e.client.session import SG108ECredentials, SG108ESession
from napalm_sg108e.client.vlan_ops import (
    _build_vlan_params,
    apply_vlan_change,
    plan_vlan_change,
    verify_vlan_change,
)
from napalm_sg108e.model.device import SwitchInfo
from napalm_sg108e.model.vlan import Vlan, VlanChange
from napalm_sg108e.vendor.sg108e.endpoints import LOGIN, VLAN_SET

BASE_URL = "http://192.168.0.1"


# ---------------------------------------------------------------------------
# plan_vlan_change
# ---------------------------------------------------------------------------

def test_plan_add_modify() -> None:
    change = plan_vlan_change(5, "ops-1", {2, 4})
    assert change == VlanChange(
        action="add_modify", vlan_id=5, name="ops-1", members=frozenset({2, 4})
    )


def test_plan_empty_members_is_delete() -> None:
    change = plan_vlan_change(5, "ops-1", [])
    assert change is not None
    assert change.action == "delete"
    assert change.members == frozenset()


def test_plan_accepts_list_members() -> None:
    change = plan_vlan_change(32, "top", [8, 1, 8])
    assert change is not None
    assert change.members == frozenset({1, 8})


@pytest.mark.parametrize(
    ("vlan_id", "name", "members"),
    [
        (1, "Default", {1}),
        (33, "x", {1}),
        (0, "x", {1}),
        ("5", "x", {1}),
        (5, "", {1}),
        (5, "bad name", {1}),
        (5, "x" * 32, {1}),
        (5, "x", {9}),
        (5, "x", {0}),
        (5, "x", "12"),
        (5, "x", None),
    ],
)
def test_plan_invalid_is_skipped(vlan_id: object, name: object, members: object) -> None:
    assert plan_vlan_change(vlan_id, name, members) is None  # type: ignore[arg-type]


def test_plan_longest_valid_name() -> None:
    assert plan_vlan_change(5, "x" * 31, {1}) is not None


def test_plan_invalid_strict_raises() -> None:
    with pytest.raises(SG108EValidationError) as exc_info:
        plan_vlan_change(1, "Default", {1}, strict=True)
    assert exc_info.value.field == "vlan_id"


# ---------------------------------------------------------------------------
# Request parameters
# ---------------------------------------------------------------------------

def test_params_add_modify() -> None:
    change = VlanChange(action="add_modify", vlan_id=3, name="alpha", members=frozenset({2, 4}))
    assert _build_vlan_params(change) == {
        "vid": "3",
        "vname": "alpha",
        "selType_1": "2",
        "selType_2": "1",
        "selType_3": "2",
        "selType_4": "1",
        "selType_5": "2",
        "selType_6": "2",
        "selType_7": "2",
        "selType_8": "2",
        "qvlan_add": "Add/Modify",
    }


def test_params_delete() -> None:
    change = VlanChange(action="delete", vlan_id=3, name="alpha")
    assert _build_vlan_params(change) == {"selVlans": "3", "qvlan_del": "Delete"}


@rsps_lib.activate
def test_apply_sends_query() -> None:
    rsps_lib.add(rsps_lib.POST, f"{BASE_URL}{LOGIN}", body="", status=200)
    rsps_lib.add(rsps_lib.GET, f"{BASE_URL}{VLAN_SET}", body="", status=200)
    session = SG108ESession(BASE_URL, SG108ECredentials("admin", "admin"))
    session.login()
    apply_vlan_change(
        session,
        VlanChange(action="add_modify", vlan_id=5, name="ops-1", members=frozenset({2, 4})),
    )
    sent = dict(parse_qsl(urlparse(rsps_lib.calls[1].request.url).query))
    assert sent["vid"] == "5"
    assert sent["vname"] == "ops-1"
    assert sent["selType_2"] == "1"
    assert sent["selType_3"] == "2"
    assert sent["qvlan_add"] == "Add/Modify"


# ---------------------------------------------------------------------------
# Verification
# ---------------------------------------------------------------------------

def test_verify_added_vlan() -> None:
    change = VlanChange(action="add_modify", vlan_id=5, name="ops-1", members=frozenset({2, 4}))
    info = SwitchInfo(vlans=[Vlan(name="ops-1", vlan_id=5, tagged=frozenset({2, 4}))])
    assert verify_vlan_change(info, change) == []


def test_verify_untagged_members_count() -> None:
    change = VlanChange(action="add_modify", vlan_id=5, name="v", members=frozenset({2, 4}))
    info = SwitchInfo(
        vlans=[Vlan(name="v", vlan_id=5, tagged=frozenset({2}), untagged=frozenset({4}))]
    )
    assert verify_vlan_change(info, change) == []


def test_verify_reports_name_and_members() -> None:
    change = VlanChange(action="add_modify", vlan_id=5, name="ops-1", members=frozenset({2, 4}))
    info = SwitchInfo(vlans=[Vlan(name="old", vlan_id=5, tagged=frozenset({2}))])
    assert verify_vlan_change(info, change) == [
        "VLAN 5 name is 'old', expected 'ops-1'",
        "VLAN 5 members are [2], expected [2, 4]",
    ]


def test_verify_missing_vlan() -> None:
    change = VlanChange(action="add_modify", vlan_id=5, name="v", members=frozenset({1}))
    assert verify_vlan_change(SwitchInfo(), change) == ["VLAN 5 missing from read-back"]


def test_verify_delete() -> None:
    change = VlanChange(action="delete", vlan_id=5, name="v")
    assert verify_vlan_change(SwitchInfo(), change) == []
    still_there = SwitchInfo(vlans=[Vlan(name="v", vlan_id=5)])
    assert verify_vlan_change(still_there, change) == ["VLAN 5 still present"]
