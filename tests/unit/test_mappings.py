"""Unit tests for the TL-SG108E wire-code tables."""

from __future__ import annotations

import pytest

from napalm_sg108e.model.port import PortSpeed, PortState
from napalm_sg108e.vendor.sg108e.mappings import (
    SPEEDS,
    decode_members,
    decode_speed,
    decode_state,
    encode_member_selectors,
    encode_speed,
)

# ---------------------------------------------------------------------------
# Speed codes
# ---------------------------------------------------------------------------


def test_speed_table_order() -> None:
    assert [s.value for s in SPEEDS] == [
        "down", "Auto", "10MH", "10MF", "100MH", "100MF", "1000MF", "",
    ]


@pytest.mark.parametrize(
    ("code", "speed"),
    [
        (0, PortSpeed.DOWN),
        (1, PortSpeed.AUTO),
        ("4", PortSpeed.M100_HALF),
        ("6", PortSpeed.M1000_FULL),
        (7, PortSpeed.UNSET),
    ],
)
def test_decode_speed(code: int | str, speed: PortSpeed) -> None:
    assert decode_speed(code) is speed


@pytest.mark.parametrize("code", [8, -1, "12"])
def test_decode_speed_out_of_range(code: int | str) -> None:
    with pytest.raises(ValueError):
        decode_speed(code)


def test_encode_speed_accepts_token_and_enum() -> None:
    assert encode_speed("100MH") == 4
    assert encode_speed(PortSpeed.AUTO) == 1


def test_encode_speed_unknown_is_none() -> None:
    assert encode_speed("100M") is None


# ---------------------------------------------------------------------------
# State codes
# ---------------------------------------------------------------------------


def test_decode_state() -> None:
    assert decode_state(0) is PortState.DISABLED
    assert decode_state("1") is PortState.ENABLED


def test_decode_state_rejects_other_codes() -> None:
    with pytest.raises(ValueError):
        decode_state(2)


# ---------------------------------------------------------------------------
# Membership bitmask
# ---------------------------------------------------------------------------


def test_decode_members_all_ports() -> None:
    assert decode_members("FF") == frozenset(range(1, 9))


def test_decode_members_even_ports() -> None:
    assert decode_members("AA") == frozenset({2, 4, 6, 8})


def test_decode_members_empty() -> None:
    assert decode_members("00") == frozenset()


def test_decode_members_accepts_0x_prefix() -> None:
    assert decode_members("0xC") == frozenset({3, 4})
    assert decode_members(" 0x0 ") == frozenset()


def test_decode_members_ignores_high_bits() -> None:
    assert decode_members("0x1FF01") == frozenset({1})


def test_decode_members_rejects_garbage() -> None:
    with pytest.raises(ValueError):
        decode_members("zz")


def test_member_selectors() -> None:
    assert encode_member_selectors({2, 4}) == {
        "selType_1": "2",
        "selType_2": "1",
        "selType_3": "2",
        "selType_4": "1",
        "selType_5": "2",
        "selType_6": "2",
        "selType_7": "2",
        "selType_8": "2",
    }


@pytest.mark.parametrize("mask", ["FF", "AA", "00", "0x24"])
def test_decoded_members_encode_to_same_ports(mask: str) -> None:
    members = decode_members(mask)
    selectors = encode_member_selectors(members)
    selected = {int(key.split("_")[1]) for key, value in selectors.items() if value == "1"}
    assert selected == members


def test_member_selectors_empty() -> None:
    assert set(encode_member_selectors([]).values()) == {"2"}
