"""Unit tests for napalm_sg108e.parser.device."""

from __future__ import annotations

import pathlib

from napalm_sg108e.parser.device import parse_device_info

FIXTURES = pathlib.Path(__file__).parent.parent / "fixtures"


def _load(name: str) -> str:
    return (FIXTURES / name).read_text(encoding="utf-8")


def test_parse_device_info_fields() -> None:
    info = parse_device_info(_load("system_info.html"))
    assert info is not None
    assert info.hardware == "TL-SG108E 3.0"
    assert info.firmware == "1.0.0 Build 20171214 Rel.70905"
    assert info.name == "Switch-007"
    assert info.mac == "70:4F:57:35:BE:36"
    assert info.ip == "192.168.178.101"
    assert info.netmask == "255.255.0.0"
    assert info.gateway == "192.168.178.1"


def test_parse_device_info_reads_only_first_script() -> None:
    info = parse_device_info(_load("system_info.html"))
    assert info is not None
    assert info.hardware != "decoy"


def test_parse_device_info_missing_keys_are_none() -> None:
    html = '<script>var info_ds = {descriStr:[\n"sw1"\n]};</script>'
    info = parse_device_info(html)
    assert info is not None
    assert info.name == "sw1"
    assert info.mac is None
    assert info.hardware is None


def test_parse_device_info_no_script() -> None:
    assert parse_device_info("<html><body>Login</body></html>") is None
