import pytest

from core.errors import InvalidHex, InvalidNumber
from core.hexutil import (
    hex_to_bytes,
    int_to_hex,
    is_valid_hex,
    to_canonical_bytes,
    to_int,
)


@pytest.mark.parametrize("value", ["0x", "0x0", "0xdeadBEEF", "0x186a0"])
def test_is_valid_hex_accepts(value):
    assert is_valid_hex(value)


@pytest.mark.parametrize("value", ["", "deadbeef", "0xZZZ", "0X12", "0x12 ", 12, None])
def test_is_valid_hex_rejects(value):
    assert not is_valid_hex(value)


def test_to_canonical_bytes_zero_is_empty():
    assert to_canonical_bytes(0) == b""
    assert to_canonical_bytes("0x0") == b""
    assert to_canonical_bytes("0x") == b""


def test_to_canonical_bytes_strips_leading_zeros():
    assert to_canonical_bytes("0x0001") == b"\x01"
    assert to_canonical_bytes(100000) == bytes.fromhex("0186a0")
    assert to_canonical_bytes("0x186a0") == bytes.fromhex("0186a0")


def test_to_int_accepts_integral_float():
    assert to_int(100000.0) == 100000


@pytest.mark.parametrize("value", [0.5, 100000.5, -1, True, b"\x01", None])
def test_to_int_rejects_invalid_numbers(value):
    with pytest.raises(InvalidNumber):
        to_int(value, "gasLimit")


def test_to_int_rejects_bad_hex():
    with pytest.raises(InvalidHex) as exc:
        to_int("0xZZZ", "gasLimit")
    assert exc.value.field == "gasLimit"


def test_hex_to_bytes_pads_odd_length():
    assert hex_to_bytes("0x123") == b"\x01\x23"
    assert hex_to_bytes("0x") == b""


def test_hex_to_bytes_requires_prefix():
    with pytest.raises(InvalidHex):
        hex_to_bytes("1234")


def test_int_to_hex_is_minimal():
    assert int_to_hex(27) == "0x1b"
    assert int_to_hex(0) == "0x0"
