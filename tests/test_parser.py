import pytest
from eth_account import Account

from chain.parser import parse_raw_transaction
from core import rlp
from core.errors import InvalidFieldCount, InvalidHex, MalformedRLP

from vectors import (
    NICK_FACTORY_DATA,
    NICK_FACTORY_RAW_TX,
    NICK_FACTORY_SIG,
    RECIPIENT,
)

RECIPIENT_BYTES = bytes.fromhex(RECIPIENT[2:])


def _int(value: int) -> bytes:
    return value.to_bytes((value.bit_length() + 7) // 8, "big")


def _unsigned(
    nonce=0,
    gas_price=1000000000,
    gas_limit=100000,
    to=RECIPIENT_BYTES,
    value=1000000000000000,
    data=b"\x12\x34",
):
    fields = [_int(nonce), _int(gas_price), _int(gas_limit), to, _int(value), data]
    return "0x" + rlp.encode(fields).hex()


def test_parse_known_keyless_deployment():
    parsed = parse_raw_transaction(NICK_FACTORY_RAW_TX)
    assert parsed.nonce == 0
    assert parsed.gas_limit == 100000
    assert parsed.gas_price == 100000000000
    assert parsed.value == 0
    assert parsed.data == NICK_FACTORY_DATA
    assert parsed.v == "0x1b"
    assert parsed.r == NICK_FACTORY_SIG
    assert parsed.s == NICK_FACTORY_SIG
    assert parsed.to is None
    assert parsed.is_contract_creation


def test_parse_unsigned_transaction():
    parsed = parse_raw_transaction(_unsigned())
    assert parsed.nonce == 0
    assert parsed.gas_price == 1000000000
    assert parsed.gas_limit == 100000
    assert parsed.to == RECIPIENT
    assert parsed.value == 1000000000000000
    assert parsed.data == "0x1234"
    assert parsed.v is None and parsed.r is None and parsed.s is None
    assert not parsed.is_signed


def test_parse_non_zero_nonce():
    assert parse_raw_transaction(_unsigned(nonce=10)).nonce == 10


def test_parse_long_data():
    data = bytes.fromhex("1234" * 1000)
    parsed = parse_raw_transaction(_unsigned(data=data))
    assert parsed.data == "0x" + "1234" * 1000
    assert len(parsed.data) == 4002


def test_parse_contract_creation_without_signature():
    parsed = parse_raw_transaction(_unsigned(to=b"", data=b"\x60\x80"))
    assert parsed.to is None
    assert parsed.data == "0x6080"


def test_parse_transaction_signed_by_wallet():
    account = Account.create()
    signed = account.sign_transaction(
        {
            "nonce": 7,
            "to": RECIPIENT,
            "value": 123,
            "gas": 21000,
            "gasPrice": 1,
            "data": b"",
            "chainId": 1,
        }
    )
    parsed = parse_raw_transaction("0x" + bytes(signed.raw_transaction).hex())
    assert parsed.nonce == 7
    assert parsed.to == RECIPIENT
    assert parsed.value == 123
    assert parsed.data == "0x"
    assert parsed.v in ("0x25", "0x26")
    assert parsed.r == hex(signed.r)
    assert parsed.s == hex(signed.s)


def test_parse_to_dict():
    result = parse_raw_transaction(NICK_FACTORY_RAW_TX).to_dict()
    assert list(result) == [
        "nonce",
        "gasPrice",
        "gasLimit",
        "to",
        "value",
        "data",
        "v",
        "r",
        "s",
    ]


@pytest.mark.parametrize("raw", ["not-a-hex-string", "f8a580", "", "0xZZ"])
def test_parse_rejects_invalid_hex(raw):
    with pytest.raises(InvalidHex, match="Invalid hex value for rawTransaction"):
        parse_raw_transaction(raw)


def test_parse_rejects_trailing_bytes():
    with pytest.raises(MalformedRLP, match="Trailing"):
        parse_raw_transaction(NICK_FACTORY_RAW_TX + "00")


def test_parse_rejects_truncated_payload():
    with pytest.raises(MalformedRLP):
        parse_raw_transaction(NICK_FACTORY_RAW_TX[:-2])


def test_parse_rejects_wrong_field_count():
    raw = "0x" + rlp.encode([b"\x01"] * 5).hex()
    with pytest.raises(InvalidFieldCount):
        parse_raw_transaction(raw)


def test_parse_rejects_deeply_nested_payload():
    nested = rlp.encode([])
    for _ in range(6000):
        nested = rlp._length_prefix(len(nested), rlp.SHORT_LIST_OFFSET) + nested
    with pytest.raises(MalformedRLP, match="nesting too deep"):
        parse_raw_transaction("0x" + nested.hex())
