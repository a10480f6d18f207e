"""
Recursive Length Prefix codec.

An item is either a byte string or a list of items. Byte ranges of the
first byte select the form:

- ``0x00-0x7f``: a single byte that is its own encoding
- ``0x80-0xb7``: byte string of 0-55 bytes, length = prefix - 0x80
- ``0xb8-0xbf``: long byte string, prefix - 0xb7 = length of the length
- ``0xc0-0xf7``: list with 0-55 payload bytes, length = prefix - 0xc0
- ``0xf8-0xff``: long list, prefix - 0xf7 = length of the length

Decoding is strict: every item must use its minimal encoding and the
input must contain exactly one item.
"""

from __future__ import annotations

from typing import Iterable, List, Tuple, Union

from .errors import InvalidFieldCount, MalformedRLP

RLPItem = Union[bytes, List["RLPItem"]]

SHORT_STRING_OFFSET = 0x80
LONG_STRING_OFFSET = 0xB7
SHORT_LIST_OFFSET = 0xC0
LONG_LIST_OFFSET = 0xF7
SHORT_MAX_LEN = 55


def encode(item: RLPItem) -> bytes:
    """Encode bytes or a (nested) list of bytes."""
    if isinstance(item, (bytes, bytearray, memoryview)):
        return _encode_bytes(bytes(item))
    if isinstance(item, (list, tuple)):
        return _encode_list(item)
    raise TypeError(f"Cannot RLP encode type: {type(item).__name__}")


def _encode_bytes(data: bytes) -> bytes:
    if len(data) == 1 and data[0] < SHORT_STRING_OFFSET:
        return data
    return _length_prefix(len(data), SHORT_STRING_OFFSET) + data


def _encode_list(items: Iterable[RLPItem]) -> bytes:
    payload = b"".join(encode(item) for item in items)
    return _length_prefix(len(payload), SHORT_LIST_OFFSET) + payload


def _length_prefix(length: int, offset: int) -> bytes:
    if length <= SHORT_MAX_LEN:
        return bytes([offset + length])
    length_bytes = length.to_bytes((length.bit_length() + 7) // 8, "big")
    # 0xb7/0xf7 base: offset + 55
    return bytes([offset + SHORT_MAX_LEN + len(length_bytes)]) + length_bytes


def decode(data: bytes) -> RLPItem:
    """Decode exactly one RLP item; trailing bytes are an error."""
    if not isinstance(data, (bytes, bytearray, memoryview)):
        raise TypeError(f"Cannot RLP decode type: {type(data).__name__}")
    view = memoryview(bytes(data))
    if len(view) == 0:
        raise MalformedRLP("Empty RLP payload")
    try:
        item, end = _decode_item(view, 0)
    except RecursionError as exc:
        raise MalformedRLP("RLP nesting too deep") from exc
    if end != len(view):
        raise MalformedRLP(f"Trailing bytes: decoded {end} of {len(view)} bytes")
    return item


def decode_list(data: bytes, arity: Iterable[int] = ()) -> List[RLPItem]:
    """
    Decode a top-level list.

    If ``arity`` is given, the number of items must be one of its values.
    """
    item = decode(data)
    if not isinstance(item, list):
        raise MalformedRLP("Expected RLP list, got byte string")
    allowed = tuple(arity)
    if allowed and len(item) not in allowed:
        raise InvalidFieldCount(len(item), allowed)
    return item


def _decode_item(data: memoryview, offset: int) -> Tuple[RLPItem, int]:
    prefix = data[offset]

    if prefix < SHORT_STRING_OFFSET:
        return bytes(data[offset : offset + 1]), offset + 1

    if prefix < SHORT_LIST_OFFSET:
        start, length = _decode_length(data, offset, SHORT_STRING_OFFSET)
        end = start + length
        if length == 1 and data[start] < SHORT_STRING_OFFSET:
            raise MalformedRLP("Non-canonical: single byte below 0x80 has a prefix")
        return bytes(data[start:end]), end

    start, length = _decode_length(data, offset, SHORT_LIST_OFFSET)
    end = start + length
    items: List[RLPItem] = []
    cursor = start
    while cursor < end:
        child, cursor = _decode_item(data, cursor)
        items.append(child)
    if cursor != end:
        raise MalformedRLP("List payload length does not match its items")
    return items, end


def _decode_length(data: memoryview, offset: int, base: int) -> Tuple[int, int]:
    """Return (payload start, payload length) for a string or list prefix."""
    prefix = data[offset]
    if prefix - base <= SHORT_MAX_LEN:
        start = offset + 1
        length = prefix - base
    else:
        length_of_length = prefix - base - SHORT_MAX_LEN
        start = offset + 1 + length_of_length
        if start > len(data):
            raise MalformedRLP("Truncated length prefix")
        length_bytes = data[offset + 1 : start]
        if length_bytes[0] == 0:
            raise MalformedRLP("Non-canonical: leading zeros in length")
        length = int.from_bytes(length_bytes, "big")
        if length <= SHORT_MAX_LEN:
            raise MalformedRLP("Non-canonical: long form used for short payload")
    if start + length > len(data):
        raise MalformedRLP(
            f"Truncated payload: need {length} bytes, have {len(data) - start}"
        )
    return start, length
