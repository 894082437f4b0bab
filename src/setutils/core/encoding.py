"""
Fixed-width ABI slot encoding, byte-length helpers, and typed packing.

Every scalar the settlement contract reads is a 32-byte slot: right-aligned,
big-endian, zero-padded on the left. Variable-length blobs (signatures, asset
data) are appended raw and self-described by a separate length slot. This module
is zero-IO; keccak comes from ``eth_utils``.

Responsibilities
- Encode primitives (ints, addresses, hex strings, enum tags) into 32-byte slots.
- Encode address slots strictly: exactly 20 bytes, right-aligned.
- Count the un-padded byte length of hex strings and buffers.
- Concatenate buffers and render them as ``0x`` lowercase hex.
- Pack ``(type, value)`` lists the way ``abi.encodePacked`` does for the types the
  hash engine needs, and hash the result.

Notes:
    - ``encode_primitive`` accepts "anything that fits a slot"; amounts that must
      be uint256 go through ``encode_big_unsigned``, which accepts ints only.
    - Hashing always runs over raw bytes, never over their hex text.

Examples:
    >>> from setutils.core.encoding import encode_primitive, byte_length_of, to_hex
    >>> to_hex(encode_primitive(1))[-4:]
    '0001'
    >>> len(encode_primitive("0x871dd7c2b4b25e1aa18728e9d5f2af4c4e431f5c"))
    32
    >>> byte_length_of("0xdeadbeef")
    4
"""

from __future__ import annotations

from collections.abc import Iterable, Sequence
from enum import Enum
from typing import Any

from eth_typing import HexStr
from eth_utils import is_address, is_hex, keccak
from eth_utils import to_bytes as _eth_to_bytes

from .constants import ADDRESS_SIZE, SLOT_SIZE, UINT256_MAX
from .errors import EncodingError
from .grammar import SolidityType

__all__ = [
    "to_bytes",
    "to_hex",
    "encode_primitive",
    "encode_address",
    "encode_big_unsigned",
    "decode_uint",
    "byte_length_of",
    "concat",
    "buffer_array_to_hex",
    "keccak256",
    "hash_string",
    "encode_typed",
    "hash_typed",
]


def to_bytes(value: bytes | bytearray | str) -> bytes:
    """
    Convert a ``0x`` hex string (or bytes) to bytes.

    Args:
        value (bytes | bytearray | str): Raw bytes or hex string. Odd-length hex
            is left-padded with one zero nibble.

    Returns:
        bytes: Decoded bytes.

    Raises:
        EncodingError: If a string is not valid hex.
    """
    if isinstance(value, (bytes, bytearray)):
        return bytes(value)
    if isinstance(value, str):
        if value in ("", "0x"):
            return b""
        if not is_hex(value):
            raise EncodingError(f"not a hex string: {value!r}")
        return _eth_to_bytes(hexstr=HexStr(value))
    raise EncodingError(f"expected bytes or hex string, got {type(value).__name__}")


def to_hex(value: bytes) -> str:
    """Render bytes as ``0x`` + lowercase hex."""
    return "0x" + bytes(value).hex()


def _int_to_slot(value: int) -> bytes:
    if value < 0:
        raise EncodingError(f"value must be non-negative, got {value}")
    if value > UINT256_MAX:
        raise EncodingError(f"value exceeds 256 bits: {value}")
    return value.to_bytes(SLOT_SIZE, "big")


def _pad_left(raw: bytes) -> bytes:
    if len(raw) > SLOT_SIZE:
        raise EncodingError(f"value is {len(raw)} bytes, does not fit a {SLOT_SIZE}-byte slot")
    return raw.rjust(SLOT_SIZE, b"\x00")


def encode_primitive(value: Any) -> bytes:
    """
    Encode a short scalar into a 32-byte right-aligned slot.

    Args:
        value (Any): One of
            - int (including IntEnum tags such as Venue), 0 <= value < 2**256;
            - Enum whose value is an int;
            - ``0x`` hex string (addresses become 20 bytes right-aligned);
            - decimal digit string, encoded as its integer;
            - bytes of length <= 32.

    Returns:
        bytes: Exactly 32 bytes.

    Raises:
        EncodingError: If the value is out of range, too wide, a bool, or of an
            unsupported type.
    """
    if isinstance(value, bool):
        raise EncodingError("booleans are not slot primitives")
    if isinstance(value, Enum) and not isinstance(value, int):
        value = value.value
    if isinstance(value, int):
        return _int_to_slot(int(value))
    if isinstance(value, (bytes, bytearray)):
        return _pad_left(bytes(value))
    if isinstance(value, str):
        if value.startswith(("0x", "0X")):
            return _pad_left(to_bytes(value))
        if value.isascii() and value.isdigit():
            return _int_to_slot(int(value))
        raise EncodingError(f"cannot encode string {value!r} as a slot primitive")
    raise EncodingError(f"unsupported primitive type {type(value).__name__}")


def encode_address(value: bytes | str) -> bytes:
    """
    Encode an address into a 32-byte slot, low 20 bytes.

    Args:
        value (bytes | str): 20 raw bytes or a hex address (any case; mixed case
            must carry a valid checksum).

    Returns:
        bytes: Exactly 32 bytes.

    Raises:
        EncodingError: If the value is not a 20-byte address.
    """
    if isinstance(value, (bytes, bytearray)) and len(value) == ADDRESS_SIZE:
        return _pad_left(bytes(value))
    if isinstance(value, str) and is_address(value):
        return _pad_left(to_bytes(value))
    raise EncodingError(f"not a {ADDRESS_SIZE}-byte address: {value!r}")


def encode_big_unsigned(value: int) -> bytes:
    """
    Encode a uint256 amount into a 32-byte slot.

    Args:
        value (int): Integer with 0 <= value < 2**256.

    Returns:
        bytes: Exactly 32 bytes, big-endian.

    Raises:
        EncodingError: If value is not an int, is negative, or is >= 2**256.
    """
    if isinstance(value, bool) or not isinstance(value, int):
        raise EncodingError(f"expected an unsigned integer, got {type(value).__name__}")
    return _int_to_slot(int(value))


def decode_uint(slot: bytes | str) -> int:
    """
    Decode a 32-byte slot back into an unsigned integer.

    Raises:
        EncodingError: If the slot is not exactly 32 bytes.
    """
    raw = to_bytes(slot)
    if len(raw) != SLOT_SIZE:
        raise EncodingError(f"slot must be {SLOT_SIZE} bytes, got {len(raw)}")
    return int.from_bytes(raw, "big")


def byte_length_of(value: bytes | str | Sequence[bytes]) -> int:
    """
    Count the un-padded byte length of a blob.

    Args:
        value: Hex string, bytes, or a sequence of byte strings (summed).

    Returns:
        int: Number of bytes, never the 32-byte padded size.

    Examples:
        >>> byte_length_of("0x" + "ab" * 65)
        65
        >>> byte_length_of([b"\\x00" * 32, b"\\x01" * 4])
        36
    """
    if isinstance(value, (bytes, bytearray, str)):
        return len(to_bytes(value))
    return sum(len(to_bytes(part)) for part in value)


def concat(byte_strings: Iterable[bytes]) -> bytes:
    """Concatenate buffers in order, with no padding between them."""
    return b"".join(bytes(part) for part in byte_strings)


def buffer_array_to_hex(byte_strings: Iterable[bytes]) -> str:
    """Concatenate buffers and render them as ``0x`` hex."""
    return to_hex(concat(byte_strings))


def keccak256(data: bytes) -> bytes:
    """Keccak-256 over raw bytes."""
    return keccak(primitive=bytes(data))


def hash_string(text: str) -> bytes:
    """Keccak-256 over the UTF-8 bytes of a string."""
    return keccak256(text.encode("utf-8"))


def _encode_bytes32(value: Any) -> bytes:
    raw = to_bytes(value)
    if len(raw) != SLOT_SIZE:
        raise EncodingError(f"bytes32 value must be {SLOT_SIZE} bytes, got {len(raw)}")
    return raw


def _encode_one(kind: SolidityType, value: Any) -> bytes:
    if kind is SolidityType.ADDRESS:
        return encode_address(value)
    if kind in (SolidityType.UINT256, SolidityType.UINT, SolidityType.UINT8):
        return encode_big_unsigned(int(value) if isinstance(value, Enum) else value)
    if kind is SolidityType.BYTES32:
        return _encode_bytes32(value)
    if kind is SolidityType.BYTES:
        return to_bytes(value)
    if kind is SolidityType.STRING:
        if not isinstance(value, str):
            raise EncodingError(f"string value expected, got {type(value).__name__}")
        return value.encode("utf-8")
    if kind is SolidityType.ADDRESS_ARRAY:
        return concat(encode_address(item) for item in value)
    if kind is SolidityType.UINT_ARRAY:
        return concat(encode_big_unsigned(item) for item in value)
    raise EncodingError(f"unsupported solidity type {kind!r}")  # pragma: no cover


def encode_typed(types: Sequence[SolidityType | str], values: Sequence[Any]) -> bytes:
    """
    Pack values according to their Solidity types.

    Args:
        types: Solidity types (enum members or their string values).
        values: Values aligned with ``types``.

    Returns:
        bytes: Packed buffer. Scalars and array elements take 32-byte slots;
        ``string``/``bytes`` are appended raw; arrays carry no length prefix.

    Raises:
        EncodingError: On a length mismatch or any unencodable value.
    """
    if len(types) != len(values):
        raise EncodingError(f"got {len(types)} types for {len(values)} values")
    parts: list[bytes] = []
    for kind, value in zip(types, values):
        try:
            solidity_type = SolidityType(kind)
        except ValueError as exc:
            raise EncodingError(f"unknown solidity type {kind!r}") from exc
        parts.append(_encode_one(solidity_type, value))
    return concat(parts)


def hash_typed(types: Sequence[SolidityType | str], values: Sequence[Any]) -> bytes:
    """Keccak-256 over ``encode_typed(types, values)``."""
    return keccak256(encode_typed(types, values))
