"""
Annotated field types used across order and signature schemas.

Provides pydantic-aware aliases so every model validates addresses, uint256
amounts, and byte blobs the same way. This module contains no IO.

Notes:
    - Address values are normalized to lowercase hex; the encoders are
      case-insensitive, but a single canonical form keeps model equality stable.
    - Byte blobs accept raw ``bytes`` or ``0x``-prefixed hex strings.

Examples:
    >>> from pydantic import TypeAdapter
    >>> from setutils.core.typing import Address, Uint256
    >>> TypeAdapter(Address).validate_python("0x871DD7C2B4B25E1AA18728E9D5F2AF4C4E431F5C")
    '0x871dd7c2b4b25e1aa18728e9d5f2af4c4e431f5c'
    >>> TypeAdapter(Uint256).validate_python(10**18)
    1000000000000000000
"""

from __future__ import annotations

from typing import Annotated, Any

from eth_typing import HexAddress, HexStr
from eth_utils import is_address, is_hex, to_bytes, to_normalized_address
from pydantic import AfterValidator, BeforeValidator

from .constants import UINT256_MAX

__all__ = [
    "Address",
    "Uint256",
    "HexBlob",
    "HexAddress",
    "HexStr",
]


def _normalize_address(v: Any) -> HexAddress:
    if isinstance(v, bytes):
        if len(v) != 20:
            raise ValueError(f"address must be 20 bytes, got {len(v)}")
        return to_normalized_address(v)
    if not isinstance(v, str) or not is_address(v):
        raise ValueError(f"not a valid address: {v!r}")
    return to_normalized_address(v)


def _coerce_blob(v: Any) -> bytes:
    if isinstance(v, (bytes, bytearray)):
        return bytes(v)
    if isinstance(v, str):
        if v in ("", "0x"):
            return b""
        if not is_hex(v):
            raise ValueError(f"not a hex string: {v!r}")
        return to_bytes(hexstr=HexStr(v))
    raise ValueError(f"expected bytes or hex string, got {type(v).__name__}")


def _check_uint256(v: int) -> int:
    if v < 0 or v > UINT256_MAX:
        raise ValueError(f"value out of uint256 range: {v}")
    return v


Address = Annotated[str, BeforeValidator(_normalize_address)]
Uint256 = Annotated[int, AfterValidator(_check_uint256)]
HexBlob = Annotated[bytes, BeforeValidator(_coerce_blob)]
