"""
Protocol-wide constants shared by the encoders and the hash engine.

Notes:
    - Slot width and uint256 bounds are fixed by the settlement contract's
      ABI decoder; changing them breaks every encoded buffer.
    - Token unit constants are expressed in base units (e.g., 10**18 wei).
"""

from __future__ import annotations

from typing import Final

__all__ = [
    "SLOT_SIZE",
    "ADDRESS_SIZE",
    "UINT256_MAX",
    "MAX_DIGITS_IN_UNSIGNED_256_INT",
    "NULL_ADDRESS",
    "UNLIMITED_ALLOWANCE_IN_BASE_UNITS",
    "SET_FULL_TOKEN_UNITS",
    "WBTC_FULL_TOKEN_UNITS",
    "WETH_FULL_TOKEN_UNITS",
    "ZERO",
    "EIP191_HEADER",
    "EIP712_DOMAIN_NAME",
    "EIP712_DOMAIN_VERSION",
    "ETH_SIGNED_MESSAGE_PREFIX",
    "ZERO_EX_SNAPSHOT_EXCHANGE_ADDRESS",
    "ZERO_EX_SNAPSHOT_ERC20_PROXY_ADDRESS",
    "ZERO_EX_TOKEN_ADDRESS",
    "ERC20_PROXY_ID",
]

# Width of every ABI slot in bytes.
SLOT_SIZE: Final[int] = 32
ADDRESS_SIZE: Final[int] = 20

UINT256_MAX: Final[int] = 2**256 - 1

# Decimal digits of 2**256 - 1.
MAX_DIGITS_IN_UNSIGNED_256_INT: Final[int] = 78

NULL_ADDRESS: Final[str] = "0x0000000000000000000000000000000000000000"
UNLIMITED_ALLOWANCE_IN_BASE_UNITS: Final[int] = UINT256_MAX
SET_FULL_TOKEN_UNITS: Final[int] = 10**18
WBTC_FULL_TOKEN_UNITS: Final[int] = 10**8
WETH_FULL_TOKEN_UNITS: Final[int] = 10**18
ZERO: Final[int] = 0

# EIP-191 version byte 0x01 prefix for EIP-712 structured data.
EIP191_HEADER: Final[bytes] = b"\x19\x01"
EIP712_DOMAIN_NAME: Final[str] = "Set Protocol"
EIP712_DOMAIN_VERSION: Final[str] = "1"

# Prefix applied by eth_sign before hashing a 32-byte message.
ETH_SIGNED_MESSAGE_PREFIX: Final[bytes] = b"\x19Ethereum Signed Message:\n32"

ZERO_EX_SNAPSHOT_EXCHANGE_ADDRESS: Final[str] = "0x48bacb9266a570d521063ef5dd96e61686dbe788"
ZERO_EX_SNAPSHOT_ERC20_PROXY_ADDRESS: Final[str] = "0x1dc4c1cefef38a777b15aa20260a54e584b16c48"
ZERO_EX_TOKEN_ADDRESS: Final[str] = "0x871dd7c2b4b25e1aa18728e9d5f2af4c4e431f5c"

# bytes4(keccak256("ERC20Token(address)")), the 0x v2 ERC20 asset proxy id.
ERC20_PROXY_ID: Final[bytes] = bytes.fromhex("f47261b0")
