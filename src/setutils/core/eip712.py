"""
EIP-712 structured hashing: domain separator, domain hash, signable message hash.

Mirrors the constants compiled into the settlement contract:

    EIP712_DOMAIN_SEPARATOR_SCHEMA_HASH = keccak256(abi.encodePacked(
        "EIP712Domain(", "string name,", "string version,", ")"))
    EIP712_DOMAIN_HASH = keccak256(abi.encodePacked(
        EIP712_DOMAIN_SEPARATOR_SCHEMA_HASH,
        keccak256(bytes(EIP712_DOMAIN_NAME)),
        keccak256(bytes(EIP712_DOMAIN_VERSION))))
    messageHash = keccak256(abi.encodePacked(EIP191_HEADER, EIP712_DOMAIN_HASH, hashStruct))

Notes:
    - The Set schema string keeps its trailing comma (``string version,)``); the
      on-chain constant was compiled that way.
    - Domain hashes are pure functions of their inputs and are memoized with
      ``functools.lru_cache``; nothing mutable is shared.
    - ``hash_schema`` and ``message_hash(domain=…)`` are reused for other domains
      (the 0x v2 exchange domain in setutils.orders.zero_ex).

Examples:
    >>> from setutils.core.eip712 import domain_hash, domain_separator_schema_hash
    >>> domain_separator_schema_hash().hex()[:8]
    '4c2212af'
    >>> domain_hash().hex()[:8]
    'a8dcc602'
"""

from __future__ import annotations

from functools import lru_cache
from typing import Final

from .constants import EIP191_HEADER, EIP712_DOMAIN_NAME, EIP712_DOMAIN_VERSION, SLOT_SIZE
from .encoding import hash_string, hash_typed, keccak256, to_bytes, to_hex
from .errors import EncodingError
from .grammar import SolidityType

__all__ = [
    "DOMAIN_SEPARATOR_SCHEMA",
    "hash_schema",
    "domain_separator_schema_hash",
    "domain_hash",
    "message_hash",
    "get_eip712_domain_separator_schema_hash",
    "get_eip712_domain_hash",
    "generate_eip712_message_hash",
]

DOMAIN_SEPARATOR_SCHEMA: Final[tuple[str, ...]] = (
    "EIP712Domain(",
    "string name,",
    "string version,",
    ")",
)


def hash_schema(*parts: str) -> bytes:
    """
    Hash a type schema given as the literal fragments the contract packs.

    Args:
        *parts (str): Schema fragments, concatenated without separators.

    Returns:
        bytes: keccak256 of the UTF-8 concatenation.
    """
    return hash_typed([SolidityType.STRING] * len(parts), list(parts))


@lru_cache(maxsize=1)
def domain_separator_schema_hash() -> bytes:
    """Hash of the ``EIP712Domain(string name,string version,)`` schema."""
    return hash_schema(*DOMAIN_SEPARATOR_SCHEMA)


@lru_cache(maxsize=16)
def domain_hash(name: str = EIP712_DOMAIN_NAME, version: str = EIP712_DOMAIN_VERSION) -> bytes:
    """
    Hash binding signatures to a protocol name and version.

    Args:
        name (str): Domain name (default "Set Protocol").
        version (str): Domain version (default "1").

    Returns:
        bytes: 32-byte domain hash.
    """
    return hash_typed(
        [SolidityType.BYTES32, SolidityType.BYTES32, SolidityType.BYTES32],
        [domain_separator_schema_hash(), hash_string(name), hash_string(version)],
    )


def message_hash(struct_hash: bytes | str, domain: bytes | str | None = None) -> bytes:
    """
    Final signable digest: keccak256(0x1901 ‖ domain hash ‖ struct hash).

    Args:
        struct_hash (bytes | str): 32-byte hash of the typed struct.
        domain (bytes | str | None): 32-byte domain hash; defaults to domain_hash().

    Returns:
        bytes: 32-byte digest.

    Raises:
        EncodingError: If either hash is not 32 bytes.
    """
    struct = to_bytes(struct_hash)
    dom = domain_hash() if domain is None else to_bytes(domain)
    for label, value in (("struct hash", struct), ("domain hash", dom)):
        if len(value) != SLOT_SIZE:
            raise EncodingError(f"{label} must be {SLOT_SIZE} bytes, got {len(value)}")
    return keccak256(EIP191_HEADER + dom + struct)


# Hex-returning forms for callers that cross a JSON/contract boundary.


def get_eip712_domain_separator_schema_hash() -> str:
    return to_hex(domain_separator_schema_hash())


def get_eip712_domain_hash() -> str:
    return to_hex(domain_hash())


def generate_eip712_message_hash(struct_hash: bytes | str) -> str:
    return to_hex(message_hash(struct_hash))
