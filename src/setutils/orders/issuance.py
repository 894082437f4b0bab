"""
Issuance order generation, hashing, and signing.

Struct encoding (hashed with keccak-256) is the ordered field tuple

    set ‖ maker ‖ maker token ‖ relayer ‖ relayer token ‖
    quantity ‖ maker token amount ‖ expiration ‖
    maker relayer fee ‖ taker relayer fee ‖ salt ‖
    required components[0..n) ‖ required component amounts[0..n)

with every address and integer in its own 32-byte slot and each list written as
its elements' slots back to back, without a length prefix. The signable digest
is that struct hash wrapped by setutils.core.eip712.message_hash.
"""

from __future__ import annotations

import math
import random
import secrets
import time

from setutils.config import UtilsSettings
from setutils.core.eip712 import domain_hash, message_hash
from setutils.core.encoding import encode_typed, keccak256, to_hex
from setutils.core.grammar import SolidityType
from setutils.core.schema import IssuanceOrder, SignedIssuanceOrder
from setutils.core.signing import Signer, sign_message

__all__ = [
    "generate_timestamp",
    "generate_salt",
    "issuance_order_encoding",
    "issuance_order_hex",
    "issuance_order_struct_hash",
    "issuance_order_digest",
    "sign_issuance_order",
]

_ISSUANCE_ORDER_TYPES: tuple[SolidityType, ...] = (
    SolidityType.ADDRESS,
    SolidityType.ADDRESS,
    SolidityType.ADDRESS,
    SolidityType.ADDRESS,
    SolidityType.ADDRESS,
    SolidityType.UINT256,
    SolidityType.UINT256,
    SolidityType.UINT256,
    SolidityType.UINT256,
    SolidityType.UINT256,
    SolidityType.UINT256,
    SolidityType.ADDRESS_ARRAY,
    SolidityType.UINT_ARRAY,
)


def generate_timestamp(
    minutes: float | None = None,
    now: float | None = None,
    settings: UtilsSettings | None = None,
) -> int:
    """
    Expiration timestamp ``minutes`` from now, in whole seconds.

    Args:
        minutes: Lifetime in minutes; defaults to settings.default_expiration_minutes.
        now: Current Unix time in seconds; defaults to time.time().
        settings: Settings supplying the default lifetime.
    """
    if minutes is None:
        minutes = (settings or UtilsSettings.load()).default_expiration_minutes
    current = time.time() if now is None else now
    return math.floor(current + minutes * 60)


def generate_salt(rng: random.Random | None = None) -> int:
    """
    Uniform 256-bit salt.

    Args:
        rng: Optional seeded generator for reproducible salts; the default draws
            from the OS CSPRNG.
    """
    if rng is not None:
        return rng.getrandbits(256)
    return secrets.randbits(256)


def _order_values(order: IssuanceOrder) -> list[object]:
    return [
        order.set_address,
        order.maker_address,
        order.maker_token,
        order.relayer_address,
        order.relayer_token,
        order.quantity,
        order.maker_token_amount,
        order.expiration,
        order.maker_relayer_fee,
        order.taker_relayer_fee,
        order.salt,
        list(order.required_components),
        list(order.required_component_amounts),
    ]


def issuance_order_encoding(order: IssuanceOrder) -> bytes:
    """Un-hashed struct encoding of an issuance order."""
    return encode_typed(_ISSUANCE_ORDER_TYPES, _order_values(order))


def issuance_order_hex(order: IssuanceOrder) -> str:
    return to_hex(issuance_order_encoding(order))


def issuance_order_struct_hash(order: IssuanceOrder) -> bytes:
    return keccak256(issuance_order_encoding(order))


def issuance_order_digest(order: IssuanceOrder, settings: UtilsSettings | None = None) -> bytes:
    """
    Signable digest of an issuance order.

    Args:
        order (IssuanceOrder): Order to hash.
        settings (UtilsSettings | None): Supplies the EIP-712 domain name/version;
            the Set Protocol defaults apply when omitted.

    Returns:
        bytes: 32-byte digest.
    """
    if settings is None:
        domain = domain_hash()
    else:
        domain = domain_hash(settings.eip712_domain_name, settings.eip712_domain_version)
    return message_hash(issuance_order_struct_hash(order), domain=domain)


def sign_issuance_order(
    order: IssuanceOrder,
    signer: Signer,
    settings: UtilsSettings | None = None,
) -> SignedIssuanceOrder:
    """
    Have the maker sign an issuance order's digest.

    Args:
        order (IssuanceOrder): Order to sign; signed as ``order.maker_address``.
        signer (Signer): Key-holding collaborator.
        settings (UtilsSettings | None): Domain and signer timeout.

    Returns:
        SignedIssuanceOrder: The order fields plus the canonical signature.

    Raises:
        SignerError: If the signer fails or times out; never retried.
    """
    timeout = settings.signer_timeout_seconds if settings is not None else None
    signature = sign_message(
        issuance_order_digest(order, settings),
        signer,
        order.maker_address,
        timeout=timeout,
    )
    return SignedIssuanceOrder(**order.model_dump(), signature=signature)
