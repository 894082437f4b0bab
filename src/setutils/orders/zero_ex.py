"""
0x v2 order encoding, hashing, and signing.

Wire layout of one venue range:

    header (5 slots, see setutils.orders.header)
    for each order:
        signature length ‖ order length ‖ maker asset data length ‖
        taker asset data length ‖ fill amount          (5 slots)
        signature                                      (raw, signature length bytes)
        maker ‖ taker ‖ fee recipient ‖ sender ‖
        maker asset amount ‖ taker asset amount ‖
        maker fee ‖ taker fee ‖ expiration ‖ salt      (10 slots)
        maker asset data ‖ taker asset data            (raw)

``order length`` covers the ten slots plus both asset data blobs.

The order hash follows the 0x v2 exchange's EIP-712 domain, which binds the
exchange contract address (``verifyingContract``) in addition to name and version.
"""

from __future__ import annotations

from collections.abc import Sequence
from typing import Final

from setutils.core.constants import ADDRESS_SIZE, ERC20_PROXY_ID, SLOT_SIZE
from setutils.core.eip712 import hash_schema, message_hash
from setutils.core.encoding import (
    byte_length_of,
    concat,
    encode_address,
    encode_big_unsigned,
    hash_string,
    keccak256,
    to_bytes,
    to_hex,
)
from setutils.core.errors import EncodingError
from setutils.core.grammar import Venue, ZeroExSignatureType
from setutils.core.schema import ZeroExOrder, ZeroExSignedFillOrder
from setutils.core.signing import Signer, sign

from .header import generate_exchange_order_header

__all__ = [
    "ZERO_EX_DOMAIN_NAME",
    "ZERO_EX_DOMAIN_VERSION",
    "generate_zero_ex_orders_buffer",
    "zero_ex_order_to_buffer",
    "generate_zero_ex_exchange_wrapper_order",
    "encode_erc20_asset_data",
    "extract_address_from_asset_data",
    "generate_zero_ex_order",
    "zero_ex_domain_hash",
    "zero_ex_order_struct_hash",
    "zero_ex_order_hash",
    "sign_zero_ex_order",
    "generate_zero_ex_signed_fill_order",
]

ZERO_EX_DOMAIN_NAME: Final[str] = "0x Protocol"
ZERO_EX_DOMAIN_VERSION: Final[str] = "2"

_ZERO_EX_DOMAIN_SCHEMA: Final[tuple[str, ...]] = (
    "EIP712Domain(",
    "string name,",
    "string version,",
    "address verifyingContract",
    ")",
)

_ZERO_EX_ORDER_SCHEMA: Final[tuple[str, ...]] = (
    "Order(",
    "address makerAddress,",
    "address takerAddress,",
    "address feeRecipientAddress,",
    "address senderAddress,",
    "uint256 makerAssetAmount,",
    "uint256 takerAssetAmount,",
    "uint256 makerFee,",
    "uint256 takerFee,",
    "uint256 expirationTimeSeconds,",
    "uint256 salt,",
    "bytes makerAssetData,",
    "bytes takerAssetData",
    ")",
)

# ============================================================================
# Wire encoding
# ============================================================================


def generate_zero_ex_orders_buffer(
    maker_token_address: str,
    maker_token_amount: int,
    orders: Sequence[ZeroExSignedFillOrder],
) -> bytes:
    """
    Encode signed 0x fill orders as one venue range.

    Args:
        maker_token_address (str): Token used to pay for the orders.
        maker_token_amount (int): Amount of maker token allotted to 0x.
        orders (Sequence[ZeroExSignedFillOrder]): Orders in fill order.

    Returns:
        bytes: Header followed by each order's wrapper encoding.
    """
    body = concat(
        generate_zero_ex_exchange_wrapper_order(order, order.signature, order.fill_amount)
        for order in orders
    )
    header = generate_exchange_order_header(
        Venue.ZERO_EX,
        len(orders),
        maker_token_address,
        maker_token_amount,
        len(body),
    )
    return concat(header) + body


def zero_ex_order_to_buffer(order: ZeroExOrder) -> list[bytes]:
    """Ten 32-byte field slots followed by the raw maker and taker asset data."""
    return [
        encode_address(order.maker_address),
        encode_address(order.taker_address),
        encode_address(order.fee_recipient_address),
        encode_address(order.sender_address),
        encode_big_unsigned(order.maker_asset_amount),
        encode_big_unsigned(order.taker_asset_amount),
        encode_big_unsigned(order.maker_fee),
        encode_big_unsigned(order.taker_fee),
        encode_big_unsigned(order.expiration_time_seconds),
        encode_big_unsigned(order.salt),
        order.maker_asset_data,
        order.taker_asset_data,
    ]


def generate_zero_ex_exchange_wrapper_order(
    order: ZeroExOrder, signature: bytes | str, fill_amount: int
) -> bytes:
    """
    Encode one order the way the 0x exchange wrapper reads it.

    Args:
        order (ZeroExOrder): Order fields.
        signature (bytes | str): Maker signature blob.
        fill_amount (int): Amount to fill.

    Returns:
        bytes: Sub-header, raw signature, then the order buffer.
    """
    raw_signature = to_bytes(signature)
    order_buffer = zero_ex_order_to_buffer(order)
    order_header = [
        encode_big_unsigned(byte_length_of(raw_signature)),
        encode_big_unsigned(byte_length_of(order_buffer)),
        encode_big_unsigned(byte_length_of(order.maker_asset_data)),
        encode_big_unsigned(byte_length_of(order.taker_asset_data)),
        encode_big_unsigned(fill_amount),
    ]
    return concat(order_header + [raw_signature] + order_buffer)


# ============================================================================
# Asset data
# ============================================================================


def encode_erc20_asset_data(token_address: str) -> bytes:
    """ERC20 asset data: proxy id followed by the token address slot (36 bytes)."""
    return ERC20_PROXY_ID + encode_address(token_address)


def extract_address_from_asset_data(asset_data: bytes | str) -> str:
    """
    Decode the token address out of ERC20 asset data.

    Raises:
        EncodingError: If the data is not 36 bytes of ERC20 asset data.
    """
    raw = to_bytes(asset_data)
    if len(raw) != len(ERC20_PROXY_ID) + SLOT_SIZE or not raw.startswith(ERC20_PROXY_ID):
        raise EncodingError(f"not ERC20 asset data: {to_hex(raw)}")
    return to_hex(raw[-ADDRESS_SIZE:])


def generate_zero_ex_order(
    sender_address: str,
    maker_address: str,
    taker_address: str,
    maker_fee: int,
    taker_fee: int,
    maker_asset_amount: int,
    taker_asset_amount: int,
    maker_token_address: str,
    taker_token_address: str,
    salt: int,
    exchange_address: str,
    fee_recipient_address: str,
    expiration_time_seconds: int,
) -> ZeroExOrder:
    """Build an unsigned 0x order trading one ERC20 token for another."""
    return ZeroExOrder(
        sender_address=sender_address,
        maker_address=maker_address,
        taker_address=taker_address,
        maker_fee=maker_fee,
        taker_fee=taker_fee,
        maker_asset_amount=maker_asset_amount,
        taker_asset_amount=taker_asset_amount,
        maker_asset_data=encode_erc20_asset_data(maker_token_address),
        taker_asset_data=encode_erc20_asset_data(taker_token_address),
        salt=salt,
        exchange_address=exchange_address,
        fee_recipient_address=fee_recipient_address,
        expiration_time_seconds=expiration_time_seconds,
    )


# ============================================================================
# Hashing and signing
# ============================================================================


def zero_ex_domain_hash(exchange_address: str) -> bytes:
    """0x v2 domain hash bound to an exchange contract."""
    return keccak256(
        hash_schema(*_ZERO_EX_DOMAIN_SCHEMA)
        + hash_string(ZERO_EX_DOMAIN_NAME)
        + hash_string(ZERO_EX_DOMAIN_VERSION)
        + encode_address(exchange_address)
    )


def zero_ex_order_struct_hash(order: ZeroExOrder) -> bytes:
    return keccak256(
        concat(
            [
                hash_schema(*_ZERO_EX_ORDER_SCHEMA),
                *zero_ex_order_to_buffer(order)[:10],
                keccak256(order.maker_asset_data),
                keccak256(order.taker_asset_data),
            ]
        )
    )


def zero_ex_order_hash(order: ZeroExOrder) -> bytes:
    """Digest the 0x exchange validates the maker signature against."""
    return message_hash(
        zero_ex_order_struct_hash(order),
        domain=zero_ex_domain_hash(order.exchange_address),
    )


def sign_zero_ex_order(order: ZeroExOrder, signer: Signer, timeout: float | None = None) -> str:
    """
    Sign an order as its maker and pack the result in 0x's signature format.

    Returns:
        str: Hex of ``v ‖ r ‖ s ‖ signature type`` (66 bytes, type ETH_SIGN).
    """
    raw = sign(zero_ex_order_hash(order), signer, order.maker_address, timeout=timeout)
    r, s, v = raw[:SLOT_SIZE], raw[SLOT_SIZE : 2 * SLOT_SIZE], raw[2 * SLOT_SIZE :]
    return to_hex(v + r + s + bytes([ZeroExSignatureType.ETH_SIGN]))


def generate_zero_ex_signed_fill_order(
    sender_address: str,
    maker_address: str,
    taker_address: str,
    maker_fee: int,
    taker_fee: int,
    maker_asset_amount: int,
    taker_asset_amount: int,
    maker_token_address: str,
    taker_token_address: str,
    salt: int,
    exchange_address: str,
    fee_recipient_address: str,
    expiration_time_seconds: int,
    fill_amount: int,
    signer: Signer,
    timeout: float | None = None,
) -> ZeroExSignedFillOrder:
    """Build, sign, and attach a fill amount to a 0x order in one step."""
    order = generate_zero_ex_order(
        sender_address,
        maker_address,
        taker_address,
        maker_fee,
        taker_fee,
        maker_asset_amount,
        taker_asset_amount,
        maker_token_address,
        taker_token_address,
        salt,
        exchange_address,
        fee_recipient_address,
        expiration_time_seconds,
    )
    signature = sign_zero_ex_order(order, signer, timeout=timeout)
    return ZeroExSignedFillOrder(
        **order.model_dump(),
        signature=signature,
        fill_amount=fill_amount,
    )
