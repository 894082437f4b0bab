"""Taker wallet order encoding."""

from __future__ import annotations

from collections.abc import Sequence

from setutils.core.encoding import concat, encode_address, encode_big_unsigned
from setutils.core.grammar import Venue
from setutils.core.schema import TakerWalletOrder

from .header import generate_exchange_order_header

__all__ = ["generate_taker_wallet_orders_buffer", "taker_wallet_order_to_buffer"]


def generate_taker_wallet_orders_buffer(
    maker_token_address: str,
    maker_token_amount: int,
    orders: Sequence[TakerWalletOrder],
) -> bytes:
    """
    Encode the components a taker fills straight from their wallet.

    Args:
        maker_token_address (str): Token used to pay for the issuance.
        maker_token_amount (int): Payment amount written to the header. The
            dispatcher passes 0: wallet fills consume no maker token.
        orders (Sequence[TakerWalletOrder]): Orders in fill order.

    Returns:
        bytes: Header (160 bytes) + 64 bytes per order.
    """
    body = concat(
        taker_wallet_order_to_buffer(order.taker_token_address, order.taker_token_amount)
        for order in orders
    )
    header = generate_exchange_order_header(
        Venue.TAKER_WALLET,
        len(orders),
        maker_token_address,
        maker_token_amount,
        len(body),
    )
    return concat(header) + body


def taker_wallet_order_to_buffer(taker_token_address: str, taker_token_amount: int) -> bytes:
    return encode_address(taker_token_address) + encode_big_unsigned(taker_token_amount)
