"""Kyber trade encoding."""

from __future__ import annotations

from collections.abc import Sequence

from setutils.core.encoding import concat, encode_address, encode_big_unsigned
from setutils.core.grammar import Venue
from setutils.core.schema import KyberTrade

from .header import generate_exchange_order_header

__all__ = ["generate_kyber_trades_buffer", "kyber_trade_to_buffer"]


def generate_kyber_trades_buffer(
    maker_token_address: str,
    maker_token_amount: int,
    trades: Sequence[KyberTrade],
) -> bytes:
    """
    Encode Kyber trades as one venue range: header followed by every trade.

    Args:
        maker_token_address (str): Token used to pay for the trades.
        maker_token_amount (int): Amount of maker token allotted to Kyber.
        trades (Sequence[KyberTrade]): Trades in execution order.

    Returns:
        bytes: Header (160 bytes) + 160 bytes per trade.
    """
    body = concat(kyber_trade_to_buffer(trade) for trade in trades)
    header = generate_exchange_order_header(
        Venue.KYBER,
        len(trades),
        maker_token_address,
        maker_token_amount,
        len(body),
    )
    return concat(header) + body


def kyber_trade_to_buffer(trade: KyberTrade) -> bytes:
    return concat(
        [
            encode_address(trade.source_token),
            encode_address(trade.destination_token),
            encode_big_unsigned(trade.source_token_quantity),
            encode_big_unsigned(trade.minimum_conversion_rate),
            encode_big_unsigned(trade.max_destination_quantity),
        ]
    )
