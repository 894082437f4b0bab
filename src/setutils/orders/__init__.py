"""
Venue order encoders and the multi-venue dispatcher.

Each venue module turns its orders into one contiguous range
``header ‖ body`` (see ``header``); ``dispatch`` classifies mixed orders and
concatenates the ranges in canonical venue order (0x, Kyber, taker wallet).
``issuance`` and ``rebalancing`` cover the remaining order-side helpers.
"""

from __future__ import annotations

from .dispatch import classify_order, serialize_orders, serialize_orders_buffer
from .kyber import generate_kyber_trades_buffer
from .taker_wallet import generate_taker_wallet_orders_buffer
from .zero_ex import generate_zero_ex_orders_buffer

__all__ = [
    "classify_order",
    "serialize_orders",
    "serialize_orders_buffer",
    "generate_kyber_trades_buffer",
    "generate_taker_wallet_orders_buffer",
    "generate_zero_ex_orders_buffer",
]
