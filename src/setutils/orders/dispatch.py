"""
Venue dispatcher: classify exchange orders and assemble one settlement buffer.

Algorithm
1) Classify every order into exactly one Venue. Typed models carry their venue as
   a class tag; plain mappings are matched structurally (every required field of
   exactly one venue model present, under its snake_case or camelCase name) and
   then validated into that model.
2) Bucket orders per venue, preserving their relative input order.
3) Walk CANONICAL_VENUE_ORDER and append each non-empty bucket's venue range.
   Empty venues contribute nothing, not even a header: the on-chain decoder
   infers the venue set from the headers present.

Classification finishes for all orders before any encoding starts, so a bad order
anywhere in the input yields an error and no output.
"""

from __future__ import annotations

import logging
from collections.abc import Callable, Mapping, Sequence
from types import MappingProxyType
from typing import Any

from eth_utils import is_address
from pydantic import BaseModel

from setutils.core.encoding import concat, to_hex
from setutils.core.errors import EncodingError, UnclassifiableOrderError
from setutils.core.grammar import CANONICAL_VENUE_ORDER, Venue, venue_name
from setutils.core.schema import EXCHANGE_ORDER_MODELS, ExchangeOrder, required_field_names

from .kyber import generate_kyber_trades_buffer
from .taker_wallet import generate_taker_wallet_orders_buffer
from .zero_ex import generate_zero_ex_orders_buffer

__all__ = [
    "VENUE_ENCODERS",
    "classify_order",
    "coerce_order",
    "bucket_orders",
    "serialize_orders_buffer",
    "serialize_orders",
]

logger = logging.getLogger(__name__)

VenueEncoder = Callable[[str, int, Sequence[Any]], bytes]

VENUE_ENCODERS: Mapping[Venue, VenueEncoder] = MappingProxyType(
    {
        Venue.ZERO_EX: generate_zero_ex_orders_buffer,
        Venue.KYBER: generate_kyber_trades_buffer,
        Venue.TAKER_WALLET: generate_taker_wallet_orders_buffer,
    }
)

_MODEL_BY_VENUE: Mapping[Venue, type[BaseModel]] = MappingProxyType(
    {model.venue: model for model in EXCHANGE_ORDER_MODELS}  # type: ignore[attr-defined]
)

_REQUIRED_FIELDS: Mapping[Venue, tuple[frozenset[str], ...]] = MappingProxyType(
    {venue: required_field_names(model) for venue, model in _MODEL_BY_VENUE.items()}
)


def _structural_matches(order: Mapping[str, Any]) -> list[Venue]:
    keys = set(order.keys())
    return [
        venue
        for venue in CANONICAL_VENUE_ORDER
        if all(names & keys for names in _REQUIRED_FIELDS[venue])
    ]


def classify_order(order: ExchangeOrder | Mapping[str, Any]) -> Venue:
    """
    Determine the venue an order belongs to.

    Args:
        order: A venue model instance, or a mapping of order fields.

    Returns:
        Venue: The single matching venue.

    Raises:
        UnclassifiableOrderError: If the order matches no venue shape or more
            than one, or is neither a model nor a mapping.
    """
    if isinstance(order, EXCHANGE_ORDER_MODELS):
        return order.venue  # type: ignore[union-attr]
    if isinstance(order, Mapping):
        matches = _structural_matches(order)
        if len(matches) == 1:
            return matches[0]
        if not matches:
            raise UnclassifiableOrderError(
                f"order matches no venue shape (fields: {sorted(order.keys())})"
            )
        raise UnclassifiableOrderError(
            "order matches several venue shapes: "
            + ", ".join(venue_name(v) for v in matches)
        )
    raise UnclassifiableOrderError(f"cannot classify order of type {type(order).__name__}")


def coerce_order(order: ExchangeOrder | Mapping[str, Any]) -> tuple[Venue, ExchangeOrder]:
    """
    Classify an order and return it as its venue model.

    Raises:
        UnclassifiableOrderError: See classify_order.
        pydantic.ValidationError: If a mapping has the right shape but invalid values.
    """
    venue = classify_order(order)
    if isinstance(order, BaseModel):
        return venue, order  # type: ignore[return-value]
    return venue, _MODEL_BY_VENUE[venue].model_validate(dict(order))  # type: ignore[return-value]


def bucket_orders(
    orders: Sequence[ExchangeOrder | Mapping[str, Any]],
) -> dict[Venue, list[ExchangeOrder]]:
    """Group orders per venue (keys in canonical order), keeping input order within a venue."""
    buckets: dict[Venue, list[ExchangeOrder]] = {venue: [] for venue in CANONICAL_VENUE_ORDER}
    for order in orders:
        venue, model = coerce_order(order)
        buckets[venue].append(model)
    return buckets


def serialize_orders_buffer(
    payment_token: str,
    payment_amount: int,
    orders: Sequence[ExchangeOrder | Mapping[str, Any]],
) -> bytes:
    """
    Serialize orders from every venue into one buffer.

    Args:
        payment_token (str): Token the issuer pays with (the maker token).
        payment_amount (int): Amount of payment token available to the venues.
        orders: Orders from any venue, in any order.

    Returns:
        bytes: Concatenated venue ranges in canonical venue order.

    Raises:
        EncodingError: If payment_token is not a 20-byte address.
        UnclassifiableOrderError: See classify_order.
    """
    if not isinstance(payment_token, str) or not is_address(payment_token):
        raise EncodingError(f"payment token is not an address: {payment_token!r}")
    buckets = bucket_orders(orders)
    parts: list[bytes] = []
    for venue in CANONICAL_VENUE_ORDER:
        venue_orders = buckets[venue]
        if not venue_orders:
            continue
        logger.debug("encoding %d %s order(s)", len(venue_orders), venue_name(venue))
        # Wallet fills draw no payment token.
        amount = 0 if venue is Venue.TAKER_WALLET else payment_amount
        parts.append(VENUE_ENCODERS[venue](payment_token, amount, venue_orders))
    return concat(parts)


def serialize_orders(
    payment_token: str,
    payment_amount: int,
    orders: Sequence[ExchangeOrder | Mapping[str, Any]],
) -> str:
    """Hex form of serialize_orders_buffer, for contract call data."""
    return to_hex(serialize_orders_buffer(payment_token, payment_amount, orders))
