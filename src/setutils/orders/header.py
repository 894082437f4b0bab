"""
Exchange header shared by every venue buffer.

Frozen layout (five 32-byte slots, 160 bytes):

    venue tag ‖ order count ‖ payment token ‖ payment amount ‖ body length

``body length`` is the exact number of bytes that follow the header for this
venue, raw blobs (signatures, asset data) included, so a decoder can skip a
venue's range without parsing it.
"""

from __future__ import annotations

from setutils.core.constants import SLOT_SIZE
from setutils.core.encoding import encode_address, encode_big_unsigned, encode_primitive
from setutils.core.grammar import Venue

__all__ = ["HEADER_SLOTS", "HEADER_LENGTH", "generate_exchange_order_header"]

HEADER_SLOTS = 5
HEADER_LENGTH = HEADER_SLOTS * SLOT_SIZE


def generate_exchange_order_header(
    venue: Venue,
    order_count: int,
    payment_token: str,
    payment_amount: int,
    body_length: int,
) -> list[bytes]:
    """
    Build the header slots for one venue.

    Args:
        venue (Venue): Venue tag.
        order_count (int): Number of orders in the body.
        payment_token (str): Token the issuer pays with.
        payment_amount (int): Amount of payment token allotted to this venue.
        body_length (int): Byte length of the body that follows.

    Returns:
        list[bytes]: Five 32-byte slots.

    Raises:
        EncodingError: If payment_token is not a 20-byte address.
    """
    return [
        encode_primitive(Venue(venue)),
        encode_primitive(order_count),
        encode_address(payment_token),
        encode_big_unsigned(payment_amount),
        encode_primitive(body_length),
    ]
