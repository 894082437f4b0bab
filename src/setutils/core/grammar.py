"""
Canonical venue, ABI type, and protocol enums.

Defines the venue tags written into exchange headers, the fixed venue emission
order, the Solidity types understood by the typed packer, and the small protocol
enums (0x signature types, rebalancing states).

Design principles
-----------------
1) Venue tags are small positive integers. ``0`` is reserved as "unset" and is
   never a member, so a zeroed slot can never decode to a valid venue.
2) Venue order is an explicit tuple, never a mapping iteration. The on-chain
   decoder walks venues in this order.
3) Tag <-> name lookups are total functions over the enum; no mutable module
   state.

Examples
--------
>>> from setutils.core.grammar import Venue, venue_from_value, venue_name
>>> venue_from_value(2) is Venue.KYBER
True
>>> venue_from_value("taker_wallet") is Venue.TAKER_WALLET
True
>>> venue_name(Venue.ZERO_EX)
'zero_ex'
"""

from __future__ import annotations

from enum import Enum, IntEnum
from typing import Final

__all__ = [
    "Venue",
    "CANONICAL_VENUE_ORDER",
    "venue_name",
    "venue_from_value",
    "SolidityType",
    "ZeroExSignatureType",
    "RebalancingState",
]


class Venue(IntEnum):
    """
    Execution venues an issuance can be filled against.

    Serialized values appear in:
      - slot 0 of every exchange header (see setutils.orders.header)

    Notes:
      ZERO_EX: relayed 0x v2 orders carrying a maker signature.
      KYBER: trades routed through the Kyber quoting aggregator.
      TAKER_WALLET: tokens the taker supplies straight from their wallet.
    """

    ZERO_EX = 1
    KYBER = 2
    TAKER_WALLET = 3


CANONICAL_VENUE_ORDER: Final[tuple[Venue, ...]] = (
    Venue.ZERO_EX,
    Venue.KYBER,
    Venue.TAKER_WALLET,
)


def venue_name(venue: Venue) -> str:
    """
    Get the lower_snake name of a venue.

    Args:
      venue (Venue): Venue enum.

    Returns:
      str: Name such as "zero_ex".
    """
    return Venue(venue).name.lower()


def venue_from_value(value: int | str | Venue) -> Venue:
    """
    Parse a venue tag or name into a Venue.

    Args:
      value (int | str | Venue): Integer tag, lower_snake or UPPER_SNAKE name.

    Returns:
      Venue: Parsed venue.

    Raises:
      ValueError: If the value names no venue (including the reserved tag 0).
    """
    if isinstance(value, Venue):
        return value
    if isinstance(value, str):
        try:
            return Venue[value.strip().upper()]
        except KeyError as exc:
            raise ValueError(f"unknown venue name {value!r}") from exc
    return Venue(value)


class SolidityType(Enum):
    """ABI types accepted by setutils.core.encoding.encode_typed."""

    ADDRESS = "address"
    UINT256 = "uint256"
    UINT8 = "uint8"
    UINT = "uint"
    BYTES32 = "bytes32"
    BYTES = "bytes"
    STRING = "string"
    ADDRESS_ARRAY = "address[]"
    UINT_ARRAY = "uint256[]"


class ZeroExSignatureType(IntEnum):
    """Trailing signature-type byte of 0x v2 signatures."""

    ILLEGAL = 0
    INVALID = 1
    EIP712 = 2
    ETH_SIGN = 3


class RebalancingState(IntEnum):
    """Lifecycle states of a rebalancing set token."""

    DEFAULT = 0
    PROPOSAL = 1
    REBALANCE = 2
    DRAWDOWN = 3
