"""
Pydantic v2 models for exchange orders, issuance orders, and signatures.

All records are immutable value objects: constructed once by the caller (or a
generator in setutils.orders), consumed by a single encode/hash/sign call, and
never mutated. Each exchange order model carries its Venue as a class-level tag,
so dispatch is a type match rather than field probing.

Responsibilities
- Define the venue order shapes (0x signed fill order, Kyber trade, taker wallet
  order) and the ExchangeOrder union.
- Define IssuanceOrder / SignedIssuanceOrder with the list-alignment invariant.
- Define ECSignature, the canonical (v, r, s) triple.
- Expose the structural field sets used to classify untyped mappings.

Style
- Field names are snake_case; camelCase aliases (``makerAddress``) are accepted
  so relayer JSON validates unchanged.
- Addresses normalize to lowercase; byte blobs accept bytes or ``0x`` hex.

Examples:
    >>> from setutils.core.schema import TakerWalletOrder
    >>> order = TakerWalletOrder.model_validate(
    ...     {"takerTokenAddress": "0x871dd7c2b4b25e1aa18728e9d5f2af4c4e431f5c",
    ...      "takerTokenAmount": 10**18}
    ... )
    >>> order.venue.name
    'TAKER_WALLET'
"""

from __future__ import annotations

from typing import ClassVar, Union

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator
from pydantic.alias_generators import to_camel

from .constants import NULL_ADDRESS, SLOT_SIZE
from .grammar import Venue
from .typing import Address, HexBlob, Uint256

__all__ = [
    "ECSignature",
    "ZeroExOrder",
    "ZeroExSignedFillOrder",
    "KyberTrade",
    "TakerWalletOrder",
    "ExchangeOrder",
    "EXCHANGE_ORDER_MODELS",
    "IssuanceOrder",
    "SignedIssuanceOrder",
    "required_field_names",
]

_RECORD_CONFIG = ConfigDict(
    extra="forbid",
    frozen=True,
    alias_generator=to_camel,
    populate_by_name=True,
)


# ============================================================================
# Signatures
# ============================================================================


class ECSignature(BaseModel):
    """
    Canonical elliptic-curve signature triple.

    Attributes:
        v (int): Recovery id, 27 or 28.
        r (bytes): 32-byte big-endian scalar.
        s (bytes): 32-byte big-endian scalar.

    Raises:
        pydantic.ValidationError: If v is not 27/28 or r/s are not 32 bytes.
    """

    model_config = _RECORD_CONFIG

    v: int
    r: HexBlob
    s: HexBlob

    @field_validator("v")
    @classmethod
    def _check_recovery_id(cls, v: int) -> int:
        if v not in (27, 28):
            raise ValueError(f"recovery id must be 27 or 28, got {v}")
        return v

    @field_validator("r", "s")
    @classmethod
    def _check_scalar_width(cls, v: bytes) -> bytes:
        if len(v) != SLOT_SIZE:
            raise ValueError(f"signature scalar must be {SLOT_SIZE} bytes, got {len(v)}")
        return v

    def as_hex_dict(self) -> dict[str, int | str]:
        """Return ``{"v": int, "r": "0x…", "s": "0x…"}`` for JSON boundaries."""
        return {"v": self.v, "r": "0x" + self.r.hex(), "s": "0x" + self.s.hex()}


# ============================================================================
# Exchange orders
# ============================================================================


class ZeroExOrder(BaseModel):
    """
    Unsigned 0x v2 order as relayed by an order book.

    Attributes:
        maker_address, taker_address, fee_recipient_address, sender_address (str):
            Order parties.
        maker_asset_amount, taker_asset_amount (int): Asset amounts in base units.
        maker_fee, taker_fee (int): ZRX fees in base units.
        expiration_time_seconds (int): Unix expiration.
        salt (int): Order salt.
        maker_asset_data, taker_asset_data (bytes): 0x asset proxy encodings.
        exchange_address (str): 0x exchange contract; binds the order hash only.
    """

    model_config = _RECORD_CONFIG

    venue: ClassVar[Venue] = Venue.ZERO_EX

    maker_address: Address
    taker_address: Address
    fee_recipient_address: Address
    sender_address: Address
    maker_asset_amount: Uint256
    taker_asset_amount: Uint256
    maker_fee: Uint256
    taker_fee: Uint256
    expiration_time_seconds: Uint256
    salt: Uint256
    maker_asset_data: HexBlob
    taker_asset_data: HexBlob
    exchange_address: Address = NULL_ADDRESS


class ZeroExSignedFillOrder(ZeroExOrder):
    """
    0x order plus the maker's signature and the amount the issuer wants filled.

    Attributes:
        signature (bytes): 0x signature blob (``v ‖ r ‖ s ‖ type``).
        fill_amount (int): Taker asset amount to fill.
    """

    signature: HexBlob
    fill_amount: Uint256


class KyberTrade(BaseModel):
    """
    Trade routed through the Kyber aggregator.

    Attributes:
        source_token (str): Token sold.
        destination_token (str): Token bought.
        source_token_quantity (int): Amount of source token sold.
        minimum_conversion_rate (int): Lowest acceptable rate (18-decimal fixed point).
        max_destination_quantity (int): Cap on destination tokens received.
    """

    model_config = _RECORD_CONFIG

    venue: ClassVar[Venue] = Venue.KYBER

    source_token: Address
    destination_token: Address
    source_token_quantity: Uint256
    minimum_conversion_rate: Uint256
    max_destination_quantity: Uint256


class TakerWalletOrder(BaseModel):
    """Component the taker supplies directly from their wallet."""

    model_config = _RECORD_CONFIG

    venue: ClassVar[Venue] = Venue.TAKER_WALLET

    taker_token_address: Address
    taker_token_amount: Uint256


ExchangeOrder = Union[ZeroExSignedFillOrder, KyberTrade, TakerWalletOrder]

# One model per venue; the dispatcher classifies mappings against these.
EXCHANGE_ORDER_MODELS: tuple[type[BaseModel], ...] = (
    ZeroExSignedFillOrder,
    KyberTrade,
    TakerWalletOrder,
)


def required_field_names(model: type[BaseModel]) -> tuple[frozenset[str], ...]:
    """
    Required fields of a model, each as the set of names it may appear under.

    Returns:
        tuple[frozenset[str], ...]: One ``{snake_name, camelAlias}`` set per
        required field.

    Examples:
        >>> sorted(map(sorted, required_field_names(TakerWalletOrder)))
        [['takerTokenAddress', 'taker_token_address'], ['takerTokenAmount', 'taker_token_amount']]
    """
    names: list[frozenset[str]] = []
    for name, info in model.model_fields.items():
        if info.is_required():
            names.append(frozenset({name, info.alias or name}))
    return tuple(names)


# ============================================================================
# Issuance orders
# ============================================================================


class IssuanceOrder(BaseModel):
    """
    Off-chain request to mint a Set from its required components.

    Attributes:
        set_address (str): Set token being issued.
        maker_address (str): Order maker (signer).
        maker_token (str): Token the maker pays with.
        relayer_address (str): Relayer receiving fees.
        relayer_token (str): Token fees are paid in.
        quantity (int): Set quantity to issue.
        maker_token_amount (int): Maker token offered.
        expiration (int): Unix expiration.
        maker_relayer_fee (int): Fee paid by the maker.
        taker_relayer_fee (int): Fee paid by the taker.
        salt (int): 256-bit salt (see setutils.orders.issuance.generate_salt).
        required_components (tuple[str, ...]): Component token addresses.
        required_component_amounts (tuple[int, ...]): Amount required per component,
            index-aligned with required_components.

    Raises:
        pydantic.ValidationError: If the two component lists differ in length.
    """

    model_config = _RECORD_CONFIG

    set_address: Address
    maker_address: Address
    maker_token: Address
    relayer_address: Address
    relayer_token: Address
    quantity: Uint256
    maker_token_amount: Uint256
    expiration: Uint256
    maker_relayer_fee: Uint256
    taker_relayer_fee: Uint256
    salt: Uint256
    required_components: tuple[Address, ...] = Field(default_factory=tuple)
    required_component_amounts: tuple[Uint256, ...] = Field(default_factory=tuple)

    @model_validator(mode="after")
    def _check_components_aligned(self) -> IssuanceOrder:
        if len(self.required_components) != len(self.required_component_amounts):
            raise ValueError(
                "required_components and required_component_amounts must have equal length "
                f"(got {len(self.required_components)} and {len(self.required_component_amounts)})"
            )
        return self


class SignedIssuanceOrder(IssuanceOrder):
    """IssuanceOrder together with the maker's canonical signature."""

    signature: ECSignature
