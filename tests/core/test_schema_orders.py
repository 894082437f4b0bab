from __future__ import annotations

import pytest
from pydantic import ValidationError

from setutils.core.constants import NULL_ADDRESS
from setutils.core.grammar import Venue
from setutils.core.schema import (
    ECSignature,
    IssuanceOrder,
    KyberTrade,
    SignedIssuanceOrder,
    TakerWalletOrder,
    ZeroExSignedFillOrder,
    required_field_names,
)

TOKEN_A = "0x871dd7c2b4b25e1aa18728e9d5f2af4c4e431f5c"
TOKEN_B = "0x1dc4c1cefef38a777b15aa20260a54e584b16c48"


def _issuance_fields(**overrides):
    fields = dict(
        set_address=TOKEN_A,
        maker_address="0x5409ed021d9299bf6814279a6a1411a7e866a631",
        maker_token=TOKEN_B,
        relayer_address=NULL_ADDRESS,
        relayer_token=TOKEN_A,
        quantity=10**18,
        maker_token_amount=10**18,
        expiration=1541723033,
        maker_relayer_fee=0,
        taker_relayer_fee=0,
        salt=1,
        required_components=[TOKEN_A],
        required_component_amounts=[10**18],
    )
    fields.update(overrides)
    return fields


def test_camel_case_aliases_validate() -> None:
    trade = KyberTrade.model_validate(
        {
            "sourceToken": TOKEN_B,
            "destinationToken": TOKEN_A,
            "sourceTokenQuantity": 10,
            "minimumConversionRate": 1,
            "maxDestinationQuantity": 10,
        }
    )
    assert trade.source_token == TOKEN_B
    assert trade.venue is Venue.KYBER


def test_addresses_are_normalized_to_lowercase() -> None:
    order = TakerWalletOrder(taker_token_address=TOKEN_A.upper().replace("0X", "0x"), taker_token_amount=1)
    assert order.taker_token_address == TOKEN_A


def test_invalid_address_and_negative_amount_are_rejected() -> None:
    with pytest.raises(ValidationError):
        TakerWalletOrder(taker_token_address="0x1234", taker_token_amount=1)
    with pytest.raises(ValidationError):
        TakerWalletOrder(taker_token_address=TOKEN_A, taker_token_amount=-1)
    with pytest.raises(ValidationError):
        TakerWalletOrder(taker_token_address=TOKEN_A, taker_token_amount=2**256)


def test_records_are_frozen_and_closed() -> None:
    order = TakerWalletOrder(taker_token_address=TOKEN_A, taker_token_amount=1)
    with pytest.raises(ValidationError):
        order.taker_token_amount = 2  # type: ignore[misc]
    with pytest.raises(ValidationError):
        TakerWalletOrder(taker_token_address=TOKEN_A, taker_token_amount=1, extra=1)


def test_zero_ex_blobs_accept_hex_strings() -> None:
    order = ZeroExSignedFillOrder(
        maker_address=TOKEN_A,
        taker_address=NULL_ADDRESS,
        fee_recipient_address=NULL_ADDRESS,
        sender_address=NULL_ADDRESS,
        maker_asset_amount=1,
        taker_asset_amount=1,
        maker_fee=0,
        taker_fee=0,
        expiration_time_seconds=1,
        salt=1,
        maker_asset_data="0xf47261b0",
        taker_asset_data=b"",
        signature="0x" + "01" * 66,
        fill_amount=1,
    )
    assert order.maker_asset_data == bytes.fromhex("f47261b0")
    assert order.taker_asset_data == b""
    assert len(order.signature) == 66
    assert order.exchange_address == NULL_ADDRESS


def test_issuance_component_lists_must_align() -> None:
    IssuanceOrder(**_issuance_fields())
    with pytest.raises(ValidationError):
        IssuanceOrder(**_issuance_fields(required_component_amounts=[]))


def test_signed_issuance_order_carries_signature() -> None:
    sig = ECSignature(v=28, r=b"\x01" * 32, s="0x" + "02" * 32)
    signed = SignedIssuanceOrder(**_issuance_fields(), signature=sig)
    assert signed.signature.s == b"\x02" * 32
    assert signed.signature.as_hex_dict()["r"] == "0x" + "01" * 32


@pytest.mark.parametrize(
    "fields",
    [
        dict(v=29, r=b"\x01" * 32, s=b"\x02" * 32),
        dict(v=27, r=b"\x01" * 31, s=b"\x02" * 32),
    ],
)
def test_ec_signature_validation(fields) -> None:
    with pytest.raises(ValidationError):
        ECSignature(**fields)


def test_required_field_names_include_aliases() -> None:
    names = required_field_names(KyberTrade)
    assert frozenset({"source_token", "sourceToken"}) in names
    assert len(names) == 5
    # exchange_address has a default, so it is not required.
    flat = set().union(*required_field_names(ZeroExSignedFillOrder))
    assert "exchange_address" not in flat
    assert "fillAmount" in flat
