from __future__ import annotations

import random

import pytest

from setutils.config import UtilsSettings
from setutils.core.errors import SignerError
from setutils.core.schema import IssuanceOrder, SignedIssuanceOrder
from setutils.core.signing import LocalKeySigner, recover_address
from setutils.orders.issuance import (
    generate_salt,
    generate_timestamp,
    issuance_order_digest,
    issuance_order_encoding,
    issuance_order_hex,
    issuance_order_struct_hash,
    sign_issuance_order,
)

E18 = 10**18

ORDER = IssuanceOrder(
    set_address="0x8ab2e7b1a6b9d9f0b4c8f0c6f7e1b7c5d9a4e3f2",
    maker_address="0x5409ed021d9299bf6814279a6a1411a7e866a631",
    maker_token="0x1dc4c1cefef38a777b15aa20260a54e584b16c48",
    relayer_address="0x6ecbe1db9ef729cbe972c83fb886247691fb6beb",
    relayer_token="0x871dd7c2b4b25e1aa18728e9d5f2af4c4e431f5c",
    quantity=4 * E18,
    maker_token_amount=10 * E18,
    expiration=1541723033,
    maker_relayer_fee=E18,
    taker_relayer_fee=2 * E18,
    salt=98765432109876543210,
    required_components=[
        "0x48bacb9266a570d521063ef5dd96e61686dbe788",
        "0xb69e673309512a9d726f87304c6984054f87a93b",
    ],
    required_component_amounts=[2 * E18, 2 * E18],
)


def test_encoding_is_fifteen_slots() -> None:
    encoded = issuance_order_encoding(ORDER)
    assert len(encoded) == 15 * 32
    assert issuance_order_hex(ORDER) == "0x" + encoded.hex()
    assert encoded[-64:-32] == (2 * E18).to_bytes(32, "big")


def test_struct_hash_and_digest_vectors() -> None:
    assert issuance_order_struct_hash(ORDER).hex() == (
        "3c3cc7eff0a19cba836206844370a4e82d6d744773c64915e9698bc0a910f2cb"
    )
    assert issuance_order_digest(ORDER).hex() == (
        "dd92334dca9f0948f1abd85961eb276b6c7ecb41055c1a13dce6fc0e8438c2f1"
    )


def test_digest_follows_configured_domain() -> None:
    settings = UtilsSettings(eip712_domain_version="2")
    assert issuance_order_digest(ORDER, settings).hex() == (
        "fa0435e36cc84a1aec448fc26efb674598555f768fe428223bd3df38b5a92ef6"
    )
    assert issuance_order_digest(ORDER, UtilsSettings()) == issuance_order_digest(ORDER)


def test_order_without_components() -> None:
    bare = ORDER.model_copy(update={"required_components": (), "required_component_amounts": ()})
    assert len(issuance_order_encoding(bare)) == 11 * 32
    assert issuance_order_struct_hash(bare).hex() == (
        "1b823915339441279c233a9e403a437b7f8f28ab6d9a94ca90d34e92628a0a16"
    )


def test_salt_changes_digest() -> None:
    other = ORDER.model_copy(update={"salt": ORDER.salt + 1})
    assert issuance_order_digest(other) != issuance_order_digest(ORDER)


def test_sign_issuance_order_recovers_maker() -> None:
    signer = LocalKeySigner("0x" + "00" * 31 + "01")
    order = ORDER.model_copy(update={"maker_address": signer.address})
    signed = sign_issuance_order(order, signer, UtilsSettings(signer_timeout_seconds=5))
    assert isinstance(signed, SignedIssuanceOrder)
    assert signed.salt == order.salt
    assert recover_address(issuance_order_digest(order), signed.signature) == signer.address


def test_sign_issuance_order_needs_maker_key() -> None:
    signer = LocalKeySigner("0x" + "00" * 31 + "01")
    with pytest.raises(SignerError):
        sign_issuance_order(ORDER, signer)


def test_generate_timestamp() -> None:
    assert generate_timestamp(minutes=10, now=1000.5) == 1600
    assert generate_timestamp(now=0, settings=UtilsSettings(default_expiration_minutes=5)) == 300
    assert generate_timestamp(minutes=0, now=42.9) == 42


def test_generate_salt_range_and_seeding() -> None:
    assert generate_salt(random.Random(7)) == generate_salt(random.Random(7))
    salts = {generate_salt() for _ in range(8)}
    assert len(salts) == 8
    assert all(0 <= s < 2**256 for s in salts)


FULL_WIDTH_SALT = 12345678901234567890123456789012345678901234567890123456789012345678901234567


def test_full_width_salt_vectors() -> None:
    assert len(str(FULL_WIDTH_SALT)) == 77
    order = ORDER.model_copy(update={"salt": FULL_WIDTH_SALT})
    encoded = issuance_order_encoding(order)
    assert encoded[320:352] == FULL_WIDTH_SALT.to_bytes(32, "big")
    assert issuance_order_struct_hash(order).hex() == (
        "9d4adc3f8a03bcde5348a5091a510f30a2d3097a8b4be9d3850689acda5ca4d5"
    )
    assert issuance_order_digest(order).hex() == (
        "2a2943d90ad34528380b4cc0a0f7738937320279424f44feec59bbcd8ac772bc"
    )
