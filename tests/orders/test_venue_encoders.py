from __future__ import annotations

import pytest

from setutils.core.encoding import concat, decode_uint, encode_big_unsigned, encode_primitive
from setutils.core.errors import EncodingError
from setutils.core.grammar import Venue
from setutils.core.schema import KyberTrade, TakerWalletOrder
from setutils.orders.header import HEADER_LENGTH, generate_exchange_order_header
from setutils.orders.kyber import generate_kyber_trades_buffer, kyber_trade_to_buffer
from setutils.orders.taker_wallet import (
    generate_taker_wallet_orders_buffer,
    taker_wallet_order_to_buffer,
)

MAKER_TOKEN = "0x1dc4c1cefef38a777b15aa20260a54e584b16c48"
TOKEN_A = "0x871dd7c2b4b25e1aa18728e9d5f2af4c4e431f5c"
TOKEN_B = "0x48bacb9266a570d521063ef5dd96e61686dbe788"


def _trade(source_qty: int) -> KyberTrade:
    return KyberTrade(
        source_token=MAKER_TOKEN,
        destination_token=TOKEN_A,
        source_token_quantity=source_qty,
        minimum_conversion_rate=2 * 10**17,
        max_destination_quantity=10**18,
    )


def test_header_layout() -> None:
    header = generate_exchange_order_header(Venue.KYBER, 2, MAKER_TOKEN, 10**18, 320)
    assert len(concat(header)) == HEADER_LENGTH == 160
    assert header == [
        encode_primitive(2),
        encode_primitive(2),
        encode_primitive(MAKER_TOKEN),
        encode_big_unsigned(10**18),
        encode_primitive(320),
    ]


def test_kyber_trade_slots() -> None:
    trade = _trade(5 * 10**17)
    assert kyber_trade_to_buffer(trade) == concat(
        [
            encode_primitive(MAKER_TOKEN),
            encode_primitive(TOKEN_A),
            encode_big_unsigned(5 * 10**17),
            encode_big_unsigned(2 * 10**17),
            encode_big_unsigned(10**18),
        ]
    )


def test_kyber_buffer_is_header_then_trades() -> None:
    trades = [_trade(1), _trade(2)]
    buf = generate_kyber_trades_buffer(MAKER_TOKEN, 3 * 10**18, trades)
    assert len(buf) == 160 + 2 * 160
    assert decode_uint(buf[0:32]) == Venue.KYBER
    assert decode_uint(buf[32:64]) == 2
    assert buf[64:96] == encode_primitive(MAKER_TOKEN)
    assert decode_uint(buf[96:128]) == 3 * 10**18
    assert decode_uint(buf[128:160]) == 320
    assert buf[160:320] == kyber_trade_to_buffer(trades[0])
    assert buf[320:] == kyber_trade_to_buffer(trades[1])


def test_taker_wallet_buffer() -> None:
    orders = [
        TakerWalletOrder(taker_token_address=TOKEN_A, taker_token_amount=7),
        TakerWalletOrder(taker_token_address=TOKEN_B, taker_token_amount=9),
    ]
    buf = generate_taker_wallet_orders_buffer(MAKER_TOKEN, 0, orders)
    assert len(buf) == 160 + 2 * 64
    assert decode_uint(buf[0:32]) == Venue.TAKER_WALLET
    assert decode_uint(buf[96:128]) == 0
    assert decode_uint(buf[128:160]) == 128
    assert buf[160:224] == taker_wallet_order_to_buffer(TOKEN_A, 7)
    assert buf[224:] == encode_primitive(TOKEN_B) + encode_big_unsigned(9)


def test_empty_venue_still_has_a_header() -> None:
    buf = generate_taker_wallet_orders_buffer(MAKER_TOKEN, 0, [])
    assert len(buf) == 160
    assert decode_uint(buf[32:64]) == 0
    assert decode_uint(buf[128:160]) == 0


@pytest.mark.parametrize("payment_token", ["0x" + "ff" * 32, "0x" + "12" * 21])
def test_header_rejects_non_address_payment_token(payment_token) -> None:
    with pytest.raises(EncodingError):
        generate_exchange_order_header(Venue.KYBER, 1, payment_token, 1, 160)
    with pytest.raises(EncodingError):
        generate_kyber_trades_buffer(payment_token, 1, [_trade(1)])
