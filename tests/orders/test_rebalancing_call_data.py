from __future__ import annotations

from setutils.core.encoding import encode_big_unsigned, encode_primitive, to_bytes
from setutils.orders.rebalancing import (
    generate_fixed_fee_calculator_call_data,
    generate_rebalancing_set_token_call_data,
    generate_rebalancing_set_token_v2_call_data,
)

MANAGER = "0x5409ed021d9299bf6814279a6a1411a7e866a631"
LIQUIDATOR = "0x6ecbe1db9ef729cbe972c83fb886247691fb6beb"
FEE_RECIPIENT = "0x871dd7c2b4b25e1aa18728e9d5f2af4c4e431f5c"
FEE_CALCULATOR = "0x48bacb9266a570d521063ef5dd96e61686dbe788"
ONE_DAY = 86400


def test_v1_call_data() -> None:
    data = to_bytes(generate_rebalancing_set_token_call_data(MANAGER, ONE_DAY, 30 * ONE_DAY))
    assert data == (
        encode_primitive(MANAGER) + encode_big_unsigned(ONE_DAY) + encode_big_unsigned(30 * ONE_DAY)
    )


def test_v2_call_data_appends_fee_calculator_data() -> None:
    fee_data = generate_fixed_fee_calculator_call_data(10**16)
    assert fee_data == encode_big_unsigned(10**16)
    data = to_bytes(
        generate_rebalancing_set_token_v2_call_data(
            MANAGER,
            LIQUIDATOR,
            FEE_RECIPIENT,
            FEE_CALCULATOR,
            ONE_DAY,
            2 * ONE_DAY,
            1541723033,
            0,
            fee_data,
        )
    )
    assert len(data) == 9 * 32
    assert data[32:64] == encode_primitive(LIQUIDATOR)
    assert data[96:128] == encode_primitive(FEE_CALCULATOR)
    assert data[192:224] == encode_big_unsigned(1541723033)
    assert data[-32:] == fee_data
