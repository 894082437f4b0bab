"""
Call data for creating rebalancing set tokens.

Core forwards these bytes untouched to the rebalancing set token factory, which
decodes them slot by slot; field order is fixed by the factory.
"""

from __future__ import annotations

from setutils.core.encoding import (
    buffer_array_to_hex,
    encode_address,
    encode_big_unsigned,
    to_bytes,
)

__all__ = [
    "generate_rebalancing_set_token_call_data",
    "generate_rebalancing_set_token_v2_call_data",
    "generate_fixed_fee_calculator_call_data",
]


def generate_rebalancing_set_token_call_data(
    manager_address: str,
    proposal_period: int,
    rebalance_interval: int,
) -> str:
    """
    Call data for a v1 rebalancing set token.

    Args:
        manager_address (str): Manager allowed to propose rebalances.
        proposal_period (int): Seconds holders may exit once a new Set is proposed.
        rebalance_interval (int): Minimum seconds between rebalances.

    Returns:
        str: Hex call data (three slots).
    """
    return buffer_array_to_hex(
        [
            encode_address(manager_address),
            encode_big_unsigned(proposal_period),
            encode_big_unsigned(rebalance_interval),
        ]
    )


def generate_rebalancing_set_token_v2_call_data(
    manager_address: str,
    liquidator_address: str,
    fee_recipient: str,
    rebalance_fee_calculator: str,
    rebalance_interval: int,
    fail_rebalance_period: int,
    last_rebalance_timestamp: int,
    entry_fee: int,
    rebalance_fee_calculator_call_data: bytes | str,
) -> str:
    """
    Call data for a v2 rebalancing set token.

    The fee calculator's own call data is appended raw after the eight slots.
    """
    return buffer_array_to_hex(
        [
            encode_address(manager_address),
            encode_address(liquidator_address),
            encode_address(fee_recipient),
            encode_address(rebalance_fee_calculator),
            encode_big_unsigned(rebalance_interval),
            encode_big_unsigned(fail_rebalance_period),
            encode_big_unsigned(last_rebalance_timestamp),
            encode_big_unsigned(entry_fee),
            to_bytes(rebalance_fee_calculator_call_data),
        ]
    )


def generate_fixed_fee_calculator_call_data(rebalance_fee: int) -> bytes:
    """Call data for the fixed fee calculator: the scaled rebalance fee slot."""
    return encode_big_unsigned(rebalance_fee)
