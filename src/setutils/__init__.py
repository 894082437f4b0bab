"""
setutils — encoding, hashing, and signing utilities for Set Protocol order settlement.

## Responsibilities
- Encode primitives and typed field tuples into the 32-byte slot layout the
  settlement contracts decode.
- Parse, serialize, and verify ECDSA signatures; wrap the external signer.
- Hash issuance orders under the Set Protocol EIP-712 domain.
- Encode 0x, Kyber, and taker wallet orders and merge them into one buffer in
  canonical venue order.

## Public API
- UtilsSettings — configuration (env > TOML > defaults).
- configure_logging — attach a handler to the ``setutils`` logger.
- serialize_orders / serialize_orders_buffer — multi-venue settlement call data.
- sign_issuance_order / issuance_order_digest — issuance order signing.

## Layout
- setutils.core — codec, signatures, EIP-712, models, enums, errors. No IO.
- setutils.orders — venue encoders, dispatcher, issuance and rebalancing helpers.

## Examples
```python
from setutils import serialize_orders
from setutils.core.schema import TakerWalletOrder

order = TakerWalletOrder(
    taker_token_address="0x871dd7c2b4b25e1aa18728e9d5f2af4c4e431f5c",
    taker_token_amount=10**18,
)
serialize_orders("0x1dc4c1cefef38a777b15aa20260a54e584b16c48", 0, [order])[:66]
```
"""

from __future__ import annotations

from .config import UtilsSettings
from .logging import configure_logging
from .orders.dispatch import serialize_orders, serialize_orders_buffer
from .orders.issuance import issuance_order_digest, sign_issuance_order

__all__ = [
    "UtilsSettings",
    "configure_logging",
    "serialize_orders",
    "serialize_orders_buffer",
    "issuance_order_digest",
    "sign_issuance_order",
]

__version__ = "0.1.0"
