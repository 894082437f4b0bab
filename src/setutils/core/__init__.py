"""
Core package for setutils contracts (codec, signatures, EIP-712, models, enums).

## Contracts
- Encoding — 32-byte slot codec, typed tuple encoding, keccak helpers.
- Signing — (v, r, s) codec, Signer protocol, address recovery.
- EIP-712 — domain separator and message digests.
- Schemas — pydantic models for venue orders, issuance orders, signatures.
- Grammar — Venue, SolidityType, and signature-type enums.
- Errors/Constants/Typing — shared exception hierarchy, protocol constants,
  annotated field types.

## Notes
- Zero-IO policy: no file or network access; the only blocking call is the
  signer, isolated in ``signing.sign``.
- Byte outputs are ``bytes``; ``*_hex`` / ``to_hex`` helpers produce ``0x``
  lowercase strings for JSON and call data boundaries.

## Examples
```python
from setutils.core.encoding import encode_primitive, to_hex
to_hex(encode_primitive(1))[-2:]  # '01'

from setutils.core.grammar import Venue, venue_from_value
venue_from_value("kyber") == Venue.KYBER  # True
```
"""
