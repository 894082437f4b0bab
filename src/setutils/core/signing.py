"""
ECDSA signature codec and the external signer boundary.

Converts raw 65-byte signatures (``r ‖ s ‖ v``) into the canonical ECSignature
triple and back, and wraps the one blocking collaborator of the library: the
key-holding signer.

Responsibilities
- Parse and re-serialize raw signatures, rejecting wrong lengths and recovery ids.
- Define the Signer protocol and an in-process LocalKeySigner built on eth_keys.
- Invoke a signer exactly once, surfacing any failure or timeout as SignerError.
- Recover the signing address for verification.

Notes:
    - Recovery ids are always 27/28. eth_keys works in 0/1; the conversion happens
      only inside this module.
    - A failed signature request is never retried: a retry with a fresh salt would
      change the digest being signed.

Examples:
    >>> from setutils.core.signing import LocalKeySigner, sign_message
    >>> signer = LocalKeySigner("0x" + "11" * 32)
    >>> sig = sign_message(b"\\x00" * 32, signer, signer.address)
    >>> sig.v in (27, 28)
    True
"""

from __future__ import annotations

import logging
from concurrent.futures import ThreadPoolExecutor
from concurrent.futures import TimeoutError as FutureTimeoutError
from typing import Protocol, runtime_checkable

from eth_keys import keys
from eth_utils import to_normalized_address

from .constants import ETH_SIGNED_MESSAGE_PREFIX, SLOT_SIZE
from .encoding import keccak256, to_bytes, to_hex
from .errors import MalformedSignatureError, SignerError
from .schema import ECSignature

__all__ = [
    "SIGNATURE_LENGTH",
    "parse_signature",
    "parse_signature_hex_as_rsv",
    "signature_to_bytes",
    "signature_to_hex",
    "eth_signed_message_hash",
    "recover_address",
    "Signer",
    "LocalKeySigner",
    "sign",
    "sign_message",
]

logger = logging.getLogger(__name__)

SIGNATURE_LENGTH = 65

_VALID_RECOVERY_IDS = (27, 28)


def parse_signature(raw_signature: bytes | str) -> ECSignature:
    """
    Split a raw ``r ‖ s ‖ v`` signature into its canonical triple.

    Args:
        raw_signature (bytes | str): 65 bytes, or their ``0x`` hex form.

    Returns:
        ECSignature: v in {27, 28}; r and s as 32-byte big-endian values.

    Raises:
        MalformedSignatureError: If the input is not hex/bytes, is not 65 bytes, or
            v is outside {27, 28}.
    """
    try:
        raw = to_bytes(raw_signature)
    except ValueError as exc:
        raise MalformedSignatureError(str(exc)) from exc
    if len(raw) != SIGNATURE_LENGTH:
        raise MalformedSignatureError(
            f"signature must be {SIGNATURE_LENGTH} bytes, got {len(raw)}"
        )
    v = raw[64]
    if v not in _VALID_RECOVERY_IDS:
        raise MalformedSignatureError(f"recovery id must be 27 or 28, got {v}")
    return ECSignature(v=v, r=raw[:SLOT_SIZE], s=raw[SLOT_SIZE : 2 * SLOT_SIZE])


def parse_signature_hex_as_rsv(signature_hex: str) -> dict[str, int | str]:
    """Parse a hex signature into ``{"v", "r", "s"}`` with hex-encoded scalars."""
    return parse_signature(signature_hex).as_hex_dict()


def signature_to_bytes(signature: ECSignature) -> bytes:
    """Serialize a canonical signature back to its raw 65-byte form."""
    return signature.r + signature.s + bytes([signature.v])


def signature_to_hex(signature: ECSignature) -> str:
    return to_hex(signature_to_bytes(signature))


def eth_signed_message_hash(message: bytes | str) -> bytes:
    """
    Hash a 32-byte message the way ``eth_sign`` does before signing.

    Args:
        message (bytes | str): 32-byte digest (bytes or hex).

    Returns:
        bytes: keccak256("\\x19Ethereum Signed Message:\\n32" ‖ message).
    """
    raw = to_bytes(message)
    if len(raw) != SLOT_SIZE:
        raise ValueError(f"eth_sign messages must be {SLOT_SIZE} bytes, got {len(raw)}")
    return keccak256(ETH_SIGNED_MESSAGE_PREFIX + raw)


def recover_address(
    message: bytes | str, signature: ECSignature, eth_sign_prefix: bool = True
) -> str:
    """
    Recover the lowercase address that produced ``signature`` over ``message``.

    Args:
        message (bytes | str): 32-byte digest that was signed.
        signature (ECSignature): Canonical signature.
        eth_sign_prefix (bool): Whether the signer applied the eth_sign prefix.

    Returns:
        str: Lowercase hex address.
    """
    digest = eth_signed_message_hash(message) if eth_sign_prefix else to_bytes(message)
    ec = keys.Signature(
        vrs=(
            signature.v - 27,
            int.from_bytes(signature.r, "big"),
            int.from_bytes(signature.s, "big"),
        )
    )
    return to_normalized_address(ec.recover_public_key_from_msg_hash(digest).to_address())


@runtime_checkable
class Signer(Protocol):
    """Key-holding collaborator: signs a message on behalf of an address."""

    def sign(self, address: str, message: bytes) -> bytes:
        """Return the raw 65-byte ``r ‖ s ‖ v`` signature."""
        ...


class LocalKeySigner:
    """
    In-process signer holding a single secp256k1 private key.

    Args:
        private_key (bytes | str): 32-byte key or its hex form.
        eth_sign_prefix (bool): Apply the eth_sign prefix before signing, matching
            what a node's ``eth_sign`` produces.
    """

    def __init__(self, private_key: bytes | str, eth_sign_prefix: bool = True) -> None:
        self._key = keys.PrivateKey(to_bytes(private_key))
        self.eth_sign_prefix = eth_sign_prefix

    @property
    def address(self) -> str:
        return to_normalized_address(self._key.public_key.to_address())

    def sign(self, address: str, message: bytes) -> bytes:
        if to_normalized_address(address) != self.address:
            raise PermissionError(f"no key held for {address}")
        digest = eth_signed_message_hash(message) if self.eth_sign_prefix else to_bytes(message)
        ec = self._key.sign_msg_hash(digest)
        return (
            ec.r.to_bytes(SLOT_SIZE, "big")
            + ec.s.to_bytes(SLOT_SIZE, "big")
            + bytes([ec.v + 27])
        )


def sign(
    message: bytes | str,
    signer: Signer,
    address: str,
    timeout: float | None = None,
) -> bytes:
    """
    Ask the signer collaborator for a raw signature, exactly once.

    Args:
        message (bytes | str): Digest to sign.
        signer (Signer): Key-holding collaborator.
        address (str): Identity to sign as.
        timeout (float | None): Seconds to wait for the collaborator; None waits
            indefinitely.

    Returns:
        bytes: Raw 65-byte signature, validated by parse_signature.

    Raises:
        SignerError: If the collaborator raises or does not answer within timeout.
        MalformedSignatureError: If the collaborator returns a malformed signature.
    """
    payload = to_bytes(message)
    try:
        if timeout is None:
            raw = signer.sign(address, payload)
        else:
            pool = ThreadPoolExecutor(max_workers=1, thread_name_prefix="setutils-signer")
            try:
                raw = pool.submit(signer.sign, address, payload).result(timeout=timeout)
            finally:
                pool.shutdown(wait=False)
    except FutureTimeoutError as exc:
        logger.error("signer timed out after %ss for %s", timeout, address)
        raise SignerError(f"signer timed out after {timeout}s") from exc
    except Exception as exc:
        logger.error("signer failed for %s: %s", address, exc)
        raise SignerError(f"signer failed: {exc}") from exc
    parse_signature(raw)
    return to_bytes(raw)


def sign_message(
    message: bytes | str,
    signer: Signer,
    address: str,
    timeout: float | None = None,
) -> ECSignature:
    """Sign a digest and return its canonical (v, r, s) form."""
    return parse_signature(sign(message, signer, address, timeout=timeout))
