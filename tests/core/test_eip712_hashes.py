from __future__ import annotations

import pytest

from setutils.core.eip712 import (
    domain_hash,
    generate_eip712_message_hash,
    get_eip712_domain_hash,
    get_eip712_domain_separator_schema_hash,
    message_hash,
)
from setutils.core.errors import EncodingError

SCHEMA_HASH = "0x4c2212af4ffd7e170315f531795cee6c22f874d8f5fab37dfa8ed65e616773d2"
DOMAIN_HASH = "0xa8dcc602486c63f3c678c9b3c5d615c4d6ab4b7d51868af6881272b5d8bb31ff"
ZERO_STRUCT_MESSAGE_HASH = "0x5686079a65f95107943e531f6f7f755044148600233246c75fdce6e59c85cae5"


def test_domain_separator_schema_hash() -> None:
    assert get_eip712_domain_separator_schema_hash() == SCHEMA_HASH


def test_set_protocol_domain_hash() -> None:
    assert get_eip712_domain_hash() == DOMAIN_HASH
    assert domain_hash("Set Protocol", "1").hex() == DOMAIN_HASH[2:]


def test_domain_hash_binds_name_and_version() -> None:
    assert domain_hash("Set Protocol", "2") != domain_hash()
    assert domain_hash("Other", "1") != domain_hash()


def test_message_hash_of_zero_struct() -> None:
    assert generate_eip712_message_hash("0x" + "00" * 32) == ZERO_STRUCT_MESSAGE_HASH
    assert message_hash(b"\x00" * 32, domain=DOMAIN_HASH).hex() == ZERO_STRUCT_MESSAGE_HASH[2:]


def test_message_hash_is_deterministic() -> None:
    struct = b"\x42" * 32
    assert message_hash(struct) == message_hash(struct)
    assert message_hash(struct) != message_hash(b"\x43" * 32)


def test_message_hash_requires_32_byte_inputs() -> None:
    with pytest.raises(EncodingError):
        message_hash(b"\x00" * 31)
    with pytest.raises(EncodingError):
        message_hash(b"\x00" * 32, domain=b"\x00" * 20)
