"""Shared fixed key pairs and salt."""

import pytest

from sealedtext.core_crypto.key_agreement import KeyPair


# Fixed P-256 scalars so failures are reproducible.
KEY_A_HEX = "c9afa9d845ba75166b5c215767b1d6934e50c3db36e89b127b8a622b120f6721"
KEY_B_HEX = "7d7dc5f71eb29ddaf80d6214632eeae03d9058af1fb6d22ed80badb62bc1a534"
KEY_C_HEX = "38f65d6dce47676044d58ce5139582d568f64bb16098d179dbab07741dd5caf5"

TEST_SALT = "test-salt"


@pytest.fixture
def key_a() -> KeyPair:
    return KeyPair.from_private_bytes(bytes.fromhex(KEY_A_HEX))


@pytest.fixture
def key_b() -> KeyPair:
    return KeyPair.from_private_bytes(bytes.fromhex(KEY_B_HEX))


@pytest.fixture
def key_c() -> KeyPair:
    return KeyPair.from_private_bytes(bytes.fromhex(KEY_C_HEX))


@pytest.fixture
def salt() -> str:
    return TEST_SALT
