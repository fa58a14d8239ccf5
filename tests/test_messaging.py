"""
Unit tests for the messaging layer.

Tests:
- AES-GCM seal/open
- Combined-box framing
- Text envelope conversions
- Sealer round trips
"""

import os

import pytest

from sealedtext import (
    KeyPair, MessageSealer, ProtocolParams, Result, ErrorKind,
    seal_text, open_text, seal_bytes, open_bytes, try_seal_text, try_open_text,
)
from sealedtext.core_crypto.interfaces import AuthenticatedCipher
from sealedtext.errors import AuthenticationFailed, MalformedBlob
from sealedtext.messaging.cipher import AESGCMCipher, generate_nonce
from sealedtext.messaging.envelope import b64d, b64e, normalize_salt
from sealedtext.messaging.framing import SealedBox, pack, unpack


class TestAESGCM:
    """Tests for AES-GCM encryption."""

    def test_encrypt_decrypt(self):
        """Encryption/decryption roundtrip should work."""
        key = os.urandom(16)
        cipher = AESGCMCipher()

        plaintext = b"Hello, secure world!"
        box = cipher.seal(key, plaintext)

        assert cipher.open(key, box) == plaintext

    def test_sizes(self):
        """Nonce and tag are fixed; ciphertext matches plaintext length."""
        cipher = AESGCMCipher()
        box = cipher.seal(os.urandom(16), b"x" * 37)

        assert len(box.nonce) == 12
        assert len(box.tag) == 16
        assert len(box.ciphertext) == 37

    def test_empty_plaintext(self):
        """Empty plaintext still produces a tag and opens to b''."""
        key = os.urandom(16)
        cipher = AESGCMCipher()
        box = cipher.seal(key, b"")

        assert box.ciphertext == b""
        assert cipher.open(key, box) == b""

    def test_different_nonces(self):
        """Each encryption should use different nonce."""
        key = os.urandom(16)
        cipher = AESGCMCipher()

        assert cipher.seal(key, b"message").nonce != cipher.seal(key, b"message").nonce

    def test_aad_verified(self):
        """Associated data should be verified."""
        key = os.urandom(16)
        cipher = AESGCMCipher()
        aad = b"authenticated but not encrypted"

        box = cipher.seal(key, b"message", aad)
        assert cipher.open(key, box, aad) == b"message"

    def test_wrong_aad_rejected(self):
        """Wrong associated data should fail decryption."""
        key = os.urandom(16)
        cipher = AESGCMCipher()
        box = cipher.seal(key, b"message", b"correct_aad")

        with pytest.raises(AuthenticationFailed):
            cipher.open(key, box, b"wrong_aad")

    def test_wrong_nonce_rejected(self):
        """Wrong nonce should fail decryption."""
        key = os.urandom(16)
        cipher = AESGCMCipher()
        box = cipher.seal(key, b"message")

        with pytest.raises(AuthenticationFailed):
            cipher.open(key, SealedBox(os.urandom(12), box.ciphertext, box.tag))

    def test_wrong_key_rejected(self):
        """Wrong key should fail decryption."""
        cipher = AESGCMCipher()
        box = cipher.seal(os.urandom(16), b"message")

        with pytest.raises(AuthenticationFailed):
            cipher.open(os.urandom(16), box)

    def test_truncated_ciphertext_rejected(self):
        """Truncated ciphertext should fail decryption."""
        key = os.urandom(16)
        cipher = AESGCMCipher()
        box = cipher.seal(key, b"secret message")

        with pytest.raises(AuthenticationFailed):
            cipher.open(key, SealedBox(box.nonce, box.ciphertext[:-5], box.tag))

    def test_short_tag_rejected(self):
        """A tag of the wrong length never verifies."""
        key = os.urandom(16)
        cipher = AESGCMCipher()
        box = cipher.seal(key, b"message")

        with pytest.raises(AuthenticationFailed):
            cipher.open(key, SealedBox(box.nonce, box.ciphertext, box.tag[:8]))

    def test_key_size_enforced(self):
        """Keys must match the configured size."""
        with pytest.raises(ValueError):
            AESGCMCipher().seal(os.urandom(32), b"message")
        with pytest.raises(ValueError):
            AESGCMCipher(key_size=20)

    def test_aes256(self):
        """32-byte keys work when configured."""
        key = os.urandom(32)
        cipher = AESGCMCipher(key_size=32)
        assert cipher.open(key, cipher.seal(key, b"abc")) == b"abc"

    def test_satisfies_protocol(self):
        """AESGCMCipher should satisfy the AuthenticatedCipher protocol."""
        assert isinstance(AESGCMCipher(), AuthenticatedCipher)

    def test_generate_nonce(self):
        """Nonces are 12 random bytes by default."""
        assert len(generate_nonce()) == 12
        assert generate_nonce() != generate_nonce()


class TestFraming:
    """Tests for nonce || ciphertext || tag framing."""

    def test_pack_order(self):
        """Pack concatenates in fixed order."""
        box = SealedBox(b"N" * 12, b"cipher", b"T" * 16)
        assert pack(box) == b"N" * 12 + b"cipher" + b"T" * 16
        assert box.to_bytes() == pack(box)

    def test_unpack_splits(self):
        """Unpack recovers the three parts."""
        blob = b"N" * 12 + b"cipher" + b"T" * 16
        box = unpack(blob)

        assert box.nonce == b"N" * 12
        assert box.ciphertext == b"cipher"
        assert box.tag == b"T" * 16
        assert SealedBox.from_bytes(blob) == box

    def test_minimum_blob(self):
        """28 bytes is an empty-plaintext message."""
        box = unpack(bytes(28))
        assert box.ciphertext == b""

    def test_short_blob_rejected(self):
        """27 bytes cannot hold nonce and tag."""
        with pytest.raises(MalformedBlob):
            unpack(bytes(27))
        with pytest.raises(MalformedBlob):
            unpack(b"")


class TestEnvelope:
    """Tests for base64 and salt handling."""

    def test_standard_alphabet_with_padding(self):
        """Output uses + / and = padding."""
        assert b64e(b"\xfb\xff") == "+/8="
        assert b64d("+/8=") == b"\xfb\xff"

    def test_invalid_base64_rejected(self):
        """Non-alphabet characters, bad padding and non-canonical text are MalformedBlob."""
        for text in ("not base64!!", "QUI", "QUJD\n", "-_8=", "é", "AAAA=", "QR==", "QQ"):
            with pytest.raises(MalformedBlob):
                b64d(text)

    def test_non_str_rejected(self):
        """Envelope must be text."""
        with pytest.raises(TypeError):
            b64d(b"QUJD")

    def test_salt_forms(self):
        """str salts are UTF-8 encoded; bytes-like salts pass through."""
        assert normalize_salt("test-salt") == b"test-salt"
        assert normalize_salt(bytearray(b"abc")) == b"abc"
        assert normalize_salt(b"") == b""
        with pytest.raises(TypeError):
            normalize_salt(42)


class TestSealer:
    """Tests for the composed protocol."""

    def test_hello_scenario(self, key_a, key_b, key_c, salt):
        """A seals 'hello' for B; B opens it; C's key cannot be substituted."""
        envelope = seal_text("hello", key_a, key_b.public_key, salt)

        assert open_text(envelope, key_b, key_a.public_key, salt) == "hello"
        with pytest.raises(AuthenticationFailed):
            open_text(envelope, key_b, key_c.public_key, salt)

    @pytest.mark.parametrize("plaintext", [
        "",
        "hello",
        "Привет, мир",
        "emoji \U0001F512 and CJK 漢字",
        "a" * 10_000,
    ])
    def test_round_trip(self, key_a, key_b, salt, plaintext):
        """Any string round-trips, including the empty string."""
        envelope = seal_text(plaintext, key_a, key_b.public_key, salt)
        assert open_text(envelope, key_b, key_a.public_key, salt) == plaintext

    def test_blob_length(self, key_a, key_b, salt):
        """Blob length is 12 + len(utf8) + 16."""
        plaintext = "naïve café"
        envelope = seal_text(plaintext, key_a, key_b.public_key, salt)
        assert len(b64d(envelope)) == 12 + len(plaintext.encode("utf-8")) + 16

    def test_bytes_api(self, key_a, key_b, salt):
        """Byte-level seal/open round-trips arbitrary bytes."""
        data = bytes(range(256))
        blob = seal_bytes(data, key_a, key_b.public_key, salt)

        assert len(blob) == 12 + 256 + 16
        assert open_bytes(blob, key_b, key_a.public_key, salt) == data

    def test_encoded_keys_accepted(self, key_a, key_b, salt):
        """Raw key bytes work in place of key objects."""
        envelope = seal_text("hi", key_a.private_bytes(), key_b.raw_public_bytes(), salt)
        assert open_text(envelope, key_b.private_bytes(), key_a.public_bytes(), salt) == "hi"

    def test_str_and_bytes_salt_equivalent(self, key_a, key_b):
        """A str salt equals its UTF-8 bytes."""
        envelope = seal_text("hello", key_a, key_b.public_key, "test-salt")
        assert open_text(envelope, key_b, key_a.public_key, b"test-salt") == "hello"

    def test_empty_salt(self, key_a, key_b):
        """Empty salt is allowed."""
        envelope = seal_text("hello", key_a, key_b.public_key, b"")
        assert open_text(envelope, key_b, key_a.public_key, b"") == "hello"

    def test_plaintext_type_checked(self, key_a, key_b, salt):
        """Passing bytes to seal_text is a programming error."""
        with pytest.raises(TypeError):
            seal_text(b"hello", key_a, key_b.public_key, salt)
        with pytest.raises(TypeError):
            seal_bytes("hello", key_a, key_b.public_key, salt)

    def test_custom_params(self, key_a, key_b, salt):
        """AES-256 parameters work end to end but do not interoperate with defaults."""
        sealer = MessageSealer(params=ProtocolParams(key_size=32))
        envelope = sealer.seal_text("hello", key_a, key_b.public_key, salt)

        assert sealer.open_text(envelope, key_b, key_a.public_key, salt) == "hello"
        with pytest.raises(AuthenticationFailed):
            open_text(envelope, key_b, key_a.public_key, salt)

    def test_invalid_params(self):
        """Unsupported key sizes are rejected at configuration time."""
        with pytest.raises(ValueError):
            ProtocolParams(key_size=20)


class TestResult:
    """Tests for the value-style API."""

    def test_ok(self, key_a, key_b, salt):
        """Successful operations return success with a value."""
        sealed = try_seal_text("hello", key_a, key_b.public_key, salt)
        assert sealed.success
        assert sealed.kind is None

        opened = try_open_text(sealed.value, key_b, key_a.public_key, salt)
        assert opened.success
        assert opened.unwrap() == "hello"

    def test_failure_carries_kind(self, key_a, key_b, salt):
        """Failures keep the specific error kind."""
        result = try_open_text("!!!", key_b, key_a.public_key, salt)

        assert isinstance(result, Result)
        assert not result.success
        assert result.value is None
        assert result.kind is ErrorKind.MALFORMED_BLOB
        with pytest.raises(MalformedBlob):
            result.unwrap()

    def test_auth_failure_kind(self, key_a, key_b, key_c, salt):
        """Wrong peer key reports AUTHENTICATION_FAILED."""
        envelope = seal_text("hello", key_a, key_b.public_key, salt)
        result = try_open_text(envelope, key_b, key_c.public_key, salt)
        assert result.kind is ErrorKind.AUTHENTICATION_FAILED
