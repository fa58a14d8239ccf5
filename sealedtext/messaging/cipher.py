"""
AES-GCM authenticated cipher.

Every seal draws a fresh nonce from the OS CSPRNG. There is no counter and
no per-instance nonce cache, so one cipher object can serve any number of
threads. Tag verification happens inside OpenSSL in constant time; on
mismatch nothing of the plaintext is returned.
"""

import secrets

from cryptography.exceptions import InvalidTag
from cryptography.hazmat.primitives.ciphers.aead import AESGCM

from ..config import KEY_SIZE, NONCE_SIZE, TAG_SIZE, VALID_KEY_SIZES
from ..errors import AuthenticationFailed, RandomnessUnavailable
from .framing import SealedBox


def generate_nonce(size: int = NONCE_SIZE) -> bytes:
    """
    Generate a random nonce for AES-GCM.

    CRITICAL: Never reuse a nonce with the same key!

    Raises:
        RandomnessUnavailable: If the OS random source fails
    """
    try:
        nonce = secrets.token_bytes(size)
    except (OSError, NotImplementedError):
        raise RandomnessUnavailable("secure random source unavailable") from None
    if len(nonce) != size:
        raise RandomnessUnavailable("secure random source returned short read")
    return nonce


class AESGCMCipher:
    """
    AES-GCM authenticated encryption.

    Provides confidentiality, integrity, and authenticity. The key is passed
    per call and never stored on the instance.
    """

    nonce_size = NONCE_SIZE
    tag_size = TAG_SIZE

    def __init__(self, key_size: int = KEY_SIZE):
        """
        Args:
            key_size: 16, 24 or 32 bytes
        """
        if key_size not in VALID_KEY_SIZES:
            raise ValueError(f"key_size must be one of {VALID_KEY_SIZES}")
        self.key_size = key_size

    def _check_key(self, key: bytes) -> None:
        if len(key) != self.key_size:
            raise ValueError(f"Key must be {self.key_size} bytes")

    def seal(self, key: bytes, plaintext: bytes,
             associated_data: bytes = b"") -> SealedBox:
        """
        Encrypt plaintext.

        Args:
            key: Symmetric key
            plaintext: Data to encrypt
            associated_data: Authenticated but not encrypted data

        Returns:
            SealedBox of (nonce, ciphertext, tag)
        """
        self._check_key(key)
        nonce = generate_nonce(self.nonce_size)

        # GCM appends tag to ciphertext
        ciphertext_with_tag = AESGCM(key).encrypt(nonce, plaintext, associated_data)

        return SealedBox(
            nonce=nonce,
            ciphertext=ciphertext_with_tag[:-self.tag_size],
            tag=ciphertext_with_tag[-self.tag_size:],
        )

    def open(self, key: bytes, sealed_box: SealedBox,
             associated_data: bytes = b"") -> bytes:
        """
        Verify and decrypt a sealed box.

        Raises:
            AuthenticationFailed: If tag verification fails for any reason
        """
        self._check_key(key)
        if len(sealed_box.nonce) != self.nonce_size or len(sealed_box.tag) != self.tag_size:
            raise AuthenticationFailed("message authentication failed")
        try:
            return AESGCM(key).decrypt(
                sealed_box.nonce,
                sealed_box.ciphertext + sealed_box.tag,
                associated_data,
            )
        except InvalidTag:
            raise AuthenticationFailed("message authentication failed") from None
