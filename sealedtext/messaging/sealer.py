"""
Message Sealer

Composes key agreement, key derivation, the AEAD cipher, framing and the
text envelope into the sealing protocol:

    seal:  text -> UTF-8 -> ECDH -> HKDF(salt) -> AES-GCM -> pack -> base64
    open:  base64 -> unpack -> ECDH -> HKDF(salt) -> AES-GCM -> UTF-8 -> text

The shared secret and symmetric key live only for the duration of one call.
Nothing is cached between calls, so a sealer can be shared across threads.

Example:
    alice = KeyPair.generate()
    bob = KeyPair.generate()

    envelope = seal_text("hello", alice, bob.public_key, salt="conversation-1")
    assert open_text(envelope, bob, alice.public_key, salt="conversation-1") == "hello"
"""

from contextlib import contextmanager
from typing import Optional

from ..config import DEFAULT_PARAMS, ProtocolParams
from ..core_crypto.interfaces import AuthenticatedCipher, KeyAgreement, KeyDerivation
from ..core_crypto.kdf import HKDFSHA256
from ..core_crypto.key_agreement import ECDHKeyAgreement
from ..errors import Result, SealError
from ..integration.event_logger import EventLogger
from .cipher import AESGCMCipher
from .envelope import SaltLike, b64d, b64e, decode_text, encode_text, normalize_salt
from .framing import pack, unpack


class MessageSealer:
    """
    Point-to-point authenticated encryption between two key pairs.

    Each capability may be replaced independently; the defaults are
    ECDH P-256, HKDF-SHA256 and AES-GCM.
    """

    def __init__(self,
                 agreement: Optional[KeyAgreement] = None,
                 derivation: Optional[KeyDerivation] = None,
                 cipher: Optional[AuthenticatedCipher] = None,
                 params: ProtocolParams = DEFAULT_PARAMS,
                 event_logger: Optional[EventLogger] = None):
        self.params = params
        self.agreement = agreement or ECDHKeyAgreement()
        self.derivation = derivation or HKDFSHA256(info=params.hkdf_info)
        self.cipher = cipher or AESGCMCipher(key_size=params.key_size)
        self.event_logger = event_logger

    @contextmanager
    def _audited(self, operation: str, peer_public_key):
        try:
            yield
        except SealError as exc:
            if self.event_logger is not None:
                self.event_logger.log_rejected(peer_public_key, operation, exc.kind.value)
            raise

    def _derive_key(self, own_private_key, peer_public_key, salt: bytes) -> bytes:
        shared_secret = self.agreement.agree(own_private_key, peer_public_key)
        return self.derivation.derive(shared_secret, salt, self.cipher.key_size)

    def _seal(self, plaintext: bytes, own_private_key, peer_public_key, salt: SaltLike) -> bytes:
        if not isinstance(plaintext, (bytes, bytearray, memoryview)):
            raise TypeError("plaintext must be bytes")
        key = self._derive_key(own_private_key, peer_public_key, normalize_salt(salt))
        return pack(self.cipher.seal(key, bytes(plaintext)))

    def _open(self, blob: bytes, own_private_key, peer_public_key, salt: SaltLike) -> bytes:
        salt = normalize_salt(salt)
        # Structural check comes before any key work.
        sealed_box = unpack(blob, self.cipher.nonce_size, self.cipher.tag_size)
        key = self._derive_key(own_private_key, peer_public_key, salt)
        return self.cipher.open(key, sealed_box)

    # ========================================================================
    # Bytes API
    # ========================================================================

    def seal_bytes(self, plaintext: bytes, own_private_key, peer_public_key,
                   salt: SaltLike) -> bytes:
        """
        Seal raw bytes for a peer.

        Args:
            plaintext: Message bytes (may be empty)
            own_private_key: Sender private key or KeyPair
            peer_public_key: Recipient public key, encoded or as object
            salt: Agreed salt, bytes or str

        Returns:
            Combined blob: nonce || ciphertext || tag

        Raises:
            InvalidKey, DerivationFailed, RandomnessUnavailable
        """
        with self._audited("seal", peer_public_key):
            blob = self._seal(plaintext, own_private_key, peer_public_key, salt)
        if self.event_logger is not None:
            self.event_logger.log_seal(peer_public_key, len(blob))
        return blob

    def open_bytes(self, blob: bytes, own_private_key, peer_public_key,
                   salt: SaltLike) -> bytes:
        """
        Open a combined blob sealed by a peer.

        Raises:
            MalformedBlob: If blob cannot hold nonce and tag
            InvalidKey: If either key fails validation
            AuthenticationFailed: On any tag mismatch
        """
        with self._audited("open", peer_public_key):
            plaintext = self._open(blob, own_private_key, peer_public_key, salt)
        if self.event_logger is not None:
            self.event_logger.log_open(peer_public_key, len(blob))
        return plaintext

    # ========================================================================
    # Text API
    # ========================================================================

    def seal_text(self, plaintext: str, own_private_key, peer_public_key,
                  salt: SaltLike) -> str:
        """
        Seal a string and return the base64 envelope.

        Raises:
            DecodedTextInvalid: If plaintext cannot be UTF-8 encoded
            InvalidKey, DerivationFailed, RandomnessUnavailable
        """
        with self._audited("seal", peer_public_key):
            blob = self._seal(encode_text(plaintext), own_private_key, peer_public_key, salt)
        if self.event_logger is not None:
            self.event_logger.log_seal(peer_public_key, len(blob))
        return b64e(blob)

    def open_text(self, encoded_blob: str, own_private_key, peer_public_key,
                  salt: SaltLike) -> str:
        """
        Open a base64 envelope and return the original string.

        Raises:
            MalformedBlob: If the envelope is not base64 or too short
            InvalidKey: If either key fails validation
            AuthenticationFailed: On any tag mismatch
            DecodedTextInvalid: If the authenticated bytes are not UTF-8
        """
        with self._audited("open", peer_public_key):
            blob = b64d(encoded_blob)
            text = decode_text(self._open(blob, own_private_key, peer_public_key, salt))
        if self.event_logger is not None:
            self.event_logger.log_open(peer_public_key, len(blob))
        return text

    def try_seal_text(self, plaintext: str, own_private_key, peer_public_key,
                      salt: SaltLike) -> Result:
        """seal_text, reporting failure as a Result instead of raising."""
        try:
            return Result.ok(self.seal_text(plaintext, own_private_key, peer_public_key, salt))
        except SealError as exc:
            return Result.fail(exc)

    def try_open_text(self, encoded_blob: str, own_private_key, peer_public_key,
                      salt: SaltLike) -> Result:
        """open_text, reporting failure as a Result instead of raising."""
        try:
            return Result.ok(self.open_text(encoded_blob, own_private_key, peer_public_key, salt))
        except SealError as exc:
            return Result.fail(exc)


_default_sealer = MessageSealer()


def seal_bytes(plaintext: bytes, own_private_key, peer_public_key, salt: SaltLike) -> bytes:
    return _default_sealer.seal_bytes(plaintext, own_private_key, peer_public_key, salt)


def open_bytes(blob: bytes, own_private_key, peer_public_key, salt: SaltLike) -> bytes:
    return _default_sealer.open_bytes(blob, own_private_key, peer_public_key, salt)


def seal_text(plaintext: str, own_private_key, peer_public_key, salt: SaltLike) -> str:
    """One-shot seal with the default protocol parameters."""
    return _default_sealer.seal_text(plaintext, own_private_key, peer_public_key, salt)


def open_text(encoded_blob: str, own_private_key, peer_public_key, salt: SaltLike) -> str:
    """One-shot open with the default protocol parameters."""
    return _default_sealer.open_text(encoded_blob, own_private_key, peer_public_key, salt)


def try_seal_text(plaintext: str, own_private_key, peer_public_key, salt: SaltLike) -> Result:
    return _default_sealer.try_seal_text(plaintext, own_private_key, peer_public_key, salt)


def try_open_text(encoded_blob: str, own_private_key, peer_public_key, salt: SaltLike) -> Result:
    return _default_sealer.try_open_text(encoded_blob, own_private_key, peer_public_key, salt)
