"""
Capability contracts for the sealing protocol.

Key agreement, key derivation and the AEAD cipher are independent
capabilities. MessageSealer depends only on these protocols, so any one of
them can be replaced without touching framing or the text envelope.
"""

from typing import TYPE_CHECKING, Any, Protocol, runtime_checkable

if TYPE_CHECKING:
    from ..messaging.framing import SealedBox


@runtime_checkable
class KeyAgreement(Protocol):
    """Derives a raw shared secret from own private key and peer public key."""

    def agree(self, own_private_key: Any, peer_public_key: Any) -> bytes:
        """
        Raises:
            InvalidKey: If either key is malformed or not on the curve.
        """
        ...


@runtime_checkable
class KeyDerivation(Protocol):
    """Expands a shared secret and salt into a fixed-length symmetric key."""

    def derive(self, shared_secret: bytes, salt: bytes, length: int) -> bytes:
        """
        Raises:
            DerivationFailed: On primitive failure.
        """
        ...


@runtime_checkable
class AuthenticatedCipher(Protocol):
    """AEAD cipher producing and consuming SealedBox values."""

    key_size: int
    nonce_size: int
    tag_size: int

    def seal(self, key: bytes, plaintext: bytes,
             associated_data: bytes = b"") -> "SealedBox":
        """
        Raises:
            RandomnessUnavailable: If no nonce can be generated.
        """
        ...

    def open(self, key: bytes, sealed_box: "SealedBox",
             associated_data: bytes = b"") -> bytes:
        """
        Raises:
            AuthenticationFailed: If the tag does not verify.
        """
        ...
