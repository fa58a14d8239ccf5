"""HKDF-SHA256 key derivation (RFC 5869)."""

from typing import Optional

from cryptography.hazmat.primitives import hashes
from cryptography.hazmat.primitives.kdf.hkdf import HKDF

from ..config import HKDF_INFO, KEY_SIZE
from ..errors import DerivationFailed


def hkdf_derive_key(shared_secret: bytes,
                    salt: Optional[bytes] = None,
                    info: bytes = HKDF_INFO,
                    length: int = KEY_SIZE) -> bytes:
    """
    Derive encryption key from shared secret using HKDF.

    Extract mixes salt and secret into a pseudorandom key, expand stretches
    it to ``length`` bytes. Identical inputs always give the identical key.

    Args:
        shared_secret: Input key material (e.g., from ECDH)
        salt: Salt agreed by both parties
        info: Fixed context string
        length: Output key length in bytes

    Returns:
        Derived key bytes

    Raises:
        DerivationFailed: If HKDF rejects its parameters
    """
    try:
        hkdf = HKDF(
            algorithm=hashes.SHA256(),
            length=length,
            salt=salt or None,  # empty salt is equivalent to HashLen zeros
            info=info,
        )
        return hkdf.derive(shared_secret)
    except ValueError:
        raise DerivationFailed("HKDF could not derive a key") from None


class HKDFSHA256:
    """KeyDerivation backed by HKDF-SHA256 with a fixed info string."""

    def __init__(self, info: bytes = HKDF_INFO):
        self.info = info

    def derive(self, shared_secret: bytes, salt: bytes, length: int) -> bytes:
        return hkdf_derive_key(shared_secret, salt=salt, info=self.info, length=length)
