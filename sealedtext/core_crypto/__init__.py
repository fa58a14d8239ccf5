# Core Cryptography Module
"""
Key agreement and key derivation:
- ECDH over NIST P-256 with strict key validation
- HKDF-SHA256 key derivation
- Capability protocols for swapping either one
"""

from .interfaces import AuthenticatedCipher, KeyAgreement, KeyDerivation
from .kdf import HKDFSHA256, hkdf_derive_key
from .key_agreement import (
    ECDHKeyAgreement,
    KeyPair,
    load_private_key,
    load_public_key,
)

__all__ = [
    'AuthenticatedCipher',
    'KeyAgreement',
    'KeyDerivation',
    'HKDFSHA256',
    'hkdf_derive_key',
    'ECDHKeyAgreement',
    'KeyPair',
    'load_private_key',
    'load_public_key',
]
