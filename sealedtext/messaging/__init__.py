# Secure Messaging Module
"""
Sealed point-to-point messages:
- AES-GCM authenticated encryption
- nonce || ciphertext || tag framing
- Base64 text envelope

Message format: [nonce (12) | ciphertext | tag (16)]
"""

from .cipher import AESGCMCipher, generate_nonce
from .framing import SealedBox, pack, unpack
from .sealer import (
    MessageSealer,
    seal_bytes,
    open_bytes,
    seal_text,
    open_text,
    try_seal_text,
    try_open_text,
)

__all__ = [
    'AESGCMCipher',
    'generate_nonce',
    'SealedBox',
    'pack',
    'unpack',
    'MessageSealer',
    'seal_bytes',
    'open_bytes',
    'seal_text',
    'open_text',
    'try_seal_text',
    'try_open_text',
]
