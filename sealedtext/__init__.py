"""
SealedText - authenticated point-to-point text encryption.

ECDH (P-256) + HKDF-SHA256 + AES-GCM, delivered as a base64 string of
nonce || ciphertext || tag.
"""

from .config import DEFAULT_PARAMS, ProtocolParams
from .core_crypto.key_agreement import KeyPair, load_private_key, load_public_key
from .errors import (
    ErrorKind,
    Result,
    SealError,
    InvalidKey,
    MalformedBlob,
    AuthenticationFailed,
    DecodedTextInvalid,
    RandomnessUnavailable,
    DerivationFailed,
)
from .messaging.sealer import (
    MessageSealer,
    seal_bytes,
    open_bytes,
    seal_text,
    open_text,
    try_seal_text,
    try_open_text,
)

__version__ = "1.0.0"

__all__ = [
    'DEFAULT_PARAMS',
    'ProtocolParams',
    'KeyPair',
    'load_private_key',
    'load_public_key',
    'ErrorKind',
    'Result',
    'SealError',
    'InvalidKey',
    'MalformedBlob',
    'AuthenticationFailed',
    'DecodedTextInvalid',
    'RandomnessUnavailable',
    'DerivationFailed',
    'MessageSealer',
    'seal_bytes',
    'open_bytes',
    'seal_text',
    'open_text',
    'try_seal_text',
    'try_open_text',
]
