"""
Protocol Parameters

Fixed constants for the sealed-text protocol. Both parties must use the same
values; nothing here is carried on the wire.

    Curve:      NIST P-256 (secp256r1)
    KDF:        HKDF-SHA256, empty info
    Cipher:     AES-GCM, 12-byte nonce, 16-byte tag
    Key size:   16 bytes (AES-128) by default
"""

from dataclasses import dataclass

from cryptography.hazmat.primitives.asymmetric import ec


# Constants
CURVE = ec.SECP256R1()      # P-256 curve
CURVE_ORDER = int(
    "FFFFFFFF00000000FFFFFFFFFFFFFFFFBCE6FAADA7179E84F3B9CAC2FC632551", 16
)
COORDINATE_SIZE = 32        # bytes per affine coordinate / private scalar
NONCE_SIZE = 12             # 96 bits for GCM
TAG_SIZE = 16               # 128 bits for GCM tag
KEY_SIZE = 16               # 128 bits
HKDF_INFO = b""
MIN_BLOB_SIZE = NONCE_SIZE + TAG_SIZE

VALID_KEY_SIZES = (16, 24, 32)


@dataclass(frozen=True)
class ProtocolParams:
    """
    Tunable derivation parameters.

    Changing either field produces keys that cannot open blobs sealed under
    the defaults.
    """
    key_size: int = KEY_SIZE
    hkdf_info: bytes = HKDF_INFO

    def __post_init__(self):
        if self.key_size not in VALID_KEY_SIZES:
            raise ValueError(
                f"key_size must be one of {VALID_KEY_SIZES}, got {self.key_size}"
            )
        if not isinstance(self.hkdf_info, bytes):
            raise ValueError("hkdf_info must be bytes")


DEFAULT_PARAMS = ProtocolParams()
