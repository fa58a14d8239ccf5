"""
Key Agreement Module

ECDH over NIST P-256 plus the key loading needed to feed it.

Accepted public key encodings:
    - 64 bytes:  x || y (raw representation)
    - 65 bytes:  0x04 || x || y (X9.62 uncompressed)
    - 33 bytes:  0x02/0x03 || x (X9.62 compressed)
    - PEM or DER SubjectPublicKeyInfo

Accepted private key encodings:
    - 32 bytes:  big-endian scalar d, 1 <= d < n
    - 97 bytes:  0x04 || x || y || d (X9.63)
    - PEM or DER PKCS#8 / SEC1, unencrypted

Every loaded key is checked to be on P-256. Invalid points are rejected by
``from_encoded_point`` before any scalar multiplication takes place.
"""

from dataclasses import dataclass
from typing import Optional, Union

from cryptography.exceptions import UnsupportedAlgorithm
from cryptography.hazmat.primitives import serialization
from cryptography.hazmat.primitives.asymmetric import ec

from ..config import CURVE, CURVE_ORDER, COORDINATE_SIZE
from ..errors import InvalidKey


UNCOMPRESSED_POINT_SIZE = 1 + 2 * COORDINATE_SIZE     # 65
COMPRESSED_POINT_SIZE = 1 + COORDINATE_SIZE           # 33
RAW_PUBLIC_SIZE = 2 * COORDINATE_SIZE                 # 64
X963_PRIVATE_SIZE = UNCOMPRESSED_POINT_SIZE + COORDINATE_SIZE  # 97

PEM_PREFIX = b"-----BEGIN"

_BYTES_TYPES = (bytes, bytearray, memoryview)


@dataclass
class KeyPair:
    """P-256 key pair container. ``private_key`` is None for a peer's key."""
    private_key: Optional[ec.EllipticCurvePrivateKey]
    public_key: ec.EllipticCurvePublicKey

    @classmethod
    def generate(cls) -> 'KeyPair':
        """Generate a new P-256 key pair."""
        private_key = ec.generate_private_key(CURVE)
        return cls(private_key, private_key.public_key())

    @classmethod
    def from_private_key(cls, key) -> 'KeyPair':
        """Build a pair from any private key form load_private_key accepts."""
        private_key = load_private_key(key)
        return cls(private_key, private_key.public_key())

    @classmethod
    def from_private_bytes(cls, data: bytes) -> 'KeyPair':
        """Build a pair from a 32-byte private scalar."""
        return cls.from_private_key(bytes(data))

    @classmethod
    def from_public_bytes(cls, data: bytes) -> 'KeyPair':
        """Create KeyPair from public key bytes (public key only)."""
        return cls(None, load_public_key(data))

    def public_bytes(self) -> bytes:
        """Get public key as bytes (uncompressed point)."""
        return self.public_key.public_bytes(
            encoding=serialization.Encoding.X962,
            format=serialization.PublicFormat.UncompressedPoint
        )

    def raw_public_bytes(self) -> bytes:
        """Get public key as 64 bytes, x || y."""
        return self.public_bytes()[1:]

    def private_bytes(self) -> bytes:
        """Get the private scalar as 32 big-endian bytes."""
        if self.private_key is None:
            raise ValueError("Private key not available")
        value = self.private_key.private_numbers().private_value
        return value.to_bytes(COORDINATE_SIZE, "big")


def _check_curve(key, role: str) -> None:
    if key.curve.name != CURVE.name:
        raise InvalidKey(f"{role} key is not on {CURVE.name}")


def _private_from_value(value: int) -> ec.EllipticCurvePrivateKey:
    if not 1 <= value < CURVE_ORDER:
        raise InvalidKey("private scalar is out of range")
    return ec.derive_private_key(value, CURVE)


def load_public_key(data: Union[bytes, KeyPair, ec.EllipticCurvePublicKey]
                    ) -> ec.EllipticCurvePublicKey:
    """
    Load and validate a P-256 public key.

    Args:
        data: Encoded public key, a KeyPair, or a key object

    Returns:
        Public key object on P-256

    Raises:
        InvalidKey: If the bytes do not decode to a point on P-256
        TypeError: If data is of an unsupported type
    """
    if isinstance(data, KeyPair):
        data = data.public_key
    if isinstance(data, ec.EllipticCurvePublicKey):
        _check_curve(data, "public")
        return data
    if not isinstance(data, _BYTES_TYPES):
        raise TypeError(f"unsupported public key type: {type(data).__name__}")

    data = bytes(data)
    try:
        if data.startswith(PEM_PREFIX):
            key = serialization.load_pem_public_key(data)
        elif len(data) == RAW_PUBLIC_SIZE:
            key = ec.EllipticCurvePublicKey.from_encoded_point(CURVE, b"\x04" + data)
        elif data[:1] in (b"\x02", b"\x03", b"\x04"):
            key = ec.EllipticCurvePublicKey.from_encoded_point(CURVE, data)
        else:
            key = serialization.load_der_public_key(data)
    except (ValueError, UnsupportedAlgorithm):
        raise InvalidKey("public key is not a valid P-256 point") from None

    if not isinstance(key, ec.EllipticCurvePublicKey):
        raise InvalidKey("public key is not an elliptic-curve key")
    _check_curve(key, "public")
    return key


def load_private_key(data: Union[bytes, KeyPair, ec.EllipticCurvePrivateKey]
                     ) -> ec.EllipticCurvePrivateKey:
    """
    Load and validate a P-256 private key.

    Raises:
        InvalidKey: If the scalar is out of range, the encoding is broken,
            or the key belongs to another curve
        TypeError: If data is of an unsupported type
    """
    if isinstance(data, KeyPair):
        if data.private_key is None:
            raise InvalidKey("key pair has no private key")
        data = data.private_key
    if isinstance(data, ec.EllipticCurvePrivateKey):
        _check_curve(data, "private")
        return data
    if not isinstance(data, _BYTES_TYPES):
        raise TypeError(f"unsupported private key type: {type(data).__name__}")

    data = bytes(data)
    if len(data) == COORDINATE_SIZE:
        return _private_from_value(int.from_bytes(data, "big"))

    if len(data) == X963_PRIVATE_SIZE and data[0] == 0x04:
        key = _private_from_value(int.from_bytes(data[UNCOMPRESSED_POINT_SIZE:], "big"))
        expected = KeyPair(key, key.public_key()).public_bytes()
        if expected != data[:UNCOMPRESSED_POINT_SIZE]:
            raise InvalidKey("X9.63 public part does not match private scalar")
        return key

    try:
        if data.startswith(PEM_PREFIX):
            key = serialization.load_pem_private_key(data, password=None)
        else:
            key = serialization.load_der_private_key(data, password=None)
    except (ValueError, TypeError, UnsupportedAlgorithm):
        raise InvalidKey("private key could not be decoded") from None

    if not isinstance(key, ec.EllipticCurvePrivateKey):
        raise InvalidKey("private key is not an elliptic-curve key")
    _check_curve(key, "private")
    return key


class ECDHKeyAgreement:
    """
    Elliptic Curve Diffie-Hellman key agreement using P-256.

    agree(a_priv, b_pub) == agree(b_priv, a_pub) for any two valid pairs.
    """

    curve_name = CURVE.name

    def agree(self, own_private_key, peer_public_key) -> bytes:
        """
        Derive the raw shared secret.

        Args:
            own_private_key: Caller's private key (any accepted form)
            peer_public_key: Counterpart's public key (any accepted form)

        Returns:
            Shared secret bytes (32 bytes for P-256)

        Raises:
            InvalidKey: If either key fails validation
        """
        private_key = load_private_key(own_private_key)
        public_key = load_public_key(peer_public_key)
        try:
            return private_key.exchange(ec.ECDH(), public_key)
        except ValueError:
            raise InvalidKey("key agreement rejected the key pair") from None
