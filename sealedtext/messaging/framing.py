"""
Combined-box framing.

Wire layout (no version byte, no algorithm identifier):

    [nonce (12 bytes) | ciphertext (N bytes) | tag (16 bytes)]

N equals the plaintext length. A blob shorter than nonce + tag cannot hold
even an empty message and is rejected before any decryption is attempted.
"""

from dataclasses import dataclass

from ..config import NONCE_SIZE, TAG_SIZE
from ..errors import MalformedBlob


@dataclass(frozen=True)
class SealedBox:
    """
    Container for sealed message components.

    Format: [nonce | ciphertext | tag]
    """
    nonce: bytes          # 12 bytes
    ciphertext: bytes     # Variable length
    tag: bytes            # 16 bytes

    def to_bytes(self) -> bytes:
        """Serialize to the combined representation."""
        return pack(self)

    @classmethod
    def from_bytes(cls, data: bytes,
                   nonce_size: int = NONCE_SIZE,
                   tag_size: int = TAG_SIZE) -> 'SealedBox':
        """Deserialize from the combined representation."""
        return unpack(data, nonce_size, tag_size)


def pack(sealed_box: SealedBox) -> bytes:
    """Concatenate nonce, ciphertext and tag."""
    return sealed_box.nonce + sealed_box.ciphertext + sealed_box.tag


def unpack(blob: bytes,
           nonce_size: int = NONCE_SIZE,
           tag_size: int = TAG_SIZE) -> SealedBox:
    """
    Split a combined blob at the fixed nonce and tag lengths.

    Args:
        blob: nonce || ciphertext || tag
        nonce_size: Nonce length of the cipher
        tag_size: Tag length of the cipher

    Returns:
        SealedBox; ciphertext is whatever lies between nonce and tag

    Raises:
        MalformedBlob: If blob is shorter than nonce_size + tag_size
    """
    blob = bytes(blob)
    if len(blob) < nonce_size + tag_size:
        raise MalformedBlob(
            f"blob too short: {len(blob)} bytes (minimum {nonce_size + tag_size})"
        )
    return SealedBox(
        nonce=blob[:nonce_size],
        ciphertext=blob[nonce_size:len(blob) - tag_size],
        tag=blob[len(blob) - tag_size:],
    )
