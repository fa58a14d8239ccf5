"""
Text envelope: UTF-8 and base64 conversions at the protocol boundary.

Base64 uses the standard RFC 4648 alphabet with padding. Decoding is strict:
characters outside the alphabet, including whitespace, are rejected, and so
is any text that is not the canonical encoding of its bytes (missing or
extra padding, nonzero trailing bits).
"""

import base64
import binascii
from typing import Union

from ..errors import DecodedTextInvalid, MalformedBlob


SaltLike = Union[bytes, bytearray, memoryview, str]


def b64e(blob: bytes) -> str:
    return base64.b64encode(blob).decode("ascii")


def b64d(text: str) -> bytes:
    """
    Decode an envelope back to the combined blob.

    Raises:
        MalformedBlob: If text is not valid padded base64
    """
    if not isinstance(text, str):
        raise TypeError("envelope must be str")
    try:
        blob = base64.b64decode(text, validate=True)
    except (binascii.Error, ValueError):
        raise MalformedBlob("envelope is not valid base64") from None
    if b64e(blob) != text:
        raise MalformedBlob("envelope is not valid base64")
    return blob


def encode_text(text: str) -> bytes:
    """UTF-8 encode plaintext. Lone surrogates raise DecodedTextInvalid."""
    if not isinstance(text, str):
        raise TypeError("plaintext must be str")
    try:
        return text.encode("utf-8")
    except UnicodeEncodeError:
        raise DecodedTextInvalid("plaintext cannot be encoded as UTF-8") from None


def decode_text(data: bytes) -> str:
    try:
        return data.decode("utf-8")
    except UnicodeDecodeError:
        raise DecodedTextInvalid("decrypted bytes are not valid UTF-8") from None


def normalize_salt(salt: SaltLike) -> bytes:
    """Return salt as bytes; str salts are UTF-8 encoded."""
    if isinstance(salt, str):
        return salt.encode("utf-8")
    if isinstance(salt, (bytes, bytearray, memoryview)):
        return bytes(salt)
    raise TypeError(f"salt must be bytes or str, not {type(salt).__name__}")
