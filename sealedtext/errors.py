"""
Error taxonomy for sealing and opening messages.

Every failure the protocol can report is a SealError subclass with a fixed
ErrorKind. Messages never include key material, shared secrets or plaintext.
"""

from dataclasses import dataclass
from enum import Enum
from typing import Any, Optional


class ErrorKind(Enum):
    """Kinds of failure surfaced to callers."""
    INVALID_KEY = "invalid_key"
    MALFORMED_BLOB = "malformed_blob"
    AUTHENTICATION_FAILED = "authentication_failed"
    DECODED_TEXT_INVALID = "decoded_text_invalid"
    RANDOMNESS_UNAVAILABLE = "randomness_unavailable"
    DERIVATION_FAILED = "derivation_failed"


class SealError(Exception):
    """Base class for all protocol failures."""
    kind: ErrorKind


class InvalidKey(SealError):
    """Key material is malformed, off-curve, or on the wrong curve."""
    kind = ErrorKind.INVALID_KEY


class MalformedBlob(SealError):
    """Input is not valid base64 or too short to hold nonce and tag."""
    kind = ErrorKind.MALFORMED_BLOB


class AuthenticationFailed(SealError):
    """Tag did not verify. Wrong key, wrong salt and tampering look the same."""
    kind = ErrorKind.AUTHENTICATION_FAILED


class DecodedTextInvalid(SealError):
    """Plaintext bytes are not valid UTF-8."""
    kind = ErrorKind.DECODED_TEXT_INVALID


class RandomnessUnavailable(SealError):
    """The OS random source failed. Fatal for the operation."""
    kind = ErrorKind.RANDOMNESS_UNAVAILABLE


class DerivationFailed(SealError):
    """HKDF could not produce a key."""
    kind = ErrorKind.DERIVATION_FAILED


@dataclass(frozen=True)
class Result:
    """
    Outcome of a try_* operation.

    Exactly one of ``value`` and ``error`` is set.
    """
    success: bool
    value: Any = None
    error: Optional[SealError] = None

    @classmethod
    def ok(cls, value: Any) -> 'Result':
        return cls(True, value, None)

    @classmethod
    def fail(cls, error: SealError) -> 'Result':
        return cls(False, None, error)

    @property
    def kind(self) -> Optional[ErrorKind]:
        """Error kind, or None on success."""
        return self.error.kind if self.error is not None else None

    def unwrap(self) -> Any:
        """Return the value or raise the stored error."""
        if not self.success:
            raise self.error
        return self.value
