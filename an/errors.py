"""
AN Token Errors.

Every failure of the codec surfaces as one of these exceptions. Decoding
problems subclass ValueError; a failed signature check does not, so it can
never be caught by accident as a malformed-input error.
"""


class AnError(Exception):
    """Base class for all token codec errors."""


class KeyGenerationError(AnError):
    """The secure random source could not produce a new keypair."""


class InvalidKeyLength(AnError, ValueError):
    """The keypair string (or a decoded key) has the wrong length."""


class InvalidEncoding(AnError, ValueError):
    """Malformed base64 or non-text message content."""


class InvalidMessage(AnError, ValueError):
    """The token is shorter than the encoded public key slice."""


class TruncatedSignature(AnError, ValueError):
    """The decoded token body is shorter than one signature."""


class SignatureVerificationFailed(AnError):
    """The signature does not match the message and embedded public key."""
