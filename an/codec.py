"""
AN Token Codec - sign and open self-contained tokens.

Wire format (no delimiters, every boundary is computed from primitive sizes):

    keypair = base64(public_key) || base64(private_key)
    token   = base64(public_key) || base64(signature || timestamp_ms || data)

The signed message is the decimal millisecond timestamp followed directly by
the caller's data. Nothing in the token marks where the timestamp ends, so
``open`` returns the whole message and ``SignedMessage.split`` needs the
caller to say how long the data is.
"""

import logging
import time
from dataclasses import dataclass
from typing import Callable, Optional, Tuple, Union

from an import config
from an.encoding import b64decode, b64encode, encoded_length
from an.errors import (
    InvalidEncoding,
    InvalidKeyLength,
    InvalidMessage,
    SignatureVerificationFailed,
    TruncatedSignature,
)
from an.keys import KeyPair
from an.primitives import (
    HashPrimitive,
    SignaturePrimitive,
    get_hash_primitive,
    get_signature_primitive,
)


logger = logging.getLogger(__name__)


def _now_ms() -> int:
    return time.time_ns() // 1_000_000


def _utf8(text: str) -> bytes:
    try:
        return text.encode("utf-8")
    except UnicodeEncodeError as e:
        raise InvalidEncoding(f"Data is not encodable as UTF-8: {e}") from e


@dataclass(frozen=True)
class SignedMessage:
    """
    The verified content of a token.

    Attributes:
        public_key: Encoded public key slice the token was verified against.
        message: Timestamp digits immediately followed by the signed data.
    """

    public_key: str
    message: str

    def split(self, data_length: int) -> Tuple[int, str]:
        """
        Separate the timestamp from the data using the known data length.

        Args:
            data_length: Length of the application data in characters,
                e.g. 44 when the data is a SHA-256 hash from ``hash()``.

        Returns:
            (timestamp in milliseconds, data)

        Raises:
            InvalidMessage: If no timestamp digits remain in front of the data.
        """
        if data_length < 0:
            raise ValueError("data_length must not be negative")
        boundary = len(self.message) - data_length
        prefix = self.message[:boundary] if boundary > 0 else ""
        if not prefix or not (prefix.isascii() and prefix.isdigit()):
            raise InvalidMessage(
                f"No timestamp in front of {data_length} characters of data"
            )
        return int(prefix), self.message[boundary:]

    def timestamp_ms(self, data_length: int) -> int:
        """Signing time in milliseconds since the epoch."""
        return self.split(data_length)[0]

    def payload(self, data_length: int) -> str:
        """The signed data without its timestamp."""
        return self.split(data_length)[1]

    def endswith(self, data: str) -> bool:
        """True if the message carries ``data`` after at least one timestamp digit."""
        return len(self.message) > len(data) and self.message.endswith(data)

    def __str__(self) -> str:
        return self.message


class TokenCodec:
    """
    Encodes and decodes tokens for one signature primitive and one hash.

    Instances hold no mutable state and are safe to share between threads.

    Example:
        >>> codec = TokenCodec()
        >>> k = codec.generate_keypair()
        >>> token = codec.sign(codec.hash("Hello World"), k)
        >>> codec.open(token).endswith(codec.hash("Hello World"))
        True
    """

    def __init__(
        self,
        signature: Optional[SignaturePrimitive] = None,
        digest: Optional[HashPrimitive] = None,
        clock: Optional[Callable[[], int]] = None,
    ):
        """
        Args:
            signature: Signature primitive (default: Ed25519).
            digest: Content hash primitive (default: SHA-256).
            clock: Callable returning the current time in milliseconds.
        """
        self.signature = signature or get_signature_primitive("ed25519")
        self.digest = digest or get_hash_primitive("sha256")
        self._clock = clock or _now_ms

    @classmethod
    def from_config(cls) -> "TokenCodec":
        """Build a codec from the AN_* environment configuration."""
        return cls(
            signature=get_signature_primitive(config.SIGNATURE_ALGORITHM),
            digest=get_hash_primitive(config.HASH_ALGORITHM),
        )

    @property
    def public_key_length(self) -> int:
        """Characters of encoded public key at the start of every token and keypair."""
        return encoded_length(self.signature.public_key_size)

    @property
    def private_key_length(self) -> int:
        return encoded_length(self.signature.private_key_size)

    @property
    def keypair_length(self) -> int:
        return self.public_key_length + self.private_key_length

    def generate_keypair(self) -> str:
        """
        Create a new keypair string.

        Raises:
            KeyGenerationError: If the random source is unavailable.
        """
        return KeyPair.generate(self.signature).encode()

    def hash(self, data: Union[str, bytes]) -> str:
        """
        Base64 digest of ``data`` (strings are hashed as UTF-8).

        Raises:
            InvalidEncoding: If a string holds lone surrogates and has no UTF-8 form.
        """
        if isinstance(data, str):
            data = _utf8(data)
        return b64encode(self.digest.digest(data))

    def sign(self, data: str, keypair: str) -> str:
        """
        Sign ``data`` with the private key in ``keypair``.

        Args:
            data: Any string; usually the output of ``hash()``.
            keypair: Keypair string from ``generate_keypair()``.

        Returns:
            Token string. Two calls at different milliseconds never match.

        Raises:
            InvalidKeyLength: If the keypair string or private key is too short.
            InvalidEncoding: If the private key slice is not base64
                or ``data`` has no UTF-8 form.
        """
        pub_len = self.public_key_length
        if len(keypair) < self.keypair_length:
            raise InvalidKeyLength(
                f"Keypair must be at least {self.keypair_length} characters, got {len(keypair)}"
            )

        private_key = b64decode(keypair[pub_len:], "private key")
        if len(private_key) != self.signature.private_key_size:
            raise InvalidKeyLength(
                f"Private key must be {self.signature.private_key_size} bytes, "
                f"got {len(private_key)}"
            )

        message = _utf8(str(self._clock()) + data)
        sig = self.signature.sign(private_key, message)
        logger.debug(f"Signed {len(message)}-byte message with {self.signature.name}")
        return keypair[:pub_len] + b64encode(sig + message)

    def open_message(self, token: str) -> SignedMessage:
        """
        Verify a token and return its message with the public key it carried.

        Raises:
            InvalidMessage: If the token is shorter than the public key slice.
            InvalidEncoding: On malformed base64 or a non-UTF-8 message.
            TruncatedSignature: If the body is shorter than one signature.
            SignatureVerificationFailed: If the signature does not verify.
        """
        pub_len = self.public_key_length
        if len(token) < pub_len:
            raise InvalidMessage(
                f"Token must be at least {pub_len} characters, got {len(token)}"
            )

        public_slice = token[:pub_len]
        signed = b64decode(token[pub_len:], "token body")
        sig_size = self.signature.signature_size
        if len(signed) < sig_size:
            raise TruncatedSignature(
                f"Signed body is {len(signed)} bytes, shorter than a {sig_size}-byte signature"
            )
        sig, message = signed[:sig_size], signed[sig_size:]

        public_key = b64decode(public_slice, "public key")
        if len(public_key) != self.signature.public_key_size:
            raise InvalidEncoding(
                f"Public key must decode to {self.signature.public_key_size} bytes, "
                f"got {len(public_key)}"
            )

        if not self.signature.verify(public_key, message, sig):
            raise SignatureVerificationFailed("signature verification failed")

        try:
            text = message.decode("utf-8")
        except UnicodeDecodeError as e:
            raise InvalidEncoding(f"Signed message is not UTF-8: {e}") from e

        logger.debug(f"Opened {len(message)}-byte message with {self.signature.name}")
        return SignedMessage(public_key=public_slice, message=text)

    def open(self, token: str) -> str:
        """
        Verify a token and return ``timestamp_ms || data`` as one string.

        See open_message() for the errors raised.
        """
        return self.open_message(token).message


# =============================================================================
# Module-level API
# =============================================================================

_default_codec: Optional[TokenCodec] = None


def get_codec() -> TokenCodec:
    """Get or create the configured default codec."""
    global _default_codec
    if _default_codec is None:
        _default_codec = TokenCodec.from_config()
    return _default_codec


def generate_keypair() -> str:
    """Generate a keypair string with the default codec."""
    return get_codec().generate_keypair()


def hash_data(data: Union[str, bytes]) -> str:
    """Base64 digest of ``data`` with the default codec."""
    return get_codec().hash(data)


def sign(data: str, keypair: str) -> str:
    """Sign ``data`` with the default codec."""
    return get_codec().sign(data, keypair)


def open_token(token: str) -> str:
    """Open a token with the default codec."""
    return get_codec().open(token)
