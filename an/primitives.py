"""
AN Token Primitives - signature and content hash capabilities.

The codec never hard-codes key, signature or digest sizes. It asks the
primitive bound to it, so swapping Ed25519 for Ed448 (or SHA-256 for
SHA-512) changes every field width without touching the wire logic.
"""

import hashlib
from abc import ABC, abstractmethod
from typing import Dict, Tuple, Type

from cryptography.exceptions import InvalidSignature
from cryptography.hazmat.primitives.asymmetric.ed448 import (
    Ed448PrivateKey,
    Ed448PublicKey,
)
from cryptography.hazmat.primitives.asymmetric.ed25519 import (
    Ed25519PrivateKey,
    Ed25519PublicKey,
)
from cryptography.hazmat.primitives.serialization import (
    Encoding,
    NoEncryption,
    PrivateFormat,
    PublicFormat,
)


# =============================================================================
# Interfaces
# =============================================================================


class SignaturePrimitive(ABC):
    """Abstract asymmetric signature capability with fixed byte lengths."""

    name: str = ""
    public_key_size: int = 0
    private_key_size: int = 0
    signature_size: int = 0

    @abstractmethod
    def generate(self) -> Tuple[bytes, bytes]:
        """Create a new (public_key, private_key) pair from the OS random source."""
        pass

    @abstractmethod
    def sign(self, private_key: bytes, message: bytes) -> bytes:
        """Sign message bytes, returning exactly signature_size bytes."""
        pass

    @abstractmethod
    def verify(self, public_key: bytes, message: bytes, signature: bytes) -> bool:
        """Return True only if signature is valid for message under public_key."""
        pass


class HashPrimitive(ABC):
    """Abstract fixed-output-length content hash."""

    name: str = ""
    digest_size: int = 0

    @abstractmethod
    def digest(self, data: bytes) -> bytes:
        """Return the digest of data."""
        pass


# =============================================================================
# EdDSA (Ed25519 / Ed448)
# =============================================================================


class _EdDSAPrimitive(SignaturePrimitive):
    """
    Shared EdDSA implementation over the ``cryptography`` package.

    The private key travels as ``seed || public_key``, the NaCl layout, so a
    64-byte Ed25519 private key from Go or libsodium loads directly.
    """

    seed_size: int = 0
    _private_cls: Type = None
    _public_cls: Type = None

    def generate(self) -> Tuple[bytes, bytes]:
        key = self._private_cls.generate()
        seed = key.private_bytes(
            encoding=Encoding.Raw,
            format=PrivateFormat.Raw,
            encryption_algorithm=NoEncryption(),
        )
        public = key.public_key().public_bytes(
            encoding=Encoding.Raw, format=PublicFormat.Raw
        )
        return public, seed + public

    def sign(self, private_key: bytes, message: bytes) -> bytes:
        if len(private_key) != self.private_key_size:
            raise ValueError(
                f"{self.name} private key must be {self.private_key_size} bytes, "
                f"got {len(private_key)}"
            )
        key = self._private_cls.from_private_bytes(private_key[: self.seed_size])
        return key.sign(message)

    def verify(self, public_key: bytes, message: bytes, signature: bytes) -> bool:
        if len(public_key) != self.public_key_size:
            return False
        if len(signature) != self.signature_size:
            return False
        try:
            key = self._public_cls.from_public_bytes(public_key)
            key.verify(signature, message)
        except (InvalidSignature, ValueError):
            return False
        return True

    def seed_of(self, private_key: bytes) -> bytes:
        """Return the seed half of a private key."""
        return private_key[: self.seed_size]

    def public_from_seed(self, seed: bytes) -> bytes:
        """Derive the raw public key from a seed."""
        key = self._private_cls.from_private_bytes(seed)
        return key.public_key().public_bytes(
            encoding=Encoding.Raw, format=PublicFormat.Raw
        )


class Ed25519Primitive(_EdDSAPrimitive):
    """Ed25519 (RFC 8032): 32-byte public key, 64-byte private key, 64-byte signature."""

    name = "ed25519"
    jwk_curve = "Ed25519"
    seed_size = 32
    public_key_size = 32
    private_key_size = 64
    signature_size = 64
    _private_cls = Ed25519PrivateKey
    _public_cls = Ed25519PublicKey


class Ed448Primitive(_EdDSAPrimitive):
    """Ed448 (RFC 8032): 57-byte public key, 114-byte private key, 114-byte signature."""

    name = "ed448"
    jwk_curve = "Ed448"
    seed_size = 57
    public_key_size = 57
    private_key_size = 114
    signature_size = 114
    _private_cls = Ed448PrivateKey
    _public_cls = Ed448PublicKey


# =============================================================================
# Hashes
# =============================================================================


class HashlibPrimitive(HashPrimitive):
    """Content hash backed by ``hashlib``."""

    SUPPORTED = ("sha256", "sha512", "sha3_256", "blake2b")

    def __init__(self, name: str = "sha256"):
        if name not in self.SUPPORTED:
            raise ValueError(f"Unsupported hash algorithm: {name}")
        self.name = name
        self.digest_size = hashlib.new(name).digest_size

    def digest(self, data: bytes) -> bytes:
        return hashlib.new(self.name, data).digest()

    def __repr__(self) -> str:
        return f"HashlibPrimitive({self.name!r})"


# =============================================================================
# Registry
# =============================================================================


_SIGNATURE_PRIMITIVES: Dict[str, Type[SignaturePrimitive]] = {
    Ed25519Primitive.name: Ed25519Primitive,
    Ed448Primitive.name: Ed448Primitive,
}


def get_signature_primitive(name: str) -> SignaturePrimitive:
    """
    Look up a signature primitive by name.

    Raises:
        ValueError: If the name is not a known primitive.
    """
    try:
        cls = _SIGNATURE_PRIMITIVES[name.lower()]
    except KeyError:
        raise ValueError(f"Unsupported signature algorithm: {name}") from None
    return cls()


def get_hash_primitive(name: str) -> HashPrimitive:
    """
    Look up a hash primitive by name.

    Raises:
        ValueError: If the name is not a known hash.
    """
    return HashlibPrimitive(name.lower())


def available_signature_algorithms() -> Tuple[str, ...]:
    """Names accepted by get_signature_primitive()."""
    return tuple(_SIGNATURE_PRIMITIVES)
