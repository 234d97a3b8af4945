"""
AN - compact signed tokens.

Generate a keypair, hash arbitrary data, sign it with a millisecond
timestamp, and open the resulting token with nothing but the token itself:
the public key rides at the front of every token.
"""

__version__ = "1.0.0"

# Core codec
from .codec import (
    TokenCodec,
    SignedMessage,
    get_codec,
    generate_keypair,
    hash_data,
    sign,
    open_token,
)

# Key management
from .keys import KeyPair

# Primitives
from .primitives import (
    SignaturePrimitive,
    HashPrimitive,
    Ed25519Primitive,
    Ed448Primitive,
    HashlibPrimitive,
    get_signature_primitive,
    get_hash_primitive,
    available_signature_algorithms,
)

# Errors
from .errors import (
    AnError,
    KeyGenerationError,
    InvalidKeyLength,
    InvalidEncoding,
    InvalidMessage,
    TruncatedSignature,
    SignatureVerificationFailed,
)


__all__ = [
    "__version__",
    # Core
    "TokenCodec",
    "SignedMessage",
    "get_codec",
    "generate_keypair",
    "hash_data",
    "sign",
    "open_token",
    # Key management
    "KeyPair",
    # Primitives
    "SignaturePrimitive",
    "HashPrimitive",
    "Ed25519Primitive",
    "Ed448Primitive",
    "HashlibPrimitive",
    "get_signature_primitive",
    "get_hash_primitive",
    "available_signature_algorithms",
    # Errors
    "AnError",
    "KeyGenerationError",
    "InvalidKeyLength",
    "InvalidEncoding",
    "InvalidMessage",
    "TruncatedSignature",
    "SignatureVerificationFailed",
]
