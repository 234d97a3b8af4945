"""
AN Token Key Management - keypair generation and the keypair string format.

A keypair string is ``base64(public_key) || base64(private_key)`` with no
separator. For Ed25519 that is 44 + 88 = 132 characters.
"""

import logging
from dataclasses import dataclass
from typing import Optional

from jwcrypto import jwk
from jwcrypto.common import JWException, base64url_decode, base64url_encode

from an.encoding import b64decode, b64encode, encoded_length
from an.errors import InvalidEncoding, InvalidKeyLength, KeyGenerationError
from an.primitives import Ed25519Primitive, SignaturePrimitive


logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class KeyPair:
    """
    Raw public/private key bytes for one signature primitive.

    Attributes:
        public_key: Raw public key bytes.
        private_key: Raw private key bytes (``seed || public_key`` for EdDSA).
    """

    public_key: bytes
    private_key: bytes

    @classmethod
    def generate(cls, signature: Optional[SignaturePrimitive] = None) -> "KeyPair":
        """
        Generate a fresh keypair from the OS random source.

        Raises:
            KeyGenerationError: If the primitive cannot produce a key.
        """
        signature = signature or Ed25519Primitive()
        try:
            public_key, private_key = signature.generate()
        except Exception as e:
            raise KeyGenerationError(f"Could not generate {signature.name} keypair: {e}") from e
        logger.debug(f"Generated {signature.name} keypair")
        return cls(public_key=public_key, private_key=private_key)

    @classmethod
    def decode(cls, encoded: str, signature: Optional[SignaturePrimitive] = None) -> "KeyPair":
        """
        Parse a keypair string.

        The private key is everything after the public key slice. Characters
        appended to a padded key make the base64 invalid; an unpadded slice of
        the right width still fails if it decodes to the wrong number of bytes.

        Raises:
            InvalidKeyLength: If the string or either decoded key has the wrong length.
            InvalidEncoding: If either slice is not valid base64.
        """
        signature = signature or Ed25519Primitive()
        pub_len = encoded_length(signature.public_key_size)
        priv_len = encoded_length(signature.private_key_size)
        if len(encoded) < pub_len + priv_len:
            raise InvalidKeyLength(
                f"Keypair must be at least {pub_len + priv_len} characters, got {len(encoded)}"
            )

        public_key = b64decode(encoded[:pub_len], "public key")
        private_key = b64decode(encoded[pub_len:], "private key")
        if len(public_key) != signature.public_key_size:
            raise InvalidKeyLength(
                f"Public key must be {signature.public_key_size} bytes, got {len(public_key)}"
            )
        if len(private_key) != signature.private_key_size:
            raise InvalidKeyLength(
                f"Private key must be {signature.private_key_size} bytes, got {len(private_key)}"
            )
        return cls(public_key=public_key, private_key=private_key)

    def encode(self) -> str:
        """Return the keypair string."""
        return b64encode(self.public_key) + b64encode(self.private_key)

    @property
    def public_key_string(self) -> str:
        """The encoded public key, identical to the first slice of every token it signs."""
        return b64encode(self.public_key)

    def to_jwk(self, signature: Optional[SignaturePrimitive] = None) -> str:
        """
        Export as a private OKP JSON Web Key.

        Returns:
            JWK JSON string with ``kty``, ``crv``, ``x`` and ``d``.
        """
        signature = signature or Ed25519Primitive()
        curve = getattr(signature, "jwk_curve", None)
        if curve is None:
            raise ValueError(f"{signature.name} keys have no JWK representation")

        key = jwk.JWK(
            kty="OKP",
            crv=curve,
            x=base64url_encode(self.public_key),
            d=base64url_encode(signature.seed_of(self.private_key)),
        )
        return key.export_private()

    @classmethod
    def from_jwk(cls, key_json: str, signature: Optional[SignaturePrimitive] = None) -> "KeyPair":
        """
        Import a private OKP JSON Web Key.

        Raises:
            InvalidEncoding: If the JWK is malformed, public-only, or for another curve.
            InvalidKeyLength: If the key material has the wrong size.
        """
        signature = signature or Ed25519Primitive()
        curve = getattr(signature, "jwk_curve", None)
        if curve is None:
            raise ValueError(f"{signature.name} keys have no JWK representation")

        try:
            key = jwk.JWK.from_json(key_json)
        except (JWException, ValueError, TypeError) as e:
            raise InvalidEncoding(f"Invalid JWK: {e}") from e
        if key.get("kty") != "OKP" or key.get("crv") != curve:
            raise InvalidEncoding(f"Key must be an {curve} key (OKP with crv={curve})")
        if not key.get("d"):
            raise InvalidEncoding("JWK has no private component 'd'")

        seed = base64url_decode(key["d"])
        public_key = base64url_decode(key["x"])
        if len(seed) != signature.seed_size or len(public_key) != signature.public_key_size:
            raise InvalidKeyLength(f"JWK key material does not match {signature.name} sizes")
        if signature.public_from_seed(seed) != public_key:
            raise InvalidEncoding("JWK public key 'x' does not match private key 'd'")
        return cls(public_key=public_key, private_key=seed + public_key)

