# an/config.py
"""
Centralized configuration for the AN token codec.

Values are read from environment variables with sensible defaults so a
deployment can move to a different primitive without code changes.

Usage:
    from an.config import SIGNATURE_ALGORITHM, HASH_ALGORITHM

Environment Variables:
    AN_SIGNATURE_ALGORITHM: Signature primitive name (default: ed25519)
    AN_HASH_ALGORITHM: Content hash primitive name (default: sha256)

Tokens only interoperate between parties using the same primitives, so the
defaults match the published token format (Ed25519 keys, SHA-256 digests).
"""

import os
from typing import Dict, Final

# =============================================================================
# Primitive Selection
# =============================================================================

SIGNATURE_ALGORITHM: Final[str] = os.getenv(
    "AN_SIGNATURE_ALGORITHM",
    "ed25519"
).strip().lower()

HASH_ALGORITHM: Final[str] = os.getenv(
    "AN_HASH_ALGORITHM",
    "sha256"
).strip().lower()


# =============================================================================
# Helper Functions
# =============================================================================

def get_config() -> Dict[str, str]:
    """Return the active configuration as a plain dict."""
    return {
        "signature_algorithm": SIGNATURE_ALGORITHM,
        "hash_algorithm": HASH_ALGORITHM,
    }


def print_config() -> None:
    """Print current configuration (useful for debugging)."""
    print("AN Token Configuration:")
    print(f"  SIGNATURE_ALGORITHM: {SIGNATURE_ALGORITHM}")
    print(f"  HASH_ALGORITHM:      {HASH_ALGORITHM}")


if __name__ == "__main__":
    print_config()
