"""
Shared pytest fixtures for AN token tests.
"""

import itertools

import pytest

from an import TokenCodec, KeyPair


FIXED_TIME_MS = 1755197841319


@pytest.fixture
def fixed_time_ms() -> int:
    """The millisecond timestamp returned by fixed_codec."""
    return FIXED_TIME_MS


@pytest.fixture
def codec() -> TokenCodec:
    """Default Ed25519 / SHA-256 codec reading the real clock."""
    return TokenCodec()


@pytest.fixture
def fixed_codec() -> TokenCodec:
    """Codec whose clock always reads FIXED_TIME_MS."""
    return TokenCodec(clock=lambda: FIXED_TIME_MS)


@pytest.fixture
def ticking_codec() -> TokenCodec:
    """Codec whose clock advances one millisecond per read."""
    ticks = itertools.count(FIXED_TIME_MS)
    return TokenCodec(clock=lambda: next(ticks))


@pytest.fixture
def keypair(codec: TokenCodec) -> str:
    """A fresh keypair string."""
    return codec.generate_keypair()


@pytest.fixture
def other_keypair(codec: TokenCodec) -> str:
    """A second, unrelated keypair string."""
    return codec.generate_keypair()


@pytest.fixture
def decoded_keypair(keypair: str) -> KeyPair:
    """The fixture keypair parsed into raw bytes."""
    return KeyPair.decode(keypair)


@pytest.fixture
def sample_hash(codec: TokenCodec) -> str:
    """Hash of a sample document, the usual thing to sign."""
    return codec.hash("The quick brown fox jumps over the lazy dog")
