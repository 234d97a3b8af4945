"""
Tests for environment configuration and the module-level API.
"""

import importlib

import pytest

import an
from an import config, codec as codec_module
from an import Ed448Primitive, HashlibPrimitive, InvalidKeyLength, InvalidMessage, TokenCodec


@pytest.fixture
def reset_default_codec(monkeypatch):
    """Drop the cached default codec before and after the test."""
    monkeypatch.setattr(codec_module, "_default_codec", None)
    yield
    codec_module._default_codec = None


class TestConfig:
    """Tests for an.config."""

    def test_defaults(self, monkeypatch):
        """Unset variables fall back to Ed25519 and SHA-256."""
        monkeypatch.delenv("AN_SIGNATURE_ALGORITHM", raising=False)
        monkeypatch.delenv("AN_HASH_ALGORITHM", raising=False)
        importlib.reload(config)
        assert config.get_config() == {
            "signature_algorithm": "ed25519",
            "hash_algorithm": "sha256",
        }

    def test_env_override(self, monkeypatch):
        """Variables are read at import and normalized to lower case."""
        monkeypatch.setenv("AN_SIGNATURE_ALGORITHM", " Ed448 ")
        monkeypatch.setenv("AN_HASH_ALGORITHM", "SHA512")
        try:
            importlib.reload(config)
            assert config.SIGNATURE_ALGORITHM == "ed448"
            assert config.HASH_ALGORITHM == "sha512"
        finally:
            monkeypatch.undo()
            importlib.reload(config)

    def test_from_config(self, monkeypatch):
        """TokenCodec.from_config() uses the configured primitives."""
        monkeypatch.setattr(config, "SIGNATURE_ALGORITHM", "ed448")
        monkeypatch.setattr(config, "HASH_ALGORITHM", "sha512")
        codec = TokenCodec.from_config()
        assert isinstance(codec.signature, Ed448Primitive)
        assert isinstance(codec.digest, HashlibPrimitive)
        assert codec.digest.name == "sha512"

    def test_from_config_unknown(self, monkeypatch):
        """An unknown configured algorithm raises ValueError."""
        monkeypatch.setattr(config, "SIGNATURE_ALGORITHM", "rsa")
        with pytest.raises(ValueError):
            TokenCodec.from_config()

    def test_print_config(self, capsys):
        """print_config() lists both settings."""
        config.print_config()
        out = capsys.readouterr().out
        assert "SIGNATURE_ALGORITHM" in out
        assert "HASH_ALGORITHM" in out


class TestModuleAPI:
    """Tests for the package-level functions."""

    def test_full_flow(self, reset_default_codec):
        """generate_keypair, hash_data, sign and open_token work together."""
        k = an.generate_keypair()
        assert len(k) == 132
        h = an.hash_data("Hello World")
        assert h == "pZGm1Av0IEBKARczz7exkNYsZb8LzaMrV7J32a2fFG4="
        opened = an.open_token(an.sign(h, k))
        assert opened.endswith(h)

    def test_default_codec_cached(self, reset_default_codec):
        """get_codec() returns the same instance each time."""
        assert an.get_codec() is an.get_codec()

    def test_default_codec_follows_config(self, reset_default_codec, monkeypatch):
        """The default codec is built from configuration on first use."""
        monkeypatch.setattr(config, "SIGNATURE_ALGORITHM", "ed448")
        assert len(an.generate_keypair()) == 228

    def test_negative_inputs(self, reset_default_codec):
        """Module functions raise the documented errors."""
        with pytest.raises(InvalidKeyLength):
            an.sign("x", "")
        with pytest.raises(InvalidMessage):
            an.open_token("")

    def test_version(self):
        """Package exposes a version string."""
        assert isinstance(an.__version__, str)
