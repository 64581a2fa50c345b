"""Tests for key and serial generation."""

import pytest
from cryptography.hazmat.primitives.asymmetric import ec

from certfactory.exceptions import KeyGenerationFailed
from certfactory.services import key_service
from certfactory.services.key_service import SERIAL_NUMBER_LIMIT, KeyService


@pytest.mark.unit
class TestKeyService:
    """Test key material generation."""

    def test_generate_key_pair(self):
        """Test P-256 key pair generation."""
        private_key, public_key = KeyService.generate_key_pair()

        assert isinstance(private_key, ec.EllipticCurvePrivateKey)
        assert isinstance(private_key.curve, ec.SECP256R1)
        assert public_key.public_numbers() == private_key.public_key().public_numbers()

    def test_key_pairs_differ(self):
        """Test that each call yields a fresh key."""
        first, _ = KeyService.generate_key_pair()
        second, _ = KeyService.generate_key_pair()

        assert first.private_numbers().private_value != second.private_numbers().private_value

    def test_serial_range(self):
        """Test that serials are positive and below 2**128."""
        for _ in range(1000):
            serial = KeyService.generate_serial()
            assert 0 < serial < SERIAL_NUMBER_LIMIT

    def test_serials_distinct(self):
        """Test that 10,000 serials are all distinct."""
        serials = {KeyService.generate_serial() for _ in range(10000)}

        assert len(serials) == 10000

    def test_serial_uses_full_width(self):
        """Test that serials are not confined to a small range."""
        assert max(KeyService.generate_serial() for _ in range(100)) > 1 << 120

    def test_serial_random_source_unavailable(self, monkeypatch):
        """Test that random source failures raise KeyGenerationFailed."""

        def unavailable(*args, **kwargs):
            raise NotImplementedError("no secure random source")

        monkeypatch.setattr(key_service.secrets, "randbelow", unavailable)

        with pytest.raises(KeyGenerationFailed) as exc_info:
            KeyService.generate_serial()

        assert exc_info.value.stage == "key_generation"
