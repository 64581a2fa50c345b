"""Key pair and serial number generation."""

import logging
import secrets
from typing import Tuple

from cryptography.exceptions import UnsupportedAlgorithm
from cryptography.hazmat.primitives.asymmetric import ec

from certfactory.exceptions import KeyGenerationFailed

logger = logging.getLogger("certfactory")

# Named curve for every generated key
KEY_CURVE = ec.SECP256R1

# Exclusive upper bound of serial numbers
SERIAL_NUMBER_LIMIT = 1 << 128


class KeyService:
    """Service for generating key material and serial numbers."""

    @staticmethod
    def generate_key_pair() -> Tuple[ec.EllipticCurvePrivateKey, ec.EllipticCurvePublicKey]:
        """
        Generate an elliptic-curve key pair on KEY_CURVE.

        Returns:
            Tuple of (private_key, public_key)

        Raises:
            KeyGenerationFailed: If the secure random source is unavailable
        """
        try:
            private_key = ec.generate_private_key(KEY_CURVE())
        except (OSError, UnsupportedAlgorithm) as e:
            logger.error(f"Key generation failed: {e}")
            raise KeyGenerationFailed(f"Key generation failed: {e}") from e
        return private_key, private_key.public_key()

    @staticmethod
    def generate_serial() -> int:
        """
        Draw a random serial number in [1, SERIAL_NUMBER_LIMIT).

        Zero is excluded since certificate serials must be positive.

        Raises:
            KeyGenerationFailed: If the secure random source is unavailable
        """
        try:
            return secrets.randbelow(SERIAL_NUMBER_LIMIT - 1) + 1
        except (OSError, NotImplementedError) as e:
            logger.error(f"Serial number generation failed: {e}")
            raise KeyGenerationFailed(f"Serial number generation failed: {e}") from e
