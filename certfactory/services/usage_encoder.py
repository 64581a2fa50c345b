"""Key usage and extended key usage encoding."""

from enum import IntFlag
from typing import List, Optional

from cryptography import x509
from cryptography.x509.oid import ExtendedKeyUsageOID, ObjectIdentifier

from certfactory.models.certificate import KeyUsage


class KeyUsageBit(IntFlag):
    """RFC 5280 key usage bits."""

    DIGITAL_SIGNATURE = 1 << 0
    CONTENT_COMMITMENT = 1 << 1
    KEY_ENCIPHERMENT = 1 << 2
    DATA_ENCIPHERMENT = 1 << 3
    KEY_AGREEMENT = 1 << 4
    CERT_SIGN = 1 << 5
    CRL_SIGN = 1 << 6
    ENCIPHER_ONLY = 1 << 7
    DECIPHER_ONLY = 1 << 8


BASIC_USAGE_BITS = [
    ("digital_signature", KeyUsageBit.DIGITAL_SIGNATURE),
    ("content_commitment", KeyUsageBit.CONTENT_COMMITMENT),
    ("key_encipherment", KeyUsageBit.KEY_ENCIPHERMENT),
    ("data_encipherment", KeyUsageBit.DATA_ENCIPHERMENT),
    ("key_agreement", KeyUsageBit.KEY_AGREEMENT),
    ("cert_sign", KeyUsageBit.CERT_SIGN),
    ("crl_sign", KeyUsageBit.CRL_SIGN),
    ("encipher_only", KeyUsageBit.ENCIPHER_ONLY),
    ("decipher_only", KeyUsageBit.DECIPHER_ONLY),
]

# Encoding order of extended usages. Fixed, independent of how the flags were set.
EXTENDED_USAGE_OIDS = [
    ("server_auth", ExtendedKeyUsageOID.SERVER_AUTH),
    ("client_auth", ExtendedKeyUsageOID.CLIENT_AUTH),
    ("code_signing", ExtendedKeyUsageOID.CODE_SIGNING),
    ("email_protection", ExtendedKeyUsageOID.EMAIL_PROTECTION),
    ("time_stamping", ExtendedKeyUsageOID.TIME_STAMPING),
    ("ocsp_signing", ExtendedKeyUsageOID.OCSP_SIGNING),
]


class KeyUsageEncoder:
    """Encodes KeyUsage flags into X.509 key usage values."""

    @staticmethod
    def encode_basic(usage: KeyUsage) -> KeyUsageBit:
        """
        OR together one bit per set basic usage flag.

        Args:
            usage: Key usage flags

        Returns:
            Key usage bitmask (zero if no basic flag is set)
        """
        bits = KeyUsageBit(0)
        for field, bit in BASIC_USAGE_BITS:
            if getattr(usage, field):
                bits |= bit
        return bits

    @staticmethod
    def encode_extended(usage: KeyUsage) -> List[ObjectIdentifier]:
        """
        List the OIDs of the set extended usage flags, in fixed order.

        Args:
            usage: Key usage flags

        Returns:
            Extended key usage OIDs (empty if no extended flag is set)
        """
        return [oid for field, oid in EXTENDED_USAGE_OIDS if getattr(usage, field)]

    @staticmethod
    def to_key_usage_extension(bits: KeyUsageBit) -> Optional[x509.KeyUsage]:
        """
        Convert a bitmask into a KeyUsage extension value.

        Raises:
            ValueError: If encipherOnly or decipherOnly is set without keyAgreement
        """
        if not bits:
            return None
        return x509.KeyUsage(
            digital_signature=bool(bits & KeyUsageBit.DIGITAL_SIGNATURE),
            content_commitment=bool(bits & KeyUsageBit.CONTENT_COMMITMENT),
            key_encipherment=bool(bits & KeyUsageBit.KEY_ENCIPHERMENT),
            data_encipherment=bool(bits & KeyUsageBit.DATA_ENCIPHERMENT),
            key_agreement=bool(bits & KeyUsageBit.KEY_AGREEMENT),
            key_cert_sign=bool(bits & KeyUsageBit.CERT_SIGN),
            crl_sign=bool(bits & KeyUsageBit.CRL_SIGN),
            encipher_only=bool(bits & KeyUsageBit.ENCIPHER_ONLY),
            decipher_only=bool(bits & KeyUsageBit.DECIPHER_ONLY),
        )

    @staticmethod
    def to_extended_key_usage_extension(oids: List[ObjectIdentifier]) -> Optional[x509.ExtendedKeyUsage]:
        """Convert an OID list into an ExtendedKeyUsage extension value."""
        if not oids:
            return None
        return x509.ExtendedKeyUsage(oids)
