"""Decoding of stored certificate records."""

import binascii
import logging
from typing import Tuple, Union

from cryptography import x509
from cryptography.exceptions import InvalidSignature, UnsupportedAlgorithm
from cryptography.hazmat.primitives import hashes, serialization
from cryptography.hazmat.primitives.asymmetric import dsa, ec, ed448, ed25519, rsa

from certfactory.exceptions import CorruptRecord
from certfactory.models.certificate import Certificate, DateRange
from certfactory.services.name_mapper import NameMapper

logger = logging.getLogger("certfactory")

PrivateKey = Union[
    ec.EllipticCurvePrivateKey,
    rsa.RSAPrivateKey,
    dsa.DSAPrivateKey,
    ed25519.Ed25519PrivateKey,
    ed448.Ed448PrivateKey,
]


class CertificateRecordReader:
    """Lazily decodes Certificate records.

    Nothing is cached: every call decodes the hex fields again, so a record
    whose data was replaced is always read fresh.
    """

    @staticmethod
    def _hex_bytes(field: str, data: str) -> bytes:
        try:
            return bytes.fromhex(data)
        except (ValueError, TypeError) as e:
            logger.error(f"Record field {field} is not valid hex: {e}")
            raise CorruptRecord(field, f"invalid hex: {e}") from e

    @staticmethod
    def load_certificate(record: Certificate) -> x509.Certificate:
        """
        Decode the certificate of a record.

        Args:
            record: Stored certificate record

        Returns:
            Parsed X.509 certificate

        Raises:
            CorruptRecord: If certificate_data is not hex-encoded DER
        """
        data = CertificateRecordReader._hex_bytes("certificate_data", record.certificate_data)
        try:
            return x509.load_der_x509_certificate(data)
        except ValueError as e:
            logger.error(f"Record certificate is not a valid DER certificate: {e}")
            raise CorruptRecord("certificate_data", f"invalid DER certificate: {e}") from e

    @staticmethod
    def load_private_key(record: Certificate) -> PrivateKey:
        """
        Decode the private key of a record.

        Args:
            record: Stored certificate record

        Returns:
            Private key object

        Raises:
            CorruptRecord: If key_data is not hex-encoded PKCS#8 DER
        """
        data = CertificateRecordReader._hex_bytes("key_data", record.key_data)
        try:
            return serialization.load_der_private_key(data, password=None)
        except (ValueError, TypeError, UnsupportedAlgorithm) as e:
            logger.error(f"Record key is not a valid DER private key: {e}")
            raise CorruptRecord("key_data", f"invalid DER private key: {e}") from e

    @staticmethod
    def decode(record: Certificate) -> Tuple[x509.Certificate, PrivateKey]:
        """
        Decode both the certificate and the private key of a record.

        Raises:
            CorruptRecord: If either field fails to decode
        """
        return (
            CertificateRecordReader.load_certificate(record),
            CertificateRecordReader.load_private_key(record),
        )

    @staticmethod
    def description(record: Certificate) -> str:
        """Human-readable subject of the decoded certificate, for display only."""
        cert = CertificateRecordReader.load_certificate(record)
        return NameMapper.describe(NameMapper.from_distinguished_name(cert.subject))

    @staticmethod
    def validity(record: Certificate) -> DateRange:
        """
        Validity window of the decoded certificate.

        Raises:
            CorruptRecord: If the certificate does not decode or its window is empty or inverted
        """
        cert = CertificateRecordReader.load_certificate(record)
        try:
            return DateRange(not_before=cert.not_valid_before_utc, not_after=cert.not_valid_after_utc)
        except ValueError as e:
            raise CorruptRecord(
                "certificate_data",
                f"invalid validity window {cert.not_valid_before_utc} to {cert.not_valid_after_utc}",
            ) from e

    @staticmethod
    def fingerprint_sha256(record: Certificate) -> str:
        """SHA-256 fingerprint of the certificate as colon-separated hex."""
        cert = CertificateRecordReader.load_certificate(record)
        return cert.fingerprint(hashes.SHA256()).hex(":").upper()

    @staticmethod
    def certificate_pem(record: Certificate) -> str:
        """PEM export of the certificate."""
        cert = CertificateRecordReader.load_certificate(record)
        return cert.public_bytes(serialization.Encoding.PEM).decode("ascii")

    @staticmethod
    def private_key_pem(record: Certificate) -> str:
        """Unencrypted PKCS#8 PEM export of the private key."""
        key = CertificateRecordReader.load_private_key(record)
        return key.private_bytes(
            encoding=serialization.Encoding.PEM,
            format=serialization.PrivateFormat.PKCS8,
            encryption_algorithm=serialization.NoEncryption(),
        ).decode("ascii")

    @staticmethod
    def verify_issued_by(record: Certificate, issuer: Certificate) -> bool:
        """
        Check that record's certificate names and is signed by issuer's certificate.

        Raises:
            CorruptRecord: If either record fails to decode
        """
        cert = CertificateRecordReader.load_certificate(record)
        issuer_cert = CertificateRecordReader.load_certificate(issuer)
        try:
            cert.verify_directly_issued_by(issuer_cert)
        except (ValueError, TypeError, InvalidSignature) as e:
            logger.debug(f"Certificate {record.serial} was not issued by {issuer.serial}: {e!r}")
            return False
        return True
