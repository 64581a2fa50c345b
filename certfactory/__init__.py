"""Certificate Factory: X.509 certificate issuance engine."""

from .exceptions import (
    CertFactoryError,
    CorruptRecord,
    EncodingFailed,
    InvalidAlternateName,
    IssuanceError,
    KeyGenerationFailed,
    SigningFailed,
)
from .models import (
    AlternateName,
    AlternateNameType,
    Certificate,
    CertificateRequest,
    DateRange,
    KeyUsage,
    Name,
    StatusProviders,
)
from .services import CertificateIssuer, CertificateRecordReader, issue_certificate

__version__ = "1.0.0"

__all__ = [
    "Name",
    "DateRange",
    "AlternateName",
    "AlternateNameType",
    "KeyUsage",
    "StatusProviders",
    "CertificateRequest",
    "Certificate",
    "CertificateIssuer",
    "CertificateRecordReader",
    "issue_certificate",
    "CertFactoryError",
    "IssuanceError",
    "KeyGenerationFailed",
    "InvalidAlternateName",
    "SigningFailed",
    "EncodingFailed",
    "CorruptRecord",
]
