"""Data models for Certificate Factory."""

from .certificate import (
    AlternateName,
    AlternateNameType,
    Certificate,
    CertificateDescription,
    CertificateRequest,
    DateRange,
    IssueRequest,
    KeyUsage,
    Name,
    PemExport,
    StatusProviders,
)
from .config import AppConfig

__all__ = [
    "Name",
    "DateRange",
    "AlternateName",
    "AlternateNameType",
    "KeyUsage",
    "StatusProviders",
    "CertificateRequest",
    "Certificate",
    "IssueRequest",
    "CertificateDescription",
    "PemExport",
    "AppConfig",
]
