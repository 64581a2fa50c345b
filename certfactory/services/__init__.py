"""Service layer for certificate issuance."""

from .alternate_name_encoder import AlternateNameEncoder, AlternateNameSet
from .issuer_service import CertificateIssuer, issue_certificate
from .key_service import KeyService
from .name_mapper import NameMapper
from .record_service import CertificateRecordReader
from .usage_encoder import KeyUsageBit, KeyUsageEncoder
from .yaml_service import YAMLService

__all__ = [
    "NameMapper",
    "KeyUsageBit",
    "KeyUsageEncoder",
    "AlternateNameEncoder",
    "AlternateNameSet",
    "KeyService",
    "CertificateIssuer",
    "CertificateRecordReader",
    "issue_certificate",
    "YAMLService",
]
