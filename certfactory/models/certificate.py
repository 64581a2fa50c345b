"""Certificate request and record models."""

from datetime import datetime, timezone
from enum import Enum
from typing import Optional

from pydantic import BaseModel, Field, field_validator, model_validator


class AlternateNameType(str, Enum):
    """Known alternate name types."""

    DNS = "dns"
    EMAIL = "email"
    IP = "ip"
    URI = "uri"


class Name(BaseModel):
    """Subject or issuer identity."""

    organization: str = ""
    city: str = ""
    province: str = ""
    country: str = ""
    common_name: str = ""

    class Config:
        """Pydantic config."""

        frozen = True
        json_schema_extra = {
            "example": {
                "organization": "ACME Corp",
                "city": "Frankfurt",
                "province": "Hessen",
                "country": "DE",
                "common_name": "ACME Root CA",
            }
        }


class DateRange(BaseModel):
    """Validity window of a certificate."""

    not_before: datetime
    not_after: datetime

    class Config:
        """Pydantic config."""

        frozen = True

    @field_validator("not_before", "not_after")
    @classmethod
    def assume_utc(cls, v: datetime) -> datetime:
        """Interpret naive datetimes as UTC and drop sub-second precision.

        X.509 times carry whole seconds, so the range is checked on the
        values that end up in the certificate.
        """
        if v.tzinfo is None:
            v = v.replace(tzinfo=timezone.utc)
        return v.replace(microsecond=0)

    @model_validator(mode="after")
    def check_order(self):
        """Reject empty and inverted ranges."""
        if self.not_before >= self.not_after:
            raise ValueError("not_before must be earlier than not_after")
        return self

    def is_valid(self) -> bool:
        """Return True if the current time lies strictly inside the range."""
        now = datetime.now(timezone.utc)
        return self.not_before < now < self.not_after


class AlternateName(BaseModel):
    """One subject alternative name entry.

    ``type`` is a free string: entries with a type other than the ones in
    ``AlternateNameType`` are accepted here and skipped during issuance.
    """

    type: str
    value: str

    class Config:
        """Pydantic config."""

        frozen = True


class KeyUsage(BaseModel):
    """Basic and extended key usage flags."""

    # Basic
    digital_signature: bool = False
    content_commitment: bool = False
    key_encipherment: bool = False
    data_encipherment: bool = False
    key_agreement: bool = False
    cert_sign: bool = False
    crl_sign: bool = False
    encipher_only: bool = False
    decipher_only: bool = False

    # Extended
    server_auth: bool = False
    client_auth: bool = False
    code_signing: bool = False
    email_protection: bool = False
    time_stamping: bool = False
    ocsp_signing: bool = False

    class Config:
        """Pydantic config."""

        frozen = True


class StatusProviders(BaseModel):
    """Certificate status endpoints advertised in the certificate."""

    crl: Optional[str] = None
    ocsp: Optional[str] = None

    class Config:
        """Pydantic config."""

        frozen = True


class CertificateRequest(BaseModel):
    """Declarative description of a certificate to issue."""

    subject: Name
    validity: DateRange
    alternate_names: list[AlternateName] = Field(default_factory=list)
    usage: KeyUsage = Field(default_factory=KeyUsage)
    is_certificate_authority: bool = False
    status_providers: StatusProviders = Field(default_factory=StatusProviders)

    class Config:
        """Pydantic config."""

        frozen = True
        json_schema_extra = {
            "example": {
                "subject": {"common_name": "www.example.com", "organization": "Example Inc", "country": "US"},
                "validity": {"not_before": "2025-01-01T00:00:00Z", "not_after": "2026-01-01T00:00:00Z"},
                "alternate_names": [
                    {"type": "dns", "value": "www.example.com"},
                    {"type": "ip", "value": "192.168.1.10"},
                ],
                "usage": {"digital_signature": True, "key_encipherment": True, "server_auth": True},
                "is_certificate_authority": False,
                "status_providers": {"crl": "http://ca.example.com/crl.der", "ocsp": None},
            }
        }


class Certificate(BaseModel):
    """Issued certificate and its private key, in a storage-agnostic form."""

    serial: str = Field(..., description="Serial number (decimal)")
    subject: Name
    is_certificate_authority: bool
    certificate_data: str = Field(..., description="DER-encoded certificate (hex)")
    key_data: str = Field(..., description="DER-encoded PKCS#8 private key (hex)")

    class Config:
        """Pydantic config."""

        frozen = True


class IssueRequest(BaseModel):
    """API request for issuing a certificate."""

    request: CertificateRequest
    issuer: Optional[Certificate] = Field(None, description="Issuing CA record; omit for a self-signed root")


class CertificateDescription(BaseModel):
    """API response describing a stored certificate record."""

    serial: str
    description: str
    is_certificate_authority: bool
    not_before: datetime
    not_after: datetime
    valid: bool
    fingerprint_sha256: str


class PemExport(BaseModel):
    """API response with PEM exports of a certificate record."""

    certificate: str
    private_key: str
