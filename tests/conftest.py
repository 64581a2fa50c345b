"""Pytest configuration and shared fixtures."""

from datetime import datetime, timedelta, timezone

import pytest
from cryptography import x509
from cryptography.hazmat.primitives import hashes, serialization
from cryptography.hazmat.primitives.asymmetric import ec
from cryptography.x509.oid import NameOID
from fastapi.testclient import TestClient

from certfactory.models.certificate import (
    AlternateName,
    Certificate,
    CertificateRequest,
    DateRange,
    KeyUsage,
    Name,
    StatusProviders,
)
from certfactory.services.issuer_service import CertificateIssuer


@pytest.fixture
def validity():
    """Create a validity window around now."""
    now = datetime.now(timezone.utc)
    return DateRange(not_before=now - timedelta(days=1), not_after=now + timedelta(days=365))


@pytest.fixture
def sample_ca_subject():
    """Create a sample CA subject."""
    return Name(
        common_name="Test Root CA",
        organization="Test Organization",
        city="San Francisco",
        province="California",
        country="US",
    )


@pytest.fixture
def sample_cert_subject():
    """Create a sample certificate subject."""
    return Name(common_name="test.example.com", organization="Test Organization", country="US")


@pytest.fixture
def sample_root_request(sample_ca_subject, validity):
    """Create a sample root CA request."""
    return CertificateRequest(
        subject=sample_ca_subject,
        validity=validity,
        usage=KeyUsage(digital_signature=True, cert_sign=True, crl_sign=True),
        is_certificate_authority=True,
    )


@pytest.fixture
def sample_cert_request(sample_cert_subject, validity):
    """Create a sample server certificate request."""
    return CertificateRequest(
        subject=sample_cert_subject,
        validity=validity,
        alternate_names=[
            AlternateName(type="dns", value="test.example.com"),
            AlternateName(type="ip", value="192.168.1.100"),
            AlternateName(type="dns", value="*.test.example.com"),
            AlternateName(type="email", value="admin@example.com"),
            AlternateName(type="uri", value="https://test.example.com/"),
        ],
        usage=KeyUsage(digital_signature=True, key_encipherment=True, server_auth=True),
        status_providers=StatusProviders(crl="http://ca.example.com/crl.der", ocsp="http://ocsp.example.com"),
    )


@pytest.fixture
def created_root_ca(sample_root_request):
    """Issue a self-signed root CA."""
    return CertificateIssuer.issue(sample_root_request)


@pytest.fixture
def created_server_cert(sample_cert_request, created_root_ca):
    """Issue a server certificate under the root CA."""
    return CertificateIssuer.issue(sample_cert_request, created_root_ca)


@pytest.fixture
def empty_window_record():
    """Build a self-signed record whose notBefore equals notAfter, as a foreign tool might."""
    key = ec.generate_private_key(ec.SECP256R1())
    name = x509.Name([x509.NameAttribute(NameOID.COMMON_NAME, "Empty Window")])
    instant = datetime(2030, 1, 1, tzinfo=timezone.utc)
    cert = (
        x509.CertificateBuilder()
        .subject_name(name)
        .issuer_name(name)
        .public_key(key.public_key())
        .serial_number(x509.random_serial_number())
        .not_valid_before(instant)
        .not_valid_after(instant)
        .sign(key, hashes.SHA256())
    )
    key_der = key.private_bytes(
        serialization.Encoding.DER, serialization.PrivateFormat.PKCS8, serialization.NoEncryption()
    )
    return Certificate(
        serial=str(cert.serial_number),
        subject=Name(common_name="Empty Window"),
        is_certificate_authority=True,
        certificate_data=cert.public_bytes(serialization.Encoding.DER).hex(),
        key_data=key_der.hex(),
    )


@pytest.fixture
def client():
    """Create FastAPI test client."""
    from main import app

    with TestClient(app) as client:
        yield client
