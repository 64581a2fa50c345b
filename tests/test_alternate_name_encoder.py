"""Tests for the alternate name encoder."""

import ipaddress

import pytest
from cryptography import x509

from certfactory.exceptions import InvalidAlternateName
from certfactory.models.certificate import AlternateName
from certfactory.services.alternate_name_encoder import AlternateNameEncoder, AlternateNameSet


@pytest.mark.unit
class TestAlternateNameEncoder:
    """Test alternate name dispatch."""

    def test_grouping_preserves_order(self):
        """Test that entries are grouped by type in input order."""
        names = [
            AlternateName(type="dns", value="b.example.com"),
            AlternateName(type="ip", value="10.0.0.1"),
            AlternateName(type="dns", value="a.example.com"),
            AlternateName(type="email", value="ops@example.com"),
            AlternateName(type="ip", value="::1"),
            AlternateName(type="uri", value="spiffe://example.com/service"),
        ]

        result = AlternateNameEncoder.encode(names)

        assert result.dns_names == ["b.example.com", "a.example.com"]
        assert result.email_addresses == ["ops@example.com"]
        assert result.ip_addresses == [ipaddress.ip_address("10.0.0.1"), ipaddress.ip_address("::1")]
        assert result.uris == ["spiffe://example.com/service"]

    def test_dns_and_email_verbatim(self):
        """Test that DNS and email values are not validated."""
        result = AlternateNameEncoder.encode(
            [AlternateName(type="dns", value="not a hostname"), AlternateName(type="email", value="nobody")]
        )

        assert result.dns_names == ["not a hostname"]
        assert result.email_addresses == ["nobody"]

    def test_unknown_type_skipped(self):
        """Test that unknown types are dropped without error."""
        result = AlternateNameEncoder.encode(
            [AlternateName(type="carrier-pigeon", value="x"), AlternateName(type="DNS", value="upper.example.com")]
        )

        assert result.is_empty()
        assert result.to_extension() is None

    @pytest.mark.parametrize("value", ["not-an-ip", "256.1.1.1", "", "10.0.0.1/24"])
    def test_invalid_ip(self, value):
        """Test that unparsable IPs raise InvalidAlternateName."""
        with pytest.raises(InvalidAlternateName) as exc_info:
            AlternateNameEncoder.encode([AlternateName(type="ip", value=value)])

        assert exc_info.value.name_type == "ip"

    @pytest.mark.parametrize("value", ["http://[::1", "http://example.com:port/", "http://exa\nmple.com", "http://例え.jp"])
    def test_invalid_uri(self, value):
        """Test that unparsable URIs raise InvalidAlternateName."""
        with pytest.raises(InvalidAlternateName) as exc_info:
            AlternateNameEncoder.encode([AlternateName(type="uri", value=value)])

        assert exc_info.value.name_type == "uri"

    def test_relative_uri_reference_accepted(self):
        """Test that any reference urlsplit accepts is kept verbatim."""
        result = AlternateNameEncoder.encode([AlternateName(type="uri", value="not a uri")])

        assert result.uris == ["not a uri"]

    def test_error_aborts_whole_list(self):
        """Test that one invalid entry fails the whole encoding."""
        names = [AlternateName(type="dns", value="ok.example.com"), AlternateName(type="ip", value="bad")]

        with pytest.raises(InvalidAlternateName):
            AlternateNameEncoder.encode(names)

    def test_to_extension_order(self):
        """Test that the extension groups DNS, email, IP, URI."""
        names = AlternateNameSet(
            dns_names=["example.com"],
            email_addresses=["a@example.com"],
            ip_addresses=[ipaddress.ip_address("192.0.2.1")],
            uris=["https://example.com/"],
        )

        san = names.to_extension()

        assert [type(n) for n in san] == [
            x509.DNSName,
            x509.RFC822Name,
            x509.IPAddress,
            x509.UniformResourceIdentifier,
        ]
