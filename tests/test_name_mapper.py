"""Tests for the name mapper."""

import pytest
from cryptography import x509
from cryptography.x509.oid import NameOID

from certfactory.exceptions import EncodingFailed
from certfactory.models.certificate import Name
from certfactory.services.name_mapper import NameMapper


@pytest.mark.unit
class TestNameMapper:
    """Test conversion between Name and x509.Name."""

    def test_to_distinguished_name(self, sample_ca_subject):
        """Test that every field lands in its attribute."""
        dn = NameMapper.to_distinguished_name(sample_ca_subject)

        assert dn.get_attributes_for_oid(NameOID.COMMON_NAME)[0].value == "Test Root CA"
        assert dn.get_attributes_for_oid(NameOID.ORGANIZATION_NAME)[0].value == "Test Organization"
        assert dn.get_attributes_for_oid(NameOID.LOCALITY_NAME)[0].value == "San Francisco"
        assert dn.get_attributes_for_oid(NameOID.STATE_OR_PROVINCE_NAME)[0].value == "California"
        assert dn.get_attributes_for_oid(NameOID.COUNTRY_NAME)[0].value == "US"

    def test_empty_fields_omitted(self):
        """Test that empty fields produce no attributes."""
        dn = NameMapper.to_distinguished_name(Name(common_name="only.example.com"))

        assert len(dn) == 1
        assert dn.rfc4514_string() == "CN=only.example.com"

    def test_empty_name(self):
        """Test that an empty Name maps to an empty DN."""
        assert len(NameMapper.to_distinguished_name(Name())) == 0

    def test_round_trip(self, sample_ca_subject):
        """Test that mapping there and back is lossless."""
        dn = NameMapper.to_distinguished_name(sample_ca_subject)

        assert NameMapper.from_distinguished_name(dn) == sample_ca_subject

    def test_first_value_wins(self):
        """Test that only the first value of a multi-valued attribute is kept."""
        dn = x509.Name(
            [
                x509.NameAttribute(NameOID.ORGANIZATION_NAME, "First Org"),
                x509.NameAttribute(NameOID.ORGANIZATION_NAME, "Second Org"),
                x509.NameAttribute(NameOID.COMMON_NAME, "example.com"),
            ]
        )

        name = NameMapper.from_distinguished_name(dn)

        assert name.organization == "First Org"
        assert name.common_name == "example.com"

    def test_missing_attributes_empty(self):
        """Test that absent attributes decode to empty strings."""
        dn = x509.Name([x509.NameAttribute(NameOID.COMMON_NAME, "example.com")])

        name = NameMapper.from_distinguished_name(dn)

        assert name == Name(common_name="example.com")
        assert name.country == ""

    def test_encoder_rejection(self):
        """Test that values refused by the encoder raise EncodingFailed."""
        with pytest.raises(EncodingFailed):
            NameMapper.to_distinguished_name(Name(country="Germany"))

    def test_describe(self):
        """Test display rendering."""
        assert NameMapper.describe(Name(common_name="example.com", country="DE")) == "CN=example.com, C=DE"
        assert NameMapper.describe(Name()) == ""
