"""Mapping between subject names and X.509 distinguished names."""

import logging

from cryptography import x509
from cryptography.x509.oid import NameOID

from certfactory.exceptions import EncodingFailed
from certfactory.models.certificate import Name

logger = logging.getLogger("certfactory")

# Attribute order used when encoding a distinguished name
NAME_ATTRIBUTES = [
    ("country", NameOID.COUNTRY_NAME),
    ("organization", NameOID.ORGANIZATION_NAME),
    ("city", NameOID.LOCALITY_NAME),
    ("province", NameOID.STATE_OR_PROVINCE_NAME),
    ("common_name", NameOID.COMMON_NAME),
]

# Display order and labels used by describe()
DESCRIPTION_LABELS = [
    ("common_name", "CN"),
    ("organization", "O"),
    ("city", "L"),
    ("province", "ST"),
    ("country", "C"),
]


class NameMapper:
    """Converts subject names to and from distinguished names."""

    @staticmethod
    def to_distinguished_name(name: Name) -> x509.Name:
        """
        Build a distinguished name from a subject name.

        Empty fields are left out. Field contents are not validated here;
        whatever the X.509 encoder refuses is reported as EncodingFailed.

        Args:
            name: Subject name

        Returns:
            X.509 Name object

        Raises:
            EncodingFailed: If an attribute value cannot be encoded
        """
        attributes = []
        for field, oid in NAME_ATTRIBUTES:
            value = getattr(name, field)
            if not value:
                continue
            try:
                attributes.append(x509.NameAttribute(oid, value))
            except ValueError as e:
                logger.error(f"Cannot encode name attribute {field}={value!r}: {e}")
                raise EncodingFailed(f"Cannot encode {field} {value!r}: {e}") from e
        return x509.Name(attributes)

    @staticmethod
    def from_distinguished_name(dn: x509.Name) -> Name:
        """
        Build a subject name from a distinguished name.

        Only the first value of a multi-valued attribute is kept.

        Args:
            dn: X.509 Name object

        Returns:
            Subject name
        """
        values = {}
        for field, oid in NAME_ATTRIBUTES:
            attrs = dn.get_attributes_for_oid(oid)
            if attrs:
                values[field] = attrs[0].value
        return Name(**values)

    @staticmethod
    def describe(name: Name) -> str:
        """Render the non-empty fields of a name for display."""
        parts = []
        for field, label in DESCRIPTION_LABELS:
            value = getattr(name, field)
            if value:
                parts.append(f"{label}={value}")
        return ", ".join(parts)
