"""Subject alternative name encoding."""

import ipaddress
import logging
from dataclasses import dataclass, field
from typing import List, Optional, Union
from urllib.parse import urlsplit

from cryptography import x509

from certfactory.exceptions import InvalidAlternateName
from certfactory.models.certificate import AlternateName, AlternateNameType

logger = logging.getLogger("certfactory")

IPAddress = Union[ipaddress.IPv4Address, ipaddress.IPv6Address]


@dataclass
class AlternateNameSet:
    """Alternate names grouped by type, each group in request order."""

    dns_names: List[str] = field(default_factory=list)
    email_addresses: List[str] = field(default_factory=list)
    ip_addresses: List[IPAddress] = field(default_factory=list)
    uris: List[str] = field(default_factory=list)

    def is_empty(self) -> bool:
        return not (self.dns_names or self.email_addresses or self.ip_addresses or self.uris)

    def to_extension(self) -> Optional[x509.SubjectAlternativeName]:
        """
        Build the SubjectAlternativeName extension value.

        Groups are encoded DNS, email, IP, URI.

        Raises:
            ValueError: If a DNS name or email address is rejected by the encoder
        """
        if self.is_empty():
            return None
        general_names = []
        general_names.extend(x509.DNSName(n) for n in self.dns_names)
        general_names.extend(x509.RFC822Name(e) for e in self.email_addresses)
        general_names.extend(x509.IPAddress(ip) for ip in self.ip_addresses)
        general_names.extend(x509.UniformResourceIdentifier(u) for u in self.uris)
        return x509.SubjectAlternativeName(general_names)


class AlternateNameEncoder:
    """Sorts request alternate names into typed collections."""

    @staticmethod
    def encode(alternate_names: List[AlternateName]) -> AlternateNameSet:
        """
        Dispatch each alternate name on its type.

        Args:
            alternate_names: Alternate names in request order

        Returns:
            Grouped alternate names

        Raises:
            InvalidAlternateName: If an ip or uri value cannot be parsed
        """
        result = AlternateNameSet()

        for name in alternate_names:
            if name.type == AlternateNameType.DNS.value:
                result.dns_names.append(name.value)
            elif name.type == AlternateNameType.EMAIL.value:
                result.email_addresses.append(name.value)
            elif name.type == AlternateNameType.IP.value:
                result.ip_addresses.append(AlternateNameEncoder.parse_ip(name.value))
            elif name.type == AlternateNameType.URI.value:
                result.uris.append(AlternateNameEncoder.parse_uri(name.value))
            else:
                AlternateNameEncoder._skip_unknown(name)

        return result

    @staticmethod
    def _skip_unknown(name: AlternateName) -> None:
        # Unknown types are dropped without error. Changing this affects existing callers.
        logger.debug(f"Skipping alternate name of unknown type {name.type!r}: {name.value!r}")

    @staticmethod
    def parse_ip(value: str) -> IPAddress:
        """
        Parse an IPv4 or IPv6 literal.

        Raises:
            InvalidAlternateName: If value is not an IP address
        """
        try:
            ip = ipaddress.ip_address(value)
        except ValueError as e:
            raise InvalidAlternateName(AlternateNameType.IP.value, value, str(e)) from e
        if isinstance(ip, ipaddress.IPv6Address) and ip.scope_id:
            raise InvalidAlternateName(AlternateNameType.IP.value, value, "scoped addresses are not allowed")
        return ip

    @staticmethod
    def parse_uri(value: str) -> str:
        """
        Check that value is an ASCII URI reference accepted by urlsplit.

        Relative references such as "not a uri" pass; only control
        characters, non-ASCII text, malformed IPv6 brackets and bad ports
        are refused.

        Raises:
            InvalidAlternateName: If value is refused
        """
        if any(ord(c) < 0x20 or ord(c) == 0x7F for c in value):
            raise InvalidAlternateName(AlternateNameType.URI.value, value, "control character in URI")
        if not value.isascii():
            raise InvalidAlternateName(AlternateNameType.URI.value, value, "URI must be ASCII")
        try:
            parts = urlsplit(value)
            # Accessing port validates it
            parts.port
        except ValueError as e:
            raise InvalidAlternateName(AlternateNameType.URI.value, value, str(e)) from e
        return value
