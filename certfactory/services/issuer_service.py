"""Certificate issuance."""

import logging
from typing import List, Optional, Tuple

from cryptography import x509
from cryptography.exceptions import InvalidSignature, UnsupportedAlgorithm
from cryptography.hazmat.primitives import hashes, serialization
from cryptography.hazmat.primitives.asymmetric import ed448, ed25519
from cryptography.x509.oid import AuthorityInformationAccessOID

from certfactory.exceptions import EncodingFailed, SigningFailed
from certfactory.models.certificate import Certificate, CertificateRequest, StatusProviders
from certfactory.services.alternate_name_encoder import AlternateNameEncoder, AlternateNameSet
from certfactory.services.key_service import KeyService
from certfactory.services.name_mapper import NameMapper
from certfactory.services.record_service import CertificateRecordReader, PrivateKey
from certfactory.services.usage_encoder import KeyUsageEncoder

logger = logging.getLogger("certfactory")

# Digest of the DER public key used as subject key identifier. Existing chains depend on it.
SUBJECT_KEY_ID_HASH = hashes.SHA1

# Digest used when signing with RSA, DSA or EC issuer keys
SIGNATURE_HASH = hashes.SHA256


class CertificateIssuer:
    """Turns certificate requests into signed certificate records."""

    @staticmethod
    def issue(request: CertificateRequest, issuer: Optional[Certificate] = None) -> Certificate:
        """
        Issue a certificate for a request.

        Without an issuer the certificate is a self-signed root and is always
        a CA. With an issuer, the issuer's certificate supplies the issuer name
        and its key signs; the CA flag follows the request.

        Args:
            request: Certificate request
            issuer: Issuing CA record, or None for a self-signed root

        Returns:
            New certificate record

        Raises:
            KeyGenerationFailed: If key pair or serial generation fails
            InvalidAlternateName: If an ip or uri alternate name cannot be parsed
            CorruptRecord: If the issuer record cannot be decoded
            EncodingFailed: If names, extensions or outputs cannot be encoded
            SigningFailed: If signing fails or the issuer key does not match its certificate
        """
        # Step 1: key material
        private_key, public_key = KeyService.generate_key_pair()
        serial = KeyService.generate_serial()

        # Step 2: subject key identifier
        subject_key_id = CertificateIssuer.subject_key_identifier(public_key)

        # Step 3: names and extensions
        subject_name = NameMapper.to_distinguished_name(request.subject)
        usage_bits = KeyUsageEncoder.encode_basic(request.usage)
        extended_usage = KeyUsageEncoder.encode_extended(request.usage)
        alternate_names = AlternateNameEncoder.encode(request.alternate_names)

        # Step 4: signer
        if issuer is None:
            issuer_cert = None
            issuer_name = subject_name
            signing_key = private_key
            is_ca = True
        else:
            issuer_cert, signing_key = CertificateRecordReader.decode(issuer)
            issuer_name = issuer_cert.subject
            is_ca = request.is_certificate_authority

        try:
            builder = (
                x509.CertificateBuilder()
                .subject_name(subject_name)
                .issuer_name(issuer_name)
                .public_key(public_key)
                .serial_number(serial)
                .not_valid_before(request.validity.not_before)
                .not_valid_after(request.validity.not_after)
            )
            extensions = CertificateIssuer._extensions(
                request, subject_name, is_ca, usage_bits, extended_usage, alternate_names, subject_key_id, issuer_cert
            )
            for extension, critical in extensions:
                builder = builder.add_extension(extension, critical=critical)
        except (ValueError, TypeError) as e:
            logger.error(f"Certificate template could not be built: {e}")
            raise EncodingFailed(f"Certificate template could not be built: {e}") from e

        # Step 5: sign
        certificate = CertificateIssuer._sign(builder, signing_key)
        CertificateIssuer._verify(certificate, issuer_cert if issuer_cert is not None else certificate)

        # Step 6: package
        try:
            certificate_der = certificate.public_bytes(serialization.Encoding.DER)
            key_der = private_key.private_bytes(
                encoding=serialization.Encoding.DER,
                format=serialization.PrivateFormat.PKCS8,
                encryption_algorithm=serialization.NoEncryption(),
            )
        except ValueError as e:
            logger.error(f"Certificate or key could not be serialized: {e}")
            raise EncodingFailed(f"Certificate or key could not be serialized: {e}") from e

        record = Certificate(
            serial=str(serial),
            subject=request.subject,
            is_certificate_authority=is_ca,
            certificate_data=certificate_der.hex(),
            key_data=key_der.hex(),
        )

        if issuer is None:
            logger.info(f"Issued self-signed CA '{NameMapper.describe(request.subject)}' (Serial: {serial})")
        else:
            logger.info(
                f"Issued certificate '{NameMapper.describe(request.subject)}' (Serial: {serial}, CA: {is_ca}) "
                f"signed by '{NameMapper.describe(issuer.subject)}'"
            )
        return record

    @staticmethod
    def subject_key_identifier(public_key) -> bytes:
        """
        Hash the DER SubjectPublicKeyInfo of a public key with SUBJECT_KEY_ID_HASH.

        Raises:
            EncodingFailed: If the public key cannot be serialized
        """
        try:
            spki = public_key.public_bytes(
                encoding=serialization.Encoding.DER,
                format=serialization.PublicFormat.SubjectPublicKeyInfo,
            )
        except ValueError as e:
            raise EncodingFailed(f"Public key could not be serialized: {e}") from e
        digest = hashes.Hash(SUBJECT_KEY_ID_HASH())
        digest.update(spki)
        return digest.finalize()

    @staticmethod
    def _extensions(
        request: CertificateRequest,
        subject_name: x509.Name,
        is_ca: bool,
        usage_bits,
        extended_usage,
        alternate_names: AlternateNameSet,
        subject_key_id: bytes,
        issuer_cert: Optional[x509.Certificate],
    ) -> List[Tuple[x509.ExtensionType, bool]]:
        """Collect (extension, critical) pairs in encoding order."""
        extensions = [(x509.BasicConstraints(ca=is_ca, path_length=None), True)]

        key_usage = KeyUsageEncoder.to_key_usage_extension(usage_bits)
        if key_usage is not None:
            extensions.append((key_usage, True))

        ext_key_usage = KeyUsageEncoder.to_extended_key_usage_extension(extended_usage)
        if ext_key_usage is not None:
            extensions.append((ext_key_usage, False))

        san = alternate_names.to_extension()
        if san is not None:
            # RFC 5280 4.2.1.6: critical when the subject is empty
            extensions.append((san, len(subject_name) == 0))

        extensions.append((x509.SubjectKeyIdentifier(subject_key_id), False))

        if issuer_cert is not None:
            authority_key_id = CertificateIssuer._authority_key_identifier(issuer_cert)
            if authority_key_id is not None:
                extensions.append((authority_key_id, False))

        extensions.extend(CertificateIssuer._status_provider_extensions(request.status_providers))
        return extensions

    @staticmethod
    def _authority_key_identifier(issuer_cert: x509.Certificate) -> Optional[x509.AuthorityKeyIdentifier]:
        try:
            ski = issuer_cert.extensions.get_extension_for_class(x509.SubjectKeyIdentifier)
        except x509.ExtensionNotFound:
            return None
        return x509.AuthorityKeyIdentifier(
            key_identifier=ski.value.digest,
            authority_cert_issuer=None,
            authority_cert_serial_number=None,
        )

    @staticmethod
    def _status_provider_extensions(providers: StatusProviders) -> List[Tuple[x509.ExtensionType, bool]]:
        extensions = []
        if providers.crl is not None:
            point = x509.DistributionPoint(
                full_name=[x509.UniformResourceIdentifier(providers.crl)],
                relative_name=None,
                reasons=None,
                crl_issuer=None,
            )
            extensions.append((x509.CRLDistributionPoints([point]), False))
        if providers.ocsp is not None:
            access = x509.AccessDescription(
                access_method=AuthorityInformationAccessOID.OCSP,
                access_location=x509.UniformResourceIdentifier(providers.ocsp),
            )
            extensions.append((x509.AuthorityInformationAccess([access]), False))
        return extensions

    @staticmethod
    def _sign(builder: x509.CertificateBuilder, signing_key: PrivateKey) -> x509.Certificate:
        if isinstance(signing_key, (ed25519.Ed25519PrivateKey, ed448.Ed448PrivateKey)):
            algorithm = None
        else:
            algorithm = SIGNATURE_HASH()
        try:
            return builder.sign(private_key=signing_key, algorithm=algorithm)
        except (ValueError, TypeError, UnsupportedAlgorithm) as e:
            logger.error(f"Certificate signing failed: {e}")
            raise SigningFailed(f"Certificate signing failed: {e}") from e

    @staticmethod
    def _verify(certificate: x509.Certificate, issuer_cert: x509.Certificate) -> None:
        """Reject a signature that the issuer certificate's public key does not accept."""
        try:
            certificate.verify_directly_issued_by(issuer_cert)
        except (ValueError, TypeError, InvalidSignature) as e:
            logger.error(f"Signature does not verify against issuer certificate: {e!r}")
            raise SigningFailed("Issuer key does not match issuer certificate") from e


def issue_certificate(request: CertificateRequest, issuer: Optional[Certificate] = None) -> Certificate:
    """Issue a certificate; see CertificateIssuer.issue."""
    return CertificateIssuer.issue(request, issuer)
