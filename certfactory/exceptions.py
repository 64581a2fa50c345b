"""Error types raised by the issuance engine."""


class CertFactoryError(ValueError):
    """Base class for all engine errors."""

    stage = "unknown"

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class IssuanceError(CertFactoryError):
    """Raised when a certificate cannot be issued."""

    stage = "issuance"


class KeyGenerationFailed(IssuanceError):
    """The secure random source could not produce key material or a serial."""

    stage = "key_generation"


class InvalidAlternateName(IssuanceError):
    """An alternate name value could not be parsed for its declared type."""

    stage = "alternate_names"

    def __init__(self, name_type: str, value: str, reason: str = ""):
        message = f"Invalid {name_type} alternate name: {value!r}"
        if reason:
            message = f"{message} ({reason})"
        super().__init__(message)
        self.name_type = name_type
        self.value = value


class SigningFailed(IssuanceError):
    """The certificate template could not be signed."""

    stage = "signing"


class EncodingFailed(IssuanceError):
    """A name, extension, certificate or key could not be encoded."""

    stage = "encoding"


class CorruptRecord(CertFactoryError):
    """A stored certificate record does not decode to a certificate or key."""

    stage = "decoding"

    def __init__(self, field: str, reason: str):
        super().__init__(f"Corrupt certificate record: {field} ({reason})")
        self.field = field
