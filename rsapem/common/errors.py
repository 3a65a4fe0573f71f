"""Exceptions raised while parsing RSA PEM keys and checking signatures."""


class RSAPEMError(Exception):
    """Base class for every error raised by rsapem."""
    pass


class KeyFormatError(RSAPEMError, ValueError):
    """PEM framing is wrong or the header line is not a recognised key type."""
    pass


class KeyDecodeError(RSAPEMError, ValueError):
    """Base64 body (or base64 signature) could not be decoded."""
    pass


class KeyStructureError(RSAPEMError, ValueError):
    """DER bytes do not have the expected tag/type at an expected position."""
    pass


class SignatureCryptoError(RSAPEMError):
    """The RSA primitive rejected the key numbers or the signature encoding."""
    pass


class UnsupportedDigestError(RSAPEMError, ValueError):
    """Digest scheme name is not SHA-1 or SHA-256."""
    pass


# Short names
FormatError = KeyFormatError
DecodeError = KeyDecodeError
StructureError = KeyStructureError
CryptoError = SignatureCryptoError
