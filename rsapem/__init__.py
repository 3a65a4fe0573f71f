"""
rsapem

Parse PEM-encoded RSA keys (PKCS#1 and PKCS#8, public and private) and
produce/verify RSA PKCS#1 v1.5 signatures with SHA-1 or SHA-256.
"""

from .config import configure_logging, get_settings, Settings

from .common.errors import (
    RSAPEMError,
    KeyFormatError,
    KeyDecodeError,
    KeyStructureError,
    SignatureCryptoError,
    UnsupportedDigestError,
    FormatError,
    DecodeError,
    StructureError,
    CryptoError,
)

from .common.keys import PublicKey, PrivateKey

from .crypto.parser import (
    RSAKeyParser,
    parse_public,
    parse_private,
    load_public_key,
    load_private_key,
)

from .crypto.sign import (
    DigestScheme,
    Signer,
    Verifier,
    signer_from_sha1,
    signer_from_sha256,
    verifier_from_sha1,
    verifier_from_sha256,
)

__version__ = "0.1.0"

configure_logging()

__all__ = [
    # Settings
    "Settings",
    "get_settings",
    "configure_logging",

    # Errors
    "RSAPEMError",
    "KeyFormatError",
    "KeyDecodeError",
    "KeyStructureError",
    "SignatureCryptoError",
    "UnsupportedDigestError",
    "FormatError",
    "DecodeError",
    "StructureError",
    "CryptoError",

    # Keys
    "PublicKey",
    "PrivateKey",

    # Parsing
    "RSAKeyParser",
    "parse_public",
    "parse_private",
    "load_public_key",
    "load_private_key",

    # Signatures
    "DigestScheme",
    "Signer",
    "Verifier",
    "signer_from_sha1",
    "signer_from_sha256",
    "verifier_from_sha1",
    "verifier_from_sha256",
]
