"""RSA PKCS#1 v1.5 sign/verify with SHA-1 or SHA-256."""
import logging
from enum import Enum
from typing import Union

from cryptography.exceptions import InvalidSignature
from cryptography.hazmat.primitives import hashes
from cryptography.hazmat.primitives.asymmetric import padding

from rsapem.common.errors import SignatureCryptoError, UnsupportedDigestError
from rsapem.common.keys import PrivateKey, PublicKey
from rsapem.common.utils import b64d, b64e
from rsapem.config import get_settings
from rsapem.crypto.parser import parse_private, parse_public

logger = logging.getLogger(__name__)


class DigestScheme(Enum):
    """Digest + PKCS#1 v1.5 padding schemes: (label, digest OID, hash class)."""
    SHA1 = ("SHA-1/RSA", "1.3.14.3.2.26", hashes.SHA1)
    SHA256 = ("SHA-256/RSA", "2.16.840.1.101.3.4.2.1", hashes.SHA256)

    def __init__(self, label: str, oid: str, hash_cls):
        self.label = label
        self.oid = oid
        self._hash_cls = hash_cls

    def hash_algorithm(self) -> hashes.HashAlgorithm:
        """A fresh hash algorithm instance for one sign/verify call."""
        return self._hash_cls()

    @classmethod
    def from_name(cls, name: str) -> "DigestScheme":
        """
        Look up a scheme by "sha1", "SHA-1", "SHA-1/RSA", "sha256", ...

        Raises:
            UnsupportedDigestError: unknown digest name
        """
        key = name.strip().upper()
        if key.endswith("/RSA"):
            key = key[:-len("/RSA")]
        key = key.replace("-", "")
        try:
            return cls[key]
        except KeyError:
            raise UnsupportedDigestError(f"Unsupported digest: {name}") from None


def _resolve_scheme(scheme: Union[DigestScheme, str, None]) -> DigestScheme:
    if scheme is None:
        return DigestScheme.from_name(get_settings().default_digest)
    if isinstance(scheme, DigestScheme):
        return scheme
    return DigestScheme.from_name(scheme)


class Signer:
    """
    Signs messages with a private key under one digest scheme.

    The key is bound to the RSA primitive once, at construction; every
    sign() call starts a fresh digest, so calls do not affect each other.
    """

    def __init__(self, scheme: DigestScheme, private_key: PrivateKey):
        if private_key is None:
            raise SignatureCryptoError("Signer requires a private key")
        self.scheme = scheme
        self.private_key = private_key
        self._key = private_key.to_cryptography()

    def sign(self, message: bytes) -> bytes:
        """
        Sign a message using RSA PKCS#1 v1.5 with the bound digest.

        Args:
            message: Bytes to sign (hashed internally)

        Returns:
            Signature bytes, as long as the modulus
        """
        return self._key.sign(
            bytes(message),
            padding.PKCS1v15(),
            self.scheme.hash_algorithm()
        )

    def sign_base64(self, message: bytes) -> str:
        """
        Sign data and return a base64 signature string.
        """
        return b64e(self.sign(message))

    @classmethod
    def from_pem(cls, private_key_pem: Union[str, bytes],
                 scheme: Union[DigestScheme, str, None] = None) -> "Signer":
        """
        Parse a PKCS#1/PKCS#8 private key PEM and bind it to a scheme.

        Args:
            private_key_pem: Private key in PEM format
            scheme: DigestScheme or its name; defaults to RSAPEM_DEFAULT_DIGEST
        """
        return cls(_resolve_scheme(scheme), parse_private(private_key_pem))

    @classmethod
    def sha1_rsa(cls, private_key_pem: Union[str, bytes]) -> "Signer":
        return cls.from_pem(private_key_pem, DigestScheme.SHA1)

    @classmethod
    def sha256_rsa(cls, private_key_pem: Union[str, bytes]) -> "Signer":
        return cls.from_pem(private_key_pem, DigestScheme.SHA256)


class Verifier:
    """
    Checks signatures with a public key under one digest scheme.
    """

    def __init__(self, scheme: DigestScheme, public_key: PublicKey):
        if public_key is None:
            raise SignatureCryptoError("Verifier requires a public key")
        self.scheme = scheme
        self.public_key = public_key
        self._key = public_key.to_cryptography()
        self._key_bytes = (public_key.modulus.bit_length() + 7) // 8

    def verify(self, message: bytes, signature: bytes) -> bool:
        """
        Verify an RSA PKCS#1 v1.5 signature.

        Args:
            message: Bytes that were signed
            signature: Signature to verify

        Returns:
            True if signature is valid, False if it does not match

        Raises:
            SignatureCryptoError: signature is not an RSA signature for
                this key at all (wrong length)
        """
        signature = bytes(signature)
        if len(signature) != self._key_bytes:
            raise SignatureCryptoError(
                f"Signature is {len(signature)} bytes, expected {self._key_bytes}"
            )

        try:
            self._key.verify(
                signature,
                bytes(message),
                padding.PKCS1v15(),
                self.scheme.hash_algorithm()
            )
            return True
        except InvalidSignature:
            logger.debug("%s signature did not verify", self.scheme.label)
            return False

    def verify_base64(self, message: bytes, sig_b64: str) -> bool:
        """
        Verify a base64 signature string.

        Raises:
            KeyDecodeError: sig_b64 is not valid base64
        """
        return self.verify(message, b64d(sig_b64))

    @classmethod
    def from_pem(cls, public_key_pem: Union[str, bytes],
                 scheme: Union[DigestScheme, str, None] = None) -> "Verifier":
        """
        Parse a PKCS#1/PKCS#8 public key PEM and bind it to a scheme.

        Args:
            public_key_pem: Public key in PEM format
            scheme: DigestScheme or its name; defaults to RSAPEM_DEFAULT_DIGEST
        """
        return cls(_resolve_scheme(scheme), parse_public(public_key_pem))

    @classmethod
    def sha1_rsa(cls, public_key_pem: Union[str, bytes]) -> "Verifier":
        return cls.from_pem(public_key_pem, DigestScheme.SHA1)

    @classmethod
    def sha256_rsa(cls, public_key_pem: Union[str, bytes]) -> "Verifier":
        return cls.from_pem(public_key_pem, DigestScheme.SHA256)


def signer_from_sha1(private_key_pem: Union[str, bytes]) -> Signer:
    return Signer.sha1_rsa(private_key_pem)


def signer_from_sha256(private_key_pem: Union[str, bytes]) -> Signer:
    return Signer.sha256_rsa(private_key_pem)


def verifier_from_sha1(public_key_pem: Union[str, bytes]) -> Verifier:
    return Verifier.sha1_rsa(public_key_pem)


def verifier_from_sha256(public_key_pem: Union[str, bytes]) -> Verifier:
    return Verifier.sha256_rsa(public_key_pem)
