"""Pydantic models: PublicKey, PrivateKey."""
from math import gcd

from cryptography.hazmat.backends import default_backend
from cryptography.hazmat.primitives.asymmetric import rsa
from pydantic import BaseModel, ConfigDict, Field, field_validator

from rsapem.common.errors import SignatureCryptoError


class PublicKey(BaseModel):
    """RSA public key: modulus and public exponent."""
    model_config = ConfigDict(frozen=True, strict=True)

    modulus: int
    public_exponent: int

    @field_validator("modulus", "public_exponent")
    @classmethod
    def _positive(cls, value: int) -> int:
        if value <= 0:
            raise ValueError("must be a positive integer")
        return value

    @property
    def key_size(self) -> int:
        """Modulus size in bits."""
        return self.modulus.bit_length()

    def to_cryptography(self) -> rsa.RSAPublicKey:
        """
        Bind the numbers to the cryptography RSA primitive.

        Raises:
            SignatureCryptoError: if the primitive rejects the numbers
        """
        try:
            return rsa.RSAPublicNumbers(self.public_exponent, self.modulus).public_key(default_backend())
        except ValueError as e:
            raise SignatureCryptoError(f"Invalid RSA public key: {e}") from e


class PrivateKey(BaseModel):
    """
    RSA private key as carried by PKCS#1: modulus, private exponent and the
    two primes. modulus == prime_p * prime_q is trusted, not re-checked here.
    """
    model_config = ConfigDict(frozen=True, strict=True)

    modulus: int
    private_exponent: int = Field(repr=False)
    prime_p: int = Field(repr=False)
    prime_q: int = Field(repr=False)

    @field_validator("modulus", "private_exponent", "prime_p", "prime_q")
    @classmethod
    def _positive(cls, value: int) -> int:
        if value <= 0:
            raise ValueError("must be a positive integer")
        return value

    @property
    def key_size(self) -> int:
        return self.modulus.bit_length()

    @property
    def public_exponent(self) -> int:
        """
        Recover e as the inverse of d modulo lcm(p-1, q-1).

        Raises:
            SignatureCryptoError: if d has no inverse (inconsistent key)
        """
        p1, q1 = self.prime_p - 1, self.prime_q - 1
        if p1 <= 0 or q1 <= 0:
            raise SignatureCryptoError("Invalid RSA private key: primes must be greater than 1")
        lam = p1 * q1 // gcd(p1, q1)
        try:
            return pow(self.private_exponent, -1, lam)
        except ValueError as e:
            raise SignatureCryptoError("Invalid RSA private key: private exponent is not invertible") from e

    def public_key(self) -> PublicKey:
        return PublicKey(modulus=self.modulus, public_exponent=self.public_exponent)

    def to_cryptography(self) -> rsa.RSAPrivateKey:
        """
        Bind the numbers to the cryptography RSA primitive.

        CRT parameters are derived from d, p and q. The primitive checks
        the key for consistency (including modulus == p * q).

        Raises:
            SignatureCryptoError: if the primitive rejects the numbers
        """
        p, q, d = self.prime_p, self.prime_q, self.private_exponent
        public_numbers = rsa.RSAPublicNumbers(self.public_exponent, self.modulus)
        try:
            numbers = rsa.RSAPrivateNumbers(
                p=p,
                q=q,
                d=d,
                dmp1=rsa.rsa_crt_dmp1(d, p),
                dmq1=rsa.rsa_crt_dmq1(d, q),
                iqmp=rsa.rsa_crt_iqmp(p, q),
                public_numbers=public_numbers,
            )
            return numbers.private_key(default_backend())
        except ValueError as e:
            raise SignatureCryptoError(f"Invalid RSA private key: {e}") from e
