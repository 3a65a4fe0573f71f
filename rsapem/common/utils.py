"""Helper signatures: b64e, b64d, as_text."""
import base64
import binascii
from typing import Union

from rsapem.common.errors import KeyDecodeError, KeyFormatError


def b64e(b: bytes) -> str:
    """
    Base64 encode bytes → ASCII string.
    """
    return base64.b64encode(b).decode()


def b64d(s: str) -> bytes:
    """
    Strict base64 decode (standard alphabet, padding required).

    Raises:
        KeyDecodeError: if the string is not valid base64
    """
    try:
        return base64.b64decode(s, validate=True)
    except (binascii.Error, ValueError) as e:
        raise KeyDecodeError(f"Invalid base64 data: {e}") from e


def as_text(pem: Union[str, bytes]) -> str:
    """
    Accept PEM as str or bytes (the cryptography loaders take bytes).
    """
    if isinstance(pem, str):
        return pem
    if isinstance(pem, (bytes, bytearray)):
        try:
            return bytes(pem).decode("ascii")
        except UnicodeDecodeError as e:
            raise KeyFormatError("PEM data is not ASCII") from e
    raise KeyFormatError(f"Expected PEM text, got {type(pem).__name__}")
