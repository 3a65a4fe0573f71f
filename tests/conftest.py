"""Shared fixtures: PEM key material."""
from pathlib import Path

import pytest

from rsapem.config import get_settings

KEYS_DIR = Path(__file__).parent / "keys"


def read_key(name: str) -> str:
    return (KEYS_DIR / name).read_text()


@pytest.fixture(autouse=True)
def fresh_settings():
    get_settings.cache_clear()
    yield
    get_settings.cache_clear()


@pytest.fixture(scope="session")
def alice_pkcs1_private() -> str:
    return read_key("alice_pkcs1_private.pem")


@pytest.fixture(scope="session")
def alice_pkcs8_private() -> str:
    return read_key("alice_pkcs8_private.pem")


@pytest.fixture(scope="session")
def alice_pkcs1_public() -> str:
    return read_key("alice_pkcs1_public.pem")


@pytest.fixture(scope="session")
def alice_pkcs8_public() -> str:
    return read_key("alice_pkcs8_public.pem")


@pytest.fixture(scope="session")
def bob_pkcs1_private() -> str:
    return read_key("bob_pkcs1_private.pem")


@pytest.fixture(scope="session")
def bob_pkcs8_public() -> str:
    return read_key("bob_pkcs8_public.pem")


@pytest.fixture(scope="session")
def ec_pkcs8_public() -> str:
    return read_key("ec_pkcs8_public.pem")


@pytest.fixture(scope="session")
def ec_pkcs8_private() -> str:
    return read_key("ec_pkcs8_private.pem")


@pytest.fixture(scope="session")
def keys_dir() -> Path:
    return KEYS_DIR


@pytest.fixture(scope="session")
def carol_pkcs1_private() -> str:
    return read_key("carol_pkcs1_private.pem")
