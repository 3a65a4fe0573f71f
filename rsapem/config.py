"""Runtime settings (.env + environment) and package logging setup."""
import logging
import os
from functools import lru_cache
from typing import Optional

from dotenv import dotenv_values, find_dotenv
from pydantic import BaseModel, field_validator

LOGGER_NAME = "rsapem"
DEFAULT_LOG_LEVEL = "WARNING"


def _level_number(name: str) -> Optional[int]:
    resolved = logging.getLevelName(name.strip().upper())
    return resolved if isinstance(resolved, int) else None


class Settings(BaseModel):
    """Ambient settings. Key material never comes from here."""
    log_level: str = DEFAULT_LOG_LEVEL
    default_digest: str = "SHA-256"

    @field_validator("log_level")
    @classmethod
    def _known_level(cls, value: str) -> str:
        # Unknown names fall back so a bad environment never breaks import
        if _level_number(value) is None:
            return DEFAULT_LOG_LEVEL
        return value.strip().upper()


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    """
    Load settings from the environment, then a .env file in the working
    directory (or its parents). The .env values are read, not exported
    into os.environ; variables already set in the environment win.

    Variables:
        RSAPEM_LOG_LEVEL: level name for the "rsapem" logger
        RSAPEM_DEFAULT_DIGEST: digest used by Signer.from_pem / Verifier.from_pem
    """
    path = find_dotenv(usecwd=True)
    dotenv = dotenv_values(path) if path else {}

    def lookup(name: str, default: str) -> str:
        return os.getenv(name) or dotenv.get(name) or default

    return Settings(
        log_level=lookup("RSAPEM_LOG_LEVEL", DEFAULT_LOG_LEVEL),
        default_digest=lookup("RSAPEM_DEFAULT_DIGEST", "SHA-256"),
    )


def configure_logging(level: Optional[str] = None) -> logging.Logger:
    """
    Set the level of the package logger.

    Args:
        level: Level name; defaults to the configured log_level

    Returns:
        The "rsapem" logger

    Raises:
        ValueError: an explicit level name is not a logging level
    """
    logger = logging.getLogger(LOGGER_NAME)
    if not any(isinstance(h, logging.NullHandler) for h in logger.handlers):
        logger.addHandler(logging.NullHandler())
    if level is None:
        resolved = _level_number(get_settings().log_level)
    else:
        resolved = _level_number(level)
        if resolved is None:
            raise ValueError(f"Unknown log level: {level}")
    logger.setLevel(resolved)
    return logger
