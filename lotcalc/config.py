"""LotCalc — application configuration.

Loads .env variables into a typed config object.
Validates numeric variables and the log level on startup.
"""

import logging
import os
from dataclasses import dataclass

from dotenv import load_dotenv


_DEFAULT_RATE_API_URL = "https://api.coinbase.com/v2/exchange-rates"


@dataclass(frozen=True)
class Config:
    """Typed configuration loaded from environment variables."""

    rate_api_url: str
    rate_timeout_seconds: float
    rate_max_retries: int
    prefs_path: str
    log_level: str
    http_port: int


def _env_number(name: str, default: str, cast):
    raw = os.environ.get(name, default)
    try:
        return cast(raw)
    except ValueError:
        raise ValueError(
            f"Invalid value for environment variable {name}: {raw!r}"
        ) from None


def load_config(env_path: str | None = None) -> Config:
    """Load configuration from environment variables.

    Raises ``ValueError`` with a message naming the offending variable when
    a numeric variable cannot be parsed or the log level is unknown.
    """
    load_dotenv(dotenv_path=env_path)

    max_retries = _env_number("RATE_MAX_RETRIES", "3", int)
    if max_retries < 1:
        raise ValueError(
            f"RATE_MAX_RETRIES must be at least 1, got {max_retries}"
        )

    log_level = os.environ.get("LOG_LEVEL", "INFO").strip().upper()
    if log_level not in logging.getLevelNamesMapping():
        raise ValueError(
            f"Invalid value for environment variable LOG_LEVEL: {log_level!r}"
        )

    return Config(
        rate_api_url=os.environ.get("RATE_API_URL", _DEFAULT_RATE_API_URL),
        rate_timeout_seconds=_env_number("RATE_TIMEOUT_SECONDS", "10.0", float),
        rate_max_retries=max_retries,
        prefs_path=os.environ.get("PREFS_PATH", "data/preferences.json"),
        log_level=log_level,
        http_port=_env_number("HTTP_PORT", "8080", int),
    )
