"""Configuration loaded from the environment.

A ``.env`` file in the working directory is loaded first when present;
real environment variables take precedence over it.
"""

from __future__ import annotations

import logging
import os
from dataclasses import dataclass
from pathlib import Path

from dotenv import load_dotenv

from chatorder.application.commands import MAX_COMMAND_CODE

logger = logging.getLogger(__name__)

DEFAULT_GATEWAY_URL = "https://api.paystack.co"


class ConfigurationError(Exception):
    """Raised when configuration is invalid or missing."""


@dataclass(frozen=True)
class Settings:

    data_dir: Path
    paystack_secret_key: str = ""
    paystack_base_url: str = DEFAULT_GATEWAY_URL
    client_url: str = ""
    gateway_timeout_seconds: float = 10.0
    minor_unit_factor: int = 100
    max_command_code: int = MAX_COMMAND_CODE
    log_level: str = "WARNING"

    def validate_gateway(self) -> None:
        """Fail fast when payment settings are missing."""
        if not self.paystack_secret_key:
            raise ConfigurationError("PAYSTACK_SECRET_KEY is not configured")
        if not self.client_url:
            raise ConfigurationError("CLIENT_URL is not configured")


def _get_int(key: str, default: int) -> int:
    raw = os.getenv(key)
    if raw is None or raw.strip() == "":
        return default
    try:
        return int(raw)
    except ValueError as exc:
        raise ConfigurationError(f"{key} must be an integer, got {raw!r}") from exc


def _get_float(key: str, default: float) -> float:
    raw = os.getenv(key)
    if raw is None or raw.strip() == "":
        return default
    try:
        return float(raw)
    except ValueError as exc:
        raise ConfigurationError(f"{key} must be a number, got {raw!r}") from exc


def load_settings(env_file: Path | None = None) -> Settings:
    env_path = env_file or Path(".env")
    if env_path.exists():
        load_dotenv(env_path)
        logger.debug("Loaded environment from %s", env_path)

    return Settings(
        data_dir=Path(os.getenv("CHATORDER_DATA_DIR", "data")),
        paystack_secret_key=os.getenv("PAYSTACK_SECRET_KEY", "").strip(),
        paystack_base_url=os.getenv("PAYSTACK_BASE_URL", DEFAULT_GATEWAY_URL).rstrip("/"),
        client_url=os.getenv("CLIENT_URL", "").strip(),
        gateway_timeout_seconds=_get_float("GATEWAY_TIMEOUT_SECONDS", 10.0),
        minor_unit_factor=_get_int("MINOR_UNIT_FACTOR", 100),
        max_command_code=_get_int("MAX_COMMAND_CODE", MAX_COMMAND_CODE),
        log_level=os.getenv("LOG_LEVEL", "WARNING").upper(),
    )
