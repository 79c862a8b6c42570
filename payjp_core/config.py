"""
Environment configuration for payjp-core.

Settings are read from a .env file at the project root and can be overridden
by real environment variables. Nothing here is consulted by the clients
unless they are built with `from_settings()`.
"""

from __future__ import annotations

from pathlib import Path

from pydantic_settings import BaseSettings, SettingsConfigDict

# Determine project root for .env file loading (allows running from any CWD)
PROJECT_ROOT = Path(__file__).resolve().parent.parent


class Settings(BaseSettings):
    """
    Settings for PAY.JP clients.

    Keys are empty by default; building a client from empty settings fails
    with CredentialError.
    """

    # Credentials
    PAYJP_SECRET_KEY: str = ""
    PAYJP_PUBLIC_KEY: str = ""
    PAYJP_PUBLIC_PASSWORD: str = ""

    # Endpoint
    PAYJP_API_BASE: str = "https://api.pay.jp/v1"

    # Retry / timeout
    PAYJP_TIMEOUT: float = 30.0
    PAYJP_MAX_RETRIES: int = 3
    PAYJP_RETRY_INITIAL_DELAY: float = 0.5
    PAYJP_RETRY_MAX_DELAY: float = 10.0

    # Logging
    LOG_LEVEL: str = "INFO"

    model_config = SettingsConfigDict(
        env_file=PROJECT_ROOT / ".env",
        extra="ignore",
    )
