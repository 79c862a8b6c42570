"""
API credentials and HTTP Basic header rendering.

A Credential is validated once at construction and is immutable afterwards,
so a misconfigured client fails before it can issue a request.
"""

from __future__ import annotations

import base64
from enum import Enum

from pydantic import BaseModel, field_validator, model_validator

from .errors import CredentialError, ErrorCode


class KeyMode(str, Enum):
    """Which of the two authentication shapes a credential uses."""

    SECRET = "secret"
    PUBLIC = "public"


KEY_PREFIXES: dict[KeyMode, tuple[str, ...]] = {
    KeyMode.SECRET: ("sk_test_", "sk_live_"),
    KeyMode.PUBLIC: ("pk_test_", "pk_live_"),
}


class Credential(BaseModel):
    """An API key plus the optional secondary secret used in public mode.

    Attributes:
        mode: SECRET for server-side keys, PUBLIC for publishable keys.
        api_key: The key, rendered as the Basic auth username.
        password: Basic auth password. Always empty in secret mode.
    """

    mode: KeyMode
    api_key: str
    password: str = ""

    model_config = {"frozen": True}

    @field_validator("api_key", "password", mode="before")
    @classmethod
    def _strip_whitespace(cls, value: object) -> object:
        # Keys copied from env vars or shell output often carry a newline.
        if isinstance(value, str):
            return value.strip()
        return value

    @model_validator(mode="after")
    def _check_key(self) -> "Credential":
        if not self.api_key:
            raise CredentialError(
                "API key must not be empty",
                code=ErrorCode.INVALID_CREDENTIAL,
            )
        prefixes = KEY_PREFIXES[self.mode]
        if not self.api_key.startswith(prefixes):
            raise CredentialError(
                f"{self.mode.value} key must start with one of {', '.join(prefixes)}",
                code=ErrorCode.INVALID_CREDENTIAL,
            )
        if self.mode is KeyMode.SECRET and self.password:
            raise CredentialError(
                "secret keys do not take a password",
                code=ErrorCode.INVALID_CREDENTIAL,
            )
        return self

    @classmethod
    def secret(cls, api_key: str) -> "Credential":
        """Create a secret-key credential (sk_test_/sk_live_)."""
        return cls(mode=KeyMode.SECRET, api_key=api_key)

    @classmethod
    def public(cls, api_key: str, password: str = "") -> "Credential":
        """Create a public-key credential (pk_test_/pk_live_)."""
        return cls(mode=KeyMode.PUBLIC, api_key=api_key, password=password)

    @property
    def is_live(self) -> bool:
        """Whether this key operates on live mode data."""
        return "_live_" in self.api_key[:8]

    def auth_header(self) -> str:
        """Render the Authorization header value.

        Returns:
            "Basic " followed by base64 of "<key>:<password>".
        """
        raw = f"{self.api_key}:{self.password}".encode()
        return "Basic " + base64.b64encode(raw).decode("ascii")

    def masked_key(self) -> str:
        """Return the key with everything but the prefix and last 4 chars hidden."""
        prefix = self.api_key[:8]
        return f"{prefix}...{self.api_key[-4:]}"

    def __repr__(self) -> str:
        return f"Credential(mode={self.mode.value!r}, api_key={self.masked_key()!r})"

    __str__ = __repr__
