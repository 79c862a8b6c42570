"""
Classified error model for PAY.JP API calls.

Every logical call either returns a decoded value or raises exactly one
PayjpError subclass. The `kind` attribute lets callers branch on the
classification without isinstance chains, and `retryable` records whether
the retry engine was allowed to absorb the failure.
"""

from __future__ import annotations

import uuid
from enum import Enum
from typing import TYPE_CHECKING, Any

if TYPE_CHECKING:
    from .decoding import ApiErrorBody


class ErrorKind(str, Enum):
    """Classification of a failed call.

    - AUTH: invalid or revoked API key (401)
    - RATE_LIMITED: too many requests (429), retried internally
    - API: structured error reported by the server
    - NETWORK: transport failure or unreadable server error
    - SERIALIZATION: response body does not match the expected shape
    - INVALID_REQUEST: request could not be built (bad params or credential)
    """

    AUTH = "auth"
    RATE_LIMITED = "rate_limited"
    API = "api"
    NETWORK = "network"
    SERIALIZATION = "serialization"
    INVALID_REQUEST = "invalid_request"


class PayjpError(Exception):
    """Base error for all failures surfaced by the client.

    Attributes:
        kind: Classification used for programmatic branching.
        message: Human-readable message, safe for logs (never contains keys).
        code: Machine-readable error code reported by the server, if any.
        status: HTTP status of the failing response, if there was one.
        retryable: Whether the condition is transient.
        cause: The underlying exception, if any.
        debug_id: Short id for correlating a failure with log lines.
    """

    kind: ErrorKind = ErrorKind.API

    def __init__(
        self,
        message: str,
        code: str | None = None,
        status: int | None = None,
        retryable: bool = False,
        cause: Exception | None = None,
        debug_id: str | None = None,
    ):
        super().__init__(message)
        self.message = message
        self.code = code
        self.status = status
        self.retryable = retryable
        self.cause = cause
        self.debug_id = debug_id or str(uuid.uuid4())[:8]

    def __str__(self) -> str:
        return f"[{self.kind.value}] {self.message}"

    def __repr__(self) -> str:
        return (
            f"{type(self).__name__}(kind={self.kind.value!r}, "
            f"message={self.message!r}, code={self.code!r}, "
            f"status={self.status}, retryable={self.retryable}, "
            f"debug_id={self.debug_id!r})"
        )

    def to_dict(self) -> dict[str, Any]:
        """Convert to a plain dictionary for structured reporting."""
        return {
            "kind": self.kind.value,
            "message": self.message,
            "code": self.code,
            "status": self.status,
            "debug_id": self.debug_id,
        }


class AuthError(PayjpError):
    """The API rejected the credential (HTTP 401)."""

    kind = ErrorKind.AUTH

    def __init__(self, message: str = "Invalid API key", **kwargs: Any):
        kwargs.setdefault("status", 401)
        super().__init__(message, **kwargs)


class RateLimitError(PayjpError):
    """The API is throttling this account (HTTP 429).

    Absorbed by the retry engine; only raised once the attempt budget is
    spent.
    """

    kind = ErrorKind.RATE_LIMITED

    def __init__(self, message: str = "Rate limit exceeded", **kwargs: Any):
        kwargs.setdefault("status", 429)
        kwargs.setdefault("retryable", True)
        super().__init__(message, **kwargs)


class ApiError(PayjpError):
    """Structured error reported by the API.

    Attributes:
        body: The decoded error envelope.
    """

    kind = ErrorKind.API

    def __init__(self, body: "ApiErrorBody", **kwargs: Any):
        kwargs.setdefault("code", body.code)
        kwargs.setdefault("status", body.status)
        super().__init__(body.message, **kwargs)
        self.body = body

    @property
    def error_type(self) -> str:
        """Error type reported by the server, e.g. "invalid_request_error"."""
        return self.body.type

    @property
    def param(self) -> str | None:
        """Request parameter the server blamed, if any."""
        return self.body.param

    def __str__(self) -> str:
        text = f"[{self.kind.value}] {self.body.status} {self.body.type}: {self.message}"
        if self.code:
            text += f" (code: {self.code})"
        if self.param:
            text += f" (param: {self.param})"
        return text

    def to_dict(self) -> dict[str, Any]:
        data = super().to_dict()
        data["type"] = self.body.type
        data["param"] = self.body.param
        return data


class CardError(ApiError):
    """The card was declined or its details were rejected."""


class NetworkError(PayjpError):
    """Transport-level failure, or a server error whose body was unreadable.

    Retryability is decided per instance: timeouts and dropped connections
    are transient, an unreadable 5xx is not.
    """

    kind = ErrorKind.NETWORK


class SerializationError(PayjpError):
    """A response body did not match the expected shape."""

    kind = ErrorKind.SERIALIZATION


class InvalidRequestError(PayjpError):
    """A request could not be built from the given inputs."""

    kind = ErrorKind.INVALID_REQUEST


class CredentialError(InvalidRequestError):
    """An API key was empty or did not match the expected prefix."""


class ErrorCode:
    """Client-side error codes for failures the server never saw."""

    # Transport
    TIMEOUT = "timeout"
    CONNECTION_ERROR = "connection_error"
    TRANSPORT_ERROR = "transport_error"
    SERVER_ERROR = "server_error"

    # Local validation
    INVALID_CREDENTIAL = "invalid_credential"
    INVALID_PARAMS = "invalid_params"

    # Decoding
    INVALID_RESPONSE = "invalid_response"

    # Fallback type for error bodies that could not be parsed
    UNKNOWN_ERROR = "unknown_error"
