"""
Classification of raw attempt results.

Maps an HTTP status/body, or a transport exception, onto the error
taxonomy and wraps it in an AttemptOutcome for the retry engine.
"""

from __future__ import annotations

import asyncio
from collections.abc import Mapping
from dataclasses import dataclass, field

import httpx

from .decoding import ApiErrorBody, decode_error_body
from .errors import (
    ApiError,
    AuthError,
    CardError,
    ErrorCode,
    NetworkError,
    PayjpError,
    RateLimitError,
)


@dataclass(frozen=True)
class Success:
    """A 2xx response, body not yet decoded."""

    status: int
    body: bytes
    headers: Mapping[str, str] = field(default_factory=dict)


@dataclass(frozen=True)
class RetryableFailure:
    """A transient failure (429 or dropped/timed-out transport).

    `retry_after` is the server's hint in seconds, if it sent one. It is kept
    for logging only; backoff is always computed by the client.
    """

    error: PayjpError
    retry_after: float | None = None


@dataclass(frozen=True)
class FatalFailure:
    """A failure that ends the logical call immediately."""

    error: PayjpError


AttemptOutcome = Success | RetryableFailure | FatalFailure

# Transport failures worth another attempt: the request either never reached
# the server or the connection dropped mid-exchange.
TRANSIENT_TRANSPORT_ERRORS = (
    httpx.TimeoutException,
    httpx.NetworkError,
    httpx.RemoteProtocolError,
    asyncio.TimeoutError,
)


def _api_error(body: ApiErrorBody) -> ApiError:
    if body.type == "card_error":
        return CardError(body)
    return ApiError(body)


def classify(
    status: int, headers: Mapping[str, str], body: bytes
) -> PayjpError | None:
    """Classify an HTTP response.

    Args:
        status: HTTP status code.
        headers: Response headers.
        body: Raw response body.

    Returns:
        None for 2xx, otherwise the classified error.
    """
    if 200 <= status < 300:
        return None

    if status == 401:
        parsed = decode_error_body(body, status)
        message = parsed.message if parsed else "Invalid API key"
        return AuthError(message, code=parsed.code if parsed else None)

    if status == 429:
        return RateLimitError()

    parsed = decode_error_body(body, status)
    if parsed is not None:
        return _api_error(parsed)

    if status >= 500:
        return NetworkError(
            f"Server returned {status} with an unreadable body",
            code=ErrorCode.SERVER_ERROR,
            status=status,
        )

    return ApiError(
        ApiErrorBody(
            status=status,
            type=ErrorCode.UNKNOWN_ERROR,
            message=f"HTTP error: {status}",
        )
    )


def classify_transport(exc: Exception) -> NetworkError:
    """Classify an exception raised before any response arrived."""
    if isinstance(exc, (httpx.TimeoutException, asyncio.TimeoutError)):
        return NetworkError(
            "Request timed out", code=ErrorCode.TIMEOUT, retryable=True, cause=exc
        )
    if isinstance(exc, TRANSIENT_TRANSPORT_ERRORS):
        return NetworkError(
            f"Connection failed: {type(exc).__name__}",
            code=ErrorCode.CONNECTION_ERROR,
            retryable=True,
            cause=exc,
        )
    return NetworkError(
        f"Transport error: {type(exc).__name__}",
        code=ErrorCode.TRANSPORT_ERROR,
        cause=exc,
    )


def parse_retry_after(headers: Mapping[str, str]) -> float | None:
    """Read a numeric Retry-After header, ignoring HTTP-date forms."""
    value = headers.get("retry-after") or headers.get("Retry-After")
    if value is None:
        return None
    try:
        return max(0.0, float(value))
    except ValueError:
        return None


def outcome_for_response(
    status: int, headers: Mapping[str, str], body: bytes
) -> AttemptOutcome:
    """Build the outcome of an attempt that produced a response."""
    error = classify(status, headers, body)
    if error is None:
        return Success(status=status, body=body, headers=headers)
    if error.retryable:
        return RetryableFailure(error, retry_after=parse_retry_after(headers))
    return FatalFailure(error)


def outcome_for_exception(exc: Exception) -> AttemptOutcome:
    """Build the outcome of an attempt that failed at the transport level."""
    error = classify_transport(exc)
    if error.retryable:
        return RetryableFailure(error)
    return FatalFailure(error)
