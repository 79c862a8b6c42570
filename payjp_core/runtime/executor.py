"""
Request executor: the one place where HTTP happens.

Turns a RequestDescriptor into a typed value. The request is built once,
each attempt is bounded by the policy timeout, responses and transport
failures go through the classifier, and the retry engine decides whether to
go again.
"""

from __future__ import annotations

import asyncio
import random
from collections.abc import Awaitable, Callable
from typing import Any, TypeVar

import httpx
from loguru import logger

from .classifier import (
    TRANSIENT_TRANSPORT_ERRORS,
    AttemptOutcome,
    outcome_for_exception,
    outcome_for_response,
)
from .credentials import Credential
from .decoding import decode
from .request import HttpMethod, RequestDescriptor
from .retry import DEFAULT_RETRY_POLICY, RetryEngine, RetryPolicy
from ..version import __version__

T = TypeVar("T")

DEFAULT_BASE_URL = "https://api.pay.jp/v1"
FORM_CONTENT_TYPE = "application/x-www-form-urlencoded"


class RequestExecutor:
    """Executes API calls with authentication, retries and decoding.

    Features:
    - Connection pooling via httpx.AsyncClient
    - HTTP Basic authentication from a validated Credential
    - Retry on 429 and transient transport failures, with jittered backoff
    - Per-attempt timeout
    - Classified errors (see errors.py)

    Example:
        executor = RequestExecutor(Credential.secret("sk_test_..."))
        async with executor:
            charge = await executor.execute(
                RequestDescriptor.get("/charges/ch_1"), Charge
            )
    """

    def __init__(
        self,
        credential: Credential,
        retry_policy: RetryPolicy | None = None,
        base_url: str = DEFAULT_BASE_URL,
        user_agent: str | None = None,
        http_client: httpx.AsyncClient | None = None,
        max_connections: int = 100,
        max_keepalive: int = 20,
        sleep: Callable[[float], Awaitable[None]] = asyncio.sleep,
        rng: random.Random | None = None,
    ):
        """Initialize the executor.

        Args:
            credential: Validated API credential.
            retry_policy: Retry configuration. Uses default if None.
            base_url: API root that resource paths are appended to.
            user_agent: User-Agent header value.
            http_client: Pre-built client to use instead of a pooled one.
                It is not closed by close().
            max_connections: Maximum total connections in pool.
            max_keepalive: Maximum keepalive connections.
            sleep: Awaitable used between attempts.
            rng: Random source for backoff jitter.
        """
        self.credential = credential
        self.retry_policy = retry_policy or DEFAULT_RETRY_POLICY
        self.base_url = base_url.rstrip("/")
        self.user_agent = user_agent or f"payjp-core-python/{__version__}"

        self._limits = httpx.Limits(
            max_connections=max_connections,
            max_keepalive_connections=max_keepalive,
            keepalive_expiry=30.0,
        )
        self._client = http_client
        self._owns_client = http_client is None
        self._sleep = sleep
        self._rng = rng

    async def _get_client(self) -> httpx.AsyncClient:
        """Get or create the HTTP client."""
        if self._client is None:
            self._client = httpx.AsyncClient(
                timeout=self.retry_policy.timeout,
                limits=self._limits,
            )
            self._owns_client = True
        return self._client

    async def close(self) -> None:
        """Close the HTTP client and release connections."""
        if self._client is not None and self._owns_client:
            await self._client.aclose()
            self._client = None

    async def __aenter__(self) -> "RequestExecutor":
        await self._get_client()
        return self

    async def __aexit__(self, *args: Any) -> None:
        await self.close()

    def _build_url(self, path: str) -> str:
        path = path.lstrip("/")
        return f"{self.base_url}/{path}"

    def _build_request(
        self, client: httpx.AsyncClient, descriptor: RequestDescriptor
    ) -> httpx.Request:
        headers = {
            "Authorization": self.credential.auth_header(),
            "User-Agent": self.user_agent,
            "Accept": "application/json",
        }
        body = descriptor.form_body()
        if descriptor.method is HttpMethod.POST:
            headers["Content-Type"] = FORM_CONTENT_TYPE

        return client.build_request(
            descriptor.method.value,
            self._build_url(descriptor.path),
            params=descriptor.query_pairs() or None,
            content=body,
            headers=headers,
        )

    async def _attempt(
        self,
        client: httpx.AsyncClient,
        request: httpx.Request,
        descriptor: RequestDescriptor,
    ) -> AttemptOutcome:
        try:
            response = await asyncio.wait_for(
                client.send(request), timeout=self.retry_policy.timeout
            )
        except Exception as e:
            if not isinstance(e, TRANSIENT_TRANSPORT_ERRORS):
                logger.error(f"{descriptor.label}: unexpected transport error: {e!r}")
            return outcome_for_exception(e)

        return outcome_for_response(
            response.status_code, response.headers, response.content
        )

    async def send(self, descriptor: RequestDescriptor) -> bytes:
        """Run a call to completion and return the successful body.

        Raises:
            PayjpError: The classified terminal error.
        """
        client = await self._get_client()
        # Built once; every attempt re-sends this exact request.
        request = self._build_request(client, descriptor)
        engine = RetryEngine(self.retry_policy, rng=self._rng)

        success = await engine.run(
            lambda attempt: self._attempt(client, request, descriptor),
            sleep=self._sleep,
            label=descriptor.label,
        )
        return success.body

    async def execute(self, descriptor: RequestDescriptor, shape: type[T]) -> T:
        """Run a call and decode the response into `shape`.

        Args:
            descriptor: What to call.
            shape: Expected response type.

        Returns:
            The decoded response.

        Raises:
            InvalidRequestError: If the parameters cannot be encoded (no I/O
                happens).
            AuthError, RateLimitError, ApiError, NetworkError: Classified
                failure of the call.
            SerializationError: If a 2xx body does not match `shape`.
        """
        body = await self.send(descriptor)
        return decode(body, shape)

    async def get(
        self, path: str, shape: type[T], params: Any = None
    ) -> T:
        return await self.execute(RequestDescriptor.get(path, params), shape)

    async def post(
        self, path: str, shape: type[T], params: Any = None
    ) -> T:
        return await self.execute(RequestDescriptor.post(path, params), shape)

    async def delete(self, path: str, shape: type[T]) -> T:
        return await self.execute(RequestDescriptor.delete(path), shape)
