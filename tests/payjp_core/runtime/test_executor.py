"""Unit tests for RequestExecutor, driven through httpx.MockTransport."""

import asyncio
import base64
from unittest.mock import AsyncMock

import httpx
import pytest
from pydantic import BaseModel

from payjp_core.runtime.credentials import Credential
from payjp_core.runtime.errors import (
    ApiError,
    AuthError,
    CardError,
    ErrorCode,
    InvalidRequestError,
    NetworkError,
    RateLimitError,
    SerializationError,
)
from payjp_core.runtime.executor import RequestExecutor
from payjp_core.runtime.request import RequestDescriptor
from payjp_core.runtime.retry import RetryPolicy

BASE_URL = "https://api.test/v1"


class Item(BaseModel):
    id: str
    amount: int


class Recorder:
    """MockTransport handler replaying canned responses and keeping requests."""

    def __init__(self, *responses):
        self.responses = list(responses)
        self.requests: list[httpx.Request] = []

    def __call__(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        response = self.responses.pop(0) if len(self.responses) > 1 else self.responses[0]
        if isinstance(response, Exception):
            raise response
        return response


def ok(payload: bytes = b'{"id": "it_1", "amount": 100}') -> httpx.Response:
    return httpx.Response(200, content=payload)


def make_executor(handler, **policy):
    policy.setdefault("initial_delay", 0.01)
    policy.setdefault("max_delay", 0.05)
    sleep = AsyncMock()
    executor = RequestExecutor(
        Credential.secret("sk_test_abc"),
        retry_policy=RetryPolicy(**policy),
        base_url=BASE_URL,
        http_client=httpx.AsyncClient(transport=httpx.MockTransport(handler)),
        sleep=sleep,
    )
    return executor, sleep


class TestInit:
    """Tests for executor construction."""

    def test_strips_trailing_slash(self):
        executor = RequestExecutor(Credential.secret("sk_test_abc"), base_url="https://x/v1/")

        assert executor.base_url == "https://x/v1"

    def test_default_user_agent(self):
        executor = RequestExecutor(Credential.secret("sk_test_abc"))

        assert executor.user_agent.startswith("payjp-core-python/")
        assert executor.base_url == "https://api.pay.jp/v1"

    def test_build_url(self):
        executor = RequestExecutor(Credential.secret("sk_test_abc"), base_url=BASE_URL)

        assert executor._build_url("/charges/ch_1") == f"{BASE_URL}/charges/ch_1"
        assert executor._build_url("charges") == f"{BASE_URL}/charges"


class TestRequestShape:
    """Tests for what goes on the wire."""

    @pytest.mark.asyncio
    async def test_auth_and_user_agent_headers(self):
        recorder = Recorder(ok())
        executor, _ = make_executor(recorder)

        await executor.execute(RequestDescriptor.get("/items/it_1"), Item)

        request = recorder.requests[0]
        expected = "Basic " + base64.b64encode(b"sk_test_abc:").decode()
        assert request.headers["Authorization"] == expected
        assert request.headers["User-Agent"].startswith("payjp-core-python/")
        assert str(request.url) == f"{BASE_URL}/items/it_1"

    @pytest.mark.asyncio
    async def test_get_sends_query_string(self):
        recorder = Recorder(ok())
        executor, _ = make_executor(recorder)

        await executor.execute(
            RequestDescriptor.get("/items", {"limit": 2, "filter": {"kind": "a"}}), dict
        )

        request = recorder.requests[0]
        assert request.method == "GET"
        assert request.url.params.get("limit") == "2"
        assert request.url.params.get("filter[kind]") == "a"
        assert request.content == b""
        assert "Content-Type" not in request.headers

    @pytest.mark.asyncio
    async def test_post_sends_form_body(self):
        recorder = Recorder(ok())
        executor, _ = make_executor(recorder)

        await executor.execute(
            RequestDescriptor.post("/items", {"amount": 100, "card": {"number": "4242"}}),
            Item,
        )

        request = recorder.requests[0]
        assert request.method == "POST"
        assert request.headers["Content-Type"] == "application/x-www-form-urlencoded"
        assert request.content == b"amount=100&card%5Bnumber%5D=4242"
        assert request.url.query == b""

    @pytest.mark.asyncio
    async def test_delete_sends_no_body(self):
        recorder = Recorder(ok(b'{"id": "it_1", "deleted": true}'))
        executor, _ = make_executor(recorder)

        await executor.execute(RequestDescriptor.delete("/items/it_1"), dict)

        request = recorder.requests[0]
        assert request.method == "DELETE"
        assert request.content == b""

    @pytest.mark.asyncio
    async def test_invalid_params_fail_before_io(self):
        recorder = Recorder(ok())
        executor, _ = make_executor(recorder)

        with pytest.raises(InvalidRequestError):
            await executor.execute(RequestDescriptor.post("/items", {"x": object()}), Item)

        assert recorder.requests == []


class TestOutcomes:
    """Tests for success, failure and retry behavior end to end."""

    @pytest.mark.asyncio
    async def test_decodes_success(self):
        executor, _ = make_executor(Recorder(ok()))

        item = await executor.execute(RequestDescriptor.get("/items/it_1"), Item)

        assert item == Item(id="it_1", amount=100)

    @pytest.mark.asyncio
    async def test_201_is_success(self):
        executor, _ = make_executor(Recorder(httpx.Response(201, content=b'{"id": "x", "amount": 1}')))

        assert (await executor.post("/items", Item)).id == "x"

    @pytest.mark.asyncio
    async def test_retries_rate_limit_with_identical_body(self):
        recorder = Recorder(httpx.Response(429), httpx.Response(429), ok())
        executor, sleep = make_executor(recorder)

        await executor.execute(
            RequestDescriptor.post("/items", {"amount": 100, "metadata": {"k": "v"}}), Item
        )

        assert len(recorder.requests) == 3
        bodies = {request.content for request in recorder.requests}
        assert bodies == {b"amount=100&metadata%5Bk%5D=v"}
        assert sleep.await_count == 2

    @pytest.mark.asyncio
    async def test_rate_limit_exhaustion(self):
        recorder = Recorder(httpx.Response(429))
        executor, sleep = make_executor(recorder, max_attempts=4)

        with pytest.raises(RateLimitError):
            await executor.get("/items", dict)

        assert len(recorder.requests) == 4
        assert sleep.await_count == 3

    @pytest.mark.asyncio
    async def test_unauthorized_is_single_attempt(self):
        recorder = Recorder(httpx.Response(401, content=b""))
        executor, sleep = make_executor(recorder)

        with pytest.raises(AuthError) as exc_info:
            await executor.get("/items", dict)

        assert exc_info.value.message == "Invalid API key"
        assert len(recorder.requests) == 1
        sleep.assert_not_awaited()

    @pytest.mark.asyncio
    async def test_card_error(self):
        body = (
            b'{"error": {"status": 402, "type": "card_error", "message": "declined",'
            b' "code": "card_declined", "param": "card"}}'
        )
        recorder = Recorder(httpx.Response(402, content=body))
        executor, _ = make_executor(recorder)

        with pytest.raises(CardError) as exc_info:
            await executor.post("/items", Item, {"amount": 1})

        assert exc_info.value.code == "card_declined"
        assert exc_info.value.param == "card"
        assert len(recorder.requests) == 1

    @pytest.mark.asyncio
    async def test_unparseable_client_error(self):
        executor, _ = make_executor(Recorder(httpx.Response(400, content=b"oops")))

        with pytest.raises(ApiError) as exc_info:
            await executor.get("/items", dict)

        assert exc_info.value.message == "HTTP error: 400"
        assert exc_info.value.error_type == "unknown_error"

    @pytest.mark.asyncio
    @pytest.mark.parametrize("status", [500, 502, 503])
    async def test_server_errors_are_not_retried(self, status):
        recorder = Recorder(httpx.Response(status, content=b"<html>down</html>"))
        executor, sleep = make_executor(recorder)

        with pytest.raises(NetworkError) as exc_info:
            await executor.get("/items", dict)

        assert exc_info.value.code == ErrorCode.SERVER_ERROR
        assert len(recorder.requests) == 1
        sleep.assert_not_awaited()

    @pytest.mark.asyncio
    async def test_decode_failure_is_not_retried(self):
        recorder = Recorder(ok(b'{"id": 5}'))
        executor, _ = make_executor(recorder)

        with pytest.raises(SerializationError):
            await executor.execute(RequestDescriptor.get("/items/it_1"), Item)

        assert len(recorder.requests) == 1

    @pytest.mark.asyncio
    async def test_retries_connection_errors(self):
        recorder = Recorder(httpx.ConnectError("refused"), ok())
        executor, sleep = make_executor(recorder)

        item = await executor.get("/items/it_1", Item)

        assert item.id == "it_1"
        assert len(recorder.requests) == 2
        assert sleep.await_count == 1

    @pytest.mark.asyncio
    async def test_transport_timeout_exhaustion(self):
        recorder = Recorder(httpx.ReadTimeout("slow"))
        executor, _ = make_executor(recorder, max_attempts=3)

        with pytest.raises(NetworkError) as exc_info:
            await executor.get("/items", dict)

        assert exc_info.value.code == ErrorCode.TIMEOUT
        assert exc_info.value.retryable is True
        assert len(recorder.requests) == 3

    @pytest.mark.asyncio
    async def test_attempt_timeout(self):
        """An attempt exceeding the policy timeout counts as a retryable timeout."""
        calls = []

        async def slow(request):
            calls.append(request)
            await asyncio.sleep(5)
            return ok()

        executor, _ = make_executor(slow, max_attempts=2, timeout=0.05)

        with pytest.raises(NetworkError) as exc_info:
            await executor.get("/items", dict)

        assert exc_info.value.code == ErrorCode.TIMEOUT
        assert len(calls) == 2

    @pytest.mark.asyncio
    async def test_cancellation_propagates(self):
        started = asyncio.Event()

        async def hang(request):
            started.set()
            await asyncio.sleep(60)
            return ok()

        executor, _ = make_executor(hang)
        task = asyncio.create_task(executor.get("/items", dict))
        await started.wait()
        task.cancel()

        with pytest.raises(asyncio.CancelledError):
            await task


class TestLifecycle:
    """Tests for client ownership and cleanup."""

    @pytest.mark.asyncio
    async def test_lazily_creates_and_closes_owned_client(self):
        executor = RequestExecutor(Credential.secret("sk_test_abc"))

        client = await executor._get_client()
        assert await executor._get_client() is client

        await executor.close()
        assert client.is_closed
        assert executor._client is None

    @pytest.mark.asyncio
    async def test_context_manager(self):
        async with RequestExecutor(Credential.secret("sk_test_abc")) as executor:
            client = executor._client
            assert client is not None

        assert client.is_closed

    @pytest.mark.asyncio
    async def test_injected_client_is_left_open(self):
        http_client = httpx.AsyncClient(transport=httpx.MockTransport(Recorder(ok())))
        executor = RequestExecutor(Credential.secret("sk_test_abc"), http_client=http_client)

        await executor.close()

        assert not http_client.is_closed
        await http_client.aclose()
