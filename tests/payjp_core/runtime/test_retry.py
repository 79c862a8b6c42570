"""Unit tests for RetryPolicy and the RetryEngine state machine."""

import random
from unittest.mock import AsyncMock

import pytest
from pydantic import ValidationError

from payjp_core.runtime.classifier import FatalFailure, RetryableFailure, Success
from payjp_core.runtime.errors import (
    AuthError,
    ErrorCode,
    NetworkError,
    RateLimitError,
)
from payjp_core.runtime.retry import (
    DEFAULT_RETRY_POLICY,
    RetryEngine,
    RetryPolicy,
    RetryState,
)


class FixedRng:
    """Random source whose jitter factor is always `factor`."""

    def __init__(self, factor: float):
        self.factor = factor

    def uniform(self, a: float, b: float) -> float:
        assert (a, b) == (0.5, 1.5)
        return self.factor


def rate_limited():
    return RetryableFailure(RateLimitError())


def dropped():
    return RetryableFailure(
        NetworkError("Connection failed", code=ErrorCode.CONNECTION_ERROR, retryable=True)
    )


OK = Success(status=200, body=b"{}")


class TestRetryPolicy:
    """Tests for RetryPolicy configuration."""

    def test_default_values(self):
        policy = RetryPolicy()

        assert policy.max_attempts == 4
        assert policy.max_retries == 3
        assert policy.initial_delay == 0.5
        assert policy.max_delay == 10.0
        assert policy.timeout == 30.0
        assert DEFAULT_RETRY_POLICY == policy

    def test_from_max_retries(self):
        policy = RetryPolicy.from_max_retries(0, initial_delay=0.1, max_delay=1.0)

        assert policy.max_attempts == 1
        assert policy.initial_delay == 0.1

    def test_is_frozen(self):
        policy = RetryPolicy()
        with pytest.raises(Exception):
            policy.max_attempts = 10

    @pytest.mark.parametrize(
        "kwargs",
        [
            {"initial_delay": 5.0, "max_delay": 1.0},
            {"max_attempts": 0},
            {"initial_delay": -1.0},
            {"timeout": 0},
        ],
    )
    def test_rejects_invalid(self, kwargs):
        with pytest.raises(ValidationError):
            RetryPolicy(**kwargs)


class TestDelays:
    """Tests for backoff delay calculation."""

    def test_base_delay_doubles(self):
        policy = RetryPolicy(initial_delay=0.5, max_delay=10.0)

        assert [policy.base_delay(i) for i in range(6)] == [0.5, 1.0, 2.0, 4.0, 8.0, 10.0]

    def test_base_delay_survives_huge_attempt(self):
        policy = RetryPolicy(initial_delay=0.5, max_delay=10.0)

        assert policy.base_delay(10_000) == 10.0

    def test_jitter_factor_is_applied(self):
        policy = RetryPolicy(initial_delay=1.0, max_delay=10.0)

        assert policy.compute_delay(1, FixedRng(0.5)) == 1.0
        assert policy.compute_delay(1, FixedRng(1.5)) == 3.0

    def test_jittered_delay_is_clamped(self):
        policy = RetryPolicy(initial_delay=1.0, max_delay=10.0)

        assert policy.compute_delay(3, FixedRng(1.5)) == 10.0

    def test_jitter_stays_in_bounds(self):
        policy = RetryPolicy(initial_delay=0.5, max_delay=10.0)
        rng = random.Random(1234)

        for attempt in range(12):
            base = policy.base_delay(attempt)
            for _ in range(50):
                delay = policy.compute_delay(attempt, rng)
                assert 0.5 * base <= delay <= min(1.5 * base, 10.0)


class TestStateMachine:
    """Tests for RetryEngine transitions."""

    def test_starts_idle(self):
        engine = RetryEngine(RetryPolicy())

        assert engine.state is RetryState.IDLE
        assert engine.attempts == 0

    def test_begin_attempt_returns_index(self):
        engine = RetryEngine(RetryPolicy(), rng=FixedRng(1.0))

        assert engine.begin_attempt() == 0
        assert engine.state is RetryState.ATTEMPTING
        engine.record(rate_limited())
        assert engine.begin_attempt() == 1

    def test_success(self):
        engine = RetryEngine(RetryPolicy())
        engine.begin_attempt()

        decision = engine.record(OK)

        assert decision.state is RetryState.SUCCEEDED
        assert decision.outcome is OK
        assert engine.done

    def test_retryable_schedules_retry(self):
        engine = RetryEngine(RetryPolicy(initial_delay=0.5), rng=FixedRng(1.0))
        engine.begin_attempt()

        decision = engine.record(rate_limited())

        assert decision.state is RetryState.RETRY_SCHEDULED
        assert decision.delay == 0.5
        assert isinstance(decision.error, RateLimitError)
        assert not engine.done

    def test_fatal_fails_immediately(self):
        engine = RetryEngine(RetryPolicy())
        engine.begin_attempt()

        decision = engine.record(FatalFailure(AuthError()))

        assert decision.state is RetryState.FAILED
        assert isinstance(decision.error, AuthError)
        assert engine.attempts == 1

    def test_retryable_fails_when_budget_spent(self):
        engine = RetryEngine(RetryPolicy(max_attempts=1))
        engine.begin_attempt()

        decision = engine.record(rate_limited())

        assert decision.state is RetryState.FAILED

    def test_cannot_begin_twice(self):
        engine = RetryEngine(RetryPolicy())
        engine.begin_attempt()

        with pytest.raises(RuntimeError):
            engine.begin_attempt()

    def test_cannot_record_without_attempt(self):
        engine = RetryEngine(RetryPolicy())

        with pytest.raises(RuntimeError):
            engine.record(OK)

    @pytest.mark.parametrize("outcome", [OK, FatalFailure(AuthError())])
    def test_terminal_states_are_final(self, outcome):
        engine = RetryEngine(RetryPolicy())
        engine.begin_attempt()
        engine.record(outcome)

        with pytest.raises(RuntimeError):
            engine.begin_attempt()
        with pytest.raises(RuntimeError):
            engine.record(OK)


class TestRun:
    """Tests for driving a whole logical call."""

    @pytest.mark.asyncio
    async def test_returns_first_success(self):
        attempt_fn = AsyncMock(return_value=OK)
        sleep = AsyncMock()

        result = await RetryEngine(RetryPolicy()).run(attempt_fn, sleep=sleep)

        assert result is OK
        attempt_fn.assert_awaited_once_with(0)
        sleep.assert_not_awaited()

    @pytest.mark.asyncio
    async def test_recovers_after_rate_limit(self):
        attempt_fn = AsyncMock(side_effect=[rate_limited(), rate_limited(), OK])
        sleep = AsyncMock()
        engine = RetryEngine(RetryPolicy(), rng=FixedRng(1.0))

        result = await engine.run(attempt_fn, sleep=sleep)

        assert result is OK
        assert attempt_fn.await_count == 3
        assert [c.args[0] for c in sleep.await_args_list] == [0.5, 1.0]

    @pytest.mark.asyncio
    async def test_rate_limit_exhaustion(self):
        """Persistent 429 uses every attempt and surfaces RateLimitError."""
        attempt_fn = AsyncMock(side_effect=lambda attempt: rate_limited())
        sleep = AsyncMock()
        engine = RetryEngine(RetryPolicy(), rng=FixedRng(1.0))

        with pytest.raises(RateLimitError):
            await engine.run(attempt_fn, sleep=sleep)

        assert attempt_fn.await_count == 4
        assert [c.args[0] for c in sleep.await_args_list] == [0.5, 1.0, 2.0]
        assert engine.state is RetryState.FAILED

    @pytest.mark.asyncio
    async def test_network_exhaustion_total_wait(self):
        """Total wait before giving up stays within the jitter envelope."""
        attempt_fn = AsyncMock(side_effect=lambda attempt: dropped())
        sleep = AsyncMock()
        policy = RetryPolicy(max_attempts=4, initial_delay=0.5, max_delay=10.0)

        with pytest.raises(NetworkError) as exc_info:
            await RetryEngine(policy, rng=random.Random(7)).run(attempt_fn, sleep=sleep)

        total = sum(c.args[0] for c in sleep.await_args_list)
        assert exc_info.value.code == ErrorCode.CONNECTION_ERROR
        assert sleep.await_count == 3
        assert 0.5 * 3.5 <= total <= 1.5 * 3.5

    @pytest.mark.asyncio
    async def test_auth_failure_is_single_attempt(self):
        attempt_fn = AsyncMock(return_value=FatalFailure(AuthError()))
        sleep = AsyncMock()

        with pytest.raises(AuthError):
            await RetryEngine(RetryPolicy()).run(attempt_fn, sleep=sleep)

        assert attempt_fn.await_count == 1
        sleep.assert_not_awaited()

    @pytest.mark.asyncio
    async def test_raises_last_observed_error(self):
        first = dropped()
        last = rate_limited()
        attempt_fn = AsyncMock(side_effect=[first, last])
        policy = RetryPolicy(max_attempts=2, initial_delay=0.0, max_delay=0.0)

        with pytest.raises(RateLimitError) as exc_info:
            await RetryEngine(policy).run(attempt_fn, sleep=AsyncMock())

        assert exc_info.value is last.error
