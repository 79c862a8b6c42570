"""
Retry policy and the per-call retry state machine.

RetryPolicy is immutable client configuration. RetryEngine is created fresh
for every logical call and walks

    IDLE -> ATTEMPTING -> {SUCCEEDED, RETRY_SCHEDULED, FAILED}
    RETRY_SCHEDULED -> ATTEMPTING

driven by the AttemptOutcome of each attempt. Only RetryableFailure
outcomes (429, dropped or timed-out transport) schedule another attempt, and
only while the attempt budget lasts.
"""

from __future__ import annotations

import asyncio
import random
from collections.abc import Awaitable, Callable
from dataclasses import dataclass
from enum import Enum

from loguru import logger
from pydantic import BaseModel, Field, model_validator

from .classifier import AttemptOutcome, RetryableFailure, Success
from .errors import PayjpError

DEFAULT_MAX_RETRIES = 3
DEFAULT_INITIAL_DELAY = 0.5
DEFAULT_MAX_DELAY = 10.0
DEFAULT_TIMEOUT = 30.0

JITTER_MIN = 0.5
JITTER_MAX = 1.5


class RetryPolicy(BaseModel):
    """Configuration for retry behavior.

    The base delay before retry N (0-indexed) is
    min(max_delay, initial_delay * 2**N); the actual delay scales it by a
    random factor in [0.5, 1.5] and clamps to max_delay again.

    Attributes:
        max_attempts: Maximum number of attempts, including the first.
            1 disables retries.
        initial_delay: Base delay in seconds before the first retry.
        max_delay: Upper bound in seconds for any delay.
        timeout: Upper bound in seconds for a single attempt.
    """

    max_attempts: int = Field(default=DEFAULT_MAX_RETRIES + 1, ge=1)
    initial_delay: float = Field(default=DEFAULT_INITIAL_DELAY, ge=0.0)
    max_delay: float = Field(default=DEFAULT_MAX_DELAY, ge=0.0)
    timeout: float = Field(default=DEFAULT_TIMEOUT, gt=0.0)

    model_config = {"frozen": True}

    @model_validator(mode="after")
    def _check_delays(self) -> "RetryPolicy":
        if self.initial_delay > self.max_delay:
            raise ValueError("initial_delay must not exceed max_delay")
        return self

    @classmethod
    def from_max_retries(cls, max_retries: int, **kwargs: float) -> "RetryPolicy":
        """Build a policy from a retry count (attempts = retries + 1)."""
        return cls(max_attempts=max_retries + 1, **kwargs)

    @property
    def max_retries(self) -> int:
        return self.max_attempts - 1

    def base_delay(self, attempt: int) -> float:
        """Delay before jitter for the given 0-indexed attempt."""
        try:
            delay = self.initial_delay * (2**attempt)
        except OverflowError:
            return self.max_delay
        return min(self.max_delay, delay)

    def compute_delay(self, attempt: int, rng: random.Random | None = None) -> float:
        """Jittered delay for the given 0-indexed attempt.

        Args:
            attempt: Index of the attempt that just failed.
            rng: Random source. Defaults to the module-level generator.

        Returns:
            Delay in seconds within [0.5 * base, min(1.5 * base, max_delay)].
        """
        base = self.base_delay(attempt)
        factor = (rng or random).uniform(JITTER_MIN, JITTER_MAX)
        return min(self.max_delay, base * factor)


DEFAULT_RETRY_POLICY = RetryPolicy()


class RetryState(str, Enum):
    IDLE = "idle"
    ATTEMPTING = "attempting"
    RETRY_SCHEDULED = "retry_scheduled"
    SUCCEEDED = "succeeded"
    FAILED = "failed"


@dataclass(frozen=True)
class RetryDecision:
    """What the engine decided after an attempt.

    Exactly one of the fields is meaningful for a given state: `delay` for
    RETRY_SCHEDULED, `error` for FAILED, `outcome` for SUCCEEDED.
    """

    state: RetryState
    delay: float = 0.0
    error: PayjpError | None = None
    outcome: Success | None = None


class RetryEngine:
    """Retry state machine for one logical call.

    Holds only call-local state (attempt counter, current state, last error),
    so concurrent calls each own an engine and share nothing but the policy.

    Example:
        engine = RetryEngine(policy)
        success = await engine.run(send_once)
    """

    def __init__(self, policy: RetryPolicy, rng: random.Random | None = None):
        self.policy = policy
        self.state = RetryState.IDLE
        self.attempts = 0
        self.last_error: PayjpError | None = None
        self._rng = rng

    def begin_attempt(self) -> int:
        """Enter ATTEMPTING.

        Returns:
            The 0-indexed attempt number.

        Raises:
            RuntimeError: If the engine is not idle or waiting to retry.
        """
        if self.state not in (RetryState.IDLE, RetryState.RETRY_SCHEDULED):
            raise RuntimeError(f"Cannot start an attempt from state {self.state.value}")
        self.state = RetryState.ATTEMPTING
        attempt = self.attempts
        self.attempts += 1
        return attempt

    def record(self, outcome: AttemptOutcome) -> RetryDecision:
        """Apply the outcome of the current attempt.

        Raises:
            RuntimeError: If no attempt is in progress.
        """
        if self.state is not RetryState.ATTEMPTING:
            raise RuntimeError(f"No attempt in progress (state {self.state.value})")

        if isinstance(outcome, Success):
            self.state = RetryState.SUCCEEDED
            return RetryDecision(self.state, outcome=outcome)

        self.last_error = outcome.error
        if isinstance(outcome, RetryableFailure) and self.attempts < self.policy.max_attempts:
            self.state = RetryState.RETRY_SCHEDULED
            delay = self.policy.compute_delay(self.attempts - 1, self._rng)
            return RetryDecision(self.state, delay=delay, error=outcome.error)

        self.state = RetryState.FAILED
        return RetryDecision(self.state, error=outcome.error)

    @property
    def done(self) -> bool:
        return self.state in (RetryState.SUCCEEDED, RetryState.FAILED)

    async def run(
        self,
        attempt_fn: Callable[[int], Awaitable[AttemptOutcome]],
        sleep: Callable[[float], Awaitable[None]] = asyncio.sleep,
        label: str = "request",
    ) -> Success:
        """Drive attempts until success or a terminal failure.

        Args:
            attempt_fn: Performs one attempt given its 0-indexed number.
            sleep: Awaitable delay, asyncio.sleep by default.
            label: Text identifying the call in log lines.

        Returns:
            The successful outcome.

        Raises:
            PayjpError: The terminal error (the last one observed when
                retries run out).
        """
        while True:
            attempt = self.begin_attempt()
            logger.debug(
                f"{label}: attempt {attempt + 1}/{self.policy.max_attempts}"
            )
            outcome = await attempt_fn(attempt)
            decision = self.record(outcome)

            if decision.state is RetryState.SUCCEEDED:
                if attempt > 0:
                    logger.debug(f"{label}: succeeded after {attempt + 1} attempts")
                return decision.outcome

            if decision.state is RetryState.RETRY_SCHEDULED:
                hint = ""
                if isinstance(outcome, RetryableFailure) and outcome.retry_after is not None:
                    hint = f" (server suggested {outcome.retry_after:.1f}s)"
                logger.info(
                    f"[{decision.error.debug_id}] {label}: retry {attempt + 1}/"
                    f"{self.policy.max_retries} in {decision.delay:.2f}s "
                    f"after {decision.error.kind.value}{hint}"
                )
                await sleep(decision.delay)
                continue

            error = decision.error
            if isinstance(outcome, RetryableFailure):
                logger.warning(
                    f"[{error.debug_id}] {label}: giving up after "
                    f"{self.attempts} attempts: {error}"
                )
            raise error
