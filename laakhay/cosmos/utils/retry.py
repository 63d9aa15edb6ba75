"""Retry executor with a fixed backoff schedule."""

from __future__ import annotations

import asyncio
import logging
from collections.abc import Awaitable, Callable
from dataclasses import dataclass
from typing import TypeVar

from ..config import DEFAULT_RETRY_DELAYS_MS
from .classifier import is_transient_error

logger = logging.getLogger(__name__)

T = TypeVar("T")


@dataclass(frozen=True)
class RetryPolicy:
    """Immutable backoff schedule and transient predicate.

    Attributes:
        delays_ms: Delay before each retry, consumed strictly in order. The
            first attempt is not delayed, so a policy allows
            ``len(delays_ms) + 1`` attempts in total. The default nine
            delays therefore mean ten attempts: one call plus nine retries.
        is_transient: Predicate deciding whether a raised error is retried
    """

    delays_ms: tuple[int, ...] = DEFAULT_RETRY_DELAYS_MS
    is_transient: Callable[[BaseException], bool] = is_transient_error

    def __post_init__(self) -> None:
        """Validate and freeze the delay schedule."""
        delays = tuple(self.delays_ms)
        if any(d < 0 for d in delays):
            raise ValueError("RetryPolicy delays must be non-negative")
        object.__setattr__(self, "delays_ms", delays)

    @property
    def max_attempts(self) -> int:
        return len(self.delays_ms) + 1

    @property
    def total_delay_ms(self) -> int:
        return sum(self.delays_ms)


DEFAULT_RETRY_POLICY = RetryPolicy()

# Single attempt, no retries
NO_RETRY_POLICY = RetryPolicy(delays_ms=())


async def retry_async(
    operation: Callable[[], Awaitable[T]],
    policy: RetryPolicy = DEFAULT_RETRY_POLICY,
    *,
    sleep: Callable[[float], Awaitable[None]] = asyncio.sleep,
    description: str = "operation",
) -> T:
    """Run ``operation`` until it succeeds, fails permanently or the policy runs out.

    Each attempt calls ``operation`` from the top, so anything it derives from
    the clock (such as signed headers) is regenerated.

    Args:
        operation: Zero-argument callable returning a new awaitable per attempt
        policy: Backoff schedule and transient predicate
        sleep: Awaitable sleep taking seconds
        description: Label used in log records

    Returns:
        The value returned by the first successful attempt

    Raises:
        Exception: A permanent error immediately, or the last transient error
            once every delay has been used
    """
    delays = iter(policy.delays_ms)
    attempt = 0

    while True:
        attempt += 1
        try:
            return await operation()
        except Exception as e:
            if not policy.is_transient(e):
                raise
            delay_ms = next(delays, None)
            if delay_ms is None:
                logger.error(
                    "retry_exhausted",
                    extra={
                        "operation": description,
                        "attempts": attempt,
                        "error_type": type(e).__name__,
                    },
                )
                raise
            logger.warning(
                "retry_scheduled",
                extra={
                    "operation": description,
                    "attempt": attempt,
                    "delay_ms": delay_ms,
                    "error_type": type(e).__name__,
                    "error_message": str(e),
                },
            )
        await sleep(delay_ms / 1000.0)
