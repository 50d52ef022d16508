"""
Generic async retry with pluggable predicate and backoff.

Business code describes *what* is retryable and *how long* to wait;
this module owns the loop. The HTTP-level policy for the LLM provider
lives in src.enrichment.llm_client.
"""

import asyncio
import logging
from collections.abc import Awaitable, Callable
from dataclasses import dataclass, field
from typing import TypeVar

from src.resilience.backoff import exponential_delay

logger = logging.getLogger(__name__)

T = TypeVar("T")

SleepFunc = Callable[[float], Awaitable[None]]


def _never(exc: BaseException) -> bool:
    return False


def _default_backoff(attempt: int, exc: BaseException) -> float:
    return exponential_delay(attempt)


@dataclass
class RetryPolicy:
    """
    Retry policy for retry_async().

    Attributes:
        max_attempts: Total attempts including the first call (>= 1).
        should_retry: Predicate deciding whether an exception is retryable.
        backoff: Seconds to wait after the given 0-indexed failed attempt.
        on_retry: Optional hook called before sleeping (for logging/metrics).
    """

    max_attempts: int = 3
    should_retry: Callable[[BaseException], bool] = _never
    backoff: Callable[[int, BaseException], float] = _default_backoff
    on_retry: Callable[[int, BaseException, float], None] | None = field(
        default=None, repr=False
    )

    def __post_init__(self) -> None:
        if self.max_attempts < 1:
            raise ValueError("max_attempts must be >= 1")


NO_RETRY = RetryPolicy(max_attempts=1)


async def retry_async(
    operation: Callable[[], Awaitable[T]],
    policy: RetryPolicy,
    sleep: SleepFunc = asyncio.sleep,
) -> T:
    """
    Run `operation` until it succeeds or the policy gives up.

    Non-retryable exceptions propagate immediately. When attempts are
    exhausted the last exception propagates unchanged. Cancellation is
    never retried.

    Args:
        operation: Zero-argument coroutine factory, called once per attempt.
        policy: Retry policy.
        sleep: Awaitable sleep, injectable for tests.

    Returns:
        The operation's result.
    """
    attempt = 0
    while True:
        try:
            return await operation()
        except asyncio.CancelledError:
            raise
        except Exception as exc:
            is_last = attempt + 1 >= policy.max_attempts
            if is_last or not policy.should_retry(exc):
                raise

            delay = policy.backoff(attempt, exc)
            if policy.on_retry is not None:
                policy.on_retry(attempt, exc, delay)
            logger.debug(
                f"Retrying after {type(exc).__name__}, "
                f"attempt {attempt + 1}/{policy.max_attempts}, waiting {delay:.2f}s"
            )
            if delay > 0:
                await sleep(delay)
            attempt += 1
