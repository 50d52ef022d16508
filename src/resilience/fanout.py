"""
Settle-and-tolerate fan-out.

Runs several awaitables concurrently and reports each outcome as an
explicit Ok/Err result instead of raising the first failure. Callers
decide what a failure means by reducing the results.
"""

import asyncio
from collections.abc import Awaitable, Mapping
from dataclasses import dataclass
from typing import Generic, TypeVar, Union

K = TypeVar("K")
T = TypeVar("T")


@dataclass(frozen=True)
class Ok(Generic[T]):
    """Successful outcome."""

    value: T

    @property
    def ok(self) -> bool:
        return True


@dataclass(frozen=True)
class Err:
    """Failed outcome carrying the raised exception."""

    error: Exception

    @property
    def ok(self) -> bool:
        return False


Result = Union[Ok[T], Err]


async def settle(tasks: Mapping[K, Awaitable[T]]) -> dict[K, Result]:
    """
    Await every task concurrently and wrap each outcome.

    Ordinary exceptions become Err results. Cancellation and other
    BaseExceptions are re-raised, so cancelling the caller still stops
    every in-flight task.

    Args:
        tasks: Mapping of key -> awaitable.

    Returns:
        Mapping of key -> Ok/Err, in the input order.
    """
    keys = list(tasks.keys())
    outcomes = await asyncio.gather(*tasks.values(), return_exceptions=True)

    results: dict[K, Result] = {}
    for key, outcome in zip(keys, outcomes):
        if isinstance(outcome, Exception):
            results[key] = Err(outcome)
        elif isinstance(outcome, BaseException):
            raise outcome
        else:
            results[key] = Ok(outcome)
    return results
