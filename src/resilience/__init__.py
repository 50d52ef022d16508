"""Retry, backoff and fan-out primitives shared by the pipeline."""

from src.resilience.backoff import exponential_delay
from src.resilience.fanout import Err, Ok, Result, settle
from src.resilience.retry import NO_RETRY, RetryPolicy, retry_async

__all__ = [
    "exponential_delay",
    "Ok",
    "Err",
    "Result",
    "settle",
    "RetryPolicy",
    "NO_RETRY",
    "retry_async",
]
