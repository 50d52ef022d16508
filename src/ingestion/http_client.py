"""
HTTP infrastructure layer shared by the source adapters and the LLM client.

Provides:
- HTTPClientError / RateLimitError: Typed failures carrying status and body
- transient_retry_policy(): The 429-backoff / transient-immediate policy
- HTTPClient: Async HTTP client running each request under a RetryPolicy

This layer separates HTTP concerns (status mapping, retries, timeouts)
from domain logic (trend extraction) in the adapters.
"""

import asyncio
import logging
from collections.abc import Callable
from typing import Any

import httpx

from src.resilience.backoff import exponential_delay
from src.resilience.retry import NO_RETRY, RetryPolicy, SleepFunc, retry_async

logger = logging.getLogger(__name__)

# Transport failures worth another attempt
_TRANSIENT_ERRORS = (
    httpx.TimeoutException,
    httpx.ConnectError,
    httpx.ReadError,
    httpx.RemoteProtocolError,
)


class HTTPClientError(Exception):
    """Base exception for HTTP client errors."""

    def __init__(
        self,
        message: str,
        status_code: int | None = None,
        response_body: str | None = None,
        transient: bool = False,
    ):
        super().__init__(message)
        self.status_code = status_code
        self.response_body = response_body
        self.transient = transient


class RateLimitError(HTTPClientError):
    """Raised on HTTP 429. Carries Retry-After when the server sent one."""

    def __init__(
        self,
        message: str,
        status_code: int | None = 429,
        response_body: str | None = None,
        retry_after: float | None = None,
    ):
        super().__init__(message, status_code, response_body, transient=False)
        self.retry_after = retry_after


def is_retryable(exc: BaseException) -> bool:
    """
    Check if a failed request should be attempted again.

    Retryable:
    - 429: Too Many Requests
    - 5xx: Server errors
    - Timeouts, connection and read errors (no status code)
    """
    if isinstance(exc, RateLimitError):
        return True
    if isinstance(exc, HTTPClientError):
        return exc.transient
    return False


def transient_retry_policy(
    max_attempts: int = 3,
    max_backoff_seconds: float = 30.0,
    on_retry: Callable[[int, BaseException, float], None] | None = None,
) -> RetryPolicy:
    """
    Build the retry policy used against rate-limited APIs.

    429 responses wait min(2^attempt * 1s, max_backoff_seconds) before the
    next attempt (1s, 2s, 4s, ...). Transient transport errors and 5xx
    responses are retried immediately. Everything else propagates.
    """

    def backoff(attempt: int, exc: BaseException) -> float:
        if isinstance(exc, RateLimitError):
            return exponential_delay(attempt, base_delay=1.0, max_delay=max_backoff_seconds)
        return 0.0

    return RetryPolicy(
        max_attempts=max_attempts,
        should_retry=is_retryable,
        backoff=backoff,
        on_retry=on_retry,
    )


def _parse_retry_after(value: str | None) -> float | None:
    if not value:
        return None
    try:
        return max(0.0, float(value))
    except ValueError:
        return None


class HTTPClient:
    """
    Async HTTP client with policy-driven retries.

    Features:
    - Status mapping: 429 -> RateLimitError, 5xx -> transient HTTPClientError,
      other 4xx -> HTTPClientError
    - Transport errors wrapped as transient HTTPClientError
    - Per-request timeout override
    - Context manager for proper resource cleanup

    Source adapters use the default NO_RETRY policy; the LLM client passes
    transient_retry_policy().

    Example:
        async with HTTPClient(timeout=10.0) as client:
            response = await client.get(
                "https://hacker-news.firebaseio.com/v0/topstories.json",
            )
    """

    def __init__(
        self,
        retry_policy: RetryPolicy | None = None,
        timeout: float = 30.0,
        headers: dict[str, str] | None = None,
        sleep: SleepFunc = asyncio.sleep,
    ):
        """
        Initialize HTTP client.

        Args:
            retry_policy: Retry behavior. Single attempt if None.
            timeout: Default request timeout in seconds.
            headers: Headers sent with every request.
            sleep: Awaitable sleep used between attempts (injectable for tests).
        """
        self.retry_policy = retry_policy or NO_RETRY
        self.timeout = timeout
        self.headers = dict(headers) if headers else {}
        self._sleep = sleep
        self._client: httpx.AsyncClient | None = None

    async def __aenter__(self) -> "HTTPClient":
        """Enter async context manager, create client."""
        self._client = httpx.AsyncClient(timeout=self.timeout, headers=self.headers)
        return self

    async def __aexit__(self, exc_type: Any, exc_val: Any, exc_tb: Any) -> None:
        """Exit async context manager, close client."""
        if self._client:
            await self._client.aclose()
            self._client = None

    async def get(
        self,
        url: str,
        params: dict[str, Any] | None = None,
        headers: dict[str, str] | None = None,
        timeout: float | None = None,
    ) -> httpx.Response:
        """
        Perform GET request under the retry policy.

        Raises:
            HTTPClientError: On non-retryable errors or after retries exhausted
            RateLimitError: When rate limited and retries exhausted
        """
        return await self._request_with_retry(
            "GET", url, params=params, headers=headers, timeout=timeout
        )

    async def post(
        self,
        url: str,
        json_body: dict[str, Any] | None = None,
        headers: dict[str, str] | None = None,
        timeout: float | None = None,
    ) -> httpx.Response:
        """
        Perform POST request under the retry policy.

        Raises:
            HTTPClientError: On non-retryable errors or after retries exhausted
            RateLimitError: When rate limited and retries exhausted
        """
        return await self._request_with_retry(
            "POST", url, headers=headers, json_body=json_body, timeout=timeout
        )

    async def get_json(
        self,
        url: str,
        params: dict[str, Any] | None = None,
        headers: dict[str, str] | None = None,
        timeout: float | None = None,
    ) -> Any:
        """GET and decode the JSON body."""
        response = await self.get(url, params=params, headers=headers, timeout=timeout)
        return response.json()

    async def _request_with_retry(
        self,
        method: str,
        url: str,
        params: dict[str, Any] | None = None,
        headers: dict[str, str] | None = None,
        json_body: dict[str, Any] | None = None,
        timeout: float | None = None,
    ) -> httpx.Response:
        if not self._client:
            raise RuntimeError("HTTPClient must be used as async context manager")

        async def attempt() -> httpx.Response:
            return await self._send(method, url, params, headers, json_body, timeout)

        return await retry_async(attempt, self.retry_policy, sleep=self._sleep)

    async def _send(
        self,
        method: str,
        url: str,
        params: dict[str, Any] | None,
        headers: dict[str, str] | None,
        json_body: dict[str, Any] | None,
        timeout: float | None,
    ) -> httpx.Response:
        """Execute a single attempt and map the outcome to an exception."""
        assert self._client is not None
        request_timeout = timeout if timeout is not None else self.timeout

        try:
            response = await self._client.request(
                method,
                url,
                params=params,
                headers=headers,
                json=json_body,
                timeout=request_timeout,
            )
        except _TRANSIENT_ERRORS as e:
            logger.warning(f"Transient error {type(e).__name__} for {url}")
            raise HTTPClientError(
                f"{method} {url} failed: {type(e).__name__}: {e}",
                transient=True,
            ) from e
        except httpx.HTTPError as e:
            raise HTTPClientError(f"{method} {url} failed: {e}") from e

        if response.status_code == 429:
            logger.warning(f"Rate limited by {url}")
            raise RateLimitError(
                f"Rate limit exceeded for {url}",
                response_body=response.text,
                retry_after=_parse_retry_after(response.headers.get("Retry-After")),
            )

        if response.status_code >= 400:
            raise HTTPClientError(
                f"Request failed with status {response.status_code}",
                status_code=response.status_code,
                response_body=response.text,
                transient=response.status_code >= 500,
            )

        return response
