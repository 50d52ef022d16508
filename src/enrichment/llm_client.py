"""
Chat-completion client for the Groq OpenAI-compatible endpoint.

The client is a thin request/response contract: messages in, text out,
or a typed LLMError. Retries run through the shared transient retry
policy (429 with exponential wait, transport errors and 5xx immediately).
"""

import asyncio
import logging
from typing import Any

from pydantic import ValidationError

from src.config.settings import Settings, get_settings
from src.enrichment.errors import (
    ConfigurationError,
    LLMError,
    LLMRateLimitError,
    LLMResponseError,
)
from src.enrichment.schemas import ChatCompletion, ChatMessage
from src.ingestion.http_client import (
    HTTPClient,
    HTTPClientError,
    RateLimitError,
    transient_retry_policy,
)
from src.observability.metrics import get_metrics
from src.resilience.retry import SleepFunc

logger = logging.getLogger(__name__)


class LLMClient:
    """
    Async client for POST {base_url}/chat/completions.

    Usage:
        client = LLMClient.from_settings()
        text = await client.complete(
            [ChatMessage(role="user", content="Hello")],
            max_tokens=100,
            temperature=0.3,
        )
    """

    def __init__(
        self,
        api_key: str | None,
        base_url: str = "https://api.groq.com/openai/v1",
        default_model: str = "llama3-8b-8192",
        timeout: float = 30.0,
        max_attempts: int = 3,
        max_backoff_seconds: float = 30.0,
        sleep: SleepFunc = asyncio.sleep,
    ):
        """
        Initialize LLM client.

        Args:
            api_key: Bearer key. None leaves the client unconfigured.
            base_url: API root, without the /chat/completions suffix.
            default_model: Model used when complete() gets none.
            timeout: Per-attempt timeout in seconds.
            max_attempts: Total attempts per completion.
            max_backoff_seconds: Cap for the 429 wait.
            sleep: Awaitable sleep between attempts (injectable for tests).
        """
        self._api_key = api_key
        self.base_url = base_url.rstrip("/")
        self.default_model = default_model
        self.timeout = timeout
        self.max_attempts = max_attempts
        self.max_backoff_seconds = max_backoff_seconds
        self._sleep = sleep

    @classmethod
    def from_settings(cls, settings: Settings | None = None) -> "LLMClient":
        settings = settings or get_settings()
        return cls(
            api_key=settings.groq_api_key,
            base_url=settings.groq_base_url,
            default_model=settings.llm_default_model,
            timeout=settings.llm_timeout_seconds,
            max_attempts=settings.llm_max_attempts,
            max_backoff_seconds=settings.llm_max_backoff_seconds,
        )

    @property
    def configured(self) -> bool:
        return bool(self._api_key)

    def _on_retry(self, attempt: int, exc: BaseException, delay: float) -> None:
        reason = "rate_limit" if isinstance(exc, RateLimitError) else "transient"
        get_metrics().record_llm_retry(reason)
        logger.warning(
            f"LLM request failed ({reason}), "
            f"attempt {attempt + 1}/{self.max_attempts}, waiting {delay:.2f}s"
        )

    async def complete(
        self,
        messages: list[ChatMessage],
        *,
        model: str | None = None,
        max_tokens: int = 250,
        temperature: float = 0.8,
        **sampling: Any,
    ) -> str:
        """
        Request a chat completion and return its text.

        Args:
            messages: Conversation, system message first.
            model: Model id. Defaults to default_model.
            max_tokens: Completion length cap.
            temperature: Sampling temperature.
            **sampling: Extra body fields (top_p, frequency_penalty, ...).

        Returns:
            Stripped completion text (never empty).

        Raises:
            ConfigurationError: No API key; raised before any network I/O.
            LLMRateLimitError: Still rate limited after the last attempt.
            LLMResponseError: Malformed body or empty content.
            LLMError: Any other provider failure.
        """
        if not self._api_key:
            raise ConfigurationError("GROQ_API_KEY is required for AI features")

        body: dict[str, Any] = {
            "model": model or self.default_model,
            "messages": [m.model_dump() for m in messages],
            "max_tokens": max_tokens,
            "temperature": temperature,
            **sampling,
        }
        headers = {"Authorization": f"Bearer {self._api_key}"}
        policy = transient_retry_policy(
            max_attempts=self.max_attempts,
            max_backoff_seconds=self.max_backoff_seconds,
            on_retry=self._on_retry,
        )

        try:
            async with HTTPClient(retry_policy=policy, timeout=self.timeout, sleep=self._sleep) as client:
                response = await client.post(
                    f"{self.base_url}/chat/completions",
                    json_body=body,
                    headers=headers,
                )
        except RateLimitError as e:
            raise LLMRateLimitError(
                f"LLM rate limit persisted after {self.max_attempts} attempts"
            ) from e
        except HTTPClientError as e:
            raise LLMError(f"LLM request failed: {e}") from e

        try:
            completion = ChatCompletion.model_validate(response.json())
        except (ValidationError, ValueError) as e:
            raise LLMResponseError(f"Malformed chat completion: {e}") from e

        text = (completion.text or "").strip()
        if not text:
            raise LLMResponseError("No content received from LLM")
        return text
