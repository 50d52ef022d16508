"""Tests for the chat-completion client."""

import json

import httpx
import pytest
import respx

from src.enrichment.errors import (
    ConfigurationError,
    LLMError,
    LLMRateLimitError,
    LLMResponseError,
)
from src.enrichment.llm_client import LLMClient
from src.enrichment.schemas import ChatMessage

BASE_URL = "https://llm.example.com/openai/v1"
COMPLETIONS_URL = f"{BASE_URL}/chat/completions"
MESSAGES = [ChatMessage(role="user", content="Why is #cricket trending?")]


def _completion(content: str | None) -> dict:
    return {
        "id": "chatcmpl-1",
        "model": "llama3-8b-8192",
        "choices": [{"index": 0, "message": {"role": "assistant", "content": content}}],
    }


@pytest.fixture
def client(recording_sleep) -> LLMClient:
    return LLMClient(api_key="test-key", base_url=BASE_URL, sleep=recording_sleep)


class TestLLMClient:
    """Tests for LLMClient.complete()."""

    @pytest.mark.asyncio
    @respx.mock
    async def test_missing_key_fails_before_io(self):
        """No API key raises ConfigurationError without any request."""
        unconfigured = LLMClient(api_key=None, base_url=BASE_URL)

        assert not unconfigured.configured
        with pytest.raises(ConfigurationError):
            await unconfigured.complete(MESSAGES)
        assert respx.calls.call_count == 0

    @pytest.mark.asyncio
    @respx.mock
    async def test_returns_stripped_text(self, client):
        """The first choice's content is returned stripped."""
        respx.post(COMPLETIONS_URL).mock(
            return_value=httpx.Response(200, json=_completion("  CONTEXT: hi  \n"))
        )

        assert await client.complete(MESSAGES) == "CONTEXT: hi"

    @pytest.mark.asyncio
    @respx.mock
    async def test_request_body_and_auth(self, client):
        """Model, sampling fields and bearer auth are sent."""
        route = respx.post(COMPLETIONS_URL).mock(
            return_value=httpx.Response(200, json=_completion("ok"))
        )

        await client.complete(
            MESSAGES,
            model="llama3-70b-8192",
            max_tokens=400,
            temperature=0.3,
            top_p=0.9,
        )

        request = route.calls.last.request
        body = json.loads(request.content)
        assert request.headers["Authorization"] == "Bearer test-key"
        assert body["model"] == "llama3-70b-8192"
        assert body["max_tokens"] == 400
        assert body["temperature"] == 0.3
        assert body["top_p"] == 0.9
        assert body["messages"] == [{"role": "user", "content": "Why is #cricket trending?"}]

    @pytest.mark.asyncio
    @respx.mock
    async def test_default_model(self, client):
        """complete() falls back to the default model."""
        route = respx.post(COMPLETIONS_URL).mock(
            return_value=httpx.Response(200, json=_completion("ok"))
        )

        await client.complete(MESSAGES)

        assert json.loads(route.calls.last.request.content)["model"] == "llama3-8b-8192"

    @pytest.mark.asyncio
    @respx.mock
    async def test_429_backoff_then_success(self, client, recording_sleep):
        """Two 429s are waited out for 1s then 2s."""
        route = respx.post(COMPLETIONS_URL).mock(
            side_effect=[
                httpx.Response(429),
                httpx.Response(429),
                httpx.Response(200, json=_completion("finally")),
            ]
        )

        assert await client.complete(MESSAGES) == "finally"
        assert route.call_count == 3
        assert recording_sleep.calls == [1.0, 2.0]

    @pytest.mark.asyncio
    @respx.mock
    async def test_persistent_429(self, client, recording_sleep):
        """Rate limiting on every attempt raises LLMRateLimitError."""
        route = respx.post(COMPLETIONS_URL).mock(return_value=httpx.Response(429))

        with pytest.raises(LLMRateLimitError):
            await client.complete(MESSAGES)
        assert route.call_count == 3

    @pytest.mark.asyncio
    @respx.mock
    async def test_server_error_retried_immediately(self, client, recording_sleep):
        """5xx is retried without a wait."""
        route = respx.post(COMPLETIONS_URL).mock(
            side_effect=[httpx.Response(500), httpx.Response(200, json=_completion("ok"))]
        )

        assert await client.complete(MESSAGES) == "ok"
        assert route.call_count == 2
        assert recording_sleep.calls == []

    @pytest.mark.asyncio
    @respx.mock
    async def test_client_error_not_retried(self, client):
        """401 fails at once as LLMError."""
        route = respx.post(COMPLETIONS_URL).mock(return_value=httpx.Response(401))

        with pytest.raises(LLMError) as exc_info:
            await client.complete(MESSAGES)
        assert not isinstance(exc_info.value, LLMRateLimitError)
        assert route.call_count == 1

    @pytest.mark.asyncio
    @respx.mock
    async def test_empty_content(self, client):
        """Empty completion text is an LLMResponseError."""
        respx.post(COMPLETIONS_URL).mock(return_value=httpx.Response(200, json=_completion("   ")))

        with pytest.raises(LLMResponseError):
            await client.complete(MESSAGES)

    @pytest.mark.asyncio
    @respx.mock
    async def test_no_choices(self, client):
        """A body without choices is an LLMResponseError."""
        respx.post(COMPLETIONS_URL).mock(return_value=httpx.Response(200, json={"choices": []}))

        with pytest.raises(LLMResponseError):
            await client.complete(MESSAGES)

    @pytest.mark.asyncio
    @respx.mock
    async def test_non_json_body(self, client):
        """A non-JSON body is an LLMResponseError."""
        respx.post(COMPLETIONS_URL).mock(return_value=httpx.Response(200, text="<html>"))

        with pytest.raises(LLMResponseError):
            await client.complete(MESSAGES)

    def test_from_settings(self, test_settings):
        """Settings without a key produce an unconfigured client."""
        llm = LLMClient.from_settings(test_settings)

        assert not llm.configured
        assert llm.default_model == test_settings.llm_default_model
        assert llm.base_url == test_settings.groq_base_url
