"""LLM client and hashtag enrichment."""

from src.enrichment.errors import (
    ConfigurationError,
    EnrichmentError,
    LLMError,
    LLMRateLimitError,
    LLMResponseError,
)
from src.enrichment.llm_client import LLMClient
from src.enrichment.schemas import ChatMessage, HashtagInsight
from src.enrichment.service import EnrichmentService

__all__ = [
    "LLMClient",
    "ChatMessage",
    "HashtagInsight",
    "EnrichmentService",
    "LLMError",
    "ConfigurationError",
    "LLMRateLimitError",
    "LLMResponseError",
    "EnrichmentError",
]
