"""
Dependency injection for FastAPI endpoints.

Services are process-wide singletons so the trend cache survives across
requests. Tests replace them through app.dependency_overrides.
"""

from src.config.settings import Settings, get_settings
from src.enrichment.llm_client import LLMClient
from src.messaging.service import MessageService
from src.trends.service import TrendService

# Global service instances (initialized on first request)
_llm_client: LLMClient | None = None
_trend_service: TrendService | None = None
_message_service: MessageService | None = None


def get_app_settings() -> Settings:
    """Settings dependency."""
    return get_settings()


def get_llm_client() -> LLMClient:
    """Get the shared LLM client."""
    global _llm_client

    if _llm_client is None:
        _llm_client = LLMClient.from_settings(get_settings())
    return _llm_client


async def get_trend_service() -> TrendService:
    """
    Get trend service instance.

    Creates a singleton service whose adapters share one enrichment
    service when enrichment is enabled.
    """
    global _trend_service

    if _trend_service is None:
        _trend_service = TrendService.from_settings(get_settings())
    return _trend_service


async def get_message_service() -> MessageService:
    """Get message service instance."""
    global _message_service

    if _message_service is None:
        _message_service = MessageService.from_settings(get_settings(), llm=get_llm_client())
    return _message_service


async def cleanup_dependencies() -> None:
    """Clean up global dependencies on shutdown."""
    global _llm_client, _trend_service, _message_service

    if _trend_service is not None:
        _trend_service.invalidate()
    _trend_service = None
    _message_service = None
    _llm_client = None
