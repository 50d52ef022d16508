"""Shared fixtures for API tests."""

from datetime import datetime, timezone
from unittest.mock import AsyncMock, MagicMock

import pytest
from fastapi.testclient import TestClient

from src.api.app import create_app
from src.api.dependencies import get_app_settings, get_message_service, get_trend_service
from src.ingestion.schemas import Hashtag, Platform, Theme
from src.messaging.platforms import TargetPlatform
from src.messaging.schemas import GeneratedMessage
from src.trends.schemas import TrendSnapshot


def _make_snapshot(**kwargs) -> TrendSnapshot:
    """Helper to create a TrendSnapshot with sensible defaults."""
    return TrendSnapshot(
        hashtags=kwargs.pop("hashtags", [
            Hashtag(tag="ai", engagement=300, platform=Platform.HACKERNEWS, category="Technology"),
            Hashtag(tag="cricket", engagement=120, platform=Platform.REDDIT),
        ]),
        themes=kwargs.pop("themes", [
            Theme(name="Technology", weight=0.3, platforms=[Platform.HACKERNEWS]),
        ]),
        total_engagement=kwargs.pop("total_engagement", 420),
        platform_count=kwargs.pop("platform_count", 2),
        sources=kwargs.pop("sources", [Platform.HACKERNEWS, Platform.REDDIT]),
        timestamp=kwargs.pop("timestamp", datetime(2026, 10, 18, 9, 0, tzinfo=timezone.utc)),
        **kwargs,
    )


def _make_message(platform: TargetPlatform = TargetPlatform.TWITTER, **kwargs) -> GeneratedMessage:
    """Helper to create a GeneratedMessage."""
    return GeneratedMessage(
        platform=platform,
        content=kwargs.pop("content", "Fresh brews for match day! #cricket"),
        hashtags=kwargs.pop("hashtags", ["cricket"]),
        engagement_potential=kwargs.pop("engagement_potential", 83),
        theme=kwargs.pop("theme", "Technology"),
        model=kwargs.pop("model", "llama3-8b-8192"),
        **kwargs,
    )


@pytest.fixture
def mock_trend_service():
    """Mock TrendService."""
    service = MagicMock()
    service.get_trends = AsyncMock(return_value=_make_snapshot())
    service.invalidate = MagicMock()
    return service


@pytest.fixture
def mock_message_service():
    """Mock MessageService."""
    service = MagicMock()
    service.generate = AsyncMock(
        return_value=[_make_message(platform) for platform in TargetPlatform]
    )
    return service


@pytest.fixture
def app(test_settings, mock_trend_service, mock_message_service):
    """FastAPI app with dependency overrides."""
    application = create_app()

    application.dependency_overrides[get_app_settings] = lambda: test_settings
    application.dependency_overrides[get_trend_service] = lambda: mock_trend_service
    application.dependency_overrides[get_message_service] = lambda: mock_message_service

    yield application

    application.dependency_overrides.clear()


@pytest.fixture
def client(app):
    """FastAPI TestClient."""
    with TestClient(app) as c:
        yield c


@pytest.fixture
def make_snapshot():
    """Factory for TrendSnapshot responses."""
    return _make_snapshot
