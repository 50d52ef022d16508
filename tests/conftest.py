"""Pytest fixtures for socialtrend tests."""

from collections.abc import Callable

import pytest

from src.config.settings import Settings
from src.ingestion.schemas import Hashtag, Platform, SourceTrends, Theme


class FakeClock:
    """Manually advanced monotonic clock."""

    def __init__(self, start: float = 1000.0):
        self.now = start

    def __call__(self) -> float:
        return self.now

    def advance(self, seconds: float) -> None:
        self.now += seconds


class RecordingSleep:
    """Async sleep replacement that records requested delays."""

    def __init__(self):
        self.calls: list[float] = []

    async def __call__(self, seconds: float) -> None:
        self.calls.append(seconds)


@pytest.fixture
def test_settings() -> Settings:
    """Settings configured for testing (no credentials, no enrichment delay)."""
    return Settings(
        _env_file=None,
        environment="development",
        log_level="DEBUG",
        groq_api_key=None,
        youtube_api_key=None,
        enrichment_enabled=False,
        enrichment_delay_seconds=0.0,
    )


@pytest.fixture
def fake_clock() -> FakeClock:
    return FakeClock()


@pytest.fixture
def recording_sleep() -> RecordingSleep:
    return RecordingSleep()


@pytest.fixture
def make_hashtag() -> Callable[..., Hashtag]:
    """Factory for hashtags with sensible defaults."""

    def _make(
        tag: str = "cricket",
        engagement: int = 100,
        platform: Platform = Platform.REDDIT,
        category: str = "General",
        **kwargs,
    ) -> Hashtag:
        return Hashtag(tag=tag, engagement=engagement, platform=platform, category=category, **kwargs)

    return _make


@pytest.fixture
def sample_source_trends() -> SourceTrends:
    """A small Reddit result."""
    return SourceTrends(
        hashtags=[
            Hashtag(tag="elections", engagement=900, platform=Platform.REDDIT),
            Hashtag(tag="cricket", engagement=400, platform=Platform.REDDIT),
        ],
        themes=[Theme(name="General", weight=1.0, platforms=[Platform.REDDIT])],
    )
