"""Aggregated trend snapshot returned by the trend service."""

from datetime import datetime, timezone

from pydantic import Field

from src.ingestion.consolidation import MAX_HASHTAGS, MAX_THEMES
from src.ingestion.schemas import CamelModel, Hashtag, Platform, Theme


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


class TrendSnapshot(CamelModel):
    """
    Cross-source trends for one set of requested platforms.

    Serialized with camelCase keys (totalEngagement, platformCount).
    """

    hashtags: list[Hashtag] = Field(default_factory=list, max_length=MAX_HASHTAGS)
    themes: list[Theme] = Field(default_factory=list, max_length=MAX_THEMES)
    total_engagement: int = Field(default=0, ge=0, description="Sum over all source hashtags")
    platform_count: int = Field(default=0, ge=0, description="Number of requested sources")
    sources: list[Platform] = Field(default_factory=list)
    timestamp: datetime = Field(default_factory=_utcnow)
