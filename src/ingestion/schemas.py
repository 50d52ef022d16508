"""
Canonical trend schemas for the socialtrend pipeline.

CRITICAL: These models flow from the source adapters through the trend
cache to the API and back into message generation. All platform adapters
MUST output Hashtag/Theme exactly as defined here. Field names are
serialized in camelCase for the web client.
"""

from enum import Enum

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel


class Platform(str, Enum):
    """Supported trend source platforms."""

    REDDIT = "reddit"
    HACKERNEWS = "hackernews"
    YOUTUBE = "youtube"
    NEWS = "news"


class CamelModel(BaseModel):
    """Base model serialized with camelCase keys, accepting either form on input."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class Hashtag(CamelModel):
    """
    A candidate hashtag with aggregated engagement.

    `tag` keeps the casing of its first occurrence for display; identity
    is the lowercase `key`. context/usage/description are filled in by
    enrichment and stay None when enrichment is skipped.
    """

    tag: str = Field(..., min_length=1, description="Hashtag text without '#'")
    engagement: int = Field(default=0, ge=0, description="Platform-specific popularity proxy")
    platform: Platform = Field(..., description="Source platform")
    category: str = Field(default="General", description="Theme category label")
    context: str | None = Field(default=None, description="Why the tag is trending")
    usage: str | None = Field(default=None, description="How businesses should use it")
    description: str | None = Field(default=None, description="Short label")

    @property
    def key(self) -> str:
        """Case-insensitive identity used for consolidation."""
        return self.tag.lower()

    @property
    def is_enriched(self) -> bool:
        return self.context is not None


class Theme(CamelModel):
    """A category grouping of hashtags with a bounded weight."""

    name: str = Field(..., description="Category label")
    weight: float = Field(..., ge=0.0, le=1.0, description="Normalized popularity")
    platforms: list[Platform] = Field(default_factory=list)


class SourceTrends(CamelModel):
    """Result of one source adapter run."""

    hashtags: list[Hashtag] = Field(default_factory=list)
    themes: list[Theme] = Field(default_factory=list)

    @property
    def is_empty(self) -> bool:
        return not self.hashtags and not self.themes
