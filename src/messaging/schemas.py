"""Message generation input and output models (camelCase on the wire)."""

from pydantic import Field

from src.ingestion.schemas import CamelModel, Hashtag, Theme
from src.messaging.platforms import TargetPlatform


class BusinessProfile(CamelModel):
    """Who the posts are written for."""

    name: str = Field(..., min_length=1)
    type: str = Field(default="other", description="Free-text business type")
    tone: str = Field(..., min_length=1)


class SelectedTrends(CamelModel):
    """Trend subset chosen by the user."""

    hashtags: list[Hashtag] = Field(default_factory=list)
    themes: list[Theme] = Field(default_factory=list)

    @property
    def is_empty(self) -> bool:
        return not self.hashtags and not self.themes


class GeneratedMessage(CamelModel):
    """One drafted post."""

    platform: TargetPlatform
    content: str
    hashtags: list[str] = Field(default_factory=list)
    engagement_potential: int = Field(..., ge=40, le=98)
    theme: str = "general"
    model: str
