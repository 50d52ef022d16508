"""
Request and response models for the trend API.

Bodies use camelCase keys on the wire; snake_case is accepted on input.
"""

import datetime as dt

from pydantic import BaseModel, ConfigDict, Field

from src.ingestion.schemas import CamelModel
from src.messaging.schemas import GeneratedMessage, SelectedTrends
from src.trends.schemas import TrendSnapshot


def _utcnow() -> dt.datetime:
    return dt.datetime.now(dt.timezone.utc)


class TrendsRequest(BaseModel):
    """Body for POST /trends."""

    platforms: list[str] | None = Field(
        default=None,
        description="Sources to aggregate: reddit, hackernews, youtube, news",
    )


class TrendsResponse(CamelModel):
    """Successful trend analysis."""

    success: bool = True
    trends: TrendSnapshot
    timestamp: dt.datetime = Field(default_factory=_utcnow)


class GenerateMessageRequest(CamelModel):
    """Body for POST /generate-message."""

    model_config = ConfigDict(str_strip_whitespace=True)

    business_name: str = Field(..., min_length=1)
    business_type: str | None = Field(default=None)
    tone: str = Field(..., min_length=1)
    selected_trends: SelectedTrends


class GenerateMessageResponse(CamelModel):
    """One drafted message per target platform."""

    success: bool = True
    messages: list[GeneratedMessage]
    generated_at: dt.datetime = Field(default_factory=_utcnow)


class ErrorResponse(BaseModel):
    """Error envelope shared by all endpoints."""

    success: bool = False
    error: str = Field(..., description="Short error category")
    message: str | None = Field(default=None, description="Human-readable detail")
    details: str | None = None
    required: list[str] | None = None


class IntegrationStatus(BaseModel):
    """Which credentials are configured. Never carries the secrets themselves."""

    ai: bool
    youtube: bool


class HealthResponse(BaseModel):
    """Response model for health check."""

    status: str = Field(default="healthy")
    service: str
    version: str
    environment: str
    timestamp: dt.datetime = Field(default_factory=_utcnow)
    integrations: IntegrationStatus
