"""Application settings using Pydantic Settings for environment-based configuration."""

from functools import lru_cache
from typing import Literal

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """
    Central configuration for the socialtrend application.

    All settings can be overridden via environment variables.
    Prefix is not used to allow standard env var names (e.g., GROQ_API_KEY).
    """

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    # Environment
    environment: Literal["development", "staging", "production"] = "development"
    log_level: Literal["DEBUG", "INFO", "WARNING", "ERROR"] = "INFO"
    debug: bool = False

    # LLM provider (OpenAI-compatible chat completions)
    groq_api_key: str | None = None
    groq_base_url: str = "https://api.groq.com/openai/v1"
    llm_default_model: str = "llama3-8b-8192"
    llm_creative_model: str = "llama3-70b-8192"
    llm_timeout_seconds: float = Field(default=30.0, gt=0.0, le=120.0)
    llm_max_attempts: int = Field(default=3, ge=1, le=10)
    llm_max_backoff_seconds: float = Field(default=30.0, ge=0.0, le=300.0)

    # YouTube Data API
    youtube_api_key: str | None = None
    youtube_region_code: str = "IN"

    # Reddit (public JSON listings, no OAuth)
    reddit_subreddits: list[str] = Field(
        default_factory=lambda: ["all", "popular", "AskReddit", "worldnews", "technology"]
    )
    reddit_mirrors: list[str] = Field(
        default_factory=lambda: [
            "https://www.reddit.com",
            "https://old.reddit.com",
            "https://api.reddit.com",
        ]
    )
    reddit_user_agent: str = "socialtrend/0.1.0"

    # RSS news feeds
    news_feeds: list[str] = Field(
        default_factory=lambda: [
            "https://timesofindia.indiatimes.com/rssfeedstopstories.cms",
            "https://www.thehindu.com/news/national/feeder/default.rss",
            "https://www.hindustantimes.com/feeds/rss/news/rssfeed.xml",
            "https://feeds.feedburner.com/ndtvnews-top-stories",
        ]
    )

    # Hashtag enrichment
    enrichment_enabled: bool = True
    enrichment_posture: Literal["strict", "graceful"] = "strict"
    enrichment_delay_seconds: float = Field(default=2.0, ge=0.0, le=60.0)
    adapter_hashtag_limit: int = Field(default=3, ge=1, le=12)

    # Trend cache
    trends_cache_ttl_seconds: float = Field(default=900.0, ge=0.0)
    news_cache_ttl_seconds: float = Field(default=120.0, ge=0.0)

    # Observability
    metrics_port: int = 8000

    # API server
    api_host: str = "0.0.0.0"
    api_port: int = 3000
    cors_origins: str = "*"
    request_timeout_seconds: float = Field(default=120.0, ge=0.0)

    @property
    def is_production(self) -> bool:
        """Check if running in production environment."""
        return self.environment == "production"

    @property
    def ai_configured(self) -> bool:
        """Check if the LLM provider key is configured."""
        return bool(self.groq_api_key)

    @property
    def youtube_configured(self) -> bool:
        """Check if the YouTube Data API key is configured."""
        return bool(self.youtube_api_key)


@lru_cache
def get_settings() -> Settings:
    """
    Get cached settings instance.

    Uses lru_cache to ensure settings are loaded only once.
    Clear cache with get_settings.cache_clear() if needed.
    """
    return Settings()
