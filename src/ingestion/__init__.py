"""Trend ingestion module - source adapters, schemas, and consolidation."""

from src.ingestion.consolidation import (
    MAX_HASHTAGS,
    MAX_THEMES,
    consolidate_hashtags,
    extract_themes,
    rank_hashtags,
    rank_themes,
)
from src.ingestion.schemas import (
    Hashtag,
    Platform,
    SourceTrends,
    Theme,
)

__all__ = [
    "Platform",
    "Hashtag",
    "Theme",
    "SourceTrends",
    "MAX_HASHTAGS",
    "MAX_THEMES",
    "consolidate_hashtags",
    "extract_themes",
    "rank_hashtags",
    "rank_themes",
]
