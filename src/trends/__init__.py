"""Cross-source trend aggregation with TTL caching."""

from src.trends.cache import CacheEntry, TTLCache
from src.trends.errors import AllSourcesFailedError, TrendFetchError
from src.trends.schemas import TrendSnapshot
from src.trends.service import (
    DEFAULT_SOURCES,
    TrendService,
    build_adapters,
    cache_key,
    combine_results,
    normalize_sources,
)

__all__ = [
    "TrendSnapshot",
    "TTLCache",
    "CacheEntry",
    "TrendService",
    "TrendFetchError",
    "AllSourcesFailedError",
    "DEFAULT_SOURCES",
    "build_adapters",
    "cache_key",
    "combine_results",
    "normalize_sources",
]
