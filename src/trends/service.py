"""
Trend orchestration: cached, concurrent aggregation across sources.

Flow for get_trends(sources):
1. Normalize the requested platforms and derive the cache key
2. Return the cached snapshot when it is younger than the key's TTL
   (news moves fast, so any request including news uses the short TTL)
3. Otherwise fan out to every requested adapter concurrently
4. Reduce the settled results: failed sources contribute nothing, a
   configuration failure aborts, all-failed raises
5. Rank, cap and cache the snapshot

Concurrent misses on the same key are serialized behind a per-key lock,
so only one refresh hits the upstream APIs.
"""

import asyncio
import logging
from collections.abc import Iterable, Mapping
from typing import Protocol

from src.config.settings import Settings, get_settings
from src.enrichment.errors import ConfigurationError
from src.enrichment.llm_client import LLMClient
from src.enrichment.service import EnrichmentService
from src.ingestion.base_adapter import BaseAdapter, HashtagEnricher
from src.ingestion.consolidation import MAX_HASHTAGS, rank_hashtags, rank_themes
from src.ingestion.hackernews_adapter import HackerNewsAdapter
from src.ingestion.news_adapter import NewsAdapter
from src.ingestion.reddit_adapter import RedditAdapter
from src.ingestion.schemas import Hashtag, Platform, SourceTrends, Theme
from src.ingestion.youtube_adapter import YouTubeAdapter
from src.observability.metrics import get_metrics
from src.resilience.fanout import Result, settle
from src.trends.cache import TTLCache
from src.trends.errors import AllSourcesFailedError
from src.trends.schemas import TrendSnapshot

logger = logging.getLogger(__name__)

DEFAULT_SOURCES: tuple[Platform, ...] = (Platform.REDDIT, Platform.HACKERNEWS)


class TrendSource(Protocol):
    async def fetch_trends(self) -> SourceTrends:
        ...


def normalize_sources(sources: str | Platform | Iterable[str | Platform] | None) -> list[Platform]:
    """
    Convert requested names to a sorted, de-duplicated platform list.

    Raises:
        ValueError: For an unknown platform name.
    """
    if isinstance(sources, str):
        sources = [sources]
    names = list(sources) if sources is not None else list(DEFAULT_SOURCES)
    if not names:
        names = list(DEFAULT_SOURCES)

    platforms: set[Platform] = set()
    for name in names:
        if isinstance(name, Platform):
            platforms.add(name)
            continue
        try:
            platforms.add(Platform(str(name).strip().lower()))
        except ValueError:
            valid = ", ".join(p.value for p in Platform)
            raise ValueError(f"Unknown platform '{name}'. Valid platforms: {valid}") from None

    return sorted(platforms, key=lambda p: p.value)


def cache_key(platforms: Iterable[Platform]) -> str:
    """Sorted platform names joined by commas."""
    return ",".join(sorted(p.value for p in platforms))


def combine_results(
    results: Mapping[Platform, Result],
    requested: list[Platform],
) -> TrendSnapshot:
    """
    Reduce settled adapter results into one snapshot.

    Hashtags and themes are concatenated across sources without merging
    equal tags, then ranked (stable) and capped. total_engagement covers
    every concatenated hashtag, including those past the cap.

    Raises:
        ConfigurationError: When any source failed on configuration.
        AllSourcesFailedError: When every source failed.
    """
    failures: dict[Platform, Exception] = {}
    hashtags: list[Hashtag] = []
    themes: list[Theme] = []

    for platform, result in results.items():
        if result.ok:
            hashtags.extend(result.value.hashtags)
            themes.extend(result.value.themes)
        else:
            failures[platform] = result.error

    for error in failures.values():
        if isinstance(error, ConfigurationError):
            raise error

    if results and len(failures) == len(results):
        raise AllSourcesFailedError(failures)

    return TrendSnapshot(
        hashtags=rank_hashtags(hashtags),
        themes=rank_themes(themes),
        total_engagement=sum(h.engagement for h in hashtags),
        platform_count=len(requested),
        sources=list(requested),
    )


def build_adapters(
    settings: Settings | None = None,
    enricher: HashtagEnricher | None = None,
) -> dict[Platform, BaseAdapter]:
    """
    Create one adapter per platform from settings.

    When enrichment is enabled and no enricher is given, an
    EnrichmentService is built from the LLM settings. Enriched adapters
    keep only adapter_hashtag_limit hashtags to bound paid calls.
    """
    settings = settings or get_settings()

    if enricher is None and settings.enrichment_enabled:
        enricher = EnrichmentService(
            LLMClient.from_settings(settings),
            posture=settings.enrichment_posture,
            delay_seconds=settings.enrichment_delay_seconds,
        )
    if not settings.enrichment_enabled:
        enricher = None

    limit = settings.adapter_hashtag_limit if enricher is not None else MAX_HASHTAGS

    return {
        Platform.REDDIT: RedditAdapter(
            enricher=enricher,
            hashtag_limit=limit,
            subreddits=settings.reddit_subreddits,
            mirrors=settings.reddit_mirrors,
            user_agent=settings.reddit_user_agent,
        ),
        Platform.HACKERNEWS: HackerNewsAdapter(enricher=enricher, hashtag_limit=limit),
        Platform.YOUTUBE: YouTubeAdapter(
            enricher=enricher,
            hashtag_limit=limit,
            api_key=settings.youtube_api_key or "",
            region_code=settings.youtube_region_code,
        ),
        Platform.NEWS: NewsAdapter(
            enricher=enricher,
            hashtag_limit=limit,
            feeds=settings.news_feeds,
        ),
    }


class TrendService:
    """
    Aggregates trends from source adapters behind a TTL cache.

    Usage:
        service = TrendService.from_settings()
        snapshot = await service.get_trends(["reddit", "news"])
    """

    def __init__(
        self,
        adapters: Mapping[Platform, TrendSource],
        cache: TTLCache[TrendSnapshot] | None = None,
        trends_ttl_seconds: float = 900.0,
        news_ttl_seconds: float = 120.0,
    ):
        """
        Initialize trend service.

        Args:
            adapters: One source per platform.
            cache: Snapshot cache. A fresh one is created if None.
            trends_ttl_seconds: TTL for keys without news.
            news_ttl_seconds: TTL for keys that include news.
        """
        self._adapters = dict(adapters)
        self._cache: TTLCache[TrendSnapshot] = cache if cache is not None else TTLCache()
        self.trends_ttl_seconds = trends_ttl_seconds
        self.news_ttl_seconds = news_ttl_seconds
        self._locks: dict[str, asyncio.Lock] = {}

    @classmethod
    def from_settings(
        cls,
        settings: Settings | None = None,
        enricher: HashtagEnricher | None = None,
    ) -> "TrendService":
        settings = settings or get_settings()
        return cls(
            build_adapters(settings, enricher),
            trends_ttl_seconds=settings.trends_cache_ttl_seconds,
            news_ttl_seconds=settings.news_cache_ttl_seconds,
        )

    @property
    def cache(self) -> TTLCache[TrendSnapshot]:
        return self._cache

    def ttl_for(self, platforms: Iterable[Platform]) -> float:
        """Short TTL whenever news is part of the request."""
        if Platform.NEWS in set(platforms):
            return self.news_ttl_seconds
        return self.trends_ttl_seconds

    async def get_trends(
        self, sources: str | Platform | Iterable[str | Platform] | None = None
    ) -> TrendSnapshot:
        """
        Get trends for the requested sources, from cache when fresh.

        Args:
            sources: Platform names. Defaults to reddit and hackernews.

        Returns:
            TrendSnapshot with at most 12 hashtags and 5 themes.

        Raises:
            ValueError: Unknown platform name.
            ConfigurationError: A source could not run due to configuration.
            AllSourcesFailedError: Every requested source failed.
        """
        platforms = normalize_sources(sources)
        missing = [p.value for p in platforms if p not in self._adapters]
        if missing:
            raise ValueError(f"No adapter registered for: {', '.join(missing)}")

        key = cache_key(platforms)
        ttl = self.ttl_for(platforms)
        metrics = get_metrics()

        cached = self._cache.get(key, ttl)
        metrics.record_cache(hit=cached is not None)
        if cached is not None:
            logger.debug(f"Trend cache hit for {key}")
            return cached

        lock = self._locks.setdefault(key, asyncio.Lock())
        async with lock:
            # Another caller may have refreshed while we waited
            cached = self._cache.get(key, ttl)
            if cached is not None:
                return cached

            snapshot = await self._refresh(platforms)
            self._cache.set(key, snapshot)
            return snapshot

    async def _refresh(self, platforms: list[Platform]) -> TrendSnapshot:
        logger.info(f"Fetching trends for {cache_key(platforms)}")

        results = await settle({p: self._adapters[p].fetch_trends() for p in platforms})

        for platform, result in results.items():
            if not result.ok:
                logger.warning(
                    f"{platform.value} trends failed: "
                    f"{type(result.error).__name__}: {result.error}"
                )

        snapshot = combine_results(results, platforms)
        logger.info(
            f"Trends ready for {cache_key(platforms)}: "
            f"hashtags={len(snapshot.hashtags)}, themes={len(snapshot.themes)}, "
            f"total_engagement={snapshot.total_engagement}"
        )
        return snapshot

    def invalidate(self, sources: Iterable[str | Platform] | None = None) -> None:
        """Clear the entry for `sources`, or the whole cache when None."""
        if sources is None:
            self._cache.invalidate()
        else:
            self._cache.invalidate(cache_key(normalize_sources(sources)))
