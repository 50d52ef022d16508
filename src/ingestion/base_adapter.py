"""
Base adapter interface and shared functionality for trend sources.

Each source adapter implements _collect(), which turns one round of
network calls into raw Hashtag candidates. The base class provides:
- HTTP client lifecycle with the adapter's timeout and headers
- Consolidation down to the adapter's hashtag limit
- Sequenced enrichment through an injected enricher
- Theme extraction
- Run statistics, logging and metrics
"""

import logging
import time
from abc import ABC, abstractmethod
from collections.abc import Iterable
from dataclasses import dataclass, field
from typing import Protocol

from src.ingestion.consolidation import consolidate_hashtags, extract_themes
from src.ingestion.http_client import HTTPClient
from src.ingestion.schemas import Hashtag, Platform, SourceTrends
from src.keywords import KeywordRules, extract_keywords
from src.observability.metrics import get_metrics

logger = logging.getLogger(__name__)


class HashtagEnricher(Protocol):
    """Anything that can annotate a batch of hashtags for a source label."""

    async def enrich(self, hashtags: list[Hashtag], platform_label: str) -> list[Hashtag]:
        ...


@dataclass
class AdapterStats:
    """Statistics for an adapter run."""

    raw_hashtags: int = 0
    kept: int = 0
    enriched: int = 0
    dropped: int = 0
    start_time: float = field(default_factory=time.monotonic)

    @property
    def elapsed_seconds(self) -> float:
        return time.monotonic() - self.start_time


class BaseAdapter(ABC):
    """
    Abstract base class for trend source adapters.

    Subclasses must implement:
        - platform: Platform enum value
        - enrichment_label: Human-readable source name used in prompts
        - _collect(): Fetch and extract raw hashtags

    The base class handles consolidation, enrichment, theme extraction,
    and logging/metrics. Failures raised by _collect() or by the enricher
    propagate to the caller after stats are logged.
    """

    enrichment_label: str = ""
    category: str = "General"

    def __init__(
        self,
        enricher: HashtagEnricher | None = None,
        hashtag_limit: int = 12,
        timeout: float = 10.0,
    ):
        """
        Initialize adapter.

        Args:
            enricher: Optional enrichment service. None skips enrichment.
            hashtag_limit: Hashtags kept after consolidation.
            timeout: Default HTTP timeout in seconds.
        """
        self._enricher = enricher
        self.hashtag_limit = hashtag_limit
        self.timeout = timeout
        self._stats = AdapterStats()

    @property
    @abstractmethod
    def platform(self) -> Platform:
        """Return the platform this adapter handles."""
        ...

    @property
    def name(self) -> str:
        """Human-readable adapter name."""
        return f"{self.platform.value}_adapter"

    @property
    def stats(self) -> AdapterStats:
        """Get statistics from the most recent run."""
        return self._stats

    def _http_client(self) -> HTTPClient:
        """HTTP client for one run. Override to add headers."""
        return HTTPClient(timeout=self.timeout)

    @abstractmethod
    async def _collect(self, client: HTTPClient) -> list[Hashtag]:
        """
        Fetch source data and extract raw hashtags.

        Per-item parse problems should be skipped here. Raise when the
        source as a whole is unavailable.
        """
        ...

    def _hashtags_from_title(
        self,
        title: str,
        engagement: int,
        rules: KeywordRules,
    ) -> list[Hashtag]:
        """Build one Hashtag per extracted keyword."""
        return [
            Hashtag(
                tag=keyword,
                engagement=max(0, engagement),
                platform=self.platform,
                category=self.category,
            )
            for keyword in extract_keywords(title, rules)
        ]

    async def fetch_trends(self) -> SourceTrends:
        """
        Run the adapter once.

        This is the main entry point called by the trend service.

        Returns:
            SourceTrends with hashtags (enriched when an enricher is set)
            and their themes.
        """
        self._stats = AdapterStats()
        metrics = get_metrics()
        status = "error"

        logger.info(f"Starting fetch for {self.name}")

        try:
            async with self._http_client() as client:
                raw = await self._collect(client)
            self._stats.raw_hashtags = len(raw)

            hashtags = consolidate_hashtags(raw, limit=self.hashtag_limit)
            self._stats.kept = len(hashtags)

            if self._enricher is not None and hashtags:
                enriched = await self._enricher.enrich(hashtags, self.enrichment_label)
                self._stats.dropped = len(hashtags) - len(enriched)
                hashtags = enriched
            self._stats.enriched = _count_enriched(hashtags)

            themes = extract_themes(hashtags, self.platform)
            status = "success"
            return SourceTrends(hashtags=hashtags, themes=themes)

        except Exception as e:
            logger.error(f"Error in {self.name} fetch: {type(e).__name__}: {e}")
            raise

        finally:
            metrics.record_source_fetch(
                self.platform,
                status,
                latency=self._stats.elapsed_seconds,
                hashtags=self._stats.kept - self._stats.dropped if status == "success" else 0,
            )
            logger.info(
                f"{self.name} completed: "
                f"status={status}, "
                f"raw={self._stats.raw_hashtags}, "
                f"kept={self._stats.kept}, "
                f"enriched={self._stats.enriched}, "
                f"dropped={self._stats.dropped}, "
                f"elapsed={self._stats.elapsed_seconds:.2f}s"
            )


def _count_enriched(hashtags: Iterable[Hashtag]) -> int:
    return sum(1 for h in hashtags if h.is_enriched)
