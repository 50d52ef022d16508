"""
Prometheus metrics for monitoring the trend pipeline.

Defines and exposes metrics for:
- Source adapter fetches and latency
- Hashtag enrichment calls and LLM retries
- Trend cache hits and misses
- Message generation

Metrics are exposed via HTTP endpoint for Prometheus scraping.
"""

import logging
from enum import Enum

from prometheus_client import (
    REGISTRY,
    Counter,
    Histogram,
    start_http_server,
)

from src.config.settings import get_settings

logger = logging.getLogger(__name__)

# Buckets for latency histograms (in seconds). Enrichment is sequenced
# with multi-second delays, so the tail is long.
LATENCY_BUCKETS = (0.1, 0.25, 0.5, 1.0, 2.5, 5.0, 10.0, 20.0, 40.0, 80.0)


class MetricsCollector:
    """
    Prometheus metrics collector for the socialtrend pipeline.

    Usage:
        metrics = get_metrics()
        metrics.record_source_fetch("reddit", "success", latency=1.2)
        metrics.record_cache(hit=True)
    """

    def __init__(self):
        """Initialize Prometheus metrics."""

        self.source_fetches = Counter(
            "socialtrend_source_fetches_total",
            "Total source adapter fetches",
            ["platform", "status"],  # status: success, error
        )

        self.source_latency = Histogram(
            "socialtrend_source_fetch_latency_seconds",
            "Time for one adapter to fetch, extract and enrich",
            ["platform"],
            buckets=LATENCY_BUCKETS,
        )

        self.hashtags_extracted = Counter(
            "socialtrend_hashtags_extracted_total",
            "Hashtags kept after adapter-level consolidation",
            ["platform"],
        )

        self.enrichment_calls = Counter(
            "socialtrend_enrichment_calls_total",
            "Hashtag enrichment calls",
            ["status"],  # success, error, fallback
        )

        self.llm_retries = Counter(
            "socialtrend_llm_retries_total",
            "LLM request retries",
            ["reason"],  # rate_limit, transient
        )

        self.cache_lookups = Counter(
            "socialtrend_trend_cache_lookups_total",
            "Trend cache lookups",
            ["result"],  # hit, miss
        )

        self.messages_generated = Counter(
            "socialtrend_messages_generated_total",
            "Generated social media drafts",
            ["platform"],
        )

        logger.info("Prometheus metrics initialized")

    def start_server(self, port: int | None = None) -> None:
        """
        Start Prometheus metrics HTTP server.

        Args:
            port: Port to expose metrics on (default from settings)
        """
        settings = get_settings()
        port = port or settings.metrics_port

        start_http_server(port, registry=REGISTRY)
        logger.info(f"Prometheus metrics server started on port {port}")

    def record_source_fetch(
        self,
        platform: Enum | str,
        status: str,
        latency: float | None = None,
        hashtags: int = 0,
    ) -> None:
        """Record one adapter run."""
        platform_str = platform.value if isinstance(platform, Enum) else platform
        self.source_fetches.labels(platform=platform_str, status=status).inc()

        if latency is not None:
            self.source_latency.labels(platform=platform_str).observe(latency)
        if hashtags:
            self.hashtags_extracted.labels(platform=platform_str).inc(hashtags)

    def record_enrichment(self, status: str) -> None:
        """Record one enrichment call outcome."""
        self.enrichment_calls.labels(status=status).inc()

    def record_llm_retry(self, reason: str) -> None:
        """Record an LLM retry."""
        self.llm_retries.labels(reason=reason).inc()

    def record_cache(self, hit: bool) -> None:
        """Record a trend cache lookup."""
        self.cache_lookups.labels(result="hit" if hit else "miss").inc()

    def record_message(self, platform: str) -> None:
        """Record a generated message."""
        self.messages_generated.labels(platform=platform).inc()


# Global metrics instance
_metrics: MetricsCollector | None = None


def get_metrics() -> MetricsCollector:
    """Get global metrics collector instance."""
    global _metrics
    if _metrics is None:
        _metrics = MetricsCollector()
    return _metrics
