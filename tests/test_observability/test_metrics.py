"""Tests for Prometheus metrics recording."""

from prometheus_client import REGISTRY

from src.ingestion.schemas import Platform
from src.observability.metrics import get_metrics


def _sample(name: str, **labels) -> float:
    return REGISTRY.get_sample_value(name, labels) or 0.0


class TestMetricsCollector:
    """Tests for MetricsCollector."""

    def test_singleton(self):
        """get_metrics() returns one shared collector."""
        assert get_metrics() is get_metrics()

    def test_source_fetch_accepts_enum(self):
        """Platform enums are recorded by value."""
        name = "socialtrend_source_fetches_total"
        before = _sample(name, platform="reddit", status="success")

        get_metrics().record_source_fetch(Platform.REDDIT, "success", latency=0.5, hashtags=3)

        assert _sample(name, platform="reddit", status="success") == before + 1

    def test_cache_hit_and_miss(self):
        """Cache lookups are split by result."""
        name = "socialtrend_trend_cache_lookups_total"
        hits, misses = _sample(name, result="hit"), _sample(name, result="miss")

        get_metrics().record_cache(hit=True)
        get_metrics().record_cache(hit=False)
        get_metrics().record_cache(hit=False)

        assert _sample(name, result="hit") == hits + 1
        assert _sample(name, result="miss") == misses + 2
