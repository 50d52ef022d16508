"""Observability layer - logging and metrics."""

from src.observability.logging import bind_request_context, clear_request_context, setup_logging
from src.observability.metrics import MetricsCollector, get_metrics

__all__ = [
    "setup_logging",
    "bind_request_context",
    "clear_request_context",
    "MetricsCollector",
    "get_metrics",
]
