"""Exceptions raised by the trend service."""

from src.ingestion.schemas import Platform


class TrendFetchError(Exception):
    """Base exception for trend aggregation failures."""


class AllSourcesFailedError(TrendFetchError):
    """Every requested source adapter failed."""

    def __init__(self, failures: dict[Platform, Exception]):
        details = ", ".join(
            f"{platform.value}: {type(exc).__name__}: {exc}" for platform, exc in failures.items()
        )
        super().__init__(f"All trend sources failed ({details})")
        self.failures = failures
