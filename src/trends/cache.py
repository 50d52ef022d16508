"""
In-memory TTL cache for trend snapshots.

Entries record the clock reading at store time; the TTL is decided by
the caller on each lookup, so one cache can hold keys with different
freshness requirements.
"""

import time
from collections.abc import Callable
from dataclasses import dataclass
from typing import Generic, TypeVar

V = TypeVar("V")


@dataclass(frozen=True)
class CacheEntry(Generic[V]):
    key: str
    value: V
    stored_at: float


class TTLCache(Generic[V]):
    """
    Keyed cache with per-lookup TTL.

    Usage:
        cache = TTLCache()
        cache.set("hackernews,reddit", snapshot)
        snapshot = cache.get("hackernews,reddit", ttl=900)
    """

    def __init__(self, clock: Callable[[], float] = time.monotonic):
        """
        Args:
            clock: Returns the current time in seconds (injectable for tests).
        """
        self._clock = clock
        self._entries: dict[str, CacheEntry[V]] = {}

    def get(self, key: str, ttl: float) -> V | None:
        """Return the value when it is younger than `ttl` seconds, else None."""
        entry = self._entries.get(key)
        if entry is None:
            return None
        if self._clock() - entry.stored_at >= ttl:
            return None
        return entry.value

    def set(self, key: str, value: V) -> None:
        """Store `value` under `key`, replacing any previous entry."""
        self._entries[key] = CacheEntry(key=key, value=value, stored_at=self._clock())

    def invalidate(self, key: str | None = None) -> None:
        """Drop one key, or every key when `key` is None."""
        if key is None:
            self._entries.clear()
        else:
            self._entries.pop(key, None)

    def __len__(self) -> int:
        return len(self._entries)

    def __contains__(self, key: object) -> bool:
        return key in self._entries
