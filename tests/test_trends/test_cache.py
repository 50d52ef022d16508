"""Tests for the TTL cache."""

from src.trends.cache import TTLCache


class TestTTLCache:
    """Tests for TTLCache."""

    def test_fresh_entry_returned(self, fake_clock):
        """Entries younger than the TTL are returned."""
        cache = TTLCache(clock=fake_clock)
        cache.set("reddit", "snapshot")
        fake_clock.advance(899)

        assert cache.get("reddit", ttl=900) == "snapshot"

    def test_expired_at_ttl(self, fake_clock):
        """An entry exactly TTL seconds old is expired."""
        cache = TTLCache(clock=fake_clock)
        cache.set("reddit", "snapshot")
        fake_clock.advance(900)

        assert cache.get("reddit", ttl=900) is None

    def test_ttl_decided_per_lookup(self, fake_clock):
        """The same entry can be fresh for one TTL and stale for another."""
        cache = TTLCache(clock=fake_clock)
        cache.set("news", "snapshot")
        fake_clock.advance(300)

        assert cache.get("news", ttl=120) is None
        assert cache.get("news", ttl=900) == "snapshot"

    def test_missing_key(self):
        """Unknown keys return None."""
        assert TTLCache().get("nope", ttl=900) is None

    def test_set_replaces(self, fake_clock):
        """Setting a key again refreshes value and timestamp."""
        cache = TTLCache(clock=fake_clock)
        cache.set("k", 1)
        fake_clock.advance(100)
        cache.set("k", 2)
        fake_clock.advance(100)

        assert cache.get("k", ttl=150) == 2

    def test_invalidate(self):
        """invalidate() drops one key or all keys."""
        cache = TTLCache()
        cache.set("a", 1)
        cache.set("b", 2)

        cache.invalidate("a")
        assert "a" not in cache
        assert "b" in cache

        cache.invalidate()
        assert len(cache) == 0
