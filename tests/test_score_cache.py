"""Tests for relevance score cache."""

from unittest.mock import patch

from job_filtering.filters.models import FilterSet, JobPosting, ScoreResult
from job_filtering.utils.score_cache import ScoreCache


def _job(**fields):
    data = {"title": "Nurse", "company": "Clinic", "location": "Cairo, Egypt"}
    data.update(fields)
    return JobPosting.model_validate(data)


class TestScoreCache:
    """Test score cache functionality."""

    def test_init_default_ttl(self):
        """Test cache initialization with default TTL."""
        cache = ScoreCache()
        assert cache.ttl == 300
        assert cache.hits == 0
        assert cache.misses == 0
        assert len(cache.cache) == 0

    def test_init_custom_ttl(self):
        """Test cache initialization with custom TTL."""
        cache = ScoreCache(ttl_seconds=600)
        assert cache.ttl == 600

    def test_get_miss_not_in_cache(self):
        """Test cache miss when key not in cache."""
        cache = ScoreCache()
        result = cache.get("id:123#{}")
        assert result is None
        assert cache.misses == 1
        assert cache.hits == 0

    def test_set_and_get_hit(self):
        """Test setting and reading a cache entry."""
        cache = ScoreCache()
        key = ScoreCache.make_key(_job(), FilterSet(search_query="nurse"))

        cache.set(key, ScoreResult(score=72, reasons=["Title matches"]))
        assert len(cache.cache) == 1

        result = cache.get(key)
        assert result.score == 72
        assert result.reasons == ["Title matches"]
        assert cache.hits == 1
        assert cache.misses == 0

    def test_cache_expiration(self):
        """Test that cache entries expire after TTL."""
        cache = ScoreCache(ttl_seconds=300)
        key = "id:123#{}"

        with patch("job_filtering.utils.score_cache.time") as mock_time:
            mock_time.time.return_value = 1000.0
            cache.set(key, ScoreResult(score=60))

            # Still fresh
            mock_time.time.return_value = 1200.0
            assert cache.get(key) is not None

            # Expired entries are evicted
            mock_time.time.return_value = 1301.0
            assert cache.get(key) is None

        assert len(cache.cache) == 0
        assert cache.hits == 1
        assert cache.misses == 1

    def test_expired_entry_already_evicted(self):
        """A stale read of an entry another thread already evicted is a plain miss."""

        class StaleReads(dict):
            def get(self, key, default=None):
                return (ScoreResult(score=60), 0.0)

        cache = ScoreCache(ttl_seconds=300)
        cache.cache = StaleReads()

        assert cache.get("id:123#{}") is None
        assert cache.misses == 1
        assert cache.hits == 0

    def test_clear(self):
        """Test clearing all cache entries."""
        cache = ScoreCache()
        cache.set("a", ScoreResult(score=10))
        cache.set("b", ScoreResult(score=20))

        cache.clear()

        assert len(cache.cache) == 0

    def test_get_stats(self):
        """Test cache statistics."""
        cache = ScoreCache(ttl_seconds=120)
        cache.set("a", ScoreResult(score=10))
        cache.get("a")
        cache.get("a")
        cache.get("missing")

        stats = cache.get_stats()

        assert stats["hits"] == 2
        assert stats["misses"] == 1
        assert stats["total_checks"] == 3
        assert abs(stats["hit_rate_percent"] - 66.67) < 0.1
        assert stats["entries_in_cache"] == 1
        assert stats["ttl_seconds"] == 120

    def test_stats_empty_cache(self):
        """Test hit rate with no lookups."""
        assert ScoreCache().get_stats()["hit_rate_percent"] == 0

    def test_repr(self):
        """Test string representation."""
        cache = ScoreCache()
        cache.set("a", ScoreResult(score=10))
        cache.get("a")

        assert repr(cache) == "ScoreCache(entries=1, hits=1, misses=0, hit_rate=100.0%)"


class TestMakeKey:
    """Test cache key construction."""

    def test_record_id_identifies_job(self):
        """Jobs with the same record ID share a key regardless of title."""
        filters = FilterSet(city="Cairo")
        key_a = ScoreCache.make_key(_job(record_id="rec1"), filters)
        key_b = ScoreCache.make_key(_job(record_id="rec1", title="Head Nurse"), filters)

        assert key_a == key_b
        assert key_a.startswith("id:rec1#")

    def test_fallback_identity_is_case_insensitive(self):
        filters = FilterSet(city="Cairo")
        key_a = ScoreCache.make_key(_job(title="Nurse"), filters)
        key_b = ScoreCache.make_key(_job(title="NURSE"), filters)

        assert key_a == key_b
        assert key_a.startswith("job:nurse|clinic|cairo, egypt#")

    def test_filters_change_key(self):
        job = _job(record_id="rec1")

        assert ScoreCache.make_key(job, FilterSet(city="Cairo")) != ScoreCache.make_key(
            job, FilterSet(city="Giza")
        )
