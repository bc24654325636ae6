"""TTL cache for relevance scores."""

import logging
import time
from typing import Any, Dict, Optional, Tuple

from job_filtering.filters.models import FilterSet, JobPosting, ScoreResult

logger = logging.getLogger(__name__)


class ScoreCache:
    """
    Remembers relevance scores for a short time.

    Re-running the same search (paging, refreshing the results page) would
    otherwise send every job back to the LLM. The caller creates the cache
    and hands it to the scorer; there is no shared module-level instance.

    Example:
        ```python
        cache = ScoreCache(ttl_seconds=300)
        scorer = AIRelevanceScorer(provider, score_cache=cache)
        ```
    """

    def __init__(self, ttl_seconds: int = 300):
        """
        Args:
            ttl_seconds: How long an entry stays valid (default: 5 minutes)
        """
        self.ttl = ttl_seconds
        self.cache: Dict[str, Tuple[ScoreResult, float]] = {}  # key -> (result, stored_at)
        self.hits = 0
        self.misses = 0

    @staticmethod
    def make_key(job: JobPosting, filters: FilterSet) -> str:
        """
        Key a score by job identity and the filters it was computed for.

        The record ID identifies the job when present; otherwise title,
        company and location do, case-insensitively.
        """
        if job.record_id:
            identity = f"id:{job.record_id}"
        else:
            identity = f"job:{job.title}|{job.company}|{job.location or ''}".lower()
        return f"{identity}#{filters.model_dump_json()}"

    def get(self, key: str) -> Optional[ScoreResult]:
        """Return a fresh cached result, or None (expired entries are evicted)."""
        entry = self.cache.get(key)
        if entry is not None and time.time() - entry[1] > self.ttl:
            # Another thread may have evicted it already
            self.cache.pop(key, None)
            entry = None

        if entry is None:
            self.misses += 1
            return None

        self.hits += 1
        logger.debug(f"Score cache hit: {key[:80]}")
        return entry[0]

    def set(self, key: str, result: ScoreResult) -> None:
        self.cache[key] = (result, time.time())

    def clear(self) -> None:
        logger.info(f"Clearing {len(self.cache)} score cache entries")
        self.cache.clear()

    def get_stats(self) -> Dict[str, Any]:
        """Hit/miss counters, hit rate (percent) and current size."""
        lookups = self.hits + self.misses
        return {
            "hits": self.hits,
            "misses": self.misses,
            "total_checks": lookups,
            "hit_rate_percent": (self.hits / lookups * 100) if lookups else 0,
            "entries_in_cache": len(self.cache),
            "ttl_seconds": self.ttl,
        }

    def __repr__(self) -> str:
        stats = self.get_stats()
        return (
            f"ScoreCache(entries={stats['entries_in_cache']}, hits={stats['hits']}, "
            f"misses={stats['misses']}, hit_rate={stats['hit_rate_percent']:.1f}%)"
        )
