"""Shared fixtures for job filtering tests."""

import threading
import time
from datetime import datetime, timezone

import pytest

from job_filtering.filters.models import FilterSet, JobPosting, ScoreResult
from job_filtering.filters.scoring import RelevanceScorer

NOW = datetime(2026, 1, 15, 12, 0, tzinfo=timezone.utc)


class FakeScorer(RelevanceScorer):
    """Deterministic relevance scorer keyed by job title."""

    def __init__(self, scores=None, default=50, fail_titles=(), delay_titles=(), delay=0.5):
        self.scores = scores or {}
        self.default = default
        self.fail_titles = set(fail_titles)
        self.delay_titles = set(delay_titles)
        self.delay = delay
        self.calls = []
        self._lock = threading.Lock()

    def score(self, job: JobPosting, filters: FilterSet) -> ScoreResult:
        with self._lock:
            self.calls.append(job.title)
        if job.title in self.fail_titles:
            raise RuntimeError("scorer unavailable")
        if job.title in self.delay_titles:
            time.sleep(self.delay)
        return ScoreResult(
            score=self.scores.get(job.title, self.default),
            reasons=[f"fake score for {job.title}"],
            flags=[],
        )


@pytest.fixture
def now():
    """Fixed reference time for date-posted checks."""
    return NOW


@pytest.fixture
def make_job():
    """Factory for job postings with sensible defaults."""

    def _make(**fields) -> JobPosting:
        data = {"title": "Role", "description": "", "company": "Acme"}
        data.update(fields)
        return JobPosting.model_validate(data)

    return _make


@pytest.fixture
def make_scorer():
    """Factory for deterministic fake scorers."""

    def _make(**kwargs) -> FakeScorer:
        return FakeScorer(**kwargs)

    return _make


@pytest.fixture
def unmatched_query():
    """Soft filters that no test job matches exactly."""
    return FilterSet(search_query="zzzquery")


@pytest.fixture
def plain_jobs(make_job):
    """Jobs with no workplace, job type or location information."""
    return [
        make_job(title="Alpha", description="Role."),
        make_job(title="Bravo", description="Role."),
        make_job(title="Charlie", description="Role."),
        make_job(title="Delta", description="Role."),
    ]
