"""Job filtering system."""

from job_filtering.filters.models import (
    FilterResult,
    FilterSet,
    JobPosting,
    JobType,
    ScoredJob,
    ScoreResult,
    WorkplaceType,
)
from job_filtering.filters.filter_engine import JobFilterEngine
from job_filtering.filters.scoring import HeuristicScorer, RelevanceScorer

__all__ = [
    "JobFilterEngine",
    "HeuristicScorer",
    "RelevanceScorer",
    "FilterResult",
    "FilterSet",
    "JobPosting",
    "JobType",
    "ScoredJob",
    "ScoreResult",
    "WorkplaceType",
]
