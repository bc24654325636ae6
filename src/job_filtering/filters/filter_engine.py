"""
Job filter engine.

Takes a candidate's filters and a list of job postings and returns a
relevance-ordered subset, with a message explaining how far the search had
to be broadened to find results.
"""

import logging
from concurrent.futures import ThreadPoolExecutor, wait
from datetime import datetime
from typing import Any, Dict, Iterable, List, Optional, Tuple, Union

from pydantic import ValidationError

from job_filtering.filters.matching import hard_filter_violations, is_exact_match
from job_filtering.filters.models import (
    FilterResult,
    FilterSet,
    JobPosting,
    ScoredJob,
    ScoreResult,
)
from job_filtering.filters.scoring import HeuristicScorer, RelevanceScorer
from job_filtering.logging_config import get_structured_logger

logger = logging.getLogger(__name__)
slogger = get_structured_logger(__name__)

JobInput = Union[JobPosting, Dict[str, Any]]
FilterInput = Union[FilterSet, Dict[str, Any], None]

HARD_FILTER_REJECTION_MESSAGE = (
    "No jobs match your selected preferences. "
    "Try adjusting your job type, workplace, or location filters."
)
NO_MATCHES_MESSAGE = "No jobs match your selected preferences. Try adjusting your filters."
ALL_JOBS_MESSAGE = "Showing all available jobs ranked by relevance to your preferences"

# (minimum score, message, expanded_search), most restrictive first
DEFAULT_TIERS: List[Tuple[int, str, bool]] = [
    (90, "", False),
    (75, "Found jobs with minor variations from your exact preferences", True),
    (60, "Expanded search to include jobs that closely match your preferences", True),
    (40, "Expanded search significantly to include potentially relevant jobs", True),
]


class JobFilterEngine:
    """
    Filter engine that ranks jobs against candidate preferences.

    Pipeline:
    1. No filters: return everything at the default score
    2. Hard filters (workplace, country, job type): eliminate violators
    3. Exact matches: if any job matches every filter, return only those
    4. Hard filters only: return every survivor at the default score
    5. Soft filters: score survivors with the relevance scorer
    6. Return the most restrictive non-empty score tier

    Scorer failures and timeouts degrade the affected job to the keyword
    heuristic; they never fail the whole call.
    """

    def __init__(
        self,
        scorer: Optional[RelevanceScorer] = None,
        config: Optional[Dict[str, Any]] = None,
    ):
        """
        Initialize filter engine.

        Args:
            scorer: Relevance scorer for soft-filter ranking. Defaults to the
                keyword heuristic.
            config: The "filtering" configuration section. Recognized keys:
                default_score, exact_match_score, thresholds (four descending
                scores), max_workers, scorer_timeout (seconds the whole scoring batch may take).
        """
        config = config or {}
        self.fallback_scorer = HeuristicScorer()
        self.scorer = scorer or self.fallback_scorer

        self.default_score = config.get("default_score", 80)
        self.exact_match_score = config.get("exact_match_score", 95)
        self.max_workers = max(1, config.get("max_workers", 5))
        self.scorer_timeout = config.get("scorer_timeout", 30.0)

        thresholds = config.get("thresholds")
        if thresholds:
            if len(thresholds) != len(DEFAULT_TIERS):
                raise ValueError(
                    f"Expected {len(DEFAULT_TIERS)} score thresholds, got {len(thresholds)}"
                )
            self.tiers = [
                (int(threshold), message, expanded)
                for threshold, (_, message, expanded) in zip(thresholds, DEFAULT_TIERS)
            ]
        else:
            self.tiers = list(DEFAULT_TIERS)

    def filter(
        self,
        jobs: Iterable[JobInput],
        filters: FilterInput = None,
        now: Optional[datetime] = None,
    ) -> FilterResult:
        """
        Filter and rank jobs against candidate filters.

        Args:
            jobs: Job postings (models or raw dicts). Raw dicts that fail
                validation are logged and skipped.
            filters: Candidate filters (model, raw dict, or None for no filters)
            now: Reference time for the date-posted filter (defaults to now)

        Returns:
            FilterResult with ordered jobs, explanation message and
            expanded-search flag
        """
        filter_set = self._coerce_filters(filters)
        postings = self._coerce_jobs(jobs)

        slogger.filter_stage(
            "START",
            "started",
            {
                "jobs": len(postings),
                "hard": sorted(filter_set.hard_filters()),
                "soft": sorted(filter_set.soft_filters()),
            },
        )

        if filter_set.is_empty():
            slogger.filter_stage("START", "skipped", {"reason": "no filters"})
            return FilterResult(
                jobs=[
                    self._fixed_score(job, self.default_score, "No filters applied")
                    for job in postings
                ],
            )

        # Hard filters are never relaxed
        survivors = []
        for job in postings:
            violations = hard_filter_violations(job, filter_set)
            if violations:
                slogger.job_activity(job.title, "REJECTED", {"violations": "; ".join(violations)})
            else:
                survivors.append(job)

        slogger.filter_stage(
            "HARD_FILTER",
            "completed",
            {"passed": len(survivors), "rejected": len(postings) - len(survivors)},
        )

        if filter_set.has_hard_filters() and not survivors:
            return FilterResult(jobs=[], message=HARD_FILTER_REJECTION_MESSAGE)

        exact_matches = [job for job in survivors if is_exact_match(job, filter_set, now)]
        slogger.filter_stage("EXACT_MATCH", "completed", {"matches": len(exact_matches)})

        if exact_matches:
            return FilterResult(
                jobs=[
                    self._fixed_score(
                        job, self.exact_match_score, "Exact match for all selected filters"
                    )
                    for job in exact_matches
                ],
            )

        if not filter_set.has_soft_filters():
            return FilterResult(
                jobs=[
                    self._fixed_score(job, self.default_score, "Matches your required filters")
                    for job in survivors
                ],
            )

        scored = self._score_jobs(survivors, filter_set)
        return self._select_tier(scored)

    def _coerce_filters(self, filters: FilterInput) -> FilterSet:
        if filters is None:
            return FilterSet()
        if isinstance(filters, FilterSet):
            return filters
        try:
            return FilterSet.model_validate(filters)
        except ValidationError as e:
            logger.warning(f"Invalid filters treated as unset: {e.error_count()} errors")
            return FilterSet()

    def _coerce_jobs(self, jobs: Iterable[JobInput]) -> List[JobPosting]:
        postings = []
        for index, job in enumerate(jobs or []):
            if isinstance(job, JobPosting):
                postings.append(job)
                continue
            try:
                postings.append(JobPosting.model_validate(job))
            except ValidationError as e:
                logger.warning(f"Skipping invalid job at index {index}: {e.error_count()} errors")
        return postings

    @staticmethod
    def _fixed_score(job: JobPosting, score: int, reason: str) -> ScoredJob:
        return ScoredJob(job=job, score=score, reasons=[reason], flags=[])

    def _run_scorer(self, job: JobPosting, filters: FilterSet) -> ScoreResult:
        result = self.scorer.score(job, filters)
        if not isinstance(result, ScoreResult):
            result = ScoreResult.model_validate(result)
        return result

    def _fallback(self, job: JobPosting, filters: FilterSet, error: str) -> ScoredJob:
        slogger.job_activity(job.title, "SCORER_FALLBACK", {"error": error})
        result = self.fallback_scorer.score(job, filters)
        return ScoredJob(job=job, score=result.score, reasons=result.reasons, flags=result.flags)

    def _score_jobs(self, jobs: List[JobPosting], filters: FilterSet) -> List[ScoredJob]:
        """
        Score jobs concurrently, preserving input order.

        Each job is scored independently; a failure only affects that job.
        The whole batch shares one deadline, so jobs still running or queued
        when it passes are scored with the heuristic instead.
        """
        if not jobs:
            return []

        scored: List[ScoredJob] = []
        failures = 0
        executor = ThreadPoolExecutor(max_workers=min(self.max_workers, len(jobs)))
        try:
            futures = [executor.submit(self._run_scorer, job, filters) for job in jobs]
            _, not_done = wait(futures, timeout=self.scorer_timeout)
            for job, future in zip(jobs, futures):
                if future in not_done:
                    failures += 1
                    future.cancel()
                    scored.append(
                        self._fallback(job, filters, f"not scored within {self.scorer_timeout}s")
                    )
                    continue
                try:
                    result = future.result()
                except Exception as e:
                    failures += 1
                    logger.warning(f"Relevance scoring failed for {job.title!r}: {str(e)}")
                    scored.append(self._fallback(job, filters, str(e)))
                    continue

                slogger.job_activity(job.title, "SCORED", {"score": result.score})
                scored.append(
                    ScoredJob(job=job, score=result.score, reasons=result.reasons, flags=result.flags)
                )
        finally:
            # Do not wait on calls that already timed out
            executor.shutdown(wait=False, cancel_futures=True)

        slogger.filter_stage(
            "SCORE",
            "degraded" if failures else "completed",
            {"scored": len(scored), "fallbacks": failures},
        )
        return scored

    def _select_tier(self, scored: List[ScoredJob]) -> FilterResult:
        """Return the most restrictive non-empty score tier, highest scores first."""
        for threshold, message, expanded in self.tiers:
            bucket = [job for job in scored if job.score >= threshold]
            if bucket:
                slogger.filter_stage(
                    "BUCKET", "completed", {"threshold": threshold, "jobs": len(bucket)}
                )
                return FilterResult(
                    jobs=self._sort(bucket), message=message, expanded_search=expanded
                )

        if not scored:
            return FilterResult(jobs=[], message=NO_MATCHES_MESSAGE)

        slogger.filter_stage("BUCKET", "completed", {"threshold": "none", "jobs": len(scored)})
        return FilterResult(jobs=self._sort(scored), message=ALL_JOBS_MESSAGE, expanded_search=True)

    @staticmethod
    def _sort(jobs: List[ScoredJob]) -> List[ScoredJob]:
        # sorted() is stable, so ties keep input order
        return sorted(jobs, key=lambda job: job.score, reverse=True)
