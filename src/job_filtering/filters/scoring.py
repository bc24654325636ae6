"""Relevance scorer interface and the local keyword heuristic."""

from abc import ABC, abstractmethod
from typing import List

from job_filtering.filters.keywords import WORKPLACE_KEYWORDS
from job_filtering.filters.matching import query_tokens
from job_filtering.filters.models import FilterSet, JobPosting, ScoreResult


class RelevanceScorer(ABC):
    """Scores how well one job matches a candidate's filters."""

    @abstractmethod
    def score(self, job: JobPosting, filters: FilterSet) -> ScoreResult:
        """
        Score a job against the filters.

        Args:
            job: Job posting that already passed the hard filters.
            filters: Candidate filters.

        Returns:
            ScoreResult with a 0-100 score, reasons and flags.

        Raises:
            Exception: Any failure. Callers must tolerate it per job.
        """
        pass


class HeuristicScorer(RelevanceScorer):
    """
    Keyword heuristic used when the AI scorer fails for a job.

    Starts at 50 and adds points for workplace (+20), country (+15) and
    search query (+25) matches. Never raises.
    """

    BASE_SCORE = 50
    WORKPLACE_POINTS = 20
    COUNTRY_POINTS = 15
    QUERY_POINTS = 25

    def score(self, job: JobPosting, filters: FilterSet) -> ScoreResult:
        score = self.BASE_SCORE
        reasons: List[str] = []
        flags: List[str] = []

        if filters.workplace:
            text = " ".join(
                p for p in (job.employment_type, job.location, job.description) if p
            ).lower()
            if any(
                keyword in text for w in filters.workplace for keyword in WORKPLACE_KEYWORDS[w]
            ):
                score += self.WORKPLACE_POINTS
                reasons.append("Workplace type matches your preference")
            else:
                flags.append("Workplace type may not match your preference")

        if filters.country:
            if job.location and filters.country.lower() in job.location.lower():
                score += self.COUNTRY_POINTS
                reasons.append("Location matches your country preference")
            else:
                flags.append("Location may not match your country preference")

        if filters.search_query:
            text = f"{job.title} {job.description}".lower()
            if any(token in text for token in query_tokens(filters.search_query)):
                score += self.QUERY_POINTS
                reasons.append("Job content matches your search query")
            else:
                flags.append("Job may not directly match your search query")

        return ScoreResult(score=min(score, 100), reasons=reasons, flags=flags)
