"""LLM-backed relevance scorer."""

import json
import logging
from typing import Any, Dict, List, Optional

from job_filtering.ai.prompts import SYSTEM_PROMPT, RelevancePrompts
from job_filtering.ai.providers import AIProvider
from job_filtering.filters.models import FilterSet, JobPosting, ScoreResult
from job_filtering.filters.scoring import RelevanceScorer
from job_filtering.logging_config import get_structured_logger
from job_filtering.utils.score_cache import ScoreCache

logger = logging.getLogger(__name__)
slogger = get_structured_logger(__name__)


class ScoringError(RuntimeError):
    """Raised when a relevance score cannot be produced for a job."""


def extract_json(response: str) -> Dict[str, Any]:
    """
    Parse a JSON object from an LLM response.

    Handles responses wrapped in markdown code fences.

    Raises:
        ScoringError: If no JSON object can be parsed.
    """
    response_clean = response.strip()
    if "```json" in response_clean:
        start = response_clean.find("```json") + 7
        end = response_clean.find("```", start)
        response_clean = response_clean[start:end].strip()
    elif "```" in response_clean:
        start = response_clean.find("```") + 3
        end = response_clean.find("```", start)
        response_clean = response_clean[start:end].strip()

    try:
        data = json.loads(response_clean)
    except json.JSONDecodeError as e:
        raise ScoringError(f"Failed to parse AI response as JSON: {str(e)}") from e

    if not isinstance(data, dict):
        raise ScoringError(f"Expected a JSON object, got {type(data).__name__}")
    return data


def _string_list(value: Any) -> List[str]:
    if not value:
        return []
    if isinstance(value, str):
        return [value]
    return [str(v) for v in value]


class AIRelevanceScorer(RelevanceScorer):
    """LLM-backed relevance scorer."""

    def __init__(
        self,
        provider: AIProvider,
        score_cache: Optional[ScoreCache] = None,
        max_tokens: int = 1000,
        temperature: float = 0.3,
    ):
        """
        Initialize AI relevance scorer.

        Args:
            provider: AI provider instance.
            score_cache: Optional cache shared across calls.
            max_tokens: Maximum tokens in the model response.
            temperature: Sampling temperature.
        """
        self.provider = provider
        self.score_cache = score_cache
        self.max_tokens = max_tokens
        self.temperature = temperature
        self.prompts = RelevancePrompts()

    def score(self, job: JobPosting, filters: FilterSet) -> ScoreResult:
        """Score a job with the LLM, using the cache when one is configured."""
        key = None
        if self.score_cache is not None:
            key = ScoreCache.make_key(job, filters)
            cached = self.score_cache.get(key)
            if cached is not None:
                logger.debug(f"Using cached score for {job.title!r}")
                return cached

        prompt = self.prompts.score_job(job, filters)
        response = self.provider.generate(
            prompt,
            max_tokens=self.max_tokens,
            temperature=self.temperature,
            system=SYSTEM_PROMPT,
        )
        result = self.parse_response(response)
        slogger.ai_activity(
            "score",
            "completed",
            {"model": getattr(self.provider, "model", "unknown"), "score": result.score},
        )

        if key is not None:
            self.score_cache.set(key, result)
        return result

    @staticmethod
    def parse_response(response: str) -> ScoreResult:
        """
        Convert a raw model response into a ScoreResult.

        A missing score defaults to 50; scores are clamped to 0-100.

        Raises:
            ScoringError: If the response is not a usable JSON object.
        """
        analysis = extract_json(response or "")

        raw_score = analysis.get("score")
        if raw_score is None:
            raw_score = 50
        try:
            score = int(round(float(raw_score)))
        except (TypeError, ValueError) as e:
            raise ScoringError(f"Invalid score in AI response: {raw_score!r}") from e

        return ScoreResult(
            score=min(max(score, 0), 100),
            reasons=_string_list(analysis.get("matchReasons", analysis.get("reasons"))),
            flags=_string_list(analysis.get("flaggedIssues", analysis.get("flags"))),
        )
