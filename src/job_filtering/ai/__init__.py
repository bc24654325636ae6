"""AI-powered relevance scoring."""
from job_filtering.ai.providers import AIProvider, ClaudeProvider, OpenAIProvider, create_provider
from job_filtering.ai.scorer import AIRelevanceScorer, ScoringError

__all__ = [
    "AIProvider",
    "ClaudeProvider",
    "OpenAIProvider",
    "create_provider",
    "AIRelevanceScorer",
    "ScoringError",
]
