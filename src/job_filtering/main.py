"""Main entry point for the job filtering CLI."""

import argparse
from typing import Any, Dict, List, Optional

from dotenv import load_dotenv

from job_filtering.ai import AIRelevanceScorer, create_provider
from job_filtering.config import load_config
from job_filtering.filters import FilterResult, FilterSet, JobFilterEngine, RelevanceScorer
from job_filtering.logging_config import get_logger, setup_logging
from job_filtering.sources import JsonFileJobSource
from job_filtering.storage import ResultStorage
from job_filtering.utils.score_cache import ScoreCache

logger = get_logger(__name__)


def build_scorer(config: Dict[str, Any], scorer_type: str = "ai") -> Optional[RelevanceScorer]:
    """
    Build the relevance scorer from configuration.

    Args:
        config: Application configuration.
        scorer_type: "ai" for the LLM scorer, "heuristic" for keyword scoring.

    Returns:
        AI scorer, or None to let the engine use the keyword heuristic.

    Raises:
        ValueError: If the AI provider is misconfigured (e.g. missing API key).
    """
    ai_config = config.get("ai", {})

    if scorer_type == "heuristic" or not ai_config.get("enabled", True):
        logger.info("Using keyword heuristic scorer")
        return None

    provider = create_provider(ai_config.get("provider", "openai"), model=ai_config.get("model"))
    cache = ScoreCache(ttl_seconds=config.get("filtering", {}).get("cache_ttl_seconds", 300))
    logger.info(f"Using AI scorer: {ai_config.get('provider')} ({provider.model})")

    return AIRelevanceScorer(
        provider=provider,
        score_cache=cache,
        max_tokens=ai_config.get("max_tokens", 1000),
        temperature=ai_config.get("temperature", 0.3),
    )


def build_filters(args: argparse.Namespace) -> FilterSet:
    """Build the candidate filter set from CLI arguments."""
    return FilterSet(
        workplace=args.workplace or [],
        country=args.country,
        job_type=args.job_type,
        city=args.city,
        career_level=args.career_level,
        job_category=args.job_category,
        date_posted=args.date_posted,
        search_query=args.search,
    )


def print_summary(result: FilterResult, total_jobs: int, limit: int = 20) -> None:
    """Print a human-readable summary of the result."""
    print("\n" + "=" * 60)
    print("JOB FILTER SUMMARY")
    print("=" * 60)
    print(f"Jobs considered: {total_jobs}")
    print(f"Jobs returned: {len(result.jobs)}")
    print(f"Expanded search: {'yes' if result.expanded_search else 'no'}")
    if result.message:
        print(f"Message: {result.message}")

    if result.jobs:
        print("\nTop results:")
        for scored in result.jobs[:limit]:
            job = scored.job
            location = f" ({job.location})" if job.location else ""
            print(f"  [{scored.score:3d}] {job.title} at {job.company}{location}")
    print("=" * 60 + "\n")


def parse_args(argv: Optional[List[str]] = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Job Filter - Rank job postings against preferences")
    parser.add_argument("--jobs", required=True, help="Path to JSON file with job postings")
    parser.add_argument(
        "--config",
        default=None,
        help="Path to configuration file (default: config/config.yaml if present)",
    )
    parser.add_argument(
        "--workplace",
        action="append",
        help="Required workplace type (Remote, On-site, Hybrid). Repeatable.",
    )
    parser.add_argument("--country", help="Required country")
    parser.add_argument(
        "--job-type", help="Required job type (Full Time, Part Time, Contract, Internship)"
    )
    parser.add_argument("--city", help="Preferred city")
    parser.add_argument(
        "--career-level", help="Preferred career level (entry, junior, mid, senior, executive)"
    )
    parser.add_argument("--job-category", help="Preferred job category (e.g. technology)")
    parser.add_argument("--date-posted", help="Posted within (today, week, month, 3months)")
    parser.add_argument("--search", help="Free-text search query")
    parser.add_argument(
        "--scorer",
        choices=["ai", "heuristic"],
        default="ai",
        help="Relevance scorer for soft filters (default: ai)",
    )
    parser.add_argument("--output", help="Save results to this file")
    parser.add_argument("--format", choices=["json", "csv"], help="Output format")
    return parser.parse_args(argv)


def main(argv: Optional[List[str]] = None) -> None:
    """Main execution function."""
    load_dotenv()
    setup_logging()

    args = parse_args(argv)
    config = load_config(args.config)

    if args.output:
        config["output"]["file_path"] = args.output
    if args.format:
        config["output"]["format"] = args.format

    jobs = JsonFileJobSource(args.jobs).fetch_jobs()
    filters = build_filters(args)

    engine = JobFilterEngine(
        scorer=build_scorer(config, args.scorer),
        config=config.get("filtering", {}),
    )
    result = engine.filter(jobs, filters)

    if args.output:
        ResultStorage(config).save(result)
        logger.info(f"Results saved to {config['output']['file_path']}")

    print_summary(result, total_jobs=len(jobs))


if __name__ == "__main__":
    main()
