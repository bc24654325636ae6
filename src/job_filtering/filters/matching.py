"""
Deterministic matching rules for job filters.

Hard-filter checks decide whether a job is eliminated outright. Exact-match
checks decide whether a job satisfies every supplied filter without needing a
relevance score. All checks are case-insensitive substring matches over the
relevant job text.
"""

from datetime import datetime, timezone
from typing import Iterable, List, Optional

from job_filtering.filters.keywords import (
    JOB_TYPE_KEYWORDS,
    MIN_QUERY_TOKEN_LENGTH,
    WORKPLACE_KEYWORDS,
    country_terms,
    date_window_days,
    keywords_for_category,
    keywords_for_level,
)
from job_filtering.filters.models import FilterSet, JobPosting, JobType, WorkplaceType


def _text(*parts: Optional[str]) -> str:
    return " ".join(p for p in parts if p).lower()


def _contains_any(text: str, keywords: Iterable[str]) -> bool:
    return any(keyword in text for keyword in keywords)


def employment_text(job: JobPosting) -> str:
    """Text searched for employment-type keywords."""
    return _text(job.employment_type, job.description)


def workplace_text(job: JobPosting) -> str:
    """Text searched for workplace keywords."""
    return _text(job.location, job.description)


def query_tokens(search_query: str) -> List[str]:
    """Split a search query into tokens long enough to be meaningful."""
    return [t for t in search_query.lower().split() if len(t) >= MIN_QUERY_TOKEN_LENGTH]


def matches_job_type(job: JobPosting, job_type: JobType) -> bool:
    return _contains_any(employment_text(job), JOB_TYPE_KEYWORDS[job_type])


def matches_workplace(job: JobPosting, workplace: Iterable[WorkplaceType]) -> bool:
    text = workplace_text(job)
    return any(_contains_any(text, WORKPLACE_KEYWORDS[w]) for w in workplace)


def matches_country(job: JobPosting, country: str) -> bool:
    """True if the job location names the country or one of its aliases."""
    return _contains_any(_text(job.location), country_terms(country))


def matches_city(job: JobPosting, city: str) -> bool:
    return city.lower() in _text(job.location)


def matches_career_level(job: JobPosting, career_level: str) -> bool:
    text = _text(job.title, job.description, job.experience_level)
    return _contains_any(text, keywords_for_level(career_level))


def matches_job_category(job: JobPosting, job_category: str) -> bool:
    text = _text(job.title, job.description)
    return _contains_any(text, keywords_for_category(job_category))


def matches_search_query(job: JobPosting, search_query: str) -> bool:
    """True if any meaningful query token appears in the title, description or company."""
    text = _text(job.title, job.description, job.company)
    # A query made only of short tokens ("qa", "ui") matches nothing
    return _contains_any(text, query_tokens(search_query))


def job_age_days(job: JobPosting, now: Optional[datetime] = None) -> Optional[int]:
    """Whole days since the job was posted, or None if the date is unknown."""
    if job.posted_date is None:
        return None
    now = now or datetime.now(timezone.utc)
    if now.tzinfo is None:
        now = now.replace(tzinfo=timezone.utc)
    return (now - job.posted_date).days


def matches_date_posted(job: JobPosting, date_posted: str, now: Optional[datetime] = None) -> bool:
    """
    Check the job is inside the date-posted window.

    Jobs without a posted date are not constrained.
    """
    age = job_age_days(job, now)
    if age is None:
        return True
    return age <= date_window_days(date_posted)


def hard_filter_violations(job: JobPosting, filters: FilterSet) -> List[str]:
    """
    Check a job against the hard filters.

    A job violates a hard filter only when it positively indicates a value
    the candidate did not choose. Jobs that say nothing about job type,
    workplace or location are kept.

    Args:
        job: Job posting to check
        filters: Candidate filters (only hard filters are consulted)

    Returns:
        List of human-readable violations (empty if the job passes)
    """
    violations = []

    if filters.job_type:
        if not matches_job_type(job, filters.job_type):
            text = employment_text(job)
            others = [
                t for t in JobType if t != filters.job_type and _contains_any(text, JOB_TYPE_KEYWORDS[t])
            ]
            if others:
                violations.append(
                    f"Job type mismatch: looking for {filters.job_type.value} "
                    f"but job is {'/'.join(t.value for t in others)}"
                )

    if filters.workplace:
        if not matches_workplace(job, filters.workplace):
            text = workplace_text(job)
            others = [
                w
                for w in WorkplaceType
                if w not in filters.workplace and _contains_any(text, WORKPLACE_KEYWORDS[w])
            ]
            if others:
                violations.append(
                    f"Workplace mismatch: looking for "
                    f"{'/'.join(w.value for w in filters.workplace)} "
                    f"but job is {'/'.join(w.value for w in others)}"
                )

    if filters.country and job.location:
        if not matches_country(job, filters.country):
            violations.append(
                f"Country mismatch: looking for {filters.country} but job is in {job.location}"
            )

    return violations


def violates_hard_filters(job: JobPosting, filters: FilterSet) -> bool:
    return bool(hard_filter_violations(job, filters))


def is_exact_match(job: JobPosting, filters: FilterSet, now: Optional[datetime] = None) -> bool:
    """
    Check whether a job satisfies every supplied filter, hard and soft.

    Unlike the hard-filter check, absence of data is not a match here: a
    job only matches a job type, workplace or country it actually mentions.
    """
    if filters.job_type and not matches_job_type(job, filters.job_type):
        return False
    if filters.workplace and not matches_workplace(job, filters.workplace):
        return False
    if filters.country and not matches_country(job, filters.country):
        return False
    if filters.city and not matches_city(job, filters.city):
        return False
    if filters.career_level and not matches_career_level(job, filters.career_level):
        return False
    if filters.job_category and not matches_job_category(job, filters.job_category):
        return False
    if filters.search_query and not matches_search_query(job, filters.search_query):
        return False
    if filters.date_posted and not matches_date_posted(job, filters.date_posted, now):
        return False
    return True
