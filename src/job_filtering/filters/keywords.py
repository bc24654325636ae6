"""
Keyword lookup tables used by the filter engine.

All matching is case-insensitive substring matching against lower-cased job
text, so every keyword here is stored lower-case.
"""

from typing import Dict, List

from job_filtering.filters.models import JobType, WorkplaceType

JOB_TYPE_KEYWORDS: Dict[JobType, List[str]] = {
    JobType.FULL_TIME: ["full-time", "full time", "fulltime", "permanent", "ft"],
    JobType.PART_TIME: ["part-time", "part time", "parttime", "pt"],
    JobType.CONTRACT: ["contract", "contractor", "freelance", "temp", "temporary"],
    JobType.INTERNSHIP: ["intern", "internship", "student", "trainee"],
}

WORKPLACE_KEYWORDS: Dict[WorkplaceType, List[str]] = {
    WorkplaceType.REMOTE: ["remote", "work from home", "wfh", "distributed", "virtual"],
    WorkplaceType.ON_SITE: ["on-site", "onsite", "office", "in-person", "on site"],
    WorkplaceType.HYBRID: ["hybrid", "flexible", "mixed", "combination"],
}

# Requested country (lower-cased) -> other names a location may use
COUNTRY_ALIASES: Dict[str, List[str]] = {
    "usa": ["united states", "america", "us"],
    "uk": ["united kingdom", "britain", "england", "scotland", "wales"],
    "uae": ["united arab emirates", "dubai", "abu dhabi"],
}

CAREER_LEVEL_KEYWORDS: Dict[str, List[str]] = {
    "entry": ["entry", "junior", "beginner", "graduate", "trainee", "intern", "associate"],
    "junior": ["junior", "associate", "entry level", "graduate"],
    "mid": ["mid", "intermediate", "experienced", "senior associate"],
    "senior": ["senior", "lead", "principal", "expert", "manager"],
    "executive": ["executive", "director", "vp", "vice president", "chief", "head of"],
}

JOB_CATEGORY_KEYWORDS: Dict[str, List[str]] = {
    "technology": [
        "tech",
        "software",
        "developer",
        "engineer",
        "programming",
        "coding",
        "it",
        "data",
        "ai",
        "machine learning",
    ],
    "marketing": [
        "marketing",
        "advertisement",
        "promotion",
        "brand",
        "digital marketing",
        "content",
        "social media",
    ],
    "sales": ["sales", "business development", "account", "revenue", "customer", "client"],
    "finance": ["finance", "accounting", "financial", "analyst", "investment", "banking"],
    "healthcare": [
        "health",
        "medical",
        "doctor",
        "nurse",
        "healthcare",
        "clinical",
        "pharmaceutical",
    ],
    "education": [
        "teacher",
        "education",
        "instructor",
        "professor",
        "tutor",
        "academic",
        "school",
    ],
    "design": ["design", "creative", "graphic", "ui", "ux", "visual", "artist"],
    "operations": [
        "operations",
        "logistics",
        "supply chain",
        "project management",
        "coordination",
    ],
    "hr": ["human resources", "hr", "recruitment", "talent", "people", "hiring"],
    "sports": ["sports", "fitness", "coach", "athletic", "trainer", "physical"],
}

# Maximum job age in days for each "date posted" window
DATE_POSTED_WINDOWS: Dict[str, int] = {
    "today": 1,
    "week": 7,
    "month": 30,
    "3months": 90,
}

DEFAULT_DATE_WINDOW_DAYS = 365

# Search query tokens this short are ignored
MIN_QUERY_TOKEN_LENGTH = 3


def keywords_for_level(career_level: str) -> List[str]:
    """Career-level keywords, falling back to the level itself when unknown."""
    level = career_level.lower()
    return CAREER_LEVEL_KEYWORDS.get(level, [level])


def keywords_for_category(job_category: str) -> List[str]:
    """Industry keywords, falling back to the category itself when unknown."""
    category = job_category.lower()
    return JOB_CATEGORY_KEYWORDS.get(category, [category])


def country_terms(country: str) -> List[str]:
    """The requested country plus any known aliases, lower-cased."""
    name = country.lower()
    return [name] + COUNTRY_ALIASES.get(name, [])


def date_window_days(date_posted: str) -> int:
    """Days allowed by a date-posted window; unknown windows allow a year."""
    return DATE_POSTED_WINDOWS.get(date_posted.lower(), DEFAULT_DATE_WINDOW_DAYS)
