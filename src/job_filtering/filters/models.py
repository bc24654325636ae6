"""
Models for the job filter engine.

Input models (FilterSet, JobPosting) are pydantic models so that raw request
payloads, including the camelCase keys used by the web client, can be
validated and normalized in one place. Output models are plain dataclasses.
"""

import logging
import re
from dataclasses import dataclass, field
from datetime import date, datetime, timezone
from enum import Enum
from typing import Any, Dict, List, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator

logger = logging.getLogger(__name__)


def _compact(value: str) -> str:
    """Lower-case a label and drop everything but letters and digits."""
    return re.sub(r"[^a-z0-9]", "", value.lower())


class JobType(str, Enum):
    """Employment type a candidate can require (hard filter)."""

    FULL_TIME = "Full Time"
    PART_TIME = "Part Time"
    CONTRACT = "Contract"
    INTERNSHIP = "Internship"

    @classmethod
    def parse(cls, value: Any) -> Optional["JobType"]:
        """
        Parse a label such as "Full Time", "full-time" or "FULLTIME".

        Returns:
            Matching JobType, or None if the label is blank or unknown.
        """
        if isinstance(value, cls):
            return value
        if not isinstance(value, str) or not value.strip():
            return None
        key = _compact(value)
        for member in cls:
            if _compact(member.value) == key:
                return member
        logger.warning(f"Ignoring unknown job type filter: {value!r}")
        return None


class WorkplaceType(str, Enum):
    """Workplace arrangement a candidate can require (hard filter)."""

    ON_SITE = "On-site"
    REMOTE = "Remote"
    HYBRID = "Hybrid"

    @classmethod
    def parse(cls, value: Any) -> Optional["WorkplaceType"]:
        """Parse a label such as "On-site", "onsite" or "remote"."""
        if isinstance(value, cls):
            return value
        if not isinstance(value, str) or not value.strip():
            return None
        key = _compact(value)
        for member in cls:
            if _compact(member.value) == key:
                return member
        logger.warning(f"Ignoring unknown workplace filter: {value!r}")
        return None


def _blank_to_none(value: Any) -> Optional[str]:
    if value is None:
        return None
    if not isinstance(value, str):
        value = str(value)
    value = value.strip()
    return value or None


class FilterSet(BaseModel):
    """
    Candidate preference filters.

    Hard filters (workplace, country, job_type) are never relaxed. Soft
    filters (city, career_level, job_category, date_posted, search_query)
    may be relaxed when strict matches are scarce. An unset field means
    "no constraint"; blank values are normalized to unset.
    """

    model_config = ConfigDict(populate_by_name=True, extra="ignore")

    # Hard filters
    workplace: List[WorkplaceType] = Field(default_factory=list)
    country: Optional[str] = None
    job_type: Optional[JobType] = Field(default=None, alias="jobType")

    # Soft filters
    city: Optional[str] = None
    career_level: Optional[str] = Field(default=None, alias="careerLevel")
    job_category: Optional[str] = Field(default=None, alias="jobCategory")
    date_posted: Optional[str] = Field(default=None, alias="datePosted")
    search_query: Optional[str] = Field(default=None, alias="searchQuery")

    @field_validator("workplace", mode="before")
    @classmethod
    def _parse_workplace(cls, value: Any) -> List[WorkplaceType]:
        if value is None:
            return []
        if isinstance(value, (str, WorkplaceType)):
            value = [value]
        if not isinstance(value, (list, tuple, set)):
            logger.warning(f"Ignoring malformed workplace filter: {value!r}")
            return []
        parsed: List[WorkplaceType] = []
        for item in value:
            workplace = WorkplaceType.parse(item)
            if workplace and workplace not in parsed:
                parsed.append(workplace)
        return parsed

    @field_validator("job_type", mode="before")
    @classmethod
    def _parse_job_type(cls, value: Any) -> Optional[JobType]:
        return JobType.parse(value)

    @field_validator(
        "country",
        "city",
        "career_level",
        "job_category",
        "date_posted",
        "search_query",
        mode="before",
    )
    @classmethod
    def _normalize_text(cls, value: Any) -> Optional[str]:
        return _blank_to_none(value)

    def hard_filters(self) -> Dict[str, Any]:
        """Return the hard filters that are set."""
        hard = {
            "workplace": self.workplace,
            "country": self.country,
            "job_type": self.job_type,
        }
        return {k: v for k, v in hard.items() if v}

    def soft_filters(self) -> Dict[str, Any]:
        """Return the soft filters that are set."""
        soft = {
            "city": self.city,
            "career_level": self.career_level,
            "job_category": self.job_category,
            "date_posted": self.date_posted,
            "search_query": self.search_query,
        }
        return {k: v for k, v in soft.items() if v}

    def has_hard_filters(self) -> bool:
        return bool(self.hard_filters())

    def has_soft_filters(self) -> bool:
        return bool(self.soft_filters())

    def is_empty(self) -> bool:
        return not self.has_hard_filters() and not self.has_soft_filters()


class JobPosting(BaseModel):
    """
    Job posting as supplied by a job source.

    Unknown fields are kept so callers get back everything they passed in.
    """

    model_config = ConfigDict(populate_by_name=True, extra="allow")

    record_id: Optional[str] = Field(default=None, alias="recordId")
    title: str = Field(default="", alias="jobTitle")
    description: str = Field(default="", alias="jobDescription")
    company: str = Field(default="", alias="companyName")
    location: Optional[str] = None
    employment_type: Optional[str] = Field(default=None, alias="employmentType")
    experience_level: Optional[str] = Field(default=None, alias="experienceLevel")
    salary_range: Optional[str] = Field(default=None, alias="salaryRange")
    skills: List[str] = Field(default_factory=list)
    posted_date: Optional[datetime] = Field(default=None, alias="postedDate")

    @field_validator("record_id", mode="before")
    @classmethod
    def _coerce_id(cls, value: Any) -> Optional[str]:
        return _blank_to_none(value)

    @field_validator("title", "description", "company", mode="before")
    @classmethod
    def _coerce_text(cls, value: Any) -> str:
        return "" if value is None else str(value)

    @field_validator("location", "employment_type", "experience_level", "salary_range", mode="before")
    @classmethod
    def _coerce_optional_text(cls, value: Any) -> Optional[str]:
        return _blank_to_none(value)

    @field_validator("skills", mode="before")
    @classmethod
    def _parse_skills(cls, value: Any) -> List[str]:
        if not value:
            return []
        if isinstance(value, str):
            value = value.split(",")
        elif not isinstance(value, (list, tuple, set)):
            value = [value]
        return [str(s).strip() for s in value if str(s).strip()]

    @field_validator("posted_date", mode="before")
    @classmethod
    def _parse_posted_date(cls, value: Any) -> Optional[datetime]:
        """Parse ISO dates; anything unparseable is treated as unknown."""
        if value is None or value == "":
            return None
        if isinstance(value, datetime):
            parsed = value
        elif isinstance(value, date):
            parsed = datetime(value.year, value.month, value.day)
        elif isinstance(value, str):
            try:
                parsed = datetime.fromisoformat(value.strip().replace("Z", "+00:00"))
            except ValueError:
                logger.debug(f"Unparseable posted date: {value!r}")
                return None
        else:
            return None

        if parsed.tzinfo is None:
            parsed = parsed.replace(tzinfo=timezone.utc)
        return parsed


class ScoreResult(BaseModel):
    """Relevance verdict for one job."""

    score: int = Field(..., ge=0, le=100, description="Relevance score (0-100)")
    reasons: List[str] = Field(default_factory=list)
    flags: List[str] = Field(default_factory=list)


@dataclass
class ScoredJob:
    """
    Job posting annotated with a relevance score.

    Attributes:
        job: The original job posting
        score: Relevance score (0-100)
        reasons: Why the job matches
        flags: Concerns or mismatches
    """

    job: JobPosting
    score: int
    reasons: List[str] = field(default_factory=list)
    flags: List[str] = field(default_factory=list)

    def to_dict(self) -> dict:
        """Flatten job fields and annotations for serialization."""
        data = self.job.model_dump(mode="json")
        data.update(
            {
                "score": self.score,
                "reasons": list(self.reasons),
                "flags": list(self.flags),
            }
        )
        return data


@dataclass
class FilterResult:
    """
    Result of running the filter engine over a job list.

    Attributes:
        jobs: Jobs ordered by descending score
        message: User-facing explanation (empty when none is needed)
        expanded_search: True if results were broadened beyond exact matches
    """

    jobs: List[ScoredJob] = field(default_factory=list)
    message: str = ""
    expanded_search: bool = False

    def to_dict(self) -> dict:
        """Convert to dictionary for serialization."""
        return {
            "jobs": [j.to_dict() for j in self.jobs],
            "message": self.message,
            "expanded_search": self.expanded_search,
            "total": len(self.jobs),
        }
