"""Base class for job posting sources."""

from abc import ABC, abstractmethod
from typing import List

from job_filtering.filters.models import JobPosting


class JobSource(ABC):
    """Abstract base class for job posting sources.

    A source supplies the already-fetched, unranked job list the filter
    engine works on. Standard job fields:
    {
        "record_id": str,          # Source record identifier (optional)
        "title": str,              # Job title/role
        "company": str,            # Company name
        "location": str,           # Job location (optional)
        "description": str,        # Full job description
        "employment_type": str,    # e.g. "Full Time" (optional)
        "experience_level": str,   # e.g. "Senior" (optional)
        "skills": List[str],       # Required skills (optional)
        "posted_date": str,        # ISO date the job was posted (optional)
    }
    """

    @abstractmethod
    def fetch_jobs(self) -> List[JobPosting]:
        """
        Fetch job postings from the source.

        Returns:
            List of validated job postings.
        """
        pass
