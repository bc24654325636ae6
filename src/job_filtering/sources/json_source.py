"""Job source backed by a JSON file."""

import json
import logging
from pathlib import Path
from typing import Any, List

from pydantic import ValidationError

from job_filtering.filters.models import JobPosting
from job_filtering.sources.base import JobSource

logger = logging.getLogger(__name__)


class JsonFileJobSource(JobSource):
    """
    Load job postings from a JSON file.

    The file holds either a list of job objects or an object with a "jobs"
    list. Records that fail validation are skipped with a warning.
    """

    def __init__(self, file_path: str):
        """
        Initialize JSON source.

        Args:
            file_path: Path to the JSON file.
        """
        self.file_path = file_path

    def fetch_jobs(self) -> List[JobPosting]:
        """
        Read and validate the job postings.

        Raises:
            FileNotFoundError: If the file does not exist.
            ValueError: If the file is not valid JSON or has no job list.
        """
        path = Path(self.file_path)
        with open(path, "r") as f:
            try:
                data: Any = json.load(f)
            except json.JSONDecodeError as e:
                raise ValueError(f"Invalid JSON in {path}: {str(e)}") from e

        if isinstance(data, dict):
            data = data.get("jobs")
        if not isinstance(data, list):
            raise ValueError(f"Expected a list of jobs in {path}")

        jobs = []
        for index, record in enumerate(data):
            try:
                jobs.append(JobPosting.model_validate(record))
            except ValidationError as e:
                logger.warning(f"Skipping invalid job record {index} in {path}: {e.error_count()} errors")

        logger.info(f"Loaded {len(jobs)} jobs from {path}")
        return jobs
