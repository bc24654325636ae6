"""Job posting sources."""

from job_filtering.sources.base import JobSource
from job_filtering.sources.json_source import JsonFileJobSource

__all__ = ["JobSource", "JsonFileJobSource"]
