"""Tests for result storage module."""

import csv
import json
import tempfile
from pathlib import Path

import pytest

from job_filtering.filters.models import FilterResult, JobPosting, ScoredJob
from job_filtering.storage import ResultStorage


@pytest.fixture
def temp_dir():
    """Create a temporary directory for test files."""
    with tempfile.TemporaryDirectory() as tmpdir:
        yield tmpdir


@pytest.fixture
def sample_result():
    """Create a sample filter result for testing."""
    jobs = [
        ScoredJob(
            job=JobPosting.model_validate(
                {
                    "recordId": "rec1",
                    "title": "Senior Python Engineer",
                    "company": "Tech Corp",
                    "location": "Remote",
                    "url": "https://example.com/job/1",
                }
            ),
            score=92,
            reasons=["Title matches", "Remote role"],
            flags=[],
        ),
        ScoredJob(
            job=JobPosting.model_validate(
                {
                    "title": "JavaScript Developer",
                    "company": "Web Inc",
                    "location": "Portland, OR",
                }
            ),
            score=78,
            reasons=["Related stack"],
            flags=["Location may not match your country preference"],
        ),
    ]
    return FilterResult(
        jobs=jobs,
        message="Found jobs with minor variations from your exact preferences",
        expanded_search=True,
    )


class TestResultStorageInit:
    """Test ResultStorage initialization."""

    def test_init_default_format(self):
        """Test initialization with default format."""
        config = {"output": {"file_path": "data/results.json"}}
        storage = ResultStorage(config)
        assert storage.output_format == "json"
        assert storage.file_path == "data/results.json"

    def test_init_empty_config(self):
        """Test initialization without an output section."""
        storage = ResultStorage({})
        assert storage.output_format == "json"
        assert storage.file_path == "data/filtered_jobs.json"


class TestSaveJSON:
    """Test JSON output."""

    def test_save_json(self, temp_dir, sample_result):
        """Test saving the full result document."""
        file_path = Path(temp_dir) / "results.json"
        storage = ResultStorage({"output": {"format": "json", "file_path": str(file_path)}})

        storage.save(sample_result)

        with open(file_path) as f:
            data = json.load(f)
        assert data["total"] == 2
        assert data["expanded_search"] is True
        assert data["message"] == sample_result.message
        assert data["jobs"][0]["score"] == 92
        assert data["jobs"][0]["record_id"] == "rec1"
        # Unknown job fields are passed through
        assert data["jobs"][0]["url"] == "https://example.com/job/1"

    def test_creates_parent_directories(self, temp_dir, sample_result):
        """Test that nested output directories are created."""
        file_path = Path(temp_dir) / "nested" / "dir" / "results.json"
        storage = ResultStorage({"output": {"format": "json", "file_path": str(file_path)}})

        storage.save(sample_result)

        assert file_path.exists()

    def test_save_empty_result(self, temp_dir):
        """Test that empty results are still written as JSON."""
        file_path = Path(temp_dir) / "results.json"
        storage = ResultStorage({"output": {"format": "json", "file_path": str(file_path)}})

        storage.save(FilterResult(message="No jobs match your selected preferences."))

        with open(file_path) as f:
            data = json.load(f)
        assert data["jobs"] == []
        assert data["total"] == 0


class TestSaveCSV:
    """Test CSV output."""

    def test_save_csv(self, temp_dir, sample_result):
        """Test saving one row per job."""
        file_path = Path(temp_dir) / "results.csv"
        storage = ResultStorage({"output": {"format": "csv", "file_path": str(file_path)}})

        storage.save(sample_result)

        with open(file_path, newline="") as f:
            rows = list(csv.DictReader(f))
        assert len(rows) == 2
        assert rows[0]["title"] == "Senior Python Engineer"
        assert rows[0]["score"] == "92"
        assert rows[0]["reasons"] == "Title matches; Remote role"
        assert rows[1]["flags"] == "Location may not match your country preference"
        assert "url" not in rows[0]

    def test_empty_result_writes_nothing(self, temp_dir):
        """Test that an empty result does not create a CSV file."""
        file_path = Path(temp_dir) / "results.csv"
        storage = ResultStorage({"output": {"format": "csv", "file_path": str(file_path)}})

        storage.save(FilterResult())

        assert not file_path.exists()


class TestUnsupportedFormat:
    def test_raises_for_unknown_format(self, temp_dir, sample_result):
        storage = ResultStorage(
            {"output": {"format": "xml", "file_path": str(Path(temp_dir) / "out.xml")}}
        )

        with pytest.raises(ValueError, match="Unsupported output format"):
            storage.save(sample_result)
