"""Storage handlers for filter results."""

import csv
import json
from pathlib import Path
from typing import Any, Dict

from job_filtering.filters.models import FilterResult

CSV_FIELDS = [
    "record_id",
    "title",
    "company",
    "location",
    "employment_type",
    "experience_level",
    "posted_date",
    "score",
    "reasons",
    "flags",
]


class ResultStorage:
    """Handle storage of filter results in various formats."""

    def __init__(self, config: Dict[str, Any]):
        """Initialize storage with configuration."""
        self.config = config
        self.output_format = config.get("output", {}).get("format", "json")
        self.file_path = config.get("output", {}).get("file_path", "data/filtered_jobs.json")

    def save(self, result: FilterResult) -> None:
        """
        Save a filter result to configured storage.

        Args:
            result: Filter result to save.
        """
        if self.output_format == "json":
            self._save_json(result)
        elif self.output_format == "csv":
            self._save_csv(result)
        else:
            raise ValueError(f"Unsupported output format: {self.output_format}")

    def _save_json(self, result: FilterResult) -> None:
        """Save the full result document as JSON."""
        Path(self.file_path).parent.mkdir(parents=True, exist_ok=True)
        with open(self.file_path, "w") as f:
            json.dump(result.to_dict(), f, indent=2)

    def _save_csv(self, result: FilterResult) -> None:
        """Save one row per ranked job as CSV."""
        if not result.jobs:
            return

        Path(self.file_path).parent.mkdir(parents=True, exist_ok=True)
        with open(self.file_path, "w", newline="") as f:
            writer = csv.DictWriter(f, fieldnames=CSV_FIELDS, extrasaction="ignore")
            writer.writeheader()
            for scored in result.jobs:
                row = scored.to_dict()
                row["reasons"] = "; ".join(row["reasons"])
                row["flags"] = "; ".join(row["flags"])
                writer.writerow(row)
