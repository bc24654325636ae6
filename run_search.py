#!/usr/bin/env python3
"""Run the job filter against the bundled sample jobs."""

import sys
from pathlib import Path

# Add src to path
sys.path.insert(0, str(Path(__file__).parent / "src"))

from job_filtering.main import main

if __name__ == "__main__":
    # Any extra CLI arguments (filters, --scorer, --output) are passed through
    main(["--jobs", str(Path(__file__).parent / "data" / "sample_jobs.json")] + sys.argv[1:])
