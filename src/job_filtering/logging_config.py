"""Logging setup for the filter engine and CLI, with optional Cloud Logging."""

import logging
import os
import sys
import yaml
from pathlib import Path
from typing import Any, Dict, List, Optional, Tuple

LOGGING_CONFIG_PATH = Path(__file__).parent.parent.parent / "config" / "logging.yaml"
DEFAULT_LOG_FILE = "logs/job_filtering.log"
DEFAULT_TITLE_LENGTH = 60

# Loaded once per process
_display_options: Optional[Dict[str, Any]] = None


def _load_display_options() -> Dict[str, Any]:
    """
    Read console display options from config/logging.yaml.

    A missing or unreadable file leaves the built-in defaults in place.
    """
    global _display_options

    if _display_options is None:
        options: Dict[str, Any] = {}
        if LOGGING_CONFIG_PATH.exists():
            try:
                with open(LOGGING_CONFIG_PATH, "r") as f:
                    options = (yaml.safe_load(f) or {}).get("console") or {}
            except (OSError, yaml.YAMLError, AttributeError) as e:
                print(f"⚠️  Ignoring logging config {LOGGING_CONFIG_PATH}: {e}", file=sys.stderr)
        options.setdefault("max_job_title_length", DEFAULT_TITLE_LENGTH)
        _display_options = options

    return _display_options


def format_job_title(title: str, max_length: Optional[int] = None) -> Tuple[str, str]:
    """
    Return the full title and a shortened copy for console output.

    Args:
        title: Job title as posted.
        max_length: Display length limit; defaults to the configured
            max_job_title_length.

    Returns:
        (full_title, display_title)

    Example:
        >>> format_job_title("Senior Staff Software Engineer, Platform", max_length=20)
        ('Senior Staff Software Engineer, Platform', 'Senior Staff Soft...')
    """
    full_title = (title or "").strip()
    if max_length is None:
        max_length = _load_display_options()["max_job_title_length"]

    if max_length <= 0 or len(full_title) <= max_length:
        return full_title, full_title
    if max_length <= 3:
        return full_title, full_title[:max_length]
    return full_title, full_title[: max_length - 3] + "..."


def _cloud_handler(environment: str, level: int) -> Optional[logging.Handler]:
    """Build a Google Cloud Logging handler, or None if it is unavailable."""
    try:
        import google.cloud.logging
        from google.cloud.logging.handlers import CloudLoggingHandler
    except ImportError:
        print(
            "⚠️  google-cloud-logging not installed; install the 'cloud' extra to enable it.",
            file=sys.stderr,
        )
        return None

    try:
        handler = CloudLoggingHandler(
            google.cloud.logging.Client(),
            name="job-filtering",
            labels={"environment": environment, "service": "job-filtering"},
        )
    except Exception as e:
        print(f"⚠️  Cloud Logging unavailable, using console and file only: {e}", file=sys.stderr)
        return None

    handler.setLevel(level)
    return handler


def setup_logging(
    log_level: str = "INFO",
    log_file: Optional[str] = None,
    enable_cloud_logging: bool = False,
) -> None:
    """
    Configure root logging for a CLI run.

    Logs go to stdout and to a file; Google Cloud Logging is added when
    requested and the client library is installed.

    Args:
        log_level: Level name (DEBUG, INFO, WARNING, ERROR).
        log_file: Log file path (default logs/job_filtering.log).
        enable_cloud_logging: Also ship logs to Google Cloud Logging.

    Environment Variables:
        LOG_LEVEL: Overrides log_level.
        LOG_FILE: Overrides log_file.
        ENVIRONMENT: Prefix for every log line (default "development").
        ENABLE_CLOUD_LOGGING: "true" turns on Cloud Logging.
    """
    level_name = os.getenv("LOG_LEVEL", log_level).upper()
    level = getattr(logging, level_name, logging.INFO)
    log_file = os.getenv("LOG_FILE") or log_file or DEFAULT_LOG_FILE
    environment = os.getenv("ENVIRONMENT", "development")
    enable_cloud_logging = (
        enable_cloud_logging or os.getenv("ENABLE_CLOUD_LOGGING", "").lower() == "true"
    )

    Path(log_file).parent.mkdir(parents=True, exist_ok=True)
    handlers: List[logging.Handler] = [
        logging.StreamHandler(sys.stdout),
        logging.FileHandler(log_file),
    ]

    cloud = _cloud_handler(environment, level) if enable_cloud_logging else None
    if cloud is not None:
        handlers.append(cloud)

    logging.basicConfig(
        level=level,
        format=f"[{environment.upper()}] %(asctime)s - %(name)s - %(levelname)s - %(message)s",
        handlers=handlers,
        force=True,
    )

    logging.getLogger(__name__).info(
        f"Logging ready: environment={environment}, level={level_name}, file={log_file}, "
        f"cloud={'on' if cloud is not None else 'off'}"
    )


def get_logger(name: str) -> logging.Logger:
    """Return the named logger (use __name__)."""
    return logging.getLogger(name)


def _with_details(message: str, details: Optional[Dict[str, Any]]) -> str:
    if not details:
        return message
    return message + " | " + ", ".join(f"{k}={v}" for k, v in details.items())


class StructuredLogger:
    """
    Tagged log lines for the filter pipeline.

    Messages look like "[FILTER:SCORE] COMPLETED | scored=12, fallbacks=0" so
    they can be grepped by stage.
    """

    def __init__(self, logger: logging.Logger):
        self.logger = logger

    def filter_stage(
        self, stage: str, status: str, details: Optional[Dict[str, Any]] = None
    ) -> None:
        """
        Log a pipeline stage.

        Args:
            stage: START, HARD_FILTER, EXACT_MATCH, SCORE or BUCKET
            status: started, completed, skipped, degraded, failed
            details: Counts and other context
        """
        message = _with_details(f"[FILTER:{stage}] {status.upper()}", details)
        status = status.lower()
        if status in ("failed", "error"):
            self.logger.error(message)
        elif status == "degraded":
            self.logger.warning(message)
        else:
            self.logger.info(message)

    def job_activity(
        self, title: str, action: str, details: Optional[Dict[str, Any]] = None
    ) -> None:
        """Log what happened to a single job (debug level, shortened title)."""
        _, display_title = format_job_title(title)
        self.logger.debug(_with_details(f"[JOB] {action} - {display_title}", details))

    def ai_activity(
        self, operation: str, status: str, details: Optional[Dict[str, Any]] = None
    ) -> None:
        """Log an LLM call outcome."""
        self.logger.info(_with_details(f"[AI:{operation.upper()}] {status}", details))


def get_structured_logger(name: str) -> StructuredLogger:
    """Return a StructuredLogger wrapping the named logger."""
    return StructuredLogger(logging.getLogger(name))
