"""Job filtering and relevance ranking for job seekers."""

__version__ = "1.0.0"
