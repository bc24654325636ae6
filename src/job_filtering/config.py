"""Configuration loading for the job filtering CLI and library callers."""

import copy
import logging
import os
from pathlib import Path
from typing import Any, Dict, Optional

import yaml

logger = logging.getLogger(__name__)

DEFAULT_CONFIG_PATH = "config/config.yaml"

DEFAULT_CONFIG: Dict[str, Any] = {
    "ai": {
        "enabled": True,
        "provider": "openai",
        "model": None,
        "max_tokens": 1000,
        "temperature": 0.3,
    },
    "filtering": {
        "default_score": 80,
        "exact_match_score": 95,
        "thresholds": [90, 75, 60, 40],
        "max_workers": 5,
        "scorer_timeout": 30.0,
        "cache_ttl_seconds": 300,
    },
    "output": {
        "format": "json",
        "file_path": "data/filtered_jobs.json",
    },
}


def _merge(base: Dict[str, Any], override: Dict[str, Any]) -> Dict[str, Any]:
    """Recursively merge override into a copy of base."""
    merged = copy.deepcopy(base)
    for key, value in override.items():
        if isinstance(value, dict) and isinstance(merged.get(key), dict):
            merged[key] = _merge(merged[key], value)
        else:
            merged[key] = value
    return merged


def load_config(config_path: Optional[str] = None) -> Dict[str, Any]:
    """
    Load configuration from YAML file, filling in defaults.

    Args:
        config_path: Path to YAML config. If None, config/config.yaml is used
            when it exists, otherwise defaults only.

    Returns:
        Configuration dictionary with "ai", "filtering" and "output" sections.

    Raises:
        FileNotFoundError: If an explicit config_path does not exist.
        ValueError: If the file is not a YAML mapping.

    Environment Variables:
        AI_PROVIDER: Override ai.provider.
        AI_MODEL: Override ai.model.
    """
    user_config: Dict[str, Any] = {}

    if config_path is not None:
        path = Path(config_path)
        if not path.exists():
            raise FileNotFoundError(f"Config file not found: {config_path}")
    else:
        path = Path(DEFAULT_CONFIG_PATH)

    if path.exists():
        with open(path, "r") as f:
            loaded = yaml.safe_load(f)
        if loaded is None:
            loaded = {}
        if not isinstance(loaded, dict):
            raise ValueError(f"Config file must contain a mapping: {path}")
        user_config = loaded
        logger.info(f"Loaded configuration from {path}")
    else:
        logger.info("No config file found, using defaults")

    config = _merge(DEFAULT_CONFIG, user_config)

    if provider := os.getenv("AI_PROVIDER"):
        config["ai"]["provider"] = provider
    if model := os.getenv("AI_MODEL"):
        config["ai"]["model"] = model

    return config
