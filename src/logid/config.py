"""Configuration loader with YAML and environment variable support.

This module reads ./logid.yaml (or an explicit path) and allows
environment variable overrides using the LOGID_* prefix. Every setting has
a default, so a project without a config file still works.

Environment variables:
- LOGID_ID_MIN: Override ids.min
- LOGID_ID_MAX: Override ids.max
- LOGID_ID_METHOD: Override ids.method
- LOGID_ID_LIST: Override files.id_list
- LOGID_LOCATION_LIST: Override files.location_list
"""

import os
from pathlib import Path
from typing import Any, Dict, Optional

import yaml
from pydantic import ValidationError

from logid.models.config import Config
from logid.utils.logging import get_logger

logger = get_logger(__name__)

DEFAULT_CONFIG_NAME = "logid.yaml"


def load_config(config_path: Optional[Path] = None) -> Config:
    """Load configuration from YAML file with environment variable overrides.

    Args:
        config_path: Path to config file. If None, uses ./logid.yaml when present

    Returns:
        Validated Config object

    Raises:
        FileNotFoundError: If an explicit config_path doesn't exist
        ValueError: If config file is invalid
    """
    if config_path is not None and not config_path.exists():
        raise FileNotFoundError(f"Configuration file not found at {config_path}")

    if config_path is None:
        config_path = Path.cwd() / DEFAULT_CONFIG_NAME

    if config_path.exists():
        try:
            with config_path.open() as f:
                data = yaml.safe_load(f) or {}
        except yaml.YAMLError as e:
            raise ValueError(f"Invalid YAML in {config_path}: {e}") from e
        logger.info("config_file_read", path=str(config_path))
    else:
        data = {}

    if not isinstance(data, dict):
        raise ValueError(f"Configuration in {config_path} must be a mapping")

    data = _apply_env_overrides(data)

    try:
        return Config(**data)
    except ValidationError as e:
        logger.error("config_validation_error", path=str(config_path), error=str(e))
        raise ValueError(f"Configuration validation failed: {e}") from e


def _apply_env_overrides(data: Dict[str, Any]) -> Dict[str, Any]:
    """Apply environment variable overrides to configuration data.

    Environment variables use the format: LOGID_SECTION_KEY
    For example: LOGID_ID_MIN sets data['ids']['min']

    Args:
        data: Base configuration dictionary from YAML

    Returns:
        Configuration dictionary with environment overrides applied
    """
    if not data.get("ids"):
        data["ids"] = {}
    if not data.get("files"):
        data["files"] = {}

    for env_name, key in (("LOGID_ID_MIN", "min"), ("LOGID_ID_MAX", "max")):
        if env_value := os.getenv(env_name):
            try:
                data["ids"][key] = int(env_value)
            except ValueError:
                pass  # Invalid value, ignore

    if env_method := os.getenv("LOGID_ID_METHOD"):
        data["ids"]["method"] = env_method

    if env_id_list := os.getenv("LOGID_ID_LIST"):
        data["files"]["id_list"] = env_id_list

    if env_location_list := os.getenv("LOGID_LOCATION_LIST"):
        data["files"]["location_list"] = env_location_list

    return data
