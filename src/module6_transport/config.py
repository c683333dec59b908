# file: module6_transport/config.py
"""
Configuration loading.

Configuration is a nested dictionary read from YAML. Keys missing from a
user file are filled from the defaults, so callers can always index the
full schema.
"""

import copy
import logging
import os
from typing import Any, Dict, Optional

import yaml

from .errors import OptionsError


logger = logging.getLogger(__name__)

DEFAULT_CONFIG_PATH = os.path.join(os.path.dirname(__file__), "default_config.yaml")

DEFAULT_CONFIG: Dict[str, Any] = {
    "transport": {
        "fps": 30,
        "width": 3840,
        "height": 2160,
        "size": 1,
        "algo": "rgb",
        "show_progress": False,
        "video_codec": "png",
        "output_video_path": "video.avi",
        "extracted_file_path": "mydata.txt",
    },
    "extraction": {
        "marker_threshold": 0.9,
        "marker_tolerance": 64,
    },
    "patterns": {
        "num_frames": 30,
        "diagonal_cells": 10,
    },
}


def _merge(defaults: Dict[str, Any], overrides: Dict[str, Any]) -> Dict[str, Any]:
    merged = copy.deepcopy(defaults)
    for key, value in overrides.items():
        if isinstance(value, dict) and isinstance(merged.get(key), dict):
            merged[key] = _merge(merged[key], value)
        else:
            merged[key] = value
    return merged


def load_config(config_path: Optional[str] = None) -> Dict[str, Any]:
    """
    Load configuration from YAML file.

    Args:
        config_path: Path to YAML config file. If None, the packaged
                     default_config.yaml is used.

    Returns:
        config: Configuration dictionary, completed with defaults

    Raises:
        OptionsError: If the file is not valid YAML or not a mapping
    """
    if config_path is None:
        config_path = DEFAULT_CONFIG_PATH

    if not os.path.exists(config_path):
        logger.warning(f"Config file not found: {config_path}, using defaults")
        return copy.deepcopy(DEFAULT_CONFIG)

    try:
        with open(config_path, 'r') as f:
            loaded = yaml.safe_load(f)
    except yaml.YAMLError as e:
        raise OptionsError(f"Invalid configuration file {config_path}: {e}") from e

    if loaded is None:
        loaded = {}

    if not isinstance(loaded, dict):
        raise OptionsError(f"Configuration file {config_path} must hold a mapping")

    logger.info(f"Loaded configuration from {config_path}")
    return _merge(DEFAULT_CONFIG, loaded)
