"""YAML settings loader."""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Optional, Union

import yaml

from zonepulse.errors import ConfigurationError
from .settings import Settings, settings_from_mapping

logger = logging.getLogger(__name__)

DEFAULTS_PATH = Path(__file__).with_name("defaults.yaml")
SECTION_KEY = "zonepulse"


def _read_yaml(path: Path) -> dict:
    with open(path, "r", encoding="utf-8") as f:
        data = yaml.safe_load(f) or {}
    if not isinstance(data, dict):
        raise ConfigurationError(f"Settings file {path} must contain a mapping")
    return data


def load_defaults() -> dict:
    return _read_yaml(DEFAULTS_PATH)


def load_settings(path: Optional[Union[str, Path]] = None) -> Settings:
    """Load settings from a YAML file overlaid on the bundled defaults.

    A missing or unreadable file logs a warning and the defaults are used.

    Args:
        path: YAML file path, or None for defaults only

    Returns:
        Validated Settings

    Raises:
        ConfigurationError: If the file holds an invalid value or unknown key
    """
    values = load_defaults()
    if path is None:
        return settings_from_mapping(values)

    path = Path(path)
    try:
        overrides = _read_yaml(path)
    except (OSError, yaml.YAMLError) as e:
        logger.warning("Failed to load settings from %s, using defaults: %s", path, e)
        return settings_from_mapping(values)

    section = overrides.get(SECTION_KEY)
    if isinstance(section, dict):
        overrides = section
    values.update(overrides)
    logger.debug("Loaded settings from %s", path)
    return settings_from_mapping(values)
