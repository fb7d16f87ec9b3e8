"""YAML configuration file loading with Pydantic validation."""

import logging
from pathlib import Path

import yaml
from pydantic import ValidationError

from aistack.errors import ConfigError

from .models import StackSettings

logger = logging.getLogger(__name__)

DEFAULT_CONFIG_NAME = "aistack.yaml"


def load_yaml(path: Path) -> dict:
    """Load a YAML file and return its contents as a dict.

    Raises:
        ConfigError: If the file cannot be read or parsed.
    """
    try:
        with open(path) as f:
            data = yaml.safe_load(f)
    except FileNotFoundError:
        raise ConfigError(f"Configuration file not found: {path}") from None
    except yaml.YAMLError as e:
        raise ConfigError(f"Invalid YAML in {path}: {e}") from e

    if data is None:
        return {}
    if not isinstance(data, dict):
        raise ConfigError(f"Expected a mapping at the top of {path}")
    return data


def load_settings(path: Path | None = None) -> StackSettings:
    """Load stack settings.

    An explicit path must exist. Without one, ``aistack.yaml`` in the
    current directory is used when present, otherwise defaults apply.

    Raises:
        ConfigError: If the file is unreadable or fails validation.
    """
    if path is None:
        candidate = Path.cwd() / DEFAULT_CONFIG_NAME
        if not candidate.exists():
            logger.debug("No config file found, using defaults")
            return StackSettings()
        path = candidate

    data = load_yaml(path)
    try:
        settings = StackSettings(**data)
    except ValidationError as e:
        raise ConfigError(f"Configuration validation failed for {path}: {e}") from e

    logger.debug(f"Loaded settings from {path}")
    return settings
