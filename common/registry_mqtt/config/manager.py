"""
Loading and validation of publisher settings.

Settings are only taken from what the caller hands in: a mapping, an
existing PublisherSettings object or a YAML/JSON file. No environment
variables are read.
"""

import json
import logging
from pathlib import Path
from typing import Any, Dict, Mapping, Union

import yaml
from pydantic import ValidationError

from ..exceptions import ConfigurationError
from .config_model import PublisherSettings

logger = logging.getLogger(__name__)


def build_settings(data: Union[PublisherSettings, Mapping[str, Any]]) -> PublisherSettings:
    """
    Validates a configuration mapping once and returns the settings object.

    Args:
        data: PublisherSettings (returned unchanged) or mapping of fields

    Returns:
        Validated PublisherSettings

    Raises:
        ConfigurationError: if the mapping is not a valid configuration
    """
    if isinstance(data, PublisherSettings):
        return data
    if not isinstance(data, Mapping):
        raise ConfigurationError(
            f"Expected a mapping or PublisherSettings, got {type(data).__name__}"
        )
    try:
        return PublisherSettings(**data)
    except ValidationError as e:
        raise ConfigurationError(f"Invalid publisher configuration: {e}") from e


def load_settings(path: Union[str, Path]) -> PublisherSettings:
    """
    Loads publisher settings from a YAML or JSON file.

    A top-level "mqtt" section is unwrapped, so both of these work:

        endpoint: tcp://localhost:1883
        client_id: registry-1

        mqtt:
          endpoint: tcp://localhost:1883
          client_id: registry-1

    Args:
        path: Path to a .yaml, .yml or .json file

    Returns:
        Validated PublisherSettings

    Raises:
        ConfigurationError: if the file is missing, unreadable or invalid
    """
    path = Path(path)
    if not path.is_file():
        raise ConfigurationError(f"Configuration file not found: {path}")

    try:
        with open(path, "r", encoding="utf-8") as f:
            if path.suffix in (".yaml", ".yml"):
                loaded = yaml.safe_load(f)
            elif path.suffix == ".json":
                loaded = json.load(f)
            else:
                raise ConfigurationError(f"Unsupported config file format: {path}")
    except (yaml.YAMLError, json.JSONDecodeError) as e:
        raise ConfigurationError(f"Cannot parse configuration file {path}: {e}") from e

    if not isinstance(loaded, dict):
        raise ConfigurationError(f"Configuration file {path} does not contain a mapping")

    data: Dict[str, Any] = loaded.get("mqtt", loaded)
    settings = build_settings(data)
    logger.info(f"Loaded publisher configuration from {path}")
    return settings
