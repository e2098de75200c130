"""
Loading flag values from YAML or JSON configuration files.

A configuration file is a flat mapping of flag name to value::

    # settings.yaml
    name: Kate
    count: 10
    update: true

Values are validated against each flag's type exactly like defaults are.
"""

import json
import logging
import os
from typing import TYPE_CHECKING, Any, Mapping

import yaml

from .errors import ConfigError
from .flag import FlagValue, normalize_value

if TYPE_CHECKING:
    from .registry import FlagRegistry

logger = logging.getLogger(__name__)


def load_config_file(config_path: str) -> dict[str, Any]:
    """
    Load configuration from a YAML or JSON file.

    Args:
        config_path (str): Path to the configuration file.

    Returns:
        dict[str, Any]: Dictionary containing the configuration data.

    Raises:
        ConfigError: If the file doesn't exist, its format is not supported,
            or it does not contain a mapping.
    """
    if not os.path.exists(config_path):
        raise ConfigError(f"Configuration file not found: {config_path}")

    file_ext = os.path.splitext(config_path)[1].lower()

    with open(config_path, "r") as f:
        if file_ext in [".yaml", ".yml"]:
            try:
                data = yaml.safe_load(f)
            except yaml.YAMLError as e:
                raise ConfigError(f"Invalid YAML file: {e}")
        elif file_ext == ".json":
            try:
                data = json.load(f)
            except json.JSONDecodeError as e:
                raise ConfigError(f"Invalid JSON file: {e}")
        else:
            raise ConfigError(
                f"Unsupported file format: {file_ext}. "
                "Supported formats are: .yaml, .yml, .json"
            )

    # an empty YAML document loads as None
    if data is None:
        return {}
    if not isinstance(data, dict):
        raise ConfigError(
            f"Configuration file must contain a mapping, got {type(data).__name__}"
        )
    return data


def apply_config(
    registry: "FlagRegistry", config_data: Mapping[str, Any]
) -> dict[str, FlagValue]:
    """
    Validate config values and store them as the registry's current values.

    Returns:
        dict[str, FlagValue]: The normalized values that were applied.

    Raises:
        ConfigError: If a name is not a defined flag or a value is invalid for its type.
    """
    # validate everything before touching the registry
    applied = {}
    for name, raw in config_data.items():
        definition = registry.get_definition(str(name))
        if definition is None:
            raise ConfigError(f"Unknown flag in configuration: {name}")
        try:
            applied[definition.key] = normalize_value(definition.flag_type, raw)
        except ValueError as e:
            raise ConfigError(f"Flag '{definition.name}': {e}") from e

    registry.values.update(applied)
    logger.debug("applied %d value(s) from configuration", len(applied))
    return applied
