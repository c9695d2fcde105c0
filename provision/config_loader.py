# provision/config_loader.py
# -*- coding: utf-8 -*-
"""
Configuration loader for the provisioning menu.

Handles loading settings from Pydantic model defaults, a YAML file,
environment variables, and command-line arguments, applying a specific
order of precedence:
1. Pydantic Model Defaults
2. Environment Variables (PROVISION_*, loaded by BaseSettings)
3. YAML Configuration File
4. Command-Line Arguments
"""

import argparse
import logging
from pathlib import Path
from typing import Any, Dict, Optional

import yaml
from pydantic import ValidationError

from .config_models import AppSettings

module_logger = logging.getLogger(__name__)


class ConfigError(Exception):
    """Raised when the configuration file or resolved values are invalid."""


def _deep_update(
    source: Dict[str, Any], overrides: Dict[str, Any]
) -> Dict[str, Any]:
    """
    Recursively updates `source` with values from `overrides`.

    Nested dictionaries are merged key by key; any other value replaces the
    one in `source`. Keys whose override value is None are left untouched.

    Returns:
        The updated `source` dictionary.
    """
    for key, value in overrides.items():
        if (
            isinstance(value, dict)
            and key in source
            and isinstance(source[key], dict)
        ):
            source[key] = _deep_update(source[key], value)
        elif value is not None:
            source[key] = value
    return source


def _read_yaml_file(
    yaml_config_path: Path, logger_to_use: logging.Logger
) -> Dict[str, Any]:
    if not (yaml_config_path.exists() and yaml_config_path.is_file()):
        logger_to_use.info(
            f"Configuration file '{yaml_config_path}' not found. Using defaults, environment variables, and CLI args."
        )
        return {}

    try:
        with open(yaml_config_path, "r", encoding="utf-8") as f:
            yaml_data = yaml.safe_load(f)
    except yaml.YAMLError as e:
        raise ConfigError(
            f"Could not parse YAML config file '{yaml_config_path}': {e}"
        ) from e
    except IOError as e:
        raise ConfigError(
            f"Could not read config file '{yaml_config_path}': {e}"
        ) from e

    if yaml_data is None:
        return {}
    if not isinstance(yaml_data, dict):
        logger_to_use.warning(
            f"Config file '{yaml_config_path}' does not contain a valid YAML dictionary. Ignoring."
        )
        return {}

    logger_to_use.info(f"Loaded configuration from {yaml_config_path}")
    return yaml_data


def load_app_settings(
    cli_args: Optional[argparse.Namespace] = None,
    config_file_path: str = "config.yaml",
    current_logger: Optional[logging.Logger] = None,
) -> AppSettings:
    """
    Loads application settings with the precedence
    defaults < environment < YAML file < command-line arguments.

    Args:
        cli_args: Parsed command-line arguments (from argparse).
        config_file_path: Path to the YAML configuration file. Relative paths
            are resolved against the current working directory.
        current_logger: Optional logger to use instead of the module logger.

    Returns:
        An instance of AppSettings with the fully resolved configuration.

    Raises:
        ConfigError: If the YAML file cannot be parsed or the merged values
            fail validation.
    """
    logger_to_use = current_logger if current_logger else module_logger

    try:
        # BaseSettings reads PROVISION_* environment variables here.
        current_values_dict = AppSettings().model_dump(exclude_defaults=False)
    except ValidationError as e:
        raise ConfigError(f"Invalid environment configuration: {e}") from e

    yaml_config_path = Path(config_file_path).expanduser()
    current_values_dict = _deep_update(
        current_values_dict, _read_yaml_file(yaml_config_path, logger_to_use)
    )

    if cli_args:
        mapped_cli_values: Dict[str, Any] = {}
        cli_arg_dict = vars(cli_args)

        if cli_arg_dict.get("no_clear"):
            mapped_cli_values["clear_screen"] = False
        if cli_arg_dict.get("no_apt_update"):
            mapped_cli_values["refresh_package_lists"] = False

        current_values_dict = _deep_update(
            current_values_dict, mapped_cli_values
        )

    try:
        final_settings = AppSettings(**current_values_dict)
    except ValidationError as e:
        logger_to_use.error(f"Configuration validation failed: {e}")
        raise ConfigError(f"Configuration error: {e}") from e

    logger_to_use.debug(
        "Successfully loaded and validated application settings"
    )
    return final_settings
