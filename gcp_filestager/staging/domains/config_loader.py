"""Configuration loader for gcp-filestager."""
import os
import logging
from dataclasses import replace
from pathlib import Path
from typing import Any, Dict, Optional

import yaml

from .models import StagingOptions

logger = logging.getLogger(__name__)

CONFIG_PATH_ENV = "FILESTAGER_CONFIG"
EXTRA_FILES_ENV = "EXTRA_FILES_TO_STAGE"
DISABLED_ALGORITHMS_ENV = "DISABLED_ALGORITHMS"
DESTINATION_DIR_ENV = "FILESTAGER_DESTINATION_DIR"

KNOWN_SECTIONS = {"staging", "security"}


class ConfigError(Exception):
    """Configuration error exception."""
    pass


def default_config_path() -> Path:
    return Path.home() / ".config" / "gcp-filestager" / "config.yml"


def get_config_path() -> Optional[str]:
    """
    Get config file path.

    Priority order:
    1. FILESTAGER_CONFIG environment variable (must exist)
    2. Default location: ~/.config/gcp-filestager/config.yml, if present

    Returns:
        Absolute path to config file, or None when no config file is used

    Raises:
        ConfigError: If FILESTAGER_CONFIG points to a missing file
    """
    env_path = os.getenv(CONFIG_PATH_ENV)
    if env_path:
        config_path = Path(env_path)
        if not config_path.is_file():
            raise ConfigError(f"Configuration file from {CONFIG_PATH_ENV} not found at: {config_path}")
        logger.info(f"Using config from {CONFIG_PATH_ENV}: {config_path}")
        return str(config_path)

    default_config = default_config_path()
    if default_config.is_file():
        logger.info(f"Using default config location: {default_config}")
        return str(default_config)

    logger.debug("No config file found, using environment and defaults")
    return None


def _optional_string(section: Dict[str, Any], key: str, config_path: str) -> Optional[str]:
    value = section.get(key)
    if value is not None and not isinstance(value, str):
        raise ConfigError(f"'{key}' in config at {config_path} must be a string")
    return value


def _locator_list(value: Any, config_path: str) -> Optional[str]:
    """Accept either the raw comma-separated string or a YAML list of locators."""
    if value is None or isinstance(value, str):
        return value

    if not isinstance(value, list):
        raise ConfigError(
            f"'staging.extra_files_to_stage' in config at {config_path} must be a string or a list"
        )

    for item in value:
        if not isinstance(item, str):
            raise ConfigError(f"Locator {item!r} in config at {config_path} must be a string")
        if "," in item:
            raise ConfigError(
                f"Locator {item!r} in config at {config_path} contains a comma, which is not supported"
            )
    return ",".join(value)


def load_config(config_path: Optional[str] = None) -> Dict[str, Any]:
    """
    Load and validate configuration from YAML file.

    Args:
        config_path: Explicit config path (resolved dynamically if not provided)

    Returns:
        Dict with optional 'staging' and 'security' sections; empty dict when
        there is no config file

    Raises:
        ConfigError: If config file is missing, unparsable, or invalid
    """
    if config_path is None:
        config_path = get_config_path()
        if config_path is None:
            return {}

    if not os.path.exists(config_path):
        raise ConfigError(f"Configuration file not found at: {config_path}")

    try:
        with open(config_path, 'r') as f:
            config = yaml.safe_load(f)
    except yaml.YAMLError as e:
        raise ConfigError(f"Failed to parse YAML config at {config_path}: {e}")
    except OSError as e:
        raise ConfigError(f"Failed to read config file at {config_path}: {e}")

    if config is None:
        logger.warning(f"Config file at {config_path} is empty")
        return {}

    if not isinstance(config, dict):
        raise ConfigError(f"Config at {config_path} must be a mapping")

    unknown = set(config) - KNOWN_SECTIONS
    if unknown:
        raise ConfigError(
            f"Unknown section(s) {', '.join(sorted(unknown))} in config at {config_path}\n"
            f"Supported sections: staging, security"
        )

    staging = config.get('staging') or {}
    security = config.get('security') or {}
    if not isinstance(staging, dict) or not isinstance(security, dict):
        raise ConfigError(f"'staging' and 'security' in config at {config_path} must be mappings")

    validated: Dict[str, Any] = {
        'staging': {
            'extra_files_to_stage': _locator_list(staging.get('extra_files_to_stage'), config_path),
            'destination_directory': _optional_string(staging, 'destination_directory', config_path),
        },
        'security': {
            'disabled_algorithms': _optional_string(security, 'disabled_algorithms', config_path),
        },
    }

    logger.info(f"Configuration loaded successfully from {config_path}")
    return validated


def load_options(config_path: Optional[str] = None, **overrides: Optional[str]) -> StagingOptions:
    """
    Build StagingOptions from all configuration sources.

    Priority order (highest first): keyword overrides (CLI flags), environment
    variables, config file, defaults. Overrides that are None are ignored.
    """
    config = load_config(config_path)
    staging = config.get('staging', {})
    security = config.get('security', {})

    options = StagingOptions()
    file_values = {
        'extra_files_to_stage': staging.get('extra_files_to_stage'),
        'disabled_algorithms': security.get('disabled_algorithms'),
        'destination_directory': staging.get('destination_directory'),
    }
    env_values = {
        'extra_files_to_stage': os.getenv(EXTRA_FILES_ENV),
        'disabled_algorithms': os.getenv(DISABLED_ALGORITHMS_ENV),
        'destination_directory': os.getenv(DESTINATION_DIR_ENV),
    }

    for layer in (file_values, env_values, overrides):
        changes = {key: value for key, value in layer.items() if value is not None}
        unknown = set(changes) - set(file_values)
        if unknown:
            raise TypeError(f"Unknown option(s): {', '.join(sorted(unknown))}")
        options = replace(options, **changes)

    logger.debug(f"Resolved staging options: {options}")
    return options
