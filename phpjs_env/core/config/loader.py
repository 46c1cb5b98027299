"""
Configuration loader — reads phpjs-env.yml into a SetupConfig.

The file is optional. Without it every setting keeps its stock Debian
default and every prompt is asked interactively.

Lookup order:
    explicit ``--config``  >  PHPJS_CONFIG env var  >  search upward from cwd
"""

from __future__ import annotations

import logging
import os
from pathlib import Path

import yaml
from pydantic import ValidationError

from phpjs_env.core.models.settings import SetupConfig

logger = logging.getLogger(__name__)

# Default config filename
CONFIG_FILE = "phpjs-env.yml"

# Env var pointing at an explicit config file
CONFIG_ENV_VAR = "PHPJS_CONFIG"


class ConfigError(Exception):
    """Raised when the configuration file is invalid or unreadable."""


def find_config_file(start_dir: Path | None = None) -> Path | None:
    """Return the nearest phpjs-env.yml at or above ``start_dir`` (default: cwd)."""
    start = (start_dir or Path.cwd()).resolve()
    for directory in (start, *start.parents):
        candidate = directory / CONFIG_FILE
        if candidate.is_file():
            return candidate
    return None


def resolve_config_path(explicit: Path | None = None) -> Path | None:
    """Apply the lookup order and return the config path, if any."""
    if explicit is not None:
        return explicit
    from_env = os.environ.get(CONFIG_ENV_VAR)
    if from_env:
        return Path(from_env)
    return find_config_file()


def _read_mapping(path: Path) -> dict:
    try:
        data = yaml.safe_load(path.read_text(encoding="utf-8"))
    except OSError as e:
        raise ConfigError(f"Cannot read {path}: {e}") from e
    except yaml.YAMLError as e:
        raise ConfigError(f"Invalid YAML in {path}: {e}") from e

    if data is None:
        return {}
    if not isinstance(data, dict):
        raise ConfigError(f"Expected a YAML mapping in {path}, got {type(data).__name__}")
    return data


def load_config(path: Path | None = None) -> SetupConfig:
    """Load and validate the setup configuration.

    Args:
        path: Explicit path to phpjs-env.yml. If None, the lookup order
            above applies; no file found means all defaults.

    Raises:
        ConfigError: If an explicitly named file is missing, or any file
            found is unreadable or invalid.
    """
    explicit = path is not None or bool(os.environ.get(CONFIG_ENV_VAR))
    path = resolve_config_path(path)

    if path is None or not path.is_file():
        if path is not None and explicit:
            raise ConfigError(f"Config file not found: {path}")
        logger.debug("No %s found, using defaults", CONFIG_FILE)
        return SetupConfig()

    data = _read_mapping(path)
    try:
        config = SetupConfig.model_validate(data)
    except ValidationError as e:
        raise ConfigError(f"Invalid setup configuration in {path}: {e}") from e

    logger.info("Loaded setup config from %s (%d section(s))", path, len(data))
    return config
