"""
Configuration management for Graphene.

Handles optional settings:
- log_level: level passed to logging.basicConfig by configure_logging()
- accessor_allowlist: names allowed as delegated node key accessors

Settings are read from graphene.json (or a .yaml/.yml file) and can be
overridden with environment variables.
"""

import json
import logging
import os
from dataclasses import dataclass
from pathlib import Path
from typing import FrozenSet, Optional, Union

import yaml

from graphene.errors import ConfigError

logger = logging.getLogger(__name__)

DEFAULT_CONFIG_FILENAME = "graphene.json"
DEFAULT_LOG_LEVEL = "WARNING"

ENV_CONFIG_PATH = "GRAPHENE_CONFIG"
ENV_LOG_LEVEL = "GRAPHENE_LOG_LEVEL"
ENV_ACCESSOR_ALLOWLIST = "GRAPHENE_ACCESSOR_ALLOWLIST"

YAML_SUFFIXES = frozenset(['.yaml', '.yml'])


@dataclass(frozen=True)
class GrapheneSettings:
    log_level: str = DEFAULT_LOG_LEVEL
    accessor_allowlist: Optional[FrozenSet[str]] = None


def get_config_path() -> Path:
    """
    Get the path to the config file.

    Priority:
    1. Environment variable GRAPHENE_CONFIG
    2. graphene.json in the current working directory
    """
    env_path = os.environ.get(ENV_CONFIG_PATH)
    if env_path:
        return Path(env_path)
    return Path.cwd() / DEFAULT_CONFIG_FILENAME


def load_config(path: Optional[Union[str, Path]] = None) -> dict:
    """
    Load the raw configuration dict.

    Returns an empty dict if the file doesn't exist.

    Raises:
        ConfigError: the file can't be read or doesn't hold a mapping
    """
    config_path = Path(path) if path else get_config_path()
    if not config_path.exists():
        logger.info(f"No config file at {config_path}, using defaults")
        return {}

    try:
        with open(config_path, 'r', encoding='utf-8') as f:
            if config_path.suffix.lower() in YAML_SUFFIXES:
                config = yaml.safe_load(f)
            else:
                config = json.load(f)
    except (json.JSONDecodeError, yaml.YAMLError) as e:
        raise ConfigError(f"Invalid config file {config_path}: {e}") from e
    except OSError as e:
        raise ConfigError(f"Failed to read config file {config_path}: {e}") from e

    # An empty YAML document loads as None
    if config is None:
        return {}
    if not isinstance(config, dict):
        raise ConfigError(f"Config file {config_path} must contain a mapping")
    return config


def _parse_allowlist(raw) -> Optional[FrozenSet[str]]:
    if raw is None:
        return None
    if isinstance(raw, str):
        return frozenset(name.strip() for name in raw.split(',') if name.strip())
    if isinstance(raw, list) and all(isinstance(name, str) for name in raw):
        return frozenset(raw)
    raise ConfigError("'accessor_allowlist' must be a list of strings")


def get_settings(path: Optional[Union[str, Path]] = None) -> GrapheneSettings:
    """
    Build settings from the config file, then apply environment overrides.
    """
    config = load_config(path)

    log_level = os.environ.get(ENV_LOG_LEVEL) or config.get('log_level', DEFAULT_LOG_LEVEL)
    if not isinstance(log_level, str):
        raise ConfigError("'log_level' must be a string")

    env_allowlist = os.environ.get(ENV_ACCESSOR_ALLOWLIST)
    if env_allowlist is not None:
        allowlist = _parse_allowlist(env_allowlist)
    else:
        allowlist = _parse_allowlist(config.get('accessor_allowlist'))

    return GrapheneSettings(log_level=log_level.upper(), accessor_allowlist=allowlist)


def configure_logging(level: Optional[str] = None) -> None:
    """
    Configure root logging for applications using Graphene.
    The library itself never installs handlers.
    """
    level = level or get_settings().log_level
    logging.basicConfig(
        level=getattr(logging, level.upper(), logging.WARNING),
        format="%(asctime)s %(name)s %(levelname)s %(message)s",
    )
