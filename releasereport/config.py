#!/usr/bin/env python3

import os
import json
import tomllib
from pathlib import Path

import logging
import sys

import yaml

from .exit_codes import ConfigError

# Configure logging
logging.basicConfig(
    level=logging.INFO,
    format="%(levelname)s: %(message)s",
    handlers=[
        logging.StreamHandler(sys.stderr) # Default to stderr
    ]
)
logger = logging.getLogger("releasereport")

CONFIG_FILENAMES = ['config.json', 'config.toml', 'config.yaml', 'config.yml']
TAG_SORT_MODES = ('numeric', 'lexicographic')


def get_config_path():
    """Get the path to the configuration file.

    Checks in order:
    1. RELEASEREPORT_CONFIG environment variable
    2. ~/.releasereport/ directory
    """
    if 'RELEASEREPORT_CONFIG' in os.environ:
        path = Path(os.environ['RELEASEREPORT_CONFIG'])
        if path.exists():
            return path

    config_dir = Path.home() / '.releasereport'
    for filename in CONFIG_FILENAMES:
        path = config_dir / filename
        if path.exists():
            return path

    # If no file exists, return default path
    return config_dir / 'config.json'


def load_config():
    """Load configuration from file."""
    config_path = get_config_path()

    # Start with default config
    config = get_default_config()

    if config_path.exists():
        try:
            suffix = config_path.suffix.lower()
            if suffix == '.toml':
                with open(config_path, 'rb') as f:
                    file_config = tomllib.load(f)
            elif suffix in ['.yaml', '.yml']:
                with open(config_path, 'r') as f:
                    file_config = yaml.safe_load(f)
            else:
                with open(config_path, 'r') as f:
                    file_config = json.load(f)
        except (OSError, ValueError, yaml.YAMLError) as e:
            raise ConfigError(f"Error loading config from {config_path}: {e}") from e

        if file_config is None:
            file_config = {}
        if not isinstance(file_config, dict):
            raise ConfigError(f"Config file {config_path} must contain a mapping")

        logger.debug(f"Loaded config from {config_path}")
        config = merge_configs(config, file_config)

    # Apply environment variable overrides
    config = apply_env_overrides(config)

    validate_config(config)
    return config


def get_default_config():
    """Get default configuration."""
    return {
        "git": {
            "timeout_seconds": 30,
            "remote": "",        # Empty means `git fetch` with git's own default
            "fetch": True
        },
        "tags": {
            "prefix": "v",
            "limit": 10,
            "sort": "numeric"    # or "lexicographic"
        },
        "logging": {
            "level": "INFO"
        }
    }


def validate_config(config):
    """Reject values the reporter cannot work with."""
    sort = config["tags"].get("sort")
    if sort not in TAG_SORT_MODES:
        raise ConfigError(
            f"tags.sort must be one of {', '.join(TAG_SORT_MODES)}, got {sort!r}"
        )

    limit = config["tags"].get("limit")
    if not isinstance(limit, int) or isinstance(limit, bool) or limit < 1:
        raise ConfigError(f"tags.limit must be a positive integer, got {limit!r}")

    level = str(config["logging"].get("level", "INFO")).upper()
    if not isinstance(logging.getLevelName(level), int):
        raise ConfigError(f"logging.level is not a valid level: {level!r}")


def configure_logging(config, verbose=False):
    """Apply the configured log level to the package logger."""
    level = "DEBUG" if verbose else str(config["logging"].get("level", "INFO")).upper()
    logger.setLevel(level)


def merge_configs(defaults, overrides):
    """
    Layer a config file's sections over the defaults.

    Sections present in both (git, tags, logging) are merged key by key,
    so a file that sets only tags.limit keeps tags.prefix and tags.sort.
    Neither argument is modified.
    """
    merged = dict(defaults)
    for section, value in overrides.items():
        current = merged.get(section)
        if isinstance(current, dict) and isinstance(value, dict):
            merged[section] = merge_configs(current, value)
        else:
            merged[section] = value
    return merged


def apply_env_overrides(config):
    """
    Apply environment variable overrides to configuration.
    Environment variables follow the pattern: RELEASEREPORT_SECTION_KEY
    For example: RELEASEREPORT_GIT_TIMEOUT_SECONDS=60
    """
    env_prefix = "RELEASEREPORT_"

    for env_key, value in os.environ.items():
        if not env_key.startswith(env_prefix):
            continue

        key_parts = env_key[len(env_prefix):].lower().split('_')

        # Convert value
        if value.lower() in ('true', 'yes', 'on'):
            typed_value = True
        elif value.lower() in ('false', 'no', 'off'):
            typed_value = False
        elif value.isdigit():
            typed_value = int(value)
        else:
            typed_value = value

        current_level = config
        i = 0
        while i < len(key_parts):
            # Longest config key that is a prefix of the remaining parts
            best_match_len = 0
            matched_key = None

            for config_key in current_level.keys():
                config_key_parts = config_key.split('_')
                if key_parts[i : i + len(config_key_parts)] == config_key_parts:
                    if len(config_key_parts) > best_match_len:
                        best_match_len = len(config_key_parts)
                        matched_key = config_key

            if not matched_key:
                break

            if i + best_match_len == len(key_parts):
                current_level[matched_key] = typed_value
                break

            if isinstance(current_level[matched_key], dict):
                current_level = current_level[matched_key]
                i += best_match_len
            else:
                # Path conflict: env var is longer than the config path
                break

    return config
