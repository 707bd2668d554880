"""
Settings and configuration management for YouTube Playlist Extractor.
Holds the per-invocation context object and the JSON config file helpers.
"""

import json
import logging
import os
from pathlib import Path
from typing import Dict, Any, Mapping, Optional, Union
from dataclasses import dataclass

logger = logging.getLogger(__name__)

CONFIG_FILE = "cli_config.json"
LOG_FILE = "cli_tool.log"
API_KEY_ENV_VAR = "YOUTUBE_API_KEY"


@dataclass
class Settings:
    """Configuration context passed down to the fetcher and server."""

    # API Keys
    youtube_api_key: str

    # Files
    config_path: str = CONFIG_FILE
    log_file: str = LOG_FILE

    # Logging
    verbose: bool = False

    def __post_init__(self):
        """Validate settings after initialization."""
        if not self.youtube_api_key:
            raise ValueError("YouTube API key is required")


def load_config(config_path: Union[str, Path] = CONFIG_FILE) -> Dict[str, Any]:
    """
    Load the JSON config file.

    Args:
        config_path: Path to config file

    Returns:
        Parsed config dictionary, or an empty dict when the file is missing
        or cannot be read
    """
    path = Path(config_path)
    if not path.exists():
        return {}

    try:
        with open(path, 'r', encoding='utf-8') as f:
            config = json.load(f)
    except (OSError, ValueError) as e:
        logger.error(f"Failed to load config file {path}: {e}")
        return {}

    if not isinstance(config, dict):
        logger.error(f"Failed to load config file {path}: expected a JSON object")
        return {}

    return config


def save_config(data: Mapping[str, Any], config_path: Union[str, Path] = CONFIG_FILE) -> bool:
    """
    Merge data onto the existing config file and write it back.

    Args:
        data: Keys to add or replace
        config_path: Path to config file

    Returns:
        True if the file was written
    """
    path = Path(config_path)
    updated = {**load_config(path), **data}

    try:
        with open(path, 'w', encoding='utf-8') as f:
            json.dump(updated, f, indent=4)
    except OSError as e:
        logger.error(f"Failed to save config file {path}: {e}")
        return False

    return True


def resolve_api_key(
    cli_key: Optional[str],
    config: Mapping[str, Any],
    environ: Optional[Mapping[str, str]] = None
) -> Optional[str]:
    """
    Pick the API key: command line first, then config file, then environment.

    Args:
        cli_key: Key given on the command line
        config: Loaded config dictionary
        environ: Environment mapping (defaults to os.environ)

    Returns:
        The API key, or None if no source provides one
    """
    if environ is None:
        environ = os.environ
    return cli_key or config.get('api_key') or environ.get(API_KEY_ENV_VAR) or None


def get_settings(
    cli_key: Optional[str] = None,
    config_path: str = CONFIG_FILE,
    log_file: str = LOG_FILE,
    verbose: bool = False
) -> Settings:
    """
    Get application settings with the API key resolved.

    Args:
        cli_key: Key given on the command line
        config_path: Path to config file
        log_file: Path to log file
        verbose: Enable debug logging

    Returns:
        Settings instance

    Raises:
        ValueError: If no API key source is available
    """
    api_key = resolve_api_key(cli_key, load_config(config_path))

    return Settings(
        youtube_api_key=api_key,
        config_path=config_path,
        log_file=log_file,
        verbose=verbose
    )
