"""Configuration management for YouTube Playlist Extractor."""

from .settings import Settings, get_settings, load_config, save_config, resolve_api_key
from .logging_config import configure_logging

__all__ = [
    "Settings",
    "get_settings",
    "load_config",
    "save_config",
    "resolve_api_key",
    "configure_logging",
]
