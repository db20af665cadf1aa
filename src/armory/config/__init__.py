"""
Configuration module for Armory.

Uses pydantic-settings for environment variable loading on top of
layered YAML config files.
"""

from armory.config.settings import Settings
from armory.config.sources import ConfigFileError
from armory.config.types import ConfigBase, KindConfig, LoggingConfig

__all__ = ["ConfigBase", "ConfigFileError", "KindConfig", "LoggingConfig", "Settings"]
