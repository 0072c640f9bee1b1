"""Configuration management module."""

from .config_manager import ConfigManager
from .models import Config, LoggingConfig, OMDbConfig, SearchConfig, StorageConfig, UIConfig

__all__ = [
    "ConfigManager",
    "Config",
    "OMDbConfig",
    "SearchConfig",
    "StorageConfig",
    "UIConfig",
    "LoggingConfig",
]
