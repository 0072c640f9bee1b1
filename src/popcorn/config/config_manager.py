"""Configuration management."""

import os
from pathlib import Path
from typing import Any, Dict, Optional

import yaml
from dotenv import load_dotenv
from pydantic import ValidationError

from ..utils.exceptions import ConfigurationError
from .models import Config

DEFAULT_CONFIG: Dict[str, Any] = {
    "omdb": {
        "api_key": "${OMDB_API_KEY}",
        "base_url": "https://www.omdbapi.com/",
        "timeout": 10,
    },
    "search": {
        "min_query_length": 3,
        "debounce_seconds": 0.0,
    },
    "storage": {
        "path": "~/.popcorn/store.json",
        "watched_key": "watched",
    },
    "ui": {
        "default_title": "usePopcorn",
        "detail_title_format": "Movie | {title}",
    },
    "logging": {
        "level": "INFO",
    },
}


class ConfigManager:
    """Manages application configuration loading and validation."""

    def __init__(self, config_path: Optional[Path] = None):
        """Initialize config manager.

        Args:
            config_path: Path to configuration file. If None, searches standard locations.
        """
        self._config_path = config_path
        self._config: Optional[Config] = None

    def load_config(self) -> Config:
        """Load and validate configuration.

        Returns:
            Validated configuration object.

        Raises:
            FileNotFoundError: If configuration file is not found.
            ConfigurationError: If configuration is invalid.
            yaml.YAMLError: If YAML parsing fails.
        """
        if self._config is not None:
            return self._config

        config_path = self._find_config_file()
        self._load_env_files(config_path)
        raw_config = self._load_yaml_file(config_path)

        try:
            self._config = Config(**raw_config)
        except ValidationError as e:
            raise ConfigurationError(f"Configuration validation failed: {e}") from e

        return self._config

    def reload_config(self) -> Config:
        """Reload configuration from file.

        Returns:
            Newly loaded configuration object.
        """
        self._config = None
        return self.load_config()

    def get_config(self) -> Config:
        """Get current configuration, loading if necessary.

        Returns:
            Current configuration object.
        """
        if self._config is None:
            return self.load_config()
        return self._config

    def _find_config_file(self) -> Path:
        """Find configuration file in standard locations.

        Returns:
            Path to configuration file.

        Raises:
            FileNotFoundError: If no configuration file is found.
        """
        if self._config_path is not None:
            if self._config_path.exists():
                return self._config_path
            raise FileNotFoundError(f"Configuration file not found: {self._config_path}")

        search_paths = [
            Path.cwd() / "config" / "config.yaml",
            Path.cwd() / "config.yaml",
            Path.home() / ".config" / "popcorn" / "config.yaml",
            Path.home() / ".popcorn" / "config.yaml",
        ]

        env_config = os.getenv("POPCORN_CONFIG")
        if env_config:
            search_paths.insert(0, Path(env_config))

        for path in search_paths:
            if path.exists():
                return path

        raise FileNotFoundError(
            f"Configuration file not found in any of these locations: "
            f"{[str(p) for p in search_paths]}"
        )

    @staticmethod
    def _load_env_files(config_path: Path) -> None:
        """Load .env files so ${VARS} in the config can be expanded.

        Values already present in the environment win.
        """
        load_dotenv(config_path.parent / ".env", override=False)
        load_dotenv(Path.cwd() / ".env", override=False)

    def _load_yaml_file(self, path: Path) -> Dict[str, Any]:
        """Load YAML file with environment variable expansion.

        Args:
            path: Path to YAML file.

        Returns:
            Parsed YAML data with environment variables expanded.

        Raises:
            yaml.YAMLError: If YAML parsing fails.
        """
        with open(path, "r", encoding="utf-8") as f:
            content = f.read()

        content = os.path.expandvars(content)

        try:
            result = yaml.safe_load(content)
            if not isinstance(result, dict):
                raise yaml.YAMLError(f"YAML file {path} must contain a dictionary at root level")
            return result
        except yaml.YAMLError as e:
            raise yaml.YAMLError(f"Failed to parse YAML file {path}: {e}")

    @classmethod
    def create_default_config(cls, output_path: Path) -> None:
        """Create a default configuration file.

        Args:
            output_path: Path where to create the configuration file.
        """
        example_config_path = (
            Path(__file__).parent.parent.parent.parent / "config" / "config.example.yaml"
        )

        if example_config_path.exists():
            import shutil

            shutil.copy2(example_config_path, output_path)
            return

        with open(output_path, "w", encoding="utf-8") as f:
            yaml.dump(DEFAULT_CONFIG, f, default_flow_style=False, indent=2, sort_keys=False)

    def validate_config_file(self, config_path: Path) -> bool:
        """Validate a configuration file without loading it as current config.

        Args:
            config_path: Path to configuration file to validate.

        Returns:
            True if configuration is valid, False otherwise.
        """
        try:
            raw_config = self._load_yaml_file(config_path)
            Config(**raw_config)
            return True
        except (ValidationError, yaml.YAMLError, FileNotFoundError):
            return False
