"""Configuration data models."""

import os
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator


class OMDbConfig(BaseModel):
    """OMDb API configuration."""

    api_key: str = Field(..., description="Credential sent with every OMDb request")
    base_url: str = Field(default="https://www.omdbapi.com/", description="OMDb API base URL")
    timeout: int = Field(default=10, gt=0, description="Request timeout in seconds")

    @field_validator("api_key")
    @classmethod
    def validate_api_key(cls, v: str) -> str:
        """Expand environment variables in API key."""
        return os.path.expandvars(v)


class SearchConfig(BaseModel):
    """Search behaviour configuration."""

    min_query_length: int = Field(
        default=3, ge=1, description="Queries shorter than this never hit the network"
    )
    debounce_seconds: float = Field(
        default=0.0, ge=0.0, description="Delay before a search request is issued"
    )


class StorageConfig(BaseModel):
    """Local persistence configuration."""

    path: str = Field(default="~/.popcorn/store.json", description="JSON store file")
    watched_key: str = Field(default="watched", description="Key of the watched list")

    @field_validator("path")
    @classmethod
    def expand_path(cls, v: str) -> str:
        """Expand environment variables and the home directory in the path."""
        return os.path.expanduser(os.path.expandvars(v))


class UIConfig(BaseModel):
    """Presentation configuration."""

    default_title: str = Field(default="usePopcorn", description="Window title when idle")
    detail_title_format: str = Field(
        default="Movie | {title}", description="Window title while a movie is shown"
    )

    @field_validator("detail_title_format")
    @classmethod
    def validate_title_format(cls, v: str) -> str:
        """Ensure the format references the movie title."""
        if "{title}" not in v:
            raise ValueError("detail_title_format must contain a {title} placeholder")
        try:
            v.format(title="")
        except (KeyError, IndexError, ValueError) as e:
            raise ValueError(f"detail_title_format is not a valid template: {e!r}") from e
        return v


class LoggingConfig(BaseModel):
    """Logging configuration."""

    level: str = Field(default="INFO", description="Logging level")
    format: str = Field(
        default="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
        description="Log format string",
    )
    file: Optional[str] = Field(default=None, description="Log file path")
    max_size_mb: int = Field(default=10, gt=0, description="Maximum log file size in MB")
    backup_count: int = Field(default=5, ge=0, description="Number of backup log files")

    @field_validator("level")
    @classmethod
    def validate_level(cls, v: str) -> str:
        """Validate logging level."""
        allowed = {"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"}
        if v.upper() not in allowed:
            raise ValueError(f"Logging level must be one of: {allowed}")
        return v.upper()


class Config(BaseModel):
    """Main configuration model."""

    omdb: OMDbConfig = Field(..., description="OMDb configuration")
    search: SearchConfig = Field(
        default_factory=SearchConfig, description="Search configuration"
    )
    storage: StorageConfig = Field(
        default_factory=StorageConfig, description="Storage configuration"
    )
    ui: UIConfig = Field(default_factory=UIConfig, description="UI configuration")
    logging: LoggingConfig = Field(
        default_factory=LoggingConfig, description="Logging configuration"
    )

    model_config = ConfigDict(
        validate_assignment=True,
        populate_by_name=True,
    )
