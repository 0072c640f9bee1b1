"""Utility functions and classes."""

from .exceptions import (
    ConfigurationError,
    MovieNotFoundError,
    OMDbServiceError,
    PopcornError,
    StorageError,
)
from .file_utils import atomic_write_text, read_json_file
from .text_utils import average, clean_na, parse_rating, parse_release_date, parse_runtime

__all__ = [
    "PopcornError",
    "ConfigurationError",
    "OMDbServiceError",
    "MovieNotFoundError",
    "StorageError",
    "atomic_write_text",
    "read_json_file",
    "average",
    "clean_na",
    "parse_rating",
    "parse_release_date",
    "parse_runtime",
]
