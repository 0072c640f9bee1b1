"""Custom exceptions for the application."""

from typing import Optional


class PopcornError(Exception):
    """Base exception for all application errors."""

    pass


class ConfigurationError(PopcornError):
    """Configuration-related errors."""

    pass


class OMDbServiceError(PopcornError):
    """OMDb transport or protocol errors."""

    pass


class MovieNotFoundError(OMDbServiceError):
    """OMDb answered with a well-formed "no match" payload."""

    def __init__(self, message: str = "Movie not found ...", api_error: Optional[str] = None):
        super().__init__(message)
        self.api_error = api_error


class StorageError(PopcornError):
    """Persistent store errors."""

    pass
