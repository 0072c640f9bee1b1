"""Core interfaces for dependency injection."""

from .omdb_service import IOMDbService
from .persistent_store import IPersistentStore

__all__ = [
    "IOMDbService",
    "IPersistentStore",
]
