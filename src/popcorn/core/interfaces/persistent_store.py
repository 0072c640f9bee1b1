"""Persistent key/value store interface."""

from abc import ABC, abstractmethod
from typing import Any, Optional


class IPersistentStore(ABC):
    """Durable storage of JSON-compatible values under string keys."""

    @abstractmethod
    def load(self, key: str) -> Optional[Any]:
        """Load the value stored under ``key``.

        Args:
            key: Storage key.

        Returns:
            Stored value or None if absent or unreadable.
        """
        pass

    @abstractmethod
    def save(self, key: str, value: Any) -> None:
        """Store ``value`` under ``key``, replacing any previous value.

        Args:
            key: Storage key.
            value: JSON-compatible value.

        Raises:
            StorageError: If the value cannot be written.
        """
        pass
