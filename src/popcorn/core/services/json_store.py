"""JSON file backed persistent store."""

import json
from pathlib import Path
from typing import Any, Dict, Optional

from ...config.models import Config
from ...infrastructure.logging import LoggerMixin
from ...utils import StorageError, atomic_write_text, read_json_file
from ..interfaces import IPersistentStore


class JsonFileStore(IPersistentStore, LoggerMixin):
    """Keeps every key in a single JSON object on disk."""

    def __init__(self, config: Config) -> None:
        """Initialize the store.

        Args:
            config: Application configuration.
        """
        self._path = Path(config.storage.path)

    @property
    def path(self) -> Path:
        """Location of the backing file."""
        return self._path

    def load(self, key: str) -> Optional[Any]:
        """Load the value stored under ``key``.

        Args:
            key: Storage key.

        Returns:
            Stored value or None if absent or unreadable.
        """
        return self._read_all().get(key)

    def save(self, key: str, value: Any) -> None:
        """Store ``value`` under ``key``.

        Args:
            key: Storage key.
            value: JSON-compatible value.

        Raises:
            StorageError: If the value cannot be encoded or written.
        """
        data = self._read_all()
        data[key] = value

        try:
            content = json.dumps(data, indent=2, ensure_ascii=False)
            atomic_write_text(self._path, content)
        except (OSError, TypeError, ValueError) as e:
            error_msg = f"Failed to save {key!r} to {self._path}: {e}"
            self.logger.error(error_msg)
            raise StorageError(error_msg) from e

        self.logger.debug(f"Saved {key!r} to {self._path}")

    def _read_all(self) -> Dict[str, Any]:
        """Read the whole store, treating missing or corrupt files as empty."""
        if not self._path.exists():
            return {}

        try:
            data = read_json_file(self._path)
        except (OSError, ValueError) as e:
            self.logger.warning(f"Ignoring unreadable store {self._path}: {e}")
            return {}

        if not isinstance(data, dict):
            self.logger.warning(f"Ignoring store {self._path}: root is not an object")
            return {}
        return data
