"""Persisted list of watched movies."""

from typing import Any, List, Optional

from pydantic import TypeAdapter, ValidationError

from ...config.models import Config
from ...infrastructure.logging import LoggerMixin
from ...utils import average
from ..interfaces import IPersistentStore
from ..models import WatchedEntry, WatchlistSummary

_ENTRIES = TypeAdapter(List[WatchedEntry])


class WatchlistStore(LoggerMixin):
    """In-memory watched list, saved in full after every mutation.

    Entries are not de-duplicated: adding a movie twice keeps both entries.
    """

    def __init__(self, config: Config, store: IPersistentStore) -> None:
        """Initialize the watchlist and rehydrate it from the store.

        Args:
            config: Application configuration.
            store: Durable storage backend.
        """
        self._store = store
        self._key = config.storage.watched_key
        self._entries: List[WatchedEntry] = self._rehydrate()

    def list(self) -> List[WatchedEntry]:
        """Return a copy of the watched entries in insertion order."""
        return list(self._entries)

    def add(self, entry: WatchedEntry) -> None:
        """Append an entry and persist the list.

        Args:
            entry: Entry to append.

        Raises:
            StorageError: If the list cannot be saved.
        """
        entries = [*self._entries, entry]
        self._persist(entries)
        self._entries = entries
        self.logger.info(f"Added {entry.title} ({entry.imdb_id}) to watched list")

    def remove(self, imdb_id: str) -> int:
        """Remove every entry with the given IMDb ID and persist the list.

        Args:
            imdb_id: IMDb ID to remove.

        Returns:
            Number of removed entries.

        Raises:
            StorageError: If the list cannot be saved.
        """
        remaining = [e for e in self._entries if e.imdb_id != imdb_id]
        removed = len(self._entries) - len(remaining)
        self._persist(remaining)
        self._entries = remaining
        if removed:
            self.logger.info(f"Removed {imdb_id} from watched list")
        return removed

    def is_watched(self, imdb_id: str) -> bool:
        """Check whether the movie is on the list."""
        return any(e.imdb_id == imdb_id for e in self._entries)

    def user_rating_for(self, imdb_id: str) -> Optional[int]:
        """Rating the user gave the movie, if it is on the list."""
        for entry in self._entries:
            if entry.imdb_id == imdb_id:
                return entry.user_rating
        return None

    def summary(self) -> WatchlistSummary:
        """Aggregate statistics over the list."""
        return WatchlistSummary(
            count=len(self._entries),
            avg_imdb_rating=average(e.imdb_rating for e in self._entries),
            avg_user_rating=average(e.user_rating for e in self._entries),
            avg_runtime=average(e.runtime_minutes for e in self._entries),
        )

    def _persist(self, entries: List[WatchedEntry]) -> None:
        payload: List[Any] = [e.model_dump(mode="json", by_alias=True) for e in entries]
        self._store.save(self._key, payload)

    def _rehydrate(self) -> List[WatchedEntry]:
        raw = self._store.load(self._key)
        if raw is None:
            return []

        try:
            entries = _ENTRIES.validate_python(raw)
        except ValidationError as e:
            self.logger.warning(f"Ignoring malformed watched list under {self._key!r}: {e}")
            return []

        self.logger.debug(f"Loaded {len(entries)} watched entries")
        return entries
