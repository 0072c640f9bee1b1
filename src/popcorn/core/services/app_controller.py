"""Application controller routing user intents between sessions."""

from typing import Any, Optional

from ...config.models import Config
from ...infrastructure.logging import LoggerMixin
from ..interfaces import IOMDbService
from ..models import DetailStatus, WatchedEntry
from .detail_session import DetailSession
from .key_binder import KeyBinder, KeyBinding
from .search_session import SearchSession
from .watchlist_store import WatchlistStore
from .window_title import WindowTitle


class AppController(LoggerMixin):
    """Composes search, details and the watched list.

    Key bindings:
        Enter: focus the search box and clear the query, unless it already
            has focus. Bound for the controller's lifetime.
        Escape: close the details. Bound only while a movie is selected.
    """

    def __init__(
        self,
        config: Config,
        omdb_service: IOMDbService,
        watchlist: WatchlistStore,
        key_binder: KeyBinder,
        window_title: WindowTitle,
    ) -> None:
        """Initialize the controller.

        Args:
            config: Application configuration.
            omdb_service: OMDb client shared by both sessions.
            watchlist: Watched movies store.
            key_binder: Key binding registry.
            window_title: Window title driven by the detail session.
        """
        self.search = SearchSession(config, omdb_service)
        self.details = DetailSession(config, omdb_service, window_title)
        self.watchlist = watchlist
        self.key_binder = key_binder
        self.search_focused = False
        self._enter_binding: Optional[KeyBinding] = key_binder.bind("Enter", self._on_enter)
        self._escape_binding: Optional[KeyBinding] = None

    def set_query(self, query: str) -> None:
        """Forward typed text to the search session."""
        self.search_focused = True
        self.search.set_query(query)

    def focus_search(self) -> None:
        self.search_focused = True

    def blur_search(self) -> None:
        self.search_focused = False

    def select_movie(self, imdb_id: str) -> None:
        """Open the details of a search result."""
        self.search_focused = False
        self.details.select(imdb_id)
        if self._escape_binding is None:
            self._escape_binding = self.key_binder.bind("Escape", self.close_movie)

    def close_movie(self) -> None:
        """Close the details view."""
        self.details.select(None)
        if self._escape_binding is not None:
            self._escape_binding.unbind()
            self._escape_binding = None

    def rate(self, rating: int) -> bool:
        """Report a star rating change for the shown movie.

        Returns:
            True if the rating was recorded.
        """
        imdb_id = self.details.selected_id
        if imdb_id is None or self.watchlist.is_watched(imdb_id):
            return False
        return self.details.report_rating(imdb_id, rating)

    def add_to_watched(self) -> Optional[WatchedEntry]:
        """Commit the shown movie with the last rating to the watched list.

        Returns:
            The new entry, or None if there was nothing to commit.
        """
        state = self.details.state
        if state.status is not DetailStatus.READY or state.detail is None:
            return None
        if state.user_rating is None:
            return None
        if self.watchlist.is_watched(state.detail.imdb_id):
            self.logger.info(f"{state.detail.title} is already on the watched list")
            return None

        entry = WatchedEntry.from_detail(
            state.detail,
            user_rating=state.user_rating,
            rating_change_count=state.rating_change_count,
        )
        self.watchlist.add(entry)
        self.close_movie()
        return entry

    def delete_watched(self, imdb_id: str) -> None:
        """Remove a movie from the watched list."""
        self.watchlist.remove(imdb_id)

    def press_key(self, key: str) -> bool:
        """Dispatch a key press to the bound actions.

        Returns:
            True if any action was bound to the key.
        """
        return self.key_binder.dispatch(key)

    async def close(self) -> None:
        """Cancel pending requests, release key bindings and restore the title."""
        await self.search.close()
        await self.details.close()
        if self._escape_binding is not None:
            self._escape_binding.unbind()
            self._escape_binding = None
        if self._enter_binding is not None:
            self._enter_binding.unbind()
            self._enter_binding = None

    def _on_enter(self) -> None:
        if self.search_focused:
            return
        self.search_focused = True
        self.search.set_query("")

    async def __aenter__(self) -> "AppController":
        """Async context manager entry."""
        return self

    async def __aexit__(self, exc_type: Any, exc_val: Any, exc_tb: Any) -> None:
        """Async context manager exit."""
        await self.close()
