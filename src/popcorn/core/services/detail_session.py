"""Selected movie detail session."""

import asyncio
from typing import Optional

from ...config.models import Config
from ...infrastructure.logging import LoggerMixin
from ...utils import OMDbServiceError
from ..interfaces import IOMDbService
from ..models import DetailState, DetailStatus
from .window_title import TitleOverride, WindowTitle


class DetailSession(LoggerMixin):
    """Owns the selection to movie detail pipeline.

    States are ``idle``, ``loading(id)`` and ``ready(id, detail)``. Every
    selection, including ``None``, cancels the in-flight fetch and invalidates
    its generation token. While ready, the window title references the movie;
    leaving ready releases that override exactly once.

    Fetch failures are logged and leave the session loading; no error state
    is exposed to the caller.
    """

    def __init__(
        self, config: Config, omdb_service: IOMDbService, window_title: WindowTitle
    ) -> None:
        """Initialize detail session.

        Args:
            config: Application configuration.
            omdb_service: OMDb client used for detail lookups.
            window_title: Title updated while a movie is shown.
        """
        self._omdb_service = omdb_service
        self._window_title = window_title
        self._title_format = config.ui.detail_title_format
        self._state = DetailState()
        self._generation = 0
        self._task: Optional["asyncio.Task[None]"] = None
        self._title_override: Optional[TitleOverride] = None

    @property
    def state(self) -> DetailState:
        """Current detail state."""
        return self._state

    @property
    def selected_id(self) -> Optional[str]:
        """IMDb ID of the selected movie, if any."""
        return self._state.imdb_id

    def select(self, imdb_id: Optional[str]) -> None:
        """Select a movie, or clear the selection with ``None``.

        Must be called from within a running event loop.

        Args:
            imdb_id: Movie to show, or None to close the details.
        """
        self._cancel_pending()
        self._generation += 1
        self._release_title()

        if imdb_id is None:
            self._state = DetailState()
            return

        self._state = DetailState(status=DetailStatus.LOADING, imdb_id=imdb_id)
        self._task = asyncio.create_task(self._fetch(imdb_id, self._generation))

    def report_rating(self, imdb_id: str, rating: int) -> bool:
        """Record a rating emitted for the shown movie.

        The change counter only moves when the value differs from the last
        recorded rating.

        Args:
            imdb_id: Movie the rating widget belongs to.
            rating: New rating value, 1 to 10.

        Returns:
            True if the rating was recorded.

        Raises:
            ValueError: If the rating is out of range.
        """
        if not 1 <= rating <= 10:
            raise ValueError(f"Rating must be between 1 and 10, got {rating}")

        state = self._state
        if state.status is not DetailStatus.READY or state.imdb_id != imdb_id:
            self.logger.debug(f"Ignoring rating for {imdb_id}: not the shown movie")
            return False

        changed = rating != state.user_rating
        self._state = state.model_copy(
            update={
                "user_rating": rating,
                "rating_change_count": state.rating_change_count + int(changed),
            }
        )
        return True

    async def wait(self) -> DetailState:
        """Wait until the current fetch, including any it was replaced by, settles.

        Returns:
            The settled state.
        """
        while self._task is not None and not self._task.done():
            await asyncio.wait({self._task})
        return self._state

    async def close(self) -> None:
        """Tear the session down: cancel the fetch and restore the title."""
        self._generation += 1
        self._release_title()
        task = self._cancel_pending()
        if task is not None:
            await asyncio.wait({task})

    def _cancel_pending(self) -> Optional["asyncio.Task[None]"]:
        task = self._task
        self._task = None
        if task is not None and not task.done():
            task.cancel()
            return task
        return None

    def _release_title(self) -> None:
        override = self._title_override
        self._title_override = None
        if override is not None:
            override.release()

    async def _fetch(self, imdb_id: str, generation: int) -> None:
        try:
            detail = await self._omdb_service.get_movie_details(imdb_id)
        except asyncio.CancelledError:
            self.logger.debug(f"Detail fetch for {imdb_id} superseded")
            raise
        except OMDbServiceError as e:
            self.logger.error(f"Failed to load details for {imdb_id}: {e}")
            return

        if generation != self._generation:
            self.logger.debug(f"Discarding stale details for {imdb_id}")
            return

        self._state = DetailState(status=DetailStatus.READY, imdb_id=imdb_id, detail=detail)
        if detail.title:
            self._title_override = self._window_title.override(
                self._title_format.format(title=detail.title)
            )
