"""Query driven movie search session."""

import asyncio
from typing import Optional

from ...config.models import Config
from ...infrastructure.logging import LoggerMixin
from ...utils import MovieNotFoundError, OMDbServiceError
from ..interfaces import IOMDbService
from ..models import SearchState, SearchStatus

NOT_FOUND_MESSAGE = "Movie not found ..."
FETCH_FAILED_MESSAGE = "Something went wrong with fetching movies"


class SearchSession(LoggerMixin):
    """Owns the query to results pipeline.

    Each query change cancels the running request and bumps a generation
    token. A request may only publish its outcome while its token is still
    the current one, so responses are applied in issuance order no matter in
    which order they arrive.
    """

    def __init__(self, config: Config, omdb_service: IOMDbService) -> None:
        """Initialize search session.

        Args:
            config: Application configuration.
            omdb_service: OMDb client used for searches.
        """
        self._omdb_service = omdb_service
        self._min_query_length = config.search.min_query_length
        self._debounce_seconds = config.search.debounce_seconds
        self._state = SearchState()
        self._generation = 0
        self._task: Optional["asyncio.Task[None]"] = None

    @property
    def state(self) -> SearchState:
        """Current search state."""
        return self._state

    @property
    def query(self) -> str:
        """Query the current state belongs to."""
        return self._state.query

    def set_query(self, query: str) -> None:
        """Reconcile the session with a new query.

        Must be called from within a running event loop.

        Args:
            query: Title fragment typed by the user.
        """
        if query == self._state.query and self._state.status is not SearchStatus.IDLE:
            return

        self._cancel_pending()
        self._generation += 1

        if len(query) < self._min_query_length:
            self._state = SearchState(status=SearchStatus.SUCCESS, query=query)
            return

        self._state = SearchState(status=SearchStatus.LOADING, query=query)
        self._task = asyncio.create_task(self._search(query, self._generation))

    async def wait(self) -> SearchState:
        """Wait until the current request, including any it was replaced by, settles.

        Returns:
            The settled state.
        """
        while self._task is not None and not self._task.done():
            await asyncio.wait({self._task})
        return self._state

    async def close(self) -> None:
        """Cancel any pending request; its outcome is discarded."""
        self._generation += 1
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

    async def _search(self, query: str, generation: int) -> None:
        try:
            if self._debounce_seconds:
                await asyncio.sleep(self._debounce_seconds)
            results = await self._omdb_service.search_movies(query)
        except asyncio.CancelledError:
            self.logger.debug(f"Search for {query!r} superseded")
            raise
        except MovieNotFoundError:
            self._apply(
                generation,
                SearchState(
                    status=SearchStatus.ERROR, query=query, error_message=NOT_FOUND_MESSAGE
                ),
            )
        except OMDbServiceError as e:
            self.logger.warning(f"Search for {query!r} failed: {e}")
            self._apply(
                generation,
                SearchState(
                    status=SearchStatus.ERROR, query=query, error_message=FETCH_FAILED_MESSAGE
                ),
            )
        else:
            self._apply(
                generation,
                SearchState(status=SearchStatus.SUCCESS, query=query, results=results),
            )

    def _apply(self, generation: int, state: SearchState) -> None:
        if generation != self._generation:
            self.logger.debug(f"Discarding stale search response for {state.query!r}")
            return
        self._state = state
