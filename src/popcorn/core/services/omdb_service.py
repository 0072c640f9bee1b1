"""OMDb service implementation."""

import asyncio
from typing import Any, Dict, List, Optional

import aiohttp
from pydantic import ValidationError

from ...config.models import Config
from ...infrastructure.logging import LoggerMixin
from ...utils import (
    MovieNotFoundError,
    OMDbServiceError,
    clean_na,
    parse_rating,
    parse_release_date,
    parse_runtime,
)
from ..interfaces import IOMDbService
from ..models import MovieDetail, SearchResult


class OMDbService(IOMDbService, LoggerMixin):
    """OMDb service implementation.

    Cancelling the awaiting task aborts the underlying HTTP request;
    ``asyncio.CancelledError`` is never wrapped into ``OMDbServiceError``.
    """

    def __init__(self, config: Config) -> None:
        """Initialize OMDb service.

        Args:
            config: Application configuration.
        """
        self._config = config
        self._omdb_config = config.omdb
        self._session: Optional[aiohttp.ClientSession] = None

    async def search_movies(self, query: str) -> List[SearchResult]:
        """Search movies by title fragment.

        Args:
            query: Title fragment to search for.

        Returns:
            Non-empty list of matches, unique by IMDb ID.

        Raises:
            MovieNotFoundError: If OMDb reports no match.
            OMDbServiceError: If the request fails.
        """
        data = await self._request({"s": query})

        if data.get("Response") == "False":
            self.logger.info(f"No movies found for {query!r}: {data.get('Error')}")
            raise MovieNotFoundError(api_error=data.get("Error"))

        raw_results = data.get("Search")
        if not isinstance(raw_results, list) or not raw_results:
            raise MovieNotFoundError(api_error="Empty result set")

        results: List[SearchResult] = []
        seen = set()
        for item in raw_results:
            try:
                result = SearchResult.model_validate(item)
            except ValueError as e:
                self.logger.warning(f"Skipping malformed search result {item!r}: {e}")
                continue
            if result.imdb_id in seen:
                continue
            seen.add(result.imdb_id)
            results.append(result)

        if not results:
            raise MovieNotFoundError(api_error="No well-formed results")

        self.logger.info(f"Found {len(results)} movies for {query!r}")
        return results

    async def get_movie_details(self, imdb_id: str) -> MovieDetail:
        """Get detailed movie information by IMDb ID.

        Args:
            imdb_id: IMDb movie ID.

        Returns:
            Detailed movie information.

        Raises:
            MovieNotFoundError: If OMDb does not know the ID.
            OMDbServiceError: If the request fails or the payload is malformed.
        """
        data = await self._request({"i": imdb_id})

        if data.get("Response") == "False":
            raise MovieNotFoundError(
                f"No details for IMDb ID {imdb_id}", api_error=data.get("Error")
            )

        try:
            return self._parse_detail(imdb_id, data)
        except ValidationError as e:
            error_msg = f"OMDb returned malformed details for {imdb_id}: {e}"
            self.logger.error(error_msg)
            raise OMDbServiceError(error_msg) from e

    async def _request(self, params: Dict[str, str]) -> Dict[str, Any]:
        """Issue a GET request against the OMDb API.

        Args:
            params: Query parameters besides the API key.

        Returns:
            Decoded JSON object.

        Raises:
            OMDbServiceError: On non-success status, transport or decoding failure.
        """
        query = {"apikey": self._omdb_config.api_key, **params}

        try:
            async with self._get_session().get(
                self._omdb_config.base_url, params=query
            ) as response:
                if response.status >= 400:
                    raise OMDbServiceError(f"OMDb request failed with HTTP {response.status}")
                data = await response.json(content_type=None)
        except OMDbServiceError as e:
            self.logger.error(str(e))
            raise
        except (aiohttp.ClientError, asyncio.TimeoutError, ValueError) as e:
            error_msg = f"OMDb request failed: {e!r}"
            self.logger.error(error_msg)
            raise OMDbServiceError(error_msg) from e

        if not isinstance(data, dict):
            raise OMDbServiceError("OMDb returned an unexpected payload")
        return data

    def _parse_detail(self, imdb_id: str, data: Dict[str, Any]) -> MovieDetail:
        """Parse an OMDb detail payload into MovieDetail.

        Args:
            imdb_id: Requested IMDb ID, used when the payload lacks one.
            data: OMDb detail data.

        Returns:
            MovieDetail object.
        """
        runtime = clean_na(data.get("Runtime"))

        return MovieDetail(
            imdb_id=data.get("imdbID") or imdb_id,
            title=data.get("Title", ""),
            year=data.get("Year", ""),
            poster_url=clean_na(data.get("Poster")),
            runtime=runtime,
            runtime_minutes=parse_runtime(runtime),
            imdb_rating=parse_rating(data.get("imdbRating")),
            plot=clean_na(data.get("Plot")),
            release_date=parse_release_date(data.get("Released")),
            actors=clean_na(data.get("Actors")),
            director=clean_na(data.get("Director")),
            genre=clean_na(data.get("Genre")),
        )

    def _get_session(self) -> aiohttp.ClientSession:
        """Get or create HTTP session.

        Returns:
            HTTP session.
        """
        if self._session is None or self._session.closed:
            timeout = aiohttp.ClientTimeout(total=self._omdb_config.timeout)
            self._session = aiohttp.ClientSession(
                timeout=timeout, headers={"Accept": "application/json"}
            )
        return self._session

    async def close(self) -> None:
        """Close HTTP session."""
        if self._session:
            await self._session.close()
            self._session = None

    async def __aenter__(self) -> "OMDbService":
        """Async context manager entry."""
        return self

    async def __aexit__(self, exc_type: Any, exc_val: Any, exc_tb: Any) -> None:
        """Async context manager exit."""
        await self.close()
