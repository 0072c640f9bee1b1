"""OMDb service interface."""

from abc import ABC, abstractmethod
from typing import List

from ..models import MovieDetail, SearchResult


class IOMDbService(ABC):
    """Interface for OMDb services."""

    @abstractmethod
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
        pass

    @abstractmethod
    async def get_movie_details(self, imdb_id: str) -> MovieDetail:
        """Get detailed movie information by IMDb ID.

        Args:
            imdb_id: IMDb movie ID.

        Returns:
            Detailed movie information.

        Raises:
            MovieNotFoundError: If OMDb does not know the ID.
            OMDbServiceError: If the request fails.
        """
        pass
