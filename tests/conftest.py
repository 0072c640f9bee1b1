"""Pytest configuration and fixtures."""

import asyncio
from typing import Dict, List, Union

import pytest

from popcorn.config import ConfigManager
from popcorn.core.interfaces import IOMDbService
from popcorn.core.models import MovieDetail, SearchResult
from popcorn.core.services import JsonFileStore, WatchlistStore, WindowTitle
from popcorn.infrastructure import Container
from popcorn.utils import MovieNotFoundError


class FakeOMDbService(IOMDbService):
    """In-memory OMDb stand-in whose responses can be held back.

    ``hold_search`` / ``hold_details`` return an event; the matching call does
    not complete until the event is set. With ``ignore_cancel`` a held call
    keeps waiting after being cancelled and then returns normally, like a
    transport that completes despite the abort.
    """

    def __init__(self) -> None:
        self.search_responses: Dict[str, Union[List[SearchResult], Exception]] = {}
        self.detail_responses: Dict[str, Union[MovieDetail, Exception]] = {}
        self.search_calls: List[str] = []
        self.detail_calls: List[str] = []
        self.cancelled: List[str] = []
        self.ignore_cancel = False
        self._gates: Dict[str, asyncio.Event] = {}

    def hold_search(self, query: str) -> asyncio.Event:
        gate = asyncio.Event()
        self._gates[f"s:{query}"] = gate
        return gate

    def hold_details(self, imdb_id: str) -> asyncio.Event:
        gate = asyncio.Event()
        self._gates[f"i:{imdb_id}"] = gate
        return gate

    async def search_movies(self, query: str) -> List[SearchResult]:
        self.search_calls.append(query)
        await self._pass_gate(f"s:{query}")
        response = self.search_responses.get(query)
        if response is None:
            raise MovieNotFoundError(api_error="Movie not found!")
        if isinstance(response, Exception):
            raise response
        return response

    async def get_movie_details(self, imdb_id: str) -> MovieDetail:
        self.detail_calls.append(imdb_id)
        await self._pass_gate(f"i:{imdb_id}")
        response = self.detail_responses.get(imdb_id)
        if response is None:
            raise MovieNotFoundError(api_error="Incorrect IMDb ID.")
        if isinstance(response, Exception):
            raise response
        return response

    async def _pass_gate(self, key: str) -> None:
        gate = self._gates.get(key)
        if gate is None:
            return
        try:
            await gate.wait()
        except asyncio.CancelledError:
            self.cancelled.append(key)
            if not self.ignore_cancel:
                raise
            await gate.wait()


@pytest.fixture
def temp_config_file(tmp_path):
    """Create a temporary configuration file."""
    config_content = f"""
omdb:
  api_key: "test-omdb-key"
  base_url: "http://127.0.0.1:1/"

storage:
  path: "{tmp_path / 'store.json'}"

logging:
  level: "DEBUG"
"""
    config_file = tmp_path / "config.yaml"
    config_file.write_text(config_content)
    return config_file


@pytest.fixture
def config_manager(temp_config_file):
    """Create a configuration manager with test config."""
    return ConfigManager(temp_config_file)


@pytest.fixture
def config(config_manager):
    """Load test configuration."""
    return config_manager.load_config()


@pytest.fixture
def container(config_manager):
    """Create a test container."""
    return Container(config_manager)


@pytest.fixture
def settle():
    """Coroutine giving scheduled tasks a few loop iterations to run."""

    async def _settle() -> None:
        for _ in range(5):
            await asyncio.sleep(0)

    return _settle


@pytest.fixture
def fake_omdb():
    """Fake OMDb service with controllable responses."""
    return FakeOMDbService()


@pytest.fixture
def store(config):
    """JSON store in the test directory."""
    return JsonFileStore(config)


@pytest.fixture
def watchlist(config, store):
    """Empty watchlist backed by the test store."""
    return WatchlistStore(config, store)


@pytest.fixture
def title_changes():
    """Every title the window was set to, in order."""
    return []


@pytest.fixture
def window_title(config, title_changes):
    """Window title recording every change."""
    title = WindowTitle(config)
    title.on_change = title_changes.append
    return title


@pytest.fixture
def batman_results():
    """Search results for "bat"."""
    return [
        SearchResult(imdb_id="tt0096895", title="Batman", year="1989", poster_url=None),
        SearchResult(
            imdb_id="tt0103776", title="Batman Returns", year="1992", poster_url=None
        ),
    ]


@pytest.fixture
def batman_detail():
    """Detail record of Batman (1989)."""
    return MovieDetail(
        imdb_id="tt0096895",
        title="Batman",
        year="1989",
        poster_url="https://example.org/batman.jpg",
        runtime="126 min",
        runtime_minutes=126,
        imdb_rating=7.5,
        plot="The Dark Knight of Gotham City begins his war on crime.",
        actors="Michael Keaton, Jack Nicholson",
        director="Tim Burton",
        genre="Action, Adventure",
    )


@pytest.fixture
def batman_returns_detail():
    """Detail record of Batman Returns (1992)."""
    return MovieDetail(
        imdb_id="tt0103776",
        title="Batman Returns",
        year="1992",
        runtime="126 min",
        runtime_minutes=126,
        imdb_rating=7.1,
        director="Tim Burton",
    )
