"""Test the movie detail session."""

import logging

import pytest

from popcorn.core.models import DetailStatus
from popcorn.core.services import DetailSession
from popcorn.utils import OMDbServiceError

BATMAN = "tt0096895"
BATMAN_RETURNS = "tt0103776"


@pytest.fixture
def session(config, fake_omdb, window_title, batman_detail, batman_returns_detail):
    """Detail session with both Batman movies available."""
    fake_omdb.detail_responses[BATMAN] = batman_detail
    fake_omdb.detail_responses[BATMAN_RETURNS] = batman_returns_detail
    return DetailSession(config, fake_omdb, window_title)


@pytest.mark.unit
@pytest.mark.asyncio
async def test_select_loads_details(session, window_title, title_changes):
    """Selecting a movie goes through loading to ready."""
    session.select(BATMAN)
    assert session.state.status is DetailStatus.LOADING
    assert session.state.imdb_id == BATMAN

    state = await session.wait()

    assert state.status is DetailStatus.READY
    assert state.detail.title == "Batman"
    assert state.rating_change_count == 0
    assert window_title.current == "Movie | Batman"
    assert title_changes == ["Movie | Batman"]


@pytest.mark.unit
@pytest.mark.asyncio
async def test_rapid_reselection_keeps_latest(session, fake_omdb, settle):
    """Selecting B before A resolves ends in B's details."""
    gate = fake_omdb.hold_details(BATMAN)

    session.select(BATMAN)
    await settle()
    session.select(BATMAN_RETURNS)
    state = await session.wait()

    assert fake_omdb.cancelled == [f"i:{BATMAN}"]
    assert state.status is DetailStatus.READY
    assert state.detail.imdb_id == BATMAN_RETURNS

    gate.set()
    await settle()
    assert session.state.detail.imdb_id == BATMAN_RETURNS


@pytest.mark.unit
@pytest.mark.asyncio
async def test_late_details_of_previous_selection_are_discarded(session, fake_omdb, settle):
    """A fetch that completes despite being superseded never wins."""
    fake_omdb.ignore_cancel = True
    gate = fake_omdb.hold_details(BATMAN)

    session.select(BATMAN)
    await settle()
    session.select(BATMAN_RETURNS)
    await session.wait()
    gate.set()
    await settle()

    assert session.state.imdb_id == BATMAN_RETURNS
    assert session.state.detail.imdb_id == BATMAN_RETURNS


@pytest.mark.unit
@pytest.mark.asyncio
async def test_select_none_is_idle_without_live_request(session, fake_omdb, settle):
    """Closing the details cancels the fetch and nothing revives the state."""
    gate = fake_omdb.hold_details(BATMAN)

    session.select(BATMAN)
    await settle()
    session.select(None)

    assert session.state.status is DetailStatus.IDLE
    assert session.state.detail is None

    gate.set()
    await settle()

    assert session.state.status is DetailStatus.IDLE
    assert fake_omdb.cancelled == [f"i:{BATMAN}"]


@pytest.mark.unit
@pytest.mark.asyncio
async def test_rating_change_counter(session):
    """Each distinct rating change counts; re-selecting resets the counter."""
    session.select(BATMAN)
    await session.wait()

    assert session.report_rating(BATMAN, 5)
    assert session.report_rating(BATMAN, 9)
    assert session.report_rating(BATMAN, 8)
    assert session.report_rating(BATMAN, 8)
    assert session.state.rating_change_count == 3
    assert session.state.user_rating == 8

    session.select(BATMAN)
    assert session.state.rating_change_count == 0
    state = await session.wait()

    assert state.rating_change_count == 0
    assert state.user_rating is None


@pytest.mark.unit
@pytest.mark.asyncio
async def test_rating_ignored_unless_shown(session, fake_omdb, settle):
    """Ratings for another movie, or before details arrive, are not counted."""
    fake_omdb.hold_details(BATMAN)
    session.select(BATMAN)
    await settle()

    assert not session.report_rating(BATMAN, 7)

    session.select(BATMAN_RETURNS)
    await session.wait()

    assert not session.report_rating(BATMAN, 7)
    assert session.state.rating_change_count == 0


@pytest.mark.unit
@pytest.mark.asyncio
@pytest.mark.parametrize("rating", [0, 11, -3])
async def test_rating_out_of_range(session, rating):
    """Ratings must lie between 1 and 10."""
    session.select(BATMAN)
    await session.wait()

    with pytest.raises(ValueError):
        session.report_rating(BATMAN, rating)


@pytest.mark.unit
@pytest.mark.asyncio
async def test_fetch_failure_is_only_logged(session, fake_omdb, caplog):
    """Detail failures stay in loading and are logged."""
    fake_omdb.detail_responses[BATMAN] = OMDbServiceError("OMDb request failed with HTTP 503")

    with caplog.at_level(logging.ERROR):
        session.select(BATMAN)
        state = await session.wait()

    assert state.status is DetailStatus.LOADING
    assert state.detail is None
    assert "Failed to load details for tt0096895" in caplog.text


@pytest.mark.unit
@pytest.mark.asyncio
async def test_title_reverts_once_per_selection_change(session, window_title, title_changes):
    """Each exit from ready restores the default title exactly once."""
    session.select(BATMAN)
    await session.wait()
    session.select(BATMAN_RETURNS)
    await session.wait()
    await session.close()
    await session.close()

    assert title_changes == [
        "Movie | Batman",
        "usePopcorn",
        "Movie | Batman Returns",
        "usePopcorn",
    ]
    assert window_title.current == "usePopcorn"


@pytest.mark.unit
@pytest.mark.asyncio
async def test_close_while_loading_leaves_title_alone(session, fake_omdb, title_changes, settle):
    """Teardown before details arrive has no title to restore."""
    fake_omdb.hold_details(BATMAN)
    session.select(BATMAN)
    await settle()

    await session.close()

    assert title_changes == []
    assert fake_omdb.cancelled == [f"i:{BATMAN}"]
