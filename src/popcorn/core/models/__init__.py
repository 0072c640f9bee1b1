"""Core data models."""

from .movie import MovieDetail, SearchResult, WatchedEntry, WatchlistSummary
from .session_state import DetailState, DetailStatus, SearchState, SearchStatus

__all__ = [
    "SearchResult",
    "MovieDetail",
    "WatchedEntry",
    "WatchlistSummary",
    "SearchState",
    "SearchStatus",
    "DetailState",
    "DetailStatus",
]
