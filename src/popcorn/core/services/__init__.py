"""Core service implementations."""

from .app_controller import AppController
from .detail_session import DetailSession
from .json_store import JsonFileStore
from .key_binder import KeyBinder, KeyBinding
from .omdb_service import OMDbService
from .search_session import SearchSession
from .watchlist_store import WatchlistStore
from .window_title import TitleOverride, WindowTitle

__all__ = [
    "AppController",
    "DetailSession",
    "JsonFileStore",
    "KeyBinder",
    "KeyBinding",
    "OMDbService",
    "SearchSession",
    "TitleOverride",
    "WatchlistStore",
    "WindowTitle",
]
