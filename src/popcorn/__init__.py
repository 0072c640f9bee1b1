"""Popcorn Watchlist.

Search the OMDb movie database, inspect movie details and keep a personal,
locally persisted list of watched movies with your own ratings.
"""

try:
    # Try to get version from setuptools_scm (when installed from git)
    from ._version import version as __version__
except ImportError:
    __version__ = "0.1.0-dev"

__author__ = "Popcorn Watchlist Team"
