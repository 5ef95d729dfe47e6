"""The Movie Database (TMDB) client for poster lookup."""

from postertag.tmdb.client import TmdbClient
from postertag.tmdb.models import (
    ErrorSource,
    ImageConfiguration,
    MovieResult,
    TmdbAuthError,
    TmdbError,
)
from postertag.tmdb.query import guess_search_query

__all__ = [
    "ErrorSource",
    "ImageConfiguration",
    "MovieResult",
    "TmdbAuthError",
    "TmdbClient",
    "TmdbError",
    "guess_search_query",
]
