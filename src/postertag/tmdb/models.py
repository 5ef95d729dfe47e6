"""TMDB API response models and errors."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Any


class ErrorSource(Enum):
    """TMDB request that produced an error."""

    CONFIGURATION = "configuration"
    SEARCH = "search"
    POSTER_DOWNLOAD = "poster_download"


class TmdbError(Exception):
    """Raised when a TMDB request fails."""

    def __init__(self, source: ErrorSource, message: str) -> None:
        super().__init__(message)
        self.source = source
        self.message = message


class TmdbAuthError(TmdbError):
    """Raised when the TMDB API token is rejected (HTTP 401)."""


@dataclass(frozen=True)
class ImageConfiguration:
    """Image settings from /configuration used to build poster URLs."""

    secure_base_url: str
    poster_size: str
    poster_sizes: tuple[str, ...] = ()

    def poster_url(self, poster_path: str) -> str:
        return f"{self.secure_base_url}{self.poster_size}{poster_path}"


@dataclass(frozen=True)
class MovieResult:
    """Movie search result (subset of fields)."""

    id: int
    title: str
    release_date: str | None = None  # YYYY-MM-DD, may be empty
    overview: str | None = None
    poster_path: str | None = None  # e.g. "/abc123.jpg"

    @property
    def year(self) -> int | None:
        if self.release_date and len(self.release_date) >= 4:
            try:
                return int(self.release_date[:4])
            except ValueError:
                return None
        return None

    @property
    def has_poster(self) -> bool:
        return bool(self.poster_path)

    @property
    def display_title(self) -> str:
        year = self.year
        return f"{self.title} ({year})" if year else self.title

    @classmethod
    def from_json(cls, data: dict[str, Any]) -> MovieResult:
        return cls(
            id=data["id"],
            title=data.get("title") or data.get("original_title") or "",
            release_date=data.get("release_date") or None,
            overview=data.get("overview") or None,
            poster_path=data.get("poster_path") or None,
        )
