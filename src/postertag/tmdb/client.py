"""TMDB API client for movie search and poster download.

This module provides an HTTP client for The Movie Database v3 API using a
v4 read access (bearer) token.
"""

from __future__ import annotations

import logging
from typing import Any

import httpx

from postertag.config.models import TmdbConfig
from postertag.tmdb.models import (
    ErrorSource,
    ImageConfiguration,
    MovieResult,
    TmdbAuthError,
    TmdbError,
)

logger = logging.getLogger(__name__)


class TmdbClient:
    """HTTP client for the TMDB v3 API.

    The image configuration needed to build poster URLs is fetched on first
    use and cached for the lifetime of the client.
    """

    def __init__(self, config: TmdbConfig) -> None:
        """Initialize the client.

        Args:
            config: Connection configuration with base URL and API token.
        """
        self._base_url = config.base_url.rstrip("/")
        self._token = config.api_token or ""
        self._timeout = config.timeout_seconds
        self._preferred_size = config.poster_size
        self._client: httpx.Client | None = None
        self._image_config: ImageConfiguration | None = None

    def __enter__(self) -> TmdbClient:
        return self

    def __exit__(self, *exc_info: object) -> None:
        self.close()

    def _get_client(self) -> httpx.Client:
        """Get or create HTTP client."""
        if self._client is None:
            self._client = httpx.Client(
                base_url=self._base_url,
                timeout=self._timeout,
                headers=self._headers(),
            )
        return self._client

    def _headers(self) -> dict[str, str]:
        return {
            "Authorization": f"Bearer {self._token}",
            "accept": "application/json",
        }

    def close(self) -> None:
        """Close the HTTP client."""
        if self._client is not None:
            self._client.close()
            self._client = None

    def _get_json(
        self,
        source: ErrorSource,
        endpoint: str,
        params: dict[str, str] | None = None,
    ) -> dict[str, Any]:
        client = self._get_client()
        try:
            response = client.get(endpoint, params=params)
            if response.status_code == 401:
                raise TmdbAuthError(source, "Invalid TMDB API token")
            response.raise_for_status()
            data = response.json()
        except httpx.HTTPError as e:
            raise TmdbError(
                source, f"Network error during {source.value}: {e}"
            ) from e
        except ValueError as e:
            raise TmdbError(
                source, f"Invalid JSON response during {source.value}"
            ) from e

        if not isinstance(data, dict):
            raise TmdbError(source, f"Invalid JSON response during {source.value}")
        return data

    def get_configuration(self) -> ImageConfiguration:
        """Fetch the image configuration used to build poster URLs.

        Returns:
            ImageConfiguration with the secure base URL and chosen poster size.

        Raises:
            TmdbAuthError: If the API token is invalid.
            TmdbError: If the request fails or the response lacks image fields.
        """
        data = self._get_json(ErrorSource.CONFIGURATION, "/configuration")

        images = data.get("images")
        if not isinstance(images, dict):
            raise TmdbError(
                ErrorSource.CONFIGURATION,
                "Missing 'images' section in configuration response",
            )
        if "secure_base_url" not in images or "poster_sizes" not in images:
            raise TmdbError(
                ErrorSource.CONFIGURATION,
                "Missing required fields in configuration response",
            )

        sizes = tuple(str(s) for s in images["poster_sizes"])
        poster_size = self._preferred_size
        if poster_size not in sizes and sizes:
            poster_size = sizes[0]

        self._image_config = ImageConfiguration(
            secure_base_url=images["secure_base_url"],
            poster_size=poster_size,
            poster_sizes=sizes,
        )
        logger.debug(
            "TMDB image configuration loaded",
            extra={"poster_size": poster_size},
        )
        return self._image_config

    def search_movies(self, query: str) -> list[MovieResult]:
        """Search TMDB for movies matching query.

        Raises:
            TmdbError: If the query is empty or the request fails.
        """
        if not query.strip():
            raise TmdbError(ErrorSource.SEARCH, "Search query cannot be empty")

        data = self._get_json(ErrorSource.SEARCH, "/search/movie", {"query": query})
        if "results" not in data:
            raise TmdbError(
                ErrorSource.SEARCH, "Missing 'results' field in search response"
            )

        results = [
            MovieResult.from_json(item)
            for item in data["results"]
            if isinstance(item, dict) and "id" in item
        ]
        logger.info("TMDB search for %r returned %d results", query, len(results))
        return results

    def download_poster(self, poster_path: str) -> bytes:
        """Download a poster image.

        Args:
            poster_path: Poster path from a search result, e.g. "/abc.jpg".

        Returns:
            Raw image bytes as served by TMDB.

        Raises:
            TmdbError: If the path is empty, the download fails or returns
                no data.
        """
        if not poster_path:
            raise TmdbError(ErrorSource.POSTER_DOWNLOAD, "Poster path cannot be empty")

        image_config = self._image_config or self.get_configuration()
        url = image_config.poster_url(poster_path)

        client = self._get_client()
        try:
            response = client.get(url)
            if response.status_code == 401:
                raise TmdbAuthError(
                    ErrorSource.POSTER_DOWNLOAD, "Invalid TMDB API token"
                )
            response.raise_for_status()
        except httpx.HTTPError as e:
            raise TmdbError(
                ErrorSource.POSTER_DOWNLOAD,
                f"Network error during poster download: {e}",
            ) from e

        if not response.content:
            raise TmdbError(ErrorSource.POSTER_DOWNLOAD, "Received empty image data")

        logger.debug(
            "Downloaded poster",
            extra={"poster_path": poster_path, "size_bytes": len(response.content)},
        )
        return response.content
