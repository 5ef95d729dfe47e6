"""Unit tests for TMDB API client."""

from unittest.mock import MagicMock, patch

import httpx
import pytest

from postertag.config.models import TmdbConfig
from postertag.tmdb import (
    ErrorSource,
    MovieResult,
    TmdbAuthError,
    TmdbClient,
    TmdbError,
)

CONFIGURATION = {
    "images": {
        "secure_base_url": "https://image.tmdb.org/t/p/",
        "poster_sizes": ["w92", "w154", "w500", "original"],
    }
}


def _response(status_code: int = 200, json_data=None, content: bytes = b""):
    response = MagicMock()
    response.status_code = status_code
    response.json.return_value = json_data
    response.content = content
    if status_code >= 400:
        response.raise_for_status.side_effect = httpx.HTTPStatusError(
            f"HTTP {status_code}", request=MagicMock(), response=MagicMock()
        )
    return response


@pytest.fixture
def config() -> TmdbConfig:
    """Create a test TMDB config."""
    return TmdbConfig(api_token="test-token")  # pragma: allowlist secret


@pytest.fixture
def client(config: TmdbConfig) -> TmdbClient:
    return TmdbClient(config)


@pytest.fixture
def mock_http():
    with patch("postertag.tmdb.client.httpx.Client") as mock_client_class:
        mock_http_client = MagicMock()
        mock_client_class.return_value = mock_http_client
        yield mock_client_class, mock_http_client


class TestTmdbClientInit:
    """Tests for client construction."""

    def test_client_is_lazy(self, client: TmdbClient) -> None:
        assert client._client is None

    def test_creates_client_with_bearer_token(self, client: TmdbClient, mock_http):
        mock_client_class, _ = mock_http

        client._get_client()
        client._get_client()

        mock_client_class.assert_called_once_with(
            base_url="https://api.themoviedb.org/3",
            timeout=30.0,
            headers={
                "Authorization": "Bearer test-token",
                "accept": "application/json",
            },
        )

    def test_close(self, client: TmdbClient, mock_http) -> None:
        _, http_client = mock_http
        with client:
            client._get_client()

        http_client.close.assert_called_once()
        assert client._client is None


class TestGetConfiguration:
    """Tests for get_configuration method."""

    def test_prefers_w500(self, client: TmdbClient, mock_http) -> None:
        _, http_client = mock_http
        http_client.get.return_value = _response(json_data=CONFIGURATION)

        image_config = client.get_configuration()

        assert image_config.secure_base_url == "https://image.tmdb.org/t/p/"
        assert image_config.poster_size == "w500"
        http_client.get.assert_called_once_with("/configuration", params=None)

    def test_falls_back_to_first_size(self, client: TmdbClient, mock_http) -> None:
        _, http_client = mock_http
        http_client.get.return_value = _response(
            json_data={
                "images": {"secure_base_url": "https://x/", "poster_sizes": ["w342"]}
            }
        )

        assert client.get_configuration().poster_size == "w342"

    def test_missing_fields(self, client: TmdbClient, mock_http) -> None:
        _, http_client = mock_http
        http_client.get.return_value = _response(json_data={"images": {}})

        with pytest.raises(TmdbError) as exc_info:
            client.get_configuration()

        assert exc_info.value.source is ErrorSource.CONFIGURATION

    def test_unauthorized(self, client: TmdbClient, mock_http) -> None:
        _, http_client = mock_http
        http_client.get.return_value = _response(status_code=401)

        with pytest.raises(TmdbAuthError):
            client.get_configuration()

    def test_network_error(self, client: TmdbClient, mock_http) -> None:
        _, http_client = mock_http
        http_client.get.side_effect = httpx.ConnectError("refused")

        with pytest.raises(TmdbError, match="Network error during configuration"):
            client.get_configuration()


class TestSearchMovies:
    """Tests for search_movies method."""

    def test_empty_query(self, client: TmdbClient, mock_http) -> None:
        _, http_client = mock_http

        with pytest.raises(TmdbError, match="Search query cannot be empty") as exc:
            client.search_movies("   ")

        assert exc.value.source is ErrorSource.SEARCH
        http_client.get.assert_not_called()

    def test_parses_results(self, client: TmdbClient, mock_http) -> None:
        _, http_client = mock_http
        http_client.get.return_value = _response(
            json_data={
                "results": [
                    {
                        "id": 603,
                        "title": "The Matrix",
                        "release_date": "1999-03-30",
                        "overview": "A hacker...",
                        "poster_path": "/matrix.jpg",
                    },
                    {"id": 7, "title": "Untitled", "release_date": ""},
                ]
            }
        )

        results = client.search_movies("The Matrix")

        http_client.get.assert_called_once_with(
            "/search/movie", params={"query": "The Matrix"}
        )
        assert results[0] == MovieResult(
            id=603,
            title="The Matrix",
            release_date="1999-03-30",
            overview="A hacker...",
            poster_path="/matrix.jpg",
        )
        assert results[0].year == 1999
        assert results[0].has_poster
        assert results[1].year is None
        assert not results[1].has_poster
        assert results[1].display_title == "Untitled"

    def test_missing_results(self, client: TmdbClient, mock_http) -> None:
        _, http_client = mock_http
        http_client.get.return_value = _response(json_data={"page": 1})

        with pytest.raises(TmdbError, match="Missing 'results'"):
            client.search_movies("x")


class TestDownloadPoster:
    """Tests for download_poster method."""

    def test_fetches_configuration_then_poster(self, client: TmdbClient, mock_http):
        _, http_client = mock_http
        http_client.get.side_effect = [
            _response(json_data=CONFIGURATION),
            _response(content=b"\xff\xd8jpeg"),
        ]

        data = client.download_poster("/matrix.jpg")

        assert data == b"\xff\xd8jpeg"
        assert http_client.get.call_args_list[1].args == (
            "https://image.tmdb.org/t/p/w500/matrix.jpg",
        )

    def test_configuration_cached(self, client: TmdbClient, mock_http) -> None:
        _, http_client = mock_http
        http_client.get.side_effect = [
            _response(json_data=CONFIGURATION),
            _response(content=b"a"),
            _response(content=b"b"),
        ]

        client.download_poster("/a.jpg")
        client.download_poster("/b.jpg")

        assert http_client.get.call_count == 3

    def test_empty_body(self, client: TmdbClient, mock_http) -> None:
        _, http_client = mock_http
        http_client.get.side_effect = [
            _response(json_data=CONFIGURATION),
            _response(content=b""),
        ]

        with pytest.raises(TmdbError, match="Received empty image data") as exc:
            client.download_poster("/x.jpg")

        assert exc.value.source is ErrorSource.POSTER_DOWNLOAD

    def test_empty_path(self, client: TmdbClient, mock_http) -> None:
        with pytest.raises(TmdbError, match="Poster path cannot be empty"):
            client.download_poster("")
