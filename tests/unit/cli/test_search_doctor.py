"""Tests for the search and doctor commands."""

import json
from pathlib import Path
from unittest.mock import MagicMock, patch

from click.testing import CliRunner

from postertag.cli import main
from postertag.cli.exit_codes import ExitCode
from postertag.config.models import AppConfig, TmdbConfig, ToolPathsConfig
from postertag.tmdb import MovieResult
from postertag.tools import ToolInfo, ToolStatus

TMDB_CONFIG = AppConfig(tmdb=TmdbConfig(api_token="token"))  # pragma: allowlist secret


class TestSearchCommand:
    """Tests for search_command."""

    @patch("postertag.cli.search.TmdbClient")
    def test_query_guessed_from_file(
        self, mock_client_class: MagicMock, runner: CliRunner
    ) -> None:
        client = mock_client_class.return_value.__enter__.return_value
        client.search_movies.return_value = [
            MovieResult(
                id=603,
                title="The Matrix",
                release_date="1999-03-30",
                poster_path="/m.jpg",
            )
        ]

        result = runner.invoke(
            main,
            ["search", "--file", "The.Matrix.1999.mkv", "--json"],
            obj={"config": TMDB_CONFIG},
        )

        assert result.exit_code == 0, result.output
        client.search_movies.assert_called_once_with("The Matrix")
        data = json.loads(result.output)
        assert data["results"][0] == {
            "id": 603,
            "title": "The Matrix",
            "year": 1999,
            "poster_path": "/m.jpg",
        }

    @patch("postertag.cli.search.TmdbClient")
    def test_text_output(self, mock_client_class: MagicMock, runner: CliRunner):
        client = mock_client_class.return_value.__enter__.return_value
        client.search_movies.return_value = []

        result = runner.invoke(main, ["search", "Nothing"], obj={"config": TMDB_CONFIG})

        assert result.exit_code == 0
        assert "No movies found for 'Nothing'" in result.output

    def test_requires_query_or_file(self, runner: CliRunner) -> None:
        result = runner.invoke(main, ["search"], obj={"config": TMDB_CONFIG})

        assert result.exit_code == 2

    def test_requires_token(self, runner: CliRunner) -> None:
        result = runner.invoke(main, ["search", "Alien"], obj={"config": AppConfig()})

        assert result.exit_code == ExitCode.CONFIG_ERROR


class TestDoctorCommand:
    """Tests for doctor_command."""

    @patch("postertag.cli.doctor.detect_mkvpropedit")
    def test_available(self, mock_detect: MagicMock, runner: CliRunner) -> None:
        mock_detect.return_value = ToolInfo(
            name="mkvpropedit",
            path=Path("/usr/bin/mkvpropedit"),
            version="81.0",
            status=ToolStatus.AVAILABLE,
        )
        config = AppConfig(tools=ToolPathsConfig(mkvpropedit=Path("/opt/mkvpropedit")))

        result = runner.invoke(main, ["doctor"], obj={"config": config})

        assert result.exit_code == 0
        assert "mkvpropedit: 81.0" in result.output
        mock_detect.assert_called_once_with(Path("/opt/mkvpropedit"))

    @patch("postertag.cli.doctor.detect_mkvpropedit")
    def test_missing_json(self, mock_detect: MagicMock, runner: CliRunner) -> None:
        mock_detect.return_value = ToolInfo(name="mkvpropedit")

        result = runner.invoke(main, ["doctor", "--json"], obj={"config": AppConfig()})

        assert result.exit_code == ExitCode.TOOL_NOT_AVAILABLE
        assert json.loads(result.output)["mkvpropedit"]["available"] is False


class TestMainGroup:
    """Tests for the top-level group."""

    def test_invalid_config_file(self, runner: CliRunner, tmp_path: Path) -> None:
        path = tmp_path / "config.toml"
        path.write_text("[tagging\n")

        result = runner.invoke(main, ["--config", str(path), "doctor"])

        assert result.exit_code == ExitCode.CONFIG_ERROR

    def test_version(self, runner: CliRunner) -> None:
        result = runner.invoke(main, ["--version"])

        assert result.exit_code == 0
        assert "0.1.0" in result.output
