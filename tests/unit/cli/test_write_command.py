"""Tests for the postertag write command."""

import json
from pathlib import Path
from unittest.mock import MagicMock, patch

import pytest
from click.testing import CliRunner
from mutagen.mp4 import MP4

from postertag.cli import main
from postertag.cli.exit_codes import ExitCode
from postertag.config.models import AppConfig, TaggingConfig, TmdbConfig
from postertag.tmdb import ErrorSource, TmdbError


@pytest.fixture
def image_file(temp_dir: Path, png_bytes: bytes) -> Path:
    path = temp_dir / "poster.png"
    path.write_bytes(png_bytes)
    return path


@pytest.fixture
def config(tmp_path: Path) -> AppConfig:
    scratch = tmp_path / "scratch"
    scratch.mkdir()
    return AppConfig(
        tagging=TaggingConfig(temp_directory=scratch),
        tmdb=TmdbConfig(api_token="token"),  # pragma: allowlist secret
    )


class TestWriteCommand:
    """Tests for write_command."""

    def test_writes_mp4_from_image(
        self, runner: CliRunner, config: AppConfig, mp4_file: Path, image_file: Path
    ) -> None:
        result = runner.invoke(
            main,
            ["write", str(mp4_file), "--image", str(image_file)],
            obj={"config": config},
        )

        assert result.exit_code == 0, result.output
        assert "Starting to write tags..." in result.output
        assert "Saving MP4 tags..." in result.output
        assert "MP4 tags written successfully" in result.output
        assert len(MP4(mp4_file).tags["covr"]) == 1

    @patch("postertag.tagging.mkv.run_command", return_value=("", "", 0))
    def test_writes_mkv_with_configured_tool(
        self,
        mock_run: MagicMock,
        runner: CliRunner,
        config: AppConfig,
        tmp_path: Path,
        mkv_file: Path,
        image_file: Path,
    ) -> None:
        tool = tmp_path / "mkvpropedit"
        tool.touch()

        result = runner.invoke(
            main,
            [
                "write",
                str(mkv_file),
                "--image",
                str(image_file),
                "--mkvpropedit",
                str(tool),
                "--json",
            ],
            obj={"config": config},
        )

        assert result.exit_code == 0, result.output
        data = json.loads(result.output)
        assert data["status"] == "completed"
        assert [e["kind"] for e in data["events"]] == ["progress", "progress", "success"]
        assert mock_run.call_args_list[0].args[0][0] == tool

    def test_unsupported_format(
        self, runner: CliRunner, config: AppConfig, temp_dir: Path, image_file: Path
    ) -> None:
        movie = temp_dir / "movie.avi"
        movie.write_bytes(b"RIFF")

        result = runner.invoke(
            main,
            ["write", str(movie), "--image", str(image_file)],
            obj={"config": config},
        )

        assert result.exit_code == ExitCode.UNSUPPORTED_FORMAT
        assert "Unsupported file format" in result.output

    @patch("postertag.tools.detection.shutil.which", return_value=None)
    def test_missing_tool(
        self,
        mock_which: MagicMock,
        runner: CliRunner,
        config: AppConfig,
        mkv_file: Path,
        image_file: Path,
    ) -> None:
        result = runner.invoke(
            main,
            ["write", str(mkv_file), "--image", str(image_file)],
            obj={"config": config},
        )

        assert result.exit_code == ExitCode.TOOL_NOT_AVAILABLE

    def test_movie_not_found(
        self, runner: CliRunner, config: AppConfig, tmp_path: Path, image_file: Path
    ) -> None:
        result = runner.invoke(
            main,
            ["write", str(tmp_path / "nope.mp4"), "--image", str(image_file)],
            obj={"config": config},
        )

        assert result.exit_code == ExitCode.TARGET_NOT_FOUND

    def test_requires_one_image_source(
        self, runner: CliRunner, config: AppConfig, mp4_file: Path
    ) -> None:
        result = runner.invoke(main, ["write", str(mp4_file)], obj={"config": config})

        assert result.exit_code == 2
        assert "exactly one of --image or --poster-path" in result.output

    @patch("postertag.cli.write.TmdbClient")
    def test_poster_path_downloads(
        self,
        mock_client_class: MagicMock,
        runner: CliRunner,
        config: AppConfig,
        mp4_file: Path,
        png_bytes: bytes,
    ) -> None:
        client = mock_client_class.return_value.__enter__.return_value
        client.download_poster.return_value = png_bytes

        result = runner.invoke(
            main,
            ["write", str(mp4_file), "--poster-path", "/matrix.jpg"],
            obj={"config": config},
        )

        assert result.exit_code == 0, result.output
        client.download_poster.assert_called_once_with("/matrix.jpg")

    @patch("postertag.cli.write.TmdbClient")
    def test_poster_download_failure(
        self,
        mock_client_class: MagicMock,
        runner: CliRunner,
        config: AppConfig,
        mp4_file: Path,
    ) -> None:
        client = mock_client_class.return_value.__enter__.return_value
        client.download_poster.side_effect = TmdbError(
            ErrorSource.POSTER_DOWNLOAD, "Received empty image data"
        )

        result = runner.invoke(
            main,
            ["write", str(mp4_file), "--poster-path", "/x.jpg"],
            obj={"config": config},
        )

        assert result.exit_code == ExitCode.PROVIDER_ERROR
        assert "Received empty image data" in result.output

    def test_poster_path_without_token(
        self, runner: CliRunner, mp4_file: Path
    ) -> None:
        result = runner.invoke(
            main,
            ["write", str(mp4_file), "--poster-path", "/x.jpg"],
            obj={"config": AppConfig()},
        )

        assert result.exit_code == ExitCode.CONFIG_ERROR
