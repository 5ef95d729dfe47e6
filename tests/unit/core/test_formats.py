"""Tests for container format detection."""

from pathlib import Path

import pytest

from postertag.core.formats import ContainerFormat, MediaFile, detect_container_format


class TestDetectContainerFormat:
    """Tests for detect_container_format function."""

    @pytest.mark.parametrize(
        "path",
        ["movie.mp4", "MOVIE.MP4", "Movie.Mp4", "/films/Alien (1979).mP4"],
    )
    def test_mp4_any_case(self, path: str) -> None:
        """Extension comparison ignores case."""
        assert detect_container_format(path) is ContainerFormat.MP4

    @pytest.mark.parametrize("path", ["movie.mkv", "MOVIE.MKV", "a.b.c.MkV"])
    def test_mkv_any_case(self, path: str) -> None:
        assert detect_container_format(path) is ContainerFormat.MKV

    @pytest.mark.parametrize(
        "path",
        ["movie.avi", "movie.mp4.part", "movie", "", ".mkv", "movie.m4v"],
    )
    def test_unsupported(self, path: str) -> None:
        """Unknown, missing and hidden-file suffixes are unsupported."""
        assert detect_container_format(path) is ContainerFormat.UNSUPPORTED

    def test_accepts_path_objects(self) -> None:
        assert detect_container_format(Path("/x/y.mkv")) is ContainerFormat.MKV

    def test_does_not_touch_filesystem(self, tmp_path: Path) -> None:
        """Detection works for files that do not exist."""
        missing = tmp_path / "nope" / "missing.mp4"
        assert detect_container_format(missing) is ContainerFormat.MP4


class TestMediaFile:
    """Tests for MediaFile dataclass."""

    def test_format_is_derived(self) -> None:
        assert MediaFile(Path("a.MKV")).format is ContainerFormat.MKV

    def test_is_supported(self) -> None:
        assert MediaFile(Path("a.mp4")).is_supported
        assert not MediaFile(Path("a.avi")).is_supported
