"""Shared test fixtures for postertag."""

import struct
from pathlib import Path

import pytest
from click.testing import CliRunner
from PIL import Image


def _atom(name: bytes, payload: bytes) -> bytes:
    return struct.pack(">I", 8 + len(payload)) + name + payload


def build_minimal_mp4(mdat_payload: bytes = b"\x00" * 64) -> bytes:
    """Build the smallest MP4 layout mutagen can open and tag.

    ftyp + moov(mvhd) + mdat, no tracks and no metadata atoms.
    """
    ftyp = _atom(b"ftyp", b"isom" + struct.pack(">I", 512) + b"isomiso2mp41")

    identity_matrix = struct.pack(
        ">9I", 0x00010000, 0, 0, 0, 0x00010000, 0, 0, 0, 0x40000000
    )
    mvhd_body = (
        b"\x00\x00\x00\x00"  # version 0, flags
        + struct.pack(">IIII", 0, 0, 1000, 0)  # ctime, mtime, timescale, duration
        + struct.pack(">I", 0x00010000)  # rate 1.0
        + struct.pack(">H", 0x0100)  # volume 1.0
        + b"\x00" * 10  # reserved
        + identity_matrix
        + b"\x00" * 24  # pre_defined
        + struct.pack(">I", 2)  # next_track_ID
    )
    moov = _atom(b"moov", _atom(b"mvhd", mvhd_body))
    mdat = _atom(b"mdat", mdat_payload)
    return ftyp + moov + mdat


@pytest.fixture
def temp_dir(tmp_path: Path) -> Path:
    """A fresh directory for media files."""
    media_dir = tmp_path / "media"
    media_dir.mkdir()
    return media_dir


@pytest.fixture
def mp4_file(temp_dir: Path) -> Path:
    """A minimal, untagged MP4 file."""
    path = temp_dir / "movie.mp4"
    path.write_bytes(build_minimal_mp4())
    return path


@pytest.fixture
def mkv_file(temp_dir: Path) -> Path:
    """A placeholder MKV file (mkvpropedit is always mocked)."""
    path = temp_dir / "movie.mkv"
    path.write_bytes(b"\x1a\x45\xdf\xa3" + b"\x00" * 60)
    return path


@pytest.fixture
def cover_image() -> Image.Image:
    """A small RGB cover image."""
    return Image.new("RGB", (16, 24), color=(200, 40, 40))


@pytest.fixture
def png_bytes(cover_image: Image.Image) -> bytes:
    """The cover image encoded as PNG."""
    import io

    buffer = io.BytesIO()
    cover_image.save(buffer, format="PNG")
    return buffer.getvalue()


@pytest.fixture
def runner() -> CliRunner:
    """Click CLI test runner."""
    return CliRunner()
