"""Container format detection.

Maps a media file path to the container format handler that can write
cover art into it. Detection is purely extension based and performs no I/O.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from pathlib import Path


class ContainerFormat(Enum):
    """Container formats that cover art can be written into."""

    MP4 = "mp4"
    MKV = "mkv"
    UNSUPPORTED = "unsupported"


_EXTENSION_FORMATS: dict[str, ContainerFormat] = {
    "mp4": ContainerFormat.MP4,
    "mkv": ContainerFormat.MKV,
}


def detect_container_format(path: str | Path) -> ContainerFormat:
    """Detect the container format of a media file from its extension.

    The suffix is compared case-insensitively. Unknown or missing extensions
    map to ContainerFormat.UNSUPPORTED rather than raising.

    Args:
        path: Path to the media file. The file does not need to exist.

    Returns:
        The detected ContainerFormat.
    """
    suffix = Path(path).suffix.lstrip(".").casefold()
    return _EXTENSION_FORMATS.get(suffix, ContainerFormat.UNSUPPORTED)


@dataclass(frozen=True)
class MediaFile:
    """A caller-supplied media file targeted by a tag-write operation."""

    path: Path

    @property
    def format(self) -> ContainerFormat:
        """Container format derived from the file extension."""
        return detect_container_format(self.path)

    @property
    def is_supported(self) -> bool:
        """True if cover art can be written into this file."""
        return self.format is not ContainerFormat.UNSUPPORTED
