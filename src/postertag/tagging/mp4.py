"""MP4 cover art writer using mutagen.

Cover art lives in the iTunes-style ``covr`` item of the MP4 metadata atom.
The item is replaced rather than appended to, so repeated writes never stack
multiple covers. Audio and video sample data is not touched.
"""

from __future__ import annotations

import logging
from pathlib import Path

from mutagen import MutagenError
from mutagen.mp4 import MP4, MP4Cover
from PIL import Image

from postertag.errors import InvalidContainerError, SaveError
from postertag.imaging.encoder import DEFAULT_JPEG_QUALITY, encode_jpeg
from postertag.tagging.events import ProgressCallback

logger = logging.getLogger(__name__)

COVER_ART_KEY = "covr"

SUCCESS_MESSAGE = "MP4 tags written successfully"


class Mp4CoverWriter:
    """Writes a JPEG cover into an MP4 file in place."""

    def __init__(self, quality: int = DEFAULT_JPEG_QUALITY) -> None:
        """Initialize the writer.

        Args:
            quality: JPEG quality used when encoding the cover.
        """
        self._quality = quality

    def write(
        self,
        path: Path,
        image: Image.Image,
        progress: ProgressCallback | None = None,
    ) -> str:
        """Replace the cover art of an MP4 file.

        Args:
            path: MP4 file to modify.
            image: Cover image to embed.
            progress: Optional callback receiving progress messages.

        Returns:
            Success message.

        Raises:
            InvalidContainerError: If the file cannot be parsed as MP4.
            EncodeError: If the image cannot be encoded. The file is untouched.
            SaveError: If the updated tags cannot be written.
        """
        try:
            mp4 = MP4(path)
        except MutagenError as e:
            logger.warning(
                "Cannot open file as MP4",
                extra={"file_path": str(path), "error": str(e)},
            )
            raise InvalidContainerError(f"Invalid MP4 file: {e}") from e

        data = encode_jpeg(image, quality=self._quality)

        if mp4.tags is None:
            mp4.add_tags()

        if COVER_ART_KEY in mp4.tags:
            logger.debug("Removing existing cover art", extra={"file_path": str(path)})
            del mp4.tags[COVER_ART_KEY]

        mp4.tags[COVER_ART_KEY] = [
            MP4Cover(data, imageformat=MP4Cover.FORMAT_JPEG),
        ]

        if progress is not None:
            progress("Saving MP4 tags...")

        try:
            mp4.save()
        except (MutagenError, OSError) as e:
            logger.error(
                "Failed to save MP4 tags",
                extra={"file_path": str(path), "error": str(e)},
            )
            raise SaveError(f"Failed to write MP4 tags: {e}") from e

        logger.info(
            "MP4 cover art written",
            extra={"file_path": str(path), "cover_bytes": len(data)},
        )
        return SUCCESS_MESSAGE
