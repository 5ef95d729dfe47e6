"""JPEG encoding for cover images.

Cover images are Pillow images owned by the caller. Encoding never mutates
them: mode conversion works on a copy. The MP4 writer embeds the encoded
bytes directly, while the MKV writer needs them on disk because mkvpropedit
only accepts a file path, so a temporary-file variant is provided as well.
"""

from __future__ import annotations

import io
import logging
import os
import tempfile
from collections.abc import Iterator
from contextlib import contextmanager
from pathlib import Path

from PIL import Image, UnidentifiedImageError

from postertag.errors import EncodeError, TemporaryFileError

logger = logging.getLogger(__name__)

DEFAULT_JPEG_QUALITY = 90

TEMP_FILE_PREFIX = "postertag-"
TEMP_FILE_SUFFIX = ".jpg"

# Modes carrying alpha or a palette are flattened to RGB before encoding.
_CONVERT_TO_RGB_MODES = frozenset({"RGBA", "LA", "P", "PA"})


def load_cover_image(data: bytes) -> Image.Image:
    """Decode poster bytes into a Pillow image.

    Args:
        data: Encoded image bytes (JPEG, PNG, WebP, ...).

    Returns:
        The decoded image, fully loaded into memory.

    Raises:
        EncodeError: If the data is empty or cannot be decoded.
    """
    if not data:
        raise EncodeError("Cover image data is empty")
    try:
        image = Image.open(io.BytesIO(data))
        image.load()
    except (UnidentifiedImageError, OSError) as e:
        raise EncodeError(f"Failed to decode cover image: {e}") from e
    return image


def encode_jpeg(image: Image.Image, quality: int = DEFAULT_JPEG_QUALITY) -> bytes:
    """Encode an image as JPEG bytes.

    Args:
        image: Image to encode.
        quality: JPEG quality (1-95).

    Returns:
        The JPEG byte stream.

    Raises:
        EncodeError: If the image has a zero dimension or a pixel mode that
            JPEG cannot store.
    """
    width, height = image.size
    if width <= 0 or height <= 0:
        raise EncodeError(
            f"Failed to encode cover image as JPEG: invalid size {width}x{height}"
        )

    if image.mode in _CONVERT_TO_RGB_MODES:
        image = image.convert("RGB")

    buffer = io.BytesIO()
    try:
        image.save(buffer, format="JPEG", quality=quality)
    except (OSError, ValueError) as e:
        raise EncodeError(f"Failed to encode cover image as JPEG: {e}") from e

    data = buffer.getvalue()
    logger.debug(
        "Encoded cover image",
        extra={"width": width, "height": height, "jpeg_bytes": len(data)},
    )
    return data


def encode_to_temporary_file(
    image: Image.Image,
    directory: Path | None = None,
    quality: int = DEFAULT_JPEG_QUALITY,
) -> Path:
    """Encode an image as JPEG into a new, uniquely named temporary file.

    The image is encoded before the file is created, so an EncodeError never
    leaves a file behind. The caller owns the returned file and must delete it.

    Args:
        image: Image to encode.
        directory: Directory for the file. None uses the system temp dir.
        quality: JPEG quality (1-95).

    Returns:
        Path to the temporary JPEG file.

    Raises:
        EncodeError: If the image cannot be encoded.
        TemporaryFileError: If the file cannot be created or written.
    """
    data = encode_jpeg(image, quality=quality)

    try:
        fd, name = tempfile.mkstemp(
            prefix=TEMP_FILE_PREFIX,
            suffix=TEMP_FILE_SUFFIX,
            dir=str(directory) if directory is not None else None,
        )
    except OSError as e:
        raise TemporaryFileError(f"Failed to create temporary image file: {e}") from e

    path = Path(name)
    try:
        with os.fdopen(fd, "wb") as f:
            f.write(data)
    except OSError as e:
        path.unlink(missing_ok=True)
        raise TemporaryFileError(
            f"Failed to save image to temporary file in JPEG format: {e}"
        ) from e

    logger.debug("Wrote temporary cover image", extra={"temp_path": str(path)})
    return path


@contextmanager
def temporary_jpeg(
    image: Image.Image,
    directory: Path | None = None,
    quality: int = DEFAULT_JPEG_QUALITY,
) -> Iterator[Path]:
    """Context manager yielding a temporary JPEG file for an image.

    The file is deleted on exit, including when the body raises.

    Example:
        with temporary_jpeg(cover) as jpeg_path:
            editor.add_attachment(movie, jpeg_path)
    """
    path = encode_to_temporary_file(image, directory=directory, quality=quality)
    try:
        yield path
    finally:
        path.unlink(missing_ok=True)
        logger.debug("Removed temporary cover image", extra={"temp_path": str(path)})
