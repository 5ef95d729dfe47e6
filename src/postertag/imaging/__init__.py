"""Cover image decoding and JPEG encoding."""

from postertag.imaging.encoder import (
    DEFAULT_JPEG_QUALITY,
    encode_jpeg,
    encode_to_temporary_file,
    load_cover_image,
    temporary_jpeg,
)

__all__ = [
    "DEFAULT_JPEG_QUALITY",
    "encode_jpeg",
    "encode_to_temporary_file",
    "load_cover_image",
    "temporary_jpeg",
]
