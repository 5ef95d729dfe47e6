"""Tag writer orchestrator.

TagWriter is the single entry point for writing cover art. It detects the
container format, dispatches to the matching handler, and reports the
outcome as a sequence of progress events followed by exactly one terminal
success or error event.
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import TYPE_CHECKING, Protocol

from PIL import Image

from postertag.core.formats import ContainerFormat, detect_container_format
from postertag.errors import TagWriteError, UnsupportedFormatError
from postertag.logging.context import operation_context
from postertag.tagging.events import EventListener, WriteEvent, WriteResult
from postertag.tagging.mkv import MkvAttachmentWriter
from postertag.tagging.mp4 import Mp4CoverWriter

if TYPE_CHECKING:
    from postertag.config.models import AppConfig
    from postertag.tagging.events import ProgressCallback

logger = logging.getLogger(__name__)

START_MESSAGE = "Starting to write tags..."


class CoverWriter(Protocol):
    """A format-specific cover art handler."""

    def write(
        self,
        path: Path,
        image: Image.Image,
        progress: ProgressCallback | None = None,
    ) -> str:
        """Write the cover and return a success message, or raise TagWriteError."""
        ...


class _EventLog:
    """Collects events in order and forwards them to a listener."""

    def __init__(self, listener: EventListener | None) -> None:
        self._listener = listener
        self.events: list[WriteEvent] = []

    def emit(self, event: WriteEvent) -> None:
        self.events.append(event)
        if self._listener is not None:
            self._listener(event)

    def progress(self, message: str) -> None:
        self.emit(WriteEvent.progress(message))


class TagWriter:
    """Writes cover art into MP4 and MKV files.

    Holds no per-call state, so one instance can serve any number of files.
    """

    def __init__(
        self,
        mp4_writer: CoverWriter | None = None,
        mkv_writer: CoverWriter | None = None,
    ) -> None:
        """Initialize the writer.

        Args:
            mp4_writer: Handler for MP4 files. None uses Mp4CoverWriter().
            mkv_writer: Handler for MKV files. None uses MkvAttachmentWriter().
        """
        self._handlers: dict[ContainerFormat, CoverWriter] = {
            ContainerFormat.MP4: mp4_writer or Mp4CoverWriter(),
            ContainerFormat.MKV: mkv_writer or MkvAttachmentWriter(),
        }

    @classmethod
    def from_config(
        cls,
        config: AppConfig,
        *,
        mkv_backup: bool | None = None,
    ) -> TagWriter:
        """Build a TagWriter from application configuration.

        Args:
            config: Application configuration.
            mkv_backup: Override for config.tagging.mkv_backup.
        """
        tagging = config.tagging
        return cls(
            mp4_writer=Mp4CoverWriter(quality=tagging.jpeg_quality),
            mkv_writer=MkvAttachmentWriter(
                tool_path=config.tools.mkvpropedit,
                temp_directory=tagging.temp_directory,
                quality=tagging.jpeg_quality,
                timeout=tagging.tool_timeout,
                backup=tagging.mkv_backup if mkv_backup is None else mkv_backup,
                warnings_as_errors=tagging.tool_warnings_as_errors,
            ),
        )

    def write_tags_to_file(
        self,
        file_path: str | Path,
        image: Image.Image,
        on_event: EventListener | None = None,
    ) -> WriteResult:
        """Write cover art into a media file.

        Args:
            file_path: MP4 or MKV file to modify in place.
            image: Cover image. Not modified.
            on_event: Optional listener called with each event as it happens.

        Returns:
            WriteResult holding every emitted event, terminal event last.
        """
        path = Path(file_path)
        log = _EventLog(on_event)

        with operation_context(path):
            log.progress(START_MESSAGE)
            container = detect_container_format(path)
            logger.info(
                "Writing cover art",
                extra={"file_path": str(path), "container": container.value},
            )

            try:
                handler = self._handlers.get(container)
                if handler is None:
                    raise UnsupportedFormatError()
                message = handler.write(path, image, progress=log.progress)
            except TagWriteError as e:
                logger.warning(
                    "Cover art write failed: %s",
                    e,
                    extra={"file_path": str(path), "error_type": type(e).__name__},
                )
                log.emit(WriteEvent.error(str(e)))
                return WriteResult(
                    success=False,
                    message=str(e),
                    events=tuple(log.events),
                    error=e,
                )
            except Exception as e:
                logger.exception(
                    "Unexpected error writing cover art to %s",
                    path,
                    extra={"file_path": str(path)},
                )
                message = f"Unexpected error writing tags: {e}"
                log.emit(WriteEvent.error(message))
                return WriteResult(
                    success=False, message=message, events=tuple(log.events)
                )

            log.emit(WriteEvent.success(message))
            return WriteResult(success=True, message=message, events=tuple(log.events))


def write_cover_art(
    file_path: str | Path,
    image: Image.Image,
    on_event: EventListener | None = None,
    config: AppConfig | None = None,
) -> WriteResult:
    """Write cover art using a TagWriter built from configuration.

    Args:
        file_path: MP4 or MKV file to modify in place.
        image: Cover image.
        on_event: Optional event listener.
        config: Configuration to use. None loads it with get_config().
    """
    if config is None:
        from postertag.config import get_config

        config = get_config()
    return TagWriter.from_config(config).write_tags_to_file(
        file_path, image, on_event=on_event
    )
