"""MKV cover attachment writer using mkvpropedit.

Matroska files carry cover art as a file attachment rather than a tag. The
writer shells out to mkvpropedit twice: once to delete every existing JPEG
attachment and once to add the new cover as ``cover.jpg``. Both invocations
edit the file in place without remuxing.
"""

from __future__ import annotations

import logging
import subprocess  # nosec B404 - only used for the TimeoutExpired type
import time
from pathlib import Path
from typing import Protocol

from PIL import Image

from postertag.core.subprocess_utils import run_command
from postertag.errors import (
    ExternalToolError,
    TagWriteError,
    TemporaryFileError,
    ToolNotFoundError,
)
from postertag.imaging.encoder import DEFAULT_JPEG_QUALITY, temporary_jpeg
from postertag.tagging.backup import (
    cleanup_backup,
    create_backup,
    safe_restore_from_backup,
)
from postertag.tagging.events import ProgressCallback
from postertag.tools.detection import MKVPROPEDIT, find_tool

logger = logging.getLogger(__name__)

COVER_ATTACHMENT_NAME = "cover.jpg"
COVER_MIME_TYPE = "image/jpeg"

SUCCESS_MESSAGE = "MKV tags written successfully"

# mkvpropedit exit statuses
EXIT_OK = 0
EXIT_WARNINGS = 1
EXIT_ERROR = 2


class AttachmentEditor(Protocol):
    """Capability for editing attachments of a Matroska file in place.

    Implementations raise ExternalToolError when an edit fails.
    """

    def delete_attachments_by_mime(self, media_path: Path, mime_type: str) -> None:
        """Delete every attachment whose MIME type equals mime_type."""
        ...

    def add_attachment(
        self,
        media_path: Path,
        attachment_path: Path,
        name: str,
        mime_type: str,
    ) -> None:
        """Add attachment_path to the file under the given name and MIME type."""
        ...


class MkvpropeditEditor:
    """AttachmentEditor backed by the mkvpropedit executable."""

    def __init__(
        self,
        tool_path: Path,
        timeout: float | None = None,
        warnings_as_errors: bool = False,
    ) -> None:
        """Initialize the editor.

        Args:
            tool_path: Path to the mkvpropedit executable.
            timeout: Per-invocation timeout in seconds. None waits indefinitely.
            warnings_as_errors: Treat exit status 1 (warnings) as a failure.
        """
        self.tool_path = tool_path
        self._timeout = timeout
        self._warnings_as_errors = warnings_as_errors

    def delete_attachments_by_mime(self, media_path: Path, mime_type: str) -> None:
        self._run(
            "delete",
            [media_path, "--delete-attachment", f"mime-type:{mime_type}"],
            media_path,
        )

    def add_attachment(
        self,
        media_path: Path,
        attachment_path: Path,
        name: str,
        mime_type: str,
    ) -> None:
        self._run(
            "add",
            [
                media_path,
                "--attachment-name",
                name,
                "--attachment-mime-type",
                mime_type,
                "--add-attachment",
                attachment_path,
            ],
            media_path,
        )

    def _run(self, step: str, args: list[str | Path], media_path: Path) -> None:
        """Run one mkvpropedit invocation and classify its exit status."""
        cmd: list[str | Path] = [self.tool_path, *args]
        start_time = time.monotonic()

        try:
            stdout, stderr, returncode = run_command(cmd, timeout=self._timeout)
        except subprocess.TimeoutExpired as e:
            raise ExternalToolError(
                f"mkvpropedit timed out after {self._timeout}s "
                f"({_describe_step(step)})",
                step=step,
            ) from e
        except OSError as e:
            raise ExternalToolError(
                f"Failed to execute mkvpropedit ({_describe_step(step)}): {e}",
                step=step,
            ) from e

        elapsed = round(time.monotonic() - start_time, 3)
        output = (stdout or stderr).strip()

        if returncode == EXIT_OK:
            logger.debug(
                "mkvpropedit %s step completed",
                step,
                extra={"file_path": str(media_path), "elapsed_seconds": elapsed},
            )
            return

        if returncode == EXIT_WARNINGS and not self._warnings_as_errors:
            logger.warning(
                "mkvpropedit reported warnings during %s step: %s",
                step,
                output,
                extra={"file_path": str(media_path), "returncode": returncode},
            )
            return

        hard_error = returncode == EXIT_ERROR
        logger.error(
            "mkvpropedit returned non-zero exit code",
            extra={
                "file_path": str(media_path),
                "step": step,
                "returncode": returncode,
                "elapsed_seconds": elapsed,
            },
        )
        message = (
            f"Failed to write MKV tags: mkvpropedit exited with code {returncode} "
            f"while {_describe_step(step)}"
        )
        if output:
            message = f"{message}: {output}"
        raise ExternalToolError(
            message, step=step, returncode=returncode, hard_error=hard_error
        )


def _describe_step(step: str) -> str:
    return {
        "delete": "deleting attachments",
        "add": "adding attachment",
    }.get(step, step)


class MkvAttachmentWriter:
    """Writes a JPEG cover attachment into an MKV file in place."""

    def __init__(
        self,
        editor: AttachmentEditor | None = None,
        tool_path: Path | None = None,
        temp_directory: Path | None = None,
        quality: int = DEFAULT_JPEG_QUALITY,
        timeout: float | None = None,
        backup: bool = False,
        warnings_as_errors: bool = False,
    ) -> None:
        """Initialize the writer.

        Args:
            editor: Attachment editor to use. None resolves mkvpropedit from
                tool_path or PATH on each write.
            tool_path: Configured mkvpropedit path (ignored if editor is given).
            temp_directory: Directory for the temporary JPEG. None uses the
                system temp dir.
            quality: JPEG quality used when encoding the cover.
            timeout: Per-invocation timeout for mkvpropedit. None waits
                indefinitely.
            backup: Copy the file before editing and restore it if an edit
                fails.
            warnings_as_errors: Treat mkvpropedit warnings as failures.
        """
        self._editor = editor
        self._tool_path = tool_path
        self._temp_directory = temp_directory
        self._quality = quality
        self._timeout = timeout
        self._backup = backup
        self._warnings_as_errors = warnings_as_errors

    def resolve_editor(self) -> AttachmentEditor:
        """Return the attachment editor, locating mkvpropedit if needed.

        Raises:
            ToolNotFoundError: If mkvpropedit cannot be found.
        """
        if self._editor is not None:
            return self._editor

        path = find_tool(MKVPROPEDIT, self._tool_path)
        if path is None:
            raise ToolNotFoundError("mkvpropedit program not found. Please install it.")
        return MkvpropeditEditor(
            path,
            timeout=self._timeout,
            warnings_as_errors=self._warnings_as_errors,
        )

    def write(
        self,
        path: Path,
        image: Image.Image,
        progress: ProgressCallback | None = None,
    ) -> str:
        """Replace the cover attachment of an MKV file.

        When the add step fails after the delete step succeeded, the file is
        left without a cover unless backups are enabled.

        Args:
            path: MKV file to modify.
            image: Cover image to attach.
            progress: Optional callback receiving progress messages.

        Returns:
            Success message.

        Raises:
            ToolNotFoundError: If mkvpropedit is not installed.
            EncodeError: If the image cannot be encoded.
            TemporaryFileError: If the temporary JPEG cannot be written.
            ExternalToolError: If either mkvpropedit invocation fails.
        """
        editor = self.resolve_editor()

        with temporary_jpeg(
            image, directory=self._temp_directory, quality=self._quality
        ) as jpeg_path:
            if progress is not None:
                progress("Saving MKV tags...")

            backup_path = self._create_backup(path) if self._backup else None
            try:
                editor.delete_attachments_by_mime(path, COVER_MIME_TYPE)
                editor.add_attachment(
                    path,
                    jpeg_path,
                    name=COVER_ATTACHMENT_NAME,
                    mime_type=COVER_MIME_TYPE,
                )
            except TagWriteError:
                if backup_path is not None:
                    safe_restore_from_backup(backup_path, path)
                raise
            finally:
                if backup_path is not None:
                    cleanup_backup(backup_path)

        logger.info("MKV cover attachment written", extra={"file_path": str(path)})
        return SUCCESS_MESSAGE

    @staticmethod
    def _create_backup(path: Path) -> Path:
        try:
            return create_backup(path)
        except OSError as e:
            raise TemporaryFileError(f"Failed to back up {path.name}: {e}") from e
