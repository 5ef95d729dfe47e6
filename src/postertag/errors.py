"""Exception types for cover art writing.

Every failure of a tag-write operation is raised as a subclass of
TagWriteError. The orchestrator turns these into the terminal error event
reported to the caller; none of them are retried.
"""

from __future__ import annotations


class TagWriteError(Exception):
    """Base class for all tag-write failures."""


class UnsupportedFormatError(TagWriteError):
    """Raised when the file extension is neither mp4 nor mkv."""

    def __init__(self, message: str = "Unsupported file format") -> None:
        super().__init__(message)


class InvalidContainerError(TagWriteError):
    """Raised when a file cannot be parsed as the container its name claims.

    The file is left untouched.
    """


class EncodeError(TagWriteError):
    """Raised when the cover image cannot be serialized as JPEG."""


class TemporaryFileError(TagWriteError, OSError):
    """Raised when the temporary JPEG file cannot be created or written.

    No partial file is left behind.
    """


class SaveError(TagWriteError):
    """Raised when updated MP4 tags cannot be written back to disk."""


class ToolNotFoundError(TagWriteError):
    """Raised when the external attachment editor is not installed."""


class ExternalToolError(TagWriteError):
    """Raised when the external attachment editor fails.

    Attributes:
        step: Which invocation failed ("delete" or "add").
        returncode: Process exit status, or None if it never ran to completion.
        hard_error: True when the tool reported its documented hard-error
            status (exit code 2).
    """

    def __init__(
        self,
        message: str,
        *,
        step: str | None = None,
        returncode: int | None = None,
        hard_error: bool = False,
    ) -> None:
        super().__init__(message)
        self.step = step
        self.returncode = returncode
        self.hard_error = hard_error
