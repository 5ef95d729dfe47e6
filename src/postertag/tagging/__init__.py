"""Cover art writing for MP4 and MKV containers.

- writer: TagWriter orchestrator and the write_cover_art helper
- mp4: MP4 cover item replacement via mutagen
- mkv: MKV cover attachment replacement via mkvpropedit
- events: progress/success/error outcome protocol
- backup: optional rollback copies for in-place MKV edits
"""

from postertag.errors import (
    EncodeError,
    ExternalToolError,
    InvalidContainerError,
    SaveError,
    TagWriteError,
    TemporaryFileError,
    ToolNotFoundError,
    UnsupportedFormatError,
)
from postertag.tagging.events import EventKind, WriteEvent, WriteResult
from postertag.tagging.mkv import (
    AttachmentEditor,
    MkvAttachmentWriter,
    MkvpropeditEditor,
)
from postertag.tagging.mp4 import Mp4CoverWriter
from postertag.tagging.writer import TagWriter, write_cover_art

__all__ = [
    # Orchestrator
    "TagWriter",
    "write_cover_art",
    # Handlers
    "Mp4CoverWriter",
    "MkvAttachmentWriter",
    "AttachmentEditor",
    "MkvpropeditEditor",
    # Events
    "EventKind",
    "WriteEvent",
    "WriteResult",
    # Errors
    "TagWriteError",
    "UnsupportedFormatError",
    "InvalidContainerError",
    "EncodeError",
    "TemporaryFileError",
    "SaveError",
    "ToolNotFoundError",
    "ExternalToolError",
]
