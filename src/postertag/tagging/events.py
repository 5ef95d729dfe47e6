"""Outcome protocol for tag-write operations.

A write operation produces zero or more PROGRESS events followed by exactly
one terminal SUCCESS or ERROR event. Events are delivered to an optional
listener as they happen and are also collected into the returned WriteResult.
"""

from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass, field
from enum import Enum

from postertag.errors import TagWriteError


class EventKind(Enum):
    """Kind of event emitted during a write operation."""

    PROGRESS = "progress"
    SUCCESS = "success"
    ERROR = "error"

    @property
    def is_terminal(self) -> bool:
        """True for SUCCESS and ERROR."""
        return self is not EventKind.PROGRESS


@dataclass(frozen=True)
class WriteEvent:
    """A single progress or terminal notification."""

    kind: EventKind
    message: str

    @classmethod
    def progress(cls, message: str) -> WriteEvent:
        return cls(EventKind.PROGRESS, message)

    @classmethod
    def success(cls, message: str) -> WriteEvent:
        return cls(EventKind.SUCCESS, message)

    @classmethod
    def error(cls, message: str) -> WriteEvent:
        return cls(EventKind.ERROR, message)


EventListener = Callable[[WriteEvent], None]
ProgressCallback = Callable[[str], None]


@dataclass(frozen=True)
class WriteResult:
    """Result of one write_tags_to_file call.

    This is a frozen dataclass; events are stored as a tuple in emission order.
    """

    success: bool
    """True if cover art was written."""

    message: str
    """Message of the terminal event."""

    events: tuple[WriteEvent, ...] = field(default_factory=tuple)
    """Every event emitted, terminal event last."""

    error: TagWriteError | None = None
    """The failure that ended the operation, if it failed with a known error."""

    @property
    def terminal_event(self) -> WriteEvent:
        """The final SUCCESS or ERROR event."""
        return self.events[-1]

    @property
    def progress_messages(self) -> list[str]:
        """Messages of all PROGRESS events."""
        return [e.message for e in self.events if e.kind is EventKind.PROGRESS]
