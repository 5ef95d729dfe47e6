"""Operation context for structured logging.

Uses contextvars to tag log records emitted while a single tag write is in
progress with an operation id and the path of the file being modified.
"""

from __future__ import annotations

import contextvars
import logging
import uuid
from contextlib import contextmanager
from pathlib import Path
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from collections.abc import Generator

_operation_id: contextvars.ContextVar[str | None] = contextvars.ContextVar(
    "operation_id", default=None
)
_file_path: contextvars.ContextVar[str | None] = contextvars.ContextVar(
    "file_path", default=None
)


def _new_operation_id() -> str:
    return uuid.uuid4().hex[:8]


@contextmanager
def operation_context(
    file_path: Path | str | None = None,
    operation_id: str | None = None,
) -> Generator[str, None, None]:
    """Context manager marking one tag-writing operation.

    Restores the previous context on exit, so operations may nest.

    Args:
        file_path: Path of the media file being modified.
        operation_id: Identifier to use. None generates a short random id.

    Yields:
        The operation id.

    Example:
        with operation_context("/movies/Alien.mkv"):
            logger.info("Writing cover")  # carries operation_id and file_path
    """
    op_id = operation_id or _new_operation_id()
    id_token = _operation_id.set(op_id)
    path_token = _file_path.set(str(file_path) if file_path is not None else None)
    try:
        yield op_id
    finally:
        _file_path.reset(path_token)
        _operation_id.reset(id_token)


def get_operation_context() -> tuple[str | None, str | None]:
    """Get current operation context.

    Returns:
        Tuple of (operation_id, file_path), either may be None.
    """
    return _operation_id.get(), _file_path.get()


class OperationContextFilter(logging.Filter):
    """Logging filter that injects operation context into log records.

    Adds operation_id and file_path attributes for JSON output and a compact
    op_tag such as ``[op:1a2b3c4d] `` for the text format.
    """

    def filter(self, record: logging.LogRecord) -> bool:
        operation_id, file_path = get_operation_context()

        record.operation_id = operation_id
        # An explicit extra={"file_path": ...} wins over the context value
        record.file_path = getattr(record, "file_path", None) or file_path

        record.op_tag = f"[op:{operation_id}] " if operation_id else ""
        return True
