"""Core utilities package.

Pure helpers shared across the codebase: container format detection and the
standard subprocess wrapper used for external tool invocation.
"""

from postertag.core.formats import (
    ContainerFormat,
    MediaFile,
    detect_container_format,
)
from postertag.core.subprocess_utils import run_command

__all__ = [
    "ContainerFormat",
    "MediaFile",
    "detect_container_format",
    "run_command",
]
