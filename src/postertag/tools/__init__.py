"""External tool detection.

This module locates the external attachment editor (mkvpropedit) and
reports its version and availability.
"""

from postertag.tools.detection import (
    MKVPROPEDIT,
    detect_mkvpropedit,
    find_tool,
    parse_version_string,
)
from postertag.tools.models import ToolInfo, ToolStatus

__all__ = [
    "MKVPROPEDIT",
    "ToolInfo",
    "ToolStatus",
    "detect_mkvpropedit",
    "find_tool",
    "parse_version_string",
]
