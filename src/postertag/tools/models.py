"""Data models for external tool information."""

from dataclasses import dataclass
from datetime import datetime
from enum import Enum
from pathlib import Path


class ToolStatus(Enum):
    """Status of an external tool."""

    AVAILABLE = "available"  # Tool found and version detected
    MISSING = "missing"  # Tool not found in PATH or configured location
    ERROR = "error"  # Tool found but version detection failed


@dataclass
class ToolInfo:
    """Detected information for an external tool."""

    name: str
    path: Path | None = None
    version: str | None = None
    version_tuple: tuple[int, ...] | None = None  # Parsed version for comparison
    status: ToolStatus = ToolStatus.MISSING
    status_message: str | None = None
    detected_at: datetime | None = None

    def is_available(self) -> bool:
        """Return True if the tool is available and usable."""
        return self.status == ToolStatus.AVAILABLE

    def summary(self) -> dict[str, str | bool]:
        """Summary of the tool for display or JSON output."""
        return {
            "available": self.is_available(),
            "status": self.status.value,
            "version": self.version or "not found",
            "path": str(self.path) if self.path else "not found",
        }
