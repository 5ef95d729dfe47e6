"""External tool lookup and version detection."""

import logging
import re
import shutil
import subprocess  # nosec B404 - subprocess is required for tool detection
from datetime import datetime, timezone
from pathlib import Path

from postertag.core.subprocess_utils import run_command
from postertag.tools.models import ToolInfo, ToolStatus

logger = logging.getLogger(__name__)

MKVPROPEDIT = "mkvpropedit"

# Timeout for version detection commands (seconds)
DETECTION_TIMEOUT = 10

_MKVPROPEDIT_VERSION_PATTERN = r"mkvpropedit v(\S+)"


def parse_version_string(version_str: str) -> tuple[int, ...] | None:
    """Parse a version string into a comparable tuple.

    Handles formats such as:
    - "81.0" -> (81, 0)
    - "v70.0.0" -> (70, 0, 0)

    Args:
        version_str: Version string to parse.

    Returns:
        Tuple of version components, or None if parsing fails.
    """
    if not version_str:
        return None

    version_str = version_str.lstrip("nv")

    match = re.match(r"(\d+(?:\.\d+)*)", version_str)
    if not match:
        return None

    return tuple(int(p) for p in match.group(1).split("."))


def find_tool(name: str, configured_path: Path | None = None) -> Path | None:
    """Find a tool executable.

    A configured path takes precedence; otherwise PATH is searched.

    Args:
        name: Tool name (e.g., "mkvpropedit").
        configured_path: Optional configured path override.

    Returns:
        Path to tool executable, or None if not found.
    """
    if configured_path:
        if configured_path.is_file():
            return configured_path
        logger.warning(
            "Configured path for %s is not a file: %s", name, configured_path
        )

    which_result = shutil.which(name)
    if which_result:
        return Path(which_result)

    return None


def detect_mkvpropedit(configured_path: Path | None = None) -> ToolInfo:
    """Detect mkvpropedit and its version.

    Args:
        configured_path: Optional configured path to mkvpropedit.

    Returns:
        ToolInfo with detection results.
    """
    info = ToolInfo(name=MKVPROPEDIT, detected_at=datetime.now(timezone.utc))

    path = find_tool(MKVPROPEDIT, configured_path)
    if not path:
        info.status_message = f"{MKVPROPEDIT} not found in PATH"
        return info

    info.path = path

    try:
        stdout, stderr, rc = run_command(
            [path, "--version"], timeout=DETECTION_TIMEOUT
        )
    except subprocess.TimeoutExpired:
        info.status = ToolStatus.ERROR
        info.status_message = f"{MKVPROPEDIT} --version timed out"
        return info
    except OSError as e:
        info.status = ToolStatus.ERROR
        info.status_message = f"Failed to run {MKVPROPEDIT}: {e}"
        return info

    if rc != 0:
        info.status = ToolStatus.ERROR
        info.status_message = f"Failed to get {MKVPROPEDIT} version: {stderr}"
        return info

    version_match = re.search(_MKVPROPEDIT_VERSION_PATTERN, stdout)
    if version_match:
        info.version = version_match.group(1)
        info.version_tuple = parse_version_string(info.version)
        if info.version_tuple is None:
            logger.warning(
                "Could not parse %s version '%s' into comparable tuple",
                MKVPROPEDIT,
                info.version,
            )

    info.status = ToolStatus.AVAILABLE
    return info
