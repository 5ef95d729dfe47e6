"""Subprocess utilities for external tool invocation.

This module provides the subprocess wrapper used for invoking external tools
like mkvpropedit with consistent encoding, logging, and error handling.
"""

from __future__ import annotations

import logging
import subprocess  # nosec B404 - subprocess is required for mkvpropedit invocation
import time
from pathlib import Path
from typing import Any

logger = logging.getLogger(__name__)


def run_command(
    args: list[str | Path],
    timeout: float | None = None,
    capture_output: bool = True,
    text: bool = True,
    errors: str = "replace",
    **kwargs: Any,
) -> tuple[str, str, int]:
    """Run external command with standard error handling.

    The call blocks until the child process exits. No timeout is applied
    unless one is given.

    Args:
        args: Command and arguments. Path objects are converted to strings.
        timeout: Timeout in seconds, or None to wait indefinitely.
        capture_output: Capture stdout/stderr (default True).
        text: Return text instead of bytes (default True).
        errors: Error handling mode for text decoding (default "replace").
        **kwargs: Additional subprocess.run arguments.

    Returns:
        Tuple of (stdout, stderr, returncode).

    Raises:
        subprocess.TimeoutExpired: If a timeout was given and exceeded. The
            child process is killed by subprocess.run before this is raised.
        OSError: If the executable cannot be launched.

    Example:
        >>> stdout, stderr, rc = run_command(["mkvpropedit", "--version"])
    """
    str_args = [str(arg) for arg in args]
    command_name = Path(str_args[0]).name if str_args else "unknown"

    logger.debug(
        "Executing command: %s",
        " ".join(str_args),
        extra={"command": command_name, "arg_count": len(str_args)},
    )

    start_time = time.monotonic()

    try:
        result = subprocess.run(  # nosec B603 - caller builds args from fixed flags
            str_args,
            capture_output=capture_output,
            text=text,
            errors=errors,
            timeout=timeout,
            **kwargs,
        )
    except subprocess.TimeoutExpired:
        elapsed = time.monotonic() - start_time
        logger.warning(
            "Command timed out after %ss: %s",
            timeout,
            " ".join(str_args[:3]) + ("..." if len(str_args) > 3 else ""),
            extra={
                "command": command_name,
                "timeout_seconds": timeout,
                "elapsed_seconds": round(elapsed, 3),
            },
        )
        raise

    elapsed = time.monotonic() - start_time
    logger.debug(
        "Command completed",
        extra={
            "command": command_name,
            "elapsed_seconds": round(elapsed, 3),
            "returncode": result.returncode,
        },
    )

    return result.stdout or "", result.stderr or "", result.returncode
