"""Environment variable reader with dependency injection support.

EnvReader reads and converts environment variables. Tests pass an explicit
mapping instead of patching os.environ.
"""

from __future__ import annotations

import logging
import os
from collections.abc import Mapping
from pathlib import Path

logger = logging.getLogger(__name__)

_TRUE_VALUES = ("true", "1", "yes", "on")


class EnvReader:
    """Environment variable reader with type conversion.

    Example:
        reader = EnvReader(env={"POSTERTAG_JPEG_QUALITY": "85"})
        reader.get_int("POSTERTAG_JPEG_QUALITY")  # 85
    """

    def __init__(self, env: Mapping[str, str] | None = None) -> None:
        """Initialize the environment reader.

        Args:
            env: Optional mapping to use instead of os.environ.
        """
        self._env: Mapping[str, str] = env if env is not None else os.environ

    def get_str(self, var: str, default: str | None = None) -> str | None:
        value = self._env.get(var)
        if value is None or not value.strip():
            return default
        return value

    def get_int(self, var: str, default: int | None = None) -> int | None:
        """Get an integer, logging a warning and returning default if invalid."""
        value = self._env.get(var)
        if value is None:
            return default
        try:
            return int(value)
        except ValueError:
            logger.warning("Invalid integer value for %s: %s", var, value)
            return default

    def get_float(self, var: str, default: float | None = None) -> float | None:
        """Get a float, logging a warning and returning default if invalid."""
        value = self._env.get(var)
        if value is None:
            return default
        try:
            return float(value)
        except ValueError:
            logger.warning("Invalid float value for %s: %s", var, value)
            return default

    def get_bool(self, var: str, default: bool | None = None) -> bool | None:
        """Get a boolean.

        "true", "1", "yes" and "on" (any case) are true; any other set value
        is false.
        """
        value = self._env.get(var)
        if value is None:
            return default
        return value.strip().lower() in _TRUE_VALUES

    def get_path(
        self, var: str, must_exist: bool = True, default: Path | None = None
    ) -> Path | None:
        """Get a path with tilde expansion.

        Args:
            var: Environment variable name.
            must_exist: If True, a path that does not exist is ignored with a
                warning and default is returned.
            default: Default value if not set.
        """
        value = self._env.get(var)
        if value is None or not value.strip():
            return default

        path = Path(value).expanduser()
        if must_exist and not path.exists():
            logger.warning(
                "Environment variable %s points to non-existent path: %s",
                var,
                value,
            )
            return default
        return path
