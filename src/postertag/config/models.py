"""Configuration models for postertag.

Plain dataclasses validated in __post_init__. Defaults here are the values
used when neither the config file, the environment nor the CLI sets them.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path

from postertag.imaging.encoder import DEFAULT_JPEG_QUALITY

# Pillow discourages JPEG quality above 95
MAX_JPEG_QUALITY = 95


@dataclass
class ToolPathsConfig:
    """Configuration for external tool paths.

    If not specified, tools are looked up in PATH.
    """

    mkvpropedit: Path | None = None


@dataclass
class TaggingConfig:
    """Configuration for cover art writing."""

    # Directory for temporary JPEG files (None = system temp dir)
    temp_directory: Path | None = None

    # JPEG quality for encoded covers (1-95)
    jpeg_quality: int = DEFAULT_JPEG_QUALITY

    # Per-invocation mkvpropedit timeout in seconds (None = wait forever)
    tool_timeout: float | None = None

    # Copy MKV files before editing and restore them on failure
    mkv_backup: bool = False

    # Treat mkvpropedit exit status 1 (warnings) as a failure
    tool_warnings_as_errors: bool = False

    def __post_init__(self) -> None:
        """Validate configuration."""
        if not 1 <= self.jpeg_quality <= MAX_JPEG_QUALITY:
            raise ValueError(
                f"jpeg_quality must be between 1 and {MAX_JPEG_QUALITY}, "
                f"got {self.jpeg_quality}"
            )
        if self.tool_timeout is not None and self.tool_timeout <= 0:
            raise ValueError(
                f"tool_timeout must be positive, got {self.tool_timeout}"
            )


@dataclass(frozen=True)
class TmdbConfig:
    """Connection settings for The Movie Database API."""

    api_token: str | None = None
    """API read access token (v4 bearer token)."""

    base_url: str = "https://api.themoviedb.org/3"
    """Base URL of the v3 API."""

    poster_size: str = "w500"
    """Preferred poster size; falls back to the first size TMDB offers."""

    timeout_seconds: float = 30.0
    """Request timeout in seconds (1-300)."""

    def __post_init__(self) -> None:
        """Validate configuration."""
        if not self.base_url.startswith(("http://", "https://")):
            raise ValueError("URL must start with http:// or https://")
        if self.api_token is not None and " " in self.api_token.strip():
            raise ValueError("API token must not contain whitespace")
        if not 1 <= self.timeout_seconds <= 300:
            raise ValueError("Timeout must be between 1 and 300 seconds")

    @property
    def has_token(self) -> bool:
        return bool(self.api_token and self.api_token.strip())


@dataclass
class LoggingConfig:
    """Configuration for structured logging."""

    # Log level: debug, info, warning, error
    level: str = "info"

    # Log file path (None = stderr only)
    file: Path | None = None

    # Log format: text or json
    format: str = "text"

    # Also log to stderr when file is set
    include_stderr: bool = False

    # Rotation threshold in bytes (default 10MB)
    max_bytes: int = 10_485_760

    # Number of rotated files to keep
    backup_count: int = 5

    def __post_init__(self) -> None:
        """Validate configuration."""
        valid_levels = {"debug", "info", "warning", "error"}
        if self.level.lower() not in valid_levels:
            raise ValueError(f"level must be one of {valid_levels}, got {self.level}")
        valid_formats = {"text", "json"}
        if self.format.lower() not in valid_formats:
            raise ValueError(
                f"format must be one of {valid_formats}, got {self.format}"
            )


@dataclass
class AppConfig:
    """Main configuration for postertag."""

    tools: ToolPathsConfig = field(default_factory=ToolPathsConfig)
    tagging: TaggingConfig = field(default_factory=TaggingConfig)
    tmdb: TmdbConfig = field(default_factory=TmdbConfig)
    logging: LoggingConfig = field(default_factory=LoggingConfig)
