"""Configuration builder with explicit layering.

Each configuration source (config file, environment, CLI) is read into a
ConfigSource. ConfigBuilder applies sources in increasing precedence and
builds the final AppConfig.
"""

from __future__ import annotations

from dataclasses import dataclass, fields
from pathlib import Path
from typing import Any

from postertag.config.env import EnvReader
from postertag.config.models import (
    AppConfig,
    LoggingConfig,
    TaggingConfig,
    TmdbConfig,
    ToolPathsConfig,
)


@dataclass
class ConfigSource:
    """Configuration values from a single source.

    None means "not specified in this source" and never overrides a value
    from a lower-precedence source.
    """

    # Tool paths
    mkvpropedit_path: Path | None = None

    # Tagging
    temp_directory: Path | None = None
    jpeg_quality: int | None = None
    tool_timeout: float | None = None
    mkv_backup: bool | None = None
    tool_warnings_as_errors: bool | None = None

    # TMDB
    tmdb_api_token: str | None = None
    tmdb_base_url: str | None = None
    tmdb_poster_size: str | None = None
    tmdb_timeout_seconds: float | None = None

    # Logging
    logging_level: str | None = None
    logging_file: Path | None = None
    logging_format: str | None = None
    logging_include_stderr: bool | None = None
    logging_max_bytes: int | None = None
    logging_backup_count: int | None = None


class ConfigBuilder:
    """Builds AppConfig by layering ConfigSources with precedence.

    Later sources override earlier ones (for non-None values).

    Example:
        builder = ConfigBuilder()
        builder.apply(source_from_file(file_config))
        builder.apply(source_from_env(reader))
        builder.apply(cli_source)
        config = builder.build()
    """

    def __init__(self) -> None:
        self._values: dict[str, Any] = {}

    def apply(self, source: ConfigSource) -> None:
        """Apply a source, overriding existing values with its non-None values."""
        for field_obj in fields(source):
            value = getattr(source, field_obj.name)
            if value is not None:
                self._values[field_obj.name] = value

    def _get(self, key: str, default: Any) -> Any:
        return self._values.get(key, default)

    def build(self) -> AppConfig:
        """Build the final AppConfig with defaults for unset values.

        Raises:
            ValueError: If a resolved value fails model validation.
        """
        tmdb_defaults = TmdbConfig()
        tagging_defaults = TaggingConfig()

        return AppConfig(
            tools=ToolPathsConfig(
                mkvpropedit=self._get("mkvpropedit_path", None),
            ),
            tagging=TaggingConfig(
                temp_directory=self._get("temp_directory", None),
                jpeg_quality=self._get(
                    "jpeg_quality", tagging_defaults.jpeg_quality
                ),
                tool_timeout=self._get("tool_timeout", None),
                mkv_backup=self._get("mkv_backup", False),
                tool_warnings_as_errors=self._get("tool_warnings_as_errors", False),
            ),
            tmdb=TmdbConfig(
                api_token=self._get("tmdb_api_token", None),
                base_url=self._get("tmdb_base_url", tmdb_defaults.base_url),
                poster_size=self._get("tmdb_poster_size", tmdb_defaults.poster_size),
                timeout_seconds=self._get(
                    "tmdb_timeout_seconds", tmdb_defaults.timeout_seconds
                ),
            ),
            logging=LoggingConfig(
                level=self._get("logging_level", "info"),
                file=self._get("logging_file", None),
                format=self._get("logging_format", "text"),
                include_stderr=self._get("logging_include_stderr", False),
                max_bytes=self._get("logging_max_bytes", 10_485_760),
                backup_count=self._get("logging_backup_count", 5),
            ),
        )


def _optional_path(value: Any) -> Path | None:
    return Path(value).expanduser() if value else None


def source_from_file(file_config: dict[str, Any]) -> ConfigSource:
    """Create a ConfigSource from a parsed TOML config file.

    Recognized tables: [tools], [tagging], [tmdb] and [logging].
    """
    tools = file_config.get("tools", {})
    tagging = file_config.get("tagging", {})
    tmdb = file_config.get("tmdb", {})
    logging_conf = file_config.get("logging", {})

    return ConfigSource(
        mkvpropedit_path=_optional_path(tools.get("mkvpropedit")),
        temp_directory=_optional_path(tagging.get("temp_directory")),
        jpeg_quality=tagging.get("jpeg_quality"),
        tool_timeout=tagging.get("tool_timeout"),
        mkv_backup=tagging.get("mkv_backup"),
        tool_warnings_as_errors=tagging.get("tool_warnings_as_errors"),
        tmdb_api_token=tmdb.get("api_token"),
        tmdb_base_url=tmdb.get("base_url"),
        tmdb_poster_size=tmdb.get("poster_size"),
        tmdb_timeout_seconds=tmdb.get("timeout_seconds"),
        logging_level=logging_conf.get("level"),
        logging_file=_optional_path(logging_conf.get("file")),
        logging_format=logging_conf.get("format"),
        logging_include_stderr=logging_conf.get("include_stderr"),
        logging_max_bytes=logging_conf.get("max_bytes"),
        logging_backup_count=logging_conf.get("backup_count"),
    )


def source_from_env(reader: EnvReader) -> ConfigSource:
    """Create a ConfigSource from POSTERTAG_* environment variables."""
    return ConfigSource(
        mkvpropedit_path=reader.get_path("POSTERTAG_MKVPROPEDIT_PATH"),
        temp_directory=reader.get_path("POSTERTAG_TEMP_DIR"),
        jpeg_quality=reader.get_int("POSTERTAG_JPEG_QUALITY"),
        tool_timeout=reader.get_float("POSTERTAG_TOOL_TIMEOUT"),
        mkv_backup=reader.get_bool("POSTERTAG_MKV_BACKUP"),
        tmdb_api_token=reader.get_str("POSTERTAG_TMDB_TOKEN"),
        tmdb_base_url=reader.get_str("POSTERTAG_TMDB_BASE_URL"),
        logging_level=reader.get_str("POSTERTAG_LOG_LEVEL"),
        logging_file=reader.get_path("POSTERTAG_LOG_FILE", must_exist=False),
        logging_format=reader.get_str("POSTERTAG_LOG_FORMAT"),
    )
