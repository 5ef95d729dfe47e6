"""Configuration loader with precedence handling.

Configuration is loaded with the following precedence (highest to lowest):
1. CLI arguments (passed directly to get_config)
2. Environment variables (POSTERTAG_*)
3. Config file (~/.postertag/config.toml)
4. Default values

Environment variables:
- POSTERTAG_CONFIG_PATH: Path to config file (overrides default location)
- POSTERTAG_MKVPROPEDIT_PATH: Path to mkvpropedit executable
- POSTERTAG_TEMP_DIR: Directory for temporary cover images
- POSTERTAG_JPEG_QUALITY: JPEG quality for encoded covers (1-95)
- POSTERTAG_TOOL_TIMEOUT: mkvpropedit timeout in seconds
- POSTERTAG_MKV_BACKUP: Back up MKV files before editing (true/false)
- POSTERTAG_TMDB_TOKEN: TMDB API read access token
- POSTERTAG_TMDB_BASE_URL: TMDB API base URL
- POSTERTAG_LOG_LEVEL, POSTERTAG_LOG_FILE, POSTERTAG_LOG_FORMAT: logging
"""

from __future__ import annotations

import logging
from collections.abc import Mapping
from pathlib import Path

from postertag.config.builder import (
    ConfigBuilder,
    ConfigSource,
    source_from_env,
    source_from_file,
)
from postertag.config.env import EnvReader
from postertag.config.models import AppConfig
from postertag.config.toml_parser import ConfigError, load_toml_file

logger = logging.getLogger(__name__)

DEFAULT_CONFIG_DIR = Path.home() / ".postertag"
DEFAULT_CONFIG_FILE = DEFAULT_CONFIG_DIR / "config.toml"


def get_default_config_path(env: Mapping[str, str] | None = None) -> Path:
    """Get the config file path, honouring POSTERTAG_CONFIG_PATH."""
    env_path = EnvReader(env).get_str("POSTERTAG_CONFIG_PATH")
    if env_path:
        return Path(env_path).expanduser()
    return DEFAULT_CONFIG_FILE


def get_config(
    config_path: Path | None = None,
    # CLI overrides (highest precedence)
    mkvpropedit_path: Path | None = None,
    temp_directory: Path | None = None,
    # Optional dependency injection for testing
    env: Mapping[str, str] | None = None,
    *,
    strict: bool = False,
) -> AppConfig:
    """Get postertag configuration with full precedence handling.

    Args:
        config_path: Path to config file (overrides POSTERTAG_CONFIG_PATH).
        mkvpropedit_path: CLI override for the mkvpropedit path.
        temp_directory: CLI override for the temporary image directory.
        env: Mapping used instead of os.environ.
        strict: If True, raise ConfigError for an unparseable config file.

    Returns:
        AppConfig with merged configuration.

    Raises:
        ConfigError: If strict=True and the config file cannot be parsed, or
            if any resolved value is invalid.
    """
    reader = EnvReader(env)
    path = config_path or get_default_config_path(env)
    file_config = load_toml_file(path, strict=strict)

    builder = ConfigBuilder()
    builder.apply(source_from_file(file_config))
    builder.apply(source_from_env(reader))
    builder.apply(
        ConfigSource(mkvpropedit_path=mkvpropedit_path, temp_directory=temp_directory)
    )

    try:
        return builder.build()
    except (TypeError, ValueError) as e:
        raise ConfigError(f"Invalid configuration: {e}") from e
