"""Configuration for postertag.

Layered configuration (defaults, TOML file, environment, CLI) resolved
into AppConfig dataclasses.
"""

from postertag.config.builder import (
    ConfigBuilder,
    ConfigSource,
    source_from_env,
    source_from_file,
)
from postertag.config.env import EnvReader
from postertag.config.loader import (
    DEFAULT_CONFIG_DIR,
    DEFAULT_CONFIG_FILE,
    get_config,
    get_default_config_path,
)
from postertag.config.models import (
    AppConfig,
    LoggingConfig,
    TaggingConfig,
    TmdbConfig,
    ToolPathsConfig,
)
from postertag.config.toml_parser import ConfigError, load_toml_file

__all__ = [
    "AppConfig",
    "ConfigBuilder",
    "ConfigError",
    "ConfigSource",
    "DEFAULT_CONFIG_DIR",
    "DEFAULT_CONFIG_FILE",
    "EnvReader",
    "LoggingConfig",
    "TaggingConfig",
    "TmdbConfig",
    "ToolPathsConfig",
    "get_config",
    "get_default_config_path",
    "load_toml_file",
    "source_from_env",
    "source_from_file",
]
