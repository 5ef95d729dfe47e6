"""CLI module for postertag."""

import logging
from pathlib import Path

import click

from postertag import __version__
from postertag.cli.exit_codes import ExitCode
from postertag.cli.output import error_exit
from postertag.config import ConfigError, get_config
from postertag.logging import build_logging_config, configure_logging

_logging_configured: bool = False

logger = logging.getLogger(__name__)


def _configure_logging(
    config_logging,
    log_level: str | None,
    log_file: Path | None,
    log_json: bool,
) -> None:
    """Configure logging once per process from config and CLI overrides."""
    global _logging_configured
    if _logging_configured:
        return

    configure_logging(
        build_logging_config(
            config_logging,
            level=log_level,
            file=log_file,
            format="json" if log_json else None,
        )
    )
    _logging_configured = True


@click.group()
@click.version_option(version=__version__, prog_name="postertag")
@click.option(
    "--config",
    "config_path",
    type=click.Path(dir_okay=False, path_type=Path),
    default=None,
    help="Config file (default: ~/.postertag/config.toml).",
)
@click.option(
    "--log-level",
    type=click.Choice(["debug", "info", "warning", "error"], case_sensitive=False),
    default=None,
    help="Override log level (default: info).",
)
@click.option(
    "--log-file",
    type=click.Path(path_type=Path),
    default=None,
    help="Override log file path.",
)
@click.option(
    "--log-json",
    is_flag=True,
    default=False,
    help="Use JSON log format.",
)
@click.pass_context
def main(
    ctx: click.Context,
    config_path: Path | None,
    log_level: str | None,
    log_file: Path | None,
    log_json: bool,
) -> None:
    """postertag - Embed movie posters as cover art in MP4 and MKV files."""
    ctx.ensure_object(dict)

    # Preserve a config passed in by tests
    if "config" not in ctx.obj:
        try:
            ctx.obj["config"] = get_config(config_path, strict=config_path is not None)
        except ConfigError as e:
            error_exit(str(e), ExitCode.CONFIG_ERROR)

    _configure_logging(ctx.obj["config"].logging, log_level, log_file, log_json)
    logger.debug("postertag %s starting", __version__)


# Defer import to avoid circular dependency
def _register_commands():
    from postertag.cli.doctor import doctor_command
    from postertag.cli.search import search_command
    from postertag.cli.write import write_command

    main.add_command(write_command)
    main.add_command(search_command)
    main.add_command(doctor_command)


_register_commands()
