"""postertag write command.

Embeds a cover image into an MP4 or MKV file. The image comes either from
a local file or from a TMDB poster path.
"""

from __future__ import annotations

import logging
from dataclasses import replace
from pathlib import Path

import click
from PIL import Image

from postertag.cli.exit_codes import ExitCode
from postertag.cli.output import CLIResult, error_exit
from postertag.config.models import AppConfig, ToolPathsConfig
from postertag.errors import (
    EncodeError,
    TagWriteError,
    ToolNotFoundError,
    UnsupportedFormatError,
)
from postertag.imaging.encoder import load_cover_image
from postertag.tagging.events import EventKind, WriteEvent, WriteResult
from postertag.tagging.writer import TagWriter
from postertag.tmdb import TmdbClient, TmdbError

logger = logging.getLogger(__name__)


def _exit_code_for(error: TagWriteError | None) -> ExitCode:
    if isinstance(error, UnsupportedFormatError):
        return ExitCode.UNSUPPORTED_FORMAT
    if isinstance(error, ToolNotFoundError):
        return ExitCode.TOOL_NOT_AVAILABLE
    return ExitCode.OPERATION_FAILED


def _load_image(
    config: AppConfig,
    image_path: Path | None,
    poster_path: str | None,
    json_output: bool,
) -> Image.Image:
    """Load the cover image from a local file or TMDB."""
    if image_path is not None:
        try:
            data = image_path.read_bytes()
        except OSError as e:
            error_exit(
                f"Cannot read image {image_path}: {e}",
                ExitCode.TARGET_NOT_FOUND,
                json_output,
            )
    else:
        if not config.tmdb.has_token:
            error_exit(
                "TMDB API token is not configured "
                "(set POSTERTAG_TMDB_TOKEN or [tmdb] api_token)",
                ExitCode.CONFIG_ERROR,
                json_output,
            )
        try:
            with TmdbClient(config.tmdb) as client:
                data = client.download_poster(poster_path or "")
        except TmdbError as e:
            error_exit(e.message, ExitCode.PROVIDER_ERROR, json_output)

    try:
        image = load_cover_image(data)
    except EncodeError as e:
        error_exit(str(e), ExitCode.OPERATION_FAILED, json_output)

    logger.debug(
        "Loaded cover image",
        extra={"width": image.width, "height": image.height, "mode": image.mode},
    )
    return image


@click.command("write")
@click.argument("movie", type=click.Path(path_type=Path))
@click.option(
    "--image",
    "image_path",
    type=click.Path(dir_okay=False, path_type=Path),
    default=None,
    help="Local image file to embed.",
)
@click.option(
    "--poster-path",
    default=None,
    help="TMDB poster path (e.g. /abc123.jpg) to download and embed.",
)
@click.option(
    "--mkvpropedit",
    "mkvpropedit_path",
    type=click.Path(dir_okay=False, path_type=Path),
    default=None,
    help="Path to the mkvpropedit executable.",
)
@click.option(
    "--backup/--no-backup",
    default=None,
    help="Back up MKV files before editing and restore them on failure.",
)
@click.option(
    "--json",
    "json_output",
    is_flag=True,
    help="Output result as JSON.",
)
@click.pass_context
def write_command(
    ctx: click.Context,
    movie: Path,
    image_path: Path | None,
    poster_path: str | None,
    mkvpropedit_path: Path | None,
    backup: bool | None,
    json_output: bool,
) -> None:
    """Write a cover image into MOVIE (MP4 or MKV).

    Exit codes:
      0  - Cover written
      11 - Configuration error
      20 - Movie or image file not found
      21 - Unsupported container format
      30 - mkvpropedit not available
      31 - TMDB request failed
      40 - Writing the cover failed
    """
    if (image_path is None) == (poster_path is None):
        raise click.UsageError("Specify exactly one of --image or --poster-path.")

    if not movie.is_file():
        error_exit(
            f"Movie file not found: {movie}", ExitCode.TARGET_NOT_FOUND, json_output
        )

    config: AppConfig = ctx.obj["config"]
    if mkvpropedit_path is not None:
        config = replace(config, tools=ToolPathsConfig(mkvpropedit=mkvpropedit_path))

    image = _load_image(config, image_path, poster_path, json_output)

    def on_event(event: WriteEvent) -> None:
        if not json_output and event.kind is EventKind.PROGRESS:
            click.echo(event.message)

    writer = TagWriter.from_config(config, mkv_backup=backup)
    result: WriteResult = writer.write_tags_to_file(movie, image, on_event=on_event)

    if not result.success:
        code = _exit_code_for(result.error)
        if json_output:
            click.echo(
                CLIResult(
                    success=False,
                    message=result.message,
                    data={"events": _events_data(result)},
                    exit_code=code,
                ).to_json()
            )
            ctx.exit(int(code))
        error_exit(result.message, code)

    if json_output:
        click.echo(
            CLIResult(
                success=True,
                message=result.message,
                data={"file": str(movie), "events": _events_data(result)},
            ).to_json()
        )
    else:
        click.echo(result.message)


def _events_data(result: WriteResult) -> list[dict[str, str]]:
    return [
        {"kind": event.kind.value, "message": event.message} for event in result.events
    ]
