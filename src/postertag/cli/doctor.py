"""postertag doctor command for checking external tool health."""

from __future__ import annotations

import json

import click

from postertag.cli.exit_codes import ExitCode
from postertag.config.models import AppConfig
from postertag.tools import detect_mkvpropedit


def _format_status(available: bool) -> str:
    return "✓" if available else "✗"


@click.command("doctor")
@click.option(
    "--json",
    "json_output",
    is_flag=True,
    help="Output results as JSON",
)
@click.pass_context
def doctor_command(ctx: click.Context, json_output: bool) -> None:
    """Check that mkvpropedit is available for MKV files.

    MP4 files need no external tools.

    Exit codes:
      0  - mkvpropedit available
      30 - mkvpropedit missing or not working
    """
    config: AppConfig = ctx.obj["config"]
    info = detect_mkvpropedit(config.tools.mkvpropedit)

    if json_output:
        click.echo(json.dumps({"mkvpropedit": info.summary()}, indent=2))
    else:
        click.echo("postertag External Tool Health Check")
        click.echo("=" * 40)
        version = info.version or "not found"
        path_info = f" ({info.path})" if info.path else ""
        click.echo(
            f"  {_format_status(info.is_available())} mkvpropedit: {version}{path_info}"
        )
        if not info.is_available():
            if info.status_message:
                click.echo(f"    ├─ {info.status_message}")
            click.echo("    └─ Install mkvtoolnix: https://mkvtoolnix.download/")

    if not info.is_available():
        ctx.exit(int(ExitCode.TOOL_NOT_AVAILABLE))
