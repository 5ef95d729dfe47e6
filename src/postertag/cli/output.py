"""CLI output formatting for JSON and human-readable output."""

from __future__ import annotations

import json
import sys
from dataclasses import dataclass, field
from typing import Any, NoReturn

import click

from postertag.cli.exit_codes import ExitCode


@dataclass
class CLIResult:
    """Result object for CLI operations."""

    success: bool
    message: str
    data: dict[str, Any] = field(default_factory=dict)
    exit_code: int = ExitCode.SUCCESS

    def to_json(self) -> str:
        output: dict[str, Any] = {
            "status": "completed" if self.success else "failed",
        }
        if self.success:
            output["message"] = self.message
            output.update(self.data)
        else:
            code_name = (
                self.exit_code.name
                if isinstance(self.exit_code, ExitCode)
                else "UNKNOWN_ERROR"
            )
            output["error"] = {"code": code_name, "message": self.message}
            output.update(self.data)
        return json.dumps(output, indent=2)


def error_exit(
    message: str,
    code: ExitCode | int,
    json_output: bool = False,
) -> NoReturn:
    """Print an error in the requested format and exit with code."""
    if isinstance(code, ExitCode):
        code_name = code.name
        exit_value = int(code)
    else:
        code_name = "UNKNOWN_ERROR"
        exit_value = code

    if json_output:
        click.echo(
            json.dumps(
                {
                    "status": "failed",
                    "error": {"code": code_name, "message": message},
                }
            ),
            err=True,
        )
    else:
        click.echo(f"Error: {message}", err=True)

    sys.exit(exit_value)
