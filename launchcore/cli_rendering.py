"""CLI output and error rendering helpers.

This module centralizes user-facing CLI presentation for command diagnostics,
built command previews and process results.
"""

from __future__ import annotations

from typing import NoReturn

import typer

from .errors import LaunchStageError
from .models.datatypes import ResolvedCommand


def exit_with_command_error(command_name: str, exc: Exception) -> NoReturn:
    """Print concise diagnostics for command failures and exit with code 1."""

    if isinstance(exc, LaunchStageError):
        typer.secho(
            f"{command_name} failed at stage `{exc.stage}`: {exc.detail}",
            fg=typer.colors.RED,
            err=True,
        )
        if exc.hint:
            typer.secho(f"Hint: {exc.hint}", fg=typer.colors.YELLOW, err=True)
    else:
        typer.secho(f"{command_name} failed: {exc}", fg=typer.colors.RED, err=True)
    raise typer.Exit(code=1) from exc


def echo_resolved_command(command: ResolvedCommand) -> None:
    """Print a built command and its working directory."""

    typer.echo(f"Command: {command.command}")
    typer.echo(f"Working directory: {command.cwd or '(inherited)'}")


def echo_started(label: str, pid: int) -> None:
    typer.echo(f"Started {label} (PID: {pid})")


def echo_exit_code(label: str, exit_code: int) -> None:
    typer.echo(f"{label} exited with code {exit_code}")
