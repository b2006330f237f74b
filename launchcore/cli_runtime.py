"""CLI launcher runtime assembly.

This module isolates config loading, mapping table loading and the terminal
implementations of the dialog/open-external capabilities from the command
wiring layer.
"""

from __future__ import annotations

from pathlib import Path

import typer

from .config import ConfigLoader, LauncherConfig
from .errors import LaunchStageError
from .launcher.orchestrator import GameLauncher, LaunchContext
from .launcher.process import ProcessSpawner
from .mappings.loader import load_command_mappings, load_exec_mappings
from .models.datatypes import DialogOptions
from .platforms import HostPlatform
from .telemetry.logger import LaunchLogger


def load_launcher_config(config_path: Path | None) -> LauncherConfig:
    """Load config from YAML when a path is given, else from the environment."""

    if config_path is None:
        try:
            return ConfigLoader.from_env()
        except ValueError as exc:
            raise LaunchStageError(
                stage="config",
                detail=str(exc),
                hint="Pass `--config <path.yaml>` or set `LAUNCHCORE_COLLECTION_ROOT`.",
            ) from exc

    try:
        return ConfigLoader.from_yaml(config_path)
    except FileNotFoundError as exc:
        raise LaunchStageError(
            stage="config",
            detail=f"Config file not found: `{config_path}`.",
            hint="Provide an existing path via `--config <path.yaml>`.",
        ) from exc
    except ValueError as exc:
        raise LaunchStageError(
            stage="config",
            detail=f"Invalid config file `{config_path}`: {exc}",
            hint="Fix config schema/values and rerun.",
        ) from exc
    except Exception as exc:
        raise LaunchStageError(
            stage="config",
            detail=f"Failed to load config file `{config_path}`: {exc}",
            hint="Verify YAML syntax and file permissions.",
        ) from exc


def create_launcher(
    config: LauncherConfig,
    logger: LaunchLogger,
    platform: HostPlatform | None = None,
    spawner: ProcessSpawner | None = None,
) -> GameLauncher:
    """Load mapping tables once and assemble a `GameLauncher` for the terminal."""

    host = platform or HostPlatform.current()
    context = LaunchContext(
        collection_root=str(config.collection_root),
        mappings=load_command_mappings(config.mappings_dir, host, warn=logger.warning),
        open_dialog=show_dialog,
        open_external=open_external,
        log=logger,
        exec_mappings=load_exec_mappings(config.exec_mappings_path, warn=logger.warning),
        platform=host,
        working_dir=str(config.working_dir) if config.working_dir is not None else None,
    )
    return GameLauncher(context, spawner=spawner)


def show_dialog(options: DialogOptions) -> int:
    """Render a message box in the terminal and return the chosen button index."""

    color = typer.colors.RED if options.type == "error" else typer.colors.CYAN
    typer.secho(options.title, fg=color, bold=True)
    typer.echo(options.message)

    default_index = options.default_index or 0
    if len(options.buttons) <= 1:
        return default_index

    for index, label in enumerate(options.buttons):
        typer.echo(f"  {index}. {label}")
    return typer.prompt("Choice", type=int, default=default_index)


def open_external(path: str, *, activate: bool) -> None:
    """Open a file or folder with the desktop's default handler."""

    _ = activate
    if not Path(path).exists():
        raise FileNotFoundError(f"No such file or directory: {path}")
    exit_code = typer.launch(path)
    if exit_code != 0:
        raise OSError(f"Opening `{path}` failed with exit code {exit_code}.")
