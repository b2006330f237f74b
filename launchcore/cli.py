"""Command-line interface for launchcore.

Responsibilities:
- Expose user-facing commands for previewing and launching collection entries.
- Convert CLI arguments and launch request files into `GameLauncher` calls.

Key public functions:
- `app`: Typer application instance.
- `main`: invoke the Typer application.
"""

from __future__ import annotations

from pathlib import Path
from typing import Annotated

import typer

from .cli_rendering import (
    echo_exit_code,
    echo_resolved_command,
    echo_started,
    exit_with_command_error,
)
from .cli_runtime import create_launcher, load_launcher_config
from .errors import LaunchStageError
from .launcher.process import ProcessHandle
from .mappings.command_mapper import build_command
from .mappings.loader import load_command_mappings
from .platforms import HostPlatform
from .records import load_launch_request
from .resolver import join_collection_path
from .telemetry.logger import LaunchLogger

app = typer.Typer(
    name="launchcore",
    no_args_is_help=True,
    help="launchcore CLI.",
)

ConfigOption = Annotated[
    Path | None,
    typer.Option("--config", help="Path to YAML launcher config file."),
]
DetachOption = Annotated[
    bool,
    typer.Option("--detach", help="Return after the process starts instead of waiting."),
]


@app.command("show-command")
def show_command(
    path: Annotated[str, typer.Argument(help="Absolute application path.")],
    args: Annotated[str, typer.Option("--args", help="Launch argument string.")] = "",
    platform: Annotated[
        str | None,
        typer.Option("--platform", help="Target platform: win32, linux or darwin."),
    ] = None,
    mappings_dir: Annotated[
        Path | None,
        typer.Option("--mappings-dir", help="Directory holding `mappings.<platform>.json`."),
    ] = None,
    config_file: ConfigOption = None,
) -> None:
    """Print the command and working directory a path would launch with."""

    try:
        host = HostPlatform.parse(platform) if platform else HostPlatform.current()
        logger = LaunchLogger()
        directory = mappings_dir or load_launcher_config(config_file).mappings_dir
        table = load_command_mappings(directory, host, warn=logger.warning)
        command = build_command(path, args, table, host)
    except Exception as exc:
        exit_with_command_error("show-command", exc)

    echo_resolved_command(command)


@app.command("run")
def run_command(
    relative_path: Annotated[str, typer.Argument(help="Collection-relative file path.")],
    config_file: ConfigOption = None,
) -> None:
    """Launch one collection file without arguments and wait for it to exit."""

    try:
        config = load_launcher_config(config_file)
        launcher = create_launcher(config, LaunchLogger())
        app_path = join_collection_path(
            str(config.collection_root.resolve()), relative_path, launcher.context.platform
        )
        exit_code = launcher.launch_command(app_path, "").result()
    except Exception as exc:
        exit_with_command_error("run", exc)

    echo_exit_code(relative_path, exit_code)


@app.command("game")
def game_command(
    record: Annotated[Path, typer.Argument(help="Path to launch request JSON.")],
    detach: DetachOption = False,
    config_file: ConfigOption = None,
) -> None:
    """Launch a game after its auto-run-before additional applications."""

    try:
        config = load_launcher_config(config_file)
        request = load_launch_request(record)
        if request.game.placeholder:
            typer.echo(f"Skipped placeholder entry `{request.game.title}`.")
            return
        launcher = create_launcher(config, LaunchLogger())
        handle = launcher.launch_game(
            request.game,
            request.add_apps,
            native=config.is_native(request.game.platform),
        )
        _report_handle("game", request.game.title, handle, detach)
    except Exception as exc:
        exit_with_command_error("game", exc)


@app.command("setup")
def setup_command(
    record: Annotated[Path, typer.Argument(help="Path to launch request JSON.")],
    detach: DetachOption = False,
    config_file: ConfigOption = None,
) -> None:
    """Launch the game's `install.command` setup script."""

    try:
        config = load_launcher_config(config_file)
        request = load_launch_request(record)
        launcher = create_launcher(config, LaunchLogger())
        handle = launcher.launch_game_setup(
            request.game,
            native=config.is_native(request.game.platform),
        )
        _report_handle("setup", request.game.title, handle, detach)
    except Exception as exc:
        exit_with_command_error("setup", exc)


@app.command("addapp")
def addapp_command(
    record: Annotated[Path, typer.Argument(help="Path to launch request JSON.")],
    index: Annotated[
        int, typer.Option("--index", min=0, help="0-based additional application index.")
    ] = 0,
    config_file: ConfigOption = None,
) -> None:
    """Launch one additional application from a launch request and wait for it."""

    try:
        config = load_launcher_config(config_file)
        request = load_launch_request(record)
        if index >= len(request.add_apps):
            raise LaunchStageError(
                stage="request",
                detail=f"Launch request has {len(request.add_apps)} additional application(s).",
                hint="Pass a valid `--index`.",
            )
        add_app = request.add_apps[index]
        launcher = create_launcher(config, LaunchLogger())
        exit_code = launcher.launch_additional_application(
            add_app, native=config.is_native(request.game.platform)
        ).result()
    except Exception as exc:
        exit_with_command_error("addapp", exc)

    label = add_app.name or add_app.application_path
    if exit_code is None:
        typer.echo(f"Handled `{label}` without starting a process.")
        return
    echo_exit_code(label, exit_code)


def _report_handle(
    command_name: str, title: str, handle: ProcessHandle | None, detach: bool
) -> None:
    if handle is None:
        raise LaunchStageError(
            stage="launch",
            detail=f"`{title}` did not start.",
            hint="Check the launch log above for the command and error.",
        )
    echo_started(command_name, handle.pid)
    if not detach:
        echo_exit_code(title, handle.wait())


def main() -> None:
    """CLI entrypoint for console scripts."""
    app()


if __name__ == "__main__":
    main()
