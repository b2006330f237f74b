"""Game launch orchestration.

Responsibilities:
- Launch single commands and surface spawn failures through their exit future.
- Launch additional applications, including the legacy `:message:` and
  `:extras:` pseudo-paths.
- Run auto-run-before additional applications in metadata order, waiting on
  `wait_for_exit` entries, before spawning the main game or its setup script.
- Relay every spawned process's lifecycle to the log capability.

Orchestrated entry points (`launch_game`, `launch_game_setup`) log failures and
return `None`; only `launch_command` surfaces `SpawnError` to its caller.
"""

from __future__ import annotations

from collections.abc import Callable, Sequence
from concurrent.futures import Future
from dataclasses import dataclass, field
import os
import posixpath
from typing import Protocol

from ..errors import ConfigurationError, SpawnError
from ..mappings.command_mapper import build_command
from ..models.datatypes import (
    AdditionalApplication,
    CommandMappingTable,
    DialogOptions,
    ExecMapping,
    GameRecord,
    LogEntry,
    ResolvedCommand,
)
from ..platforms import HostPlatform
from ..resolver import join_collection_path, resolve_application_path
from .process import (
    LifecycleEvent,
    ProcessHandle,
    ProcessSpawner,
    SpawnOutcome,
    SubprocessSpawner,
)

LOG_SOURCE = "Game Launcher"
MESSAGE_PATH = ":message:"
EXTRAS_PATH = ":extras:"
EXTRAS_FOLDER = "Extras"
SETUP_FILENAME = "install.command"

OpenDialog = Callable[[DialogOptions], int]
LogSink = Callable[[LogEntry], None]


class OpenExternal(Protocol):
    """Protocol for opening a path with the desktop's default handler."""

    def __call__(self, path: str, *, activate: bool) -> None:
        """Open `path`; raise on failure."""


@dataclass(frozen=True, slots=True)
class LaunchContext:
    """Immutable inputs and injected capabilities shared by every launch.

    Attributes:
        collection_root: Root directory of the game collection.
        mappings: Command mapping table for `platform`.
        open_dialog: Shows a message box and returns the chosen button index.
        open_external: Opens a path with the desktop's default handler.
        log: Append-only log capability.
        exec_mappings: Ordered Windows-to-native executable translations.
        platform: Platform commands are built for.
        working_dir: Ambient working directory; defaults to the current directory.
    """

    collection_root: str
    mappings: CommandMappingTable
    open_dialog: OpenDialog
    open_external: OpenExternal
    log: LogSink
    exec_mappings: tuple[ExecMapping, ...] = field(default_factory=tuple)
    platform: HostPlatform = field(default_factory=HostPlatform.current)
    working_dir: str | None = None


class GameLauncher:
    """Turn launch requests into spawned processes."""

    def __init__(self, context: LaunchContext, spawner: ProcessSpawner | None = None) -> None:
        self._context = context
        self._spawner = spawner or SubprocessSpawner()

    @property
    def context(self) -> LaunchContext:
        return self._context

    def resolve(self, application_path: str, native: bool) -> str:
        """Resolve a collection-relative path with this launcher's context."""

        return resolve_application_path(
            application_path,
            self._context.collection_root,
            self._context.exec_mappings,
            native,
            self._context.platform,
        )

    def build(
        self, absolute_path: str, args: str, mappings: CommandMappingTable | None = None
    ) -> ResolvedCommand:
        """Build a command for an absolute path.

        Raises:
            ConfigurationError: If the mapping table has no usable default rule.
        """

        return build_command(
            absolute_path,
            args,
            mappings if mappings is not None else self._context.mappings,
            self._context.platform,
            ambient_cwd=self._context.working_dir or os.getcwd(),
        )

    def launch_command(
        self,
        app_path: str,
        app_args: str,
        mappings: CommandMappingTable | None = None,
    ) -> Future[int]:
        """Spawn an already-absolute path and return a future for its exit code.

        The future resolves with any exit code and fails with `SpawnError` only
        when the process could not be created.

        Raises:
            ConfigurationError: If the mapping table has no usable default rule.
        """

        command = self.build(app_path, app_args, mappings)
        outcome = self._spawn(command)
        self._log(
            f'Launch command (PID: {_pid_label(outcome)}) '
            f'[ path: "{app_path}", arg: "{app_args}", command: {command} ]'
        )
        return outcome.exit_future()

    def launch_additional_application(
        self, add_app: AdditionalApplication, native: bool
    ) -> Future[int | None]:
        """Launch one additional application.

        Pseudo-paths complete immediately with `None`; real paths are resolved and
        delegated to `launch_command`.
        """

        if self._handle_pseudo_path(add_app):
            done: Future[int | None] = Future()
            done.set_result(None)
            return done

        app_path = self.resolve(add_app.application_path, native)
        return self.launch_command(app_path, add_app.launch_command)

    def launch_game(
        self,
        game: GameRecord,
        add_apps: Sequence[AdditionalApplication] = (),
        native: bool = False,
    ) -> ProcessHandle | None:
        """Run auto-run-before entries, then spawn the game without awaiting its exit."""

        if game.placeholder:
            return None

        for add_app in add_apps:
            if add_app.auto_run_before:
                self._run_before(add_app, native)

        game_path = self.resolve(game.application_path, native)
        return self._spawn_orchestrated("Launch Game", game, game_path)

    def launch_game_setup(self, game: GameRecord, native: bool = False) -> ProcessHandle | None:
        """Spawn the game's `install.command` setup script without awaiting its exit."""

        setup_path = replace_filename(game.application_path, SETUP_FILENAME)
        game_path = self.resolve(setup_path, native)
        return self._spawn_orchestrated("Launch Game Setup", game, game_path)

    def _run_before(self, add_app: AdditionalApplication, native: bool) -> None:
        label = add_app.name or add_app.application_path
        try:
            future = self.launch_additional_application(add_app, native)
        except ConfigurationError as exc:
            self._log(f'Additional application "{label}" skipped. Error: {exc}')
            return
        except Exception as exc:
            # Raised by the dialog or open-external capability of a pseudo-path.
            self._log(f'Additional application "{label}" failed. Error: {exc}')
            return

        if add_app.wait_for_exit:
            try:
                future.result()
            except SpawnError as exc:
                self._log(f'Additional application "{label}" failed. Error: {exc}')
            return

        future.add_done_callback(lambda done: self._log_background_failure(label, done))

    def _spawn_orchestrated(
        self, action: str, game: GameRecord, game_path: str
    ) -> ProcessHandle | None:
        try:
            command = self.build(game_path, game.launch_command)
        except ConfigurationError as exc:
            self._log(f'{action} "{game.title}" failed. Error: {exc}')
            return None

        outcome = self._spawn(command)
        if not outcome.ok:
            self._log(f'{action} "{game.title}" failed. Error: {outcome.error}')
            return None

        self._log(
            f'{action} "{game.title}" (PID: {_pid_label(outcome)}) [\n'
            f'    applicationPath: "{game.application_path}",\n'
            f'    launchCommand:   "{game.launch_command}",\n'
            f'    command:         "{command}" ]'
        )
        return outcome.handle

    def _handle_pseudo_path(self, add_app: AdditionalApplication) -> bool:
        """Handle legacy pseudo-paths; return `True` when no process is needed."""

        if add_app.application_path == MESSAGE_PATH:
            self._context.open_dialog(
                DialogOptions(
                    type="info",
                    title="About This Game",
                    message=add_app.launch_command,
                    buttons=("Ok",),
                )
            )
            return True

        if add_app.application_path == EXTRAS_PATH:
            folder_path = join_collection_path(
                self._context.collection_root,
                posixpath.join(EXTRAS_FOLDER, add_app.launch_command),
                self._context.platform,
            )
            try:
                self._context.open_external(folder_path, activate=True)
            except Exception as exc:
                self._context.open_dialog(
                    DialogOptions(
                        type="error",
                        title="Failed to Open Extras",
                        message=f"{exc}\nPath: {folder_path}",
                        buttons=("Ok",),
                    )
                )
            return True

        return False

    def _spawn(self, command: ResolvedCommand) -> SpawnOutcome:
        return self._spawner.spawn(command, self._relay)

    def _relay(self, event: LifecycleEvent) -> None:
        self._log(f"{event.kind.value} (PID: {event.pid:>5}) {event.payload}")

    def _log_background_failure(self, label: str, future: Future[int | None]) -> None:
        error = future.exception()
        if error is not None:
            self._log(f'Additional application "{label}" failed. Error: {error}')

    def _log(self, content: str) -> None:
        self._context.log(LogEntry(source=LOG_SOURCE, content=content))


def replace_filename(application_path: str, filename: str) -> str:
    """Replace the final path component, keeping the original separator style."""

    index = max(application_path.rfind("/"), application_path.rfind("\\"))
    return application_path[: index + 1] + filename


def _pid_label(outcome: SpawnOutcome) -> str:
    if outcome.handle is None:
        return "none"
    return str(outcome.handle.pid)
