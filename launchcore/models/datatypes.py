"""Core datatypes shared across launchcore modules.

Responsibilities:
- Represent the immutable mapping tables loaded at startup.
- Represent launch requests, dialog requests and log entries exchanged with the
  embedding process.

Key types:
- `CommandRule`, `CommandMappingTable`, `ExecMapping`, `ResolvedCommand`,
  `GameRecord`, `AdditionalApplication`, `LaunchRequest`, `DialogOptions`,
  and `LogEntry`.
"""

from __future__ import annotations

from dataclasses import dataclass, field


@dataclass(frozen=True, slots=True)
class CommandRule:
    """One extension-keyed command template.

    Attributes:
        extensions: Lowercase extensions without the leading dot.
        command: Command prefix placed before the file path.
        include_filename: Whether the (quoted/escaped) file path is appended.
        include_args: Whether launch arguments are appended.
        set_cwd_to_file_dir: Whether the process runs from the file's directory.
    """

    extensions: frozenset[str]
    command: str
    include_filename: bool = True
    include_args: bool = True
    set_cwd_to_file_dir: bool = False

    def matches(self, extension: str) -> bool:
        return extension in self.extensions


EMPTY_COMMAND_RULE = CommandRule(extensions=frozenset(), command="")


@dataclass(frozen=True, slots=True)
class CommandMappingTable:
    """Per-OS command mapping table.

    Attributes:
        default_mapping: Rule used when no extension rule matches. `None` marks a
            table loaded without a usable default.
        commands_mapping: Extension rules in declared order; the first match wins.
    """

    default_mapping: CommandRule | None
    commands_mapping: tuple[CommandRule, ...] = field(default_factory=tuple)

    @classmethod
    def empty(cls) -> CommandMappingTable:
        """Return the degraded table used when no mapping file could be read."""

        return cls(default_mapping=EMPTY_COMMAND_RULE, commands_mapping=())


@dataclass(frozen=True, slots=True)
class ExecMapping:
    """Translation from a Windows-relative executable path to native equivalents."""

    win32: str
    linux: str | None = None
    darwin: str | None = None


@dataclass(frozen=True, slots=True)
class ResolvedCommand:
    """Final shell command string and working directory for one spawn."""

    command: str
    cwd: str

    def __str__(self) -> str:
        return self.command


@dataclass(frozen=True, slots=True)
class GameRecord:
    """Main launchable entry supplied by the metadata loader.

    Attributes:
        title: Human-readable game title used in log lines.
        application_path: Collection-relative executable path.
        launch_command: Argument string passed to the executable.
        platform: Platform name used to decide native substitution.
        placeholder: Placeholder records are never launched.
    """

    title: str
    application_path: str
    launch_command: str = ""
    platform: str = ""
    placeholder: bool = False


@dataclass(frozen=True, slots=True)
class AdditionalApplication:
    """Secondary launchable entry tied to a game (installer, manual, utility)."""

    application_path: str
    launch_command: str = ""
    auto_run_before: bool = False
    wait_for_exit: bool = False
    name: str = ""


@dataclass(frozen=True, slots=True)
class LaunchRequest:
    """Game record plus its additional applications in metadata order."""

    game: GameRecord
    add_apps: tuple[AdditionalApplication, ...] = field(default_factory=tuple)


@dataclass(frozen=True, slots=True)
class DialogOptions:
    """Message box request forwarded to the embedding process."""

    type: str
    title: str
    message: str
    buttons: tuple[str, ...] = ("Ok",)
    default_index: int | None = None
    cancel_index: int | None = None


@dataclass(frozen=True, slots=True)
class LogEntry:
    """One append-only log record."""

    source: str
    content: str
