"""Command construction from extension-keyed mapping tables.

Responsibilities:
- Select the mapping rule for a resolved application path.
- Quote or escape the path for the target platform's shell.
- Assemble the final command string and working directory.

Key types:
- `RuleKind`: which branch produced the rule (default, extension, named executable).
- `RuleSelection`: the selected rule tagged with its `RuleKind`.

Both public functions are pure: the same inputs, platform included, always
produce the same output.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum

from ..errors import ConfigurationError
from ..models.datatypes import CommandMappingTable, CommandRule, ResolvedCommand
from ..platforms import HostPlatform

# Reads its configuration relative to its own directory and silently fails otherwise.
NAMED_EXECUTABLE = "foobar2000.exe"
COMPATIBILITY_EXTENSION = "exe"
FALLBACK_COMPATIBILITY_COMMAND = "wine"


class RuleKind(str, Enum):
    """Branch of rule selection that produced a command rule."""

    DEFAULT = "default"
    EXTENSION = "extension"
    NAMED_EXECUTABLE = "named_executable"


@dataclass(frozen=True, slots=True)
class RuleSelection:
    """Rule chosen for one path, tagged with how it was chosen."""

    kind: RuleKind
    rule: CommandRule


def file_extension(path: str) -> str:
    """Return the lowercase extension of the path's filename, without the dot."""

    filename = _filename(path)
    if "." not in filename.lstrip("."):
        return ""
    return filename.rsplit(".", 1)[1].lower()


def select_rule(
    absolute_path: str,
    table: CommandMappingTable,
    platform: HostPlatform,
) -> RuleSelection:
    """Select the command rule for `absolute_path`.

    Raises:
        ConfigurationError: If the table has no usable default rule.
    """

    default_rule = _require_default_rule(table)
    extension = file_extension(absolute_path)
    extension_rule = _first_extension_rule(table, extension)

    if not platform.is_windows and _filename(absolute_path).lower() == NAMED_EXECUTABLE:
        compatibility_rule = _first_extension_rule(table, COMPATIBILITY_EXTENSION)
        command = (
            compatibility_rule.command
            if compatibility_rule is not None
            else FALLBACK_COMPATIBILITY_COMMAND
        )
        return RuleSelection(
            kind=RuleKind.NAMED_EXECUTABLE,
            rule=CommandRule(
                extensions=frozenset({COMPATIBILITY_EXTENSION}),
                command=command,
                include_filename=True,
                include_args=True,
                set_cwd_to_file_dir=True,
            ),
        )

    if extension_rule is not None:
        return RuleSelection(kind=RuleKind.EXTENSION, rule=extension_rule)
    return RuleSelection(kind=RuleKind.DEFAULT, rule=default_rule)


def build_command(
    absolute_path: str,
    args: str | None,
    table: CommandMappingTable,
    platform: HostPlatform,
    ambient_cwd: str = "",
) -> ResolvedCommand:
    """Build the shell command and working directory for one launch.

    Args:
        absolute_path: Resolved application path.
        args: Launch argument string; `None` is treated as empty.
        table: Mapping table for `platform`.
        platform: Platform whose quoting rules apply.
        ambient_cwd: Working directory used when the rule does not pin one.

    Raises:
        ConfigurationError: If the table has no usable default rule.
    """

    selection = select_rule(absolute_path, table, platform)
    rule = selection.rule
    path = platform.fix_slashes(absolute_path) if platform.is_windows else absolute_path

    if selection.kind is RuleKind.NAMED_EXECUTABLE:
        cwd = _directory_with_separator(path)
    elif rule.set_cwd_to_file_dir:
        cwd = platform.path_module.dirname(path)
    else:
        cwd = ambient_cwd

    parts = [_collapse_whitespace(rule.command)]
    if rule.include_filename:
        parts.append(quote_path(path, platform))
    if rule.include_args:
        parts.append(_collapse_whitespace(args or ""))

    command = " ".join(part for part in parts if part)
    return ResolvedCommand(command=command, cwd=cwd)


def quote_path(path: str, platform: HostPlatform) -> str:
    """Make a path safe for the platform shell.

    Windows paths use backslashes and are double-quoted only when they contain a
    space; other platforms escape every space with a backslash and never quote.
    """

    if platform.is_windows:
        windows_path = platform.fix_slashes(path)
        if " " in windows_path:
            return f'"{windows_path}"'
        return windows_path
    return path.replace(" ", "\\ ")


def _require_default_rule(table: CommandMappingTable) -> CommandRule:
    default_rule = getattr(table, "default_mapping", None)
    if not isinstance(default_rule, CommandRule) or not isinstance(default_rule.command, str):
        raise ConfigurationError(
            "Command mapping table has no usable `defaultMapping` rule.",
            hint="Check the platform mappings file for a `defaultMapping` object.",
        )
    return default_rule


def _first_extension_rule(table: CommandMappingTable, extension: str) -> CommandRule | None:
    if not extension:
        return None
    for rule in table.commands_mapping:
        if rule.matches(extension):
            return rule
    return None


def _filename(path: str) -> str:
    return path.replace("\\", "/").rsplit("/", 1)[-1]


def _directory_with_separator(path: str) -> str:
    """Return everything up to and including the last separator."""

    index = max(path.rfind("/"), path.rfind("\\"))
    return path[: index + 1]


def _collapse_whitespace(text: str) -> str:
    return " ".join(text.split())
