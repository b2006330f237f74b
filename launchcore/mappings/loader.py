"""Loaders for command mapping and exec mapping files.

Responsibilities:
- Read the per-platform `mappings.<platform>.json` command table once at startup.
- Read the collection's exec mapping list.
- Degrade to empty data plus a warning instead of aborting startup.
"""

from __future__ import annotations

from collections.abc import Callable, Mapping
import json
from pathlib import Path
from typing import Any

from loguru import logger

from ..models.datatypes import CommandMappingTable, CommandRule, ExecMapping
from ..parsing import normalize_optional_string, parse_optional_boolean
from ..platforms import HostPlatform

WarningSink = Callable[[str], None]

EXEC_MAPPINGS_FILENAME = "execs.json"


def mappings_filename(platform: HostPlatform) -> str:
    """Return the platform-named command mapping filename."""

    return f"mappings.{platform.value}.json"


def load_command_mappings(
    directory: Path,
    platform: HostPlatform,
    warn: WarningSink = logger.warning,
) -> CommandMappingTable:
    """Load the command mapping table for `platform` from `directory`.

    A missing or unparseable file yields `CommandMappingTable.empty()`. A parsed
    file whose `defaultMapping` is unusable keeps `default_mapping=None`, so
    command building fails loudly instead of emitting a broken command.
    """

    path = directory / mappings_filename(platform)
    try:
        payload = json.loads(path.read_text(encoding="utf-8"))
    except (OSError, ValueError) as exc:
        warn(
            f"Cannot load mappings file `{path.name}`: {exc}. "
            "Check if the file exists and has valid values. "
            "Without that file most entries will not launch correctly."
        )
        return CommandMappingTable.empty()

    return parse_command_mappings(payload, source_label=str(path), warn=warn)


def parse_command_mappings(
    payload: object,
    source_label: str = "mappings",
    warn: WarningSink = logger.warning,
) -> CommandMappingTable:
    """Build a mapping table from a decoded JSON payload."""

    if not isinstance(payload, Mapping):
        warn(f"{source_label} must contain a top-level object; using empty mappings.")
        return CommandMappingTable.empty()

    default_mapping: CommandRule | None
    try:
        default_mapping = _parse_rule(payload.get("defaultMapping"), "defaultMapping")
    except ValueError as exc:
        warn(f"{source_label} has an unusable default mapping: {exc}")
        default_mapping = None

    raw_rules = payload.get("commandsMapping")
    if raw_rules is None:
        raw_rules = []
    if not isinstance(raw_rules, list):
        warn(f"{source_label} field `commandsMapping` must be a list; ignoring it.")
        raw_rules = []

    rules: list[CommandRule] = []
    for index, raw_rule in enumerate(raw_rules):
        try:
            rules.append(_parse_rule(raw_rule, f"commandsMapping[{index}]"))
        except ValueError as exc:
            warn(f"{source_label} skipped rule: {exc}")

    return CommandMappingTable(default_mapping=default_mapping, commands_mapping=tuple(rules))


def load_exec_mappings(path: Path, warn: WarningSink = logger.warning) -> tuple[ExecMapping, ...]:
    """Load exec mappings; a missing or invalid file yields no mappings."""

    try:
        payload = json.loads(path.read_text(encoding="utf-8"))
    except (OSError, ValueError) as exc:
        warn(f"Failed to load exec mappings file. Ignore if on Windows. - {exc}")
        return ()

    if not isinstance(payload, list):
        warn(f"Exec mappings file `{path}` must contain a list; ignoring it.")
        return ()

    mappings: list[ExecMapping] = []
    for index, row in enumerate(payload):
        win32 = normalize_optional_string(row.get("win32")) if isinstance(row, Mapping) else None
        if win32 is None:
            warn(f"Exec mapping #{index} in `{path}` has no `win32` path; skipping it.")
            continue
        mappings.append(
            ExecMapping(
                win32=win32,
                linux=normalize_optional_string(row.get("linux")),
                darwin=normalize_optional_string(row.get("darwin")),
            )
        )
    return tuple(mappings)


def _parse_rule(raw: Any, label: str) -> CommandRule:
    """Validate one rule object and convert it to a `CommandRule`."""

    if not isinstance(raw, Mapping):
        raise ValueError(f"`{label}` must be an object.")

    command = raw.get("command", "")
    if not isinstance(command, str):
        raise ValueError(f"`{label}.command` must be a string.")

    raw_extensions = raw.get("extensions")
    if raw_extensions is None:
        raw_extensions = []
    if isinstance(raw_extensions, str) or not isinstance(raw_extensions, list):
        raise ValueError(f"`{label}.extensions` must be a list of strings.")
    extensions = frozenset(
        str(extension).strip().lstrip(".").lower()
        for extension in raw_extensions
        if str(extension).strip()
    )

    return CommandRule(
        extensions=extensions,
        command=command,
        include_filename=parse_optional_boolean(
            raw.get("includeFilename"), f"{label}.includeFilename", True
        ),
        include_args=parse_optional_boolean(raw.get("includeArgs"), f"{label}.includeArgs", True),
        set_cwd_to_file_dir=parse_optional_boolean(
            raw.get("setCwdToFileDir"), f"{label}.setCwdToFileDir", False
        ),
    )
