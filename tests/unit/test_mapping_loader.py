"""Unit tests for command and exec mapping file loaders."""

from __future__ import annotations

import json
from pathlib import Path

import pytest

from launchcore.errors import ConfigurationError
from launchcore.mappings.command_mapper import build_command
from launchcore.mappings.loader import (
    load_command_mappings,
    load_exec_mappings,
    mappings_filename,
    parse_command_mappings,
)
from launchcore.models.datatypes import CommandMappingTable, ExecMapping
from launchcore.platforms import HostPlatform


def test_load_command_mappings_reads_platform_named_file(tmp_path: Path) -> None:
    """Loader should parse the platform file and normalize extensions."""

    (tmp_path / "mappings.linux.json").write_text(
        json.dumps(
            {
                "defaultMapping": {
                    "extensions": [],
                    "command": "xdg-open",
                    "includeFilename": True,
                    "includeArgs": True,
                },
                "commandsMapping": [
                    {
                        "extensions": ["EXE", ".com"],
                        "command": "flatpak run com.retro_exo.wine",
                        "includeFilename": True,
                        "includeArgs": "yes",
                        "setCwdToFileDir": True,
                    }
                ],
            }
        ),
        encoding="utf-8",
    )
    warnings: list[str] = []

    table = load_command_mappings(tmp_path, HostPlatform.LINUX, warn=warnings.append)

    assert warnings == []
    assert table.default_mapping is not None
    assert table.default_mapping.command == "xdg-open"
    assert table.default_mapping.set_cwd_to_file_dir is False
    rule = table.commands_mapping[0]
    assert rule.extensions == frozenset({"exe", "com"})
    assert rule.include_args is True
    assert rule.set_cwd_to_file_dir is True


def test_missing_mapping_file_degrades_to_empty_table_with_warning(tmp_path: Path) -> None:
    """A missing file should not abort startup."""

    warnings: list[str] = []

    table = load_command_mappings(tmp_path, HostPlatform.DARWIN, warn=warnings.append)

    assert table == CommandMappingTable.empty()
    assert len(warnings) == 1
    assert "mappings.darwin.json" in warnings[0]
    assert build_command("/g/a.exe", "-x", table, HostPlatform.DARWIN).command == "/g/a.exe -x"


def test_unparseable_mapping_file_degrades_to_empty_table(tmp_path: Path) -> None:
    """Invalid JSON should be reported and replaced by the empty table."""

    (tmp_path / "mappings.win32.json").write_text("{not json", encoding="utf-8")
    warnings: list[str] = []

    table = load_command_mappings(tmp_path, HostPlatform.WIN32, warn=warnings.append)

    assert table == CommandMappingTable.empty()
    assert warnings


def test_malformed_default_mapping_is_kept_unusable(tmp_path: Path) -> None:
    """A parsed file with a broken default rule must fail at build time."""

    (tmp_path / "mappings.linux.json").write_text(
        json.dumps(
            {
                "defaultMapping": "xdg-open",
                "commandsMapping": [{"extensions": ["exe"], "command": "wine"}],
            }
        ),
        encoding="utf-8",
    )
    warnings: list[str] = []

    table = load_command_mappings(tmp_path, HostPlatform.LINUX, warn=warnings.append)

    assert table.default_mapping is None
    assert len(table.commands_mapping) == 1
    assert any("default mapping" in warning for warning in warnings)
    with pytest.raises(ConfigurationError):
        build_command("/g/a.exe", "", table, HostPlatform.LINUX)


def test_malformed_extension_rules_are_skipped(tmp_path: Path) -> None:
    """Broken extension rules should be skipped while valid ones keep their order."""

    (tmp_path / "mappings.linux.json").write_text(
        json.dumps(
            {
                "defaultMapping": {"command": "xdg-open"},
                "commandsMapping": [
                    {"extensions": "exe", "command": "bad"},
                    {"extensions": ["exe"], "command": 42},
                    {"extensions": ["exe"], "command": "wine", "includeArgs": "maybe"},
                    {"extensions": ["exe"], "command": "good"},
                ],
            }
        ),
        encoding="utf-8",
    )
    warnings: list[str] = []

    table = load_command_mappings(tmp_path, HostPlatform.LINUX, warn=warnings.append)

    assert [rule.command for rule in table.commands_mapping] == ["good"]
    assert len(warnings) == 3


def test_load_exec_mappings_reads_rows_and_skips_invalid(tmp_path: Path) -> None:
    """Exec mapping rows need a `win32` path; blank platform fields become `None`."""

    path = tmp_path / "execs.json"
    path.write_text(
        json.dumps(
            [
                {"win32": "eXo/a.exe", "linux": "eXo/a", "darwin": ""},
                {"linux": "orphan"},
                "not-a-row",
            ]
        ),
        encoding="utf-8",
    )
    warnings: list[str] = []

    mappings = load_exec_mappings(path, warn=warnings.append)

    assert mappings == (ExecMapping(win32="eXo/a.exe", linux="eXo/a", darwin=None),)
    assert len(warnings) == 2


def test_missing_exec_mappings_file_is_tolerated(tmp_path: Path) -> None:
    """An absent exec mapping file yields no mappings and one warning."""

    warnings: list[str] = []

    assert load_exec_mappings(tmp_path / "execs.json", warn=warnings.append) == ()
    assert len(warnings) == 1


def test_mappings_filename_uses_platform_token() -> None:
    assert mappings_filename(HostPlatform.WIN32) == "mappings.win32.json"
    assert mappings_filename(HostPlatform.LINUX) == "mappings.linux.json"


@pytest.mark.parametrize("commands_mapping", [{}, "", 0])
def test_non_list_commands_mapping_is_reported_even_when_empty(commands_mapping: object) -> None:
    """A falsy non-list `commandsMapping` should still trigger the list warning."""

    warnings: list[str] = []

    table = parse_command_mappings(
        {"defaultMapping": {"command": "xdg-open"}, "commandsMapping": commands_mapping},
        warn=warnings.append,
    )

    assert table.commands_mapping == ()
    assert table.default_mapping is not None
    assert any("must be a list" in warning for warning in warnings)


def test_blank_extensions_string_is_rejected() -> None:
    warnings: list[str] = []

    table = parse_command_mappings(
        {
            "defaultMapping": {"command": "xdg-open"},
            "commandsMapping": [{"extensions": "", "command": "wine"}],
        },
        warn=warnings.append,
    )

    assert table.commands_mapping == ()
    assert len(warnings) == 1
