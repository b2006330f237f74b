"""Shared pytest fixtures for the full launchcore test suite."""

from __future__ import annotations

from collections.abc import Callable

import pytest

from launchcore.launcher.orchestrator import GameLauncher, LaunchContext
from launchcore.models.datatypes import CommandMappingTable, CommandRule, ExecMapping
from launchcore.platforms import HostPlatform
from tests.launch_fakes import RecordingCapabilities, RecordingSpawner


@pytest.fixture
def linux_table() -> CommandMappingTable:
    """Linux-style table routing `.exe` files through the compatibility layer."""

    return CommandMappingTable(
        default_mapping=CommandRule(extensions=frozenset(), command="xdg-open"),
        commands_mapping=(
            CommandRule(
                extensions=frozenset({"exe"}),
                command="flatpak run com.retro_exo.wine",
            ),
            CommandRule(extensions=frozenset({"command"}), command=""),
        ),
    )


@pytest.fixture
def windows_table() -> CommandMappingTable:
    """Windows-style table opening files with `start` from their own directory."""

    return CommandMappingTable(
        default_mapping=CommandRule(
            extensions=frozenset(),
            command='start ""',
            set_cwd_to_file_dir=True,
        ),
        commands_mapping=(
            CommandRule(
                extensions=frozenset({"command"}),
                command="",
                set_cwd_to_file_dir=False,
            ),
        ),
    )


@pytest.fixture
def capabilities() -> RecordingCapabilities:
    return RecordingCapabilities()


@pytest.fixture
def spawner() -> RecordingSpawner:
    return RecordingSpawner()


@pytest.fixture
def make_launcher(
    linux_table: CommandMappingTable,
    capabilities: RecordingCapabilities,
    spawner: RecordingSpawner,
) -> Callable[..., GameLauncher]:
    """Build a Linux `GameLauncher` over `/exodos` with recording doubles."""

    def _make(
        mappings: CommandMappingTable | None = None,
        exec_mappings: tuple[ExecMapping, ...] = (),
        platform: HostPlatform = HostPlatform.LINUX,
        caps: RecordingCapabilities | None = None,
        fake_spawner: RecordingSpawner | None = None,
    ) -> GameLauncher:
        recording = caps or capabilities
        context = LaunchContext(
            collection_root="/exodos",
            mappings=mappings if mappings is not None else linux_table,
            open_dialog=recording.open_dialog,
            open_external=recording.open_external,
            log=recording.log,
            exec_mappings=exec_mappings,
            platform=platform,
            working_dir="/work",
        )
        return GameLauncher(context, spawner=fake_spawner or spawner)

    return _make
