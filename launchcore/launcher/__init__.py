"""Launch orchestration and process lifecycle relay."""

from .orchestrator import GameLauncher, LaunchContext
from .process import (
    LifecycleEvent,
    LifecycleEventKind,
    ProcessHandle,
    SpawnOutcome,
    SubprocessSpawner,
)

__all__ = [
    "GameLauncher",
    "LaunchContext",
    "LifecycleEvent",
    "LifecycleEventKind",
    "ProcessHandle",
    "SpawnOutcome",
    "SubprocessSpawner",
]
