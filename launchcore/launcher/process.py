"""Process spawning and lifecycle relay.

Responsibilities:
- Start a `ResolvedCommand` through the platform shell.
- Report spawn-level failures as a `SpawnOutcome` instead of raising.
- Relay output lines, relay errors, stdio closure and exit of each process to a
  listener, and complete the process's exit future.

The relay is observational: listener callbacks never change the exit future's
result.
"""

from __future__ import annotations

from collections.abc import Callable
from concurrent.futures import Future
from dataclasses import dataclass
from enum import Enum
import subprocess
import threading
from typing import IO, Protocol

from ..errors import RuntimeProcessError, SpawnError
from ..models.datatypes import ResolvedCommand


class LifecycleEventKind(str, Enum):
    """Signals relayed for every spawned process."""

    STDOUT = "stdout"
    STDERR = "stderr"
    ERROR = "error"
    DISCONNECT = "disconnect"
    EXIT = "exit"


@dataclass(frozen=True, slots=True)
class LifecycleEvent:
    """One observed lifecycle signal of a spawned process."""

    kind: LifecycleEventKind
    pid: int
    payload: str


LifecycleListener = Callable[[LifecycleEvent], None]


@dataclass(frozen=True, slots=True)
class ProcessHandle:
    """A started process and the future completed with its exit code."""

    pid: int
    command: ResolvedCommand
    exit_future: Future[int]

    def wait(self, timeout: float | None = None) -> int:
        """Block until the process exits and return its exit code."""

        return self.exit_future.result(timeout=timeout)


@dataclass(frozen=True, slots=True)
class SpawnOutcome:
    """Result of one spawn attempt: either a handle or a `SpawnError`."""

    command: ResolvedCommand
    handle: ProcessHandle | None = None
    error: SpawnError | None = None

    @property
    def ok(self) -> bool:
        return self.handle is not None

    def exit_future(self) -> Future[int]:
        """Return the exit future, failed with the spawn error when spawning failed."""

        if self.handle is not None:
            return self.handle.exit_future
        failed: Future[int] = Future()
        failed.set_exception(
            self.error or SpawnError(self.command.command, RuntimeError("no process"))
        )
        return failed


class ProcessSpawner(Protocol):
    """Protocol for process creation used by the launch orchestrator."""

    def spawn(self, command: ResolvedCommand, listener: LifecycleListener) -> SpawnOutcome:
        """Start `command` and relay its lifecycle to `listener`."""


class SubprocessSpawner:
    """Spawn commands through the system shell with `subprocess.Popen`."""

    def spawn(self, command: ResolvedCommand, listener: LifecycleListener) -> SpawnOutcome:
        try:
            process = subprocess.Popen(
                command.command,
                shell=True,
                cwd=command.cwd or None,
                stdin=subprocess.DEVNULL,
                stdout=subprocess.PIPE,
                stderr=subprocess.PIPE,
            )
        except (OSError, ValueError) as exc:
            return SpawnOutcome(command=command, error=SpawnError(command.command, exc))

        handle = ProcessHandle(pid=process.pid, command=command, exit_future=Future())
        ProcessRelay(process, handle, listener).start()
        return SpawnOutcome(command=command, handle=handle)


class ProcessRelay:
    """Forward a `Popen` object's output and exit to a lifecycle listener.

    The exit future completes as soon as the process exits. Output streams can
    outlive the process when a background child inherits them, so `disconnect`
    is emitted separately once the last stream closes.
    """

    def __init__(
        self,
        process: subprocess.Popen[bytes],
        handle: ProcessHandle,
        listener: LifecycleListener,
    ) -> None:
        self._process = process
        self._handle = handle
        self._listener = listener
        self._lock = threading.Lock()
        self._open_streams = 0

    def start(self) -> None:
        """Start one reader thread per output stream plus the exit waiter."""

        streams = [
            (stream, kind)
            for stream, kind in (
                (self._process.stdout, LifecycleEventKind.STDOUT),
                (self._process.stderr, LifecycleEventKind.STDERR),
            )
            if stream is not None
        ]
        self._open_streams = len(streams)
        for stream, kind in streams:
            threading.Thread(
                target=self._read,
                args=(stream, kind),
                name=f"launchcore-{kind.value}-{self._handle.pid}",
                daemon=True,
            ).start()
        threading.Thread(
            target=self._wait,
            name=f"launchcore-wait-{self._handle.pid}",
            daemon=True,
        ).start()

    def _read(self, stream: IO[bytes], kind: LifecycleEventKind) -> None:
        try:
            for raw_line in iter(stream.readline, b""):
                text = raw_line.decode("utf-8", errors="replace").strip()
                if text:
                    self._emit(kind, text)
        except (OSError, ValueError) as exc:
            error = RuntimeProcessError(self._handle.pid, exc)
            self._emit(LifecycleEventKind.ERROR, str(error))
        finally:
            stream.close()
            self._stream_closed()

    def _stream_closed(self) -> None:
        with self._lock:
            self._open_streams -= 1
            last = self._open_streams == 0
        if last:
            self._emit(LifecycleEventKind.DISCONNECT, "stdio closed")

    def _wait(self) -> None:
        returncode = self._process.wait()
        try:
            self._emit(LifecycleEventKind.EXIT, f"code={returncode}")
        finally:
            self._handle.exit_future.set_result(returncode)

    def _emit(self, kind: LifecycleEventKind, payload: str) -> None:
        self._listener(LifecycleEvent(kind=kind, pid=self._handle.pid, payload=payload))
