"""Domain exceptions for launch orchestration and CLI diagnostics."""

from __future__ import annotations


class LaunchStageError(RuntimeError):
    """Raised when a specific launch stage fails."""

    def __init__(
        self,
        *,
        stage: str,
        detail: str,
        hint: str | None = None,
    ) -> None:
        """Initialize a stage-scoped launch error."""

        super().__init__(detail)
        self.stage = stage
        self.detail = detail
        self.hint = hint


class ConfigurationError(LaunchStageError):
    """Raised when a mapping table or launcher config cannot produce a usable command."""

    def __init__(self, detail: str, hint: str | None = None) -> None:
        super().__init__(stage="config", detail=detail, hint=hint)


class SpawnError(LaunchStageError):
    """Raised when the OS refuses to create a process."""

    def __init__(self, command: str, cause: BaseException) -> None:
        super().__init__(
            stage="spawn",
            detail=f"Failed to spawn `{command}`: {cause}",
            hint="Verify the executable exists and the working directory is accessible.",
        )
        self.command = command
        self.cause = cause


class RuntimeProcessError(LaunchStageError):
    """Raised inside the lifecycle relay when a started process hits an OS-level error.

    Instances are logged only and never propagated to launch callers.
    """

    def __init__(self, pid: int, cause: BaseException) -> None:
        super().__init__(stage="runtime", detail=f"Process {pid} failed: {cause}")
        self.pid = pid
        self.cause = cause
