"""Structured launch logging utilities.

Responsibilities:
- Emit concise, deterministic launch log lines through `loguru`.
- Act as the append-only `log` capability consumed by `GameLauncher`.
"""

from __future__ import annotations

import sys
from typing import TextIO

from loguru import logger

from ..models.datatypes import LogEntry


def _sanitize_source(value: object) -> str:
    """Convert a log source into a stable, shell-safe token."""

    raw = str(value).strip()
    if not raw:
        return "none"
    return "".join(
        character if character.isalnum() or character in {"-", "_", ".", ":", "/"} else "_"
        for character in raw
    )


class LaunchLogger:
    """Write launch log entries to a text sink in a deterministic format."""

    def __init__(self, sink: TextIO | None = None, level: str = "INFO") -> None:
        """Initialize logger sink and configure deterministic formatting."""

        self._sink = sink or sys.stderr
        self._level = level
        logger.remove()
        logger.add(self._sink, format="{message}", level=level, colorize=False)

    def __call__(self, entry: LogEntry) -> None:
        """Append one entry; usable directly as the launcher's `log` capability."""

        self._emit("INFO", entry.source, entry.content)

    def warning(self, message: str) -> None:
        """Emit a loader or configuration warning."""

        self._emit("WARNING", "Launcher", message)

    def _emit(self, level: str, source: str, content: str) -> None:
        logger.log(level, f"[launch] level={level} source={_sanitize_source(source)} {content}")
