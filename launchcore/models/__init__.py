"""Shared typed data models for launchcore.

This package contains dataclasses used across resolver, mapper and launcher
modules to avoid cross-module coupling and circular imports.
"""

from .datatypes import (
    EMPTY_COMMAND_RULE,
    AdditionalApplication,
    CommandMappingTable,
    CommandRule,
    DialogOptions,
    ExecMapping,
    GameRecord,
    LaunchRequest,
    LogEntry,
    ResolvedCommand,
)

__all__ = [
    "EMPTY_COMMAND_RULE",
    "AdditionalApplication",
    "CommandMappingTable",
    "CommandRule",
    "DialogOptions",
    "ExecMapping",
    "GameRecord",
    "LaunchRequest",
    "LogEntry",
    "ResolvedCommand",
]
