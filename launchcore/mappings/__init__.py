"""Command mapping tables: loading and command construction."""

from .command_mapper import RuleKind, RuleSelection, build_command, quote_path, select_rule
from .loader import load_command_mappings, load_exec_mappings, mappings_filename

__all__ = [
    "RuleKind",
    "RuleSelection",
    "build_command",
    "load_command_mappings",
    "load_exec_mappings",
    "mappings_filename",
    "quote_path",
    "select_rule",
]
