"""Application path resolution.

Responsibilities:
- Map a metadata-relative application path onto the collection root.
- Rewrite batch scripts to their Unix shell-script siblings outside Windows.
- Substitute native executables from exec mappings when requested.

Resolution is a pure string transformation: it performs no I/O and never
fails, so malformed paths only surface later as spawn errors.
"""

from __future__ import annotations

from collections.abc import Sequence

from .models.datatypes import ExecMapping
from .platforms import HostPlatform

_BATCH_EXTENSION = ".bat"
_SHELL_SCRIPT_EXTENSION = ".command"


def resolve_application_path(
    relative_path: str,
    collection_root: str,
    exec_mappings: Sequence[ExecMapping],
    native: bool,
    platform: HostPlatform,
) -> str:
    """Resolve a collection-relative application path to an absolute path.

    Args:
        relative_path: Path as stored in game metadata (either slash style).
        collection_root: Root directory of the game collection.
        exec_mappings: Ordered Windows-to-native executable translations.
        native: Whether the game's platform prefers native executables.
        platform: Platform the command will run on.

    Returns:
        Absolute path using the platform's separator.
    """

    file_path = relative_path

    if not platform.is_windows and file_path.endswith(_BATCH_EXTENSION):
        file_path = file_path[: -len(_BATCH_EXTENSION)] + _SHELL_SCRIPT_EXTENSION

    if native and not platform.is_windows:
        file_path = _native_substitute(file_path, exec_mappings, platform)

    return join_collection_path(collection_root, file_path, platform)


def join_collection_path(collection_root: str, relative_path: str, platform: HostPlatform) -> str:
    """Join a relative path onto the collection root and normalize separators.

    Leading separators on `relative_path` do not discard the root.
    """

    flavour = platform.path_module
    root = platform.fix_slashes(collection_root)
    relative = platform.fix_slashes(relative_path)
    if not root:
        return flavour.normpath(relative) if relative else relative
    if not relative:
        return flavour.normpath(root)
    return flavour.normpath(f"{root}{platform.sep}{relative}")


def _native_substitute(
    file_path: str,
    exec_mappings: Sequence[ExecMapping],
    platform: HostPlatform,
) -> str:
    """Return the native equivalent of `file_path` from the first matching row."""

    for mapping in exec_mappings:
        if mapping.win32 != file_path:
            continue
        if platform is HostPlatform.DARWIN:
            return mapping.darwin or mapping.win32
        return mapping.linux or mapping.win32
    return file_path
