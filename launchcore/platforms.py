"""Host platform identity.

Responsibilities:
- Name the operating systems the launcher distinguishes (`win32`, `linux`, `darwin`).
- Provide the path flavour and separator for each, so resolver and mapper code
  never reads process-global state.
"""

from __future__ import annotations

from enum import Enum
import ntpath
import posixpath
import sys
from types import ModuleType


class HostPlatform(str, Enum):
    """Operating system identity passed explicitly into path and command helpers."""

    WIN32 = "win32"
    LINUX = "linux"
    DARWIN = "darwin"

    @classmethod
    def current(cls) -> HostPlatform:
        """Return the platform of the running interpreter.

        Unix flavours other than macOS are treated as Linux.
        """

        return cls.parse(sys.platform)

    @classmethod
    def parse(cls, value: str) -> HostPlatform:
        """Map a `sys.platform`-style token onto a known platform."""

        token = value.strip().lower()
        if token in {"win32", "windows", "cygwin"}:
            return cls.WIN32
        if token in {"darwin", "macos", "mac"}:
            return cls.DARWIN
        return cls.LINUX

    @property
    def is_windows(self) -> bool:
        return self is HostPlatform.WIN32

    @property
    def path_module(self) -> ModuleType:
        """Return `ntpath` on Windows and `posixpath` elsewhere."""

        return ntpath if self.is_windows else posixpath

    @property
    def sep(self) -> str:
        return "\\" if self.is_windows else "/"

    def fix_slashes(self, path: str) -> str:
        """Convert both slash styles to this platform's separator."""

        return path.replace("\\", "/").replace("/", self.sep)
