"""Top-level package for launchcore.

This package turns launch requests for a game collection into platform-correct
process invocations. The main orchestration entry point is `GameLauncher`.
"""

from .launcher.orchestrator import GameLauncher, LaunchContext

__all__ = ["GameLauncher", "LaunchContext", "__version__"]

__version__ = "0.1.0"
