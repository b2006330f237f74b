"""Module entrypoint for running launchcore as ``python -m launchcore``."""

from __future__ import annotations

from launchcore.cli import main


if __name__ == "__main__":
    main()
