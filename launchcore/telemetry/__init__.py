"""Launch logging."""

from .logger import LaunchLogger

__all__ = ["LaunchLogger"]
