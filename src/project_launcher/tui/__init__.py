"""Terminal UI for Project Launcher."""

from .app import LauncherApp, run_tui

__all__ = ["LauncherApp", "run_tui"]
