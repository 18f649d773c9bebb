"""Launcher for prebuilt binaries published as GitHub release assets."""
from release_launcher.config import DEFAULT_CONFIG, LauncherConfig
from release_launcher.launcher import launch, run_binary

__all__ = [
    "DEFAULT_CONFIG",
    "LauncherConfig",
    "launch",
    "run_binary",
]
