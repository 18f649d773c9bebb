"""Platform detection and mapping."""
import platform
from pathlib import Path
from typing import Optional

from release_launcher.config import LauncherConfig
from release_launcher.errors import UnsupportedPlatformError
from release_launcher.types import Architecture, OperatingSystem, PlatformKey

# Host identifiers as reported by Python (platform.system/machine) and Node
# (process.platform/arch), lowercased
OS_MAPPINGS = {
    "darwin": OperatingSystem.DARWIN,
    "linux": OperatingSystem.LINUX,
    "windows": OperatingSystem.WINDOWS,
    "win32": OperatingSystem.WINDOWS,
}

ARCH_MAPPINGS = {
    "x86_64": Architecture.AMD64,
    "amd64": Architecture.AMD64,
    "x64": Architecture.AMD64,
    "arm64": Architecture.ARM64,
    "aarch64": Architecture.ARM64,
}


def resolve_platform(system: Optional[str] = None, machine: Optional[str] = None) -> PlatformKey:
    """Map host OS and CPU identifiers to a PlatformKey.

    Both identifiers default to the running interpreter's host. Raises
    UnsupportedPlatformError for anything outside the lookup tables.
    """
    if system is None:
        system = platform.system()
    if machine is None:
        machine = platform.machine()

    os_key = OS_MAPPINGS.get(system.strip().lower())
    arch_key = ARCH_MAPPINGS.get(machine.strip().lower())
    if os_key is None or arch_key is None:
        raise UnsupportedPlatformError(system, machine)

    return PlatformKey(os=os_key, arch=arch_key)


def binary_name(tool_name: str, key: PlatformKey) -> str:
    """Local file name of the tool binary."""
    return f"{tool_name}.exe" if key.is_windows else tool_name


def asset_name(tool_name: str, key: PlatformKey) -> str:
    """Release asset name: ``<tool>-<os>-<arch>`` plus ``.exe`` on windows."""
    return binary_name(f"{tool_name}-{key.os.value}-{key.arch.value}", key)


def binary_path(config: LauncherConfig, key: PlatformKey) -> Path:
    """Fixed local path of the tool binary for this platform."""
    return config.install_dir / binary_name(config.tool_name, key)


def is_platform_supported() -> bool:
    """Check if current platform is supported."""
    try:
        resolve_platform()
        return True
    except UnsupportedPlatformError:
        return False
