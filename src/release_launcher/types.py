"""Core type definitions"""

from dataclasses import dataclass
from enum import Enum

OperatingSystem = Enum(
    "OperatingSystem", {"DARWIN": "darwin", "LINUX": "linux", "WINDOWS": "windows"}
)
Architecture = Enum("Architecture", {"AMD64": "amd64", "ARM64": "arm64"})


@dataclass(frozen=True)
class PlatformKey:
    """Normalized (OS, architecture) pair used to pick a release asset"""

    os: OperatingSystem
    arch: Architecture

    @property
    def is_windows(self) -> bool:
        return self.os is OperatingSystem.WINDOWS

    def __str__(self) -> str:
        return f"{self.os.value}-{self.arch.value}"


@dataclass(frozen=True)
class ReleaseAsset:
    """Downloadable file attached to a release"""

    name: str
    download_url: str
