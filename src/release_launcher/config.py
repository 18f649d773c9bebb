"""Launcher configuration."""

from dataclasses import dataclass, field
from pathlib import Path

from release_launcher.constants import (
    DEFAULT_DOWNLOAD_TIMEOUT,
    DEFAULT_MAX_REDIRECTS,
    DEFAULT_METADATA_TIMEOUT,
    DEFAULT_OWNER,
    DEFAULT_REPO,
    DEFAULT_TOOL_NAME,
    GITHUB_API_BASE,
    GITHUB_REPOS_PATH,
    LATEST_PATH,
    RELEASES_PATH,
)

# Binaries are installed next to the launcher itself
PACKAGE_BIN_DIR = Path(__file__).resolve().parent / "bin"


@dataclass(frozen=True)
class LauncherConfig:
    """Where a tool is released and where its binary lives locally.

    ``install_dir`` holds exactly one binary named after ``tool_name``.
    Timeouts are in seconds.
    """

    owner: str
    repo: str
    tool_name: str
    install_dir: Path = field(default=PACKAGE_BIN_DIR)
    api_base: str = GITHUB_API_BASE
    metadata_timeout: float = DEFAULT_METADATA_TIMEOUT
    download_timeout: float = DEFAULT_DOWNLOAD_TIMEOUT
    max_redirects: int = DEFAULT_MAX_REDIRECTS
    log_level: str = "WARNING"

    def __post_init__(self) -> None:
        object.__setattr__(self, "install_dir", Path(self.install_dir))
        if self.max_redirects < 0:
            raise ValueError("max_redirects must not be negative")

    @property
    def latest_release_url(self) -> str:
        base = self.api_base.rstrip("/")
        return f"{base}/{GITHUB_REPOS_PATH}/{self.owner}/{self.repo}/{RELEASES_PATH}/{LATEST_PATH}"

    @property
    def request_headers(self) -> dict[str, str]:
        # GitHub rejects API requests without a User-Agent
        return {"User-Agent": self.tool_name}


DEFAULT_CONFIG = LauncherConfig(
    owner=DEFAULT_OWNER,
    repo=DEFAULT_REPO,
    tool_name=DEFAULT_TOOL_NAME,
)
