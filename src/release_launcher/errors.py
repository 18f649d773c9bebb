"""Error handling for the release launcher."""
from typing import Any, Dict, Iterable, Optional

from release_launcher.constants import SIGNAL_EXIT_BASE
from release_launcher.logging import get_logger

logger = get_logger(__name__)


def log_error(
    error: Exception,
    context: Optional[Dict[str, Any]] = None,
    level: str = "error",
) -> None:
    """Log an error with context at the given level name."""
    error_info: Dict[str, Any] = {
        "error_type": error.__class__.__name__,
        "error_message": str(error),
    }
    if context:
        error_info["context"] = context
    if isinstance(error, LauncherError):
        error_info["exit_code"] = error.exit_code
        error_info["details"] = error.details

    getattr(logger, level)("launcher_error", **error_info)


class LauncherError(Exception):
    """Base error class for the launcher.

    Every launcher error ends the current invocation; ``exit_code`` is the
    status the process exits with.
    """

    def __init__(
        self,
        message: str,
        exit_code: int = 1,
        details: Optional[Dict[str, Any]] = None,
    ):
        super().__init__(message)
        self.exit_code = exit_code
        self.details = details or {}


class UnsupportedPlatformError(LauncherError):
    """Host OS/architecture has no prebuilt binary."""
    def __init__(self, system: str, machine: str):
        super().__init__(
            f"Unsupported platform: {system}-{machine}",
            details={"system": system, "machine": machine},
        )


class NetworkError(LauncherError):
    """Release metadata could not be fetched or parsed."""
    def __init__(self, message: str, url: str, status: Optional[int] = None):
        details: Dict[str, Any] = {"url": url}
        if status is not None:
            details["status"] = status
        super().__init__(message, details=details)


class RequestTimeoutError(LauncherError):
    """A metadata request or download exceeded its time limit."""
    def __init__(self, url: str, timeout: float):
        super().__init__(
            f"Request to {url} timed out after {timeout:g}s",
            details={"url": url, "timeout": timeout},
        )


class AssetNotFoundError(LauncherError):
    """No release asset matches the expected file name."""
    def __init__(self, expected: str, available: Iterable[str]):
        available = list(available)
        listing = ", ".join(available) if available else "(none)"
        super().__init__(
            f"Binary not found: no release asset named {expected}\n"
            f"Available assets: {listing}",
            details={"expected": expected, "available": available},
        )


class DownloadError(LauncherError):
    """Asset download failed."""
    def __init__(self, message: str, url: str, status: Optional[int] = None):
        details: Dict[str, Any] = {"url": url}
        if status is not None:
            details["status"] = status
        super().__init__(message, details=details)


class RedirectLoopError(DownloadError):
    """Download kept redirecting past the allowed number of hops."""
    def __init__(self, url: str, max_redirects: int):
        super().__init__(f"Too many redirects (more than {max_redirects}) downloading {url}", url)
        self.details["max_redirects"] = max_redirects


class InstallPermissionError(LauncherError):
    """Binary could not be written or made executable at its install path."""
    def __init__(self, path: str, reason: str):
        super().__init__(
            f"Cannot install binary at {path}: {reason}",
            details={"path": path},
        )


class ChildSpawnError(LauncherError):
    """Binary could not be started."""
    def __init__(self, path: str, reason: str):
        super().__init__(
            f"Failed to start {path}: {reason}",
            details={"path": path},
        )


class ChildSignalError(LauncherError):
    """Binary was terminated by a signal."""
    def __init__(self, path: str, signal_number: int):
        super().__init__(
            f"{path} terminated by signal {signal_number}",
            exit_code=SIGNAL_EXIT_BASE + signal_number,
            details={"path": path, "signal": signal_number},
        )
