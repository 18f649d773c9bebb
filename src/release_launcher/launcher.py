"""Binary launch: install on first use, then exec with inherited stdio."""

import asyncio
import contextlib
from pathlib import Path
import sys
from typing import Awaitable, Callable, Optional, Sequence

from release_launcher.binaries.fetcher import fetch_binary
from release_launcher.binaries.platforms import asset_name, binary_path, resolve_platform
from release_launcher.config import LauncherConfig
from release_launcher.errors import ChildSignalError, ChildSpawnError
from release_launcher.logging import get_logger
from release_launcher.types import PlatformKey

logger = get_logger(__name__)

Fetcher = Callable[[LauncherConfig, PlatformKey], Awaitable[Path]]


async def run_binary(path: Path, args: Sequence[str]) -> int:
    """Run ``path`` with ``args`` and return its exit code.

    The child shares this process's stdin, stdout and stderr. A child killed
    by signal N raises ChildSignalError, whose exit code is 128 + N.
    """
    logger.debug("spawning_binary", path=str(path), args=list(args))

    try:
        process = await asyncio.create_subprocess_exec(str(path), *args)
    except OSError as e:
        raise ChildSpawnError(str(path), e.strerror or str(e)) from e

    try:
        returncode = await process.wait()
    except asyncio.CancelledError:
        with contextlib.suppress(ProcessLookupError):
            process.terminate()
        raise

    logger.debug("binary_exited", path=str(path), returncode=returncode)

    if returncode < 0:
        raise ChildSignalError(str(path), -returncode)
    return returncode


async def launch(
    config: LauncherConfig,
    args: Sequence[str],
    *,
    platform_key: Optional[PlatformKey] = None,
    fetcher: Fetcher = fetch_binary,
) -> int:
    """Ensure the tool binary is installed, run it, and return its exit code."""
    key = platform_key or resolve_platform()
    path = binary_path(config, key)

    if not path.exists():
        logger.info("binary_missing", path=str(path))
        print(f"Downloading {asset_name(config.tool_name, key)}...", file=sys.stderr)
        path = await fetcher(config, key)

    return await run_binary(path, args)
