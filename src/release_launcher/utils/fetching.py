import asyncio
import os
from pathlib import Path
from typing import Optional
from urllib.parse import urljoin

import aiohttp

from release_launcher.constants import (
    BINARY_MODE,
    DEFAULT_DOWNLOAD_TIMEOUT,
    DEFAULT_MAX_REDIRECTS,
    DOWNLOAD_CHUNK_SIZE,
    PARTIAL_SUFFIX,
    REDIRECT_STATUSES,
)
from release_launcher.errors import (
    DownloadError,
    InstallPermissionError,
    RedirectLoopError,
    RequestTimeoutError,
)
from release_launcher.logging import get_logger

logger = get_logger(__name__)


def partial_path(dest: Path) -> Path:
    return dest.with_name(dest.name + PARTIAL_SUFFIX)


def discard_partial(path: Path) -> None:
    """Remove a partially written download, best-effort."""
    try:
        path.unlink(missing_ok=True)
    except OSError as e:
        logger.warning("partial_download_not_removed", path=str(path), error=str(e))


async def _follow_and_write(
    session: aiohttp.ClientSession,
    url: str,
    dest: Path,
    headers: Optional[dict[str, str]],
    max_redirects: int,
    timeout: float,
) -> int:
    """GET ``url`` following at most ``max_redirects`` redirects; stream the body to ``dest``."""
    client_timeout = aiohttp.ClientTimeout(total=timeout)
    current = url

    try:
        for _ in range(max_redirects + 1):
            async with session.get(
                current, headers=headers, timeout=client_timeout, allow_redirects=False
            ) as response:
                if response.status in REDIRECT_STATUSES:
                    location = response.headers.get("Location")
                    if not location:
                        raise DownloadError(
                            f"Redirect from {current} has no Location header",
                            current,
                            status=response.status,
                        )
                    target = urljoin(str(response.url), location)
                    logger.debug(
                        "redirect_followed", status=response.status, source=current, target=target
                    )
                    current = target
                    continue

                if response.status != 200:
                    raise DownloadError(
                        f"Download failed with status {response.status}",
                        current,
                        status=response.status,
                    )

                written = 0
                with open(dest, "wb") as f:
                    async for chunk in response.content.iter_chunked(DOWNLOAD_CHUNK_SIZE):
                        f.write(chunk)
                        written += len(chunk)
                return written
    except asyncio.TimeoutError as e:
        raise RequestTimeoutError(current, timeout) from e
    except aiohttp.ClientError as e:
        raise DownloadError(f"Failed to download {current}: {e}", current) from e
    except OSError as e:
        raise DownloadError(f"Failed to write {dest}: {e}", current) from e

    raise RedirectLoopError(url, max_redirects)


async def download_url(
    session: aiohttp.ClientSession,
    url: str,
    dest: Path,
    *,
    headers: Optional[dict[str, str]] = None,
    max_redirects: int = DEFAULT_MAX_REDIRECTS,
    timeout: float = DEFAULT_DOWNLOAD_TIMEOUT,
) -> Path:
    """Download ``url`` to ``dest`` and mark it executable.

    The body is streamed into a sibling ``.part`` file which replaces
    ``dest`` only once it is complete and executable, so ``dest`` is never
    observed half-written. Any failure removes the partial file.
    """
    partial = partial_path(dest)
    logger.debug("download_started", url=url, destination=str(dest))

    try:
        size = await _follow_and_write(session, url, partial, headers, max_redirects, timeout)

        try:
            partial.chmod(BINARY_MODE)
        except OSError as e:
            raise InstallPermissionError(str(dest), str(e)) from e

        try:
            os.replace(partial, dest)
        except OSError as e:
            raise DownloadError(f"Failed to move download into {dest}: {e}", url) from e
    except BaseException:
        discard_partial(partial)
        raise

    logger.info("download_complete", url=url, destination=str(dest), size=size)
    return dest
