"""Release asset resolution and binary download."""
from pathlib import Path
from typing import Iterable

import aiohttp

from release_launcher.binaries.platforms import asset_name, binary_path
from release_launcher.config import LauncherConfig
from release_launcher.errors import AssetNotFoundError, InstallPermissionError
from release_launcher.logging import get_logger
from release_launcher.types import PlatformKey, ReleaseAsset
from release_launcher.utils.fetching import download_url
from release_launcher.utils.github import fetch_latest_release

logger = get_logger(__name__)


def select_asset(assets: Iterable[ReleaseAsset], expected_name: str) -> ReleaseAsset:
    """Pick the asset whose name is exactly ``expected_name``."""
    assets = list(assets)
    for asset in assets:
        if asset.name == expected_name:
            return asset

    logger.debug(
        "asset_not_found",
        expected=expected_name,
        available=[a.name for a in assets],
    )
    raise AssetNotFoundError(expected_name, (a.name for a in assets))


async def fetch_binary(config: LauncherConfig, key: PlatformKey) -> Path:
    """Download the latest release binary for ``key`` into the install dir.

    Overwrites any binary already installed there.
    """
    expected = asset_name(config.tool_name, key)
    dest = binary_path(config, key)

    logger.info("fetching_binary", tool=config.tool_name, platform=str(key), asset=expected)

    async with aiohttp.ClientSession(headers=config.request_headers) as session:
        assets = await fetch_latest_release(session, config)
        asset = select_asset(assets, expected)
        logger.info("asset_selected", asset=asset.name, url=asset.download_url)

        try:
            config.install_dir.mkdir(parents=True, exist_ok=True)
        except OSError as e:
            raise InstallPermissionError(str(config.install_dir), str(e)) from e

        await download_url(
            session,
            asset.download_url,
            dest,
            max_redirects=config.max_redirects,
            timeout=config.download_timeout,
        )

    logger.info("binary_installed", tool=config.tool_name, path=str(dest))
    return dest
