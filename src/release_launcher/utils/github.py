import asyncio
import json

import aiohttp

from release_launcher.config import LauncherConfig
from release_launcher.constants import GITHUB_JSON_MEDIA_TYPE
from release_launcher.errors import NetworkError, RequestTimeoutError
from release_launcher.logging import get_logger
from release_launcher.types import ReleaseAsset

logger = get_logger(__name__)


def parse_release_assets(payload: dict) -> list[ReleaseAsset]:
    """Build ReleaseAsset records from a GitHub release payload."""
    assets = []
    for item in payload.get("assets") or []:
        if not isinstance(item, dict) or not item.get("name"):
            continue
        assets.append(
            ReleaseAsset(
                name=item["name"],
                download_url=item.get("browser_download_url", ""),
            )
        )
    return assets


async def fetch_latest_release(
    session: aiohttp.ClientSession, config: LauncherConfig
) -> list[ReleaseAsset]:
    """Fetch the asset list of the latest release of ``config.owner/config.repo``."""
    url = config.latest_release_url
    timeout = aiohttp.ClientTimeout(total=config.metadata_timeout)
    headers = {**config.request_headers, "Accept": GITHUB_JSON_MEDIA_TYPE}

    logger.debug("fetching_release_metadata", url=url)

    try:
        async with session.get(url, headers=headers, timeout=timeout) as response:
            if not 200 <= response.status < 300:
                raise NetworkError(
                    f"Release metadata request failed with status {response.status}",
                    url,
                    status=response.status,
                )
            payload = await response.json(content_type=None)
    except asyncio.TimeoutError as e:
        raise RequestTimeoutError(url, config.metadata_timeout) from e
    except aiohttp.ClientError as e:
        raise NetworkError(f"Failed to reach release metadata endpoint: {e}", url) from e
    except (json.JSONDecodeError, UnicodeDecodeError) as e:
        raise NetworkError(f"Release metadata is not valid JSON: {e}", url) from e

    if not isinstance(payload, dict):
        raise NetworkError("Release metadata has unexpected shape", url)

    assets = parse_release_assets(payload)
    logger.info(
        "release_metadata_fetched",
        url=url,
        tag=payload.get("tag_name"),
        assets=[a.name for a in assets],
    )
    return assets
