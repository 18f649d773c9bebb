"""Binary management functionality."""
from release_launcher.binaries.fetcher import fetch_binary, select_asset
from release_launcher.binaries.platforms import (
    asset_name,
    binary_name,
    binary_path,
    is_platform_supported,
    resolve_platform,
)

__all__ = [
    "fetch_binary",
    "select_asset",
    "asset_name",
    "binary_name",
    "binary_path",
    "is_platform_supported",
    "resolve_platform",
]
