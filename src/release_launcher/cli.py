"""Console entry points."""
import argparse
import asyncio
import sys
from typing import Optional, Sequence

from release_launcher.binaries.fetcher import fetch_binary
from release_launcher.binaries.platforms import asset_name, binary_path, resolve_platform
from release_launcher.config import DEFAULT_CONFIG, LauncherConfig
from release_launcher.constants import INTERRUPTED_EXIT_CODE
from release_launcher.errors import LauncherError, log_error
from release_launcher.launcher import launch
from release_launcher.logging import configure_logging, get_logger

logger = get_logger(__name__)


def main(
    argv: Optional[Sequence[str]] = None, config: LauncherConfig = DEFAULT_CONFIG
) -> int:
    """Run the tool binary with this process's arguments; return its exit code.

    The launcher has no flags of its own: every argument goes to the binary.
    """
    args = list(sys.argv[1:] if argv is None else argv)
    configure_logging(config.log_level)
    logger.debug("launch_requested", tool=config.tool_name, args=args)

    try:
        return asyncio.run(launch(config, args))
    except LauncherError as e:
        log_error(e, {"tool": config.tool_name}, level="debug")
        print(f"{config.tool_name}: {e}", file=sys.stderr)
        return e.exit_code
    except KeyboardInterrupt:
        return INTERRUPTED_EXIT_CODE


def build_parser(config: LauncherConfig = DEFAULT_CONFIG) -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog=f"{config.tool_name}-install",
        description=f"Download the latest {config.tool_name} release binary",
    )
    parser.add_argument(
        "--force", action="store_true", help="Download again even if already installed"
    )
    return parser


def install_main(
    argv: Optional[Sequence[str]] = None, config: LauncherConfig = DEFAULT_CONFIG
) -> int:
    """Install the tool binary ahead of its first launch."""
    args = build_parser(config).parse_args(argv)
    configure_logging(config.log_level)
    logger.debug("install_requested", tool=config.tool_name, force=args.force)

    try:
        key = resolve_platform()
        path = binary_path(config, key)
        if path.exists() and not args.force:
            print(f"{config.tool_name} is already installed at {path}", file=sys.stderr)
            return 0

        print(f"Downloading {asset_name(config.tool_name, key)}...", file=sys.stderr)
        asyncio.run(fetch_binary(config, key))
    except LauncherError as e:
        log_error(e, {"tool": config.tool_name, "force": args.force}, level="debug")
        print(f"Failed to install: {e}", file=sys.stderr)
        return e.exit_code
    except KeyboardInterrupt:
        return INTERRUPTED_EXIT_CODE

    print("Done.", file=sys.stderr)
    return 0
