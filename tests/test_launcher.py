"""Tests for spawning the binary and the launch sequence."""
import json
import sys
from pathlib import Path
from unittest.mock import AsyncMock

import pytest

from release_launcher.config import LauncherConfig
from release_launcher.errors import AssetNotFoundError, ChildSignalError, ChildSpawnError
from release_launcher.launcher import launch, run_binary

PYTHON = Path(sys.executable)
posix_only = pytest.mark.skipif(sys.platform == "win32", reason="needs a POSIX shell script")


def write_script(path: Path, body: str) -> Path:
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(f"#!/bin/sh\n{body}\n")
    path.chmod(0o755)
    return path


@pytest.fixture
def launcher_config(tmp_path) -> LauncherConfig:
    return LauncherConfig(owner="acme", repo="tool", tool_name="tool", install_dir=tmp_path / "bin")


@pytest.mark.asyncio
@pytest.mark.parametrize("code", [0, 1, 2, 127])
async def test_run_binary_relays_exit_code(code):
    assert await run_binary(PYTHON, ["-c", f"import sys; sys.exit({code})"]) == code


@pytest.mark.asyncio
async def test_run_binary_forwards_arguments_verbatim(tmp_path):
    out = tmp_path / "argv.json"
    script = "import json, sys; open(sys.argv[1], 'w').write(json.dumps(sys.argv[2:]))"
    forwarded = ["--flag", "value with spaces", "-x", "--", "last"]

    code = await run_binary(PYTHON, ["-c", script, str(out), *forwarded])

    assert code == 0
    assert json.loads(out.read_text()) == forwarded


@pytest.mark.asyncio
async def test_run_binary_inherits_stdio(capfd):
    """Child output goes straight to this process's stdout/stderr"""
    script = "import sys; print('to stdout'); print('to stderr', file=sys.stderr)"

    await run_binary(PYTHON, ["-c", script])

    captured = capfd.readouterr()
    assert "to stdout" in captured.out
    assert "to stderr" in captured.err


@pytest.mark.asyncio
async def test_run_binary_missing_file(tmp_path):
    with pytest.raises(ChildSpawnError) as exc_info:
        await run_binary(tmp_path / "nope", [])

    assert exc_info.value.exit_code == 1


@pytest.mark.asyncio
@posix_only
async def test_run_binary_signal_maps_to_128_plus_signal():
    script = "import os, signal; os.kill(os.getpid(), signal.SIGTERM)"

    with pytest.raises(ChildSignalError) as exc_info:
        await run_binary(PYTHON, ["-c", script])

    assert exc_info.value.exit_code == 128 + 15
    assert exc_info.value.details["signal"] == 15


@pytest.mark.asyncio
@posix_only
async def test_launch_existing_binary_skips_fetch(launcher_config, linux_amd64):
    write_script(launcher_config.install_dir / "tool", "exit 7")
    fetcher = AsyncMock()

    code = await launch(launcher_config, [], platform_key=linux_amd64, fetcher=fetcher)

    assert code == 7
    fetcher.assert_not_awaited()


@pytest.mark.asyncio
@posix_only
async def test_launch_missing_binary_fetches_first(launcher_config, linux_amd64, tmp_path):
    out = tmp_path / "args.txt"

    async def fake_fetch(config, key):
        return write_script(config.install_dir / "tool", f'echo "$@" > "{out}"; exit 3')

    fetcher = AsyncMock(side_effect=fake_fetch)

    code = await launch(launcher_config, ["a", "b"], platform_key=linux_amd64, fetcher=fetcher)

    assert code == 3
    fetcher.assert_awaited_once_with(launcher_config, linux_amd64)
    assert out.read_text().strip() == "a b"


@pytest.mark.asyncio
async def test_launch_fetch_failure_does_not_spawn(launcher_config, linux_amd64, monkeypatch):
    fetcher = AsyncMock(side_effect=AssetNotFoundError("tool-linux-amd64", ["other"]))
    spawn = AsyncMock()
    monkeypatch.setattr("release_launcher.launcher.run_binary", spawn)

    with pytest.raises(AssetNotFoundError):
        await launch(launcher_config, ["x"], platform_key=linux_amd64, fetcher=fetcher)

    spawn.assert_not_awaited()


@pytest.mark.asyncio
async def test_launch_announces_first_run_download(launcher_config, linux_amd64, capsys):
    fetcher = AsyncMock(return_value=PYTHON)

    code = await launch(
        launcher_config,
        ["-c", "import sys; sys.exit(4)"],
        platform_key=linux_amd64,
        fetcher=fetcher,
    )

    assert code == 4
    assert "Downloading tool-linux-amd64..." in capsys.readouterr().err
