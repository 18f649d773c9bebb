import asyncio
from dataclasses import dataclass, field

import pytest
import pytest_asyncio
from aiohttp import web
from aiohttp.test_utils import TestServer

from release_launcher.config import LauncherConfig
from release_launcher.types import Architecture, OperatingSystem, PlatformKey


@dataclass
class ReleaseState:
    """What the fake release server serves, and what it has seen"""
    assets: dict[str, bytes] = field(default_factory=dict)
    redirects: int = 0
    metadata_status: int = 200
    metadata_body: bytes | None = None
    metadata_delay: float = 0.0
    user_agents: list[str] = field(default_factory=list)
    hits: list[str] = field(default_factory=list)


def build_release_app(state: ReleaseState) -> web.Application:
    async def latest_release(request: web.Request) -> web.StreamResponse:
        state.hits.append(request.path)
        state.user_agents.append(request.headers.get("User-Agent", ""))
        if state.metadata_delay:
            await asyncio.sleep(state.metadata_delay)
        if state.metadata_status == 304:
            return web.Response(status=304)
        if state.metadata_status != 200:
            return web.json_response({"message": "Not Found"}, status=state.metadata_status)
        if state.metadata_body is not None:
            return web.Response(body=state.metadata_body, content_type="application/json")

        origin = request.url.origin()
        return web.json_response({
            "tag_name": "v1.2.3",
            "assets": [
                {
                    "name": name,
                    "browser_download_url": str(origin.with_path(f"/hop/{state.redirects}/{name}")),
                }
                for name in state.assets
            ],
        })

    async def hop(request: web.Request) -> web.StreamResponse:
        state.hits.append(request.path)
        remaining = int(request.match_info["remaining"])
        name = request.match_info["name"]
        if remaining > 0:
            # Relative Location on purpose
            raise web.HTTPFound(location=f"/hop/{remaining - 1}/{name}")
        if name not in state.assets:
            raise web.HTTPNotFound()
        return web.Response(body=state.assets[name], content_type="application/octet-stream")

    async def loop(request: web.Request) -> web.StreamResponse:
        state.hits.append(request.path)
        raise web.HTTPFound(location=str(request.url))

    async def no_location(request: web.Request) -> web.StreamResponse:
        return web.Response(status=302)

    async def status(request: web.Request) -> web.StreamResponse:
        return web.Response(status=int(request.match_info["code"]), text="nope")

    async def slow(request: web.Request) -> web.StreamResponse:
        await asyncio.sleep(1.0)
        return web.Response(body=b"late")

    async def truncated(request: web.Request) -> web.StreamResponse:
        # Promises more bytes than it sends, then drops the connection
        response = web.StreamResponse()
        response.content_length = 100_000
        await response.prepare(request)
        await response.write(b"x" * 1000)
        request.transport.close()
        return response

    app = web.Application()
    app.router.add_get("/repos/{owner}/{repo}/releases/latest", latest_release)
    app.router.add_get("/hop/{remaining}/{name}", hop)
    app.router.add_get("/loop", loop)
    app.router.add_get("/no-location", no_location)
    app.router.add_get("/status/{code}", status)
    app.router.add_get("/slow", slow)
    app.router.add_get("/truncated", truncated)
    return app


@pytest.fixture
def release_state() -> ReleaseState:
    return ReleaseState()


@pytest_asyncio.fixture
async def release_server(release_state: ReleaseState):
    """Local HTTP server standing in for the GitHub API and asset hosting"""
    server = TestServer(build_release_app(release_state), host="127.0.0.1")
    await server.start_server()
    try:
        yield server
    finally:
        await server.close()


@pytest.fixture
def config(release_server: TestServer, tmp_path) -> LauncherConfig:
    return LauncherConfig(
        owner="acme",
        repo="tool",
        tool_name="tool",
        install_dir=tmp_path / "bin",
        api_base=str(release_server.make_url("/")),
        metadata_timeout=5.0,
        download_timeout=5.0,
    )


@pytest.fixture
def linux_amd64() -> PlatformKey:
    return PlatformKey(os=OperatingSystem.LINUX, arch=Architecture.AMD64)
