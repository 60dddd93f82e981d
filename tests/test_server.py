from __future__ import annotations

import asyncio
from collections.abc import AsyncIterator

import pytest
import pytest_asyncio
from aiohttp.test_utils import TestClient, TestServer

from roulette.config import RouletteConfig
from roulette.exceptions import ImageMapParseError, MapFetchError
from roulette.image_map import ImageMap
from roulette.server import CONTEXT_KEY, create_app
from roulette.state.store import ImageMapStore

_PREFIX = "https://cdn.example.com/images"
_EXAMPLE = '{"2024-01-01_UTC.jpg":"abc.jpg","2023-01-01_UTC.jpg":"def.jpg"}'


def _config(**overrides: object) -> RouletteConfig:
    return RouletteConfig(url_prefix=_PREFIX, **overrides)  # type: ignore[arg-type]


@pytest_asyncio.fixture
async def client() -> AsyncIterator[TestClient]:
    store = ImageMapStore(ImageMap.parse(_EXAMPLE))
    async with TestClient(TestServer(create_app(_config(), store))) as test_client:
        yield test_client


@pytest.mark.asyncio
async def test_random_image_redirects(client: TestClient) -> None:
    resp = await client.get("/image", allow_redirects=False)

    assert resp.status == 302
    assert resp.headers["Location"] in {f"{_PREFIX}/abc.jpg", f"{_PREFIX}/def.jpg"}
    assert "Cache-Control" not in resp.headers


@pytest.mark.asyncio
async def test_after_bound_selects_from_suffix(client: TestClient) -> None:
    for path in ("/image/after/2024", "/image/latest/after/2024"):
        for _ in range(10):
            resp = await client.get(path, allow_redirects=False)
            assert resp.status == 302
            assert resp.headers["Location"] == f"{_PREFIX}/abc.jpg"


@pytest.mark.asyncio
async def test_latest_image_redirects(client: TestClient) -> None:
    resp = await client.get("/image/latest", allow_redirects=False)
    assert resp.status == 302
    assert resp.headers["Location"] in {f"{_PREFIX}/abc.jpg", f"{_PREFIX}/def.jpg"}


@pytest.mark.asyncio
async def test_bound_past_every_key_is_not_found(client: TestClient) -> None:
    for path in ("/image/after/2030", "/image/latest/after/2030"):
        resp = await client.get(path, allow_redirects=False)
        assert resp.status == 404


@pytest.mark.asyncio
async def test_cache_query_sets_cache_control(client: TestClient) -> None:
    resp = await client.get("/image/after/2024", params={"cache": "1h"}, allow_redirects=False)
    assert resp.status == 302
    assert resp.headers["Cache-Control"] == "public, max-age=3600"


@pytest.mark.asyncio
async def test_invalid_cache_query_is_ignored(client: TestClient) -> None:
    resp = await client.get("/image", params={"cache": "10x"}, allow_redirects=False)
    assert resp.status == 302
    assert "Cache-Control" not in resp.headers


@pytest.mark.asyncio
async def test_health_reports_key_count(client: TestClient) -> None:
    resp = await client.get("/health")
    assert resp.status == 200
    assert await resp.text() == "2"


@pytest.mark.asyncio
async def test_robots(client: TestClient) -> None:
    resp = await client.get("/robots.txt")
    assert resp.status == 200
    assert resp.content_type == "text/plain"
    assert await resp.text() == "User-agent: *\nDisallow: /\n"


@pytest.mark.asyncio
async def test_empty_map_is_not_found() -> None:
    store = ImageMapStore(ImageMap.parse("{}"))
    async with TestClient(TestServer(create_app(_config(), store))) as test_client:
        for path in ("/image", "/image/latest"):
            resp = await test_client.get(path, allow_redirects=False)
            assert resp.status == 404
        assert await (await test_client.get("/health")).text() == "0"


class _ScriptedSource:
    def __init__(self, *responses: str | MapFetchError) -> None:
        self._responses = list(responses)
        self.calls = 0

    async def fetch(self) -> str:
        self.calls += 1
        item = self._responses[min(self.calls, len(self._responses)) - 1]
        if isinstance(item, MapFetchError):
            raise item
        return item


@pytest.mark.asyncio
async def test_refresh_runs_with_the_app() -> None:
    store = ImageMapStore(ImageMap.parse('{"2023-01-01_UTC.jpg":"def.jpg"}'))
    source = _ScriptedSource(MapFetchError("down", url="fake://"), "not json", _EXAMPLE)
    app = create_app(_config(sync_interval=0.01), store, source=source)

    async with TestClient(TestServer(app)) as test_client:
        for _ in range(200):
            if store.replacements:
                break
            await asyncio.sleep(0.01)
        resp = await test_client.get("/image/after/2024", allow_redirects=False)

    assert store.replacements == 1
    assert resp.headers["Location"] == f"{_PREFIX}/abc.jpg"
    calls = source.calls
    await asyncio.sleep(0.05)
    assert source.calls == calls


def test_create_app_loads_startup_map(tmp_path) -> None:  # type: ignore[no-untyped-def]
    path = tmp_path / "map.json"
    path.write_text(_EXAMPLE, encoding="utf-8")
    app = create_app(_config(image_map_path=str(path)))

    assert app[CONTEXT_KEY].store.current().sorted_keys == ("2023-01-01_UTC.jpg", "2024-01-01_UTC.jpg")


def test_create_app_rejects_malformed_startup_map(tmp_path) -> None:  # type: ignore[no-untyped-def]
    path = tmp_path / "map.json"
    path.write_text("[]", encoding="utf-8")
    with pytest.raises(ImageMapParseError):
        create_app(_config(image_map_path=str(path)))


def test_source_requires_interval() -> None:
    store = ImageMapStore(ImageMap.parse(_EXAMPLE))
    with pytest.raises(ValueError):
        create_app(_config(), store, source=_ScriptedSource(_EXAMPLE))
