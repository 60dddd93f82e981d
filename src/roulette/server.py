"""aiohttp.web application serving random image redirects."""

from __future__ import annotations

import dataclasses
import logging
from collections.abc import AsyncIterator, Callable, Sequence

import aiohttp
from aiohttp import web

from roulette._constants import ROBOTS_TXT
from roulette._transport import HttpMapSource, MapSource
from roulette.config import RouletteConfig
from roulette.duration import parse_duration
from roulette.redirect import build_redirect
from roulette.selection import select_biased, select_uniform
from roulette.state.poller import RefreshPoller
from roulette.state.store import ImageMapStore

_logger = logging.getLogger(__name__)

Selector = Callable[[Sequence[str]], str | None]


@dataclasses.dataclass(frozen=True, slots=True)
class AppContext:
    """Process-wide state shared by handlers and the refresh task."""

    config: RouletteConfig
    store: ImageMapStore
    source: MapSource | None = None


CONTEXT_KEY = web.AppKey("roulette_context", AppContext)


def _select(request: web.Request, selector: Selector, bound: str = "") -> web.HTTPException:
    ctx = request.app[CONTEXT_KEY]
    cache_seconds = parse_duration(request.query.get("cache"))
    snapshot = ctx.store.current()
    key = selector(snapshot.keys_from(bound))
    if key is None:
        return web.HTTPNotFound()
    return build_redirect(ctx.config.url_prefix, snapshot.filename_for(key), cache_seconds)


async def random_image(request: web.Request) -> web.StreamResponse:
    raise _select(request, select_uniform)


async def random_image_after(request: web.Request) -> web.StreamResponse:
    raise _select(request, select_uniform, request.match_info["bound"])


async def latest_image(request: web.Request) -> web.StreamResponse:
    raise _select(request, select_biased)


async def latest_image_after(request: web.Request) -> web.StreamResponse:
    raise _select(request, select_biased, request.match_info["bound"])


async def health(request: web.Request) -> web.Response:
    return web.Response(text=str(len(request.app[CONTEXT_KEY].store.current())))


async def robots(request: web.Request) -> web.Response:
    return web.Response(text=ROBOTS_TXT, content_type="text/plain")


async def _refresh_ctx(app: web.Application) -> AsyncIterator[None]:
    """Run the refresh poller for the lifetime of the application."""
    ctx = app[CONTEXT_KEY]
    config = ctx.config
    if not config.sync_enabled and ctx.source is None:
        yield
        return
    assert config.sync_interval is not None  # noqa: S101

    http_session: aiohttp.ClientSession | None = None
    source = ctx.source
    if source is None:
        assert config.sync_url is not None  # noqa: S101
        http_session = aiohttp.ClientSession(timeout=aiohttp.ClientTimeout(total=config.sync_timeout))
        source = HttpMapSource(config.sync_url, http_session)

    poller = RefreshPoller(ctx.store, source, config.sync_interval)
    _logger.info("Starting sync loop url=%s interval=%ss", config.sync_url, config.sync_interval)
    poller.start()
    try:
        yield
    finally:
        await poller.stop()
        if http_session is not None:
            await http_session.close()


def create_app(
    config: RouletteConfig,
    store: ImageMapStore | None = None,
    *,
    source: MapSource | None = None,
) -> web.Application:
    """Build the application.

    Parameters
    ----------
    config : RouletteConfig
        Service configuration.
    store : ImageMapStore or None
        Pre-built store. When omitted the startup mapping is loaded from
        ``config``; a malformed mapping raises ``ImageMapParseError``.
    source : MapSource or None
        Refresh source overriding the HTTP one built from ``sync_url``.
        Requires ``config.sync_interval``.
    """
    if store is None:
        store = ImageMapStore(config.load_image_map())
        _logger.info("Loaded image map images=%d", len(store.current()))
    if source is not None and config.sync_interval is None:
        raise ValueError("a refresh source needs config.sync_interval")

    app = web.Application()
    app[CONTEXT_KEY] = AppContext(config=config, store=store, source=source)
    app.router.add_get("/health", health)
    app.router.add_get("/image", random_image)
    app.router.add_get("/image/after/{bound}", random_image_after)
    app.router.add_get("/image/latest", latest_image)
    app.router.add_get("/image/latest/after/{bound}", latest_image_after)
    app.router.add_get("/robots.txt", robots)
    app.cleanup_ctx.append(_refresh_ctx)
    return app
