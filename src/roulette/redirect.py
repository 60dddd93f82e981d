"""Redirect responses pointing at mapped image files."""

from __future__ import annotations

from aiohttp import hdrs, web


def redirect_url(prefix: str, filename: str) -> str:
    return f"{prefix}/{filename}"


def cache_control(seconds: int) -> str:
    return f"public, max-age={seconds}"


def build_redirect(prefix: str, filename: str, cache_seconds: int | None = None) -> web.HTTPFound:
    """Build a 302 to ``<prefix>/<filename>``.

    When *cache_seconds* is given the response may be cached publicly for
    that long; otherwise no ``Cache-Control`` header is set.
    """
    headers: dict[str, str] = {}
    if cache_seconds is not None:
        headers[hdrs.CACHE_CONTROL] = cache_control(cache_seconds)
    return web.HTTPFound(redirect_url(prefix, filename), headers=headers)
