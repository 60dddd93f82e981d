"""Command-line entry point: ``roulette`` / ``python -m roulette``."""

from __future__ import annotations

import argparse
import logging
import sys

from aiohttp import web

from roulette.config import RouletteConfig
from roulette.exceptions import ImageMapParseError, RouletteConfigError
from roulette.server import create_app

_logger = logging.getLogger("roulette")


def _parse_args(argv: list[str] | None = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(
        prog="roulette",
        description="Serve redirects to randomly chosen images from a key → filename map.",
    )
    parser.add_argument("--host", default=None, help="Interface to bind (default: $HOST or 0.0.0.0)")
    parser.add_argument("--port", type=int, default=None, help="Port to bind (default: $PORT or 8080)")
    parser.add_argument("-v", "--verbose", action="store_true", help="Enable debug logging")
    return parser.parse_args(argv)


def main(argv: list[str] | None = None) -> int:
    args = _parse_args(argv)
    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.INFO,
        format="%(levelname)s %(name)s: %(message)s",
    )

    overrides: dict[str, object] = {}
    if args.host is not None:
        overrides["host"] = args.host
    if args.port is not None:
        overrides["port"] = args.port

    try:
        config = RouletteConfig.from_env(**overrides)
        app = create_app(config)
    except RouletteConfigError as exc:
        print(f"roulette: configuration error: {exc}", file=sys.stderr)
        return 2
    except (ImageMapParseError, OSError) as exc:
        print(f"roulette: cannot load image map: {exc}", file=sys.stderr)
        return 2

    _logger.info("Starting server host=%s port=%d", config.host, config.port)
    web.run_app(app, host=config.host, port=config.port, print=None)
    _logger.info("Server stopped")
    return 0


if __name__ == "__main__":
    sys.exit(main())
