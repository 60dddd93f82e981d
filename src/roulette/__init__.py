"""roulette - Redirects to random images from a refreshable key → filename map."""

from importlib.metadata import PackageNotFoundError, version

try:
    __version__ = version("roulette")
except PackageNotFoundError:
    __version__ = "0+local"
from roulette.config import RouletteConfig
from roulette.duration import parse_duration
from roulette.exceptions import (
    ImageMapParseError,
    MapFetchError,
    RouletteConfigError,
    RouletteError,
)
from roulette.image_map import ImageMap
from roulette.ordering import KeySlice, filter_from
from roulette.selection import select_biased, select_uniform
from roulette.state.events import RefreshOutcome
from roulette.state.poller import RefreshPoller
from roulette.state.store import ImageMapStore

__all__ = [
    "__version__",
    "ImageMap",
    "ImageMapParseError",
    "ImageMapStore",
    "KeySlice",
    "MapFetchError",
    "RefreshOutcome",
    "RefreshPoller",
    "RouletteConfig",
    "RouletteConfigError",
    "RouletteError",
    "filter_from",
    "parse_duration",
    "select_biased",
    "select_uniform",
]
