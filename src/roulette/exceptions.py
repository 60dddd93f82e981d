"""Custom exception hierarchy for roulette."""

from __future__ import annotations


class RouletteError(Exception):
    """Base exception for all roulette errors."""


class RouletteConfigError(RouletteError):
    """Invalid or missing configuration."""


class ImageMapParseError(RouletteError):
    """Mapping text is not a flat JSON object of string to string."""


class MapFetchError(RouletteError):
    """Refresh source unreachable or returned a non-200 response."""

    def __init__(
        self,
        message: str,
        *,
        status_code: int | None = None,
        url: str = "",
    ) -> None:
        self.status_code = status_code
        self.url = url
        super().__init__(message)
