"""Service configuration for roulette."""

from __future__ import annotations

import dataclasses
import os
from typing import Any

from roulette._constants import DEFAULT_HOST, DEFAULT_PORT, DEFAULT_SYNC_TIMEOUT
from roulette.exceptions import RouletteConfigError
from roulette.image_map import ImageMap


def _env_port(value: str | None) -> int:
    if value is None:
        return DEFAULT_PORT
    try:
        port = int(value.strip())
    except ValueError:
        return DEFAULT_PORT
    if not 0 < port < 65536:
        return DEFAULT_PORT
    return port


def _positive_float(name: str, value: str) -> float:
    try:
        parsed = float(value.strip())
    except ValueError as exc:
        raise RouletteConfigError(f"{name} must be a number of seconds, got {value!r}") from exc
    if parsed <= 0:
        raise RouletteConfigError(f"{name} must be positive, got {value!r}")
    return parsed


@dataclasses.dataclass(frozen=True)
class RouletteConfig:
    """Service configuration.

    Parameters
    ----------
    url_prefix : str
        Base URL joined with the mapped filename to build redirect targets.
    image_map_path : str or None
        Local mapping file read at startup. ``None`` uses the mapping
        bundled with the package.
    sync_url : str or None
        Remote mapping URL polled for updates.
    sync_interval : float or None
        Seconds between polls. Polling runs only when both ``sync_url``
        and ``sync_interval`` are set.
    sync_timeout : float
        Total timeout in seconds for one refresh fetch.
    host : str
        Interface to bind.
    port : int
        Port to bind.
    """

    url_prefix: str
    image_map_path: str | None = None
    sync_url: str | None = None
    sync_interval: float | None = None
    sync_timeout: float = DEFAULT_SYNC_TIMEOUT
    host: str = DEFAULT_HOST
    port: int = DEFAULT_PORT

    def __post_init__(self) -> None:
        if not self.url_prefix:
            raise RouletteConfigError("IMAGE_URL_PREFIX is required")
        if self.sync_interval is not None and self.sync_interval <= 0:
            raise RouletteConfigError("sync_interval must be positive")

    @property
    def sync_enabled(self) -> bool:
        return bool(self.sync_url) and self.sync_interval is not None

    def load_image_map(self) -> ImageMap:
        """Parse the startup mapping (file if configured, else embedded).

        Raises
        ------
        ImageMapParseError
            If the mapping text is malformed.
        OSError
            If ``image_map_path`` cannot be read.
        """
        if self.image_map_path:
            return ImageMap.from_path(self.image_map_path)
        return ImageMap.embedded()

    @classmethod
    def from_env(cls, **overrides: Any) -> RouletteConfig:
        """Create configuration from environment variables.

        Reads ``IMAGE_URL_PREFIX`` (required), ``IMAGE_MAP_PATH``,
        ``IMAGE_MAP_SYNC_URL``, ``IMAGE_MAP_SYNC_INTERVAL``,
        ``IMAGE_MAP_SYNC_TIMEOUT``, ``HOST`` and ``PORT``. Explicit keyword
        arguments override environment values.

        Raises
        ------
        RouletteConfigError
            If the prefix is missing or a sync setting is invalid.
        """
        env = os.environ

        _ENV_CONFIG_MAP = {
            "IMAGE_URL_PREFIX": "url_prefix",
            "IMAGE_MAP_PATH": "image_map_path",
            "IMAGE_MAP_SYNC_URL": "sync_url",
            "HOST": "host",
        }
        config_kwargs: dict[str, Any] = {}
        for env_key, field_name in _ENV_CONFIG_MAP.items():
            val = env.get(env_key)
            if val is not None:
                config_kwargs[field_name] = val

        interval_env = env.get("IMAGE_MAP_SYNC_INTERVAL")
        if interval_env is not None and "sync_interval" not in overrides:
            config_kwargs["sync_interval"] = _positive_float("IMAGE_MAP_SYNC_INTERVAL", interval_env)

        timeout_env = env.get("IMAGE_MAP_SYNC_TIMEOUT")
        if timeout_env is not None and "sync_timeout" not in overrides:
            config_kwargs["sync_timeout"] = _positive_float("IMAGE_MAP_SYNC_TIMEOUT", timeout_env)

        if "port" not in overrides:
            config_kwargs["port"] = _env_port(env.get("PORT"))

        config_kwargs.update(overrides)

        if "url_prefix" not in config_kwargs:
            raise RouletteConfigError("IMAGE_URL_PREFIX is required")

        return cls(**config_kwargs)
