"""HTTP source for remote image map refreshes."""

from __future__ import annotations

import logging
from typing import Protocol

import aiohttp

from roulette._constants import USER_AGENT
from roulette.exceptions import MapFetchError

_logger = logging.getLogger(__name__)


class MapSource(Protocol):
    """Anything that can produce raw mapping text on demand.

    The poller only depends on this protocol so tests can pass simple
    fakes instead of a live HTTP session.
    """

    async def fetch(self) -> str:
        ...


class HttpMapSource:
    """GET the mapping from a fixed URL through a shared aiohttp session."""

    def __init__(self, url: str, http_session: aiohttp.ClientSession) -> None:
        self._url = url
        self._http = http_session

    @property
    def url(self) -> str:
        return self._url

    async def fetch(self) -> str:
        """Return the response body.

        Raises
        ------
        MapFetchError
            On transport failure or any status other than 200.
        """
        _logger.debug("GET %s", self._url)

        try:
            async with self._http.get(self._url, headers={"user-agent": USER_AGENT}) as resp:
                if resp.status != 200:
                    raise MapFetchError(
                        f"HTTP {resp.status} from {self._url}",
                        status_code=resp.status,
                        url=self._url,
                    )
                return await resp.text()
        except MapFetchError:
            raise
        except (aiohttp.ClientError, TimeoutError, UnicodeDecodeError) as exc:
            raise MapFetchError(
                f"Request to {self._url} failed: {exc!r}",
                url=self._url,
            ) from exc
