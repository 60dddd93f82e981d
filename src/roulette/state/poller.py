"""Background refresh loop for the image map store."""

from __future__ import annotations

import asyncio
import contextlib
import logging

from roulette._transport import MapSource
from roulette.exceptions import MapFetchError
from roulette.state.events import RefreshOutcome
from roulette.state.store import ImageMapStore

_logger = logging.getLogger(__name__)


class RefreshPoller:
    """Fetch → compare → swap, then sleep, forever.

    A failed fetch or a rejected payload leaves the store as it was and
    is retried on the next tick; there is no backoff and no retry limit.
    """

    def __init__(
        self,
        store: ImageMapStore,
        source: MapSource,
        interval: float,
    ) -> None:
        if interval <= 0:
            raise ValueError("interval must be positive")
        self._store = store
        self._source = source
        self._interval = interval
        self._task: asyncio.Task[None] | None = None

    @property
    def interval(self) -> float:
        return self._interval

    @property
    def is_running(self) -> bool:
        return self._task is not None and not self._task.done()

    async def poll_once(self) -> RefreshOutcome:
        """Run a single refresh tick and report what happened."""
        try:
            text = await self._source.fetch()
        except MapFetchError as exc:
            _logger.warning("Image map sync failed: %s", exc)
            return RefreshOutcome.FETCH_FAILED

        outcome = self._store.refresh(text)
        if outcome is RefreshOutcome.REPLACED:
            _logger.info("Synced image map images=%d", len(self._store.current()))
        else:
            _logger.debug("Image map sync outcome=%s", outcome)
        return outcome

    async def run(self) -> None:
        """Poll immediately, then once per interval until cancelled."""
        while True:
            await self.poll_once()
            await asyncio.sleep(self._interval)

    def start(self) -> None:
        if self.is_running:
            return
        self._task = asyncio.get_running_loop().create_task(self.run(), name="roulette-refresh")

    async def stop(self) -> None:
        task, self._task = self._task, None
        if task is None:
            return
        task.cancel()
        with contextlib.suppress(asyncio.CancelledError):
            await task
