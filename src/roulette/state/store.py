"""Single-writer store for the current image map.

Readers take the current :class:`ImageMap` without locking. A writer
builds a complete replacement first and then swaps one reference, so a
reader holds either the old map or the new one, never a mix.
"""

from __future__ import annotations

import logging
import threading
from collections.abc import Callable
from datetime import UTC, datetime

from roulette._hashing import fingerprint
from roulette.exceptions import ImageMapParseError
from roulette.image_map import ImageMap
from roulette.state.events import RefreshOutcome

_logger = logging.getLogger(__name__)


def _utcnow() -> datetime:
    return datetime.now(UTC)


class ImageMapStore:
    """Holds the current image map and replaces it only on real changes."""

    def __init__(
        self,
        initial: ImageMap,
        *,
        clock: Callable[[], datetime] = _utcnow,
    ) -> None:
        self._clock = clock
        self._current = initial
        self._write_lock = threading.Lock()
        self._replaced_at = clock()
        self._replacements = 0

    def current(self) -> ImageMap:
        """Return the current snapshot.

        The snapshot is immutable and stays valid after a later swap, but
        callers should not hold it across requests.
        """
        return self._current

    @property
    def replaced_at(self) -> datetime:
        """When the current map was installed (construction or last swap)."""
        return self._replaced_at

    @property
    def replacements(self) -> int:
        """Number of successful swaps since construction."""
        return self._replacements

    def refresh(self, raw: str) -> RefreshOutcome:
        """Install *raw* as the new map if its content differs.

        Identical text is detected by fingerprint and never re-parsed.
        Malformed text is logged and ignored; the current map stays.
        """
        with self._write_lock:
            if fingerprint(raw) == self._current.fingerprint:
                return RefreshOutcome.UNCHANGED
            try:
                candidate = ImageMap.parse(raw)
            except ImageMapParseError as exc:
                _logger.warning("Rejected image map update: %s", exc)
                return RefreshOutcome.REJECTED
            self._current = candidate
            self._replaced_at = self._clock()
            self._replacements += 1
        return RefreshOutcome.REPLACED

    def swap_if_changed(self, raw: str) -> bool:
        """Return ``True`` if *raw* replaced the current map."""
        return self.refresh(raw) is RefreshOutcome.REPLACED
