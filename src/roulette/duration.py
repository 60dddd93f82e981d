"""Compact cache duration notation (``60s``, ``5m``, ``1h``, ``7d``)."""

from __future__ import annotations

import re

from roulette._constants import DURATION_UNITS

_DURATION_RE = re.compile(r"(\d+)([smhd])", re.ASCII)


def parse_duration(value: str | None) -> int | None:
    """Convert a duration like ``"5m"`` to seconds.

    Returns ``None`` for anything outside ``^\\d+[smhd]$``: other units,
    upper-case units, signs, fractions, whitespace, combined units.
    """
    if not value:
        return None
    match = _DURATION_RE.fullmatch(value)
    if match is None:
        return None
    amount, unit = match.groups()
    return int(amount) * DURATION_UNITS[unit]
