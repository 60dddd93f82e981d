"""Random key selection: uniform and recency-biased."""

from __future__ import annotations

import math
import random
from collections.abc import Sequence

from roulette._constants import BIAS_DECAY

# Seeded from OS entropy; not reproducible across calls or processes.
_system_rng = random.SystemRandom()


def select_uniform(keys: Sequence[str], *, rng: random.Random | None = None) -> str | None:
    """Pick one key with equal probability, or ``None`` when *keys* is empty."""
    if not keys:
        return None
    source = rng if rng is not None else _system_rng
    return keys[source.randrange(len(keys))]


def biased_index(size: int, u: float, *, decay: float = BIAS_DECAY) -> int:
    """Map a uniform draw ``u`` in ``[0, 1)`` to a position in ``range(size)``.

    Position ``i`` has weight ``exp(i * decay)``. Counting back from the
    newest position ``j = size - 1 - i`` the weights form a truncated
    geometric series with ratio ``q = exp(-decay)``, whose CDF
    ``(1 - q**(j + 1)) / (1 - q**size)`` inverts in closed form. This keeps
    sampling O(1) and avoids overflowing ``exp`` on large maps.
    """
    if size <= 0:
        raise ValueError("size must be positive")
    if size == 1:
        return 0
    q = math.exp(-decay)
    total = -math.expm1(-decay * size)  # 1 - q**size
    j = math.floor(math.log1p(-u * total) / math.log(q))
    j = min(max(j, 0), size - 1)
    return size - 1 - j


def select_biased(keys: Sequence[str], *, rng: random.Random | None = None) -> str | None:
    """Pick one key, favouring later (larger) keys with exponential weights.

    Every position keeps a non-zero chance. "Later" means ordinally larger,
    which only matches "newer" when keys start with a sortable date.
    Returns ``None`` when *keys* is empty.
    """
    if not keys:
        return None
    source = rng if rng is not None else _system_rng
    return keys[biased_index(len(keys), source.random())]
