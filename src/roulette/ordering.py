"""Lexicographic range filtering over sorted key tuples."""

from __future__ import annotations

import bisect
from collections.abc import Iterator, Sequence
from typing import overload


class KeySlice(Sequence[str]):
    """Read-only view of ``keys[start:]`` that does not copy the tail.

    ``keys`` must already be sorted ascending; the view itself never
    re-checks that.
    """

    __slots__ = ("_keys", "_start")

    def __init__(self, keys: tuple[str, ...], start: int = 0) -> None:
        self._keys = keys
        self._start = max(0, min(start, len(keys)))

    @property
    def start(self) -> int:
        """Offset of the first visible key in the underlying tuple."""
        return self._start

    def __len__(self) -> int:
        return len(self._keys) - self._start

    @overload
    def __getitem__(self, index: int) -> str: ...

    @overload
    def __getitem__(self, index: slice) -> tuple[str, ...]: ...

    def __getitem__(self, index: int | slice) -> str | tuple[str, ...]:
        if isinstance(index, slice):
            return tuple(self._keys[self._start :][index])
        size = len(self)
        if index < 0:
            index += size
        if not 0 <= index < size:
            raise IndexError("KeySlice index out of range")
        return self._keys[self._start + index]

    def __iter__(self) -> Iterator[str]:
        for i in range(self._start, len(self._keys)):
            yield self._keys[i]

    def __eq__(self, other: object) -> bool:
        if isinstance(other, KeySlice):
            return tuple(self) == tuple(other)
        if isinstance(other, (list, tuple)):
            return tuple(self) == tuple(other)
        return NotImplemented

    def __hash__(self) -> int:
        return hash(tuple(self))

    def __repr__(self) -> str:
        return f"KeySlice(start={self._start}, len={len(self)})"


def filter_from(sorted_keys: tuple[str, ...], bound: str) -> KeySlice:
    """Return the suffix of *sorted_keys* whose keys are ``>= bound``.

    Comparison is plain ``str`` ordering (code points), so ``"2024"``
    keeps ``"2024-01-01_UTC.jpg"`` and everything after it. An empty
    bound keeps every key; a bound past the last key keeps none.
    """
    if not bound:
        return KeySlice(sorted_keys, 0)
    return KeySlice(sorted_keys, bisect.bisect_left(sorted_keys, bound))
