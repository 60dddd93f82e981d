from __future__ import annotations

import pytest

from roulette.ordering import KeySlice, filter_from

_KEYS: tuple[str, ...] = (
    "2022-01-01_00-00-00_UTC.jpg",
    "2023-06-15_12-30-00_UTC.jpg",
    "2024-01-01_00-00-00_UTC.jpg",
    "2024-06-15_12-30-00_UTC.jpg",
    "2025-01-01_00-00-00_UTC.jpg",
)


@pytest.mark.parametrize(
    ("bound", "expected_len"),
    [
        ("2024", 3),
        ("2024-06", 2),
        ("2024-06-15", 2),
        ("2024-06-15_12-30-00_UTC.jpg", 2),
        ("2024-06-15_12-30-00_UTC.jpg~", 1),
        ("2030", 0),
        ("2000", 5),
        ("", 5),
    ],
)
def test_filter_from_keeps_keys_at_or_after_bound(bound: str, expected_len: int) -> None:
    filtered = filter_from(_KEYS, bound)

    assert len(filtered) == expected_len
    assert all(key >= bound for key in filtered)
    assert len(filtered) == sum(1 for key in _KEYS if key >= bound)


def test_filter_from_is_a_suffix() -> None:
    filtered = filter_from(_KEYS, "2024")
    assert tuple(filtered) == _KEYS[2:]
    assert filtered.start == 2


def test_filter_from_empty_keys() -> None:
    assert len(filter_from((), "2024")) == 0
    assert len(filter_from((), "")) == 0


def test_key_slice_indexing() -> None:
    view = KeySlice(_KEYS, 3)

    assert view[0] == _KEYS[3]
    assert view[-1] == _KEYS[-1]
    assert view[0:1] == (_KEYS[3],)
    assert view == list(_KEYS[3:])
    with pytest.raises(IndexError):
        view[2]
    with pytest.raises(IndexError):
        view[-3]


def test_key_slice_clamps_start() -> None:
    assert len(KeySlice(_KEYS, 99)) == 0
    assert len(KeySlice(_KEYS, -1)) == len(_KEYS)
