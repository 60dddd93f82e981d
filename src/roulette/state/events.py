"""Refresh cycle outcomes."""

from __future__ import annotations

from enum import StrEnum


class RefreshOutcome(StrEnum):
    """Result of one refresh attempt against the store."""

    UNCHANGED = "unchanged"
    REPLACED = "replaced"
    REJECTED = "rejected"
    FETCH_FAILED = "fetch_failed"
