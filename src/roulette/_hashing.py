"""Content fingerprints for change detection."""

from __future__ import annotations

import hashlib


def fingerprint(text: str) -> int:
    """Compute a 64-bit fingerprint of *text*.

    Only compared for equality within one process to decide whether a
    freshly fetched mapping differs from the current one.

    Parameters
    ----------
    text : str
        Raw mapping text exactly as received.

    Returns
    -------
    int
        Unsigned 64-bit BLAKE2b digest of the UTF-8 encoded text.
    """
    digest = hashlib.blake2b(text.encode("utf-8"), digest_size=8).digest()
    return int.from_bytes(digest, "big")
