"""Immutable key → filename mapping with a sorted key index."""

from __future__ import annotations

import dataclasses
from collections.abc import Mapping
from importlib import resources
from pathlib import Path
from types import MappingProxyType

from pydantic import TypeAdapter, ValidationError

from roulette._constants import EMBEDDED_IMAGE_MAP
from roulette._hashing import fingerprint
from roulette.exceptions import ImageMapParseError
from roulette.ordering import KeySlice, filter_from

_MAPPING_ADAPTER: TypeAdapter[dict[str, str]] = TypeAdapter(dict[str, str])


@dataclasses.dataclass(frozen=True, slots=True)
class ImageMap:
    """Parsed image mapping.

    Parameters
    ----------
    sorted_keys : tuple[str, ...]
        Every key of ``mapping``, ascending by code point.
    mapping : Mapping[str, str]
        Read-only key → filename mapping.
    fingerprint : int
        Fingerprint of the raw text this map was parsed from.

    Build instances with :meth:`parse`; the constructor does not check
    that ``sorted_keys`` and ``mapping`` agree.
    """

    sorted_keys: tuple[str, ...]
    mapping: Mapping[str, str]
    fingerprint: int

    @classmethod
    def parse(cls, raw: str) -> ImageMap:
        """Parse a flat JSON object of string keys to string values.

        Raises
        ------
        ImageMapParseError
            If *raw* is not valid JSON, or is JSON of any other shape
            (array, scalar, nested object, non-string value).
        """
        try:
            data = _MAPPING_ADAPTER.validate_json(raw, strict=True)
        except ValidationError as exc:
            first = exc.errors()[0]
            location = ".".join(str(part) for part in first["loc"]) or "<root>"
            raise ImageMapParseError(
                f"invalid image map at {location}: {first['msg']} ({exc.error_count()} error(s))"
            ) from exc

        return cls(
            sorted_keys=tuple(sorted(data)),
            mapping=MappingProxyType(data),
            fingerprint=fingerprint(raw),
        )

    @classmethod
    def from_path(cls, path: str | Path) -> ImageMap:
        """Read and parse a UTF-8 mapping file."""
        return cls.parse(Path(path).read_text(encoding="utf-8"))

    @classmethod
    def embedded(cls) -> ImageMap:
        """Parse the mapping bundled with the package."""
        text = resources.files("roulette").joinpath(EMBEDDED_IMAGE_MAP).read_text(encoding="utf-8")
        return cls.parse(text)

    def __len__(self) -> int:
        return len(self.sorted_keys)

    def keys_from(self, bound: str) -> KeySlice:
        """Keys ordinally at or after *bound* (all keys for an empty bound)."""
        return filter_from(self.sorted_keys, bound)

    def filename_for(self, key: str) -> str:
        """Return the filename behind *key*; ``KeyError`` if unknown."""
        return self.mapping[key]
