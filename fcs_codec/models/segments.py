from __future__ import annotations

from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Iterator, List, Mapping, Optional, Tuple

import numpy as np

from fcs_codec.errors import InvalidKeywordError, MissingKeywordError


@dataclass(frozen=True)
class SegmentOffsets:
    """
    Inclusive byte range ``[start, end]`` of one segment, as written in the header.

    ``0..=0`` means the segment is absent (or that its offsets overflowed the
    header and live in the text segment instead).
    """
    start: int = 0
    end: int = 0

    @property
    def is_empty(self) -> bool:
        return self.start == 0 and self.end == 0

    @property
    def length(self) -> int:
        if self.is_empty or self.end < self.start:
            return 0
        return self.end - self.start + 1

    def as_slice(self) -> slice:
        """Python slice selecting the segment bytes (empty slice when absent)."""
        if self.is_empty:
            return slice(0, 0)
        return slice(self.start, self.end + 1)

    def __str__(self) -> str:
        return f"{self.start}..={self.end}"


@dataclass(frozen=True)
class Header:
    """
    Decoded 58-byte header.

    version:
      Six-character format identifier, e.g. ``FCS3.0``, copied verbatim.
    text_offsets / data_offsets / analysis_offsets:
      Byte ranges of the other segments, relative to the start of the file.
    """
    version: str
    text_offsets: SegmentOffsets
    data_offsets: SegmentOffsets
    analysis_offsets: SegmentOffsets = SegmentOffsets()


def _freeze_pairs(pairs: Mapping[str, str]) -> Mapping[str, str]:
    if isinstance(pairs, MappingProxyType):
        return pairs
    return MappingProxyType(dict(pairs))


@dataclass(frozen=True)
class Text:
    """
    Decoded text segment: the delimiter plus a read-only keyword mapping.

    Keys are stored uppercase. The mapping keeps insertion order so that a
    re-encoded segment lists keywords in the order they were read, but lookups
    never depend on it.
    """
    delimiter: str
    pairs: Mapping[str, str] = field(default_factory=dict)

    def __post_init__(self) -> None:
        object.__setattr__(self, "pairs", _freeze_pairs(self.pairs))

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Text):
            return NotImplemented
        return self.delimiter == other.delimiter and dict(self.pairs) == dict(other.pairs)

    def __hash__(self) -> int:
        return hash((self.delimiter, frozenset(self.pairs.items())))

    def __getitem__(self, key: str) -> str:
        try:
            return self.pairs[key.upper()]
        except KeyError:
            raise MissingKeywordError(key.upper()) from None

    def __contains__(self, key: object) -> bool:
        return isinstance(key, str) and key.upper() in self.pairs

    def __iter__(self) -> Iterator[str]:
        return iter(self.pairs)

    def __len__(self) -> int:
        return len(self.pairs)

    def get(self, key: str, default: Optional[str] = None) -> Optional[str]:
        return self.pairs.get(key.upper(), default)

    def keys(self):
        return self.pairs.keys()

    def items(self):
        return self.pairs.items()

    def _int_keyword(self, key: str) -> int:
        raw = self[key]
        try:
            value = int(raw.strip())
        except ValueError:
            raise InvalidKeywordError(key, raw) from None
        if value < 0:
            raise InvalidKeywordError(key, raw, "must not be negative")
        return value

    @property
    def parameter_count(self) -> int:
        """Number of parameters per event (``$PAR``), always at least 1."""
        value = self._int_keyword("$PAR")
        if value == 0:
            raise InvalidKeywordError("$PAR", self["$PAR"], "must be at least 1")
        return value

    @property
    def event_count(self) -> Optional[int]:
        """Number of events (``$TOT``), or None when the keyword is absent."""
        if "$TOT" not in self:
            return None
        return self._int_keyword("$TOT")

    def parameter_names(self) -> List[str]:
        """Short names ``$PnN`` for n = 1..$PAR, falling back to ``P<n>``."""
        return [self.get(f"$P{n}N", f"P{n}") for n in range(1, self.parameter_count + 1)]

    def replace_pairs(self, updates: Mapping[str, str]) -> "Text":
        """Return a new Text with ``updates`` applied (keys uppercased, order kept)."""
        merged = dict(self.pairs)
        for k, v in updates.items():
            merged[k.upper()] = str(v)
        return Text(delimiter=self.delimiter, pairs=merged)


@dataclass(frozen=True, eq=False)
class Data:
    """
    Decoded data segment.

    events:
      Flat float32 array; logically ``n_events x $PAR`` in row-major order.
      The array is an owned copy and is marked read-only.
    dropped_bytes:
      Trailing bytes (0..3) that did not form a complete 32-bit value.
    """
    events: np.ndarray
    dropped_bytes: int = 0
    warnings: Tuple[str, ...] = ()

    def __post_init__(self) -> None:
        ev = np.array(self.events, dtype=np.float32, copy=True).reshape(-1)
        ev.setflags(write=False)
        object.__setattr__(self, "events", ev)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Data):
            return NotImplemented
        return self.dropped_bytes == other.dropped_bytes and np.array_equal(self.events, other.events)

    def __len__(self) -> int:
        return int(self.events.size)
