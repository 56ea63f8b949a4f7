# ABOUTME: Verse range value type and the per-chapter index for range annotations.
# ABOUTME: Normalizes single-verse ranges once so lookup, update, and delete agree everywhere.

import re
from collections.abc import Iterable, Iterator, Mapping
from dataclasses import dataclass
from types import MappingProxyType
from typing import Generic, Protocol, TypeVar

_RANGE_RE = re.compile(r"^\s*(\d+)\s*(?:[-–]\s*(\d+)\s*)?$")


@dataclass(frozen=True)
class VerseRange:
    """An inclusive span of verses within one chapter.

    A single verse is always stored with `end=None`: passing `end == start`
    normalizes to None, so `VerseRange(5) == VerseRange(5, 5)`.
    """

    start: int
    end: int | None = None

    def __post_init__(self) -> None:
        if self.start < 1:
            raise ValueError(f"Verse numbers start at 1, got {self.start}")
        if self.end is not None:
            if self.end < self.start:
                raise ValueError(f"Range end {self.end} is before start {self.start}")
            if self.end == self.start:
                object.__setattr__(self, "end", None)

    @classmethod
    def from_verses(cls, verses: Iterable[int]) -> "VerseRange":
        """Collapse a verse selection to the range spanning its lowest and highest verse."""
        selected = sorted(set(verses))
        if not selected:
            raise ValueError("Empty verse selection")
        return cls(selected[0], selected[-1])

    @classmethod
    def parse(cls, text: str) -> "VerseRange":
        """Parse "5" or "5-7"."""
        match = _RANGE_RE.match(text)
        if match is None:
            raise ValueError(f"Not a verse range: {text!r}")
        start = int(match.group(1))
        end = int(match.group(2)) if match.group(2) else None
        return cls(start, end)

    @property
    def last(self) -> int:
        return self.end if self.end is not None else self.start

    @property
    def is_single(self) -> bool:
        return self.end is None

    def __contains__(self, verse: object) -> bool:
        return isinstance(verse, int) and self.start <= verse <= self.last

    def __iter__(self) -> Iterator[int]:
        return iter(range(self.start, self.last + 1))

    def __len__(self) -> int:
        return self.last - self.start + 1

    def __str__(self) -> str:
        return str(self.start) if self.is_single else f"{self.start}-{self.end}"


class RangeRecord(Protocol):
    @property
    def id(self) -> int: ...

    @property
    def range(self) -> VerseRange: ...


R = TypeVar("R", bound=RangeRecord)


class RangeIndex(Generic[R]):
    """Maps each covered verse of a chapter to the range record that owns it.

    Records are held once, by id; verses point at ids. When ranges overlap
    (callers are expected to avoid this), a record always owns its own start
    verse, the newest record winning a shared start, and any other covered
    verse goes to the earliest-starting record that reaches it.
    """

    def __init__(self, records: Iterable[R]) -> None:
        self._records: dict[int, R] = {}
        self._owner: dict[int, int] = {}

        ordered = sorted(records, key=lambda r: (r.range.start, r.id))
        for record in ordered:
            self._records[record.id] = record
            self._owner[record.range.start] = record.id
        for record in ordered:
            for verse in record.range:
                self._owner.setdefault(verse, record.id)

    def get(self, verse: int) -> R | None:
        record_id = self._owner.get(verse)
        return self._records[record_id] if record_id is not None else None

    def __contains__(self, verse: object) -> bool:
        return verse in self._owner

    def __len__(self) -> int:
        return len(self._records)

    def records(self) -> list[R]:
        """Distinct records, ordered by start verse."""
        return sorted(self._records.values(), key=lambda r: (r.range.start, r.id))

    def verses(self) -> list[int]:
        return sorted(self._owner)

    def projection(self) -> Mapping[int, R]:
        """Read-only flattened view: every covered verse mapped to its record."""
        return MappingProxyType({verse: self._records[rid] for verse, rid in self._owner.items()})
