# ABOUTME: Unit tests for VerseRange and RangeIndex.
# ABOUTME: Validates range normalization, parsing, and verse-to-record resolution with overlaps.

from dataclasses import dataclass

import pytest

from lectio.db.ranges import RangeIndex, VerseRange


@dataclass(frozen=True)
class FakeRecord:
    id: int
    range: VerseRange


class TestVerseRange:
    """Tests for the VerseRange value type."""

    def test_equal_end_normalizes_to_single(self) -> None:
        rng = VerseRange(5, 5)
        assert rng.end is None
        assert rng.is_single
        assert rng == VerseRange(5)

    def test_range_keeps_end(self) -> None:
        rng = VerseRange(5, 7)
        assert rng.end == 7
        assert rng.last == 7
        assert not rng.is_single

    def test_rejects_end_before_start(self) -> None:
        with pytest.raises(ValueError, match="before start"):
            VerseRange(7, 5)

    def test_rejects_verse_zero(self) -> None:
        with pytest.raises(ValueError):
            VerseRange(0)

    def test_contains_and_iterates(self) -> None:
        rng = VerseRange(5, 7)
        assert 6 in rng
        assert 8 not in rng
        assert list(rng) == [5, 6, 7]
        assert len(rng) == 3
        assert list(VerseRange(4)) == [4]

    def test_str(self) -> None:
        assert str(VerseRange(5)) == "5"
        assert str(VerseRange(5, 7)) == "5-7"

    def test_hashable(self) -> None:
        assert len({VerseRange(3), VerseRange(3, 3), VerseRange(3, 4)}) == 2

    def test_parse(self) -> None:
        assert VerseRange.parse("5") == VerseRange(5)
        assert VerseRange.parse(" 5 - 7 ") == VerseRange(5, 7)
        assert VerseRange.parse("9-9") == VerseRange(9)

    @pytest.mark.parametrize("text", ["", "a", "5-", "-5", "5-7-9"])
    def test_parse_rejects_garbage(self, text: str) -> None:
        with pytest.raises(ValueError):
            VerseRange.parse(text)

    def test_from_verses_collapses_to_min_max(self) -> None:
        """A non-contiguous selection becomes the span from its lowest to highest verse."""
        assert VerseRange.from_verses([9, 5, 7]) == VerseRange(5, 9)
        assert VerseRange.from_verses([4, 4]) == VerseRange(4)

    def test_from_verses_rejects_empty(self) -> None:
        with pytest.raises(ValueError, match="Empty"):
            VerseRange.from_verses([])


class TestRangeIndex:
    """Tests for RangeIndex lookups."""

    def test_every_covered_verse_resolves_to_the_record(self) -> None:
        record = FakeRecord(1, VerseRange(5, 7))
        index = RangeIndex([record])
        assert [index.get(v) for v in (5, 6, 7)] == [record, record, record]
        assert index.get(4) is None
        assert index.get(8) is None

    def test_records_are_not_duplicated(self) -> None:
        index = RangeIndex([FakeRecord(1, VerseRange(1, 3)), FakeRecord(2, VerseRange(10))])
        assert len(index) == 2
        assert [r.id for r in index.records()] == [1, 2]
        assert index.verses() == [1, 2, 3, 10]

    def test_record_owns_its_start_verse_on_overlap(self) -> None:
        wide = FakeRecord(1, VerseRange(1, 5))
        inner = FakeRecord(2, VerseRange(3))
        index = RangeIndex([wide, inner])
        assert index.get(3) is inner
        assert index.get(4) is wide

    def test_newest_record_wins_shared_start(self) -> None:
        older = FakeRecord(1, VerseRange(2, 4))
        newer = FakeRecord(2, VerseRange(2))
        index = RangeIndex([newer, older])
        assert index.get(2) is newer
        assert index.get(3) is older

    def test_earliest_start_wins_other_overlaps(self) -> None:
        first = FakeRecord(5, VerseRange(1, 4))
        second = FakeRecord(3, VerseRange(3, 6))
        index = RangeIndex([second, first])
        assert index.get(3) is second
        assert index.get(4) is first
        assert index.get(6) is second

    def test_projection_is_read_only(self) -> None:
        index = RangeIndex([FakeRecord(1, VerseRange(1, 2))])
        view = index.projection()
        assert set(view) == {1, 2}
        assert view[1] is view[2]
        with pytest.raises(TypeError):
            view[3] = view[1]  # type: ignore[index]
