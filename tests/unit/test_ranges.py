import pytest

from mention_console.composer.ranges import ConsumedRanges


def test_overlaps() -> None:
    ranges = ConsumedRanges()
    ranges.claim(5, 10)
    ranges.claim(0, 2)

    assert ranges.overlaps(4, 6)
    assert ranges.overlaps(9, 12)
    assert ranges.overlaps(6, 7)
    assert ranges.overlaps(1, 3)
    assert not ranges.overlaps(2, 5)
    assert not ranges.overlaps(10, 20)
    assert list(ranges) == [(0, 2), (5, 10)]


def test_claim_rejects_overlap() -> None:
    ranges = ConsumedRanges()
    ranges.claim(0, 4)
    with pytest.raises(ValueError):
        ranges.claim(3, 6)
    assert len(ranges) == 1


def test_empty_claim_is_ignored() -> None:
    ranges = ConsumedRanges()
    ranges.claim(3, 3)
    assert len(ranges) == 0
