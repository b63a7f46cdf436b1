from __future__ import annotations

from bisect import bisect_right


class ConsumedRanges:
    """Sorted, non-overlapping ``[start, end)`` intervals claimed during one pass."""

    def __init__(self) -> None:
        self._starts: list[int] = []
        self._ends: list[int] = []

    def overlaps(self, start: int, end: int) -> bool:
        i = bisect_right(self._starts, start)
        if i > 0 and self._ends[i - 1] > start:
            return True
        return i < len(self._starts) and self._starts[i] < end

    def claim(self, start: int, end: int) -> None:
        if end <= start:
            return
        if self.overlaps(start, end):
            raise ValueError(f"range [{start}, {end}) overlaps an existing claim")
        i = bisect_right(self._starts, start)
        self._starts.insert(i, start)
        self._ends.insert(i, end)

    def __iter__(self):
        return iter(zip(self._starts, self._ends))

    def __len__(self) -> int:
        return len(self._starts)
