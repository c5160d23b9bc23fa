"""
Array-backed binary min-heap over (value, tag) records.

Used two ways by GRASP: as a sorting device (insert everything, then extract
the k smallest) and as a live ranking of the marginal costs of the pairs that
are still unassigned during construction.
"""
from __future__ import annotations

from typing import Any, NamedTuple, Optional


class HeapEntry(NamedTuple):
    value: int
    tag: Any


class BoundedPriorityQueue:
    """
    Binary min-heap ordered on ``value`` only; ``tag`` travels with it.

    Sift-up stops on equal values and sift-down only moves strictly smaller
    children up, so the extraction order of ties is fully determined by the
    insertion order.
    """

    def __init__(self, capacity: Optional[int] = None):
        self.capacity = capacity
        self._items: list[HeapEntry] = []
        self.size = 0

    def __len__(self) -> int:
        return self.size

    def reset(self) -> None:
        """Empty the queue, keeping the allocated storage."""
        self.size = 0

    def insert(self, value: int, tag: Any) -> None:
        if self.capacity is not None and self.size >= self.capacity:
            raise OverflowError(f"priority queue full (capacity={self.capacity})")
        entry = HeapEntry(value, tag)
        if self.size < len(self._items):
            self._items[self.size] = entry
        else:
            self._items.append(entry)
        items = self._items
        pos = self.size
        self.size += 1
        # hole moves up while the parent is strictly larger
        while pos > 0:
            parent = (pos - 1) // 2
            if items[parent].value > value:
                items[pos] = items[parent]
                pos = parent
            else:
                break
        items[pos] = entry

    def extract_min(self) -> HeapEntry:
        if self.size == 0:
            raise IndexError("extract_min from an empty priority queue")
        items = self._items
        top = items[0]
        self.size -= 1
        size = self.size
        last = items[size]
        pos = 0
        half = size // 2
        while pos < half:
            child = 2 * pos + 1
            if child + 1 < size and items[child].value > items[child + 1].value:
                child += 1
            if last.value > items[child].value:
                items[pos] = items[child]
                pos = child
            else:
                break
        if size > 0:
            items[pos] = last
        return top

    def peek(self) -> HeapEntry:
        if self.size == 0:
            raise IndexError("peek into an empty priority queue")
        return self._items[0]

    def nsmallest(self, k: int) -> list[HeapEntry]:
        """Extract the ``k`` smallest records in ascending order."""
        return [self.extract_min() for _ in range(k)]
