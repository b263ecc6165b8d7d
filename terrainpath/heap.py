"""
Binary min-heap priority queue used as the open set of the search.

There is no decrease-key: callers push the same element again with a better
priority and filter the stale duplicates against their closed set on pop.
"""

from typing import Any, List, NamedTuple, Optional


class HeapEntry(NamedTuple):
    element: Any
    priority: float


class PriorityQueue:
    """
    Array-backed binary min-heap keyed by a float priority.

    Equal priorities pop in insertion order (a monotonic counter breaks ties),
    which keeps search traces reproducible run to run.
    """

    def __init__(self):
        # (priority, seq, element)
        self._heap: List[tuple] = []
        self._seq = 0

    def __len__(self) -> int:
        return len(self._heap)

    def is_empty(self) -> bool:
        return len(self._heap) == 0

    def clear(self) -> None:
        self._heap.clear()
        self._seq = 0

    def push(self, element: Any, priority: float) -> None:
        """Append an entry and sift it up toward the root."""
        self._heap.append((priority, self._seq, element))
        self._seq += 1
        self._sift_up(len(self._heap) - 1)

    def pop(self) -> Optional[HeapEntry]:
        """
        Remove and return the minimum-priority entry.

        Returns:
            HeapEntry, or None when the queue is empty
        """
        if not self._heap:
            return None

        last = self._heap.pop()
        if not self._heap:
            return HeapEntry(last[2], last[0])

        root = self._heap[0]
        self._heap[0] = last
        self._sift_down(0)
        return HeapEntry(root[2], root[0])

    def elements(self) -> List[Any]:
        """Elements currently queued, in heap order (duplicates included)."""
        return [entry[2] for entry in self._heap]

    def _less(self, i: int, j: int) -> bool:
        a = self._heap[i]
        b = self._heap[j]
        return (a[0], a[1]) < (b[0], b[1])

    def _sift_up(self, index: int) -> None:
        while index > 0:
            parent = (index - 1) // 2
            if not self._less(index, parent):
                break
            self._heap[parent], self._heap[index] = self._heap[index], self._heap[parent]
            index = parent

    def _sift_down(self, index: int) -> None:
        size = len(self._heap)
        while True:
            left = 2 * index + 1
            right = left + 1
            smallest = index

            if left < size and self._less(left, smallest):
                smallest = left
            if right < size and self._less(right, smallest):
                smallest = right

            if smallest == index:
                break

            self._heap[index], self._heap[smallest] = self._heap[smallest], self._heap[index]
            index = smallest
