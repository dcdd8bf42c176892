"""
Min priority queue.

Uses heapq for O(log n) insert and O(log n) delete-min.
Items with equal keys come out in insertion order.
"""

import heapq
import itertools
from typing import Any, Callable, List, Optional, Tuple


class MinPQ:
    """Min-ordered container keyed by `key(item)` (the item itself by default)."""

    def __init__(self, key: Optional[Callable[[Any], Any]] = None):
        self._key = key
        self._heap: List[Tuple[Any, int, Any]] = []
        self._counter = itertools.count()

    def insert(self, item: Any) -> None:
        k = item if self._key is None else self._key(item)
        heapq.heappush(self._heap, (k, next(self._counter), item))

    def del_min(self) -> Any:
        """Remove and return the smallest item. Raises IndexError if empty."""
        if not self._heap:
            raise IndexError("del_min from an empty priority queue")
        return heapq.heappop(self._heap)[2]

    def min(self) -> Any:
        if not self._heap:
            raise IndexError("min of an empty priority queue")
        return self._heap[0][2]

    def is_empty(self) -> bool:
        return len(self._heap) == 0

    def clear(self) -> None:
        self._heap.clear()

    def __len__(self) -> int:
        return len(self._heap)

    def __bool__(self) -> bool:
        return bool(self._heap)
