# src/nav/heap.py
"""
Binary min-heap used as the A* open set.

- Ordered on a priority function (NavNode.total_cost by default).
- Optional hash index: when a `key` function is given, membership and lookup
  by key are O(1) instead of a linear scan over the backing list.
- `reprioritize` restores heap order after an item's priority changed in place.

Ties are not broken explicitly: an item only moves past another when its
priority is strictly lower, so equal-priority items keep whatever relative
order the insertion sequence and heap shape give them.
"""

from __future__ import annotations

from operator import attrgetter
from typing import Callable, Dict, Generic, Hashable, List, Optional, TypeVar

T = TypeVar("T")

PriorityFn = Callable[[T], float]
KeyFn = Callable[[T], Hashable]


class PriorityQueue(Generic[T]):
    """Array-backed binary min-heap (root at index 0, children 2i+1 / 2i+2)."""

    def __init__(
        self,
        priority: Optional[PriorityFn] = None,
        key: Optional[KeyFn] = None,
    ) -> None:
        self._items: List[T] = []
        self._priority: PriorityFn = priority or attrgetter("total_cost")
        self._key = key
        # key -> index into self._items; only maintained when key is set
        self._index: Dict[Hashable, int] = {}

    # ------------------------------------------------------------------
    # Core queue API
    # ------------------------------------------------------------------

    def insert(self, item: T) -> None:
        """Add an item and sift it up from the new leaf position."""
        self._items.append(item)
        n = len(self._items) - 1
        if self._key is not None:
            self._index[self._key(item)] = n
        self._sift_up(n)

    def extract_min(self) -> T:
        """
        Remove and return the item with the lowest priority.

        Raises IndexError on an empty queue; check is_empty() first.
        """
        if not self._items:
            raise IndexError("extract_min from an empty PriorityQueue")

        root = self._items[0]
        last = self._items.pop()
        if self._key is not None:
            del self._index[self._key(root)]

        if self._items:
            # Fill the hole at the root with the last leaf and push it down.
            self._place(0, last)
            self._sift_down(0)

        return root

    def peek(self) -> T:
        """Return the minimum item without removing it."""
        if not self._items:
            raise IndexError("peek from an empty PriorityQueue")
        return self._items[0]

    def is_empty(self) -> bool:
        return not self._items

    def __len__(self) -> int:
        return len(self._items)

    def as_list(self) -> List[T]:
        """Backing sequence in heap order (not sorted). Do not mutate."""
        return self._items

    # ------------------------------------------------------------------
    # Membership
    # ------------------------------------------------------------------

    def contains(self, item_or_key: object) -> bool:
        """
        Membership test.

        With a key function this looks up a key (e.g. a grid cell) in the
        index; without one it scans the backing list by identity.
        """
        if self._key is not None:
            return item_or_key in self._index
        return any(existing is item_or_key for existing in self._items)

    __contains__ = contains

    def find(self, key: Hashable) -> Optional[T]:
        """Return the queued item stored under `key`, if any."""
        if self._key is None:
            raise TypeError("find() requires a PriorityQueue built with key=")
        idx = self._index.get(key)
        return None if idx is None else self._items[idx]

    def reprioritize(self, item: T) -> None:
        """
        Restore heap order after `item`'s priority was changed in place.

        Works for both decrease-key and increase-key.
        """
        idx = self._position_of(item)
        self._sift_up(idx)
        # If it did not move up, it may need to move down.
        if self._items[idx] is item:
            self._sift_down(idx)

    # ------------------------------------------------------------------
    # Internal helpers
    # ------------------------------------------------------------------

    def _position_of(self, item: T) -> int:
        if self._key is not None:
            idx = self._index.get(self._key(item))
            if idx is not None and self._items[idx] is item:
                return idx
        for idx, existing in enumerate(self._items):
            if existing is item:
                return idx
        raise ValueError("item is not in the queue")

    def _place(self, idx: int, item: T) -> None:
        self._items[idx] = item
        if self._key is not None:
            self._index[self._key(item)] = idx

    def _sift_up(self, n: int) -> None:
        item = self._items[n]
        prio = self._priority(item)
        while n > 0:
            p = (n - 1) // 2
            parent = self._items[p]
            if prio >= self._priority(parent):
                break  # item >= parent
            self._place(n, parent)
            n = p
        self._place(n, item)

    def _sift_down(self, p: int) -> None:
        size = len(self._items)
        item = self._items[p]
        prio = self._priority(item)
        while True:
            c = 2 * p + 1
            if c >= size:
                break
            # Pick the second child only if it is strictly smaller.
            if c + 1 < size and self._priority(self._items[c + 1]) < self._priority(
                self._items[c]
            ):
                c += 1
            if not self._priority(self._items[c]) < prio:
                break
            self._place(p, self._items[c])
            p = c
        self._place(p, item)
