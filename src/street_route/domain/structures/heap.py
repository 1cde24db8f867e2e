"""
Indexed binary min-heap with priority updates.

Entries live in a dense array laid out as a complete binary tree (children of
slot i are 2i+1 and 2i+2). A side dict maps every item to the slot holding it,
which gives O(1) membership and lets change_priority find an item without a
scan. Every swap rewrites both items' slots in that dict.
"""

from collections.abc import Hashable
from dataclasses import dataclass
from typing import Generic, TypeVar

T = TypeVar("T", bound=Hashable)

MIN_CAPACITY = 16
MAX_LOAD_FACTOR = 0.75
MIN_LOAD_FACTOR = 0.25


class DuplicateItemError(ValueError):
    pass


class ItemNotFoundError(KeyError):
    pass


class EmptyQueueError(IndexError):
    pass


@dataclass
class _Entry(Generic[T]):
    item: T
    priority: float


class IndexedMinPQ(Generic[T]):
    def __init__(self):
        self._capacity = MIN_CAPACITY
        self._pq: list[_Entry[T] | None] = [None] * self._capacity
        self._index: dict[T, int] = {}
        self._size = 0

    # ---------------- public API -----------------

    def add(self, item: T, priority: float) -> None:
        if item in self._index:
            raise DuplicateItemError(f"item already present: {item!r}")

        slot = self._size
        self._pq[slot] = _Entry(item, float(priority))
        self._index[item] = slot
        self._size += 1
        self._swim(slot)

        if self._size / self._capacity >= MAX_LOAD_FACTOR:
            self._resize(2 * self._capacity)

    def contains(self, item: T) -> bool:
        return item in self._index

    def peek_min(self) -> T:
        if self._size == 0:
            raise EmptyQueueError("peek from empty priority queue")
        return self._pq[0].item

    def pop_min(self) -> T:
        if self._size == 0:
            raise EmptyQueueError("pop from empty priority queue")

        smallest = self._pq[0].item
        del self._index[smallest]
        last = self._size - 1

        if last > 0:
            self._pq[0] = self._pq[last]
            self._index[self._pq[0].item] = 0
        self._pq[last] = None
        self._size -= 1

        if self._size > 1:
            self._sink(0)

        if self._size / self._capacity <= MIN_LOAD_FACTOR and self._capacity > MIN_CAPACITY:
            self._resize(max(MIN_CAPACITY, self._capacity // 2))

        return smallest

    def change_priority(self, item: T, priority: float) -> None:
        try:
            slot = self._index[item]
        except KeyError:
            raise ItemNotFoundError(f"item not in priority queue: {item!r}") from None

        entry = self._pq[slot]
        old = entry.priority
        entry.priority = float(priority)
        if entry.priority < old:
            self._swim(slot)
        elif entry.priority > old:
            self._sink(slot)

    def size(self) -> int:
        return self._size

    def __len__(self) -> int:
        return self._size

    def __contains__(self, item: object) -> bool:
        return item in self._index

    # ---------------- introspection -----------------

    @property
    def capacity(self) -> int:
        return self._capacity

    def slot_of(self, item: T) -> int:
        return self._index[item]

    def priority_of(self, item: T) -> float:
        return self._pq[self._index[item]].priority

    def entries(self) -> list[tuple[T, float]]:
        """Snapshot of (item, priority) in slot order."""
        return [(e.item, e.priority) for e in self._pq[: self._size]]

    # ---------------- heap mechanics -----------------

    @staticmethod
    def _parent(slot: int) -> int:
        return (slot - 1) // 2

    def _swap(self, a: int, b: int) -> None:
        pq = self._pq
        pq[a], pq[b] = pq[b], pq[a]
        self._index[pq[a].item] = a
        self._index[pq[b].item] = b

    def _swim(self, slot: int) -> None:
        while slot > 0:
            parent = self._parent(slot)
            if self._pq[slot].priority >= self._pq[parent].priority:
                return
            self._swap(slot, parent)
            slot = parent

    def _sink(self, slot: int) -> None:
        pq, n = self._pq, self._size
        while True:
            child = 2 * slot + 1
            if child >= n:
                return
            right = child + 1
            # ties go left
            if right < n and pq[right].priority < pq[child].priority:
                child = right
            if pq[child].priority >= pq[slot].priority:
                return
            self._swap(slot, child)
            slot = child

    def _resize(self, new_capacity: int) -> None:
        fresh: list[_Entry[T] | None] = [None] * new_capacity
        fresh[: self._size] = self._pq[: self._size]
        self._pq, self._capacity = fresh, new_capacity

    def __repr__(self) -> str:
        return f"IndexedMinPQ(size={self._size}, capacity={self._capacity})"
