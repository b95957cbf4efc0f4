"""A small least-recently-used cache."""

from __future__ import annotations

from collections import OrderedDict
from typing import Generic, Hashable, Optional, TypeVar

K = TypeVar("K", bound=Hashable)
V = TypeVar("V")


class LRUCache(Generic[K, V]):
    """Bounded mapping that evicts the least recently used entry when full.

    Looking a key up with :meth:`find` marks it as most recently used.
    Inserting a key that is already present leaves the cache untouched.
    """

    def __init__(self, capacity: int = 80) -> None:
        self._capacity = capacity
        # The last item is the most recently used one.
        self._items: OrderedDict[K, V] = OrderedDict()

    @property
    def capacity(self) -> int:
        return self._capacity

    def __len__(self) -> int:
        return len(self._items)

    def __contains__(self, key: object) -> bool:
        return key in self._items

    def insert(self, key: K, value: V) -> bool:
        """Add ``key`` with ``value``; return False if the key already exists."""
        if key in self._items:
            return False
        if len(self._items) >= self._capacity:
            self._evict()
        self._items[key] = value
        return True

    def find(self, key: K) -> Optional[V]:
        """Return the value for ``key`` and mark it as recently used, or None."""
        if key not in self._items:
            return None
        self._items.move_to_end(key)
        return self._items[key]

    def erase(self, key: K) -> None:
        """Remove ``key`` if present."""
        self._items.pop(key, None)

    def clear(self) -> None:
        self._items.clear()

    def _evict(self) -> None:
        if self._items:
            self._items.popitem(last=False)