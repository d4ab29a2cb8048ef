"""A doubly linked list and a thread-safe LRU cache built on it."""

from __future__ import annotations

import threading
from collections.abc import Hashable, Iterator
from typing import Any


class ListItem:
    """A node of :class:`LinkedList`."""

    __slots__ = ("value", "prev", "next")

    def __init__(self, value: Any) -> None:
        self.value = value
        self.prev: ListItem | None = None
        self.next: ListItem | None = None

    def __repr__(self) -> str:
        return f"ListItem({self.value!r})"


class LinkedList:
    """A doubly linked list that hands out its nodes."""

    def __init__(self) -> None:
        self._front: ListItem | None = None
        self._back: ListItem | None = None
        self._len = 0

    def __len__(self) -> int:
        return self._len

    def __iter__(self) -> Iterator[Any]:
        item = self._front
        while item is not None:
            yield item.value
            item = item.next

    def front(self) -> ListItem | None:
        return self._front

    def back(self) -> ListItem | None:
        return self._back

    def push_front(self, value: Any) -> ListItem:
        item = ListItem(value)
        self._link_front(item)
        return item

    def push_back(self, value: Any) -> ListItem:
        item = ListItem(value)
        item.prev = self._back
        if self._back is not None:
            self._back.next = item
        if self._front is None:
            self._front = item
        self._back = item
        self._len += 1
        return item

    def remove(self, item: ListItem | None) -> None:
        if item is None:
            return
        if self._front is item:
            self._front = item.next
        if self._back is item:
            self._back = item.prev
        if item.next is not None:
            item.next.prev = item.prev
        if item.prev is not None:
            item.prev.next = item.next
        item.prev = item.next = None
        self._len -= 1

    def move_to_front(self, item: ListItem | None) -> None:
        if item is None:
            return
        self.remove(item)
        self._link_front(item)

    def _link_front(self, item: ListItem) -> None:
        item.prev, item.next = None, self._front
        if self._front is not None:
            self._front.prev = item
        if self._back is None:
            self._back = item
        self._front = item
        self._len += 1


class LRUCache:
    """A fixed-capacity cache that evicts the least recently used key."""

    def __init__(self, capacity: int) -> None:
        self._capacity = capacity
        self._lock = threading.Lock()
        self._queue = LinkedList()
        self._items: dict[Hashable, ListItem] = {}

    def __len__(self) -> int:
        with self._lock:
            return len(self._items)

    def set(self, key: Hashable, value: Any) -> bool:
        """Store ``value``; return True if ``key`` was already cached."""
        with self._lock:
            item = self._items.get(key)
            if item is not None:
                item.value = (key, value)
                self._queue.move_to_front(item)
                return True
            self._items[key] = self._queue.push_front((key, value))
            if len(self._queue) > self._capacity:
                oldest = self._queue.back()
                del self._items[oldest.value[0]]
                self._queue.remove(oldest)
            return False

    def lookup(self, key: Hashable) -> tuple[Any, bool]:
        """Return ``(value, True)`` if cached, else ``(None, False)``."""
        with self._lock:
            item = self._items.get(key)
            if item is None:
                return None, False
            self._queue.move_to_front(item)
            return item.value[1], True

    def get(self, key: Hashable, default: Any = None) -> Any:
        value, found = self.lookup(key)
        return value if found else default

    def clear(self) -> None:
        with self._lock:
            self._queue = LinkedList()
            self._items = {}