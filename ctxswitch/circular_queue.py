"""Bounded FIFO queue of process identifiers."""

from __future__ import annotations

from collections import deque
from collections.abc import Iterator


class QueueFullError(Exception):
    """Raised when an element is added to a queue that is already full."""


class CircularQueue:
    """A fixed-capacity first-in, first-out queue of integers."""

    def __init__(self, capacity: int = 4) -> None:
        if capacity < 1:
            raise ValueError(f"capacity must be at least 1, got {capacity}")
        self.capacity = capacity
        self._items: deque[int] = deque()

    def enqueue(self, element: int) -> None:
        """Append ``element`` at the rear; raise QueueFullError when full."""
        if len(self._items) >= self.capacity:
            raise QueueFullError("Queue is Full")
        self._items.append(element)

    def dequeue(self) -> int:
        """Remove and return the front element; raise IndexError when empty."""
        if not self._items:
            raise IndexError("dequeue from an empty queue")
        return self._items.popleft()

    def front(self) -> int | None:
        """Return the front element without removing it, or None when empty."""
        return self._items[0] if self._items else None

    def display(self) -> str:
        """Return a printable description of the queue contents."""
        if not self._items:
            return "Queue is Empty"
        return "Queue is:\n" + " ".join(str(item) for item in self._items)

    def search(self, element: int) -> bool:
        """Return True if ``element`` is currently queued."""
        return element in self._items

    def __len__(self) -> int:
        return len(self._items)

    def __iter__(self) -> Iterator[int]:
        return iter(list(self._items))

    def __repr__(self) -> str:
        return f"CircularQueue(capacity={self.capacity}, items={list(self._items)})"