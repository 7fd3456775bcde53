"""Linked stack that stands in for a process's register stack."""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(eq=False)
class StackEntry:
    """One node of the stack; its identity serves as the stack pointer."""

    data: str
    next: StackEntry | None = None


class RegisterStack:
    """A last-in, first-out stack of strings built from linked entries."""

    def __init__(self) -> None:
        self._head: StackEntry | None = None
        self._size = 0

    def push(self, value: str) -> None:
        """Push a copy of ``value`` onto the stack."""
        self._head = StackEntry(str(value), self._head)
        self._size += 1

    def top(self) -> str | None:
        """Return the top value, or None when the stack is empty."""
        return self._head.data if self._head else None

    def pop(self) -> str:
        """Remove and return the top value; raise IndexError when empty."""
        if self._head is None:
            raise IndexError("pop from an empty stack")
        entry = self._head
        self._head = entry.next
        self._size -= 1
        return entry.data

    def pointer(self) -> StackEntry | None:
        """Return the entry at the top of the stack, or None when empty."""
        return self._head

    def __len__(self) -> int:
        return self._size