"""
Module: concurrency

Purpose:
    Small thread-safe primitives shared by the models and the tree.

Key Classes:
    - AtomicCounter: Integer counter safe to read and update from any thread

Dependencies:
    - threading (std)

Used By:
    - core.models.modification / core.models.groups: id generation
    - tree.binary_tree: element count and depth
"""

from __future__ import annotations

import threading


class AtomicCounter:
    """
    Integer guarded by its own lock.

    Reads never need the tree lock.

    Example:
        >>> ids = AtomicCounter()
        >>> ids.increment()
        1
        >>> ids.value
        1
    """

    def __init__(self, initial: int = 0):
        self._value = initial
        self._lock = threading.Lock()

    @property
    def value(self) -> int:
        with self._lock:
            return self._value

    def increment(self) -> int:
        """Add one and return the new value."""
        with self._lock:
            self._value += 1
            return self._value

    def decrement(self) -> int:
        """Subtract one and return the new value."""
        with self._lock:
            self._value -= 1
            return self._value

    def set(self, value: int) -> None:
        with self._lock:
            self._value = value

    def __repr__(self) -> str:
        return f"AtomicCounter({self.value})"
