"""
Unit Tests for AtomicCounter

Tests for the lock-guarded integer used for ids, size and depth.
"""

import threading

from modtree.core.concurrency import AtomicCounter


class TestAtomicCounter:
    """Tests for AtomicCounter."""

    def test_increment_when_called_then_returns_new_value(self):
        counter = AtomicCounter()
        assert counter.increment() == 1
        assert counter.increment() == 2
        assert counter.value == 2

    def test_decrement_when_called_then_returns_new_value(self):
        counter = AtomicCounter(5)
        assert counter.decrement() == 4

    def test_set_when_called_then_overwrites(self):
        counter = AtomicCounter(3)
        counter.set(0)
        assert counter.value == 0

    def test_increment_when_many_threads_then_no_lost_updates(self):
        """Concurrent increments are all counted."""
        counter = AtomicCounter()

        def work():
            for _ in range(1000):
                counter.increment()

        threads = [threading.Thread(target=work) for _ in range(8)]
        for t in threads:
            t.start()
        for t in threads:
            t.join()

        assert counter.value == 8000

    def test_repr_when_called_then_shows_value(self):
        assert repr(AtomicCounter(4)) == "AtomicCounter(4)"
