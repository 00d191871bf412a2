"""
In-process locks keyed by stock entry.

The stock-sufficiency check and the decrement that follows must not
interleave for the same item. Keys are acquired in sorted order so two
operations touching the same pair of items can't deadlock.
"""
import threading
from contextlib import contextmanager
from typing import Dict, Hashable, Iterator


class StockLocks:
    def __init__(self):
        self._guard = threading.Lock()
        self._locks: Dict[Hashable, threading.Lock] = {}

    def _lock_for(self, key: Hashable) -> threading.Lock:
        with self._guard:
            lock = self._locks.get(key)
            if lock is None:
                lock = self._locks[key] = threading.Lock()
            return lock

    @contextmanager
    def hold(self, *keys: Hashable) -> Iterator[None]:
        acquired = []
        try:
            for key in sorted(set(keys)):
                lock = self._lock_for(key)
                lock.acquire()
                acquired.append(lock)
            yield
        finally:
            for lock in reversed(acquired):
                lock.release()


stock_locks = StockLocks()
