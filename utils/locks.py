import threading
from contextlib import contextmanager
from typing import Dict, Iterator


class KeyedLock:
    """Набор блокировок по ключу (идентификатору сущности)"""

    def __init__(self):
        self._guard = threading.Lock()
        self._locks: Dict[str, threading.Lock] = {}

    def _lock_for(self, key: str) -> threading.Lock:
        with self._guard:
            lock = self._locks.get(key)
            if lock is None:
                lock = self._locks[key] = threading.Lock()
            return lock

    @contextmanager
    def hold(self, key: str) -> Iterator[None]:
        lock = self._lock_for(key)
        with lock:
            yield

    def discard(self, key: str) -> None:
        """Забыть блокировку удалённой сущности"""
        with self._guard:
            self._locks.pop(key, None)
