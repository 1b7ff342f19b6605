from __future__ import annotations

import threading
import time
from typing import Callable, Dict, Generic, Hashable, Optional, Tuple, TypeVar

K = TypeVar("K", bound=Hashable)
V = TypeVar("V")


class TTLCache(Generic[K, V]):
    """Small read-through cache with a fixed time-to-live per entry.

    Entries are never served once older than ``ttl_seconds``. Owners call
    ``invalidate`` whenever the cached entity is written.
    A load that overlaps an ``invalidate`` of the same key is returned but not stored.
    """

    def __init__(self, ttl_seconds: float, *, clock: Callable[[], float] = time.monotonic):
        self._ttl = float(ttl_seconds)
        self._clock = clock
        self._entries: Dict[K, Tuple[float, V]] = {}
        self._generations: Dict[K, int] = {}
        self._lock = threading.Lock()

    def get(self, key: K) -> Optional[V]:
        with self._lock:
            entry = self._entries.get(key)
            if entry is None:
                return None
            expires_at, value = entry
            if self._clock() >= expires_at:
                del self._entries[key]
                return None
            return value

    def put(self, key: K, value: V) -> None:
        with self._lock:
            self._entries[key] = (self._clock() + self._ttl, value)

    def get_or_load(self, key: K, loader: Callable[[K], Optional[V]]) -> Optional[V]:
        value = self.get(key)
        if value is not None:
            return value

        with self._lock:
            generation = self._generations.get(key, 0)

        value = loader(key)
        if value is None or self._ttl <= 0:
            return value

        with self._lock:
            if self._generations.get(key, 0) == generation:
                self._entries[key] = (self._clock() + self._ttl, value)
        return value

    def invalidate(self, key: K) -> None:
        with self._lock:
            self._entries.pop(key, None)
            self._generations[key] = self._generations.get(key, 0) + 1

    def __len__(self) -> int:
        with self._lock:
            return len(self._entries)
