"""Small in-memory cache with time-bounded entries."""

import time
from collections.abc import Callable
from typing import Any


class TTLCache:
    """
    Mapping whose entries expire ``ttl`` seconds after they were stored.

    A ttl of 0 disables the cache: ``set`` is a no-op and ``get`` always
    misses. Expired entries are evicted lazily on access.
    """

    def __init__(self, ttl: float, clock: Callable[[], float] = time.monotonic):
        self.ttl = ttl
        self._clock = clock
        self._entries: dict[str, tuple[float, Any]] = {}

    @property
    def enabled(self) -> bool:
        return self.ttl > 0

    def get(self, key: str, default: Any = None) -> Any:
        entry = self._entries.get(key)
        if entry is None:
            return default

        expires_at, value = entry
        if self._clock() >= expires_at:
            del self._entries[key]
            return default

        return value

    def set(self, key: str, value: Any) -> None:
        if not self.enabled:
            return
        self._entries[key] = (self._clock() + self.ttl, value)

    def __contains__(self, key: str) -> bool:
        sentinel = object()
        return self.get(key, sentinel) is not sentinel

    def __len__(self) -> int:
        return len(self._entries)

    def clear(self) -> None:
        self._entries.clear()
