"""In-process TTL cache with a bounded entry count."""

from __future__ import annotations

import logging
import threading
import time
from collections.abc import Callable
from dataclasses import dataclass
from typing import Any

from tuberag.cache.base import Cache

logger = logging.getLogger(__name__)


@dataclass
class _Entry:
    value: Any
    stored_at: float
    expires_at: float


class InMemoryCache(Cache):
    """Thread-safe dict-backed cache.

    Expired entries are evicted lazily on access and on every write; when the
    entry count exceeds ``max_entries`` the oldest writes are dropped first.
    """

    def __init__(
        self,
        default_ttl_seconds: float = 7200.0,
        max_entries: int = 1000,
        clock: Callable[[], float] = time.monotonic,
    ):
        self.default_ttl_seconds = default_ttl_seconds
        self.max_entries = max_entries
        self._clock = clock
        self._entries: dict[str, _Entry] = {}
        self._lock = threading.Lock()
        self.hits = 0
        self.misses = 0

    def get(self, key: str) -> Any | None:
        with self._lock:
            entry = self._entries.get(key)
            if entry is None:
                self.misses += 1
                return None
            if self._clock() >= entry.expires_at:
                del self._entries[key]
                self.misses += 1
                return None
            self.hits += 1
            return entry.value

    def set(self, key: str, value: Any, ttl_seconds: float | None = None) -> None:
        if value is None:
            return
        ttl = self.default_ttl_seconds if ttl_seconds is None else ttl_seconds
        now = self._clock()
        with self._lock:
            self._entries[key] = _Entry(value=value, stored_at=now, expires_at=now + ttl)
            self._evict(now)

    def delete(self, key: str) -> None:
        with self._lock:
            self._entries.pop(key, None)

    def __len__(self) -> int:
        with self._lock:
            return len(self._entries)

    # ------------------------------------------------------------------
    # Private
    # ------------------------------------------------------------------

    def _evict(self, now: float) -> None:
        expired = [k for k, e in self._entries.items() if now >= e.expires_at]
        for key in expired:
            del self._entries[key]

        overflow = len(self._entries) - self.max_entries
        if overflow > 0:
            oldest = sorted(self._entries.items(), key=lambda kv: kv[1].stored_at)
            for key, _ in oldest[:overflow]:
                del self._entries[key]
            logger.debug("InMemoryCache evicted %d entries over capacity", overflow)
