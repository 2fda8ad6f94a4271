"""Abstract base class for caches."""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Any


class Cache(ABC):
    """Interface for key/value caches passed into the retrieval core."""

    @abstractmethod
    def get(self, key: str) -> Any | None:
        """Return the cached value, or ``None`` on a miss or expiry."""

    @abstractmethod
    def set(self, key: str, value: Any, ttl_seconds: float | None = None) -> None:
        """Store a value.

        Args:
            key: Cache key.
            value: Value to store. ``None`` values are not cached.
            ttl_seconds: Lifetime; backends fall back to their default.
        """

    @abstractmethod
    def delete(self, key: str) -> None:
        """Remove a key if present."""

    @classmethod
    def cache_name(cls) -> str:
        """Return human-readable cache name."""
        return cls.__name__


class NullCache(Cache):
    """A cache that never stores anything."""

    def get(self, key: str) -> Any | None:
        return None

    def set(self, key: str, value: Any, ttl_seconds: float | None = None) -> None:
        return None

    def delete(self, key: str) -> None:
        return None
