"""Injected key/value caches with TTL."""

from tuberag.cache.base import Cache, NullCache
from tuberag.cache.memory import InMemoryCache

__all__ = ["Cache", "InMemoryCache", "NullCache"]
