"""Name → class registry with lazy import and a singleton cache.

Backends with optional dependencies are only imported when first asked
for, so a missing extra fails at construction with an install hint.
"""

from __future__ import annotations

import importlib
import logging
from typing import Any, Generic, TypeVar

logger = logging.getLogger(__name__)

T = TypeVar("T")


class Registry(Generic[T]):
    """Builds instances from ``(key, module_path, class_name)`` entries.

    Instances built without kwargs are cached per key; instances built with
    kwargs are always fresh.
    """

    def __init__(self, kind: str, entries: list[tuple[str, str, str]]):
        self.kind = kind
        self._entries = entries
        self._instances: dict[str, T] = {}

    def create(self, name: str, **kwargs: Any) -> T:
        key = name.lower()
        if not kwargs and key in self._instances:
            return self._instances[key]

        for reg_key, module_path, cls_name in self._entries:
            if reg_key != key:
                continue
            cls = getattr(importlib.import_module(module_path), cls_name)
            instance = cls(**kwargs)
            if not kwargs:
                self._instances[key] = instance
            logger.debug("Created %s %s", self.kind, cls_name)
            return instance

        raise ValueError(f"Unknown {self.kind} '{name}'. Available: {self.names()}")

    def names(self) -> list[str]:
        return [k for k, _, _ in self._entries]

    def clear(self) -> None:
        self._instances.clear()
