"""Minimal Result type for fast-path / fallback control flow."""

from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass
from typing import Generic, TypeVar

T = TypeVar("T")


@dataclass(frozen=True)
class Result(Generic[T]):
    """Either a value or the exception that prevented producing it."""

    value: T | None = None
    error: Exception | None = None

    @classmethod
    def ok(cls, value: T) -> Result[T]:
        return cls(value=value)

    @classmethod
    def err(cls, error: Exception) -> Result[T]:
        return cls(error=error)

    @classmethod
    def capture(cls, fn: Callable[[], T]) -> Result[T]:
        """Run ``fn`` and wrap its return value or raised exception."""
        try:
            return cls.ok(fn())
        except Exception as exc:
            return cls.err(exc)

    @property
    def is_ok(self) -> bool:
        return self.error is None

    def or_else(self, fallback: Callable[[Exception], Result[T]]) -> Result[T]:
        """Return self if ok, otherwise the result of ``fallback(error)``."""
        if self.is_ok:
            return self
        return fallback(self.error)

    def unwrap(self) -> T:
        """Return the value, re-raising the stored error if there is one."""
        if self.error is not None:
            raise self.error
        return self.value  # type: ignore[return-value]
