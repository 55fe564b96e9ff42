"""Null cache implementation for testing.

This cache always misses, so tests that go through the geocoder never
depend on answers cached by an earlier test.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Callable, Generic, Optional, TypeVar

T = TypeVar("T")


@dataclass
class NullCache(Generic[T]):
    """No-op cache - every lookup is a miss."""

    name: str = "null"

    def get(self, key: str) -> Optional[T]:
        return None

    def contains(self, key: str) -> bool:
        return False

    def set(self, key: str, value: T, ttl: Optional[float] = None) -> None:
        pass

    def get_or_compute(self, key: str, compute_fn: Callable[[], T]) -> T:
        return compute_fn()

    def clear(self) -> int:
        return 0

    def invalidate(self, key: str) -> bool:
        return False

    def size(self) -> int:
        return 0
