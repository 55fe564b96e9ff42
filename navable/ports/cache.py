"""Cache port used by the geocoding adapter."""

from __future__ import annotations

from typing import Callable, Optional, Protocol, TypeVar

T = TypeVar("T")


class CachePort(Protocol[T]):
    """Keyed store for looked-up values; a stored None still counts as a hit."""

    def get(self, key: str) -> Optional[T]: ...

    def contains(self, key: str) -> bool: ...

    def set(self, key: str, value: T, ttl: Optional[float] = None) -> None: ...

    def get_or_compute(self, key: str, compute_fn: Callable[[], T]) -> T: ...

    def clear(self) -> int: ...

    def invalidate(self, key: str) -> bool: ...

    def size(self) -> int: ...
