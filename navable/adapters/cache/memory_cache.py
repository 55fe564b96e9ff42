"""Thread-safe in-memory cache with optional TTL.

Geocoding answers are cached here so that the same free-text query is
sent to Geoapify or Nominatim at most once per TTL window. A cached
``None`` (a query with no result) is a real entry, which is why
``contains`` exists next to ``get``.
"""

from __future__ import annotations

import logging
import threading
import time
from collections import OrderedDict
from dataclasses import dataclass, field
from typing import Any, Callable, Dict, Generic, Optional, Tuple, TypeVar

T = TypeVar("T")

# Entry = (value, monotonic deadline); inf means no expiry.
_Entry = Tuple[Any, float]
_ABSENT = object()


@dataclass
class InMemoryCache(Generic[T]):
    """TTL cache keyed by normalized query text.

    Attributes:
        default_ttl_seconds: Lifetime of an entry, None for no expiry
        max_size: Oldest entries are dropped beyond this many (None = unbounded)
        name: Used in the logger name (``cache.<name>``)

    Example:
        cache = InMemoryCache[Place](name="geocode", default_ttl_seconds=3600)
        place = cache.get_or_compute("kane hall", lambda: geocoder.geocode("Kane Hall"))
    """

    default_ttl_seconds: Optional[float] = None
    max_size: Optional[int] = None
    name: str = "cache"

    _entries: "OrderedDict[str, _Entry]" = field(default_factory=OrderedDict, repr=False)
    _lock: threading.RLock = field(default_factory=threading.RLock, repr=False)
    _counters: Dict[str, int] = field(
        default_factory=lambda: {"hits": 0, "misses": 0}, repr=False
    )
    _logger: logging.Logger = field(init=False, repr=False)

    def __post_init__(self) -> None:
        self._logger = logging.getLogger(f"cache.{self.name}")

    def _fetch(self, key: str) -> Any:
        """Return the live value for ``key`` or ``_ABSENT``, counting the outcome."""
        with self._lock:
            entry = self._entries.get(key)
            if entry is not None and entry[1] < time.monotonic():
                del self._entries[key]
                entry = None
            self._counters["hits" if entry is not None else "misses"] += 1
            return _ABSENT if entry is None else entry[0]

    def get(self, key: str) -> Optional[T]:
        value = self._fetch(key)
        return None if value is _ABSENT else value

    def contains(self, key: str) -> bool:
        return self._fetch(key) is not _ABSENT

    def set(self, key: str, value: T, ttl: Optional[float] = None) -> None:
        """Store ``value``; ``ttl`` overrides the default lifetime."""
        lifetime = self.default_ttl_seconds if ttl is None else ttl
        deadline = float("inf") if lifetime is None else time.monotonic() + lifetime
        with self._lock:
            self._entries[key] = (value, deadline)
            self._entries.move_to_end(key)
            while self.max_size is not None and len(self._entries) > self.max_size:
                dropped, _ = self._entries.popitem(last=False)
                self._logger.debug("Cache entry evicted", extra={"key": dropped})

    def get_or_compute(self, key: str, compute_fn: Callable[[], T]) -> T:
        """Return the cached value, computing it outside the lock on a miss."""
        value = self._fetch(key)
        if value is not _ABSENT:
            return value
        computed = compute_fn()
        self.set(key, computed)
        return computed

    def invalidate(self, key: str) -> bool:
        with self._lock:
            return self._entries.pop(key, _ABSENT) is not _ABSENT

    def clear(self) -> int:
        with self._lock:
            removed = len(self._entries)
            self._entries.clear()
            self._counters.update(hits=0, misses=0)
        self._logger.info("Cache cleared", extra={"entries_cleared": removed})
        return removed

    def size(self) -> int:
        with self._lock:
            return len(self._entries)

    def stats(self) -> Dict[str, Any]:
        with self._lock:
            hits, misses = self._counters["hits"], self._counters["misses"]
            total = hits + misses
            return {
                "size": len(self._entries),
                "hits": hits,
                "misses": misses,
                "hit_rate_percent": round(hits / total * 100, 1) if total else 0.0,
            }
