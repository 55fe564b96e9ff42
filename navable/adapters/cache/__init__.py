"""Cache adapters - Implementations of CachePort.

Available implementations:
- InMemoryCache: TTL cache used for geocoding answers
- NullCache: Never stores anything, for tests that must hit the provider
"""

from .memory_cache import InMemoryCache
from .null_cache import NullCache

__all__ = ["InMemoryCache", "NullCache"]
