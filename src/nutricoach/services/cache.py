"""Cache abstractions for reference data such as household measures."""

import time
from collections.abc import Callable
from dataclasses import dataclass, field
from typing import Protocol


class Cache(Protocol):
    """Key-value cache with per-entry expiry."""

    def get(self, key: str) -> object | None:
        """Return a cached value if present and not expired."""

    def set(self, key: str, value: object, ttl_seconds: int) -> None:
        """Store a value for ttl_seconds."""


@dataclass
class InMemoryCache(Cache):
    """Process-local cache; expiry uses a monotonic clock."""

    clock: Callable[[], float] = time.monotonic
    _entries: dict[str, tuple[object, float]] = field(
        default_factory=dict, init=False, repr=False
    )

    def get(self, key: str) -> object | None:
        """Return a live value, evicting it once expired."""
        entry = self._entries.get(key)
        if entry is None:
            return None
        value, expires_at = entry
        if self.clock() >= expires_at:
            del self._entries[key]
            return None
        return value

    def set(self, key: str, value: object, ttl_seconds: int) -> None:
        self._entries[key] = (value, self.clock() + ttl_seconds)


def cached(
    cache: Cache, key: str, ttl_seconds: int, loader: Callable[[], object]
) -> object:
    """Return the cached value for key, loading and storing it on a miss.

    ``None`` results are not cached so a not-found lookup is retried.
    """
    value = cache.get(key)
    if value is not None:
        return value
    value = loader()
    if value is not None:
        cache.set(key, value, ttl_seconds=ttl_seconds)
    return value
