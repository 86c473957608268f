"""
TTL Cache - Immutable key/value cache with lazy expiry.

Entries are stamped when written and considered fresh while
``now - fetched_at < ttl``. Expired entries are never evicted eagerly;
a read simply treats them as missing.
"""

import time
from dataclasses import dataclass
from typing import Any, Callable, Generic, Mapping, Optional, TypeVar


T = TypeVar("T")

DEFAULT_TTL_SECONDS = 300.0  # 5 minutes

Clock = Callable[[], float]


@dataclass(frozen=True)
class CacheEntry(Generic[T]):
    """Cached payload and the clock reading at which it was stored."""

    payload: T
    fetched_at: float


class TTLCache(Generic[T]):
    """
    Cache value object.

    ``set`` and ``invalidate`` return a new cache and leave the receiver
    untouched, so a holder swaps the whole cache in one assignment.
    """

    def __init__(
        self,
        ttl: float = DEFAULT_TTL_SECONDS,
        clock: Clock = time.monotonic,
        entries: Optional[Mapping[str, CacheEntry[T]]] = None,
    ) -> None:
        """
        Initialize the cache.

        Args:
            ttl: Freshness window in seconds.
            clock: Monotonic clock returning seconds.
            entries: Initial entries (used by the copy-on-write helpers).
        """
        if ttl <= 0:
            raise ValueError("ttl must be positive")
        self.ttl = ttl
        self._clock = clock
        self._entries: dict[str, CacheEntry[T]] = dict(entries or {})

    def is_fresh(self, entry: Optional[CacheEntry[T]]) -> bool:
        """Check whether an entry is still inside the freshness window."""
        if entry is None:
            return False
        return self._clock() - entry.fetched_at < self.ttl

    def get(self, key: str) -> Optional[T]:
        """Get a payload, or None if absent or stale."""
        entry = self._entries.get(key)
        return entry.payload if self.is_fresh(entry) else None

    def set(self, key: str, payload: T) -> "TTLCache[T]":
        """Return a cache with ``key`` overwritten and stamped now."""
        entries = dict(self._entries)
        entries[key] = CacheEntry(payload=payload, fetched_at=self._clock())
        return TTLCache(self.ttl, self._clock, entries)

    def invalidate(self, key: str) -> "TTLCache[T]":
        """Return a cache without ``key``."""
        entries = {k: v for k, v in self._entries.items() if k != key}
        return TTLCache(self.ttl, self._clock, entries)

    def __contains__(self, key: Any) -> bool:
        return self.get(key) is not None

    def __len__(self) -> int:
        return len(self._entries)
