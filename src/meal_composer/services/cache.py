"""Key-value cache used for fetched meal plans."""

from collections.abc import Callable
from dataclasses import dataclass, field
from datetime import UTC, datetime, timedelta
from typing import Protocol


def _utcnow() -> datetime:
    return datetime.now(tz=UTC)


@dataclass(frozen=True)
class CacheEntry:
    """Cached value with its storage and expiry times."""

    value: object
    stored_at: datetime
    expires_at: datetime


class Cache(Protocol):
    """Cache interface for simple key-value data."""

    def get_entry(self, key: str) -> CacheEntry | None:
        """Return the live entry for a key, if any."""

    def set(self, key: str, value: object, ttl_seconds: int) -> None:
        """Store a value with a TTL in seconds."""

    def delete(self, key: str) -> None:
        """Drop a key."""


@dataclass
class InMemoryCache(Cache):
    """Process-local cache with per-entry expiry."""

    clock: Callable[[], datetime] = _utcnow
    _entries: dict[str, CacheEntry] = field(default_factory=dict, init=False)

    def get(self, key: str) -> object | None:
        entry = self.get_entry(key)
        return None if entry is None else entry.value

    def get_entry(self, key: str) -> CacheEntry | None:
        """Return the entry if it hasn't expired."""
        entry = self._entries.get(key)
        if entry is None:
            return None
        if self.clock() >= entry.expires_at:
            self._entries.pop(key, None)
            return None
        return entry

    def set(self, key: str, value: object, ttl_seconds: int) -> None:
        now = self.clock()
        self._entries[key] = CacheEntry(
            value=value,
            stored_at=now,
            expires_at=now + timedelta(seconds=ttl_seconds),
        )

    def delete(self, key: str) -> None:
        self._entries.pop(key, None)
