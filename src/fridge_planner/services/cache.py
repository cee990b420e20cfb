"""TTL cache with single-flight loading."""

import asyncio
from collections.abc import Awaitable, Callable
from dataclasses import dataclass, field
from datetime import UTC, datetime, timedelta
from typing import Protocol


def _utcnow() -> datetime:
    return datetime.now(tz=UTC)


class Cache(Protocol):
    """Cache interface for simple key-value data."""

    def get(self, key: str) -> object | None:
        """Return a cached value if present and not expired."""

    def set(self, key: str, value: object, ttl_seconds: int) -> None:
        """Store a cached value with a TTL in seconds."""

    def invalidate(self, key: str | None = None) -> None:
        """Drop one key, or every key when none is given."""


@dataclass
class _CacheEntry:
    value: object
    expires_at: datetime


@dataclass
class InMemoryCache(Cache):
    """Process-wide in-memory cache."""

    clock: Callable[[], datetime] = _utcnow
    _entries: dict[str, _CacheEntry] = field(default_factory=dict)

    def get(self, key: str) -> object | None:
        """Return a cached value if it hasn't expired."""
        entry = self._entries.get(key)
        if entry is None:
            return None
        if self.clock() >= entry.expires_at:
            self._entries.pop(key, None)
            return None
        return entry.value

    def set(self, key: str, value: object, ttl_seconds: int) -> None:
        """Store a cached value with a TTL."""
        expires_at = self.clock() + timedelta(seconds=ttl_seconds)
        self._entries[key] = _CacheEntry(value=value, expires_at=expires_at)

    def invalidate(self, key: str | None = None) -> None:
        """Drop one key, or every key when none is given."""
        if key is None:
            self._entries.clear()
            return
        self._entries.pop(key, None)


@dataclass
class SingleFlightCache:
    """Cache front that lets one caller refill a key while others await it.

    ``loader`` returns the value and whether it may be cached. Every caller
    that arrives during a refill receives that refill's value, even when it
    is not cacheable (such as a fail-open fallback).
    """

    cache: Cache
    _inflight: dict[str, asyncio.Task[object]] = field(default_factory=dict)

    async def get_or_load(
        self,
        key: str,
        loader: Callable[[], Awaitable[tuple[object, bool]]],
        ttl_seconds: int,
    ) -> object:
        """Return the cached value for key, running at most one loader per key."""
        cached = self.cache.get(key)
        if cached is not None:
            return cached
        task = self._inflight.get(key)
        if task is None:
            task = asyncio.ensure_future(self._load(key, loader, ttl_seconds))
            self._inflight[key] = task
            task.add_done_callback(lambda done: self._forget(key, done))
        # A cancelled waiter must not cancel the refill other callers await.
        return await asyncio.shield(task)

    def invalidate(self, key: str | None = None) -> None:
        """Drop a cached key so the next caller refills it."""
        self.cache.invalidate(key)

    async def _load(
        self,
        key: str,
        loader: Callable[[], Awaitable[tuple[object, bool]]],
        ttl_seconds: int,
    ) -> object:
        value, cacheable = await loader()
        if cacheable:
            self.cache.set(key, value, ttl_seconds=ttl_seconds)
        return value

    def _forget(self, key: str, task: "asyncio.Task[object]") -> None:
        if self._inflight.get(key) is task:
            self._inflight.pop(key, None)
