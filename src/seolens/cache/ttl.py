"""
MIT License
Copyright (c) 2026 arpan404
See LICENSE file for full license text.

Bounded in-memory TTL cache with bulk oldest-first eviction.

Entries expire a fixed `ttl_s` after they were written; reads never extend
that window. Expired entries are dropped lazily, either by the `get` that
observes them or by the capacity check in `set`. When a new key arrives and
the store is full, the oldest `eviction_fraction` of entries (by write time)
are removed in one batch so that eviction cost is amortized over many
inserts. Hit counts are kept for observability only and play no part in
choosing eviction victims.
"""

from __future__ import annotations

import logging
import math
import threading
import time
from collections.abc import Callable, Iterable
from dataclasses import replace
from typing import Generic, TypeVar

from ..errors import CacheConfigurationError
from ..observability.metrics import CacheMetrics, NoOpCacheMetrics
from ..settings import CacheSettings
from .base import CacheEntry, CacheStats
from .keys import compute_key

logger = logging.getLogger("seolens.cache")

V = TypeVar("V")

Clock = Callable[[], float]


class TTLCache(Generic[V]):
    """Process-local cache guarded by a single lock."""

    compute_key = staticmethod(compute_key)

    def __init__(
        self,
        *,
        max_size: int = 1000,
        default_ttl_s: float = 3600.0,
        eviction_fraction: float = 0.2,
        clock: Clock | None = None,
        name: str = "default",
        metrics: CacheMetrics | None = None,
    ) -> None:
        if max_size < 1:
            raise CacheConfigurationError("max_size", max_size, "must be >= 1")
        if default_ttl_s < 0:
            raise CacheConfigurationError("default_ttl_s", default_ttl_s, "must be >= 0")
        if not 0 < eviction_fraction <= 1:
            raise CacheConfigurationError(
                "eviction_fraction", eviction_fraction, "must be in the interval (0, 1]"
            )

        self.name = name
        self._max_size = int(max_size)
        self._default_ttl_s = float(default_ttl_s)
        self._eviction_fraction = float(eviction_fraction)
        self._clock: Clock = clock or time.time
        self._metrics: CacheMetrics = metrics or NoOpCacheMetrics()
        self._tags = {"cache": name}

        # Dict order is write order: overwrites are re-inserted at the end.
        self._rows: dict[str, CacheEntry[V]] = {}
        self._lock = threading.RLock()

        self._total_requests = 0
        self._hits = 0
        self._misses = 0
        self._evictions = 0
        self._expirations = 0

    @classmethod
    def from_settings(
        cls,
        settings: CacheSettings,
        *,
        clock: Clock | None = None,
        name: str = "default",
        metrics: CacheMetrics | None = None,
    ) -> "TTLCache[V]":
        """Build a cache from explicit settings."""
        return cls(
            max_size=settings.max_size,
            default_ttl_s=settings.default_ttl_s,
            eviction_fraction=settings.eviction_fraction,
            clock=clock,
            name=name,
            metrics=metrics,
        )

    @property
    def max_size(self) -> int:
        return self._max_size

    @property
    def default_ttl_s(self) -> float:
        return self._default_ttl_s

    @property
    def eviction_fraction(self) -> float:
        return self._eviction_fraction

    @property
    def eviction_batch_size(self) -> int:
        """Number of entries removed by one capacity-triggered eviction."""
        return max(1, math.ceil(self._max_size * self._eviction_fraction))

    def get(self, key: str) -> V | None:
        """Return the live value for `key`, or `None` on a miss."""
        with self._lock:
            self._total_requests += 1
            row = self._rows.get(key)
            if row is None:
                self._misses += 1
                self._metrics.incr("cache_misses", tags=self._tags)
                return None
            if row.is_expired(self._clock()):
                del self._rows[key]
                self._misses += 1
                self._expirations += 1
                self._metrics.incr("cache_misses", tags=self._tags)
                self._metrics.incr("cache_expirations", tags=self._tags)
                return None
            row.hit_count += 1
            self._hits += 1
            self._metrics.incr("cache_hits", tags=self._tags)
            return row.value

    def set(self, key: str, value: V, ttl_s: float | None = None) -> None:
        """Write `value` under `key`, evicting the oldest entries when full."""
        ttl = self._default_ttl_s if ttl_s is None else max(0.0, float(ttl_s))
        with self._lock:
            now = self._clock()
            if key in self._rows:
                del self._rows[key]
            elif len(self._rows) >= self._max_size:
                self._make_room(now)
            self._rows[key] = CacheEntry(key=key, value=value, created_at=now, ttl_s=ttl)

    def get_many(self, keys: Iterable[str]) -> dict[str, V | None]:
        """Look up several keys; each lookup counts as one request."""
        return {key: self.get(key) for key in keys}

    def set_many(
        self,
        items: Iterable[tuple[str, V] | tuple[str, V, float | None]],
    ) -> None:
        """Write several entries, each optionally carrying its own ttl."""
        for item in items:
            if len(item) == 3:
                key, value, ttl_s = item  # type: ignore[misc]
            else:
                key, value = item  # type: ignore[misc]
                ttl_s = None
            self.set(key, value, ttl_s)

    def delete(self, key: str) -> bool:
        with self._lock:
            return self._rows.pop(key, None) is not None

    def clear(self) -> None:
        """Drop all entries. Counters are kept."""
        with self._lock:
            self._rows.clear()

    def peek(self, key: str) -> CacheEntry[V] | None:
        """Return a snapshot of a live entry without touching any counters."""
        with self._lock:
            row = self._rows.get(key)
            if row is None or row.is_expired(self._clock()):
                return None
            return replace(row)

    def keys(self) -> list[str]:
        with self._lock:
            return list(self._rows.keys())

    def purge_expired(self) -> int:
        """Remove every expired entry now and return how many were dropped."""
        with self._lock:
            removed = self._drop_expired(self._clock())
        if removed:
            logger.debug("cache %s purged %d expired entries", self.name, removed)
        return removed

    def stats(self) -> CacheStats:
        with self._lock:
            return CacheStats(
                total_requests=self._total_requests,
                hits=self._hits,
                misses=self._misses,
                evictions=self._evictions,
                expirations=self._expirations,
                current_size=len(self._rows),
                max_size=self._max_size,
            )

    def reset_stats(self) -> None:
        with self._lock:
            self._total_requests = 0
            self._hits = 0
            self._misses = 0
            self._evictions = 0
            self._expirations = 0

    def _make_room(self, now: float) -> None:
        # Caller holds the lock and is inserting a new key into a full store.
        self._drop_expired(now)
        if len(self._rows) < self._max_size:
            return
        count = min(self.eviction_batch_size, len(self._rows))
        # sorted() is stable, so equal timestamps fall back to write order.
        oldest = sorted(self._rows.values(), key=lambda row: row.created_at)[:count]
        for row in oldest:
            del self._rows[row.key]
        self._evictions += count
        self._metrics.incr("cache_evictions", count, tags=self._tags)
        logger.debug(
            "cache %s at capacity (%d), evicted %d oldest entries",
            self.name,
            self._max_size,
            count,
        )

    def _drop_expired(self, now: float) -> int:
        expired = [key for key, row in self._rows.items() if row.is_expired(now)]
        for key in expired:
            del self._rows[key]
        if expired:
            self._expirations += len(expired)
            self._metrics.incr("cache_expirations", len(expired), tags=self._tags)
        return len(expired)

    def __contains__(self, key: object) -> bool:
        if not isinstance(key, str):
            return False
        return self.peek(key) is not None

    def __len__(self) -> int:
        with self._lock:
            return len(self._rows)

    def __repr__(self) -> str:
        return (
            f"TTLCache(name={self.name!r}, size={len(self)}, "
            f"max_size={self._max_size}, default_ttl_s={self._default_ttl_s})"
        )

