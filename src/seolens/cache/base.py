"""
MIT License
Copyright (c) 2026 arpan404
See LICENSE file for full license text.

Module: cache/base.py.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Generic, Protocol, TypeVar

V = TypeVar("V")


@dataclass(slots=True)
class CacheEntry(Generic[V]):
    """One cached value with its expiry metadata and hit counter."""

    key: str
    value: V
    created_at: float
    ttl_s: float
    hit_count: int = 0

    @property
    def expires_at(self) -> float:
        return self.created_at + self.ttl_s

    def is_expired(self, now: float) -> bool:
        return now - self.created_at >= self.ttl_s


@dataclass(frozen=True, slots=True)
class CacheStats:
    """Point-in-time counters for one cache instance."""

    total_requests: int
    hits: int
    misses: int
    evictions: int
    expirations: int
    current_size: int
    max_size: int

    @property
    def hit_rate(self) -> float:
        if self.total_requests == 0:
            return 0.0
        return self.hits / self.total_requests

    def to_dict(self) -> dict[str, int | float]:
        return {
            "total_requests": self.total_requests,
            "hits": self.hits,
            "misses": self.misses,
            "evictions": self.evictions,
            "expirations": self.expirations,
            "current_size": self.current_size,
            "max_size": self.max_size,
            "hit_rate": self.hit_rate,
        }


class CacheBackend(Protocol[V]):
    """Protocol implemented by caches consumed by the runtime memoizer."""

    name: str

    def get(self, key: str) -> V | None: ...

    def set(self, key: str, value: V, ttl_s: float | None = None) -> None: ...

    def delete(self, key: str) -> bool: ...

    def stats(self) -> CacheStats: ...
