"""
MIT License
Copyright (c) 2026 arpan404
See LICENSE file for full license text.

Cache-first execution of expensive upstream calls.

`CachedCompute` wraps an async upstream call with three layers: a cache
lookup, in-flight request coalescing, and an optional fallback. When the
upstream fails and a fallback is supplied, the fallback value is cached under
the same key and ttl that a success would have used, so a failing upstream
is called at most once per key per ttl window.
"""

from __future__ import annotations

import inspect
import logging
from collections.abc import Awaitable, Callable
from dataclasses import dataclass
from typing import Any, Generic, Literal, TypeVar

from ..cache.base import CacheBackend
from ..observability.metrics import CacheMetrics, NoOpCacheMetrics
from .coalescing import RequestCoalescer
from .contracts import CachePolicy, CoalescingPolicy, FallbackPolicy

logger = logging.getLogger("seolens.runtime")

V = TypeVar("V")

Source = Literal["cache", "upstream", "fallback"]
Compute = Callable[[], Awaitable[V]]
Fallback = Callable[[], V | Awaitable[V]]


@dataclass(frozen=True, slots=True)
class ComputeOutcome(Generic[V]):
    """Resolved value plus where it came from."""

    value: V
    source: Source

    @property
    def cached(self) -> bool:
        return self.source == "cache"

    @property
    def fallback(self) -> bool:
        return self.source == "fallback"


@dataclass(frozen=True, slots=True)
class ComputeStats:
    """Request and deduplication counters for one memoizer."""

    requests: int
    cache_hits: int
    upstream_calls: int
    coalesced: int
    upstream_failures: int
    fallbacks_served: int


class CachedCompute(Generic[V]):
    """Cache lookup, request coalescing and fallback around one cache."""

    def __init__(
        self,
        cache: CacheBackend[V],
        *,
        cache_policy: CachePolicy | None = None,
        coalescing_policy: CoalescingPolicy | None = None,
        fallback_policy: FallbackPolicy | None = None,
        metrics: CacheMetrics | None = None,
    ) -> None:
        self._cache = cache
        self._cache_policy = cache_policy or CachePolicy()
        self._coalescing_policy = coalescing_policy or CoalescingPolicy()
        self._fallback_policy = fallback_policy or FallbackPolicy()
        self._metrics: CacheMetrics = metrics or NoOpCacheMetrics()
        self._tags = {"cache": cache.name}
        self._coalescer = RequestCoalescer()

        self._requests = 0
        self._cache_hits = 0
        self._upstream_calls = 0
        self._upstream_failures = 0
        self._fallbacks_served = 0

    @property
    def cache(self) -> CacheBackend[V]:
        return self._cache

    async def get_or_compute(
        self,
        key: str,
        compute: Compute[V],
        *,
        fallback: Fallback[V] | None = None,
        ttl_s: float | None = None,
    ) -> V:
        """Return the cached value for `key`, computing it on a miss."""
        outcome = await self.resolve(key, compute, fallback=fallback, ttl_s=ttl_s)
        return outcome.value

    async def resolve(
        self,
        key: str,
        compute: Compute[V],
        *,
        fallback: Fallback[V] | None = None,
        ttl_s: float | None = None,
    ) -> ComputeOutcome[V]:
        """Like `get_or_compute`, but also report whether the value was cached or a fallback."""
        self._requests += 1
        ttl = ttl_s if ttl_s is not None else self._cache_policy.ttl_s

        if self._cache_policy.enabled:
            hit = self._cache.get(key)
            if hit is not None:
                self._cache_hits += 1
                return ComputeOutcome(value=hit, source="cache")

        async def _load() -> ComputeOutcome[V]:
            return await self._load(key, compute, fallback=fallback, ttl_s=ttl)

        if self._coalescing_policy.enabled:
            return await self._coalescer.run(key, _load)
        return await _load()

    async def _load(
        self,
        key: str,
        compute: Compute[V],
        *,
        fallback: Fallback[V] | None,
        ttl_s: float | None,
    ) -> ComputeOutcome[V]:
        self._upstream_calls += 1
        try:
            value = await compute()
        except Exception:
            self._upstream_failures += 1
            self._metrics.incr("upstream_failures", tags=self._tags)
            if fallback is None or not self._fallback_policy.enabled:
                raise
            logger.warning(
                "Upstream call failed for key=%s; serving fallback", key, exc_info=True
            )
            value = fallback()
            if inspect.isawaitable(value):
                value = await value
            self._fallbacks_served += 1
            self._metrics.incr("fallbacks_served", tags=self._tags)
            if self._cache_policy.enabled and self._fallback_policy.cache_fallback:
                self._cache.set(key, value, ttl_s)
            return ComputeOutcome(value=value, source="fallback")

        if self._cache_policy.enabled:
            self._cache.set(key, value, ttl_s)
        return ComputeOutcome(value=value, source="upstream")

    def stats(self) -> ComputeStats:
        return ComputeStats(
            requests=self._requests,
            cache_hits=self._cache_hits,
            upstream_calls=self._upstream_calls,
            coalesced=self._coalescer.coalesced,
            upstream_failures=self._upstream_failures,
            fallbacks_served=self._fallbacks_served,
        )

    def stats_dict(self) -> dict[str, Any]:
        row = self.stats()
        return {
            "requests": row.requests,
            "cache_hits": row.cache_hits,
            "upstream_calls": row.upstream_calls,
            "coalesced": row.coalesced,
            "upstream_failures": row.upstream_failures,
            "fallbacks_served": row.fallbacks_served,
            "cache": self._cache.stats().to_dict(),
        }
