"""
MIT License
Copyright (c) 2026 arpan404
See LICENSE file for full license text.

Metrics adapters for cache and memoizer observability.
"""

from __future__ import annotations

from collections.abc import Mapping
from typing import Protocol


class CacheMetrics(Protocol):
    """Minimal metrics interface for cache instrumentation."""

    def incr(
        self, name: str, value: int = 1, *, tags: Mapping[str, str] | None = None
    ) -> None:
        """Increment a counter metric."""


class NoOpCacheMetrics:
    """Default metrics sink when no metrics backend is provided."""

    def incr(
        self, name: str, value: int = 1, *, tags: Mapping[str, str] | None = None
    ) -> None:
        _ = name
        _ = value
        _ = tags


CACHE_COUNTERS: dict[str, str] = {
    "cache_hits": "Cache lookups answered by a live entry.",
    "cache_misses": "Cache lookups that found no live entry.",
    "cache_evictions": "Live entries removed to make room for a new key.",
    "cache_expirations": "Entries dropped because their ttl had elapsed.",
    "upstream_failures": "Upstream computations that raised instead of returning a value.",
    "fallbacks_served": "Fallback values returned in place of a failed upstream result.",
}

DEFAULT_CACHE_LABEL = "default"


class PrometheusCacheMetrics(CacheMetrics):
    """
    Prometheus counters for cache and memoizer events, labelled by cache name.

    Every counter in `CACHE_COUNTERS` is registered up front with its own help
    text and a single `cache` label; events without a `cache` tag are counted
    under `default`. Other tags are not exported. Unknown event names get a
    counter on first use. Requires `prometheus_client`; pass a dedicated
    `registry` in tests to keep the process-global default untouched.
    """

    def __init__(self, *, namespace: str = "seolens", registry=None) -> None:
        try:
            from prometheus_client import REGISTRY, Counter
        except ModuleNotFoundError as exc:  # pragma: no cover
            raise RuntimeError(
                "PrometheusCacheMetrics requires `prometheus_client` to be installed."
            ) from exc

        self._Counter = Counter
        self._namespace = namespace
        self._registry = registry if registry is not None else REGISTRY
        self._counters: dict[str, object] = {}
        for name, documentation in CACHE_COUNTERS.items():
            self._declare(name, documentation)

    def _declare(self, name: str, documentation: str):
        counter = self._Counter(
            name=name,
            documentation=documentation,
            namespace=self._namespace,
            labelnames=("cache",),
            registry=self._registry,
        )
        self._counters[name] = counter
        return counter

    def incr(self, name: str, value: int = 1, *, tags: Mapping[str, str] | None = None) -> None:
        if value <= 0:
            return
        counter = self._counters.get(name)
        if counter is None:
            counter = self._declare(name, f"Cache event count for {name}.")
        cache_name = str((tags or {}).get("cache") or DEFAULT_CACHE_LABEL)
        counter.labels(cache=cache_name).inc(value)
