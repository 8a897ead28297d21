"""
MIT License
Copyright (c) 2026 arpan404
See LICENSE file for full license text.

SEOLens response cache: bounded TTL caching, request coalescing and
fallback memoization for expensive upstream calls.
"""

from __future__ import annotations

from .cache import (
    CacheEntry,
    CacheStats,
    TTLCache,
    cached,
    compute_key,
    create_cache,
    get_cache,
    register_cache,
    snapshot_stats,
)
from .errors import CacheConfigurationError, CacheRegistryError, SEOLensError
from .runtime import (
    CachedCompute,
    CachePolicy,
    CoalescingPolicy,
    FallbackPolicy,
    RequestCoalescer,
)
from .settings import AnalysisSettings, CacheSettings

__version__ = "0.1.0"

__all__ = [
    "TTLCache",
    "CacheEntry",
    "CacheStats",
    "cached",
    "compute_key",
    "create_cache",
    "get_cache",
    "register_cache",
    "snapshot_stats",
    "CachedCompute",
    "RequestCoalescer",
    "CachePolicy",
    "CoalescingPolicy",
    "FallbackPolicy",
    "CacheSettings",
    "AnalysisSettings",
    "SEOLensError",
    "CacheConfigurationError",
    "CacheRegistryError",
]
