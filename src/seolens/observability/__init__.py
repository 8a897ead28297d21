"""
MIT License
Copyright (c) 2026 arpan404
See LICENSE file for full license text.

Module: observability/__init__.py.
"""

from .metrics import (
    CACHE_COUNTERS,
    CacheMetrics,
    NoOpCacheMetrics,
    PrometheusCacheMetrics,
)

__all__ = [
    "CACHE_COUNTERS",
    "CacheMetrics",
    "NoOpCacheMetrics",
    "PrometheusCacheMetrics",
]
