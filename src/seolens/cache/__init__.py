"""
MIT License
Copyright (c) 2026 arpan404
See LICENSE file for full license text.

Module: cache/__init__.py.
"""

from .base import CacheBackend, CacheEntry, CacheStats
from .decorators import cached
from .keys import compute_key, normalize_part
from .registry import (
    clear_all,
    create_cache,
    default_caches,
    get_cache,
    list_caches,
    register_cache,
    reset_registry,
    session_key,
    snapshot_stats,
    user_key,
)
from .ttl import TTLCache

__all__ = [
    "CacheBackend",
    "CacheEntry",
    "CacheStats",
    "TTLCache",
    "cached",
    "compute_key",
    "normalize_part",
    "register_cache",
    "get_cache",
    "create_cache",
    "default_caches",
    "list_caches",
    "snapshot_stats",
    "clear_all",
    "reset_registry",
    "user_key",
    "session_key",
]
