"""
MIT License
Copyright (c) 2026 arpan404
See LICENSE file for full license text.

Module: cache/registry.py.
"""

from __future__ import annotations

from threading import Lock
from typing import Any

from ..errors import CacheRegistryError
from ..settings import CacheSettings
from .base import CacheStats
from .ttl import TTLCache

_REGISTRY: dict[str, TTLCache[Any]] = {}
_LOCK = Lock()

# name -> (max_size, default_ttl_s)
DEFAULT_NAMESPACES: dict[str, tuple[int, float]] = {
    "api": (2000, 5 * 60.0),
    "user": (500, 30 * 60.0),
    "session": (1000, 60 * 60.0),
}


def _normalize_name(name: str) -> str:
    key = name.strip().lower()
    if not key:
        raise CacheRegistryError("Cache name must be non-empty")
    return key


def register_cache(cache: TTLCache[Any], *, overwrite: bool = False) -> None:
    """Register one cache instance by its `name`."""
    key = _normalize_name(cache.name)
    with _LOCK:
        if key in _REGISTRY and not overwrite:
            raise CacheRegistryError(f"Cache already registered: {key}")
        _REGISTRY[key] = cache


def get_cache(name: str) -> TTLCache[Any]:
    """Resolve a registered cache by name."""
    key = _normalize_name(name)
    with _LOCK:
        resolved = _REGISTRY.get(key)
    if resolved is None:
        raise CacheRegistryError(f"Unknown cache '{name}'")
    return resolved


def _matches(cache: TTLCache[Any], settings: CacheSettings) -> bool:
    return (
        cache.max_size == settings.max_size
        and cache.default_ttl_s == settings.default_ttl_s
        and cache.eviction_fraction == settings.eviction_fraction
    )


def create_cache(
    name: str | None = None,
    *,
    settings: CacheSettings | None = None,
) -> TTLCache[Any]:
    """
    Return the cache registered under `name`, creating it on first use.

    Explicit `settings` that disagree with an already registered cache raise
    `CacheRegistryError` instead of being ignored.
    """
    key = _normalize_name(name or "default")
    with _LOCK:
        existing = _REGISTRY.get(key)
        if existing is not None:
            if settings is not None and not _matches(existing, settings):
                raise CacheRegistryError(
                    f"Cache '{key}' already exists with max_size={existing.max_size}, "
                    f"default_ttl_s={existing.default_ttl_s}, "
                    f"eviction_fraction={existing.eviction_fraction}"
                )
            return existing
        cache: TTLCache[Any] = TTLCache.from_settings(
            settings or CacheSettings.from_env(), name=key
        )
        _REGISTRY[key] = cache
        return cache


def default_caches() -> dict[str, TTLCache[Any]]:
    """Create (or resolve) the `api`, `user` and `session` namespaces."""
    return {
        name: create_cache(
            name, settings=CacheSettings(max_size=max_size, default_ttl_s=ttl_s)
        )
        for name, (max_size, ttl_s) in DEFAULT_NAMESPACES.items()
    }


def user_key(user_id: str) -> str:
    return f"user:{user_id}"


def session_key(session_id: str) -> str:
    return f"session:{session_id}"


def list_caches() -> list[str]:
    """List registered cache names."""
    with _LOCK:
        return sorted(_REGISTRY.keys())


def snapshot_stats() -> dict[str, CacheStats]:
    """Collect stats for every registered cache."""
    with _LOCK:
        caches = dict(_REGISTRY)
    return {name: cache.stats() for name, cache in sorted(caches.items())}


def clear_all() -> None:
    """Drop the entries of every registered cache."""
    with _LOCK:
        caches = list(_REGISTRY.values())
    for cache in caches:
        cache.clear()


def reset_registry() -> None:
    """Forget every registered cache. Intended for tests."""
    with _LOCK:
        _REGISTRY.clear()
