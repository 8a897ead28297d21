from __future__ import annotations

import pytest

from seolens.cache import (
    TTLCache,
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
from seolens.errors import CacheRegistryError
from seolens.settings import CacheSettings


@pytest.fixture(autouse=True)
def _clean_registry():
    reset_registry()
    yield
    reset_registry()


def test_register_and_resolve_by_name():
    cache = TTLCache(name="Pages")
    register_cache(cache)

    assert get_cache("pages") is cache
    assert get_cache(" PAGES ") is cache
    assert list_caches() == ["pages"]


def test_duplicate_registration_requires_overwrite():
    register_cache(TTLCache(name="pages"))
    with pytest.raises(CacheRegistryError):
        register_cache(TTLCache(name="pages"))

    replacement = TTLCache(name="pages")
    register_cache(replacement, overwrite=True)
    assert get_cache("pages") is replacement


def test_empty_and_unknown_names_fail():
    with pytest.raises(CacheRegistryError):
        register_cache(TTLCache(name="  "))
    with pytest.raises(CacheRegistryError):
        get_cache("missing")


def test_create_cache_reuses_existing_instance():
    first = create_cache("reports", settings=CacheSettings(max_size=3))
    second = create_cache("reports", settings=CacheSettings(max_size=3))
    third = create_cache("reports")

    assert first is second is third
    assert first.max_size == 3


def test_create_cache_rejects_conflicting_settings():
    create_cache("reports", settings=CacheSettings(max_size=3, default_ttl_s=60))

    with pytest.raises(CacheRegistryError, match="max_size=3"):
        create_cache("reports", settings=CacheSettings(max_size=99, default_ttl_s=60))
    with pytest.raises(CacheRegistryError):
        create_cache("reports", settings=CacheSettings(max_size=3, default_ttl_s=120))
    with pytest.raises(CacheRegistryError):
        create_cache(
            "reports",
            settings=CacheSettings(max_size=3, default_ttl_s=60, eviction_fraction=0.5),
        )

    assert get_cache("reports").max_size == 3


def test_default_namespaces_resolve_twice():
    assert default_caches() == default_caches()


def test_create_cache_reads_env_when_no_settings(monkeypatch):
    monkeypatch.setenv("SEOLENS_CACHE_MAX_SIZE", "42")
    cache = create_cache("env")
    assert cache.max_size == 42


def test_default_namespaces():
    caches = default_caches()

    assert set(caches) == {"api", "user", "session"}
    assert caches["api"].max_size == 2000
    assert caches["api"].default_ttl_s == 300
    assert caches["user"].max_size == 500
    assert caches["session"].default_ttl_s == 3600
    assert user_key("42") == "user:42"
    assert session_key("abc") == "session:abc"


def test_snapshot_and_clear_all():
    caches = default_caches()
    caches["user"].set(user_key("1"), {"name": "ada"})
    caches["user"].get(user_key("1"))
    caches["api"].get("nothing")

    stats = snapshot_stats()
    assert list(stats) == ["api", "session", "user"]
    assert stats["user"].hits == 1
    assert stats["api"].misses == 1

    clear_all()
    assert all(len(cache) == 0 for cache in caches.values())
