from __future__ import annotations

from seolens.cache import TTLCache, compute_key, normalize_part


def test_compute_key_is_stable():
    parts = ["coffee shop", "Brooklyn, NY", "Joe's:4.5"]
    assert compute_key(parts) == compute_key(list(parts))
    assert len(compute_key(parts)) == 64


def test_compute_key_is_order_sensitive():
    assert compute_key(["a", "b"]) != compute_key(["b", "a"])


def test_compute_key_keeps_part_boundaries():
    assert compute_key(["ab", "c"]) != compute_key(["a", "bc"])


def test_compute_key_collapses_case_and_whitespace():
    assert compute_key(["  Coffee   Shop ", "NEW\tyork"]) == compute_key(
        ["coffee shop", "new york"]
    )


def test_compute_key_without_normalization_is_exact():
    assert compute_key(["A"], normalize=False) != compute_key(["a"], normalize=False)


def test_normalize_part_handles_none_and_numbers():
    assert normalize_part(None) == ""
    assert normalize_part(4.5) == "4.5"


def test_compute_key_exposed_on_cache_class():
    assert TTLCache.compute_key(["x", "y"]) == compute_key(["x", "y"])
