"""
MIT License
Copyright (c) 2026 arpan404
See LICENSE file for full license text.

Memoizing decorator backed by a `TTLCache`.
"""

from __future__ import annotations

import functools
import inspect
import json
from collections.abc import Callable
from typing import Any, TypeVar

from .keys import compute_key
from .ttl import TTLCache

F = TypeVar("F", bound=Callable[..., Any])
KeyFn = Callable[..., str]


def default_key(fn: Callable[..., Any]) -> KeyFn:
    """Key builder hashing the function name with its JSON-encoded arguments."""
    qualname = f"{fn.__module__}.{fn.__qualname__}"

    def _key(*args: Any, **kwargs: Any) -> str:
        return compute_key(
            [
                qualname,
                json.dumps(args, sort_keys=True, default=str),
                json.dumps(kwargs, sort_keys=True, default=str),
            ],
            normalize=False,
        )

    return _key


def cached(
    cache: TTLCache[Any],
    *,
    key: KeyFn | None = None,
    ttl_s: float | None = None,
) -> Callable[[F], F]:
    """
    Cache results of a sync or async callable.

    `None` results are never distinguishable from a miss, so they are
    recomputed on every call. Exceptions propagate and nothing is stored.
    """

    def decorator(fn: F) -> F:
        key_fn = key or default_key(fn)

        if inspect.iscoroutinefunction(fn):

            @functools.wraps(fn)
            async def async_wrapper(*args: Any, **kwargs: Any) -> Any:
                cache_key = key_fn(*args, **kwargs)
                hit = cache.get(cache_key)
                if hit is not None:
                    return hit
                result = await fn(*args, **kwargs)
                if result is not None:
                    cache.set(cache_key, result, ttl_s)
                return result

            return async_wrapper  # type: ignore[return-value]

        @functools.wraps(fn)
        def wrapper(*args: Any, **kwargs: Any) -> Any:
            cache_key = key_fn(*args, **kwargs)
            hit = cache.get(cache_key)
            if hit is not None:
                return hit
            result = fn(*args, **kwargs)
            if result is not None:
                cache.set(cache_key, result, ttl_s)
            return result

        return wrapper  # type: ignore[return-value]

    return decorator
