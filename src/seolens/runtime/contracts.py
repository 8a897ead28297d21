"""
MIT License
Copyright (c) 2026 arpan404
See LICENSE file for full license text.

Typed policies for memoized upstream calls.
"""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True, slots=True)
class CachePolicy:
    """Response cache controls. `ttl_s=None` defers to the cache default."""

    enabled: bool = True
    ttl_s: float | None = None


@dataclass(frozen=True, slots=True)
class CoalescingPolicy:
    """In-flight request deduplication controls."""

    enabled: bool = True


@dataclass(frozen=True, slots=True)
class FallbackPolicy:
    """What to do when the upstream call fails and a fallback is supplied."""

    enabled: bool = True
    cache_fallback: bool = True
