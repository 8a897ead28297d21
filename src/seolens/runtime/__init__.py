"""
MIT License
Copyright (c) 2026 arpan404
See LICENSE file for full license text.

Module: runtime/__init__.py.
"""

from .coalescing import RequestCoalescer
from .contracts import CachePolicy, CoalescingPolicy, FallbackPolicy
from .memoizer import CachedCompute, ComputeOutcome, ComputeStats

__all__ = [
    "CachedCompute",
    "ComputeOutcome",
    "ComputeStats",
    "RequestCoalescer",
    "CachePolicy",
    "CoalescingPolicy",
    "FallbackPolicy",
]
