"""
MIT License
Copyright (c) 2026 arpan404
See LICENSE file for full license text.

Cache and analysis settings with explicit environment loading.
"""

from __future__ import annotations

import os
from dataclasses import dataclass

from .errors import CacheConfigurationError


def _env_int(name: str, default: int) -> int:
    raw = os.getenv(name)
    if raw is None or raw.strip() == "":
        return default
    try:
        return int(raw.strip())
    except ValueError as exc:
        raise CacheConfigurationError(name, raw, "expected an integer") from exc


def _env_float(name: str, default: float) -> float:
    raw = os.getenv(name)
    if raw is None or raw.strip() == "":
        return default
    try:
        return float(raw.strip())
    except ValueError as exc:
        raise CacheConfigurationError(name, raw, "expected a number") from exc


@dataclass(frozen=True, slots=True)
class CacheSettings:
    """Explicit settings used to construct a `TTLCache`."""

    max_size: int = 1000
    default_ttl_s: float = 3600.0
    eviction_fraction: float = 0.2

    def __post_init__(self) -> None:
        if self.max_size < 1:
            raise CacheConfigurationError("max_size", self.max_size, "must be >= 1")
        if self.default_ttl_s < 0:
            raise CacheConfigurationError(
                "default_ttl_s", self.default_ttl_s, "must be >= 0"
            )
        if not 0 < self.eviction_fraction <= 1:
            raise CacheConfigurationError(
                "eviction_fraction",
                self.eviction_fraction,
                "must be in the interval (0, 1]",
            )

    @staticmethod
    def from_env() -> "CacheSettings":
        """Load settings from environment variables."""
        return CacheSettings(
            max_size=_env_int("SEOLENS_CACHE_MAX_SIZE", 1000),
            default_ttl_s=_env_float("SEOLENS_CACHE_DEFAULT_TTL_S", 3600.0),
            eviction_fraction=_env_float("SEOLENS_CACHE_EVICTION_FRACTION", 0.2),
        )


@dataclass(frozen=True, slots=True)
class AnalysisSettings:
    """Settings for the local-SEO analysis consumer of the cache."""

    ttl_s: float = 4 * 60 * 60
    top_n: int = 5
    cache_max_size: int = 500

    def __post_init__(self) -> None:
        if self.ttl_s < 0:
            raise CacheConfigurationError("ttl_s", self.ttl_s, "must be >= 0")
        if self.top_n < 1:
            raise CacheConfigurationError("top_n", self.top_n, "must be >= 1")
        if self.cache_max_size < 1:
            raise CacheConfigurationError(
                "cache_max_size", self.cache_max_size, "must be >= 1"
            )

    @staticmethod
    def from_env() -> "AnalysisSettings":
        """Load settings from environment variables."""
        return AnalysisSettings(
            ttl_s=_env_float("SEOLENS_ANALYSIS_TTL_S", 4 * 60 * 60),
            top_n=_env_int("SEOLENS_ANALYSIS_TOP_N", 5),
            cache_max_size=_env_int("SEOLENS_ANALYSIS_CACHE_MAX_SIZE", 500),
        )

    def cache_settings(self) -> CacheSettings:
        """Adapt analysis settings into settings for a dedicated cache."""
        return CacheSettings(max_size=self.cache_max_size, default_ttl_s=self.ttl_s)
