"""
MIT License
Copyright (c) 2026 arpan404
See LICENSE file for full license text.

Error taxonomy for cache configuration and registry resolution.
"""

from __future__ import annotations

from typing import Any


class SEOLensError(RuntimeError):
    """Base class for all seolens errors."""


class CacheConfigurationError(SEOLensError):
    """Raised when cache or analysis settings are invalid."""

    def __init__(self, field: str, value: Any, message: str) -> None:
        self.field = field
        self.value = value
        super().__init__(f"Invalid configuration for {field}={value!r}: {message}")


class CacheRegistryError(SEOLensError):
    """Raised when named cache resolution or registration fails."""
