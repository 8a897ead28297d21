"""
MIT License
Copyright (c) 2026 arpan404
See LICENSE file for full license text.

Module: local_seo/__init__.py.
"""

from .fallback import render_fallback_analysis
from .service import (
    KEY_PREFIX,
    EmptyAnalysisError,
    LocalSeoAnalysisService,
    analysis_cache_key,
)
from .types import AnalysisRequest, AnalysisResult, SearchResult

__all__ = [
    "AnalysisRequest",
    "AnalysisResult",
    "SearchResult",
    "KEY_PREFIX",
    "EmptyAnalysisError",
    "LocalSeoAnalysisService",
    "analysis_cache_key",
    "render_fallback_analysis",
]
