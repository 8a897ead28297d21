"""
MIT License
Copyright (c) 2026 arpan404
See LICENSE file for full license text.

Cached local-SEO analysis backed by an injected text generator.
"""

from __future__ import annotations

import logging
from collections.abc import Awaitable, Callable

from ..cache.keys import compute_key
from ..cache.ttl import TTLCache
from ..observability.metrics import CacheMetrics
from ..runtime.contracts import CachePolicy
from ..runtime.memoizer import CachedCompute, ComputeStats
from ..settings import AnalysisSettings
from .fallback import render_fallback_analysis
from .types import AnalysisRequest, AnalysisResult

logger = logging.getLogger("seolens.local_seo")

KEY_PREFIX = "local_seo_"

Generator = Callable[[AnalysisRequest], Awaitable[str]]


class EmptyAnalysisError(ValueError):
    """Raised when the generator returns no usable text."""


def analysis_cache_key(request: AnalysisRequest, *, top_n: int = 5) -> str:
    """Derive a stable key from query, location and a top-N result fingerprint."""
    fingerprint = [
        f"{row.name}:{row.rating:.1f}" for row in request.search_results[:top_n]
    ]
    digest = compute_key([request.query, request.location, *fingerprint])
    return f"{KEY_PREFIX}{digest[:16]}"


class LocalSeoAnalysisService:
    """
    Produce local-SEO analyses, memoized per normalized request.

    Without a generator every request is answered from the local fallback.
    Fallback answers are cached with the regular analysis ttl, so a failing
    generator is retried at most once per key per ttl window.
    """

    def __init__(
        self,
        generator: Generator | None = None,
        *,
        cache: TTLCache[str] | None = None,
        settings: AnalysisSettings | None = None,
        metrics: CacheMetrics | None = None,
    ) -> None:
        self._settings = settings or AnalysisSettings.from_env()
        self._generator = generator
        if cache is None:
            cache = TTLCache.from_settings(
                self._settings.cache_settings(), name="local_seo", metrics=metrics
            )
        self._cache: TTLCache[str] = cache
        self._memo: CachedCompute[str] = CachedCompute(
            self._cache,
            cache_policy=CachePolicy(ttl_s=self._settings.ttl_s),
            metrics=metrics,
        )

    @property
    def cache(self) -> TTLCache[str]:
        return self._cache

    def cache_key(self, request: AnalysisRequest) -> str:
        return analysis_cache_key(request, top_n=self._settings.top_n)

    async def analyze(self, request: AnalysisRequest) -> AnalysisResult:
        """Return the analysis for `request`, from cache when possible."""
        key = self.cache_key(request)
        generator = self._generator

        if generator is None:
            # No generator: the local rendering is the answer.
            async def _render() -> str:
                return render_fallback_analysis(request)

            outcome = await self._memo.resolve(key, _render)
            logger.debug("local seo analysis key=%s source=local", key)
            return AnalysisResult(
                analysis=outcome.value,
                cache_key=key,
                cached=outcome.cached,
                fallback=True,
            )

        async def _generate() -> str:
            text = await generator(request)
            if not text or not text.strip():
                raise EmptyAnalysisError("Generator returned an empty analysis")
            return text

        outcome = await self._memo.resolve(
            key,
            _generate,
            fallback=lambda: render_fallback_analysis(request),
        )
        logger.debug("local seo analysis key=%s source=%s", key, outcome.source)
        return AnalysisResult(
            analysis=outcome.value,
            cache_key=key,
            cached=outcome.cached,
            fallback=outcome.fallback,
        )

    def stats(self) -> ComputeStats:
        return self._memo.stats()
