from __future__ import annotations

import asyncio
import logging
from collections.abc import Mapping

import pytest
from pydantic import ValidationError

from seolens.cache import TTLCache
from seolens.local_seo import (
    KEY_PREFIX,
    AnalysisRequest,
    LocalSeoAnalysisService,
    analysis_cache_key,
    render_fallback_analysis,
)
from seolens.settings import AnalysisSettings

HOUR = 60 * 60


class _Clock:
    def __init__(self) -> None:
        self.now = 0.0

    def __call__(self) -> float:
        return self.now


class _Generator:
    def __init__(self, *, fail: bool = False, text: str = "generated analysis") -> None:
        self.fail = fail
        self.text = text
        self.calls = 0

    async def __call__(self, request: AnalysisRequest) -> str:
        self.calls += 1
        if self.fail:
            raise ConnectionError("generator returned 503")
        return f"{self.text} for {request.query}"


class _RecordingMetrics:
    def __init__(self) -> None:
        self.rows: list[tuple[str, int]] = []

    def incr(
        self, name: str, value: int = 1, *, tags: Mapping[str, str] | None = None
    ) -> None:
        _ = tags
        self.rows.append((name, value))

    def total(self, name: str) -> int:
        return sum(value for metric, value in self.rows if metric == name)


def run_async(coro):
    return asyncio.run(coro)


def _request(**overrides) -> AnalysisRequest:
    payload = {
        "query": "Coffee Shop",
        "location": "Brooklyn, NY",
        "gridSize": "5 x 5",
        "distance": 2.0,
        "searchResults": [
            {"name": "Bean There", "rating": 4.6, "reviews": 120, "distance": 0.4, "category": "Cafe"},
            {"name": "Daily Grind", "rating": 4.2, "reviews": 80, "distance": 1.1, "category": ""},
        ],
    }
    payload.update(overrides)
    return AnalysisRequest.model_validate(payload)


def _service(generator=None, clock=None) -> LocalSeoAnalysisService:
    settings = AnalysisSettings(ttl_s=4 * HOUR, top_n=5, cache_max_size=50)
    cache = TTLCache.from_settings(settings.cache_settings(), clock=clock or _Clock())
    return LocalSeoAnalysisService(generator, cache=cache, settings=settings)


def test_request_parses_camel_case_payload():
    request = _request()
    assert request.grid_size == "5 x 5"
    assert len(request.search_results) == 2
    assert request.search_results[0].name == "Bean There"


def test_request_rejects_invalid_ratings():
    with pytest.raises(ValidationError):
        _request(searchResults=[{"name": "Bad", "rating": 7}])


def test_request_accepts_listing_without_name():
    request = _request(searchResults=[{"name": "", "rating": 4.0}, {"rating": 3.5}])
    assert [r.name for r in request.search_results] == ["", ""]

    text = render_fallback_analysis(request)
    assert "found 2 competing businesses" in text
    assert analysis_cache_key(request).startswith(KEY_PREFIX)


def test_cache_key_ignores_case_and_whitespace():
    a = analysis_cache_key(_request())
    b = analysis_cache_key(_request(query="  coffee   SHOP", location="brooklyn, ny"))

    assert a == b
    assert a.startswith(KEY_PREFIX)
    assert len(a) == len(KEY_PREFIX) + 16


def test_cache_key_changes_with_top_results():
    base = analysis_cache_key(_request())
    reordered = analysis_cache_key(
        _request(searchResults=[{"name": "Daily Grind", "rating": 4.2}, {"name": "Bean There", "rating": 4.6}])
    )
    assert base != reordered


def test_cache_key_only_uses_top_n_results():
    extra = _request(
        searchResults=[{"name": f"Shop {i}", "rating": 4.0} for i in range(8)]
    )
    tail_changed = _request(
        searchResults=[{"name": f"Shop {i}", "rating": 4.0} for i in range(7)]
        + [{"name": "Somewhere else", "rating": 1.0}]
    )
    assert analysis_cache_key(extra, top_n=5) == analysis_cache_key(tail_changed, top_n=5)


def test_generated_analysis_is_cached():
    generator = _Generator()
    service = _service(generator)

    async def scenario() -> None:
        first = await service.analyze(_request())
        second = await service.analyze(_request(query="coffee shop"))
        assert first.analysis == "generated analysis for Coffee Shop"
        assert first.cached is False
        assert second.cached is True
        assert second.analysis == first.analysis
        assert second.cache_key == first.cache_key

    run_async(scenario())
    assert generator.calls == 1


def test_failed_generator_fallback_is_cached_within_ttl():
    clock = _Clock()
    generator = _Generator(fail=True)
    service = _service(generator, clock)

    async def scenario() -> None:
        first = await service.analyze(_request())
        assert first.fallback is True
        assert "Local SEO Analysis" in first.analysis

        clock.now = 3 * HOUR
        second = await service.analyze(_request())
        assert second.cached is True
        assert second.analysis == first.analysis

    run_async(scenario())
    assert generator.calls == 1
    assert service.stats().fallbacks_served == 1


def test_generator_retried_after_fallback_expires():
    clock = _Clock()
    generator = _Generator(fail=True)
    service = _service(generator, clock)

    async def scenario() -> None:
        await service.analyze(_request())
        clock.now = 4 * HOUR + 60
        generator.fail = False
        result = await service.analyze(_request())
        assert result.fallback is False
        assert result.analysis.startswith("generated analysis")

    run_async(scenario())
    assert generator.calls == 2


def test_blank_generator_output_falls_back():
    async def _blank(request: AnalysisRequest) -> str:
        _ = request
        return "  \n"

    result = run_async(_service(_blank).analyze(_request()))
    assert result.fallback is True
    assert "Local SEO Analysis" in result.analysis


def test_missing_generator_serves_cached_fallback():
    service = _service(None)

    async def scenario() -> None:
        first = await service.analyze(_request())
        second = await service.analyze(_request())
        assert first.fallback is True
        assert first.cached is False
        assert second.fallback is True
        assert second.cached is True
        assert second.analysis == first.analysis

    run_async(scenario())
    assert service.stats().upstream_calls == 1


def test_missing_generator_is_not_reported_as_a_failure(caplog):
    metrics = _RecordingMetrics()
    settings = AnalysisSettings(ttl_s=4 * HOUR, top_n=5, cache_max_size=50)
    service = LocalSeoAnalysisService(None, settings=settings, metrics=metrics)

    with caplog.at_level(logging.WARNING, logger="seolens"):
        result = run_async(service.analyze(_request()))

    assert result.fallback is True
    assert "Local SEO Analysis" in result.analysis
    stats = service.stats()
    assert stats.upstream_failures == 0
    assert stats.fallbacks_served == 0
    assert metrics.total("upstream_failures") == 0
    assert [r for r in caplog.records if r.levelno >= logging.WARNING] == []


def test_result_envelope():
    service = _service(_Generator())
    result = run_async(service.analyze(_request()))
    assert result.to_dict() == {
        "success": True,
        "analysis": "generated analysis for Coffee Shop",
        "cached": False,
        "fallback": False,
    }


def test_fallback_handles_empty_results():
    text = render_fallback_analysis(_request(searchResults=[]))
    assert "found 0 competing businesses" in text
    assert "0.0/5 stars" in text
    assert "Top Competitors" not in text


def test_fallback_summarizes_results():
    text = render_fallback_analysis(_request())
    assert "found 2 competing businesses" in text
    assert "4.4/5 stars" in text
    assert "average 100 reviews" in text
    assert "1 businesses have proper category classification" in text
    assert "1. Bean There (4.6/5, 120 reviews, 0.4 mi)" in text
