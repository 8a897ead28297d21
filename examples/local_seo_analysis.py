"""
local_seo_analysis.py - Cached local-SEO analysis example.

Runs the same analysis request twice against a generator that always fails,
showing that the locally rendered fallback is cached and the failing
generator is only called once.

Usage:
    PYTHONPATH=src python examples/local_seo_analysis.py
"""

import logging

from seolens.local_seo import AnalysisRequest, LocalSeoAnalysisService


async def failing_generator(request: AnalysisRequest) -> str:
    raise ConnectionError(f"generator unavailable for {request.query!r}")


async def main() -> None:
    logging.basicConfig(level=logging.INFO)
    service = LocalSeoAnalysisService(failing_generator)
    request = AnalysisRequest.model_validate(
        {
            "query": "Coffee Shop",
            "location": "Brooklyn, NY",
            "gridSize": "5 x 5",
            "distance": 2,
            "searchResults": [
                {"name": "Bean There", "rating": 4.6, "reviews": 120, "distance": 0.4},
                {"name": "Daily Grind", "rating": 4.2, "reviews": 80, "distance": 1.1},
            ],
        }
    )

    first = await service.analyze(request)
    second = await service.analyze(request)
    print(first.analysis)
    print(f"first: fallback={first.fallback} cached={first.cached}")
    print(f"second: fallback={second.fallback} cached={second.cached}")
    print(service.stats())
    print(service.cache.stats().to_dict())


if __name__ == "__main__":
    import asyncio

    asyncio.run(main())
