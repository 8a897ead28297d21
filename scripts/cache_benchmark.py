#!/usr/bin/env python3
"""
Cache benchmark utility for hit-rate/dedup characterization.

Replays a skewed stream of requests over a fixed key space through
`CachedCompute` with a simulated upstream, then prints the resulting
cache and deduplication counters.

Usage examples:
  PYTHONPATH=src python scripts/cache_benchmark.py
  PYTHONPATH=src python scripts/cache_benchmark.py --max-size 50 --keys 400 --failure-rate 0.2
"""

from __future__ import annotations

import argparse
import asyncio
import random
import statistics
import time

from seolens.cache import TTLCache
from seolens.runtime import CachedCompute, CachePolicy


async def run_benchmark(
    *,
    num_requests: int,
    num_keys: int,
    concurrency: int,
    max_size: int,
    ttl_s: float,
    latency_ms: float,
    failure_rate: float,
    seed: int,
) -> None:
    rng = random.Random(seed)
    cache: TTLCache[str] = TTLCache(max_size=max_size, default_ttl_s=ttl_s, name="bench")
    memo: CachedCompute[str] = CachedCompute(cache, cache_policy=CachePolicy(ttl_s=ttl_s))
    semaphore = asyncio.Semaphore(concurrency)
    latencies: list[float] = []

    # Zipf-like skew so a few keys dominate, as repeated dashboard refreshes do.
    weights = [1.0 / (rank + 1) for rank in range(num_keys)]
    keys = [f"bench_{i}" for i in rng.choices(range(num_keys), weights=weights, k=num_requests)]

    async def upstream() -> str:
        await asyncio.sleep(latency_ms / 1000.0)
        if rng.random() < failure_rate:
            raise ConnectionError("simulated upstream failure")
        return "payload"

    async def one(key: str) -> None:
        async with semaphore:
            started = time.perf_counter()
            await memo.get_or_compute(key, upstream, fallback=lambda: "fallback")
            latencies.append(time.perf_counter() - started)

    started = time.time()
    await asyncio.gather(*(one(key) for key in keys))
    elapsed = time.time() - started

    cache_stats = cache.stats()
    memo_stats = memo.stats()
    p50 = statistics.median(latencies) if latencies else 0.0
    p95 = sorted(latencies)[int(0.95 * (len(latencies) - 1))] if latencies else 0.0

    print(f"requests={num_requests}")
    print(f"keys={num_keys}")
    print(f"max_size={max_size}")
    print(f"elapsed_s={elapsed:.3f}")
    print(f"hit_rate={cache_stats.hit_rate:.3f}")
    print(f"evictions={cache_stats.evictions}")
    print(f"upstream_calls={memo_stats.upstream_calls}")
    print(f"coalesced={memo_stats.coalesced}")
    print(f"upstream_failures={memo_stats.upstream_failures}")
    print(f"fallbacks_served={memo_stats.fallbacks_served}")
    print(f"request_p50_ms={p50 * 1000:.2f}")
    print(f"request_p95_ms={p95 * 1000:.2f}")


def parse_args() -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Cache benchmark utility")
    parser.add_argument("--num-requests", type=int, default=2000)
    parser.add_argument("--keys", type=int, default=200)
    parser.add_argument("--concurrency", type=int, default=32)
    parser.add_argument("--max-size", type=int, default=100)
    parser.add_argument("--ttl-s", type=float, default=300.0)
    parser.add_argument("--latency-ms", type=float, default=5.0)
    parser.add_argument("--failure-rate", type=float, default=0.0)
    parser.add_argument("--seed", type=int, default=7)
    return parser.parse_args()


def main() -> None:
    args = parse_args()
    asyncio.run(
        run_benchmark(
            num_requests=args.num_requests,
            num_keys=args.keys,
            concurrency=args.concurrency,
            max_size=args.max_size,
            ttl_s=args.ttl_s,
            latency_ms=args.latency_ms,
            failure_rate=args.failure_rate,
            seed=args.seed,
        )
    )


if __name__ == "__main__":
    main()
