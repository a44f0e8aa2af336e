"""Runs Zipf-distributed workloads against the caches and reports results."""

from __future__ import annotations

import argparse
import random
import time
from collections.abc import Callable, Sequence
from concurrent.futures import ThreadPoolExecutor
from typing import TextIO

from .benchmark import WORKLOAD_MULTIPLIER, Benchmark, BenchmarkResult
from .caches import (
    LRU,
    S4LRU,
    SLRU,
    Cache,
    Clock,
    FreeLRUSharded,
    FreeLRUSynced,
    LRUGroupCache,
    Sieve,
)
from .zipf import ZipfGenerator

SEED = 19931203

NewCache = Callable[[int], Cache]

DEFAULT_CACHES: tuple[NewCache, ...] = (
    Sieve,
    LRU,
    LRUGroupCache,
    SLRU,
    S4LRU,
    Clock,
    FreeLRUSynced,
    FreeLRUSharded,
)
DEFAULT_ALPHAS = (0.99,)
DEFAULT_ITEMS = (500_000,)
DEFAULT_CONCURRENCIES = (1, 2, 4, 8, 16)
DEFAULT_CACHE_SIZES = (0.001, 0.01, 0.1)


class KeyGenerator:
    """Produces cache keys drawn from a seeded Zipf distribution."""

    name = "zipf"

    def __init__(self, size: int, theta: float) -> None:
        self._gen = ZipfGenerator(random.Random(SEED), 0, size, theta, False)

    def next(self) -> str:
        return str(self._gen.draw())

    def __iter__(self) -> KeyGenerator:
        return self

    def __next__(self) -> str:
        return self.next()


def run(
    new_cache: NewCache,
    item_size: int,
    cache_size_multiplier: float,
    zipf_alpha: float,
    concurrency: int,
) -> BenchmarkResult:
    """Replay a Zipf workload on a fresh cache, setting keys on every miss."""
    gen = KeyGenerator(item_size, zipf_alpha)
    each = item_size * WORKLOAD_MULTIPLIER // concurrency

    # Keys are generated up front so that generation does not skew the QPS.
    keys = [[gen.next() for _ in range(each)] for _ in range(concurrency)]

    cache = new_cache(int(item_size * cache_size_multiplier))
    try:

        def worker(worker_keys: list[str]) -> tuple[int, int]:
            hits = misses = 0
            for key in worker_keys:
                if cache.get(key):
                    hits += 1
                else:
                    misses += 1
                    cache.set(key)
            return hits, misses

        start = time.perf_counter()
        with ThreadPoolExecutor(max_workers=concurrency) as pool:
            counts = list(pool.map(worker, keys))
        elapsed = time.perf_counter() - start
    finally:
        cache.close()

    return BenchmarkResult(
        cache_name=cache.name,
        duration=elapsed,
        hits=sum(h for h, _ in counts),
        misses=sum(m for _, m in counts),
    )


def run_benchmark(
    item_size: int,
    cache_multiplier: float,
    zipf_alpha: float,
    caches: Sequence[NewCache],
    concurrency: int,
    stream: TextIO | None = None,
) -> Benchmark:
    """Run every cache on one configuration, print the report and return it."""
    bench = Benchmark(
        item_size=item_size,
        cache_size_multiplier=cache_multiplier,
        zipf_alpha=zipf_alpha,
        concurrency=concurrency,
    )
    for new_cache in caches:
        bench.add_result(
            run(new_cache, item_size, cache_multiplier, zipf_alpha, concurrency)
        )
    bench.write_to_console(stream)
    return bench


def _parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="cachebench", description="Compare cache hit rates and throughput."
    )
    parser.add_argument(
        "--items", type=int, nargs="+", default=list(DEFAULT_ITEMS),
        help="number of distinct items",
    )
    parser.add_argument(
        "--cache-size", type=float, nargs="+", default=list(DEFAULT_CACHE_SIZES),
        help="cache size as a fraction of the item count",
    )
    parser.add_argument(
        "--concurrency", type=int, nargs="+", default=list(DEFAULT_CONCURRENCIES),
        help="number of concurrent workers",
    )
    parser.add_argument(
        "--alpha", type=float, nargs="+", default=list(DEFAULT_ALPHAS),
        help="Zipf skew parameter",
    )
    return parser


def main(argv: Sequence[str] | None = None) -> int:
    args = _parser().parse_args(argv)
    for item_size in args.items:
        for multiplier in args.cache_size:
            for concurrency in args.concurrency:
                for alpha in args.alpha:
                    run_benchmark(
                        item_size, multiplier, alpha, DEFAULT_CACHES, concurrency
                    )
    return 0