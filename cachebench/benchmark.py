"""Benchmark results and their console report."""

from __future__ import annotations

import math
import sys
from dataclasses import dataclass, field
from typing import TextIO

from tabulate import tabulate

# Each benchmark performs this many lookups per distinct item.
WORKLOAD_MULTIPLIER = 15

HEADERS = ("CACHE", "HITRATE", "QPS", "HITS", "MISSES")


@dataclass
class BenchmarkResult:
    """Outcome of running one cache through a workload."""

    cache_name: str
    duration: float
    hits: int
    misses: int

    @property
    def requests(self) -> int:
        return self.hits + self.misses

    def hit_rate(self) -> float:
        """Percentage of requests that were hits (NaN with no requests)."""
        return self.hits / self.requests * 100 if self.requests else math.nan

    def qps(self) -> float:
        """Requests per second, measured at millisecond resolution."""
        millis = int(self.duration * 1000)
        if millis == 0:
            return math.inf if self.requests else math.nan
        return self.requests / millis * 1000


@dataclass
class Benchmark:
    """One benchmark configuration and the results gathered for it."""

    item_size: int
    cache_size_multiplier: float
    zipf_alpha: float
    concurrency: int
    results: list[BenchmarkResult] = field(default_factory=list)

    def add_result(self, result: BenchmarkResult) -> None:
        self.results.append(result)

    def sorted_results(self) -> list[BenchmarkResult]:
        """Order the results by hit rate, best first, and return them."""
        self.results.sort(key=BenchmarkResult.hit_rate, reverse=True)
        return self.results

    def render(self) -> str:
        """Format the configuration line and the results table."""
        summary = (
            f"itemSize={self.item_size}, "
            f"workloads={self.item_size * WORKLOAD_MULTIPLIER}, "
            f"cacheSize={self.cache_size_multiplier * 100:.2f}%, "
            f"zipf's alpha={self.zipf_alpha:.2f}, concurrency={self.concurrency}"
        )
        rows = [
            (r.cache_name, f"{r.hit_rate():.2f}%", f"{r.qps():.0f}", r.hits, r.misses)
            for r in self.sorted_results()
        ]
        table = tabulate(
            rows,
            headers=HEADERS,
            tablefmt="presto",
            disable_numparse=True,
            colalign=("left", "right", "right", "right", "right"),
        )
        return f"{summary}\n\n{table}\n\n\n"

    def write_to_console(self, stream: TextIO | None = None) -> None:
        """Write the report to ``stream`` (standard output by default)."""
        (stream or sys.stdout).write(self.render())

    def clean(self) -> None:
        self.results = []