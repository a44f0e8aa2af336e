"""Benchmark of cache eviction policies under a Zipf-distributed workload."""

__version__ = "0.1.0"
__all__ = ["benchmark", "caches", "runner", "zipf"]