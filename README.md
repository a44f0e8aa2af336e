# cachebench

Measures how cache eviction policies behave under a skewed
(Zipf-distributed) key workload. Each run reports the hit rate, the
throughput in queries per second, and the raw hit and miss counts for
every cache.

## Caches

All caches live in `cachebench.caches` and share the `Cache` interface:

- `get(key)` returns whether the key was cached,
- `set(key)` inserts the key, evicting another entry when full,
- `close()` releases the contents (only `LRUGroupCache` and `SLRU` clear
  themselves; for the others it does nothing),
- `len(cache)` gives the number of entries held,
- `name` is the label used in the report.

Every cache is guarded by a lock and can be used from several threads.

| Class            | `name`            | Policy                                                         |
|------------------|-------------------|----------------------------------------------------------------|
| `LRU`            | `lru-hashicorp`   | least recently used; size must be positive                     |
| `LRUGroupCache`  | `lru-groupcache`  | least recently used; a size of 0 means no limit                |
| `FreeLRUSynced`  | `freelru-synced`  | least recently used behind one lock; size must be positive     |
| `FreeLRUSharded` | `freelru-sharded` | 128 independently locked LRU shards chosen by a CRC-32 of the key |
| `SLRU`           | `slru`            | segmented LRU: 20 % probation, 80 % protected                  |
| `S4LRU`          | `s4lru`           | four LRU levels; a hit promotes an entry one level             |
| `LFU`            | `lfu`             | least frequently used, ties broken by least recent use         |
| `Clock`          | `clock`           | second-chance clock                                            |
| `Sieve`          | `sieve`           | SIEVE: FIFO queue with visited bits and a moving hand          |

`LRU`, `FreeLRUSynced` and `FreeLRUSharded` raise `ValueError` for a size
of zero or less. The command runs every cache above except `LFU`, which is
available for use from Python.

## Workload

Keys come from `cachebench.runner.KeyGenerator`, which wraps
`cachebench.zipf.ZipfGenerator` seeded with a fixed value, so the workload
is the same on every run. `ZipfGenerator(rng, i_min, i_max, theta, verbose)`
draws integers in `[i_min, i_max]` with `draw()`; it accepts any
non-negative `theta` other than 1 and raises `ValueError` otherwise or when
`i_min > i_max`. `increment_i_max(count)` raises the upper bound without
recomputing the distribution from scratch.

Each benchmark issues fifteen lookups per distinct item, split evenly
between the workers. A miss is followed by a `set`. Keys are generated
before timing starts.

## Running

```
pip install .
cachebench
```

By default this covers 500,000 items, cache sizes of 0.1 %, 1 % and 10 %
of the item count, concurrency levels 1, 2, 4, 8 and 16, and a Zipf alpha
of 0.99. Each can be changed, and every option takes one or more values:

```
cachebench --items 100000 --cache-size 0.01 0.1 --concurrency 1 4 --alpha 0.8 0.99
```

One table is printed per combination, with caches sorted by hit rate from
highest to lowest.

## Using it from Python

```python
import sys

from cachebench.caches import LFU, LRU, Sieve
from cachebench.runner import run, run_benchmark

result = run(Sieve, 10_000, 0.01, 0.99, 1)
print(result.hit_rate(), result.qps())

bench = run_benchmark(10_000, 0.01, 0.99, [LRU, LFU, Sieve], 2, sys.stdout)
print(bench.render())
```

`run` returns a `BenchmarkResult` (`cache_name`, `duration` in seconds,
`hits`, `misses`). `run_benchmark` gathers the results in a `Benchmark`,
writes its report to the given stream (standard output by default) and
returns it.

## Limitations

Workers are Python threads, so the concurrency levels measure behaviour
under lock contention rather than parallel speed-up. Results are only
printed as text tables; nothing is saved to a file.

## Tests

```
pip install ".[test]"
pytest
```