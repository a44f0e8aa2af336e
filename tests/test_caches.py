import threading

import pytest

from cachebench.caches import (
    LFU,
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


@pytest.mark.parametrize(
    "cls",
    [LRU, LRUGroupCache, SLRU, LFU, Clock, Sieve, S4LRU, FreeLRUSynced, FreeLRUSharded],
)
def test_set_then_get_hits(cls):
    cache = cls(100)
    assert cache.get("k") is False
    cache.set("k")
    assert cache.get("k") is True


@pytest.mark.parametrize(
    "cls",
    [LRU, LRUGroupCache, SLRU, LFU, Clock, Sieve, S4LRU, FreeLRUSynced, FreeLRUSharded],
)
def test_size_is_bounded(cls):
    cache = cls(100)
    for i in range(5000):
        cache.set(str(i))
        cache.get(str(i // 2))
    assert 0 < len(cache) <= 100 + FreeLRUSharded.SHARDS


@pytest.mark.parametrize("cls", [LRU, LRUGroupCache, SLRU, LFU, Clock, Sieve, S4LRU, FreeLRUSynced])
def test_strict_capacity(cls):
    cache = cls(20)
    for i in range(1000):
        cache.set(str(i))
    assert len(cache) <= 20


@pytest.mark.parametrize(
    "cls",
    [LRU, LRUGroupCache, SLRU, LFU, Clock, Sieve, S4LRU, FreeLRUSynced, FreeLRUSharded],
)
def test_is_a_cache(cls):
    cache = cls(10)
    assert isinstance(cache, Cache)
    assert len(cache.name) > 0
    cache.set("x")
    assert cache.get("x") is True


@pytest.mark.parametrize(
    "cls,name",
    [
        (LRU, "lru-hashicorp"),
        (LRUGroupCache, "lru-groupcache"),
        (SLRU, "slru"),
        (LFU, "lfu"),
        (Clock, "clock"),
        (Sieve, "sieve"),
        (S4LRU, "s4lru"),
        (FreeLRUSynced, "freelru-synced"),
        (FreeLRUSharded, "freelru-sharded"),
    ],
)
def test_names(cls, name):
    assert cls(10).name == name


@pytest.mark.parametrize("cls", [LRU, LRUGroupCache, FreeLRUSynced, LFU, Clock, Sieve])
def test_recently_used_entry_survives(cls):
    cache = cls(2)
    cache.set("a")
    cache.set("b")
    assert cache.get("a")
    cache.set("c")
    assert cache.get("b") is False
    assert cache.get("a") is True
    assert cache.get("c") is True


@pytest.mark.parametrize("cls", [LRU, FreeLRUSynced, FreeLRUSharded])
def test_non_positive_size_rejected(cls):
    with pytest.raises(ValueError):
        cls(0)


def test_groupcache_zero_size_is_unbounded():
    cache = LRUGroupCache(0)
    for i in range(500):
        cache.set(str(i))
    assert len(cache) == 500


def test_groupcache_close_clears_and_reusable():
    cache = LRUGroupCache(10)
    cache.set("a")
    cache.close()
    assert len(cache) == 0
    assert cache.get("a") is False
    cache.set("a")
    assert cache.get("a") is True


def test_slru_promotes_on_hit():
    cache = SLRU(10)
    cache.set("hot")
    assert cache.get("hot")
    # flood the probation segment; the promoted key lives in the protected one
    for i in range(50):
        cache.set(str(i))
    assert cache.get("hot") is True


def test_slru_close_clears():
    cache = SLRU(10)
    cache.set("a")
    cache.get("a")
    cache.set("b")
    cache.close()
    assert len(cache) == 0


def test_lfu_evicts_least_frequent():
    cache = LFU(3)
    for key in "abc":
        cache.set(key)
    cache.get("a")
    cache.get("a")
    cache.get("c")
    cache.set("d")
    assert cache.get("b") is False
    assert all(cache.get(k) for k in "acd")


def test_sieve_keeps_visited_under_churn():
    cache = Sieve(5)
    cache.set("keep")
    for i in range(100):
        cache.get("keep")
        cache.set(str(i))
    assert cache.get("keep") is True
    assert len(cache) == 5


def test_s4lru_quarter_capacity_per_level():
    cache = S4LRU(8)
    for i in range(10):
        cache.set(str(i))
    assert len(cache) == cache.level_capacity
    assert cache.get("9") is True
    assert cache.get("0") is False


def test_s4lru_promoted_entry_survives_new_inserts():
    cache = S4LRU(8)
    cache.set("hot")
    assert cache.get("hot")
    for i in range(20):
        cache.set(str(i))
    assert cache.get("hot") is True


@pytest.mark.parametrize("cls", [Clock, Sieve, S4LRU, LFU])
def test_zero_size_stores_nothing(cls):
    cache = cls(0)
    cache.set("a")
    assert cache.get("a") is False
    assert len(cache) == 0


@pytest.mark.parametrize(
    "cls",
    [LRU, LRUGroupCache, SLRU, LFU, Clock, Sieve, S4LRU, FreeLRUSynced, FreeLRUSharded],
)
def test_concurrent_use_keeps_counts_consistent(cls):
    cache = cls(64)
    results = []
    lock = threading.Lock()

    def worker(offset):
        hits = misses = 0
        for i in range(2000):
            key = str((i * 7 + offset) % 200)
            if cache.get(key):
                hits += 1
            else:
                misses += 1
                cache.set(key)
        with lock:
            results.append(hits + misses)

    threads = [threading.Thread(target=worker, args=(n,)) for n in range(4)]
    for thread in threads:
        thread.start()
    for thread in threads:
        thread.join()
    assert results == [2000] * 4
    assert len(cache) <= 64 + FreeLRUSharded.SHARDS