"""Cache eviction policies measured by the benchmark.

Keys double as values. Every cache is safe to use from several threads.
"""

from __future__ import annotations

import abc
import threading
import zlib
from collections import OrderedDict


class Cache(abc.ABC):
    """Common interface of all benchmarked caches."""

    name = ""

    def __init__(self) -> None:
        self._lock = threading.Lock()

    @abc.abstractmethod
    def get(self, key: str) -> bool:
        """Look ``key`` up, returning whether it was cached."""

    @abc.abstractmethod
    def set(self, key: str) -> None:
        """Store ``key``, evicting another entry if the cache is full."""

    def close(self) -> None:
        """Release the cache's contents."""

    @abc.abstractmethod
    def __len__(self) -> int:
        """Number of entries currently held."""


class _LRUStore:
    """Plain LRU list; a capacity of zero or less means unbounded."""

    def __init__(self, capacity: int) -> None:
        self.capacity = capacity
        self._items: OrderedDict[str, None] = OrderedDict()

    def lookup(self, key: str) -> bool:
        if key not in self._items:
            return False
        self._items.move_to_end(key)
        return True

    def add(self, key: str) -> None:
        self._items[key] = None
        self._items.move_to_end(key)
        if self.capacity > 0 and len(self._items) > self.capacity:
            self._items.popitem(last=False)

    def remove(self, key: str) -> None:
        self._items.pop(key, None)

    def clear(self) -> None:
        self._items.clear()

    def __len__(self) -> int:
        return len(self._items)


def _require_positive(size: int) -> None:
    if size <= 0:
        raise ValueError("must provide a positive size")


class LRU(Cache):
    """Least-recently-used cache with a strict positive capacity."""

    name = "lru-hashicorp"

    def __init__(self, size: int) -> None:
        _require_positive(size)
        super().__init__()
        self._store = _LRUStore(size)

    def get(self, key: str) -> bool:
        with self._lock:
            return self._store.lookup(key)

    def set(self, key: str) -> None:
        with self._lock:
            self._store.add(key)

    def close(self) -> None:
        pass

    def __len__(self) -> int:
        return len(self._store)


class LRUGroupCache(LRU):
    """LRU cache where a size of zero means no limit; closing clears it."""

    name = "lru-groupcache"

    def __init__(self, size: int) -> None:
        Cache.__init__(self)
        self._store = _LRUStore(size)

    def get(self, key: str) -> bool:
        return super().get(key)

    def set(self, key: str) -> None:
        super().set(key)

    def close(self) -> None:
        with self._lock:
            self._store.clear()


class FreeLRUSynced(LRU):
    """LRU cache behind a single lock."""

    name = "freelru-synced"

    def __init__(self, size: int) -> None:
        super().__init__(size)

    def get(self, key: str) -> bool:
        return super().get(key)

    def set(self, key: str) -> None:
        super().set(key)

    def close(self) -> None:
        super().close()


class SLRU(Cache):
    """Segmented LRU: a probation segment (20%) and a protected one (80%)."""

    name = "slru"

    def __init__(self, size: int) -> None:
        super().__init__()
        self._once = _LRUStore(int(size * 0.2))
        self._twice = _LRUStore(int(size * 0.8))

    def get(self, key: str) -> bool:
        with self._lock:
            if self._once.lookup(key):
                self._once.remove(key)
                self._twice.add(key)
                return True
            return self._twice.lookup(key)

    def set(self, key: str) -> None:
        with self._lock:
            self._once.add(key)

    def close(self) -> None:
        with self._lock:
            self._once.clear()
            self._twice.clear()

    def __len__(self) -> int:
        return len(self._once) + len(self._twice)


class LFU(Cache):
    """Least-frequently-used cache; ties go to the least recently referenced."""

    name = "lfu"

    def __init__(self, size: int) -> None:
        super().__init__()
        self.capacity = size
        self._counts: dict[str, int] = {}
        self._buckets: dict[int, OrderedDict[str, None]] = {}
        self._min_count = 0

    def _touch(self, key: str) -> None:
        count = self._counts[key]
        bucket = self._buckets[count]
        del bucket[key]
        if not bucket:
            del self._buckets[count]
            if self._min_count == count:
                self._min_count = count + 1
        self._counts[key] = count + 1
        self._buckets.setdefault(count + 1, OrderedDict())[key] = None

    def get(self, key: str) -> bool:
        with self._lock:
            if key not in self._counts:
                return False
            self._touch(key)
            return True

    def set(self, key: str) -> None:
        with self._lock:
            if key in self._counts:
                self._touch(key)
                return
            if self.capacity <= 0:
                return
            if len(self._counts) >= self.capacity:
                bucket = self._buckets[self._min_count]
                victim, _ = bucket.popitem(last=False)
                if not bucket:
                    del self._buckets[self._min_count]
                del self._counts[victim]
            self._counts[key] = 1
            self._buckets.setdefault(1, OrderedDict())[key] = None
            self._min_count = 1

    def close(self) -> None:
        pass

    def __len__(self) -> int:
        return len(self._counts)


class Clock(Cache):
    """CLOCK (second chance) cache over a fixed ring of slots."""

    name = "clock"

    def __init__(self, size: int) -> None:
        super().__init__()
        self.capacity = size
        self._slots: list[str] = []
        self._referenced: dict[str, bool] = {}
        self._hand = 0

    def get(self, key: str) -> bool:
        with self._lock:
            if key not in self._referenced:
                return False
            self._referenced[key] = True
            return True

    def set(self, key: str) -> None:
        with self._lock:
            if key in self._referenced:
                self._referenced[key] = True
                return
            if self.capacity <= 0:
                return
            if len(self._slots) < self.capacity:
                self._slots.append(key)
                self._referenced[key] = False
                return
            while self._referenced[self._slots[self._hand]]:
                self._referenced[self._slots[self._hand]] = False
                self._hand = (self._hand + 1) % self.capacity
            del self._referenced[self._slots[self._hand]]
            self._slots[self._hand] = key
            self._referenced[key] = False
            self._hand = (self._hand + 1) % self.capacity

    def close(self) -> None:
        pass

    def __len__(self) -> int:
        return len(self._referenced)


class _SieveNode:
    __slots__ = ("key", "visited", "newer", "older")

    def __init__(self, key: str, older: _SieveNode | None) -> None:
        self.key = key
        self.visited = False
        self.newer: _SieveNode | None = None
        self.older = older


class Sieve(Cache):
    """SIEVE cache: FIFO queue with visited bits and a moving hand."""

    name = "sieve"

    def __init__(self, size: int) -> None:
        super().__init__()
        self.capacity = size
        self._nodes: dict[str, _SieveNode] = {}
        self._head: _SieveNode | None = None
        self._tail: _SieveNode | None = None
        self._hand: _SieveNode | None = None

    def get(self, key: str) -> bool:
        with self._lock:
            node = self._nodes.get(key)
            if node is None:
                return False
            node.visited = True
            return True

    def set(self, key: str) -> None:
        with self._lock:
            node = self._nodes.get(key)
            if node is not None:
                node.visited = True
                return
            if self.capacity <= 0:
                return
            if len(self._nodes) >= self.capacity:
                self._evict()
            node = _SieveNode(key, self._head)
            if self._head is not None:
                self._head.newer = node
            self._head = node
            if self._tail is None:
                self._tail = node
            self._nodes[key] = node

    def _evict(self) -> None:
        hand = self._hand or self._tail
        while hand.visited:
            hand.visited = False
            hand = hand.newer or self._tail
        self._hand = hand.newer
        if hand.newer is not None:
            hand.newer.older = hand.older
        else:
            self._head = hand.older
        if hand.older is not None:
            hand.older.newer = hand.newer
        else:
            self._tail = hand.newer
        del self._nodes[hand.key]

    def close(self) -> None:
        pass

    def __len__(self) -> int:
        return len(self._nodes)


class S4LRU(Cache):
    """Four-level segmented LRU; hits promote entries one level up."""

    name = "s4lru"
    LEVELS = 4

    def __init__(self, size: int) -> None:
        super().__init__()
        self.level_capacity = size // self.LEVELS
        self._levels = [OrderedDict() for _ in range(self.LEVELS)]
        self._where: dict[str, int] = {}

    def get(self, key: str) -> bool:
        with self._lock:
            level = self._where.get(key)
            if level is None:
                return False
            current = self._levels[level]
            if level == self.LEVELS - 1:
                current.move_to_end(key)
                return True
            del current[key]
            upper = self._levels[level + 1]
            if len(upper) >= self.level_capacity:
                demoted, _ = upper.popitem(last=False)
                current[demoted] = None
                self._where[demoted] = level
            upper[key] = None
            self._where[key] = level + 1
            return True

    def set(self, key: str) -> None:
        with self._lock:
            if key in self._where or self.level_capacity <= 0:
                return
            bottom = self._levels[0]
            if len(bottom) >= self.level_capacity:
                victim, _ = bottom.popitem(last=False)
                del self._where[victim]
            bottom[key] = None
            self._where[key] = 0

    def close(self) -> None:
        pass

    def __len__(self) -> int:
        return len(self._where)


class FreeLRUSharded(Cache):
    """LRU cache split over independently locked shards chosen by key hash."""

    name = "freelru-sharded"
    SHARDS = 128

    def __init__(self, size: int) -> None:
        _require_positive(size)
        super().__init__()
        capacity = -(-size // self.SHARDS)
        self._shards = [
            (threading.Lock(), _LRUStore(capacity)) for _ in range(self.SHARDS)
        ]

    def _shard(self, key: str) -> tuple[threading.Lock, _LRUStore]:
        return self._shards[zlib.crc32(key.encode()) % self.SHARDS]

    def get(self, key: str) -> bool:
        lock, store = self._shard(key)
        with lock:
            return store.lookup(key)

    def set(self, key: str) -> None:
        lock, store = self._shard(key)
        with lock:
            store.add(key)

    def close(self) -> None:
        pass

    def __len__(self) -> int:
        return sum(len(store) for _, store in self._shards)