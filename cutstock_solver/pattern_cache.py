# cutstock_solver/pattern_cache.py
# Memoization for the pattern enumerator.
#
# Why:
# The recursion splits a stock into four children, and each child into four more.
# The same sub-rectangle (or remaining length) shows up in many branches.
# Without caching the enumeration is exponential in tree depth.
#
# Design:
# - Split store:   key = (canonical bigger, canonical smaller, kerf) -> CutTree
# - Pattern store: key = (run signature, canonical size) -> list of patterns
# - The run signature is a stable hash of (kerf, candidate sizes). Candidate list and
#   kerf are fixed per top-level call, but the signature keeps a reused cache honest.
# - One cache per optimization run; `clear()` to reuse, or just drop it.
# - Optional max_items bound with least-recently-used eviction (per store).
#
# Not thread safe.

from __future__ import annotations

import hashlib
from dataclasses import dataclass
from typing import Dict, Hashable, Iterable, List, Optional

from .dominance import canonical_key


@dataclass(frozen=True)
class CacheStats:
    split_items: int
    pattern_items: int
    split_hits: int
    split_misses: int
    pattern_hits: int
    pattern_misses: int
    candidates: int
    max_items: Optional[int]

    @property
    def hit_rate(self) -> float:
        hits = self.split_hits + self.pattern_hits
        total = hits + self.split_misses + self.pattern_misses
        return hits / total if total else 0.0


class _Store:
    """Dict with optional LRU eviction. Insertion order is recency order."""

    def __init__(self, max_items: Optional[int] = None):
        self.max_items = max_items
        self._data: Dict[Hashable, object] = {}

    def get(self, key: Hashable):
        if key not in self._data:
            return None
        if self.max_items is not None:
            # Move key to the end (most recently used)
            self._data[key] = self._data.pop(key)
        return self._data[key]

    def put(self, key: Hashable, value) -> None:
        self._data.pop(key, None)
        self._data[key] = value
        if self.max_items is not None:
            while len(self._data) > self.max_items:
                oldest = next(iter(self._data))
                del self._data[oldest]

    def __len__(self) -> int:
        return len(self._data)

    def clear(self) -> None:
        self._data.clear()


class PatternCache:
    def __init__(self, max_items: Optional[int] = None):
        self.max_items = None if max_items is None else int(max_items)
        self._splits = _Store(self.max_items)
        self._patterns = _Store(self.max_items)
        self.split_hits = 0
        self.split_misses = 0
        self.pattern_hits = 0
        self.pattern_misses = 0
        self.candidates = 0

    @staticmethod
    def signature(blade_size, cuts: Iterable) -> str:
        """
        Stable signature for (kerf, set of candidate sizes), ignoring order and rotation.
        """
        reps = sorted({repr(canonical_key(c)) for c in cuts})
        h = hashlib.blake2b(digest_size=16)
        h.update(repr(blade_size).encode("utf-8"))
        for r in reps:
            h.update(b"|")
            h.update(r.encode("utf-8"))
        return h.hexdigest()

    # ---- splits ----

    def get_split(self, key: Hashable):
        res = self._splits.get(key)
        if res is None:
            self.split_misses += 1
        else:
            self.split_hits += 1
        return res

    def put_split(self, key: Hashable, tree) -> None:
        self._splits.put(key, tree)

    # ---- enumerated patterns ----

    def get_patterns(self, signature: str, size_key: Hashable) -> Optional[List]:
        res = self._patterns.get((signature, size_key))
        if res is None:
            self.pattern_misses += 1
        else:
            self.pattern_hits += 1
        return res

    def put_patterns(self, signature: str, size_key: Hashable, patterns: List) -> None:
        self._patterns.put((signature, size_key), patterns)

    def clear(self) -> None:
        self._splits.clear()
        self._patterns.clear()
        self.split_hits = self.split_misses = 0
        self.pattern_hits = self.pattern_misses = 0
        self.candidates = 0

    def stats(self) -> CacheStats:
        return CacheStats(
            split_items=len(self._splits),
            pattern_items=len(self._patterns),
            split_hits=self.split_hits,
            split_misses=self.split_misses,
            pattern_hits=self.pattern_hits,
            pattern_misses=self.pattern_misses,
            candidates=self.candidates,
            max_items=self.max_items,
        )
