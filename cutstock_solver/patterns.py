# cutstock_solver/patterns.py
# Pattern enumerator: all non-dominated ways to cut one stock piece into candidate sizes.
#
# 2D:
#   For every candidate piece, split the stock (geometry.cut_2d). If nothing could be cut,
#   the unsplit leaf is a pattern by itself. Otherwise enumerate each of the four children
#   recursively and combine one pattern per child. Every pattern whose required leaves are
#   a sub-multiset of another pattern's is dropped (dominance.py).
#
#   Children are combined one at a time, pruning after each step. Adding the same
#   multiset to both sides keeps the sub-multiset order, so a partial combination that is
#   dominated can never lead to a surviving pattern: the result is the same set of
#   maximal patterns as pruning the full cross product, without building it.
#
# 1D:
#   Cut one candidate length off, recurse on what is left (minus kerf), prefix the cut.
#
# Both recursions are memoized on canonical size. 2D results are stored for the
# (short, long) orientation and transposed for callers asking for (long, short).
# The candidate list is expected to be small and deduplicated (see run.py).

from __future__ import annotations

from collections import Counter
from operator import itemgetter
from typing import Iterator, List, Optional, Sequence, Tuple

from .config import DEFAULTS
from .dominance import canonical_key, dimensions_equal, prune_dominated
from .geometry import cached_cut_2d, split_1d, transpose_tree
from .logger import get_logger
from .pattern_cache import PatternCache
from .types import CutTree, Leaf, Node, Number, Size2D, as_size_2d, iter_leaves

Pattern1D = Tuple[Number, ...]

# (tree, multiset of its required leaves)
_Scored = Tuple[CutTree, Counter]

_by_counter = itemgetter(1)


def get_leaves(tree: CutTree) -> List[Size2D]:
    return [leaf.size for leaf in iter_leaves(tree)]


def get_leaf_cuts(tree: CutTree, cuts: Sequence[Size2D]) -> List[Size2D]:
    """Leaves that are (rotation-equal to) one of the required sizes, in tree order."""
    wanted = {canonical_key(c) for c in cuts}
    return [size for size in get_leaves(tree) if canonical_key(size) in wanted]


# ----------------------------
# 2D
# ----------------------------

class _Ways:
    """Cached patterns for one canonical size; the transposed view is built on first use."""

    __slots__ = ("canonical", "_transposed")

    def __init__(self, canonical: List[_Scored]):
        self.canonical = canonical
        self._transposed: Optional[List[_Scored]] = None

    def transposed(self) -> List[_Scored]:
        if self._transposed is None:
            self._transposed = [(transpose_tree(t), c) for t, c in self.canonical]
        return self._transposed


class _Enumeration2D:
    """State for one top-level call: candidates, kerf, cache and run signature."""

    def __init__(self, blade_size: Number, cuts: List[Size2D], cache: PatternCache, precision: int):
        self.blade_size = blade_size
        self.cuts = cuts
        self.cache = cache
        self.precision = precision
        self.wanted = {canonical_key(c) for c in cuts}
        self.signature = cache.signature(blade_size, cuts)

    def ways(self, size: Size2D) -> List[_Scored]:
        if size[0] <= 0 or size[1] <= 0:
            return [(Leaf(size), Counter())]

        key = canonical_key(size)
        found = self.cache.get_patterns(self.signature, key)
        if found is None:
            found = _Ways(self._enumerate(key))
            self.cache.put_patterns(self.signature, key, found)

        if key != (size[0], size[1]):
            return found.transposed()
        return found.canonical

    def _leaf(self, leaf: Leaf) -> _Scored:
        k = canonical_key(leaf.size)
        return leaf, Counter({k: 1}) if k in self.wanted else Counter()

    def _combine(self, size: Size2D, child_ways: List[List[_Scored]]) -> Iterator[_Scored]:
        partial: List[Tuple[Tuple[CutTree, ...], Counter]] = [((), Counter())]
        for ways in child_ways:
            partial = prune_dominated(
                ((trees + (t,), c + tc) for trees, c in partial for t, tc in ways),
                key=_by_counter,
            )
        for trees, c in partial:
            self.cache.candidates += 1
            yield Node(size=size, children=trees), c

    def _candidates(self, size: Size2D) -> Iterator[_Scored]:
        for piece in self.cuts:
            tree = cached_cut_2d(size, piece, self.blade_size, self.cache, self.precision)
            if isinstance(tree, Leaf):
                if not dimensions_equal(tree.size, piece):
                    get_logger().debug(f"no cut: {piece} does not fit {size}")
                self.cache.candidates += 1
                yield self._leaf(tree)
                continue

            child_ways = [self.ways(child.size) for child in tree.children]
            yield from self._combine(tree.size, child_ways)

    def _enumerate(self, size: Size2D) -> List[_Scored]:
        return prune_dominated(self._candidates(size), key=_by_counter)


def enumerate_patterns_2d(
    size: Size2D,
    blade_size: Number,
    cuts: Sequence[Size2D],
    cache: Optional[PatternCache] = None,
    precision: int = DEFAULTS.default_precision,
) -> List[CutTree]:
    """
    All non-dominated cut trees for a (w, h) stock using candidate sizes `cuts`
    (each usable any number of times, rotation allowed).
    An empty candidate list gives the single unsplit stock.
    """
    size = as_size_2d(size)
    cand = [as_size_2d(c) for c in cuts]
    if not cand:
        return [Leaf(size)]
    cache = cache if cache is not None else PatternCache()
    return [t for t, _ in _Enumeration2D(blade_size, cand, cache, precision).ways(size)]


# ----------------------------
# 1D
# ----------------------------

class _Enumeration1D:
    def __init__(self, blade_size: Number, cuts: List[Number], cache: PatternCache, precision: int):
        self.blade_size = blade_size
        self.cuts = cuts
        self.cache = cache
        self.precision = precision
        self.signature = cache.signature(blade_size, cuts)

    def ways(self, size: Number) -> List[Pattern1D]:
        found = self.cache.get_patterns(self.signature, size)
        if found is None:
            found = prune_dominated(self._candidates(size))
            self.cache.put_patterns(self.signature, size, found)
        return found

    def _candidates(self, size: Number) -> Iterator[Pattern1D]:
        for cut in self.cuts:
            remainder = split_1d(size, cut, self.blade_size, self.precision)
            if remainder is None:
                self.cache.candidates += 1
                yield ()
                continue
            for way in self.ways(remainder):
                self.cache.candidates += 1
                yield (cut,) + way


def enumerate_patterns_1d(
    size: Number,
    blade_size: Number,
    cuts: Sequence[Number],
    cache: Optional[PatternCache] = None,
    precision: int = DEFAULTS.default_precision,
) -> List[Pattern1D]:
    """
    All non-dominated cut lists for a stock length using candidate lengths `cuts`.
    Each pattern is the sequence of lengths laid end to end, kerf between them.
    """
    cand = list(cuts)
    if not cand:
        return [()]
    cache = cache if cache is not None else PatternCache()
    return list(_Enumeration1D(blade_size, cand, cache, precision).ways(size))
