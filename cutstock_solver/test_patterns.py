# cutstock_solver/test_patterns.py
# Enumerator behaviour on small, hand-checkable boards.

from __future__ import annotations

from collections import Counter

from cutstock_solver.dominance import canonical_key
from cutstock_solver.pattern_cache import PatternCache
from cutstock_solver.patterns import (
    enumerate_patterns_1d,
    enumerate_patterns_2d,
    get_leaf_cuts,
    get_leaves,
)
from cutstock_solver.types import Leaf


def _multisets(trees, cuts):
    """Order-independent view: set of sorted (canonical size, count) tuples per pattern."""
    out = set()
    for t in trees:
        c = Counter(canonical_key(s) for s in get_leaf_cuts(t, cuts))
        out.add(tuple(sorted(c.items())))
    return out


# ----------------------------
# 1D
# ----------------------------

def test_1d_single_size_fills_board() -> None:
    # 13 * 7 + 12 * 0.125 = 92.5 <= 96; a 14th piece does not fit
    assert enumerate_patterns_1d(96, 0.125, [7]) == [(7,) * 13]
    assert enumerate_patterns_1d(24, 0.125, [7]) == [(7, 7, 7)]


def test_1d_exact_fit_ignores_trailing_kerf() -> None:
    assert enumerate_patterns_1d(7, 0.125, [7]) == [(7,)]
    assert enumerate_patterns_1d(14.125, 0.125, [7]) == [(7, 7)]


def test_1d_two_sizes_antichain() -> None:
    ways = enumerate_patterns_1d(10, 0, [3, 4])
    assert {tuple(sorted(w)) for w in ways} == {(3, 3, 3), (3, 3, 4), (4, 4)}
    assert len(ways) == 3


def test_1d_piece_too_long_and_empty_cuts() -> None:
    assert enumerate_patterns_1d(5, 0, [7]) == [()]
    assert enumerate_patterns_1d(5, 0, []) == [()]


def test_1d_cache_is_reused() -> None:
    cache = PatternCache()
    first = enumerate_patterns_1d(96, 0.125, [7, 5], cache=cache)
    misses = cache.stats().pattern_misses
    second = enumerate_patterns_1d(96, 0.125, [7, 5], cache=cache)
    assert first == second
    assert cache.stats().pattern_misses == misses
    assert cache.stats().pattern_hits > 0


# ----------------------------
# 2D
# ----------------------------

def test_2d_four_squares() -> None:
    trees = enumerate_patterns_2d((24, 24), 0, [(12, 12)])
    assert len(trees) == 1
    assert get_leaf_cuts(trees[0], [(12, 12)]) == [(12, 12)] * 4


def test_2d_kerf_leaves_room_for_one() -> None:
    trees = enumerate_patterns_2d((24, 24), 1, [(12, 12)])
    assert trees
    for t in trees:
        assert len(get_leaf_cuts(t, [(12, 12)])) == 1


def test_2d_mixed_sizes() -> None:
    cuts = [(12, 12), (12, 6)]
    trees = enumerate_patterns_2d((24, 12), 0, cuts)
    assert _multisets(trees, cuts) == {
        (((12, 12), 2),),
        (((6, 12), 2), ((12, 12), 1)),
        (((6, 12), 4),),
    }
    for t in trees:
        assert t.size == (24, 12)


def test_2d_piece_does_not_fit() -> None:
    assert enumerate_patterns_2d((10, 10), 0, [(11, 11)]) == [Leaf((10, 10))]
    assert enumerate_patterns_2d((10, 10), 0, [(11, 11)])[0].size == (10, 10)


def test_2d_empty_cuts() -> None:
    assert enumerate_patterns_2d((10, 20), 0.125, []) == [Leaf((10, 20))]


def test_2d_rotation_invariance() -> None:
    a = enumerate_patterns_2d((24, 36), 0, [(12, 18)])
    b = enumerate_patterns_2d((24, 36), 0, [(18, 12)])
    assert _multisets(a, [(12, 18)]) == _multisets(b, [(18, 12)])

    flipped = enumerate_patterns_2d((36, 24), 0, [(12, 18)])
    assert _multisets(flipped, [(12, 18)]) == _multisets(a, [(12, 18)])
    for t in flipped:
        assert t.size == (36, 24)


def test_2d_leaves_cover_stock() -> None:
    # without kerf, leaves tile the stock exactly
    for t in enumerate_patterns_2d((24, 12), 0, [(12, 12), (12, 6)]):
        assert sum(w * h for w, h in get_leaves(t)) == 24 * 12


def test_2d_memoized_between_stocks() -> None:
    cache = PatternCache()
    enumerate_patterns_2d((24, 24), 0, [(12, 12), (6, 12)], cache=cache)
    before = cache.stats()
    enumerate_patterns_2d((24, 24), 0, [(12, 12), (6, 12)], cache=cache)
    after = cache.stats()
    assert after.pattern_items == before.pattern_items
    assert after.pattern_hits == before.pattern_hits + 1
    assert after.candidates == before.candidates
