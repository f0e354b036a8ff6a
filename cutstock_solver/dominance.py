# cutstock_solver/dominance.py
# Equivalence and dominance between cutting patterns.
#
# A pattern is reduced to the multiset of its leaves that match a required size.
# Pattern A is dominated by pattern B when A's multiset is a sub-multiset of B's:
# B yields at least as many of every required piece, so A is never needed.
#
# Multisets are collections.Counter over canonical keys, so a dominance test is
# one hash lookup per distinct size instead of a search-and-remove over lists.

from __future__ import annotations

from collections import Counter
from typing import Callable, Hashable, Iterable, List, Mapping, Tuple, TypeVar, Union

T = TypeVar("T")

LeafCounter = Mapping[Hashable, int]


def canonical_key(dim) -> Hashable:
    """
    Rotation/order-normalized representation of a dimension.
      12       -> 12
      (48, 24) -> (24, 48)
    """
    if isinstance(dim, (tuple, list)):
        a, b = dim
        return (a, b) if a <= b else (b, a)
    return dim


def dimensions_equal(d1, d2) -> bool:
    """True if d1 and d2 match exactly or as a rotated pair."""
    if isinstance(d1, (tuple, list)) and isinstance(d2, (tuple, list)):
        (x, y), (n, m) = d1, d2
        return (x == n and y == m) or (x == m and y == n)
    return d1 == d2


def leaf_counter(leaves: Iterable) -> Counter:
    """Multiset of canonical leaf sizes."""
    return Counter(canonical_key(leaf) for leaf in leaves)


def _as_counter(leaves: Union[LeafCounter, Iterable]) -> LeafCounter:
    if isinstance(leaves, Mapping):
        return leaves
    return leaf_counter(leaves)


def is_dominated(leaves_a, leaves_b) -> bool:
    """
    True iff leaves_a is a sub-multiset of leaves_b (under rotation equality).
    Accepts raw leaf lists or precomputed counters.
    """
    a = _as_counter(leaves_a)
    b = _as_counter(leaves_b)
    for key, n in a.items():
        if n > 0 and b.get(key, 0) < n:
            return False
    return True


def prune_dominated(items: Iterable[T], key: Callable[[T], LeafCounter] = leaf_counter) -> List[T]:
    """
    Keep an antichain of items under dominance, in input order.

    Each candidate is dropped if a kept item dominates it; otherwise every kept
    item it dominates is removed and the candidate is appended. With equal
    multisets the earlier item stays. Items may be a generator (consumed once).
    """
    kept: List[Tuple[T, LeafCounter]] = []
    for item in items:
        c = key(item)
        if any(is_dominated(c, kc) for _, kc in kept):
            continue
        kept = [(it, kc) for it, kc in kept if not is_dominated(kc, c)]
        kept.append((item, c))
    return [it for it, _ in kept]
