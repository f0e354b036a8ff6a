# cutstock_solver/geometry.py
# Geometry / splitter: carve one required piece out of a bigger piece.
#
# 2D split layout (piece placed top-left, kerf k between pieces):
#
#   +---------+---+----------------+
#   |  piece  | k |   top_right    |   height = piece h
#   +---------+---+----------------+
#   |    k    |   |       k        |
#   +---------+---+----------------+
#   | bottom_ | k |  bottom_right  |   height = H - h - k
#   |  left   |   |                |
#   +---------+---+----------------+
#     piece w       W - w - k
#
# Any remainder with a non-positive side is a (0, 0) leaf (no material left).

from __future__ import annotations

from typing import Optional

from .config import DEFAULTS, round_dim
from .dominance import canonical_key, dimensions_equal
from .pattern_cache import PatternCache
from .types import ZERO_2D, CutTree, Leaf, Node, Number, Size2D


def bounds_check(size: Size2D) -> Leaf:
    if size[0] <= 0 or size[1] <= 0:
        return Leaf(ZERO_2D)
    return Leaf(size)


def fits_2d(bigger: Size2D, smaller: Size2D) -> bool:
    """True if smaller fits inside bigger in either orientation."""
    return (bigger[0] >= smaller[0] and bigger[1] >= smaller[1]) or (
        bigger[1] >= smaller[0] and bigger[0] >= smaller[1]
    )


def _quadrants(bigger: Size2D, piece: Size2D, blade_size: Number, precision: int) -> Node:
    bw, bh = bigger
    pw, ph = piece
    rest_w = round_dim(bw - pw - blade_size, precision)
    rest_h = round_dim(bh - ph - blade_size, precision)
    return Node(
        size=bigger,
        children=(
            bounds_check(piece),
            bounds_check((pw, rest_h)),
            bounds_check((rest_w, ph)),
            bounds_check((rest_w, rest_h)),
        ),
    )


def cut_2d(
    bigger: Size2D,
    smaller: Size2D,
    blade_size: Number,
    precision: int = DEFAULTS.default_precision,
) -> CutTree:
    """
    Cut `smaller` out of `bigger`.
      - same size (rotation-aware) -> Leaf(smaller)
      - fits as is                 -> Node with four quadrants
      - fits rotated 90 degrees    -> Node with the piece rotated
      - does not fit               -> Leaf(bigger), nothing cut
    """
    bigger = (bigger[0], bigger[1])
    smaller = (smaller[0], smaller[1])
    if dimensions_equal(bigger, smaller):
        return Leaf(smaller)
    if not fits_2d(bigger, smaller):
        return Leaf(bigger)
    if bigger[0] >= smaller[0] and bigger[1] >= smaller[1]:
        return _quadrants(bigger, smaller, blade_size, precision)
    return _quadrants(bigger, (smaller[1], smaller[0]), blade_size, precision)


def transpose_tree(tree: CutTree) -> CutTree:
    """
    Mirror a cut tree across its diagonal: every (w, h) becomes (h, w).
    The placed piece stays top-left; bottom-left and top-right swap places.
    """
    w, h = tree.size
    if isinstance(tree, Leaf):
        return Leaf((h, w))
    tl, bl, tr, br = tree.children
    return Node(
        size=(h, w),
        children=(transpose_tree(tl), transpose_tree(tr), transpose_tree(bl), transpose_tree(br)),
    )


def cached_cut_2d(
    bigger: Size2D,
    smaller: Size2D,
    blade_size: Number,
    cache: Optional[PatternCache],
    precision: int = DEFAULTS.default_precision,
) -> CutTree:
    """
    cut_2d memoized on (canonical bigger, canonical smaller, kerf).
    The split is computed for the canonical orientation and transposed back when needed.
    """
    if cache is None:
        return cut_2d(bigger, smaller, blade_size, precision)

    big_key = canonical_key(bigger)
    key = (big_key, canonical_key(smaller), blade_size)
    tree = cache.get_split(key)
    if tree is None:
        tree = cut_2d(big_key, key[1], blade_size, precision)
        cache.put_split(key, tree)

    if big_key != (bigger[0], bigger[1]):
        return transpose_tree(tree)
    return tree


def split_1d(
    bigger: Number,
    smaller: Number,
    blade_size: Number,
    precision: int = DEFAULTS.default_precision,
) -> Optional[Number]:
    """
    Cut a length `smaller` off `bigger`.
    Returns the remaining length after the kerf, or None if the piece does not fit.
    The remainder can be negative: the piece fit exactly and the kerf ran off the end,
    so nothing else can be cut.
    """
    remainder = bigger - smaller
    if remainder < 0:
        return None
    return round_dim(remainder - blade_size, precision)
