# cutstock_solver/types.py
# Core data structures for guillotine cutting-stock planning (1D lengths, 2D panels).
# Keep this file dependency-light so it can be imported everywhere.

from __future__ import annotations

from dataclasses import dataclass
from typing import Iterator, List, Optional, Tuple, Union

from .errors import InvalidInputError


Number = Union[int, float]
Size2D = Tuple[Number, Number]

ZERO_2D: Size2D = (0, 0)


def as_size_2d(size) -> Size2D:
    """Coerce a list/tuple of two numbers into a (w, h) tuple."""
    try:
        w, h = size
    except (TypeError, ValueError):
        raise InvalidInputError(f"2D size must be a pair of numbers, got {size!r}")
    return (w, h)


def _require_positive(label: str, values) -> None:
    for v in values:
        if not isinstance(v, (int, float)) or isinstance(v, bool):
            raise InvalidInputError(f"{label}: size components must be numbers, got {v!r}")
        if v <= 0:
            raise InvalidInputError(f"{label}: size must be positive, got {v!r}")


def _require_count(label: str, count) -> None:
    if not isinstance(count, int) or isinstance(count, bool):
        raise InvalidInputError(f"{label}: count must be an integer, got {count!r}")
    if count < 1:
        raise InvalidInputError(f"{label}: count must be >= 1, got {count}")


# ----------------------------
# Inputs
# ----------------------------

@dataclass(frozen=True)
class StockSize1D:
    """Purchasable stock length (board, bar, pipe) and its unit cost."""
    size: Number
    cost: Number = 1

    def __post_init__(self):
        _require_positive("StockSize1D", [self.size])
        if self.cost < 0:
            raise InvalidInputError(f"StockSize1D: cost must be >= 0, got {self.cost}")


@dataclass(frozen=True)
class StockSize2D:
    """Purchasable stock panel (w, h) and its unit cost."""
    size: Size2D
    cost: Number = 1

    def __post_init__(self):
        object.__setattr__(self, "size", as_size_2d(self.size))
        _require_positive("StockSize2D", self.size)
        if self.cost < 0:
            raise InvalidInputError(f"StockSize2D: cost must be >= 0, got {self.cost}")


@dataclass(frozen=True)
class RequiredCut1D:
    """A requested piece length with the number of pieces needed."""
    size: Number
    count: int = 1

    def __post_init__(self):
        _require_positive("RequiredCut1D", [self.size])
        _require_count("RequiredCut1D", self.count)


@dataclass(frozen=True)
class RequiredCut2D:
    """A requested rectangle (w, h) with the number of pieces needed. Rotation is allowed."""
    size: Size2D
    count: int = 1

    def __post_init__(self):
        object.__setattr__(self, "size", as_size_2d(self.size))
        _require_positive("RequiredCut2D", self.size)
        _require_count("RequiredCut2D", self.count)


# ----------------------------
# Cut trees (2D)
# ----------------------------

@dataclass(frozen=True)
class Leaf:
    """Terminal piece of a cut tree. A (0, 0) leaf means no material left."""
    size: Size2D

    @property
    def is_empty(self) -> bool:
        return self.size[0] <= 0 or self.size[1] <= 0


@dataclass(frozen=True)
class Node:
    """
    A guillotine split of `size`.
    children = (top_left, bottom_left, top_right, bottom_right); top_left is the placed piece.
    """
    size: Size2D
    children: Tuple["CutTree", "CutTree", "CutTree", "CutTree"]

    @property
    def top_left(self) -> "CutTree":
        return self.children[0]

    @property
    def bottom_left(self) -> "CutTree":
        return self.children[1]

    @property
    def top_right(self) -> "CutTree":
        return self.children[2]

    @property
    def bottom_right(self) -> "CutTree":
        return self.children[3]


CutTree = Union[Leaf, Node]


def iter_leaves(tree: CutTree) -> Iterator[Leaf]:
    """Depth-first leaves in child order (top-left, bottom-left, top-right, bottom-right)."""
    stack: List[CutTree] = [tree]
    while stack:
        t = stack.pop()
        if isinstance(t, Leaf):
            yield t
        else:
            stack.extend(reversed(t.children))


# ----------------------------
# Outputs
# ----------------------------

@dataclass(frozen=True)
class ResultCut1D:
    """How many units of `stock` to buy and the cut list for each unit."""
    stock: StockSize1D
    count: int
    decimal: float    # raw solver value, count == ceil(decimal)
    cuts: List[Number]

    def pieces(self) -> int:
        return self.count * len(self.cuts)


@dataclass(frozen=True)
class ResultCut2D:
    """How many units of `stock` to buy, the placed pieces and the full cut tree."""
    stock: StockSize2D
    count: int
    decimal: float
    cuts: List[Size2D]
    tree: Optional[CutTree] = None

    def pieces(self) -> int:
        return self.count * len(self.cuts)


ResultCut = Union[ResultCut1D, ResultCut2D]
