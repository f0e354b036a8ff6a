# cutstock_solver/metrics.py
# Metrics for a cutting plan:
# - total cost and stock units bought
# - pieces produced per required size
# - stock material bought vs material ending up in required pieces (length or area)
#
# These metrics are solver-agnostic: they work for any list of ResultCut1D / ResultCut2D.

from __future__ import annotations

from collections import Counter
from dataclasses import dataclass
from typing import Iterable

from .dominance import canonical_key
from .types import ResultCut


@dataclass(frozen=True)
class Metrics:
    total_cost: float
    units: int
    pieces: int
    stock_material: float
    used_material: float

    @property
    def waste_material(self) -> float:
        """Offcuts plus kerf: everything bought that is not a required piece."""
        return self.stock_material - self.used_material

    @property
    def utilization(self) -> float:
        return self.used_material / self.stock_material if self.stock_material else 0.0


def measure(size) -> float:
    """Length of a 1D size, area of a 2D size."""
    if isinstance(size, (tuple, list)):
        return float(size[0]) * float(size[1])
    return float(size)


def produced_counts(results: Iterable[ResultCut]) -> Counter:
    """Canonical required size -> pieces produced across all purchased units."""
    out: Counter = Counter()
    for r in results:
        for c in r.cuts:
            out[canonical_key(c)] += r.count
    return out


def compute_metrics(results: Iterable[ResultCut]) -> Metrics:
    cost = 0.0
    units = 0
    pieces = 0
    stock_material = 0.0
    used = 0.0
    for r in results:
        cost += r.count * float(r.stock.cost)
        units += r.count
        pieces += r.pieces()
        stock_material += r.count * measure(r.stock.size)
        used += r.count * sum(measure(c) for c in r.cuts)
    return Metrics(
        total_cost=cost,
        units=units,
        pieces=pieces,
        stock_material=stock_material,
        used_material=used,
    )
