# cutstock_solver/utils.py
# Small utilities used across the project:
# - timing context manager
# - JSON-friendly conversion of results and cut trees (for hosts that serialize)
#
# Keeps dependencies minimal (stdlib only).

from __future__ import annotations

import time
from contextlib import contextmanager
from typing import Any, Dict, Iterator, List, Sequence

from .metrics import compute_metrics
from .types import CutTree, Leaf, ResultCut, ResultCut2D


@contextmanager
def timer(label: str = "timer") -> Iterator[Dict[str, float]]:
    """
    Usage:
      with timer("enumerate") as t:
          ...
      print(t["seconds"])
    """
    t0 = time.perf_counter()
    payload: Dict[str, float] = {}
    try:
        yield payload
    finally:
        payload["seconds"] = time.perf_counter() - t0


def _jsonable_size(size) -> Any:
    if isinstance(size, tuple):
        return list(size)
    return size


def tree_to_dict(tree: CutTree) -> Dict[str, Any]:
    """
    Leaf -> {"size": [w, h]}
    Node -> {"size": [w, h], "pieces": [top_left, bottom_left, top_right, bottom_right]}
    """
    if isinstance(tree, Leaf):
        return {"size": list(tree.size)}
    return {"size": list(tree.size), "pieces": [tree_to_dict(c) for c in tree.children]}


def results_to_dict(results: Sequence[ResultCut]) -> Dict[str, Any]:
    """
    Convert a result list to a JSON-friendly dict.
    Keeps only essential fields + metrics.
    """
    items: List[Dict[str, Any]] = []
    for r in results:
        item: Dict[str, Any] = {
            "stock": {"size": _jsonable_size(r.stock.size), "cost": r.stock.cost},
            "count": r.count,
            "decimal": r.decimal,
            "cuts": [_jsonable_size(c) for c in r.cuts],
        }
        if isinstance(r, ResultCut2D) and r.tree is not None:
            item["tree"] = tree_to_dict(r.tree)
        items.append(item)

    m = compute_metrics(results)
    return {
        "results": items,
        "totals": {
            "total_cost": m.total_cost,
            "units": m.units,
            "pieces": m.pieces,
            "stock_material": m.stock_material,
            "used_material": m.used_material,
            "waste_material": m.waste_material,
            "utilization": m.utilization,
        },
    }
