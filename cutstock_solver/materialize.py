# cutstock_solver/materialize.py
# Result materializer: solver values -> purchase counts + concrete cut instructions.
#
# Solver values can be fractional (relaxed models, injected solvers), and a stock unit
# cannot be bought in parts, so count = ceil(value). The raw value is kept as `decimal`
# for diagnostics. Noise on integer variables is removed by the MIP adapter.

from __future__ import annotations

import math
from typing import List, Sequence

from .config import DEFAULTS
from .errors import InfeasibleModelError
from .model import StockPatterns1D, StockPatterns2D, VariableKey
from .patterns import get_leaf_cuts
from .solver_cp_sat import SolveResult
from .types import ResultCut1D, ResultCut2D, Size2D


def ceil_count(value: float, tolerance: float = DEFAULTS.default_ceil_tolerance) -> int:
    """
    Round a solver value up to whole stock units: count == ceil(value).
    Values at or below `tolerance` are solver noise on an unused pattern and count as 0.
    """
    if value <= tolerance:
        return 0
    return int(math.ceil(value))


def _require_feasible(solution: SolveResult) -> None:
    if not solution.feasible:
        raise InfeasibleModelError(
            "Required cuts cannot be produced from the given stock sizes and kerf",
            status=solution.status,
        )


def materialize_1d(
    stock_patterns: StockPatterns1D,
    solution: SolveResult,
    tolerance: float = DEFAULTS.default_ceil_tolerance,
) -> List[ResultCut1D]:
    _require_feasible(solution)
    out: List[ResultCut1D] = []
    for s, (stock, patterns) in enumerate(stock_patterns):
        for p, pattern in enumerate(patterns):
            value = solution.values.get(VariableKey(s, p))
            if value is None or value <= 0:
                continue
            count = ceil_count(value, tolerance)
            if count == 0:
                continue
            out.append(ResultCut1D(stock=stock, count=count, decimal=float(value), cuts=list(pattern)))
    return out


def materialize_2d(
    stock_patterns: StockPatterns2D,
    solution: SolveResult,
    cut_sizes: Sequence[Size2D],
    tolerance: float = DEFAULTS.default_ceil_tolerance,
) -> List[ResultCut2D]:
    _require_feasible(solution)
    out: List[ResultCut2D] = []
    for s, (stock, trees) in enumerate(stock_patterns):
        for p, tree in enumerate(trees):
            value = solution.values.get(VariableKey(s, p))
            if value is None or value <= 0:
                continue
            count = ceil_count(value, tolerance)
            if count == 0:
                continue
            out.append(
                ResultCut2D(
                    stock=stock,
                    count=count,
                    decimal=float(value),
                    cuts=get_leaf_cuts(tree, cut_sizes),
                    tree=tree,
                )
            )
    return out
