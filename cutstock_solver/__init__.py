# cutstock_solver/__init__.py
"""
Cutting-stock engine (1D lengths and 2D guillotine panels).

Given stock sizes with a cost, a blade kerf and the pieces you need, it decides
which stock to buy and how to cut each unit:
  - enumerate every non-dominated cutting pattern per stock size
    (recursive guillotine splits, rotation-aware, memoized on canonical size)
  - build an integer program: one variable per (stock, pattern), one
    minimum-count constraint per required size, minimize total cost
  - solve with OR-Tools (CP-SAT by default, SCIP/CBC via pywraplp optionally)
  - round purchase counts up and attach the cut list / cut tree

Enumeration is a heuristic pattern generator, not an exhaustive optimal packer.
"""

from .types import (
    StockSize1D,
    StockSize2D,
    RequiredCut1D,
    RequiredCut2D,
    Leaf,
    Node,
    CutTree,
    ResultCut1D,
    ResultCut2D,
)

from .errors import (
    CutStockError,
    InvalidInputError,
    InfeasibleModelError,
)

from .config import (
    DEFAULTS,
    EngineParams,
    make_params,
)

from .dominance import (
    canonical_key,
    dimensions_equal,
    is_dominated,
    prune_dominated,
)

from .geometry import (
    cut_2d,
    split_1d,
    transpose_tree,
)

from .pattern_cache import PatternCache

from .patterns import (
    enumerate_patterns_1d,
    enumerate_patterns_2d,
    get_leaves,
    get_leaf_cuts,
)

from .model import (
    Model,
    build_model_1d,
    build_model_2d,
)

from .solver_cp_sat import CpSatSolver, SolveResult
from .solver_mip import MipSolver

from .metrics import Metrics, compute_metrics

from .run import (
    how_many_ways_1d,
    how_many_ways_2d,
    how_to_cut_boards_1d,
    how_to_cut_boards_2d,
)

__all__ = [
    # types
    "StockSize1D",
    "StockSize2D",
    "RequiredCut1D",
    "RequiredCut2D",
    "Leaf",
    "Node",
    "CutTree",
    "ResultCut1D",
    "ResultCut2D",
    # errors
    "CutStockError",
    "InvalidInputError",
    "InfeasibleModelError",
    # config
    "DEFAULTS",
    "EngineParams",
    "make_params",
    # engine
    "canonical_key",
    "dimensions_equal",
    "is_dominated",
    "prune_dominated",
    "cut_2d",
    "split_1d",
    "transpose_tree",
    "PatternCache",
    "enumerate_patterns_1d",
    "enumerate_patterns_2d",
    "get_leaves",
    "get_leaf_cuts",
    # model / solvers
    "Model",
    "build_model_1d",
    "build_model_2d",
    "CpSatSolver",
    "MipSolver",
    "SolveResult",
    # metrics
    "Metrics",
    "compute_metrics",
    # entry points
    "how_many_ways_1d",
    "how_many_ways_2d",
    "how_to_cut_boards_1d",
    "how_to_cut_boards_2d",
]
