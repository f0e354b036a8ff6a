# cutstock_solver/run.py
# High-level entry points that tie together:
# - input validation
# - pattern enumeration per stock size (one cache per call)
# - model building + solver adapter
# - result materialization + coverage check
#
# This is meant to be called from a host application.
# Example:
#   from cutstock_solver.run import how_to_cut_boards_1d
#   res = how_to_cut_boards_1d(
#       stock_sizes=[{"size": 96, "cost": 1}, {"size": 24, "cost": 0.25}],
#       blade_size=0.125,
#       required_cuts=[{"size": 7, "count": 21}],
#   )

from __future__ import annotations

from typing import Iterable, List, Optional, Protocol

from .config import EngineParams
from .dominance import canonical_key
from .logger import get_logger
from .materialize import materialize_1d, materialize_2d
from .model import Model, build_model_1d, build_model_2d
from .pattern_cache import PatternCache
from .patterns import Pattern1D, enumerate_patterns_1d, enumerate_patterns_2d
from .solver_cp_sat import CpSatSolver, SolveResult
from .solver_mip import MipSolver
from .types import CutTree, Number, ResultCut1D, ResultCut2D, Size2D
from .utils import timer
from .validate import normalize_inputs_1d, normalize_inputs_2d, raise_on_errors, validate_results


class Solver(Protocol):
    def solve(self, model: Model) -> SolveResult: ...


def make_solver(params: EngineParams) -> Solver:
    if params.backend == "mip":
        return MipSolver(time_limit_s=params.time_limit_s, integer_tolerance=params.ceil_tolerance)
    return CpSatSolver(time_limit_s=params.time_limit_s, cost_scale=params.cost_scale)


def _unique_sizes(sizes: Iterable) -> List:
    """Drop repeated (and, for 2D, rotated) sizes; first occurrence wins."""
    seen = set()
    out = []
    for s in sizes:
        k = canonical_key(s)
        if k not in seen:
            seen.add(k)
            out.append(s)
    return out


def how_many_ways_1d(size: Number, blade_size: Number, cuts: Iterable[Number]) -> List[Pattern1D]:
    """Non-dominated ways to cut one stock length (standalone enumeration)."""
    stocks, req = normalize_inputs_1d([(size, 0)], blade_size, [(c, 1) for c in cuts])
    return enumerate_patterns_1d(stocks[0].size, blade_size, _unique_sizes(rc.size for rc in req))


def how_many_ways_2d(size: Size2D, blade_size: Number, cuts: Iterable[Size2D]) -> List[CutTree]:
    """Non-dominated ways to cut one stock panel (standalone enumeration)."""
    stocks, req = normalize_inputs_2d([(size, 0)], blade_size, [(c, 1) for c in cuts])
    return enumerate_patterns_2d(stocks[0].size, blade_size, _unique_sizes(rc.size for rc in req))


def how_to_cut_boards_1d(
    stock_sizes: Iterable,
    blade_size: Number,
    required_cuts: Iterable,
    *,
    params: Optional[EngineParams] = None,
    solver: Optional[Solver] = None,
    cache: Optional[PatternCache] = None,
) -> List[ResultCut1D]:
    """
    Which stock lengths to buy, how many, and how to cut each one.
    Raises InvalidInputError on bad input and InfeasibleModelError if the pieces cannot be cut.
    """
    params = params or EngineParams()
    log = get_logger()
    stocks, required = normalize_inputs_1d(stock_sizes, blade_size, required_cuts)
    if not required:
        log.info("No required cuts; nothing to do.")
        return []

    cut_sizes = _unique_sizes(rc.size for rc in required)
    cache = cache if cache is not None else PatternCache(max_items=params.cache_max_items)

    stock_patterns = []
    for stock in stocks:
        with timer("enumerate") as t:
            ways = enumerate_patterns_1d(stock.size, blade_size, cut_sizes, cache, params.precision)
        log.info(f"Stock {stock.size} (cost {stock.cost}): {len(ways)} patterns in {t['seconds']:.3f}s")
        stock_patterns.append((stock, ways))
    _log_cache(cache)

    model = build_model_1d(stock_patterns, required)
    solution = (solver or make_solver(params)).solve(model)
    results = materialize_1d(stock_patterns, solution, params.ceil_tolerance)

    if params.validate:
        raise_on_errors(validate_results(results, required, params.ceil_tolerance))
    return results


def how_to_cut_boards_2d(
    stock_sizes: Iterable,
    blade_size: Number,
    required_cuts: Iterable,
    *,
    params: Optional[EngineParams] = None,
    solver: Optional[Solver] = None,
    cache: Optional[PatternCache] = None,
) -> List[ResultCut2D]:
    """
    Which stock panels to buy, how many, and the guillotine cut tree for each one.
    Pieces may be rotated 90 degrees.
    """
    params = params or EngineParams()
    log = get_logger()
    stocks, required = normalize_inputs_2d(stock_sizes, blade_size, required_cuts)
    if not required:
        log.info("No required cuts; nothing to do.")
        return []

    cut_sizes = _unique_sizes(rc.size for rc in required)
    cache = cache if cache is not None else PatternCache(max_items=params.cache_max_items)

    stock_patterns = []
    for stock in stocks:
        with timer("enumerate") as t:
            trees = enumerate_patterns_2d(stock.size, blade_size, cut_sizes, cache, params.precision)
        log.info(f"Stock {stock.size} (cost {stock.cost}): {len(trees)} patterns in {t['seconds']:.3f}s")
        stock_patterns.append((stock, trees))
    _log_cache(cache)

    model = build_model_2d(stock_patterns, required)
    solution = (solver or make_solver(params)).solve(model)
    results = materialize_2d(stock_patterns, solution, cut_sizes, params.ceil_tolerance)

    if params.validate:
        raise_on_errors(validate_results(results, required, params.ceil_tolerance))
    return results


def _log_cache(cache: PatternCache) -> None:
    st = cache.stats()
    get_logger().debug(
        f"cache: splits={st.split_items} patterns={st.pattern_items} "
        f"candidates={st.candidates} hit_rate={st.hit_rate:.2%}"
    )
