# cutstock_solver/test_materialize.py

from __future__ import annotations

import pytest

from cutstock_solver.errors import InfeasibleModelError
from cutstock_solver.geometry import cut_2d
from cutstock_solver.materialize import ceil_count, materialize_1d, materialize_2d
from cutstock_solver.model import VariableKey
from cutstock_solver.solver_cp_sat import SolveResult
from cutstock_solver.types import StockSize1D, StockSize2D


def test_ceil_count() -> None:
    assert ceil_count(2.0) == 2
    assert ceil_count(2.0000000001) == 3
    assert ceil_count(1.9999999999) == 2
    assert ceil_count(2.3) == 3
    assert ceil_count(0.4) == 1
    assert ceil_count(1e-12) == 0
    assert ceil_count(5e-7, tolerance=1e-6) == 0
    assert ceil_count(5e-7, tolerance=1e-9) == 1


def test_materialize_1d_rounds_up_and_keeps_decimal() -> None:
    stock = StockSize1D(96, 1)
    stock_patterns = [(stock, [(7, 7), (7,)])]
    solution = SolveResult(
        feasible=True,
        values={VariableKey(0, 0): 1.5, VariableKey(0, 1): 0.0},
        status="OPTIMAL",
    )
    results = materialize_1d(stock_patterns, solution)
    assert len(results) == 1
    r = results[0]
    assert r.stock == stock
    assert r.count == 2
    assert r.decimal == 1.5
    assert r.cuts == [7, 7]
    assert r.pieces() == 4


def test_materialize_2d_attaches_tree() -> None:
    stock = StockSize2D((24, 24), 1)
    tree = cut_2d((24, 24), (12, 12), 0)
    solution = SolveResult(feasible=True, values={VariableKey(0, 0): 1.0})
    results = materialize_2d([(stock, [tree])], solution, [(12, 12)])
    assert len(results) == 1
    assert results[0].tree == tree
    assert results[0].cuts == [(12, 12)] * 4
    assert results[0].count == 1


def test_infeasible_raises() -> None:
    with pytest.raises(InfeasibleModelError) as exc:
        materialize_1d([(StockSize1D(5, 1), [()])], SolveResult(feasible=False, status="INFEASIBLE"))
    assert exc.value.status == "INFEASIBLE"


def test_noise_on_unused_pattern_is_dropped() -> None:
    stock = StockSize1D(96, 1)
    solution = SolveResult(
        feasible=True,
        values={VariableKey(0, 0): 3.0, VariableKey(0, 1): 1e-9},
        status="OPTIMAL",
    )
    results = materialize_1d([(stock, [(7, 7), (7,)])], solution)
    assert [r.cuts for r in results] == [[7, 7]]
    assert results[0].count == 3
