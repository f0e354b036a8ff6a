# cutstock_solver/solver_mip.py
# Solver adapter on the OR-Tools linear solver wrapper (pywraplp).
#
# Uses SCIP when the OR-Tools build ships it, CBC otherwise. Costs stay as floats.
# MIP solvers report integer variables with floating point noise (2.9999999 for 3,
# 2.0000005 for 2). Values within `integer_tolerance` of an integer are snapped
# to it here, so the materializer can apply a plain ceil.

from __future__ import annotations

from dataclasses import dataclass
from typing import Tuple

from ortools.linear_solver import pywraplp

from .config import DEFAULTS
from .errors import CutStockError
from .logger import get_logger
from .model import Model
from .solver_cp_sat import SolveResult

_STATUS_NAMES = {
    pywraplp.Solver.OPTIMAL: "OPTIMAL",
    pywraplp.Solver.FEASIBLE: "FEASIBLE",
    pywraplp.Solver.INFEASIBLE: "INFEASIBLE",
    pywraplp.Solver.UNBOUNDED: "UNBOUNDED",
    pywraplp.Solver.ABNORMAL: "ABNORMAL",
    pywraplp.Solver.NOT_SOLVED: "NOT_SOLVED",
}


@dataclass(frozen=True)
class MipSolver:
    time_limit_s: float = DEFAULTS.default_time_limit_s
    backends: Tuple[str, ...] = ("SCIP", "CBC")
    integer_tolerance: float = DEFAULTS.default_ceil_tolerance

    def _create(self) -> pywraplp.Solver:
        for name in self.backends:
            solver = pywraplp.Solver.CreateSolver(name)
            if solver is not None:
                get_logger().debug(f"MIP backend: {name}")
                return solver
        raise CutStockError(f"No MIP backend available in this OR-Tools build (tried {self.backends})")

    def _value(self, raw: float, integer: bool) -> float:
        raw = max(0.0, raw)
        nearest = round(raw)
        if integer and abs(raw - nearest) <= self.integer_tolerance:
            return float(nearest)
        return raw

    def solve(self, model: Model) -> SolveResult:
        log = get_logger()

        missing = model.unsatisfiable_constraints()
        if missing:
            log.info(f"MIP skipped: no pattern produces {[c.size_key for c in missing]}")
            return SolveResult(feasible=False, status="INFEASIBLE")

        solver = self._create()
        solver.SetTimeLimit(int(self.time_limit_s * 1000))

        x = {}
        for v in model.variables:
            if v.key in model.integers:
                x[v.key] = solver.IntVar(0, solver.infinity(), v.key.name)
            else:
                x[v.key] = solver.NumVar(0, solver.infinity(), v.key.name)

        for c in model.constraints:
            solver.Add(solver.Sum([n * x[key] for key, n in model.terms(c)]) >= c.min, c.name)

        solver.Minimize(solver.Sum([v.cost * x[v.key] for v in model.variables]))

        status = solver.Solve()
        status_name = _STATUS_NAMES.get(status, str(status))
        log.info(
            f"MIP status={status_name} vars={solver.NumVariables()} "
            f"constraints={solver.NumConstraints()} wall={solver.wall_time() / 1000:.3f}s"
        )

        if status not in (pywraplp.Solver.OPTIMAL, pywraplp.Solver.FEASIBLE):
            return SolveResult(feasible=False, status=status_name)

        values = {key: self._value(var.solution_value(), key in model.integers) for key, var in x.items()}
        return SolveResult(
            feasible=True,
            values=values,
            objective_value=solver.Objective().Value(),
            status=status_name,
        )
