# cutstock_solver/solver_cp_sat.py
# Solver adapter on OR-Tools CP-SAT (default backend).
#
# - One IntVar per pattern variable, bounded by the largest required count.
# - CP-SAT only takes integer coefficients: stock costs are multiplied by cost_scale
#   and rounded (cost 0.25 with scale 1000 -> 250). A positive cost that would round to 0
#   is raised to 1 with a warning.
# - Returned values are exact integers; the materializer still applies ceil so every
#   backend goes through the same path.

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Dict, Optional

from ortools.sat.python import cp_model

from .config import DEFAULTS
from .logger import get_logger
from .model import Model, VariableKey


@dataclass(frozen=True)
class SolveResult:
    feasible: bool
    values: Dict[VariableKey, float] = field(default_factory=dict)
    objective_value: Optional[float] = None
    status: str = "UNKNOWN"


@dataclass(frozen=True)
class CpSatSolver:
    time_limit_s: float = DEFAULTS.default_time_limit_s
    cost_scale: int = DEFAULTS.default_cost_scale
    num_workers: int = 8

    def _scaled_costs(self, model: Model) -> Dict[VariableKey, int]:
        """Integer objective coefficients. A positive cost never scales to 0 (the stock would be free)."""
        out: Dict[VariableKey, int] = {}
        for v in model.variables:
            scaled = int(round(v.cost * self.cost_scale))
            if v.cost > 0 and scaled == 0:
                get_logger().warn(
                    f"cost {v.cost} of {v.key.name} rounds to 0 at cost_scale {self.cost_scale}; "
                    f"using 1, raise cost_scale for exact costs"
                )
                scaled = 1
            out[v.key] = scaled
        return out

    def solve(self, model: Model) -> SolveResult:
        log = get_logger()

        missing = model.unsatisfiable_constraints()
        if missing:
            log.info(f"CP-SAT skipped: no pattern produces {[c.size_key for c in missing]}")
            return SolveResult(feasible=False, status="INFEASIBLE")

        m = cp_model.CpModel()
        ub = model.upper_bound()

        x = {v.key: m.NewIntVar(0, ub, v.key.name) for v in model.variables}

        for c in model.constraints:
            m.Add(sum(n * x[key] for key, n in model.terms(c)) >= c.min)

        costs = self._scaled_costs(model)
        m.Minimize(sum(costs[v.key] * x[v.key] for v in model.variables))

        solver = cp_model.CpSolver()
        solver.parameters.max_time_in_seconds = float(self.time_limit_s)
        solver.parameters.num_workers = int(self.num_workers)
        status = solver.Solve(m)
        status_name = solver.StatusName(status)

        log.info(
            f"CP-SAT status={status_name} vars={len(x)} constraints={len(model.constraints)} "
            f"wall={solver.WallTime():.3f}s"
        )

        if status not in (cp_model.OPTIMAL, cp_model.FEASIBLE):
            return SolveResult(feasible=False, status=status_name)

        values = {key: float(solver.Value(var)) for key, var in x.items()}
        return SolveResult(
            feasible=True,
            values=values,
            objective_value=solver.ObjectiveValue() / self.cost_scale,
            status=status_name,
        )
