# cutstock_solver/model.py
# Model builder: enumerated patterns per stock size -> integer program.
#
#   variables:   x[s, p] = how many units of stock s are cut with pattern p (integer >= 0)
#   objective:   minimize sum(cost[s] * x[s, p])
#   constraints: for every required size r: sum(produces[s, p][r] * x[s, p]) >= count[r]
#
# Keys are structured: VariableKey(stock_index, pattern_index) for variables and the
# canonical size (see dominance.canonical_key) for constraints, so rotated 2D sizes
# share one constraint.
#
# The model is solver-agnostic; see solver_cp_sat.py / solver_mip.py.

from __future__ import annotations

from collections import Counter
from dataclasses import dataclass, field
from typing import Callable, Dict, Hashable, List, NamedTuple, Sequence, Set, Tuple

from .dominance import canonical_key
from .errors import InvalidInputError
from .patterns import Pattern1D, get_leaf_cuts
from .types import CutTree, RequiredCut1D, RequiredCut2D, StockSize1D, StockSize2D


class VariableKey(NamedTuple):
    stock_index: int
    pattern_index: int

    @property
    def name(self) -> str:
        return f"stock{self.stock_index}_version{self.pattern_index}"


@dataclass(frozen=True)
class Variable:
    key: VariableKey
    cost: float
    # canonical required size -> pieces of that size produced by one unit
    produces: Dict[Hashable, int] = field(default_factory=dict)


@dataclass(frozen=True)
class Constraint:
    size_key: Hashable
    min: int

    @property
    def name(self) -> str:
        return f"cut{self.size_key}"


@dataclass
class Model:
    variables: List[Variable] = field(default_factory=list)
    constraints: List[Constraint] = field(default_factory=list)
    integers: Set[VariableKey] = field(default_factory=set)
    sense: str = "min"

    def upper_bound(self) -> int:
        """
        No pattern ever needs more units than the largest required count:
        any pattern worth buying yields at least one piece of some required size.
        """
        return max((c.min for c in self.constraints), default=0)

    def terms(self, constraint: Constraint) -> List[Tuple[VariableKey, int]]:
        return [
            (v.key, v.produces[constraint.size_key])
            for v in self.variables
            if v.produces.get(constraint.size_key, 0) > 0
        ]

    def unsatisfiable_constraints(self) -> List[Constraint]:
        """Constraints no variable contributes to (the required size fits no stock)."""
        return [c for c in self.constraints if not self.terms(c)]


StockPatterns1D = Sequence[Tuple[StockSize1D, Sequence[Pattern1D]]]
StockPatterns2D = Sequence[Tuple[StockSize2D, Sequence[CutTree]]]


def _merge_required(required_cuts) -> Dict[Hashable, int]:
    out: Dict[Hashable, int] = {}
    for rc in required_cuts:
        k = canonical_key(rc.size)
        out[k] = out.get(k, 0) + rc.count
    return out


def _build(
    stock_patterns,
    required_cuts,
    placed: Callable[[object], List],
) -> Model:
    if not required_cuts:
        raise InvalidInputError("required_cuts is empty; nothing to build")

    required = _merge_required(required_cuts)
    model = Model(constraints=[Constraint(size_key=k, min=n) for k, n in required.items()])

    for s, (stock, patterns) in enumerate(stock_patterns):
        for p, pattern in enumerate(patterns):
            key = VariableKey(s, p)
            counts = Counter(canonical_key(c) for c in placed(pattern))
            produces = {k: counts[k] for k in required if counts[k] > 0}
            model.variables.append(Variable(key=key, cost=float(stock.cost), produces=produces))
            model.integers.add(key)

    return model


def build_model_1d(stock_patterns: StockPatterns1D, required_cuts: Sequence[RequiredCut1D]) -> Model:
    """One integer variable per (stock length, cut list)."""
    return _build(stock_patterns, required_cuts, placed=list)


def build_model_2d(stock_patterns: StockPatterns2D, required_cuts: Sequence[RequiredCut2D]) -> Model:
    """One integer variable per (stock panel, cut tree); leaves are matched rotation-aware."""
    sizes = [rc.size for rc in required_cuts]
    return _build(stock_patterns, required_cuts, placed=lambda tree: get_leaf_cuts(tree, sizes))
