# cutstock_solver/validate.py
# Validation utilities:
# - normalize and check inputs before any enumeration (fail fast)
# - check that a materialized plan covers every required count
#
# Inputs may be the dataclasses from types.py, dicts like {"size": 96, "cost": 1},
# or plain tuples (size, cost) / (size, count).

from __future__ import annotations

from dataclasses import dataclass
from typing import Dict, Hashable, Iterable, List, Optional, Sequence

from .config import DEFAULTS
from .dominance import canonical_key
from .errors import CutStockError, InvalidInputError
from .materialize import ceil_count
from .metrics import produced_counts
from .types import (
    RequiredCut1D,
    RequiredCut2D,
    ResultCut,
    StockSize1D,
    StockSize2D,
)


@dataclass(frozen=True)
class ValidationIssue:
    level: str   # "ERROR" or "WARN"
    message: str
    size_key: Optional[Hashable] = None


def _coerce(item, cls, second: str):
    if isinstance(item, cls):
        return item
    if isinstance(item, dict):
        if "size" not in item:
            raise InvalidInputError(f"{cls.__name__}: missing 'size' in {item!r}")
        kwargs = {"size": item["size"]}
        if second in item:
            kwargs[second] = item[second]
        return cls(**kwargs)
    if isinstance(item, (tuple, list)) and len(item) == 2:
        return cls(item[0], item[1])
    raise InvalidInputError(f"Cannot interpret {item!r} as {cls.__name__}")


def validate_kerf(blade_size) -> None:
    if not isinstance(blade_size, (int, float)) or isinstance(blade_size, bool):
        raise InvalidInputError(f"blade_size must be a number, got {blade_size!r}")
    if blade_size < 0:
        raise InvalidInputError(f"blade_size must be >= 0, got {blade_size}")


def normalize_inputs_1d(stock_sizes: Iterable, blade_size, required_cuts: Iterable):
    """Returns (stock_sizes, required_cuts) as dataclass lists; raises InvalidInputError."""
    validate_kerf(blade_size)
    stocks = [_coerce(s, StockSize1D, "cost") for s in stock_sizes]
    if not stocks:
        raise InvalidInputError("stock_sizes is empty")
    required = [_coerce(r, RequiredCut1D, "count") for r in required_cuts]
    return stocks, required


def normalize_inputs_2d(stock_sizes: Iterable, blade_size, required_cuts: Iterable):
    validate_kerf(blade_size)
    stocks = [_coerce(s, StockSize2D, "cost") for s in stock_sizes]
    if not stocks:
        raise InvalidInputError("stock_sizes is empty")
    required = [_coerce(r, RequiredCut2D, "count") for r in required_cuts]
    return stocks, required


def validate_results(
    results: Sequence[ResultCut],
    required_cuts: Sequence,
    tolerance: float = DEFAULTS.default_ceil_tolerance,
) -> List[ValidationIssue]:
    """
    Every required size must be produced at least `count` times across all purchased units,
    and every purchased count must be the ceiling of its raw solver value (see ceil_count).
    """
    issues: List[ValidationIssue] = []

    needed: Dict[Hashable, int] = {}
    for rc in required_cuts:
        k = canonical_key(rc.size)
        needed[k] = needed.get(k, 0) + rc.count

    produced = produced_counts(results)
    for k, n in needed.items():
        if produced.get(k, 0) < n:
            issues.append(
                ValidationIssue(
                    level="ERROR",
                    message=f"Size {k}: produced {produced.get(k, 0)} < required {n}",
                    size_key=k,
                )
            )

    for r in results:
        if r.count < 1:
            issues.append(ValidationIssue(level="ERROR", message=f"Non-positive purchase count {r.count}"))
        if r.count != ceil_count(r.decimal, tolerance):
            issues.append(
                ValidationIssue(
                    level="ERROR",
                    message=f"count {r.count} is not the ceiling of solver value {r.decimal}",
                )
            )
        if not r.cuts:
            issues.append(
                ValidationIssue(level="WARN", message=f"Stock {r.stock.size} bought with no usable cuts")
            )

    return issues


def raise_on_errors(issues: List[ValidationIssue]) -> None:
    errs = [i for i in issues if i.level.upper() == "ERROR"]
    if errs:
        msg = "\n".join(f"[{e.level}] size={e.size_key} :: {e.message}" for e in errs)
        raise CutStockError("Validation failed:\n" + msg)
