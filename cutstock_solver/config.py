# cutstock_solver/config.py
# Centralized defaults and configuration helpers.
# Keeps "magic numbers" (kerf, solver limits, rounding) in one place.

from __future__ import annotations

from dataclasses import dataclass, replace
from fractions import Fraction
from typing import Optional, Tuple

from .errors import InvalidInputError


@dataclass(frozen=True)
class Defaults:
    # Solver adapter: "cp_sat" (OR-Tools CP-SAT) or "mip" (OR-Tools pywraplp SCIP/CBC)
    default_backend: str = "cp_sat"
    default_time_limit_s: float = 30.0

    # CP-SAT needs integer objective coefficients; costs are multiplied by this and rounded
    default_cost_scale: int = 1000

    # Remainders are rounded to this many decimals so float drift does not split cache keys
    default_precision: int = 9

    # Solver values within this distance of an integer are treated as that integer before ceil
    default_ceil_tolerance: float = 1e-6

    # None = unbounded cache for one run
    default_cache_max_items: Optional[int] = None


DEFAULTS = Defaults()


@dataclass(frozen=True)
class EngineParams:
    backend: str = DEFAULTS.default_backend
    time_limit_s: float = DEFAULTS.default_time_limit_s
    cost_scale: int = DEFAULTS.default_cost_scale
    precision: int = DEFAULTS.default_precision
    ceil_tolerance: float = DEFAULTS.default_ceil_tolerance
    cache_max_items: Optional[int] = DEFAULTS.default_cache_max_items

    # Check that the materialized plan really covers the required counts
    validate: bool = True

    def __post_init__(self):
        if self.backend not in ("cp_sat", "mip"):
            raise InvalidInputError(f"Unknown solver backend: {self.backend!r} (use 'cp_sat' or 'mip')")
        if self.time_limit_s <= 0:
            raise InvalidInputError("time_limit_s must be > 0")
        if self.cost_scale < 1:
            raise InvalidInputError("cost_scale must be >= 1")
        if self.cache_max_items is not None and self.cache_max_items < 1:
            raise InvalidInputError("cache_max_items must be >= 1 or None")


def make_params(base: Optional[EngineParams] = None, **overrides) -> EngineParams:
    """
    Convenience factory:
      make_params(backend="mip", time_limit_s=5)
    """
    return replace(base or EngineParams(), **overrides)


def round_dim(v: float | int, precision: int = DEFAULTS.default_precision) -> float | int:
    """Round a computed length; ints stay ints."""
    if isinstance(v, int):
        return v
    r = round(float(v), precision)
    return int(r) if r.is_integer() else r


def parse_kerf_text(kerf_text: str) -> float:
    """
    Parse '1/8' or '0.125' or '3' -> float
    """
    s = kerf_text.strip()
    if not s:
        raise InvalidInputError("kerf_text is empty")
    try:
        v = float(Fraction(s))
    except (ValueError, ZeroDivisionError):
        raise InvalidInputError(f"kerf_text must be a number or fraction like '1/8', got {kerf_text!r}")
    if v < 0:
        raise InvalidInputError(f"kerf must be >= 0, got {v}")
    return v


def parse_size_text(size_text: str) -> Tuple[float, float]:
    """
    Parse '24x48' -> (24, 48). Fractions are accepted: '47/2x48' -> (23.5, 48).
    """
    s = size_text.lower().replace(" ", "")
    if "x" not in s:
        raise InvalidInputError("size_text must be like '24x48'")
    a, b = s.split("x", 1)
    try:
        w, h = Fraction(a), Fraction(b)
    except (ValueError, ZeroDivisionError):
        raise InvalidInputError(f"size_text must be like '24x48', got {size_text!r}")
    return _as_number(w), _as_number(h)


def _as_number(f: Fraction) -> float | int:
    return int(f) if f.denominator == 1 else float(f)
