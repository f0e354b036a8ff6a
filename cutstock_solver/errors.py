# cutstock_solver/errors.py
# Exceptions raised by the engine.
#
# - InvalidInputError: bad sizes / costs / counts / kerf, raised before enumeration starts.
# - InfeasibleModelError: the integer program has no solution (required pieces cannot be cut).
# Degenerate geometry (remainders with a non-positive side) is NOT an error: it becomes a (0, 0) leaf.

from __future__ import annotations

from typing import Optional


class CutStockError(Exception):
    """Base class for all engine errors."""


class InvalidInputError(CutStockError, ValueError):
    """Input rejected before any enumeration or model building."""


class InfeasibleModelError(CutStockError):
    """The solver reported that no assignment satisfies the required counts."""

    def __init__(self, message: str = "No feasible cutting plan", status: Optional[str] = None):
        super().__init__(message if status is None else f"{message} (status={status})")
        self.status = status
