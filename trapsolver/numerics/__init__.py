"""Adaptive trapezoidal quadrature.

This module provides:
- Fixed-n composite trapezoidal rules in one and two dimensions
- Adaptive solvers that double n until a Richardson error estimate converges
- The SolverResult model shared by both solvers
"""

from trapsolver.numerics.adaptive import (
    DOUBLE_DEFAULTS,
    SINGLE_DEFAULTS,
    SolverConfig,
    adaptive_solve_1d,
    adaptive_solve_2d,
    richardson_error,
)
from trapsolver.numerics.result import IterationRecord, SolverResult
from trapsolver.numerics.trapezoid import trapezoid_1d, trapezoid_2d, trapezoid_weights

__all__ = [
    "DOUBLE_DEFAULTS",
    "IterationRecord",
    "SINGLE_DEFAULTS",
    "SolverConfig",
    "SolverResult",
    "adaptive_solve_1d",
    "adaptive_solve_2d",
    "richardson_error",
    "trapezoid_1d",
    "trapezoid_2d",
    "trapezoid_weights",
]
