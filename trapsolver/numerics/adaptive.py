"""Adaptive trapezoidal solvers.

Both solvers run the same doubling loop: start from a seed interval count,
double ``n`` each step and estimate the error of the finer approximation by
Richardson extrapolation. The trapezoidal rule converges as O(h^2), so
halving ``h`` quarters the error and

    error ~= |T_2n - T_n| / 3

The loop stops as soon as the estimate falls below the tolerance or after
``max_iterations`` doublings.

When the budget runs out, the reported ``value`` is the second-to-last
approximation while ``error_estimate`` is computed from the last two
history entries, so the value is one refinement behind its error estimate.
"""

from __future__ import annotations

import logging
import math
from collections.abc import Callable
from dataclasses import dataclass

from trapsolver.expression.evaluator import CompiledExpression, Evaluator
from trapsolver.numerics.result import IterationRecord, SolverResult
from trapsolver.numerics.trapezoid import trapezoid_1d, trapezoid_2d

logger = logging.getLogger(__name__)

RICHARDSON_FACTOR = 1.0 / 3.0


@dataclass(frozen=True)
class SolverConfig:
    """Default knobs for one solver variant.

    Attributes:
        tolerance: Convergence threshold for the error estimate.
        max_iterations: Maximum number of doublings after the initial probe.
        seed_intervals: Interval count (or grid dimension) of the first probe.
    """

    tolerance: float
    max_iterations: int
    seed_intervals: int


SINGLE_DEFAULTS = SolverConfig(tolerance=1e-6, max_iterations=20, seed_intervals=1)

# Each 2-D step costs O(n^2) evaluations, hence the looser defaults.
DOUBLE_DEFAULTS = SolverConfig(tolerance=1e-5, max_iterations=10, seed_intervals=2)


def richardson_error(current: float, previous: float) -> float:
    """Error estimate of ``current`` given the approximation at half the intervals."""
    return RICHARDSON_FACTOR * abs(current - previous)


def _refine(
    rule: Callable[[int], float],
    seed: int,
    tolerance: float,
    max_iterations: int,
) -> tuple[float, int, float, bool, tuple[IterationRecord, ...]]:
    n = seed
    previous = rule(n)
    history = [IterationRecord(n, previous, math.inf)]
    logger.debug("Initial probe n=%d value=%r", n, previous)

    for _ in range(max_iterations):
        n *= 2
        current = rule(n)
        error = richardson_error(current, previous)
        history.append(IterationRecord(n, current, error))
        logger.debug("n=%d value=%r error=%r", n, current, error)

        # NaN never compares below the tolerance, so invalid integrands
        # run the whole budget.
        if error < tolerance:
            logger.info("Converged at n=%d (error %.3e < %.3e)", n, error, tolerance)
            return current, n, error, True, tuple(history)

        previous = current

    # Reported value trails the reported error by one refinement.
    if len(history) >= 2:
        value = history[-2].value
        error = richardson_error(history[-1].value, history[-2].value)
    else:
        value = history[-1].value
        error = math.inf

    logger.info(
        "No convergence after %d iterations (n=%d, error %.3e, tolerance %.3e)",
        max_iterations,
        n,
        error,
        tolerance,
    )
    return value, n, error, False, tuple(history)


def adaptive_solve_1d(
    expression: str,
    a: float,
    b: float,
    tolerance: float = SINGLE_DEFAULTS.tolerance,
    max_iterations: int = SINGLE_DEFAULTS.max_iterations,
    evaluator: Evaluator | None = None,
) -> SolverResult:
    """Integrate f(x) over [a, b] by doubling the interval count from n=1.

    Args:
        expression: Expression in ``x``.
        a: Lower bound.
        b: Upper bound.
        tolerance: Stop once the Richardson error estimate is below this.
        max_iterations: Maximum number of doublings.
        evaluator: Expression backend. Defaults to the sympy evaluator.

    Returns:
        SolverResult with the full refinement history.

    Raises:
        TypeError: If ``expression`` is not a string.
    """
    f = CompiledExpression(expression, ("x",), evaluator)
    logger.debug("Solving single integral of %r over [%r, %r]", expression, a, b)

    value, n, error, converged, history = _refine(
        lambda n: trapezoid_1d(f, a, b, n),
        SINGLE_DEFAULTS.seed_intervals,
        tolerance,
        max_iterations,
    )
    return SolverResult(
        value=value,
        intervals=n,
        error_estimate=error,
        is_converged=converged,
        history=history,
        expression=expression,
        bounds=(a, b),
        tolerance=tolerance,
    )


def adaptive_solve_2d(
    expression: str,
    a: float,
    b: float,
    c: float,
    d: float,
    tolerance: float = DOUBLE_DEFAULTS.tolerance,
    max_iterations: int = DOUBLE_DEFAULTS.max_iterations,
    evaluator: Evaluator | None = None,
) -> SolverResult:
    """Integrate f(x, y) over [a, b] x [c, d] on n x n grids starting from n=2.

    Args:
        expression: Expression in ``x`` and ``y``.
        a: Lower x bound.
        b: Upper x bound.
        c: Lower y bound.
        d: Upper y bound.
        tolerance: Stop once the Richardson error estimate is below this.
        max_iterations: Maximum number of doublings.
        evaluator: Expression backend. Defaults to the sympy evaluator.

    Returns:
        SolverResult whose ``intervals`` is the grid dimension.

    Raises:
        TypeError: If ``expression`` is not a string.
    """
    f = CompiledExpression(expression, ("x", "y"), evaluator)
    logger.debug(
        "Solving double integral of %r over [%r, %r] x [%r, %r]", expression, a, b, c, d
    )

    value, n, error, converged, history = _refine(
        lambda n: trapezoid_2d(f, a, b, c, d, n),
        DOUBLE_DEFAULTS.seed_intervals,
        tolerance,
        max_iterations,
    )
    return SolverResult(
        value=value,
        intervals=n,
        error_estimate=error,
        is_converged=converged,
        history=history,
        expression=expression,
        bounds=(a, b, c, d),
        tolerance=tolerance,
    )
