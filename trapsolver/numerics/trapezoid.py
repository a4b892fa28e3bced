"""Composite trapezoidal rules for a fixed number of intervals.

Both rules sample the expression once per grid point through a single
vectorized call to the evaluator.
"""

from __future__ import annotations

import numpy as np

from trapsolver.expression.evaluator import CompiledExpression, Evaluator


def trapezoid_weights(n: int) -> np.ndarray:
    """1-D composite trapezoid weights ``[1, 2, ..., 2, 1]`` for ``n`` intervals."""
    weights = np.full(n + 1, 2.0)
    weights[0] = weights[-1] = 1.0
    return weights


def _check_intervals(n: int) -> None:
    if n < 1:
        raise ValueError(f"n must be >= 1, got {n}")


def trapezoid_1d(
    expression: str | CompiledExpression,
    a: float,
    b: float,
    n: int,
    evaluator: Evaluator | None = None,
) -> float:
    """Composite trapezoidal approximation of the integral of f(x) over [a, b].

    T_n = h/2 * (f(a) + f(b) + 2 * sum f(a + i*h)), h = (b - a) / n.

    Exact for polynomials of degree <= 1; the global error is O(h^2) for
    smooth integrands. A NaN at any sample point makes the result NaN.

    Args:
        expression: Expression in ``x``, or an already compiled expression.
        a: Lower bound.
        b: Upper bound. ``a > b`` yields the negated integral.
        n: Number of intervals.
        evaluator: Backend used to compile a string expression.

    Returns:
        The approximation. Exactly 0.0 when ``a == b``.

    Raises:
        ValueError: If ``n < 1``.
    """
    _check_intervals(n)
    f = _compiled(expression, ("x",), evaluator)
    if a == b:
        return 0.0

    h = (b - a) / n

    xs = a + np.arange(n + 1) * h
    xs[-1] = b
    total = float(np.dot(trapezoid_weights(n), f(xs)))

    return h / 2.0 * total


def trapezoid_2d(
    expression: str | CompiledExpression,
    a: float,
    b: float,
    c: float,
    d: float,
    n: int,
    evaluator: Evaluator | None = None,
) -> float:
    """Tensor-product trapezoidal approximation over the rectangle [a, b] x [c, d].

    Samples the (n+1) x (n+1) grid x_i = a + i*dx, y_j = c + j*dy and
    weights corners by 1, edge points by 2 and interior points by 4. The
    result is dx*dy/4 times the weighted sum. Exact for bilinear integrands.

    Args:
        expression: Expression in ``x`` and ``y``, or an already compiled one.
        a: Lower x bound.
        b: Upper x bound.
        c: Lower y bound.
        d: Upper y bound.
        n: Number of intervals along each axis.
        evaluator: Backend used to compile a string expression.

    Returns:
        The approximation. Exactly 0.0 when either side has zero width.

    Raises:
        ValueError: If ``n < 1``.
    """
    _check_intervals(n)
    f = _compiled(expression, ("x", "y"), evaluator)
    if a == b or c == d:
        return 0.0

    dx = (b - a) / n
    dy = (d - c) / n

    steps = np.arange(n + 1)
    xs, ys = np.meshgrid(a + steps * dx, c + steps * dy, indexing="ij")

    # outer([1,2,..,2,1], [1,2,..,2,1]) gives 1 at corners, 2 on edges, 4 inside
    weights = np.outer(trapezoid_weights(n), trapezoid_weights(n))
    total = float(np.sum(weights * f(xs, ys)))

    return dx * dy / 4.0 * total


def _compiled(
    expression: str | CompiledExpression,
    variables: tuple[str, ...],
    evaluator: Evaluator | None,
) -> CompiledExpression:
    if isinstance(expression, CompiledExpression):
        return expression
    return CompiledExpression(expression, variables, evaluator)
