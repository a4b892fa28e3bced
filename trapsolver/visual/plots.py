"""Matplotlib figures for trapezoidal solves.

``plot_trapezoids`` draws the integrand with the n trapezoids the 1-D rule
sums; ``plot_convergence`` shows the refinement history of a result.
"""

from __future__ import annotations

import math
from typing import TYPE_CHECKING

import matplotlib.pyplot as plt
import numpy as np
from matplotlib.patches import Polygon

from trapsolver.expression.evaluator import CompiledExpression

if TYPE_CHECKING:
    from matplotlib.axes import Axes

    from trapsolver.numerics.result import SolverResult

CURVE_RESOLUTION = 100


def _axes(ax: Axes | None) -> Axes:
    if ax is None:
        _, ax = plt.subplots(figsize=(8, 4))
    return ax


def plot_trapezoids(
    expression: str,
    a: float,
    b: float,
    n: int,
    ax: Axes | None = None,
) -> Axes:
    """Draw f(x) over [a, b] with the trapezoids of the n-interval rule.

    Points where the expression is not a real number are left out of the
    curve; trapezoids touching such a point are skipped.
    """
    f = CompiledExpression(expression, ("x",))
    ax = _axes(ax)

    xs = np.linspace(a, b, CURVE_RESOLUTION + 1)
    ys = f(xs)
    finite = np.isfinite(ys)
    ax.plot(xs[finite], ys[finite], color="tab:cyan", linewidth=2, label=f"f(x) = {expression}")

    edges = np.linspace(a, b, n + 1)
    heights = f(edges)
    for x0, x1, y0, y1 in zip(edges[:-1], edges[1:], heights[:-1], heights[1:], strict=True):
        if not (math.isfinite(y0) and math.isfinite(y1)):
            continue
        ax.add_patch(
            Polygon(
                [(x0, 0.0), (x0, y0), (x1, y1), (x1, 0.0)],
                closed=True,
                facecolor="tab:purple",
                edgecolor="tab:purple",
                alpha=0.3,
            )
        )

    ax.axhline(0.0, color="gray", linewidth=0.8)
    ax.set_xlabel("x")
    ax.set_ylabel("f(x)")
    ax.set_title(f"Trapezoidal rule, n = {n}")
    ax.legend(loc="best")
    return ax


def plot_convergence(result: SolverResult, ax: Axes | None = None) -> Axes:
    """Plot the error estimate against n for every refinement of ``result``."""
    ax = _axes(ax)

    records = [r for r in result.history[1:] if math.isfinite(r.error) and r.error > 0]
    if records:
        ax.plot([r.n for r in records], [r.error for r in records], marker="o", label="error estimate")
        ax.set_xscale("log", base=2)
        ax.set_yscale("log")
    if math.isfinite(result.tolerance) and result.tolerance > 0:
        ax.axhline(result.tolerance, color="tab:red", linestyle="--", label="tolerance")

    status = "converged" if result.is_converged else "not converged"
    ax.set_xlabel("grid dimension n" if result.is_double else "intervals n")
    ax.set_ylabel("estimated error")
    ax.set_title(f"{result.expression}: {status} at n = {result.intervals}")
    ax.grid(True, which="both", alpha=0.3)
    if ax.get_legend_handles_labels()[0]:
        ax.legend(loc="best")
    return ax
