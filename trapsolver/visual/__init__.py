"""Plotting helpers (requires matplotlib).

Usage::

    from trapsolver.visual import plot_trapezoids, plot_convergence

    plot_trapezoids("sin(x)", 0, pi, n=8)
    plot_convergence(trapsolver.adaptive_solve_1d("sin(x)", 0, 3.14159))
"""

from trapsolver.visual.plots import plot_convergence, plot_trapezoids

__all__ = ["plot_convergence", "plot_trapezoids"]
