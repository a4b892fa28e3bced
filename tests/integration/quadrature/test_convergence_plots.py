"""
End-to-end solves that save figures and refinement histories.

Run with: pytest tests/integration/quadrature/test_convergence_plots.py -v
Output will be in: test_output/test_convergence_plots/<test_name>/
"""

import math
from pathlib import Path

import pytest

from trapsolver import adaptive_solve_1d, adaptive_solve_2d


@pytest.fixture
def plt():
    matplotlib = pytest.importorskip("matplotlib")
    matplotlib.use("Agg")  # Non-interactive backend for tests
    import matplotlib.pyplot as plt

    yield plt
    plt.close("all")


class TestTrapezoidFigures:
    def test_sine_over_half_period(self, plt, test_output_dir: Path):
        from trapsolver.visual import plot_trapezoids

        ax = plot_trapezoids("sin(x)", 0, math.pi, 6)

        plot_path = test_output_dir / "sine_trapezoids.png"
        ax.figure.savefig(plot_path, dpi=120)

        assert plot_path.exists()
        assert len(ax.patches) == 6
        print(f"\nPlot saved to: {plot_path}")

    def test_skips_undefined_region(self, plt, test_output_dir: Path):
        from trapsolver.visual import plot_trapezoids

        # log is undefined at and below zero; the first trapezoid touches x=0
        ax = plot_trapezoids("log(x)", 0, 2, 4)
        ax.figure.savefig(test_output_dir / "log_trapezoids.png", dpi=120)

        assert len(ax.patches) == 3


class TestConvergenceFigures:
    def test_smooth_vs_kinked(self, plt, test_output_dir: Path):
        from trapsolver.visual import plot_convergence

        smooth = adaptive_solve_1d("exp(x)", 0, 1)
        kinked = adaptive_solve_1d("sqrt(x)", 0, 1, max_iterations=6)

        fig, (left, right) = plt.subplots(1, 2, figsize=(12, 4))
        plot_convergence(smooth, ax=left)
        plot_convergence(kinked, ax=right)

        plot_path = test_output_dir / "convergence.png"
        fig.savefig(plot_path, dpi=120)

        assert smooth.is_converged
        assert smooth.value == pytest.approx(math.e - 1, abs=1e-5)
        assert "not converged" in right.get_title()
        assert plot_path.exists()

    def test_double_integral(self, plt, test_output_dir: Path):
        from trapsolver.visual import plot_convergence

        result = adaptive_solve_2d("exp(-(x^2 + y^2))", -1, 1, -1, 1)
        ax = plot_convergence(result)
        ax.figure.savefig(test_output_dir / "double_convergence.png", dpi=120)

        assert result.is_converged
        assert ax.get_xlabel() == "grid dimension n"


class TestHistoryExport:
    def test_save_history_csv(self, test_output_dir: Path):
        pytest.importorskip("pandas")

        result = adaptive_solve_1d("1/(1 + x^2)", 0, 1)
        frame = result.history_frame()

        csv_path = test_output_dir / "history.csv"
        frame.to_csv(csv_path, index=False)

        assert list(frame.columns) == ["n", "value", "error"]
        assert len(frame) == len(result.history)
        assert frame["n"].iloc[-1] == result.intervals
        assert result.value == pytest.approx(math.pi / 4, abs=1e-5)
        assert csv_path.exists()
        print(f"\nData saved to: {csv_path}")
