"""Rules-based notes on solver results.

Flags outcomes a caller should present differently from a plain converged
number: invalid integrands, exhausted budgets, convergence slower than the
trapezoidal rule's O(h^2) rate, and integrands the rule integrates exactly.
"""

from __future__ import annotations

import math
from dataclasses import dataclass
from typing import TYPE_CHECKING, Any

if TYPE_CHECKING:
    from trapsolver.numerics.result import SolverResult

# Halving h should divide the error by ~4; below this ratio the integrand
# is probably not smooth on the domain.
SLOW_CONVERGENCE_RATIO = 3.0


@dataclass
class ResultNote:
    """A remark about a solver result."""

    category: str  # "evaluation", "convergence", "smoothness", "exactness"
    description: str
    severity: str  # "error", "warning", "info"

    def to_dict(self) -> dict[str, Any]:
        return {
            "category": self.category,
            "description": self.description,
            "severity": self.severity,
        }


def generate_notes(result: SolverResult) -> list[ResultNote]:
    """Collect every note that applies to ``result``."""
    notes: list[ResultNote] = []

    if _check_evaluation(result, notes):
        return notes

    _check_convergence(result, notes)
    _check_convergence_rate(result, notes)
    _check_exactness(result, notes)

    return notes


def _check_evaluation(result: SolverResult, notes: list[ResultNote]) -> bool:
    """NaN values mean the integrand failed at sample points."""
    if not math.isnan(result.value):
        return False
    notes.append(
        ResultNote(
            category="evaluation",
            description=(
                f"'{result.expression}' could not be evaluated on the domain "
                f"(unknown name, syntax error or non-real values). "
                f"Use x{' and y' if result.is_double else ''} as variables."
            ),
            severity="error",
        )
    )
    return True


def _check_convergence(result: SolverResult, notes: list[ResultNote]) -> None:
    if result.is_converged:
        return
    notes.append(
        ResultNote(
            category="convergence",
            description=(
                f"Error estimate {result.error_estimate:.2e} did not reach the "
                f"tolerance {result.tolerance:.1e} after {result.iterations} "
                f"refinements (n={result.intervals}). Raise the iteration budget "
                f"or loosen the tolerance."
            ),
            severity="warning",
        )
    )


def _check_convergence_rate(result: SolverResult, notes: list[ResultNote]) -> None:
    errors = [r.error for r in result.history[1:] if math.isfinite(r.error)]
    if len(errors) < 3:
        return

    ratios = [
        prev / curr for prev, curr in zip(errors[-3:-1], errors[-2:], strict=True) if curr > 0
    ]
    if not ratios:
        return

    worst = min(ratios)
    if worst < SLOW_CONVERGENCE_RATIO:
        notes.append(
            ResultNote(
                category="smoothness",
                description=(
                    f"Error shrank by only {worst:.2f}x per doubling (expected ~4x). "
                    f"The integrand may be oscillatory or non-smooth on this domain."
                ),
                severity="info",
            )
        )


def _check_exactness(result: SolverResult, notes: list[ResultNote]) -> None:
    if len(result.history) < 2 or result.history[1].error != 0:
        return
    shape = "bilinear" if result.is_double else "linear"
    notes.append(
        ResultNote(
            category="exactness",
            description=(
                f"The first refinement did not change the value: the integrand is "
                f"{shape} (or constant) and the trapezoidal rule is exact for it."
            ),
            severity="info",
        )
    )
