"""Result model for adaptive trapezoidal runs."""

from __future__ import annotations

import math
from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Any

if TYPE_CHECKING:
    import pandas as pd


@dataclass(frozen=True)
class IterationRecord:
    """One refinement step of an adaptive run.

    Attributes:
        n: Interval count (1-D) or grid dimension (2-D) used for this step.
        value: Trapezoidal approximation at ``n``.
        error: Richardson error estimate against the previous step.
            ``math.inf`` for the initial probe.
    """

    n: int
    value: float
    error: float

    def to_dict(self) -> dict[str, Any]:
        return {"n": self.n, "value": self.value, "error": self.error}


@dataclass(frozen=True)
class SolverResult:
    """Outcome of one adaptive solve.

    Attributes:
        value: Final approximation. NaN when the expression could not be
            evaluated at the sample points.
        intervals: ``n`` at which the result was accepted, or the most
            refined ``n`` reached when the budget ran out.
        error_estimate: Richardson estimate between the last two history
            entries.
        is_converged: Whether ``error_estimate < tolerance`` was reached
            within the iteration budget.
        history: Every iteration in order, starting with the initial probe.
        expression: The integrand that was solved.
        bounds: ``(a, b)`` for single integrals, ``(a, b, c, d)`` for double.
        tolerance: Tolerance the run was asked to meet.
    """

    value: float
    intervals: int
    error_estimate: float
    is_converged: bool
    history: tuple[IterationRecord, ...] = ()
    expression: str = ""
    bounds: tuple[float, ...] = field(default=())
    tolerance: float = math.nan

    @property
    def is_double(self) -> bool:
        return len(self.bounds) == 4

    @property
    def iterations(self) -> int:
        """Refinement steps performed after the initial probe."""
        return max(len(self.history) - 1, 0)

    @property
    def is_nan(self) -> bool:
        return math.isnan(self.value)

    def to_dict(self) -> dict[str, Any]:
        return {
            "expression": self.expression,
            "bounds": list(self.bounds),
            "is_double": self.is_double,
            "value": self.value,
            "intervals": self.intervals,
            "error_estimate": self.error_estimate,
            "is_converged": self.is_converged,
            "tolerance": self.tolerance,
            "history": [record.to_dict() for record in self.history],
        }

    def history_frame(self) -> pd.DataFrame:
        """History as a DataFrame with columns ``n``, ``value`` and ``error``."""
        import pandas as pd

        return pd.DataFrame(
            [record.to_dict() for record in self.history],
            columns=["n", "value", "error"],
        )

    def to_prompt_context(self) -> str:
        """Format the result as structured text for AI consumption."""
        lines: list[str] = []
        kind = "Double" if self.is_double else "Single"
        lines.append(f"## {kind} Integral Result")
        lines.append("")
        lines.append(f"- Integrand: `{self.expression}`")
        if self.is_double:
            a, b, c, d = self.bounds
            lines.append(f"- Domain: x in [{a}, {b}], y in [{c}, {d}]")
            lines.append(f"- Grid: {self.intervals} x {self.intervals}")
        elif self.bounds:
            a, b = self.bounds
            lines.append(f"- Domain: x in [{a}, {b}]")
            lines.append(f"- Intervals: {self.intervals}")
        lines.append(f"- Value: {self.value:.10g}")
        lines.append(f"- Estimated error: {self.error_estimate:.2e}")
        status = "converged" if self.is_converged else "did not converge"
        lines.append(f"- Status: {status} (tolerance {self.tolerance:.1e})")
        lines.append("")

        lines.append("| n | value | error |")
        lines.append("|---|-------|-------|")
        for record in self.history:
            lines.append(f"| {record.n} | {record.value:.10g} | {record.error:.2e} |")

        return "\n".join(lines)
