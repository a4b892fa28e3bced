"""Solver tool implementations for the MCP server.

These functions hold the actual tool logic and import without the mcp SDK.
server.py wraps them in MCP tool definitions.
"""

from __future__ import annotations

import json
import math
from typing import Any

from trapsolver.ai.insights import generate_notes
from trapsolver.expression.evaluator import evaluate_expression
from trapsolver.inputs import parse_bounds, parse_number, parse_tolerance
from trapsolver.numerics.adaptive import (
    DOUBLE_DEFAULTS,
    SINGLE_DEFAULTS,
    adaptive_solve_1d,
    adaptive_solve_2d,
)
from trapsolver.numerics.result import SolverResult


def run_single_integral(
    expression: str,
    a: Any,
    b: Any,
    tolerance: Any = None,
    max_iterations: int | None = None,
) -> SolverResult:
    """Validate raw tool arguments and solve a single integral."""
    lo, hi = parse_bounds(a, b)
    tol = SINGLE_DEFAULTS.tolerance if tolerance is None else parse_tolerance(tolerance)
    budget = SINGLE_DEFAULTS.max_iterations if max_iterations is None else int(max_iterations)
    return adaptive_solve_1d(expression, lo, hi, tolerance=tol, max_iterations=budget)


def run_double_integral(
    expression: str,
    a: Any,
    b: Any,
    c: Any,
    d: Any,
    tolerance: Any = None,
    max_iterations: int | None = None,
) -> SolverResult:
    """Validate raw tool arguments and solve a double integral."""
    x_lo, x_hi, y_lo, y_hi = parse_bounds(a, b, c, d, double=True)
    tol = DOUBLE_DEFAULTS.tolerance if tolerance is None else parse_tolerance(tolerance)
    budget = DOUBLE_DEFAULTS.max_iterations if max_iterations is None else int(max_iterations)
    return adaptive_solve_2d(
        expression, x_lo, x_hi, y_lo, y_hi, tolerance=tol, max_iterations=budget
    )


def run_evaluation(expression: str, x: float, y: float | None = None) -> dict[str, Any]:
    """Evaluate an expression at one point.

    Raises:
        InvalidInputError: If ``x`` or a given ``y`` is not a finite number.
    """
    px = parse_number("x", x)
    py = None if y is None else parse_number("y", y)
    value = evaluate_expression(expression, px, py)
    return {"expression": expression, "x": px, "y": py, "value": value}


def _json_safe(value: Any) -> Any:
    """Replace non-finite floats with "inf", "-inf" or "nan" strings."""
    if isinstance(value, float) and not math.isfinite(value):
        if math.isnan(value):
            return "nan"
        return "inf" if value > 0 else "-inf"
    if isinstance(value, dict):
        return {key: _json_safe(item) for key, item in value.items()}
    if isinstance(value, (list, tuple)):
        return [_json_safe(item) for item in value]
    return value


def to_json(payload: dict[str, Any]) -> str:
    """Serialize a tool payload as strict JSON."""
    return json.dumps(_json_safe(payload), indent=2, allow_nan=False, default=str)


def format_response(result: SolverResult) -> str:
    """Format a SolverResult as JSON with prompt_context, notes and data."""
    return to_json(
        {
            "prompt_context": result.to_prompt_context(),
            "notes": [note.to_dict() for note in generate_notes(result)],
            "data": result.to_dict(),
        }
    )


def format_evaluation(data: dict[str, Any]) -> str:
    """Format a run_evaluation payload as JSON."""
    return to_json({"data": data})


EXPRESSION_SYNTAX_INFO = [
    {
        "name": "Operators",
        "description": "+ - * / and ^ (power); parentheses for grouping. Comparisons are not accepted",
        "example": "(x + 1)^2 / 3",
    },
    {
        "name": "Functions",
        "description": "sin cos tan asin acos atan sinh cosh tanh exp log sqrt abs",
        "example": "exp(-x^2) * cos(y)",
    },
    {
        "name": "Constants",
        "description": "e and pi",
        "example": "e^x + pi",
    },
    {
        "name": "Variables",
        "description": "x for single integrals; x and y for double integrals",
        "example": "x*y + y^2",
    },
    {
        "name": "Implicit multiplication",
        "description": "A number directly before a name or parenthesis multiplies",
        "example": "2x + 3(y - 1)",
    },
]


def format_syntax(entries: list[dict] | None = None) -> str:
    """Format expression syntax info as markdown."""
    entries = entries or EXPRESSION_SYNTAX_INFO
    lines = ["## Expression Syntax", ""]
    for entry in entries:
        lines.append(f"### {entry['name']}")
        lines.append(entry["description"])
        lines.append(f"Example: `{entry['example']}`")
        lines.append("")
    return "\n".join(lines)
