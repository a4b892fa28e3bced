"""Tutor prompts asking a text-generation model to explain a solve.

The prompt requests an analytical solution first, then walks through the
numerical result the solver produced so the two can be compared.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from trapsolver.numerics.result import SolverResult

OUTPUT_RULES = """\
You are a modern AI Mathematics Tutor.

STRICT OUTPUT RULES:
- Use CLEAN Markdown formatting.
- No long paragraphs.
- Add spacing between every section.
- Bold key terms.
- Use block LaTeX ($$ $$) for equations.
"""


def _single_prompt(func: str, a: float, b: float, value: float, intervals: int, error: float) -> str:
    return f"""{OUTPUT_RULES}
Solve the definite integral:

$$ f(x) = {func} $$
from a = {a} to b = {b}

---

# STEP 1: Analytical Solution

### 1.1 Find the Antiderivative

$$
F(x) = \\int {func} \\, dx
$$

Show the integration rule clearly.

### 1.2 Apply the Fundamental Theorem of Calculus

$$
\\int_{{{a}}}^{{{b}}} {func} \\, dx = F({b}) - F({a})
$$

Substitute values clearly and simplify step-by-step.

### Exact Result

$$
= (Exact Answer Here)
$$

**Decimal Approximation:** show the decimal value clearly.

---

# STEP 2: Adaptive Trapezoidal Rule

- **Intervals Used:** {intervals}
- **Numerical Result:** {value}
- **Estimated Error:** {error:.2e}

Explain adaptive refinement in 2 short bullet points.

---

# Comparison Table

| Method | Result |
|--------|--------|
| Analytical | (Exact Value) |
| Numerical | {value} |

---

# Final Conclusion

One short concluding sentence only.
"""


def _double_prompt(
    func: str,
    a: float,
    b: float,
    c: float,
    d: float,
    value: float,
    intervals: int,
    error: float,
) -> str:
    return f"""{OUTPUT_RULES}
Solve the double integral:

$$ \\int_{{{c}}}^{{{d}}} \\int_{{{a}}}^{{{b}}} {func} \\, dx \\, dy $$

---

# STEP 1: Analytical Solution

### 1.1 Inner Integral (with respect to x)

$$ \\int_{{{a}}}^{{{b}}} {func} \\, dx $$

Treat 'y' as constant. Show integration steps.

### 1.2 Outer Integral (with respect to y)

Integrate the result of 1.1 from {c} to {d}.

$$ \\int_{{{c}}}^{{{d}}} [Result] \\, dy $$

### Exact Volume

$$ = (Exact Answer) $$

**Decimal Approximation:** (Value)

---

# STEP 2: Numerical Double Integration

- **Grid Size:** {intervals} x {intervals}
- **Numerical Volume:** {value}
- **Estimated Error:** {error:.2e}

Explain that we summed volumes of {intervals * intervals} prisms.

---

# Conclusion

One short final sentence.
"""


def build_explanation_prompt(
    expression: str,
    a: float,
    b: float,
    value: float,
    intervals: int,
    error: float,
    is_double: bool = False,
    c: float | None = None,
    d: float | None = None,
) -> str:
    """Build the tutor prompt for a single or double integral result.

    Raises:
        ValueError: If ``is_double`` is set without both y limits.
    """
    if not is_double:
        return _single_prompt(expression, a, b, value, intervals, error)
    if c is None or d is None:
        raise ValueError("double integral prompts need both y limits (c, d)")
    return _double_prompt(expression, a, b, c, d, value, intervals, error)


def prompt_for_result(result: SolverResult) -> str:
    """Build the tutor prompt from a solver result's own bounds."""
    if result.is_double:
        a, b, c, d = result.bounds
    else:
        (a, b), c, d = result.bounds, None, None
    return build_explanation_prompt(
        result.expression,
        a,
        b,
        result.value,
        result.intervals,
        result.error_estimate,
        is_double=result.is_double,
        c=c,
        d=d,
    )
