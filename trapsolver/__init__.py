"""trapsolver: adaptive trapezoidal quadrature for single and double integrals.

Usage::

    import trapsolver

    result = trapsolver.adaptive_solve_1d("x^2", 0, 1, tolerance=1e-6)
    result.value, result.intervals, result.is_converged

    result = trapsolver.adaptive_solve_2d("x^2 + y^2", 0, 1, 0, 1)
"""

import logging

# Silent unless the application configures logging
logging.getLogger("trapsolver").addHandler(logging.NullHandler())

from trapsolver.expression import (
    CompiledExpression,
    Evaluator,
    ExpressionError,
    SympyEvaluator,
    evaluate_expression,
)
from trapsolver.inputs import InvalidInputError, parse_bounds, parse_number, parse_tolerance
from trapsolver.logging_config import (
    configure_from_env,
    disable_logging,
    enable_console_logging,
    enable_file_logging,
    enable_json_logging,
    set_level,
    set_module_level,
)
from trapsolver.numerics import (
    DOUBLE_DEFAULTS,
    SINGLE_DEFAULTS,
    IterationRecord,
    SolverConfig,
    SolverResult,
    adaptive_solve_1d,
    adaptive_solve_2d,
    trapezoid_1d,
    trapezoid_2d,
)

__version__ = "0.1.0"

__all__ = [
    # Expressions
    "CompiledExpression",
    "Evaluator",
    "ExpressionError",
    "SympyEvaluator",
    "evaluate_expression",
    # Quadrature
    "DOUBLE_DEFAULTS",
    "IterationRecord",
    "SINGLE_DEFAULTS",
    "SolverConfig",
    "SolverResult",
    "adaptive_solve_1d",
    "adaptive_solve_2d",
    "trapezoid_1d",
    "trapezoid_2d",
    # Caller-side input handling
    "InvalidInputError",
    "parse_bounds",
    "parse_number",
    "parse_tolerance",
    # Logging
    "configure_from_env",
    "disable_logging",
    "enable_console_logging",
    "enable_file_logging",
    "enable_json_logging",
    "set_level",
    "set_module_level",
]
