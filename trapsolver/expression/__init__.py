"""Expression parsing and evaluation for quadrature sample points."""

from trapsolver.expression.evaluator import (
    CONSTANTS,
    DEFAULT_EVALUATOR,
    CompiledExpression,
    Evaluator,
    ExpressionError,
    SympyEvaluator,
    evaluate_expression,
)

__all__ = [
    "CONSTANTS",
    "DEFAULT_EVALUATOR",
    "CompiledExpression",
    "Evaluator",
    "ExpressionError",
    "SympyEvaluator",
    "evaluate_expression",
]
