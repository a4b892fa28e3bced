"""Expression parsing and evaluation.

Expressions are plain strings in standard infix notation over the variables
``x`` and (optionally) ``y``, with the constants ``e`` and ``pi`` in scope.
``^`` is exponentiation and implicit multiplication (``2x``) is accepted.

The solver only depends on the narrow ``Evaluator`` protocol. The default
implementation, ``SympyEvaluator``, parses with sympy and evaluates through
``sympy.lambdify`` with the numpy backend so that every sample point of a
quadrature rule is computed in one vectorized call.

Note: sympy's parser is built on ``eval``. Expressions are trusted input.
"""

from __future__ import annotations

import logging
import math
from abc import abstractmethod
from collections.abc import Callable, Mapping, Sequence
from typing import Protocol

import numpy as np
import sympy
from sympy.core.function import AppliedUndef
from sympy.parsing.sympy_parser import (
    convert_xor,
    implicit_multiplication,
    parse_expr,
    standard_transformations,
)

logger = logging.getLogger(__name__)

TRANSFORMATIONS = standard_transformations + (implicit_multiplication, convert_xor)

# Names bound in every expression scope besides the variables themselves.
CONSTANTS: dict[str, sympy.Basic] = {"e": sympy.E, "pi": sympy.pi}


class ExpressionError(ValueError):
    """Raised by an ``Evaluator`` when an expression cannot be parsed or evaluated."""

    def __init__(self, expression: str, reason: str):
        self.expression = expression
        self.reason = reason
        super().__init__(f"Cannot evaluate {expression!r}: {reason}")


class Evaluator(Protocol):
    """Capability to evaluate an expression string against variable bindings."""

    @abstractmethod
    def evaluate(self, expression: str, bindings: Mapping[str, float]) -> float:
        """Evaluate ``expression`` at a single point.

        Domain errors (``log(-1)``, ``sqrt(-2)``) evaluate to NaN rather
        than raising.

        Raises:
            ExpressionError: On parse errors, unknown identifiers or a
                failing evaluation backend.
        """
        ...

    @abstractmethod
    def compile(
        self, expression: str, variables: Sequence[str]
    ) -> Callable[..., np.ndarray]:
        """Build a callable mapping one array per variable to an array of values.

        Raises:
            ExpressionError: If the expression cannot be parsed or refers to
                names outside ``variables`` and the constants.
        """
        ...


def _to_real_array(raw, shape: tuple[int, ...]) -> np.ndarray:
    """Coerce a lambdified result to a float array of ``shape``.

    Complex values with a non-zero imaginary part become NaN. Scalars (from
    constant expressions) are broadcast.
    """
    values = np.asarray(raw)
    if np.iscomplexobj(values):
        values = np.where(values.imag == 0, values.real, np.nan)
    values = np.asarray(values, dtype=float)
    return np.array(np.broadcast_to(values, shape), dtype=float)


class SympyEvaluator:
    """``Evaluator`` backed by sympy parsing and numpy evaluation."""

    def parse(self, expression: str, variables: Sequence[str]) -> sympy.Expr:
        """Parse ``expression`` and check it is a real-valued function of bound names.

        Raises:
            ExpressionError: On parse errors, results that are not sympy
                expressions (``[x]``, ``None``, ``x < 1``), unknown
                identifiers or unknown functions.
        """
        local_dict: dict[str, sympy.Basic] = dict(CONSTANTS)
        local_dict.update({name: sympy.Symbol(name) for name in variables})

        try:
            parsed = parse_expr(
                expression, local_dict=local_dict, transformations=TRANSFORMATIONS
            )
        except Exception as exc:  # sympy surfaces parse failures as many types
            raise ExpressionError(expression, f"parse error ({exc})") from exc

        # Lists, None, comparisons and booleans parse fine but are not functions
        if not isinstance(parsed, sympy.Expr):
            raise ExpressionError(expression, "not a numeric expression")

        unknown = sorted({s.name for s in parsed.free_symbols} - set(variables))
        if unknown:
            raise ExpressionError(expression, f"unknown identifier(s) {', '.join(unknown)}")

        undefined = sorted(str(f.func) for f in parsed.atoms(AppliedUndef))
        if undefined:
            raise ExpressionError(expression, f"unknown function(s) {', '.join(undefined)}")

        return parsed

    def compile(
        self, expression: str, variables: Sequence[str]
    ) -> Callable[..., np.ndarray]:
        parsed = self.parse(expression, variables)
        symbols = [sympy.Symbol(name) for name in variables]
        try:
            func = sympy.lambdify(symbols, parsed, modules="numpy")
        except Exception as exc:
            raise ExpressionError(expression, f"cannot compile ({exc})") from exc

        def evaluate_arrays(*arrays: np.ndarray) -> np.ndarray:
            arrays = tuple(np.asarray(arr, dtype=float) for arr in arrays)
            shape = np.broadcast_shapes(*(arr.shape for arr in arrays)) if arrays else ()
            with np.errstate(all="ignore"):
                return _to_real_array(func(*arrays), shape)

        return evaluate_arrays

    def evaluate(self, expression: str, bindings: Mapping[str, float]) -> float:
        names = list(bindings)
        func = self.compile(expression, names)
        try:
            raw = func(*(bindings[name] for name in names))
        except Exception as exc:
            raise ExpressionError(expression, f"evaluation failed ({exc})") from exc

        return float(raw)


DEFAULT_EVALUATOR = SympyEvaluator()


class CompiledExpression:
    """Failure-tolerant vectorized view of an expression over fixed variables.

    Compilation happens once, when the object is built. Calling it never
    raises for numeric reasons: if the expression could not be compiled, or
    the evaluation backend fails, every requested point evaluates to NaN.

    Args:
        expression: Expression string.
        variables: Variable names, in the order arrays are passed on call.
        evaluator: Backend to use. Defaults to ``SympyEvaluator``.
    """

    def __init__(
        self,
        expression: str,
        variables: Sequence[str] = ("x",),
        evaluator: Evaluator | None = None,
    ):
        if not isinstance(expression, str):
            raise TypeError(f"expression must be a string, got {type(expression).__name__}")

        self.expression = expression
        self.variables = tuple(variables)
        self._evaluator = evaluator or DEFAULT_EVALUATOR
        self.error: ExpressionError | None = None

        try:
            self._func = self._evaluator.compile(expression, self.variables)
        except ExpressionError as exc:
            logger.debug("Expression %r will evaluate to NaN: %s", expression, exc.reason)
            self._func = None
            self.error = exc

    @property
    def is_valid(self) -> bool:
        return self._func is not None

    def __call__(self, *arrays) -> np.ndarray:
        arrays = tuple(np.asarray(arr, dtype=float) for arr in arrays)
        shape = np.broadcast_shapes(*(arr.shape for arr in arrays)) if arrays else ()

        if self._func is None:
            return np.full(shape, np.nan)

        try:
            return self._func(*arrays)
        except Exception as exc:
            logger.debug("Evaluation of %r failed: %s", self.expression, exc)
            return np.full(shape, np.nan)


def evaluate_expression(expression: str, x: float, y: float | None = None) -> float:
    """Evaluate ``expression`` at ``(x, y)``.

    ``y`` is only bound when given. Any parse or evaluation failure,
    including non-real results, is reported as ``math.nan``.

    Raises:
        TypeError: If ``expression`` is not a string.
    """
    if not isinstance(expression, str):
        raise TypeError(f"expression must be a string, got {type(expression).__name__}")

    bindings = {"x": x} if y is None else {"x": x, "y": y}
    try:
        return DEFAULT_EVALUATOR.evaluate(expression, bindings)
    except ExpressionError as exc:
        logger.debug("%s", exc)
        return math.nan
