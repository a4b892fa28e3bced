"""Unit tests for expression evaluation."""

import math

import numpy as np
import pytest

from trapsolver.expression.evaluator import (
    CompiledExpression,
    ExpressionError,
    SympyEvaluator,
    evaluate_expression,
)


class TestEvaluateExpression:
    """Tests for evaluate_expression."""

    def test_power_with_caret(self):
        """^ is exponentiation, not xor."""
        assert evaluate_expression("x^2", 3.0) == pytest.approx(9.0)

    def test_binds_y_when_given(self):
        assert evaluate_expression("x*y + y", 2.0, 3.0) == pytest.approx(9.0)

    def test_constants_in_scope(self):
        assert evaluate_expression("e", 0.0) == pytest.approx(math.e)
        assert evaluate_expression("2*pi*x", 0.5) == pytest.approx(math.pi)

    @pytest.mark.parametrize(
        "expression,x,expected",
        [
            ("sin(x)", math.pi / 2, 1.0),
            ("cos(x)", 0.0, 1.0),
            ("tan(x)", math.pi / 4, 1.0),
            ("exp(x)", 1.0, math.e),
            ("log(x)", math.e, 1.0),
            ("sqrt(x)", 16.0, 4.0),
            ("abs(x)", -2.5, 2.5),
        ],
    )
    def test_named_functions(self, expression, x, expected):
        assert evaluate_expression(expression, x) == pytest.approx(expected)

    def test_parentheses_and_precedence(self):
        assert evaluate_expression("(x + 1)^2 / 3 - 2*x", 2.0) == pytest.approx(-1.0)

    def test_implicit_multiplication(self):
        """A number directly before a variable multiplies it."""
        assert evaluate_expression("2x + 1", 3.0) == pytest.approx(7.0)

    def test_unknown_identifier_is_nan(self):
        assert math.isnan(evaluate_expression("z^2", 1.0, 2.0))

    def test_unbound_y_is_nan(self):
        """y is only in scope when a value is supplied."""
        assert math.isnan(evaluate_expression("x*y", 1.0))

    def test_syntax_error_is_nan(self):
        assert math.isnan(evaluate_expression("x +* (2", 1.0))

    def test_unknown_function_is_nan(self):
        assert math.isnan(evaluate_expression("frobnicate(x)", 1.0))

    @pytest.mark.parametrize("expression", ["[x]", "None", "(x, 1)", "True"])
    def test_non_expression_literals_are_nan(self, expression):
        """Python literals that parse but are not functions of x."""
        assert math.isnan(evaluate_expression(expression, 1.0))

    @pytest.mark.parametrize("expression", ["x == 1", "x < 1", "x >= 0"])
    def test_comparisons_are_nan(self, expression):
        assert math.isnan(evaluate_expression(expression, 1.0))

    def test_non_real_result_is_nan(self):
        assert math.isnan(evaluate_expression("sqrt(x)", -4.0))
        assert math.isnan(evaluate_expression("log(x)", -1.0))

    def test_non_real_constant_is_nan(self):
        assert math.isnan(evaluate_expression("sqrt(-1)", 0.0))

    def test_none_expression_raises(self):
        """A missing expression is a programming error."""
        with pytest.raises(TypeError):
            evaluate_expression(None, 1.0)


class TestSympyEvaluator:
    """Tests for the Evaluator implementation itself."""

    def test_evaluate_with_bindings(self):
        evaluator = SympyEvaluator()
        assert evaluator.evaluate("x^2 + y", {"x": 2.0, "y": 1.0}) == pytest.approx(5.0)

    def test_unknown_identifier_raises(self):
        evaluator = SympyEvaluator()
        with pytest.raises(ExpressionError) as exc_info:
            evaluator.evaluate("z + 1", {"x": 1.0})
        assert "z" in exc_info.value.reason

    def test_parse_error_raises(self):
        evaluator = SympyEvaluator()
        with pytest.raises(ExpressionError):
            evaluator.compile("x +* (2", ["x"])

    @pytest.mark.parametrize("expression", ["[x]", "None", "x < 1"])
    def test_non_numeric_parse_raises(self, expression):
        evaluator = SympyEvaluator()
        with pytest.raises(ExpressionError) as exc_info:
            evaluator.compile(expression, ["x"])
        assert exc_info.value.reason == "not a numeric expression"

    def test_expression_error_is_value_error(self):
        assert issubclass(ExpressionError, ValueError)


class TestCompiledExpression:
    """Tests for vectorized, failure-tolerant evaluation."""

    def test_evaluates_arrays(self):
        f = CompiledExpression("x^2", ("x",))
        values = f(np.array([0.0, 1.0, 2.0]))
        np.testing.assert_allclose(values, [0.0, 1.0, 4.0])

    def test_two_variables_on_grid(self):
        f = CompiledExpression("x + 10*y", ("x", "y"))
        xs, ys = np.meshgrid([0.0, 1.0], [0.0, 1.0], indexing="ij")
        np.testing.assert_allclose(f(xs, ys), [[0.0, 10.0], [1.0, 11.0]])

    def test_constant_expression_broadcasts(self):
        f = CompiledExpression("5", ("x",))
        values = f(np.linspace(0, 1, 4))
        assert values.shape == (4,)
        np.testing.assert_array_equal(values, [5.0, 5.0, 5.0, 5.0])

    def test_invalid_expression_yields_nan_everywhere(self):
        f = CompiledExpression("z^2", ("x", "y"))
        assert not f.is_valid
        assert isinstance(f.error, ExpressionError)
        values = f(np.zeros((3, 3)), np.zeros((3, 3)))
        assert values.shape == (3, 3)
        assert np.isnan(values).all()

    def test_domain_errors_are_pointwise(self):
        """Only points outside the domain become NaN."""
        f = CompiledExpression("sqrt(x)", ("x",))
        values = f(np.array([-1.0, 4.0]))
        assert math.isnan(values[0])
        assert values[1] == pytest.approx(2.0)

    def test_rejects_non_string(self):
        with pytest.raises(TypeError):
            CompiledExpression(None)
