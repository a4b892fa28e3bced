"""Unit tests for explanation prompts and the explainer."""

import logging

import pytest

from trapsolver.ai.explainer import FALLBACK_MESSAGE, explain
from trapsolver.ai.prompts import build_explanation_prompt, prompt_for_result
from trapsolver.numerics.adaptive import adaptive_solve_1d, adaptive_solve_2d


class TestBuildExplanationPrompt:
    def test_single_integral(self):
        prompt = build_explanation_prompt("x^2", 0, 1, 0.3333334, 512, 1.27e-7)

        assert "Solve the definite integral" in prompt
        assert "f(x) = x^2" in prompt
        assert "\\int_{0}^{1} x^2 \\, dx = F(1) - F(0)" in prompt
        assert "**Intervals Used:** 512" in prompt
        assert "**Numerical Result:** 0.3333334" in prompt
        assert "**Estimated Error:** 1.27e-07" in prompt

    def test_double_integral(self):
        prompt = build_explanation_prompt(
            "x^2 + y^2", 0, 1, 0.66667, 256, 5.1e-6, is_double=True, c=0, d=2
        )

        assert "Solve the double integral" in prompt
        assert "\\int_{0}^{2} \\int_{0}^{1} x^2 + y^2 \\, dx \\, dy" in prompt
        assert "**Grid Size:** 256 x 256" in prompt
        assert "summed volumes of 65536 prisms" in prompt
        assert "Integrate the result of 1.1 from 0 to 2." in prompt

    def test_double_without_y_limits(self):
        with pytest.raises(ValueError):
            build_explanation_prompt("x*y", 0, 1, 0.25, 4, 0.0, is_double=True)

    def test_prompt_for_result_uses_result_bounds(self):
        result = adaptive_solve_2d("x*y", 0, 2, 0, 3)
        prompt = prompt_for_result(result)

        assert "Solve the double integral" in prompt
        assert "\\int_{0}^{3} \\int_{0}^{2} x*y" in prompt
        assert f"**Grid Size:** {result.intervals} x {result.intervals}" in prompt


class TestExplain:
    def test_returns_backend_text(self):
        prompts = []

        def backend(prompt: str) -> str:
            prompts.append(prompt)
            return "The integral equals 1/3."

        result = adaptive_solve_1d("x^2", 0, 1)
        assert explain(result, backend) == "The integral equals 1/3."
        assert len(prompts) == 1
        assert "f(x) = x^2" in prompts[0]

    def test_backend_failure_falls_back(self, caplog):
        def backend(prompt: str) -> str:
            raise ConnectionError("service unavailable")

        caplog.set_level(logging.WARNING, logger="trapsolver")
        result = adaptive_solve_1d("x^2", 0, 1)

        assert explain(result, backend) == FALLBACK_MESSAGE
        assert any("Explanation backend failed" in r.getMessage() for r in caplog.records)

    def test_empty_text_falls_back(self):
        result = adaptive_solve_1d("x", 0, 1)
        assert explain(result, lambda prompt: "   ") == FALLBACK_MESSAGE
