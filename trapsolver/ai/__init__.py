"""AI integration layer for trapsolver.

Builds tutor prompts from solver results, calls a pluggable text-generation
backend, and produces rules-based notes for presenting results.
"""

from trapsolver.ai.explainer import FALLBACK_MESSAGE, ExplanationBackend, explain
from trapsolver.ai.insights import ResultNote, generate_notes
from trapsolver.ai.prompts import build_explanation_prompt, prompt_for_result

__all__ = [
    "FALLBACK_MESSAGE",
    "ExplanationBackend",
    "ResultNote",
    "build_explanation_prompt",
    "explain",
    "generate_notes",
    "prompt_for_result",
]
