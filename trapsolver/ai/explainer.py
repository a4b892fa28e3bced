"""Natural-language explanations of solver results.

The text-generation service is any callable taking a prompt string and
returning the generated text. Failures of that service never reach the
caller: they are logged and replaced by ``FALLBACK_MESSAGE``.
"""

from __future__ import annotations

import logging
from collections.abc import Callable
from typing import TYPE_CHECKING

from trapsolver.ai.prompts import prompt_for_result

if TYPE_CHECKING:
    from trapsolver.numerics.result import SolverResult

logger = logging.getLogger(__name__)

ExplanationBackend = Callable[[str], str]

FALLBACK_MESSAGE = (
    "Unable to generate explanation. Please check your network or try again later."
)


def explain(result: SolverResult, backend: ExplanationBackend) -> str:
    """Ask ``backend`` to explain ``result``.

    Returns:
        The generated text, or ``FALLBACK_MESSAGE`` if the backend raised
        or returned nothing usable.
    """
    prompt = prompt_for_result(result)
    logger.debug("Requesting explanation (%d prompt chars)", len(prompt))

    try:
        text = backend(prompt)
    except Exception:
        logger.warning("Explanation backend failed", exc_info=True)
        return FALLBACK_MESSAGE

    if not isinstance(text, str) or not text.strip():
        logger.warning("Explanation backend returned no text")
        return FALLBACK_MESSAGE
    return text
