"""Caller-side validation of user supplied limits and tolerance.

The solvers assume well-formed floats. Front ends (forms, tool servers)
run raw input through these helpers first.
"""

from __future__ import annotations

import math


class InvalidInputError(ValueError):
    """Raised when a limit or tolerance is not a usable number."""

    def __init__(self, field: str, raw: object, reason: str = "not a valid number"):
        self.field = field
        self.raw = raw
        super().__init__(f"{field}: {raw!r} is {reason}")


def parse_number(field: str, raw: object) -> float:
    """Parse one finite number; ``field`` names it in the error."""
    if isinstance(raw, bool) or raw is None:
        raise InvalidInputError(field, raw)
    try:
        value = float(raw.strip()) if isinstance(raw, str) else float(raw)
    except (TypeError, ValueError) as exc:
        raise InvalidInputError(field, raw) from exc
    if not math.isfinite(value):
        raise InvalidInputError(field, raw, "not finite")
    return value


def parse_bounds(
    a: object,
    b: object,
    c: object = None,
    d: object = None,
    double: bool = False,
) -> tuple[float, ...]:
    """Parse integration limits.

    Args:
        a: Lower x limit.
        b: Upper x limit.
        c: Lower y limit, required when ``double`` is True.
        d: Upper y limit, required when ``double`` is True.
        double: Whether a double integral is being set up.

    Returns:
        ``(a, b)`` or ``(a, b, c, d)`` as floats.

    Raises:
        InvalidInputError: If any required limit is missing, non-numeric
            or not finite.
    """
    bounds = [parse_number("a", a), parse_number("b", b)]
    if double:
        bounds.append(parse_number("c", c))
        bounds.append(parse_number("d", d))
    return tuple(bounds)


def parse_tolerance(raw: object) -> float:
    """Parse a tolerance; must be a finite positive number."""
    value = parse_number("tolerance", raw)
    if value <= 0:
        raise InvalidInputError("tolerance", raw, "not positive")
    return value
