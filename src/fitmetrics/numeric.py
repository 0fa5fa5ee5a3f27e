"""Rounding helpers shared by the energy model and the metrics."""

from __future__ import annotations

import math


def round_half_up(value: float) -> int:
    """Round to the nearest integer, with .5 always rounding up.

    Python's built-in ``round`` uses banker's rounding (``round(1978.5) ==
    1978``). Stored goals and dashboard metrics have always rounded .5 up,
    so every integer metric goes through this helper instead.

    Example:
        >>> round_half_up(1978.5)
        1979
        >>> round_half_up(-2.5)
        -2
    """
    return int(math.floor(value + 0.5))


def clamp_percent(value: float) -> float:
    """Clamp a percentage to the closed range [0, 100]."""
    return min(100.0, max(0.0, value))
