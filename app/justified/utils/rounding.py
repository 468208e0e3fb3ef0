from __future__ import annotations

import math


def round_half_away(value: float) -> float:
    """Round to the nearest integer, halves away from zero.

    Built-in ``round`` uses banker's rounding (``round(-0.5) == 0``), which
    shifts justified items by a pixel on exact halves.
    """
    if value >= 0:
        return float(math.floor(value + 0.5))
    return -float(math.floor(-value + 0.5))
