"""Half-up rounding used for every reported value.

Python's built-in ``round`` rounds halves to even (``round(0.25, 1) == 0.2``);
report values round halves up so ``12.25`` km/h shows as ``12.3``.
"""

import math


def round_half_up(value: float, digits: int = 0) -> float:
    """Round ``value`` to ``digits`` decimals, halves rounding up."""
    factor = 10 ** digits
    return math.floor(value * factor + 0.5) / factor


def round_int(value: float) -> int:
    """Round to the nearest integer, halves rounding up."""
    return int(math.floor(value + 0.5))


def average(total: float, count: int, digits: int = 0):
    """Rounded mean, or ``None`` when nothing was sampled."""
    if count <= 0:
        return None
    if digits == 0:
        return round_int(total / count)
    return round_half_up(total / count, digits)


def percentage(part: float, whole: float) -> float:
    """Share of ``whole`` as a percentage with one decimal, ``0`` if empty."""
    if whole <= 0:
        return 0
    return math.floor(part / whole * 1000 + 0.5) / 10
