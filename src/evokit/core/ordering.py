"""Float ordering helpers that never compare NaN directly.

Fitness and objective values are plain floats, and a failed evaluation may
leave a NaN behind. Sorting with these keys is total: NaNs always sort last,
whichever direction is requested. The reducers skip NaNs.
"""

from __future__ import annotations

from collections.abc import Iterable
import math


def float_ordering_maximize(value: float) -> tuple[bool, float]:
    """Sort key putting the largest value first and NaNs last."""
    if math.isnan(value):
        return (True, 0.0)
    return (False, -value)


def float_ordering_minimize(value: float) -> tuple[bool, float]:
    """Sort key putting the smallest value first and NaNs last."""
    if math.isnan(value):
        return (True, 0.0)
    return (False, value)


def fmax(values: Iterable[float]) -> float | None:
    """Return the maximum non-NaN value, or None if there is none."""
    return max((v for v in values if not math.isnan(v)), default=None)


def fmin(values: Iterable[float]) -> float | None:
    """Return the minimum non-NaN value, or None if there is none."""
    return min((v for v in values if not math.isnan(v)), default=None)


def imax(values: Iterable[float]) -> tuple[int, float] | None:
    """Return (index, value) of the first maximum, or None if empty."""
    best: tuple[int, float] | None = None
    for i, value in enumerate(values):
        if math.isnan(value):
            continue
        if best is None or value > best[1]:
            best = (i, value)
    return best


def imin(values: Iterable[float]) -> tuple[int, float] | None:
    """Return (index, value) of the first minimum, or None if empty."""
    best: tuple[int, float] | None = None
    for i, value in enumerate(values):
        if math.isnan(value):
            continue
        if best is None or value < best[1]:
            best = (i, value)
    return best
