from __future__ import annotations

from typing import Optional


def percent_of(numerator: float, denominator: float) -> Optional[float]:
    """``numerator / denominator * 100``; None when the denominator is not positive."""
    if denominator > 0:
        return numerator / denominator * 100.0
    return None


def mean_of_present(values) -> Optional[float]:
    present = [float(v) for v in values if v is not None]
    if not present:
        return None
    return sum(present) / len(present)


def is_effectively_equal(lhs: float, rhs: float, tolerance: float = 0.001) -> bool:
    return abs(lhs - rhs) <= tolerance


__all__ = ["percent_of", "mean_of_present", "is_effectively_equal"]
