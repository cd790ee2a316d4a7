"""Relative-error comparison of an expected and an observed scalar."""

from __future__ import annotations

import math

from teststat.exceptions import ConfigError


def relative_error(want: float, have: float) -> float:
    """
    |want - have| / |want|.

    A zero want gives 0.0 when have is also zero and inf otherwise.
    """
    if want == 0:
        return 0.0 if have == 0 else math.inf
    return abs(want - have) / abs(want)


def validate_tolerance(tolerance: float) -> float:
    """Reject negative and NaN tolerances."""
    if not tolerance >= 0:
        raise ConfigError(
            f"tolerance must be >= 0, got {tolerance!r}",
            code="invalid_tolerance",
            details={"tolerance": tolerance},
        )
    return float(tolerance)


def matches(want: float, have: float, tolerance: float) -> bool:
    """
    True when have is within tolerance of want, relative to |want|.

    want == 0 matches only have == 0: relative error is undefined there and
    any non-zero reading counts as a mismatch. NaN on either side never
    matches.

    Raises:
        ConfigError: If tolerance is negative or NaN.
    """
    validate_tolerance(tolerance)
    if want == 0:
        return have == 0
    return relative_error(want, have) <= tolerance
