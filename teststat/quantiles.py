"""
Analytic quantiles of the normal distribution.

The histogram check compares an instrument's reported quantiles against
closed-form values:

    quantile(p) = mean + stdev * probit(p)

probit() is the inverse CDF of the standard normal distribution. It uses
Peter Acklam's rational approximation (relative error below 1.15e-9 over the
whole domain) and polishes the result with one Halley step against
math.erfc, which brings it to near machine precision.

Domain: p must lie in the open interval (0, 1). probit(0.5) is exactly 0.0.
"""

from __future__ import annotations

import math
from typing import Tuple

from teststat.exceptions import DomainError
from teststat.models import NormalDistribution, Quantiles

# Central region numerator/denominator
_A: Tuple[float, ...] = (
    -3.969683028665376e01,
    2.209460984245205e02,
    -2.759285104469687e02,
    1.383577518672690e02,
    -3.066479806614716e01,
    2.506628277459239e00,
)
_B: Tuple[float, ...] = (
    -5.447609879822406e01,
    1.615858368580409e02,
    -1.556989798598866e02,
    6.680131188771972e01,
    -1.328068155288572e01,
)

# Tail regions numerator/denominator
_C: Tuple[float, ...] = (
    -7.784894002430293e-03,
    -3.223964580411365e-01,
    -2.400758277161838e00,
    -2.549732539343734e00,
    4.374664141464968e00,
    2.938163982698783e00,
)
_D: Tuple[float, ...] = (
    7.784695709041462e-03,
    3.224671290700398e-01,
    2.445134137142996e00,
    3.754408661907416e00,
)

_P_LOW = 0.02425
_P_HIGH = 1.0 - _P_LOW

_SQRT_2 = math.sqrt(2.0)
_SQRT_2PI = math.sqrt(2.0 * math.pi)

QUANTILE_LEVELS: Tuple[float, ...] = (0.50, 0.90, 0.95, 0.99)


def _horner(coeffs: Tuple[float, ...], x: float) -> float:
    acc = 0.0
    for c in coeffs:
        acc = acc * x + c
    return acc


def _tail(q: float) -> float:
    return _horner(_C, q) / (_horner(_D, q) * q + 1.0)


def standard_normal_cdf(x: float) -> float:
    """Phi(x) for the standard normal distribution."""
    return 0.5 * math.erfc(-x / _SQRT_2)


def normal_cdf(x: float, mean: float, stdev: float) -> float:
    """P(X <= x) for X ~ N(mean, stdev^2)."""
    return standard_normal_cdf((x - mean) / stdev)


def probit(p: float) -> float:
    """
    Inverse CDF of the standard normal distribution.

    Args:
        p: Probability in the open interval (0, 1).

    Returns:
        x such that Phi(x) == p.

    Raises:
        DomainError: If p is outside (0, 1) or NaN.
    """
    if not 0.0 < p < 1.0:
        raise DomainError(
            f"probit is defined on (0, 1), got {p!r}",
            value=p,
        )

    if p < _P_LOW:
        x = _tail(math.sqrt(-2.0 * math.log(p)))
    elif p <= _P_HIGH:
        q = p - 0.5
        r = q * q
        x = _horner(_A, r) * q / (_horner(_B, r) * r + 1.0)
    else:
        x = -_tail(math.sqrt(-2.0 * math.log1p(-p)))

    # One Halley step; leaves x == 0.0 untouched at p == 0.5.
    e = standard_normal_cdf(x) - p
    u = e * _SQRT_2PI * math.exp(x * x / 2.0)
    return x - u / (1.0 + x * u / 2.0)


def normal_quantile(mean: float, stdev: float, p: float) -> float:
    """mean + stdev * probit(p)."""
    return mean + stdev * probit(p)


def normal_quantiles(mean: float, stdev: float) -> Quantiles:
    """
    Theoretical p50/p90/p95/p99 of N(mean, stdev^2).

    p50 equals mean exactly.
    """
    p50, p90, p95, p99 = (normal_quantile(mean, stdev, p) for p in QUANTILE_LEVELS)
    return Quantiles(p50=p50, p90=p90, p95=p95, p99=p99)


def distribution_quantiles(distribution: NormalDistribution) -> Quantiles:
    return normal_quantiles(distribution.mean, distribution.stdev)
