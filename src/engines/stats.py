"""
Normal distribution and rounding helpers.
"""

from __future__ import annotations

import math
from decimal import ROUND_HALF_UP, Decimal

# Abramowitz & Stegun 26.2.17 coefficients
_P = 0.2316419
_D = 0.3989423
_B1, _B2, _B3, _B4, _B5 = 0.3193815, -0.3565638, 1.781478, -1.821256, 1.330274


def standard_normal_cdf(x: float) -> float:
    """
    Approximate Φ(x) with the Abramowitz-Stegun polynomial.

    Stored percentiles were produced with this exact approximation
    (|error| < 7.5e-8), so it must not be replaced by an exact CDF.
    """
    t = 1 / (1 + _P * abs(x))
    d = _D * math.exp(-x * x / 2)
    prob = d * t * (_B1 + t * (_B2 + t * (_B3 + t * (_B4 + t * _B5))))
    if x > 0:
        prob = 1 - prob
    return prob


def percentile_from_z(z: float) -> float:
    """Convert Z-score to percentile (0-100)."""
    return standard_normal_cdf(z) * 100


def round_half_up(value: float, places: int) -> float:
    """
    Round to `places` decimals, halves away from zero.

    Works on the float's exact binary value, so 24.25 becomes 24.3 while
    1.005 (stored as 1.00499...) stays 1.0, matching the rounding of stored
    results.
    """
    quantum = Decimal(1).scaleb(-places)
    return float(Decimal(value).quantize(quantum, rounding=ROUND_HALF_UP))
