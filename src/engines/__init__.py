"""
Clinical calculation engines.

All engines are pure functions over their inputs and read-only reference
tables.
"""

from .stats import standard_normal_cdf, percentile_from_z, round_half_up
from .demographics import age_in_months, chronological_age_years, resolve_demographics
from .national_id import validate_national_id, apply_national_id
from .bmi import compute_bmi, calculate_bmi, classify_adult_bmi, classify_pediatric_bmi
from .paley import (
    compute_height_prediction,
    default_multiplier_table,
    format_imperial_height,
    imperial_height_parts,
    interpolate_multiplier,
)

__all__ = [
    "standard_normal_cdf",
    "percentile_from_z",
    "round_half_up",
    "age_in_months",
    "chronological_age_years",
    "resolve_demographics",
    "validate_national_id",
    "apply_national_id",
    "compute_bmi",
    "calculate_bmi",
    "classify_adult_bmi",
    "classify_pediatric_bmi",
    "compute_height_prediction",
    "default_multiplier_table",
    "format_imperial_height",
    "imperial_height_parts",
    "interpolate_multiplier",
]
