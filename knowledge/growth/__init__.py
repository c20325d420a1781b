"""
Growth reference tables.
"""

from .cdc_2000 import (
    BMI_FOR_AGE_MALE,
    BMI_FOR_AGE_FEMALE,
    BMI_LMS_TABLES,
    Z_95TH_PERCENTILE,
    LmsTable,
    LmsTriplet,
    nearest_lms,
    z_score_from_lms,
    value_from_lms_z,
)
from .paley import (
    BUNDLED_TABLE_PATH,
    HeightMultiplierTable,
    MultiplierTable,
    load_multiplier_table,
    parse_multiplier_table,
)

__all__ = [
    "BMI_FOR_AGE_MALE",
    "BMI_FOR_AGE_FEMALE",
    "BMI_LMS_TABLES",
    "Z_95TH_PERCENTILE",
    "LmsTable",
    "LmsTriplet",
    "nearest_lms",
    "z_score_from_lms",
    "value_from_lms_z",
    "BUNDLED_TABLE_PATH",
    "HeightMultiplierTable",
    "MultiplierTable",
    "load_multiplier_table",
    "parse_multiplier_table",
]
