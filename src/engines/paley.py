"""
Adult height prediction with the Paley multiplier method.

    predicted adult height = current height x multiplier(age, sex)

The multiplier is linearly interpolated between the two table rows that
bracket the age. At or past the last tabulated age growth is over and the
multiplier is exactly 1.0.
"""

from __future__ import annotations

import math

from knowledge.growth.paley import HeightMultiplierTable, MultiplierTable, load_multiplier_table
from src.config import get_config
from src.engines.stats import round_half_up
from src.models import PaleyResult, Sex, normalize_sex

CM_PER_INCH = 2.54


def default_multiplier_table() -> HeightMultiplierTable:
    """The configured multiplier table (bundled unless overridden)."""
    return load_multiplier_table(get_config().paley_table_path)


def interpolate_multiplier(table: MultiplierTable, age_years: float) -> float:
    """
    Multiplier for `age_years` from an age-sorted table.

    Ages below the first row reuse the first bracket, extrapolating backward.
    """
    if age_years >= table[-1][0]:
        return 1.0

    lower, upper = table[0], table[-1]
    for i in range(len(table) - 1):
        if table[i][0] <= age_years < table[i + 1][0]:
            lower, upper = table[i], table[i + 1]
            break
    else:
        if len(table) > 1:
            lower, upper = table[0], table[1]

    x1, y1 = lower
    x2, y2 = upper
    if x2 == x1:
        return y1
    return y1 + (age_years - x1) * ((y2 - y1) / (x2 - x1))


def compute_height_prediction(
    current_height_cm: float,
    age_years: float,
    sex: Sex | str | None,
    uses_bone_age: bool = False,
    tables: HeightMultiplierTable | None = None,
) -> PaleyResult | None:
    """
    Predict adult height.

    Args:
        current_height_cm: Current height in centimeters
        age_years: Chronological age, or skeletal (bone) age when
            `uses_bone_age` is set
        sex: "male"/"female" (or M/F, Male/Female)
        uses_bone_age: Whether `age_years` is a bone age override
        tables: Multiplier tables keyed by "male"/"female"

    Returns:
        PaleyResult, or None when height/age are not positive or sex is unknown
    """
    sex_key = normalize_sex(sex)
    if not current_height_cm or current_height_cm <= 0 or sex_key is None:
        return None
    if not age_years or age_years <= 0:
        return None

    if tables is None:
        tables = default_multiplier_table()
    table = tables.get(sex_key.value)
    if not table:
        return None

    multiplier = interpolate_multiplier(table, age_years)
    predicted = current_height_cm * multiplier

    return PaleyResult(
        multiplier=round_half_up(multiplier, 4),
        predicted_height_cm=round_half_up(predicted, 1),
        growth_remaining_cm=round_half_up(predicted - current_height_cm, 1),
        current_height_cm=current_height_cm,
        age_used=round_half_up(age_years, 2),
        is_bone_age=uses_bone_age,
        sex=sex_key,
    )


def imperial_height_parts(cm: float) -> tuple[int, int]:
    """
    Split centimeters into (feet, inches).

    Inches are rounded half-up after the feet are floored, so a value just
    under a whole foot shows as 12 inches (5' 12").
    """
    total_inches = cm / CM_PER_INCH
    feet = math.floor(total_inches / 12)
    inches = math.floor(total_inches % 12 + 0.5)
    return int(feet), int(inches)


def format_imperial_height(cm: float) -> str:
    """Format centimeters as feet and inches, e.g. 6' 0"."""
    feet, inches = imperial_height_parts(cm)
    return f"{feet}' {inches}\""
