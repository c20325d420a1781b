"""
BMI calculation and grading.

Grading depends on the patient's age at the reference date:

- Infant (<24 months): BMI is reported but not graded.
- Adult (>=240 months), or sex not recorded: WHO fixed cut points.
- Pediatric: CDC 2000 BMI-for-age percentile from the LMS triplet of the
  nearest tabulated age, with the CDC severe obesity extension above the
  95th percentile.

Reference-data gaps never raise; they come back as an "Unknown" category with
the failure named in `meta.methodology`.
"""

from __future__ import annotations

from datetime import date
from typing import Mapping

from knowledge.growth.cdc_2000 import (
    BMI_LMS_TABLES,
    Z_95TH_PERCENTILE,
    LmsTable,
    nearest_lms,
    value_from_lms_z,
    z_score_from_lms,
)
from src.engines.demographics import resolve_demographics
from src.engines.stats import percentile_from_z, round_half_up
from src.models import (
    BmiCategory,
    BmiMeta,
    BmiResult,
    DemographicContext,
    LmsParameters,
    Sex,
    normalize_sex,
)

BMI_FORMULA = "Weight / Height²"
LMS_FORMULA = "Z = ((BMI/M)^L - 1) / (L * S)"

METHOD_INFANT = "None (Infant)"
METHOD_ADULT = "WHO Adult Standards"
METHOD_PEDIATRIC = "CDC LMS 2000 (Pediatric)"
METHOD_SEX_INVALID = "Failed (Sex Invalid)"
METHOD_LMS_MISSING = "Failed (LMS Missing)"

# CDC: severe obesity is >= 120% of the 95th percentile or BMI >= 35
SEVERE_OBESITY_RATIO = 1.2
SEVERE_OBESITY_ABSOLUTE_BMI = 35


def calculate_bmi(weight_kg: float, height_cm: float) -> float:
    """Calculate BMI from weight and height."""
    height_m = height_cm / 100
    return round_half_up(weight_kg / (height_m * height_m), 1)


def classify_adult_bmi(bmi: float) -> BmiCategory:
    """WHO adult cut points. Lower bounds are inclusive."""
    if bmi < 18.5:
        return BmiCategory.UNDERWEIGHT
    elif bmi < 25:
        return BmiCategory.HEALTHY
    elif bmi < 30:
        return BmiCategory.OVERWEIGHT
    elif bmi < 35:
        return BmiCategory.OBESITY_CLASS_I
    elif bmi < 40:
        return BmiCategory.OBESITY_CLASS_II
    else:
        return BmiCategory.OBESITY_CLASS_III


def classify_pediatric_bmi(bmi: float, percentile: float, bmi_95th: float) -> BmiCategory:
    """CDC BMI-for-age categories."""
    if percentile < 5:
        return BmiCategory.UNDERWEIGHT
    elif percentile < 85:
        return BmiCategory.HEALTHY
    elif percentile < 95:
        return BmiCategory.OVERWEIGHT
    elif bmi >= SEVERE_OBESITY_RATIO * bmi_95th or bmi >= SEVERE_OBESITY_ABSOLUTE_BMI:
        return BmiCategory.SEVERE_OBESITY
    else:
        return BmiCategory.OBESITY


def _ungraded(
    bmi: float,
    category: BmiCategory,
    demographics: DemographicContext,
    methodology: str,
    formula: str,
) -> BmiResult:
    return BmiResult(
        bmi=bmi,
        category=category,
        demographics=demographics,
        meta=BmiMeta(
            methodology=methodology,
            formula=formula,
            reference_date=demographics.reference_date,
            exact_age_months=demographics.age_months,
        ),
    )


def compute_bmi(
    height_cm: float,
    weight_kg: float,
    birth_date: date | None = None,
    sex: Sex | str | None = None,
    reference_date: date | None = None,
    lms_tables: Mapping[str, LmsTable] = BMI_LMS_TABLES,
) -> BmiResult | None:
    """
    Calculate and grade BMI.

    Args:
        height_cm: Height in centimeters
        weight_kg: Weight in kilograms
        birth_date: Date of birth; without it the adult standard applies
        sex: "male"/"female" (or M/F, Male/Female)
        reference_date: Date of the measurement (default: today)
        lms_tables: BMI-for-age LMS tables keyed by "male"/"female"

    Returns:
        BmiResult, or None when height or weight is not positive
    """
    if not height_cm or not weight_kg or height_cm <= 0 or weight_kg <= 0:
        return None

    bmi = calculate_bmi(weight_kg, height_cm)
    demo = resolve_demographics(birth_date, reference_date)

    if demo.is_infant:
        return _ungraded(bmi, BmiCategory.NOT_APPLICABLE_INFANT, demo, METHOD_INFANT, BMI_FORMULA)

    sex_given = sex is not None and str(sex).strip() != ""
    if demo.is_adult or not sex_given:
        return _ungraded(bmi, classify_adult_bmi(bmi), demo, METHOD_ADULT, BMI_FORMULA)

    sex_key = normalize_sex(sex)
    table = lms_tables.get(sex_key.value) if sex_key else None
    if table is None:
        return _ungraded(bmi, BmiCategory.UNKNOWN, demo, METHOD_SEX_INVALID, "N/A")

    match = nearest_lms(table, demo.age_months)
    if match is None:
        return _ungraded(bmi, BmiCategory.LOOKUP_FAILED, demo, METHOD_LMS_MISSING, "N/A")
    _, (L, M, S) = match

    z = z_score_from_lms(bmi, L, M, S)
    percentile = percentile_from_z(z)
    bmi_95th = value_from_lms_z(Z_95TH_PERCENTILE, L, M, S)

    return BmiResult(
        bmi=bmi,
        z_score=round_half_up(z, 2),
        percentile=round_half_up(percentile, 1),
        category=classify_pediatric_bmi(bmi, percentile, bmi_95th),
        demographics=demo,
        meta=BmiMeta(
            methodology=METHOD_PEDIATRIC,
            formula=LMS_FORMULA,
            reference_date=demo.reference_date,
            exact_age_months=demo.age_months,
            lms_parameters=LmsParameters(l=L, m=M, s=S),
            bmi_95th_percentile=round_half_up(bmi_95th, 2),
        ),
    )
