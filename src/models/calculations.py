"""
Result models returned by the calculation engines.

Every result is a frozen model built fresh per call. Callers own it and may
persist `model_dump(mode="json")` verbatim; nothing in here is ever
recomputed from a stored copy.
"""

from __future__ import annotations

from datetime import date
from enum import Enum

from pydantic import BaseModel, ConfigDict, Field

from src.models.patient import Sex


class BmiCategory(str, Enum):
    UNDERWEIGHT = "Underweight"
    HEALTHY = "Healthy Weight"
    OVERWEIGHT = "Overweight"
    OBESITY = "Obesity"
    OBESITY_CLASS_I = "Obesity Class I"
    OBESITY_CLASS_II = "Obesity Class II"
    OBESITY_CLASS_III = "Obesity Class III"
    SEVERE_OBESITY = "Severe Obesity"
    # Not gradable
    NOT_APPLICABLE_INFANT = "N/A (Infant)"
    UNKNOWN = "Unknown"
    LOOKUP_FAILED = "Unknown (Lookup Failed)"


class DemographicContext(BaseModel):
    """Age context of a patient relative to a reference date."""
    model_config = ConfigDict(frozen=True)

    age_months: int = Field(ge=0)
    is_infant: bool  # < 24 months
    is_pediatric: bool  # 24 months - 20 years
    is_adult: bool  # >= 240 months
    label: str
    reference_date: date


class LmsParameters(BaseModel):
    model_config = ConfigDict(frozen=True)

    l: float
    m: float
    s: float


class BmiMeta(BaseModel):
    """Audit trail: how a BMI result was graded."""
    model_config = ConfigDict(frozen=True)

    methodology: str
    formula: str
    reference_date: date
    exact_age_months: int
    lms_parameters: LmsParameters | None = None
    bmi_95th_percentile: float | None = None


class BmiResult(BaseModel):
    model_config = ConfigDict(frozen=True)

    bmi: float
    z_score: float | None = None
    percentile: float | None = None
    category: BmiCategory
    demographics: DemographicContext
    meta: BmiMeta


class PaleyResult(BaseModel):
    model_config = ConfigDict(frozen=True)

    multiplier: float
    predicted_height_cm: float
    growth_remaining_cm: float
    current_height_cm: float
    age_used: float
    is_bone_age: bool
    sex: Sex


class NationalIdDecoded(BaseModel):
    """
    Outcome of decoding a national identifier. Invalid IDs carry `error`.

    `date_of_birth` is the decoded "YYYY-MM-DD" text. Month and day are only
    range-checked, so it can name a day the calendar lacks (1996-02-31).
    """
    model_config = ConfigDict(frozen=True)

    is_valid: bool
    sex: Sex | None = None
    date_of_birth: str | None = None
    region: str | None = None
    error: str | None = None
