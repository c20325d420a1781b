"""
Data models for Clinicalc.
"""

from .patient import Sex, PatientIdentity, normalize_sex
from .calculations import (
    BmiCategory,
    BmiMeta,
    BmiResult,
    DemographicContext,
    LmsParameters,
    NationalIdDecoded,
    PaleyResult,
)
from .observations import (
    BmiInputs,
    BmiObservation,
    CalculationRecord,
    CalculationType,
    DemographicsSnapshot,
    PaleyHeightInputs,
    PaleyHeightObservation,
    parse_observation,
    record_bmi,
    record_height_prediction,
)

__all__ = [
    "Sex",
    "PatientIdentity",
    "normalize_sex",
    "BmiCategory",
    "BmiMeta",
    "BmiResult",
    "DemographicContext",
    "LmsParameters",
    "NationalIdDecoded",
    "PaleyResult",
    "BmiInputs",
    "BmiObservation",
    "CalculationRecord",
    "CalculationType",
    "DemographicsSnapshot",
    "PaleyHeightInputs",
    "PaleyHeightObservation",
    "parse_observation",
    "record_bmi",
    "record_height_prediction",
]
