"""
Stored calculation records.

A saved calculation is one variant of a closed union selected by its
`calculation_type` tag. Each variant pairs the inputs the clinician entered
with the result the engine returned at the time. Stored results are historical
facts: they are rehydrated as-is, never recomputed.
"""

from __future__ import annotations

from datetime import date, datetime
from enum import Enum
from typing import Annotated, Any, Literal, Union
from uuid import uuid4

from pydantic import BaseModel, ConfigDict, Field, TypeAdapter

from src.models.calculations import BmiResult, PaleyResult
from src.models.patient import Sex


def generate_id() -> str:
    """Generate a unique identifier."""
    return str(uuid4())[:8]


class CalculationType(str, Enum):
    BMI = "bmi"
    PALEY_HEIGHT = "paley_height"


class DemographicsSnapshot(BaseModel):
    """Demographics as they were when the calculation ran."""
    model_config = ConfigDict(frozen=True)

    date_of_birth: date | None = None
    sex: Sex | None = None
    age_months: int


class BmiInputs(BaseModel):
    model_config = ConfigDict(frozen=True)

    height_cm: float
    weight_kg: float
    reference_date: date
    demographics_snapshot: DemographicsSnapshot


class PaleyHeightInputs(BaseModel):
    model_config = ConfigDict(frozen=True)

    height_cm: float
    reference_date: date | None = None
    use_bone_age: bool
    age_used: float
    sex: Sex


class _ObservationBase(BaseModel):
    model_config = ConfigDict(frozen=True)

    id: str = Field(default_factory=generate_id)
    encounter_id: str | None = None
    observation_date: datetime = Field(default_factory=datetime.now)


class BmiObservation(_ObservationBase):
    calculation_type: Literal["bmi"] = CalculationType.BMI.value
    inputs: BmiInputs
    results: BmiResult


class PaleyHeightObservation(_ObservationBase):
    calculation_type: Literal["paley_height"] = CalculationType.PALEY_HEIGHT.value
    inputs: PaleyHeightInputs
    results: PaleyResult


CalculationRecord = Annotated[
    Union[BmiObservation, PaleyHeightObservation],
    Field(discriminator="calculation_type"),
]

_record_adapter: TypeAdapter[CalculationRecord] = TypeAdapter(CalculationRecord)


def record_bmi(
    result: BmiResult,
    height_cm: float,
    weight_kg: float,
    date_of_birth: date | None = None,
    sex: Sex | None = None,
    encounter_id: str | None = None,
) -> BmiObservation:
    """Wrap a BMI result with the inputs that produced it."""
    return BmiObservation(
        encounter_id=encounter_id,
        inputs=BmiInputs(
            height_cm=height_cm,
            weight_kg=weight_kg,
            reference_date=result.meta.reference_date,
            demographics_snapshot=DemographicsSnapshot(
                date_of_birth=date_of_birth,
                sex=sex,
                age_months=result.demographics.age_months,
            ),
        ),
        results=result,
    )


def record_height_prediction(
    result: PaleyResult,
    height_cm: float,
    reference_date: date | None = None,
    encounter_id: str | None = None,
) -> PaleyHeightObservation:
    """Wrap a height prediction with the inputs that produced it."""
    return PaleyHeightObservation(
        encounter_id=encounter_id,
        inputs=PaleyHeightInputs(
            height_cm=height_cm,
            reference_date=reference_date,
            use_bone_age=result.is_bone_age,
            age_used=result.age_used,
            sex=result.sex,
        ),
        results=result,
    )


def parse_observation(payload: dict[str, Any]) -> CalculationRecord:
    """
    Rehydrate a stored payload into its variant.

    Raises:
        pydantic.ValidationError: Unknown `calculation_type` or a payload
            that does not match the variant's shape.
    """
    return _record_adapter.validate_python(payload)
