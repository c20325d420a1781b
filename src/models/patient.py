"""
Patient-level models.

Only the demographic facts the calculators need are modelled here; the
rest of a patient record belongs to the storage layer.
"""

from __future__ import annotations

from datetime import date
from enum import Enum

from pydantic import BaseModel, ConfigDict


class Sex(str, Enum):
    MALE = "male"
    FEMALE = "female"


def normalize_sex(value: Sex | str | None) -> Sex | None:
    """
    Collapse free-form sex input to the binary key used by reference tables.

    Accepts "M", "Male", "female", ... (first letter, case-insensitive).
    Anything else is treated as unknown.
    """
    if value is None:
        return None
    if isinstance(value, Sex):
        return value
    text = str(value).strip().lower()
    if text.startswith("m"):
        return Sex.MALE
    if text.startswith("f"):
        return Sex.FEMALE
    return None


class PatientIdentity(BaseModel):
    """Identity fields that can be auto-populated from a national ID."""
    model_config = ConfigDict(frozen=True)

    national_id: str | None = None
    date_of_birth: date | None = None
    sex: Sex | None = None
    region: str | None = None
