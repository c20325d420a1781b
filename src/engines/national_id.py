"""
Romanian personal numeric code (CNP) validation and decoding.

Layout of the 13 digits:

    S AA LL ZZ JJ NNN C
    | |  |  |  |  |   +-- control digit
    | |  |  |  |  +------ serial
    | |  |  |  +--------- region (county) code
    | |  |  +------------ day of birth
    | |  +--------------- month of birth
    | +------------------ year of birth (2 digits)
    +-------------------- century + sex

Invalid input is reported as a NationalIdDecoded with `is_valid=False` and a
reason; nothing here raises for malformed IDs.
"""

from __future__ import annotations

import re
from datetime import date

from knowledge.regions import region_name
from src.models import NationalIdDecoded, PatientIdentity, Sex

CONTROL_KEY = (2, 7, 9, 1, 4, 6, 3, 5, 8, 2, 7, 9)

# First digit -> (century, sex). 7/8 are foreign residents.
CENTURY_SEX_CODES: dict[int, tuple[int, Sex]] = {
    1: (1900, Sex.MALE),
    2: (1900, Sex.FEMALE),
    3: (1800, Sex.MALE),
    4: (1800, Sex.FEMALE),
    5: (2000, Sex.MALE),
    6: (2000, Sex.FEMALE),
    7: (1900, Sex.MALE),
    8: (1900, Sex.FEMALE),
}

_FORMAT = re.compile(r"[0-9]{13}")

ERROR_FORMAT = "CNP must be exactly 13 digits."
ERROR_CHECKSUM = "Invalid checksum (control digit mismatch)."
ERROR_DATE = "Invalid birth date in CNP."
ERROR_CENTURY_SEX = "Invalid Gender/Century component."


def control_digit(digits: list[int]) -> int:
    """Expected control digit for the first 12 digits."""
    checksum = sum(d * k for d, k in zip(digits[:12], CONTROL_KEY))
    remainder = checksum % 11
    return 1 if remainder == 10 else remainder


def validate_national_id(national_id: str) -> NationalIdDecoded:
    """
    Validate a CNP and extract sex, birth date and region.

    Checks run in order: format, checksum, month/day range, century/sex code.
    An unmapped region code decodes to "Unknown/Other" rather than failing.
    """
    if not isinstance(national_id, str) or not _FORMAT.fullmatch(national_id):
        return NationalIdDecoded(is_valid=False, error=ERROR_FORMAT)

    digits = [int(c) for c in national_id]

    if control_digit(digits) != digits[12]:
        return NationalIdDecoded(is_valid=False, error=ERROR_CHECKSUM)

    year = digits[1] * 10 + digits[2]
    month = digits[3] * 10 + digits[4]
    day = digits[5] * 10 + digits[6]

    # Range check only; month lengths and leap years are not cross-checked
    if not 1 <= month <= 12 or not 1 <= day <= 31:
        return NationalIdDecoded(is_valid=False, error=ERROR_DATE)

    century_sex = CENTURY_SEX_CODES.get(digits[0])
    if century_sex is None:
        return NationalIdDecoded(is_valid=False, error=ERROR_CENTURY_SEX)
    century, sex = century_sex

    return NationalIdDecoded(
        is_valid=True,
        sex=sex,
        date_of_birth=f"{century + year:04d}-{month:02d}-{day:02d}",
        region=region_name(national_id[7:9]),
    )


def apply_national_id(identity: PatientIdentity, national_id: str) -> PatientIdentity:
    """
    Auto-populate sex, birth date and region from a CNP.

    Fields are overwritten only when the CNP decodes fully, including a birth
    date that exists on the calendar. Otherwise `identity` comes back as is.
    """
    decoded = validate_national_id(national_id)
    if not decoded.is_valid:
        return identity

    try:
        birth_date = date.fromisoformat(decoded.date_of_birth)
    except ValueError:
        return identity

    return identity.model_copy(update={
        "national_id": national_id,
        "date_of_birth": birth_date,
        "sex": decoded.sex,
        "region": decoded.region,
    })
