"""
Age resolution relative to a clinical reference date.
"""

from __future__ import annotations

from datetime import date

from src.models import DemographicContext

INFANT_MAX_MONTHS = 24
ADULT_MIN_MONTHS = 240


def age_in_months(birth_date: date, reference_date: date) -> int:
    """
    Whole months elapsed from `birth_date` to `reference_date`.

    Truncates to the last completed month boundary. A reference date before
    the birth date counts as a newborn (0), not an error.
    """
    months = (reference_date.year - birth_date.year) * 12
    months += reference_date.month - birth_date.month
    if reference_date.day < birth_date.day:
        months -= 1
    return max(0, months)


def chronological_age_years(birth_date: date, reference_date: date) -> float:
    """Chronological age in years, from whole months."""
    return age_in_months(birth_date, reference_date) / 12


def resolve_demographics(
    birth_date: date | None,
    reference_date: date | None = None,
) -> DemographicContext:
    """
    Classify a patient as infant, pediatric or adult at `reference_date`.

    Without a birth date the adult standard applies.
    """
    if reference_date is None:
        reference_date = date.today()

    if birth_date is None:
        return DemographicContext(
            age_months=0,
            is_infant=False,
            is_pediatric=False,
            is_adult=True,
            label="Adult Standard",
            reference_date=reference_date,
        )

    months = age_in_months(birth_date, reference_date)

    if months < INFANT_MAX_MONTHS:
        label = "Infant (<2y)"
    elif months < ADULT_MIN_MONTHS:
        label = "Pediatric (WHO/CDC)"
    else:
        label = "Adult Standard"

    return DemographicContext(
        age_months=months,
        is_infant=months < INFANT_MAX_MONTHS,
        is_pediatric=INFANT_MAX_MONTHS <= months < ADULT_MIN_MONTHS,
        is_adult=months >= ADULT_MIN_MONTHS,
        label=label,
        reference_date=reference_date,
    )
