"""
Tests for age resolution, the normal CDF approximation and the BMI engine.
"""

import sys
from pathlib import Path

# Add project root to path
sys.path.insert(0, str(Path(__file__).parent.parent))

import pytest
from datetime import date

from src.engines import (
    age_in_months,
    compute_bmi,
    percentile_from_z,
    resolve_demographics,
    round_half_up,
    standard_normal_cdf,
)
from src.models import BmiCategory

TODAY = date(2025, 6, 1)
# 120 months old on TODAY
TEN_YEAR_OLD = date(2015, 6, 1)


class TestAgeResolver:
    """Whole-month age and classification."""

    def test_whole_months(self):
        assert age_in_months(date(2020, 1, 15), date(2021, 3, 15)) == 14
        assert age_in_months(date(2020, 1, 15), date(2021, 3, 14)) == 13

    def test_truncates_at_month_end(self):
        # Feb 29th is earlier in the month than Jan 31st
        assert age_in_months(date(2020, 1, 31), date(2020, 2, 29)) == 0

    def test_reference_before_birth_clamps_to_zero(self):
        assert age_in_months(date(2024, 5, 1), date(2023, 1, 1)) == 0

    @pytest.mark.parametrize("birth,infant,pediatric,adult", [
        (date(2023, 6, 2), True, False, False),    # 23 months
        (date(2023, 6, 1), False, True, False),    # 24 months
        (date(2005, 6, 2), False, True, False),    # 239 months
        (date(2005, 6, 1), False, False, True),    # 240 months
    ])
    def test_classification_boundaries(self, birth, infant, pediatric, adult):
        demo = resolve_demographics(birth, TODAY)

        assert (demo.is_infant, demo.is_pediatric, demo.is_adult) == (infant, pediatric, adult)
        assert [demo.is_infant, demo.is_pediatric, demo.is_adult].count(True) == 1

    def test_missing_birth_date_is_adult_standard(self):
        demo = resolve_demographics(None, TODAY)

        assert demo.is_adult
        assert demo.age_months == 0
        assert demo.label == "Adult Standard"
        assert demo.reference_date == TODAY

    def test_reference_date_defaults_to_today(self):
        demo = resolve_demographics(date(2000, 1, 1))

        assert demo.reference_date == date.today()


class TestNormalCdf:
    """Abramowitz-Stegun approximation."""

    def test_median(self):
        assert standard_normal_cdf(0) == pytest.approx(0.5, abs=1e-6)
        assert percentile_from_z(0) == pytest.approx(50, abs=1e-4)

    def test_symmetry(self):
        for x in (0.5, 1.0, 1.64485, 2.5):
            assert standard_normal_cdf(x) + standard_normal_cdf(-x) == pytest.approx(1.0, abs=1e-12)

    def test_close_to_exact_cdf(self):
        from scipy import stats

        for x in (-4.0, -2.0, -1.0, -0.3, 0.0, 0.3, 1.0, 1.64485, 2.0, 4.0):
            assert standard_normal_cdf(x) == pytest.approx(stats.norm.cdf(x), abs=1e-6)

    def test_bounded(self):
        for x in (-40.0, 40.0):
            assert 0.0 <= standard_normal_cdf(x) <= 1.0


class TestPreconditions:

    @pytest.mark.parametrize("height,weight", [(0, 70), (170, 0), (-170, 70), (170, -1), (None, 70)])
    def test_non_positive_measurements_yield_no_result(self, height, weight):
        assert compute_bmi(height, weight, None, None, TODAY) is None


class TestAdultBmi:
    """WHO cut points."""

    def test_healthy_adult(self):
        result = compute_bmi(170, 70, None, None, TODAY)

        assert result.bmi == 24.2
        assert result.category == BmiCategory.HEALTHY
        assert result.demographics.is_adult
        assert result.meta.methodology == "WHO Adult Standards"
        assert result.z_score is None
        assert result.percentile is None

    @pytest.mark.parametrize("weight,expected", [
        (73.6, BmiCategory.UNDERWEIGHT),      # 18.4
        (74, BmiCategory.HEALTHY),            # 18.5
        (100, BmiCategory.OVERWEIGHT),        # 25.0
        (120, BmiCategory.OBESITY_CLASS_I),   # 30.0
        (140, BmiCategory.OBESITY_CLASS_II),  # 35.0
        (160, BmiCategory.OBESITY_CLASS_III), # 40.0
    ])
    def test_cut_point_lower_bounds_inclusive(self, weight, expected):
        result = compute_bmi(200, weight, date(1980, 1, 1), "female", TODAY)

        assert result.category == expected

    def test_exact_half_rounds_up(self):
        # 97 / 2.0^2 is exactly 24.25
        result = compute_bmi(200, 97, None, None, TODAY)

        assert result.bmi == 24.3
        assert result.category == BmiCategory.HEALTHY

    def test_pediatric_age_without_sex_uses_adult_grading(self):
        result = compute_bmi(140, 35, TEN_YEAR_OLD, None, TODAY)

        assert result.demographics.is_pediatric
        assert result.meta.methodology == "WHO Adult Standards"
        assert result.percentile is None


class TestInfantBmi:

    def test_infant_is_not_graded(self):
        result = compute_bmi(75, 9.5, date(2024, 6, 1), "male", TODAY)

        assert result.category == BmiCategory.NOT_APPLICABLE_INFANT
        assert result.bmi == 16.9
        assert result.percentile is None
        assert result.z_score is None
        assert result.meta.methodology == "None (Infant)"
        assert result.meta.lms_parameters is None


class TestPediatricBmi:
    """CDC LMS grading."""

    def test_median_triplet_gives_fiftieth_percentile(self):
        tables = {"male": {120: (1.0, 16.0, 0.1)}, "female": {120: (1.0, 16.0, 0.1)}}

        result = compute_bmi(100, 16, TEN_YEAR_OLD, "male", TODAY, lms_tables=tables)

        assert result.bmi == 16.0
        assert result.z_score == 0.0
        assert result.percentile == 50.0
        assert result.category == BmiCategory.HEALTHY
        assert result.meta.lms_parameters.l == 1.0
        assert result.meta.lms_parameters.m == 16.0
        assert result.meta.lms_parameters.s == 0.1

    @pytest.mark.parametrize("weight,expected", [
        (13, BmiCategory.UNDERWEIGHT),
        (17, BmiCategory.HEALTHY),
        (20, BmiCategory.OVERWEIGHT),
        (24, BmiCategory.OBESITY),
        (26, BmiCategory.SEVERE_OBESITY),
        (36, BmiCategory.SEVERE_OBESITY),
    ])
    def test_cdc_categories_ten_year_old_boy(self, weight, expected):
        # Height 100cm makes BMI equal to the weight
        result = compute_bmi(100, weight, TEN_YEAR_OLD, "M", TODAY)

        assert result.category == expected
        assert result.meta.methodology == "CDC LMS 2000 (Pediatric)"
        assert result.meta.exact_age_months == 120

    def test_records_95th_percentile_threshold(self):
        result = compute_bmi(100, 24, TEN_YEAR_OLD, "male", TODAY)

        # M * (1 + L*S*1.64485)^(1/L) for (-1.4143, 16.72, 0.1250)
        assert result.meta.bmi_95th_percentile == pytest.approx(21.32, abs=0.02)
        assert result.bmi < 1.2 * result.meta.bmi_95th_percentile

    def test_absolute_severe_threshold(self):
        tables = {"female": {120: (1.0, 20.0, 0.3)}}

        # 95th percentile here is ~29.9, so 1.2x is ~35.8; BMI >= 35 still counts
        result = compute_bmi(100, 35, TEN_YEAR_OLD, "female", TODAY, lms_tables=tables)

        assert result.percentile >= 95
        assert result.category == BmiCategory.SEVERE_OBESITY

    def test_nearest_age_tie_prefers_lower_age(self):
        tables = {"male": {24: (1.0, 16.0, 0.1), 36: (1.0, 15.0, 0.1)}}

        # 30 months: equidistant from 24 and 36
        result = compute_bmi(100, 16, date(2022, 12, 1), "male", TODAY, lms_tables=tables)

        assert result.demographics.age_months == 30
        assert result.meta.lms_parameters.m == 16.0

    def test_nearest_age_picks_closest(self):
        tables = {"male": {24: (1.0, 16.0, 0.1), 36: (1.0, 15.0, 0.1)}}

        result = compute_bmi(100, 16, date(2022, 6, 1), "male", TODAY, lms_tables=tables)

        assert result.demographics.age_months == 36
        assert result.meta.lms_parameters.m == 15.0

    def test_empty_table_is_lookup_failure(self):
        result = compute_bmi(100, 16, TEN_YEAR_OLD, "male", TODAY, lms_tables={"male": {}})

        assert result.category == BmiCategory.LOOKUP_FAILED
        assert result.meta.methodology == "Failed (LMS Missing)"
        assert result.percentile is None

    def test_unmapped_sex_is_unknown(self):
        result = compute_bmi(100, 16, TEN_YEAR_OLD, "intersex", TODAY)

        assert result.category == BmiCategory.UNKNOWN
        assert result.meta.methodology == "Failed (Sex Invalid)"

    def test_deterministic(self):
        first = compute_bmi(140, 35, TEN_YEAR_OLD, "female", TODAY)
        second = compute_bmi(140, 35, TEN_YEAR_OLD, "female", TODAY)

        assert first == second
        assert first.model_dump() == second.model_dump()


class TestRounding:
    """Half-up rounding of result fields."""

    @pytest.mark.parametrize("value,places,expected", [
        (24.25, 1, 24.3),
        (126.25, 1, 126.3),
        (-1.125, 2, -1.13),
        (0.125, 2, 0.13),
        (1.005, 2, 1.0),
        (1.14999999, 4, 1.15),
    ])
    def test_round_half_up(self, value, places, expected):
        assert round_half_up(value, places) == expected


class TestLms:

    def test_inverse_round_trips_at_95th(self):
        from knowledge.growth.cdc_2000 import value_from_lms_z, z_score_from_lms

        L, M, S = -1.4143, 16.72, 0.1250
        bmi95 = value_from_lms_z(1.64485, L, M, S)

        assert z_score_from_lms(bmi95, L, M, S) == pytest.approx(1.64485)

    def test_zero_lambda_uses_log_form(self):
        import math
        from knowledge.growth.cdc_2000 import z_score_from_lms

        assert z_score_from_lms(20.0, 0.0, 16.0, 0.1) == pytest.approx(math.log(20 / 16) / 0.1)


if __name__ == "__main__":
    pytest.main([__file__, "-v"])
