"""
Tests for the income-tier recommendation policy
"""
import math

import pytest
from pydantic import ValidationError

from conftest import make_plan
from insurance_assistant.schemas import HouseholdProfile, WizardState, WizardStep
from insurance_assistant.services.plan_catalog import PlanCatalog
from insurance_assistant.services.recommendation_policy import (
    INCOME_TIERS,
    annual_income,
    recommend,
    tier_for,
)


def _ids(result):
    return [rp.plan.id for rp in result.plans]


def _recommended_id(result):
    return result.recommended_plan.id


@pytest.mark.parametrize(
    "monthly_income, expected_ids, expected_recommended",
    [
        (0, ["budget", "essential"], "budget"),
        (1000, ["budget", "essential"], "budget"),
        (2499, ["budget", "essential"], "budget"),
        (2500, ["essential", "family"], "essential"),
        (4999, ["essential", "family"], "essential"),
        (5000, ["family", "premium"], "family"),
        (8333, ["family", "premium"], "family"),
        (8334, ["family", "premium"], "premium"),
        (1_000_000, ["family", "premium"], "premium"),
    ],
)
def test_income_bands(catalog, monthly_income, expected_ids, expected_recommended):
    result = recommend(3, monthly_income, catalog)
    assert _ids(result) == expected_ids
    assert _recommended_id(result) == expected_recommended


@pytest.mark.parametrize("monthly_income", [0, 1, 999.5, 2500, 4321, 5000, 8333.33, 8334, 25_000, 10**7])
def test_always_two_plans_one_recommended(catalog, monthly_income):
    result = recommend(2, monthly_income, catalog)
    assert len(result.plans) == 2
    assert sum(rp.recommended for rp in result.plans) == 1


def test_lower_bound_is_inclusive(catalog):
    just_under = recommend(1, 29999.99 / 12, catalog)
    exactly = recommend(1, 30000 / 12, catalog)

    assert just_under.annual_income < 30000
    assert _recommended_id(just_under) == "budget"
    assert exactly.annual_income == 30000
    assert _recommended_id(exactly) == "essential"


def test_family_size_does_not_change_selection(catalog):
    small = recommend(1, 2000, catalog)
    large = recommend(8, 2000, catalog)

    assert small.plans == large.plans
    assert small.tier == large.tier
    assert (small.family_size, large.family_size) == (1, 8)


def test_result_carries_income_details(catalog):
    result = recommend(4, 6000, catalog)
    assert result.monthly_income == 6000
    assert result.annual_income == 72000
    assert result.tier == "upper_middle"


def test_plans_follow_catalog_order():
    reordered = PlanCatalog([make_plan("premium"), make_plan("family"), make_plan("budget")])
    result = recommend(2, 9000, reordered)
    assert _ids(result) == ["premium", "family"]
    assert _recommended_id(result) == "premium"


def test_alternate_catalog_missing_plan():
    partial = PlanCatalog([make_plan("budget")])
    result = recommend(2, 100, partial)
    assert _ids(result) == ["budget"]
    assert result.plans[0].recommended is True


def test_tiers_cover_non_negative_income_without_gaps():
    assert INCOME_TIERS[0].lower == 0
    for below, above in zip(INCOME_TIERS, INCOME_TIERS[1:]):
        assert below.upper == above.lower
    for tier in INCOME_TIERS:
        assert tier.recommended_id in tier.plan_ids
        assert len(tier.plan_ids) == 2


@pytest.mark.parametrize(
    "annual, label",
    [(0, "low"), (29_999, "low"), (30_000, "lower_middle"), (59_999.99, "lower_middle"),
     (60_000, "upper_middle"), (99_999, "upper_middle"), (100_000, "high")],
)
def test_tier_for(annual, label):
    assert tier_for(annual).label == label


@pytest.mark.parametrize("annual", [10**12, math.inf])
def test_tier_for_open_ended_top(annual):
    assert tier_for(annual).label == "high"


def test_profile_rejects_non_finite_income():
    for income in (math.inf, -math.inf, math.nan):
        with pytest.raises(ValidationError):
            HouseholdProfile(family_size=2, monthly_income=income)
        with pytest.raises(ValidationError):
            WizardState(step=WizardStep.awaiting_income, family_size=2, monthly_income=income)


def test_annual_income():
    assert annual_income(2500) == 30000
