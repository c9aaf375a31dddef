"""
Tests for the plan catalog
"""
import pytest
from pydantic import ValidationError

from conftest import make_plan
from insurance_assistant.services.plan_catalog import PlanCatalog, UnknownPlanError, fetch_plan_detail


def test_bundled_catalog(catalog):
    assert list(catalog) == ["ayushman", "cghs", "esis", "rsby", "budget", "essential", "family", "premium"]
    budget = catalog["budget"]
    assert (budget.monthly_premium, budget.co_pay_percent, budget.deductible) == (1500, 10, 5000)
    assert (budget.max_out_of_pocket, budget.coverage_percent) == (50000, 80)


def test_unknown_plan(catalog):
    with pytest.raises(UnknownPlanError) as info:
        catalog["platinum"]
    assert isinstance(info.value, KeyError)
    assert str(info.value) == "Plan 'platinum' not found."
    assert fetch_plan_detail(catalog, "platinum") is None
    assert "platinum" not in catalog


def test_duplicate_ids_rejected():
    with pytest.raises(ValueError, match="Duplicate plan id"):
        PlanCatalog([make_plan("a"), make_plan("a")])


def test_catalog_is_read_only(catalog):
    with pytest.raises(TypeError):
        catalog["budget"] = make_plan("budget")
    with pytest.raises(ValidationError):
        catalog["budget"].monthly_premium = 0
