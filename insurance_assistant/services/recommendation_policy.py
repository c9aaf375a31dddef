# insurance_assistant/services/recommendation_policy.py
from __future__ import annotations

import math
from dataclasses import dataclass
from typing import Tuple

from ..schemas import RecommendationResult, RecommendedPlan
from .plan_catalog import PlanCatalog


@dataclass(frozen=True)
class IncomeTier:
    label: str
    lower: float  # inclusive
    upper: float  # exclusive
    plan_ids: Tuple[str, ...]
    recommended_id: str

    def contains(self, annual_income: float) -> bool:
        return self.lower <= annual_income < self.upper


# Annual household income bands. The chat system prompt is rendered from
# this table too, so the wizard and the model always agree.
INCOME_TIERS: Tuple[IncomeTier, ...] = (
    IncomeTier("low", 0, 30_000, ("budget", "essential"), "budget"),
    IncomeTier("lower_middle", 30_000, 60_000, ("essential", "family"), "essential"),
    IncomeTier("upper_middle", 60_000, 100_000, ("family", "premium"), "family"),
    IncomeTier("high", 100_000, math.inf, ("family", "premium"), "premium"),
)


def annual_income(monthly_income: float) -> float:
    return monthly_income * 12


def tier_for(annual: float) -> IncomeTier:
    # the top band is open-ended, infinite income included
    if annual >= INCOME_TIERS[-1].lower:
        return INCOME_TIERS[-1]
    for tier in INCOME_TIERS:
        if tier.contains(annual):
            return tier
    # negative or NaN income
    return INCOME_TIERS[0]


def recommend(family_size: int, monthly_income: float, catalog: PlanCatalog) -> RecommendationResult:
    """
    Pick the plan subset for a household by annual income.

    family_size is carried through to the result for display but does not
    take part in the selection. Input is expected to be validated already
    (family_size >= 1, monthly_income >= 0).
    """
    annual = annual_income(monthly_income)
    tier = tier_for(annual)

    # catalog order, not tier order
    plans = [
        RecommendedPlan(plan=plan, recommended=plan.id == tier.recommended_id)
        for plan in catalog.plans()
        if plan.id in tier.plan_ids
    ]
    return RecommendationResult(
        family_size=family_size,
        monthly_income=monthly_income,
        annual_income=annual,
        tier=tier.label,
        plans=plans,
    )
