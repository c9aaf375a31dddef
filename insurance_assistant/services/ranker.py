# insurance_assistant/services/ranker.py
from __future__ import annotations

from typing import Any, Dict, List, Optional

import pandas as pd

from ..schemas import PlanCategory, UtilizationInput
from .cost_estimator import estimate
from .plan_catalog import PlanCatalog


def _load_candidate_plans(catalog: PlanCatalog, utilization: UtilizationInput,
                          category: Optional[PlanCategory] = None) -> pd.DataFrame:
    """
    One row per catalog plan (optionally restricted to a category) with its
    cost breakdown for the given utilization.
    """
    rows = []
    for plan in catalog.plans(category):
        breakdown = estimate(plan, utilization)
        rows.append(
            {
                "plan_id": plan.id,
                "plan_name": plan.name,
                "category": plan.category.value,
                "coverage_amount": plan.coverage_amount,
                "co_pay_percent": plan.co_pay_percent,
                **breakdown.model_dump(),
            }
        )
    return pd.DataFrame(rows)


def rank_plans(catalog: PlanCatalog, utilization: UtilizationInput | None = None,
               top_k: Optional[int] = None,
               category: Optional[PlanCategory] = None) -> List[Dict[str, Any]]:
    """
    Estimate every candidate plan for the same year of care and return them
    cheapest first (total annual cost, then premium, then plan id).
    """
    df = _load_candidate_plans(catalog, utilization or UtilizationInput(), category)
    if df.empty:
        return []

    df = df.sort_values(
        ["total_annual_cost", "annual_premium", "plan_id"], ascending=[True, True, True]
    )
    if top_k is not None:
        df = df.head(top_k)

    # Build lightweight comparison rows
    out: List[Dict[str, Any]] = []
    for _, r in df.iterrows():
        notes = f"Coverage: {r.get('coverage_amount') or 'Unknown'}"
        if float(r["co_pay_percent"]) > 0:
            notes += f", {r['co_pay_percent']:g}% co-pay"
        out.append(
            {
                "plan_id": r["plan_id"],
                "plan_name": r["plan_name"],
                "category": r["category"],
                "annual_premium": float(r["annual_premium"]),
                "out_of_pocket": float(r["out_of_pocket"]),
                "total_annual_cost": float(r["total_annual_cost"]),
                "savings": float(r["savings"]),
                "notes": notes,
            }
        )
    return out
