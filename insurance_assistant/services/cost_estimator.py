# insurance_assistant/services/cost_estimator.py
from __future__ import annotations

from ..schemas import CostBreakdown, Plan, UtilizationInput

DOCTOR_VISIT_COST = 500.0


def clamp_nonneg(x: float) -> float:
    return max(0.0, float(x))


def total_healthcare_cost(u: UtilizationInput) -> float:
    return (
        u.doctor_visits * DOCTOR_VISIT_COST
        + u.hospitalizations * u.avg_hospitalization_cost
        + u.medication_cost
        + u.diagnostics_cost
    )


def estimate(plan: Plan, utilization: UtilizationInput | None = None) -> CostBreakdown:
    """
    Itemized annual cost of a plan for one year of expected care.

    The post-deductible cost is split by coverage_percent, except that a
    non-zero co_pay_percent replaces the patient's side of that split
    outright. Patient liability (share + deductible) is then clamped to the
    plan's out-of-pocket maximum; a maximum of 0 means the patient pays
    nothing beyond the premium.
    """
    u = utilization or UtilizationInput()

    annual_premium = plan.monthly_premium * 12
    total = total_healthcare_cost(u)
    after_deductible = clamp_nonneg(total - plan.deductible)

    insurer_paid = after_deductible * (plan.coverage_percent / 100)
    patient_share = after_deductible - insurer_paid
    if plan.co_pay_percent > 0:
        patient_share = after_deductible * (plan.co_pay_percent / 100)

    out_of_pocket = min(patient_share + plan.deductible, plan.max_out_of_pocket)
    total_annual = annual_premium + out_of_pocket

    return CostBreakdown(
        annual_premium=annual_premium,
        deductible_applied=plan.deductible,
        cost_after_deductible=after_deductible,
        insurer_paid=insurer_paid,
        patient_share=patient_share,
        out_of_pocket=out_of_pocket,
        total_annual_cost=total_annual,
        total_healthcare_cost=total,
        savings=total - total_annual,
    )
