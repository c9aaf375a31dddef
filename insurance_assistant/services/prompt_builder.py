# insurance_assistant/services/prompt_builder.py
from __future__ import annotations

import math
from typing import List

from ..schemas import Plan, PlanCategory, RecommendationResult
from .plan_catalog import PlanCatalog
from .recommendation_policy import INCOME_TIERS, IncomeTier

WIZARD_GREETING = (
    "Hello! I'm your Health Insurance Assistant. I'll help you find the perfect "
    "insurance plan for your family.\n\nTo get started, how many people are in your family?"
)

CHAT_GREETING = (
    "Hello! I'm your AI-powered Health Insurance Assistant specializing in Indian health "
    "insurance and government schemes.\n\n"
    "I can help you find the perfect insurance plan for your family and inform you about "
    "government schemes you may be eligible for.\n\n"
    "To get started, could you tell me:\n"
    "- How many people are in your family?\n"
    "- What's your approximate annual household income?\n"
    "- Are you aware of government schemes like Ayushman Bharat?\n"
    "- Do you have any specific health coverage needs?"
)

_PERSONA = "You are a friendly AI assistant for Indian health insurance and hospital recommendations."

_COMMUNICATION_STYLE = """COMMUNICATION STYLE:
- Keep responses short and conversational
- No markdown formatting (no **, no ##, no bold)
- Ask simple, direct questions
- Use plain text only
- Be concise and friendly"""

_INSURANCE_ASSISTANCE = """INSURANCE ASSISTANCE:
1. Help families find the right health insurance plan based on their size and income
2. Ask simple questions about family size, income, health needs, and preferences
3. Recommend plans only from the list below, with brief details
4. Explain insurance terms (premium, deductible, co-pay, out-of-pocket cap) in simple language
5. Inform users about Indian government health insurance schemes they may be eligible for

When asking for information, use this simple format:
- How many people are in your family? (example: 2 adults, 2 children)
- What is your approximate annual household income?
- Are you aware of government schemes like Ayushman Bharat? (just yes or no)
- Do you have any specific health coverage needs? (example: maternity, pre-existing conditions, cashless hospitalization)"""

_HOSPITALS = """HOSPITAL RECOMMENDATIONS:
1. Identify the issue and specialty needed (no diagnosis)
2. Ask for city if not provided
3. Recommend 3-6 hospitals with: name, specialty, rating, reason, cost range (₹), cashless availability
4. Always add: "This is not medical advice. Please consult a doctor."

Be friendly and conversational. Use simple language. No markdown formatting. Guide users naturally."""


def format_currency(amount: float) -> str:
    return f"₹{amount:,.0f}"


def _plan_line(plan: Plan) -> str:
    cost = plan.cost_label or f"{format_currency(plan.monthly_premium)}/month"
    parts = [f"{plan.name}: {plan.coverage_amount or 'coverage varies'}", cost]
    if plan.eligibility:
        parts.append(f"eligibility: {plan.eligibility}")
    terms = (
        f"deductible {format_currency(plan.deductible)}, "
        f"{plan.coverage_percent:g}% covered"
    )
    if plan.co_pay_percent > 0:
        terms += f", {plan.co_pay_percent:g}% co-pay"
    parts.append(terms)
    if plan.benefits:
        parts.append(", ".join(plan.benefits[:3]))
    return "- " + ", ".join(parts)


def _tier_range(tier: IncomeTier) -> str:
    if tier.lower <= 0:
        return f"Annual income below {format_currency(tier.upper)}"
    if math.isinf(tier.upper):
        return f"Annual income of {format_currency(tier.lower)} or more"
    return f"Annual income from {format_currency(tier.lower)} up to {format_currency(tier.upper)}"


def _tier_line(tier: IncomeTier, catalog: PlanCatalog) -> str:
    names: List[str] = []
    for plan_id in tier.plan_ids:
        plan = catalog.get(plan_id)
        name = plan.name if plan else plan_id
        if plan_id == tier.recommended_id:
            name += " (recommended)"
        names.append(name)
    return f"- {_tier_range(tier)}: {', '.join(names)}"


def build_system_prompt(catalog: PlanCatalog, search_context: str = "") -> str:
    """
    Render the chat system prompt. Plan details and the income tiers come
    from the catalog and INCOME_TIERS rather than being written out by hand.
    """
    sections = [_PERSONA, _COMMUNICATION_STYLE, _INSURANCE_ASSISTANCE]

    lines = ["Available Plans:"]
    for category, title in ((PlanCategory.government, "Government Schemes:"),
                            (PlanCategory.private, "Private Plans:")):
        plans = catalog.plans(category)
        if plans:
            lines.append("")
            lines.append(title)
            lines.extend(_plan_line(p) for p in plans)
    sections.append("\n".join(lines))

    tiers = ["Plan Selection by Income (always mention government schemes the family may qualify for):"]
    tiers.extend(_tier_line(t, catalog) for t in INCOME_TIERS)
    sections.append("\n".join(tiers))

    sections.append("Format for each plan:\nPlan Name: Coverage amount, Monthly cost, Key features (2-3 words)")
    sections.append(_HOSPITALS)

    prompt = "\n\n".join(sections)
    if search_context:
        prompt += f"\n\nRecent information from web search:\n{search_context}"
    return prompt


def family_size_reply(family_size: int) -> str:
    people = "person" if family_size == 1 else "people"
    return (
        f"Great! You have {family_size} {people} in your family.\n\n"
        "What is your approximate monthly family income?"
    )


def recommendation_message(result: RecommendationResult) -> str:
    lines = [
        f"Thank you! Based on your family size of {result.family_size} and monthly income of "
        f"{format_currency(result.monthly_income)}, I've found the best insurance plans for you.",
        "",
        "Here are my recommendations:",
    ]
    for rp in result.plans:
        tag = " (Recommended for You)" if rp.recommended else ""
        lines.append(
            f"- {rp.plan.name}{tag}: {format_currency(rp.plan.monthly_premium)}/month. "
            f"{rp.plan.description or rp.plan.type}"
        )
    return "\n".join(lines)
