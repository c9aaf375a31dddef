# insurance_assistant/services/wizard.py
from __future__ import annotations

import logging
import re
from typing import Optional

from ..schemas import WizardState, WizardStep, WizardTurn
from .plan_catalog import PlanCatalog
from .prompt_builder import family_size_reply, recommendation_message
from .recommendation_policy import recommend

logger = logging.getLogger(__name__)

_LEADING_INT = re.compile(r"^\s*([+-]?\d+)")


class WizardInputError(ValueError):
    """User input the wizard cannot accept for the current step."""


def parse_leading_int(text: str) -> Optional[int]:
    """'3 people' -> 3, '  12,000' -> 12, 'three' -> None."""
    m = _LEADING_INT.match(text or "")
    return int(m.group(1)) if m else None


def _validate_family_size(text: str) -> int:
    value = parse_leading_int(text)
    if value is None or value < 1:
        raise WizardInputError("Please enter a valid number of family members")
    return value


def _validate_income(text: str) -> int:
    value = parse_leading_int(text)
    if value is None or value < 0:
        raise WizardInputError("Please enter a valid income amount")
    return value


def advance(state: WizardState, text: str, catalog: PlanCatalog) -> WizardTurn:
    """
    Feed one user input to the three-step wizard.

    awaiting_family_size -> awaiting_income -> showing_recommendations.
    Rejected input leaves the state untouched and carries a notice in
    `error`. Blank input, and any input after the recommendations are
    shown, changes nothing and carries no notice.
    """
    if state.step == WizardStep.showing_recommendations or not (text or "").strip():
        return WizardTurn(state=state)

    try:
        if state.step == WizardStep.awaiting_family_size:
            size = _validate_family_size(text)
            new_state = WizardState(step=WizardStep.awaiting_income, family_size=size)
            return WizardTurn(state=new_state, reply=family_size_reply(size))

        income = _validate_income(text)
    except WizardInputError as e:
        logger.debug("Rejected wizard input at %s: %r", state.step.value, text)
        return WizardTurn(state=state, error=str(e))

    result = recommend(state.family_size, income, catalog)
    new_state = WizardState(
        step=WizardStep.showing_recommendations,
        family_size=state.family_size,
        monthly_income=income,
    )
    return WizardTurn(state=new_state, reply=recommendation_message(result), recommendations=result)
