from enum import Enum
from typing import List, Optional

from pydantic import BaseModel, ConfigDict, Field, model_validator


class PlanCategory(str, Enum):
    government = "government"
    private = "private"


class Plan(BaseModel):
    model_config = ConfigDict(frozen=True)

    id: str
    name: str
    type: str
    category: PlanCategory
    monthly_premium: float = Field(ge=0)
    co_pay_percent: float = Field(ge=0, le=100)
    deductible: float = Field(ge=0)
    max_out_of_pocket: float = Field(ge=0)
    coverage_percent: float = Field(ge=0, le=100)
    # display-only
    description: Optional[str] = None
    coverage_amount: Optional[str] = None
    eligibility: Optional[str] = None
    cost_label: Optional[str] = None
    benefits: tuple[str, ...] = ()
    limitations: tuple[str, ...] = ()


class UtilizationInput(BaseModel):
    doctor_visits: int = Field(default=4, ge=0)
    hospitalizations: int = Field(default=0, ge=0)
    avg_hospitalization_cost: float = Field(default=50000, ge=0, allow_inf_nan=False)
    medication_cost: float = Field(default=2000, ge=0, allow_inf_nan=False)
    diagnostics_cost: float = Field(default=3000, ge=0, allow_inf_nan=False)


class HouseholdProfile(BaseModel):
    family_size: int = Field(ge=1)
    monthly_income: float = Field(ge=0, allow_inf_nan=False)


class RecommendedPlan(BaseModel):
    plan: Plan
    recommended: bool = False


class RecommendationResult(BaseModel):
    family_size: int
    monthly_income: float
    annual_income: float
    tier: str
    plans: List[RecommendedPlan]

    @property
    def recommended_plan(self) -> Optional[Plan]:
        for rp in self.plans:
            if rp.recommended:
                return rp.plan
        return None


class CostBreakdown(BaseModel):
    model_config = ConfigDict(frozen=True)

    annual_premium: float
    deductible_applied: float
    cost_after_deductible: float
    insurer_paid: float
    patient_share: float
    out_of_pocket: float
    total_annual_cost: float
    total_healthcare_cost: float
    savings: float


class EstimateRequest(BaseModel):
    plan_id: str
    utilization: UtilizationInput = Field(default_factory=UtilizationInput)


class EstimateResponse(BaseModel):
    plan: Plan
    breakdown: CostBreakdown


class CompareRequest(BaseModel):
    utilization: UtilizationInput = Field(default_factory=UtilizationInput)
    category: Optional[PlanCategory] = None
    top_k: Optional[int] = Field(default=None, ge=1, le=50)


class PlanComparison(BaseModel):
    plan_id: str
    plan_name: str
    category: PlanCategory
    annual_premium: float
    out_of_pocket: float
    total_annual_cost: float
    savings: float
    notes: Optional[str] = None


class WizardStep(str, Enum):
    awaiting_family_size = "awaiting_family_size"
    awaiting_income = "awaiting_income"
    showing_recommendations = "showing_recommendations"


class WizardState(BaseModel):
    step: WizardStep = WizardStep.awaiting_family_size
    family_size: Optional[int] = Field(default=None, ge=1)
    monthly_income: Optional[float] = Field(default=None, ge=0, allow_inf_nan=False)

    @model_validator(mode="after")
    def check_family_size_known(self):
        if self.step != WizardStep.awaiting_family_size and self.family_size is None:
            raise ValueError(f"family_size is required once the wizard is at {self.step.value}")
        return self


class WizardRequest(BaseModel):
    state: WizardState = Field(default_factory=WizardState)
    input: str


class WizardTurn(BaseModel):
    state: WizardState
    reply: Optional[str] = None
    error: Optional[str] = None
    recommendations: Optional[RecommendationResult] = None


class ChatMessage(BaseModel):
    role: str  # "user" or "assistant"
    content: str


class ChatRequest(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    messages: List[ChatMessage]
    use_search: bool = Field(default=False, alias="useSearch")


class ChatResponse(BaseModel):
    message: str


class ChatError(BaseModel):
    error: str
    user_message: Optional[str] = None
