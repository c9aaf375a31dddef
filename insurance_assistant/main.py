# insurance_assistant/main.py
from __future__ import annotations

import logging
from contextlib import asynccontextmanager
from typing import List, Optional

from fastapi import Depends, FastAPI, HTTPException, Path, Query
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from .config import Settings, get_settings
from .deps import get_catalog
from .logging_config import setup_logging
from .schemas import (
    ChatError,
    ChatRequest,
    ChatResponse,
    CompareRequest,
    EstimateRequest,
    EstimateResponse,
    HouseholdProfile,
    Plan,
    PlanCategory,
    PlanComparison,
    RecommendationResult,
    WizardRequest,
    WizardTurn,
)
from .services.chat import chat_with_assistant
from .services.cost_estimator import estimate as estimate_costs
from .services.llm_client import (
    ChatCompletionClient,
    LLMConfigurationError,
    LLMGatewayError,
    user_facing_error,
)
from .services.plan_catalog import PlanCatalog, fetch_plan_detail
from .services.prompt_builder import CHAT_GREETING, WIZARD_GREETING
from .services.ranker import rank_plans
from .services.recommendation_policy import recommend as recommend_plans
from .services.wizard import advance

settings = get_settings()
setup_logging(settings.log_level)
logger = logging.getLogger(__name__)

@asynccontextmanager
async def lifespan(app: FastAPI):
    yield
    if _llm is not None:
        _llm.close()

app = FastAPI(
    title=settings.app_name,
    description="Health insurance plan recommendations, cost estimates and AI chat",
    version="1.0.0",
    lifespan=lifespan,
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.origins or ["*"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

# -----------------------------
# Singleton gateway client
# -----------------------------
_llm: Optional[ChatCompletionClient] = None

def get_llm_client(settings: Settings = Depends(get_settings)) -> ChatCompletionClient:
    global _llm
    if _llm is None:
        _llm = ChatCompletionClient(settings)
    return _llm

# -----------------------------
# Routes
# -----------------------------
@app.get("/")
def root():
    return {
        "status": "ok",
        "message": settings.app_name,
        "wizard_greeting": WIZARD_GREETING,
        "chat_greeting": CHAT_GREETING,
    }

@app.get("/health")
def health():
    return {"status": "ok"}

@app.get("/plans", response_model=List[Plan])
def list_plans(
    category: Optional[PlanCategory] = Query(default=None, description="government or private"),
    catalog: PlanCatalog = Depends(get_catalog),
):
    return catalog.plans(category)

@app.get("/plans/{plan_id}", response_model=Plan)
def get_plan_detail(
    plan_id: str = Path(..., description="Catalog plan id, e.g. budget"),
    catalog: PlanCatalog = Depends(get_catalog),
):
    plan = fetch_plan_detail(catalog, plan_id)
    if not plan:
        raise HTTPException(status_code=404, detail=f"Plan '{plan_id}' not found.")
    return plan

@app.post("/recommend", response_model=RecommendationResult)
def recommend(profile: HouseholdProfile, catalog: PlanCatalog = Depends(get_catalog)):
    return recommend_plans(profile.family_size, profile.monthly_income, catalog)

@app.post("/estimate", response_model=EstimateResponse)
def estimate(req: EstimateRequest, catalog: PlanCatalog = Depends(get_catalog)):
    plan = fetch_plan_detail(catalog, req.plan_id)
    if not plan:
        raise HTTPException(status_code=404, detail=f"Plan '{req.plan_id}' not found.")
    return EstimateResponse(plan=plan, breakdown=estimate_costs(plan, req.utilization))

@app.post("/compare", response_model=List[PlanComparison])
def compare(req: CompareRequest, catalog: PlanCatalog = Depends(get_catalog)):
    return rank_plans(catalog, req.utilization, top_k=req.top_k, category=req.category)

@app.post("/wizard", response_model=WizardTurn)
def wizard(req: WizardRequest, catalog: PlanCatalog = Depends(get_catalog)):
    return advance(req.state, req.input, catalog)

def _chat_error(status_code: int, exc: Exception) -> JSONResponse:
    body = ChatError(error=str(exc), user_message=user_facing_error(exc))
    return JSONResponse(status_code=status_code, content=body.model_dump())

@app.post(
    "/chat",
    response_model=ChatResponse,
    responses={402: {"model": ChatError}, 429: {"model": ChatError}, 500: {"model": ChatError}},
)
def chat(
    req: ChatRequest,
    catalog: PlanCatalog = Depends(get_catalog),
    settings: Settings = Depends(get_settings),
    llm: ChatCompletionClient = Depends(get_llm_client),
):
    try:
        message = chat_with_assistant(
            req.messages,
            catalog=catalog,
            settings=settings,
            llm=llm,
            use_search=req.use_search,
        )
    except LLMGatewayError as e:
        return _chat_error(e.status_code, e)
    except LLMConfigurationError as e:
        logger.error("Error in insurance chat: %s", e)
        return _chat_error(500, e)
    return ChatResponse(message=message)
