"""
Pytest configuration and fixtures
"""
import json
from typing import Callable, List

import httpx
import pytest
from fastapi.testclient import TestClient

from insurance_assistant.config import Settings, get_settings
from insurance_assistant.deps import CATALOG_PATH, get_catalog
from insurance_assistant.main import app, get_llm_client
from insurance_assistant.schemas import Plan, PlanCategory
from insurance_assistant.services.llm_client import ChatCompletionClient
from insurance_assistant.services.plan_catalog import PlanCatalog, load_catalog


def make_plan(plan_id: str, **overrides) -> Plan:
    fields = dict(
        id=plan_id,
        name=plan_id.title(),
        type="Test Coverage",
        category=PlanCategory.private,
        monthly_premium=0,
        co_pay_percent=0,
        deductible=0,
        max_out_of_pocket=0,
        coverage_percent=100,
    )
    fields.update(overrides)
    return Plan(**fields)


def completion(content: str) -> dict:
    return {"choices": [{"message": {"role": "assistant", "content": content}}]}


@pytest.fixture(scope="session")
def catalog() -> PlanCatalog:
    return load_catalog(CATALOG_PATH)


@pytest.fixture
def settings() -> Settings:
    return Settings(
        llm_api_key="test-key",
        llm_base_url="https://gateway.test/v1",
        llm_model="test-model",
        google_api_key=None,
        google_search_engine_id=None,
    )


@pytest.fixture
def search_settings(settings: Settings) -> Settings:
    return settings.model_copy(
        update={"google_api_key": "search-key", "google_search_engine_id": "engine-id"}
    )


@pytest.fixture
def gateway():
    """
    Build a ChatCompletionClient whose HTTP traffic goes to `handler`.
    Every request seen is appended to the returned list.
    """
    def _make(settings: Settings, handler: Callable[[httpx.Request], httpx.Response]):
        seen: List[httpx.Request] = []

        def _record(request: httpx.Request) -> httpx.Response:
            seen.append(request)
            return handler(request)

        http = httpx.Client(transport=httpx.MockTransport(_record))
        return ChatCompletionClient(settings, http=http), seen

    return _make


@pytest.fixture
def client(settings, catalog, gateway):
    """TestClient whose chat gateway answers with a fixed completion."""
    llm, seen = gateway(settings, lambda request: httpx.Response(200, json=completion("Hi there")))

    app.dependency_overrides[get_settings] = lambda: settings
    app.dependency_overrides[get_catalog] = lambda: catalog
    app.dependency_overrides[get_llm_client] = lambda: llm
    try:
        with TestClient(app) as c:
            c.gateway_requests = seen
            yield c
    finally:
        app.dependency_overrides.clear()
        llm.close()


def request_json(request: httpx.Request) -> dict:
    return json.loads(request.content)
