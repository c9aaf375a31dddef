# insurance_assistant/services/plan_catalog.py
from __future__ import annotations

import json
import logging
from pathlib import Path
from types import MappingProxyType
from typing import Iterable, Iterator, List, Mapping, Optional, Union

from ..schemas import Plan, PlanCategory

logger = logging.getLogger(__name__)


class UnknownPlanError(KeyError):
    """Raised when a plan id is not in the catalog."""

    def __init__(self, plan_id: str):
        super().__init__(plan_id)
        self.plan_id = plan_id

    def __str__(self) -> str:
        return f"Plan '{self.plan_id}' not found."


class PlanCatalog(Mapping[str, Plan]):
    """
    Read-only plan id -> Plan table. Iteration follows the order the plans
    were supplied in, which is also the order recommendations are listed in.
    """

    def __init__(self, plans: Iterable[Plan]):
        table = {}
        for plan in plans:
            if plan.id in table:
                raise ValueError(f"Duplicate plan id in catalog: {plan.id}")
            table[plan.id] = plan
        self._plans = MappingProxyType(table)

    def __getitem__(self, plan_id: str) -> Plan:
        try:
            return self._plans[plan_id]
        except KeyError:
            raise UnknownPlanError(plan_id) from None

    def __iter__(self) -> Iterator[str]:
        return iter(self._plans)

    def __len__(self) -> int:
        return len(self._plans)

    def __repr__(self) -> str:
        return f"PlanCatalog({list(self._plans)})"

    def plans(self, category: Optional[PlanCategory] = None) -> List[Plan]:
        if category is None:
            return list(self._plans.values())
        return [p for p in self._plans.values() if p.category == category]


def load_catalog(path: Union[str, Path]) -> PlanCatalog:
    with open(path, "r", encoding="utf-8") as f:
        rows = json.load(f)
    catalog = PlanCatalog(Plan(**row) for row in rows)
    logger.info("Loaded %d plans from %s", len(catalog), path)
    return catalog


def fetch_plan_detail(catalog: PlanCatalog, plan_id: str) -> Plan | None:
    return catalog.get(plan_id)
