# -*- coding: utf-8 -*-
"""Program endpoints (budgets, templates, assignments)."""

from __future__ import annotations

from typing import Any, Dict, List

from fastapi import APIRouter, HTTPException, Query

from .models import (
    BudgetAssignRequest,
    BudgetCreateRequest,
    BudgetUpdateRequest,
    TemplateCreateRequest,
    TemplateResponse,
)
from .storage import (
    assign_budget,
    create_budget,
    create_template,
    get_active_budget,
    get_budget,
    list_templates,
    update_budget,
)

router = APIRouter(prefix="/api", tags=["Programs"])


@router.post("/templates", response_model=TemplateResponse, summary="Create a workout/nutrition/supplement template")
def create_template_api(request: TemplateCreateRequest):
    return TemplateResponse(**create_template(kind=request.kind, name=request.name))


@router.get("/templates", response_model=List[TemplateResponse], summary="List templates")
def list_templates_api(kind: str | None = Query(default=None, description="workout | nutrition | supplement")):
    return [TemplateResponse(**t) for t in list_templates(kind)]


@router.post("/budgets", summary="Create a program")
def create_budget_api(request: BudgetCreateRequest) -> Dict[str, Any]:
    payload = request.model_dump(mode="json", exclude={"created_by"})
    return create_budget(payload, created_by=request.created_by)


@router.get("/budgets/{budget_id}", summary="Get a program")
def get_budget_api(budget_id: str) -> Dict[str, Any]:
    budget = get_budget(budget_id)
    if not budget:
        raise HTTPException(status_code=404, detail="Budget not found")
    return budget


@router.patch("/budgets/{budget_id}", summary="Update program fields")
def update_budget_api(budget_id: str, request: BudgetUpdateRequest) -> Dict[str, Any]:
    return update_budget(budget_id, request.changes, changed_by=request.changed_by)


@router.post("/budgets/{budget_id}/assign", summary="Make this the client's active program")
def assign_budget_api(budget_id: str, request: BudgetAssignRequest) -> Dict[str, Any]:
    return assign_budget(budget_id=budget_id, client_id=request.client_id)


@router.get("/clients/{client_id}/budget", summary="Get the client's active program")
def get_active_budget_api(client_id: str) -> Dict[str, Any]:
    budget = get_active_budget(client_id)
    if not budget:
        raise HTTPException(status_code=404, detail="No active program")
    return budget
