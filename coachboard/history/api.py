# -*- coding: utf-8 -*-
"""History endpoints (program change lists)."""

from __future__ import annotations

from fastapi import APIRouter, HTTPException

from ..programs.storage import get_budget
from .formatting import readable_changes
from .models import DiffRequest, DiffResponse, HistoryItem, HistoryListResponse
from .storage import list_budget_history

router = APIRouter(prefix="/api", tags=["History"])


@router.get("/budgets/{budget_id}/history", response_model=HistoryListResponse, summary="Program change history")
def budget_history(budget_id: str):
    if not get_budget(budget_id):
        raise HTTPException(status_code=404, detail="Budget not found")
    items = list_budget_history(budget_id)
    return HistoryListResponse(items=[HistoryItem(**item) for item in items])


@router.post("/history/diff", response_model=DiffResponse, summary="Diff two program snapshots")
def diff_snapshots_api(request: DiffRequest):
    return DiffResponse(changes=readable_changes(request.old, request.new, request.template_names))
