# -*- coding: utf-8 -*-
"""Check-in endpoints."""

from __future__ import annotations

from fastapi import APIRouter, Query

from .models import CheckInListResponse, CheckInUpsertRequest, DailyCheckIn
from .storage import list_check_ins, upsert_check_in

router = APIRouter(prefix="/api/clients", tags=["Check-ins"])


@router.put("/{client_id}/check-ins", response_model=DailyCheckIn, summary="Record the client's check-in for a day")
def upsert_check_in_api(client_id: str, request: CheckInUpsertRequest):
    metrics = request.model_dump(exclude={"check_in_date"})
    return upsert_check_in(customer_id=client_id, check_in_date=request.check_in_date, metrics=metrics)


@router.get("/{client_id}/check-ins", response_model=CheckInListResponse, summary="List check-ins in a date range")
def list_check_ins_api(
    client_id: str,
    start: str = Query(..., description="YYYY-MM-DD"),
    end: str = Query(..., description="YYYY-MM-DD"),
):
    items = list_check_ins(client_id, start=start, end=end)
    return CheckInListResponse(customer_id=client_id, start=start, end=end, items=items)
