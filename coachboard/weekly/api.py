# -*- coding: utf-8 -*-
"""Weekly summary endpoints."""

from __future__ import annotations

from fastapi import APIRouter, HTTPException

from ..checkins.storage import list_check_ins
from ..programs.storage import get_active_budget
from .errors import StorageFailure
from .models import (
    WeeklyDraftResponse,
    WeeklySummary,
    WeeklySummaryListResponse,
    WeeklySummarySaveRequest,
)
from .service import WeeklySummaryService
from .storage import WeeklySummaryStore

router = APIRouter(prefix="/api", tags=["Weekly summaries"])

service = WeeklySummaryService(
    WeeklySummaryStore(),
    check_ins=list_check_ins,
    active_program=get_active_budget,
)


def _week(day: str) -> tuple[str, str]:
    try:
        return service.week_of(day)
    except ValueError as exc:
        raise HTTPException(status_code=400, detail=str(exc))


def _unavailable(exc: StorageFailure) -> HTTPException:
    return HTTPException(status_code=503, detail=exc.message)


@router.get(
    "/clients/{client_id}/weekly-summaries",
    response_model=WeeklySummaryListResponse,
    summary="List a client's weekly summaries",
)
def list_weekly_summaries(client_id: str):
    try:
        items = service.list_weekly_summaries(client_id)
    except StorageFailure as exc:
        raise _unavailable(exc)
    return WeeklySummaryListResponse(items=items)


@router.get(
    "/clients/{client_id}/weekly-summaries/{week_day}",
    response_model=WeeklySummary,
    summary="Get the stored summary for the week containing a day",
)
def get_weekly_summary(client_id: str, week_day: str):
    week_start, _ = _week(week_day)
    try:
        summary = service.get_weekly_summary(client_id, week_start)
    except StorageFailure as exc:
        raise _unavailable(exc)
    if not summary:
        raise HTTPException(status_code=404, detail="Weekly summary not found")
    return summary


@router.get(
    "/clients/{client_id}/weekly-summaries/{week_day}/draft",
    response_model=WeeklyDraftResponse,
    summary="Compute targets and averages for a week without saving",
)
def draft_weekly_summary(client_id: str, week_day: str):
    week_start, week_end = _week(week_day)
    try:
        targets, averages = service.compute(client_id, week_start, week_end)
    except StorageFailure as exc:
        raise _unavailable(exc)
    return WeeklyDraftResponse(
        client_id=client_id,
        week_start_date=week_start,
        week_end_date=week_end,
        targets=targets,
        averages=averages,
        form=service.build_form(targets, averages),
    )


@router.put(
    "/clients/{client_id}/weekly-summaries/{week_day}",
    response_model=WeeklySummary,
    summary="Save the weekly summary (created once, then updated)",
)
def save_weekly_summary(client_id: str, week_day: str, request: WeeklySummarySaveRequest):
    week_start, week_end = _week(week_day)
    try:
        targets, averages = service.compute(client_id, week_start, week_end)
        form = service.build_form(targets, averages, request.model_dump(exclude={"summary_id"}))
        return service.save_weekly_summary(client_id, week_start, week_end, form, summary_id=request.summary_id)
    except StorageFailure as exc:
        raise _unavailable(exc)


@router.delete("/weekly-summaries/{summary_id}", summary="Delete a weekly summary")
def delete_weekly_summary(summary_id: str):
    try:
        deleted = service.delete_weekly_summary(summary_id)
    except StorageFailure as exc:
        raise _unavailable(exc)
    return {"status": "ok", "deleted": deleted}
