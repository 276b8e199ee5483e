# -*- coding: utf-8 -*-
"""Weekly summary Pydantic models."""

from __future__ import annotations

from typing import List, Optional

from pydantic import BaseModel, Field


class ProgramTargets(BaseModel):
    calories: Optional[float] = None
    protein: Optional[float] = None
    carbs: Optional[float] = None
    fat: Optional[float] = None
    fiber: Optional[float] = None
    steps: Optional[float] = None


class WeeklyAverages(BaseModel):
    """Per-metric means; None means nothing was logged for that metric."""

    calories: Optional[float] = None
    protein: Optional[float] = None
    carbs: Optional[float] = None
    fat: Optional[float] = None
    fiber: Optional[float] = None
    steps: Optional[float] = None
    weight: Optional[float] = None
    waist: Optional[float] = None
    check_in_count: int = Field(0, ge=0)


class WeeklySummaryForm(BaseModel):
    target_calories: Optional[float] = None
    target_protein: Optional[float] = None
    target_carbs: Optional[float] = None
    target_fat: Optional[float] = None
    target_fiber: Optional[float] = None
    target_steps: Optional[float] = None
    actual_calories_avg: Optional[float] = None
    actual_protein_avg: Optional[float] = None
    actual_carbs_avg: Optional[float] = None
    actual_fat_avg: Optional[float] = None
    actual_fiber_avg: Optional[float] = None
    actual_steps_avg: Optional[float] = None
    weekly_avg_weight: Optional[float] = None
    waist_measurement: Optional[float] = None
    trainer_summary: Optional[str] = None
    action_plan: Optional[str] = None
    updated_steps_goal: Optional[float] = None
    updated_calories_target: Optional[float] = None


class WeeklySummary(WeeklySummaryForm):
    id: str
    client_id: str
    week_start_date: str
    week_end_date: str
    created_at: str
    updated_at: str


class WeeklySummarySaveRequest(WeeklySummaryForm):
    """Trainer input. Unset targets/actuals are filled from the program and check-ins."""

    summary_id: Optional[str] = None


class WeeklyDraftResponse(BaseModel):
    client_id: str
    week_start_date: str
    week_end_date: str
    targets: ProgramTargets
    averages: WeeklyAverages
    form: WeeklySummaryForm


class WeeklySummaryListResponse(BaseModel):
    items: List[WeeklySummary]
