# -*- coding: utf-8 -*-
"""Check-in Pydantic models."""

from __future__ import annotations

from typing import List, Optional

from pydantic import BaseModel, Field


class DailyCheckIn(BaseModel):
    customer_id: str
    check_in_date: str = Field(..., description="YYYY-MM-DD")
    weight: Optional[float] = None
    calories_daily: Optional[float] = None
    protein_daily: Optional[float] = None
    carbs_daily: Optional[float] = None
    fat_daily: Optional[float] = None
    fiber_daily: Optional[float] = None
    steps_actual: Optional[int] = None
    waist_circumference: Optional[float] = None
    notes: Optional[str] = None


class CheckInUpsertRequest(BaseModel):
    check_in_date: str = Field(..., pattern=r"^\d{4}-\d{2}-\d{2}$", description="YYYY-MM-DD")
    weight: Optional[float] = Field(None, ge=0)
    calories_daily: Optional[float] = Field(None, ge=0)
    protein_daily: Optional[float] = Field(None, ge=0)
    carbs_daily: Optional[float] = Field(None, ge=0)
    fat_daily: Optional[float] = Field(None, ge=0)
    fiber_daily: Optional[float] = Field(None, ge=0)
    steps_actual: Optional[int] = Field(None, ge=0)
    waist_circumference: Optional[float] = Field(None, ge=0)
    notes: Optional[str] = None


class CheckInListResponse(BaseModel):
    customer_id: str
    start: str
    end: str
    items: List[DailyCheckIn]
