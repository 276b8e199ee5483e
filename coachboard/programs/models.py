# -*- coding: utf-8 -*-
"""Program models for API payloads."""

from __future__ import annotations

from typing import Any, Dict, List, Literal, Optional

from pydantic import BaseModel, ConfigDict, Field


TemplateKind = Literal["workout", "nutrition", "supplement"]


class TemplateCreateRequest(BaseModel):
    kind: TemplateKind
    name: str = Field(..., min_length=1)


class TemplateResponse(BaseModel):
    id: str
    kind: TemplateKind
    name: str


class NutritionTargets(BaseModel):
    model_config = ConfigDict(extra="allow")

    calories: Optional[float] = None
    protein: Optional[float] = None
    carbs: Optional[float] = None
    fat: Optional[float] = None
    fiber_min: Optional[float] = None
    water_min: Optional[float] = None


class Supplement(BaseModel):
    model_config = ConfigDict(extra="allow")

    name: str
    dosage: Optional[str] = None
    timing: Optional[str] = None


class BudgetCreateRequest(BaseModel):
    """Program fields; unknown keys are kept and stored as-is."""

    model_config = ConfigDict(extra="allow")

    name: str = Field(..., min_length=1)
    description: Optional[str] = None
    nutrition_template_id: Optional[str] = None
    nutrition_targets: Optional[NutritionTargets] = None
    steps_goal: Optional[int] = None
    steps_instructions: Optional[str] = None
    workout_template_id: Optional[str] = None
    supplement_template_id: Optional[str] = None
    supplements: List[Supplement] = Field(default_factory=list)
    eating_order: Optional[str] = None
    eating_rules: Optional[str] = None
    is_public: bool = False
    custom_attributes: Optional[Dict[str, Any]] = None
    created_by: Optional[str] = None


class BudgetUpdateRequest(BaseModel):
    changes: Dict[str, Any]
    changed_by: Optional[str] = None


class BudgetAssignRequest(BaseModel):
    client_id: str = Field(..., min_length=1)
