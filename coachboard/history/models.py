# -*- coding: utf-8 -*-
"""History models for API payloads."""

from __future__ import annotations

from typing import Any, Dict, List, Optional

from pydantic import BaseModel, Field


class ChangeEntry(BaseModel):
    field: str
    old_value: Any = None
    new_value: Any = None


class ReadableChange(BaseModel):
    field: str
    label: str
    old_value: Any = None
    new_value: Any = None
    old_display: str
    new_display: str


class DiffRequest(BaseModel):
    old: Optional[Dict[str, Any]] = None
    new: Optional[Dict[str, Any]] = None
    template_names: Dict[str, str] = Field(default_factory=dict)


class DiffResponse(BaseModel):
    changes: List[ReadableChange]


class HistoryItem(BaseModel):
    id: str
    budget_id: str
    change_type: str
    changed_at: str
    changed_by: Optional[str] = None
    snapshot: Optional[Dict[str, Any]] = None
    changes: List[ReadableChange] = Field(default_factory=list)


class HistoryListResponse(BaseModel):
    items: List[HistoryItem]
