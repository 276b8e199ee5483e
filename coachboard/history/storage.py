# -*- coding: utf-8 -*-
"""History read helpers: budget history rows expanded into readable changes."""

from __future__ import annotations

from typing import Any, Dict, List

from ..programs.storage import list_history_rows, list_templates
from .formatting import readable_changes
from .models import HistoryItem


def template_name_lookup() -> Dict[str, str]:
    return {t["id"]: t["name"] for t in list_templates()}


def list_budget_history(budget_id: str) -> List[Dict[str, Any]]:
    names = template_name_lookup()
    items: List[Dict[str, Any]] = []
    for row in list_history_rows(budget_id):
        changes = row.get("changes") or {}
        readable = []
        if row.get("change_type") == "update":
            readable = readable_changes(changes.get("old"), changes.get("new"), names)
        item = HistoryItem(
            id=row["id"],
            budget_id=row["budget_id"],
            change_type=row.get("change_type") or "update",
            changed_at=row.get("changed_at") or "",
            changed_by=row.get("changed_by"),
            snapshot=row.get("snapshot"),
            changes=readable,
        )
        items.append(item.model_dump())
    return items
