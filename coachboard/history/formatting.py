# -*- coding: utf-8 -*-
"""Display formatting for change entries (labels and value strings)."""

from __future__ import annotations

import json
from typing import Any, Dict, List, Mapping, Optional

from ..config import settings
from .diff import diff_snapshots
from .models import ChangeEntry, ReadableChange

PLACEHOLDER = "-"
EMPTY_LIST = "none"

TEMPLATE_ID_FIELDS = ("workout_template_id", "nutrition_template_id", "supplement_template_id")

# (key, suffix) in display order.
NUTRITION_PARTS = (
    ("calories", " kcal"),
    ("protein", "g protein"),
    ("carbs", "g carbs"),
    ("fat", "g fat"),
    ("fiber_min", "g fiber"),
)

FIELD_LABELS: Dict[str, str] = {
    "name": "Name",
    "description": "Description",
    "steps_goal": "Steps goal",
    "steps_instructions": "Steps instructions",
    "nutrition_targets": "Nutrition targets",
    "targets": "Targets",
    "eating_order": "Meal order",
    "eating_rules": "Eating rules",
    "supplements": "Supplements",
    "is_public": "Public",
    "workout_template_id": "Workout template",
    "nutrition_template_id": "Nutrition template",
    "supplement_template_id": "Supplement template",
    "start_date": "Start date",
    "strength": "Strength training",
    "cardio": "Cardio training",
    "intervals": "Interval training",
    "custom_attributes": "Additional details",
    "workout_goals": "Workout goals",
    "workout_day_sunday": "Sunday workout",
    "workout_day_monday": "Monday workout",
    "workout_day_tuesday": "Tuesday workout",
    "workout_day_wednesday": "Wednesday workout",
    "workout_day_thursday": "Thursday workout",
    "workout_day_friday": "Friday workout",
    "workout_day_saturday": "Saturday workout",
}


def field_label(field: str) -> str:
    return FIELD_LABELS.get(field, field)


def _json(value: Any) -> str:
    return json.dumps(value, ensure_ascii=False, separators=(",", ":"), default=str)


def _scalar(value: Any) -> str:
    if isinstance(value, float) and value.is_integer():
        return str(int(value))
    return str(value)


def _truncate_id(value: str) -> str:
    limit = settings.template_id_truncate
    return f"{value[:limit]}..." if len(value) > limit else value


def _format_list(values: List[Any]) -> str:
    if not values:
        return EMPTY_LIST
    first = values[0]
    if isinstance(first, Mapping) and "name" in first:
        parts = []
        for item in values:
            if not isinstance(item, Mapping):
                parts.append(_json(item))
                continue
            dosage = item.get("dosage") or PLACEHOLDER
            timing = item.get("timing") or PLACEHOLDER
            parts.append(f"{item.get('name')} ({dosage}, {timing})")
        return ", ".join(parts)
    return _json(values)


def _format_mapping(value: Mapping[str, Any]) -> str:
    if "calories" in value or "protein" in value:
        parts = [
            f"{_scalar(value[key])}{suffix}"
            for key, suffix in NUTRITION_PARTS
            if value.get(key)
        ]
        return ", ".join(parts) if parts else _json(value)
    # custom_attributes that were not expanded by the weekly schedule diff
    if "schema" in value and "data" in value:
        data = value.get("data")
        if isinstance(data, Mapping) and data.get("weeklyWorkout") is not None:
            return "weekly schedule updated"
        return "program details updated"
    return _json(value)


def format_value(
    value: Any,
    field: Optional[str] = None,
    template_names: Optional[Mapping[str, str]] = None,
) -> str:
    if value is None:
        return PLACEHOLDER
    if isinstance(value, bool):
        return "yes" if value else "no"
    if isinstance(value, str) and field in TEMPLATE_ID_FIELDS and template_names is not None:
        name = template_names.get(value)
        if name:
            return name
        return _truncate_id(value)
    if isinstance(value, (list, tuple)):
        return _format_list(list(value))
    if isinstance(value, Mapping):
        return _format_mapping(value)
    return _scalar(value)


def render_changes(
    entries: List[ChangeEntry],
    template_names: Optional[Mapping[str, str]] = None,
) -> List[ReadableChange]:
    return [
        ReadableChange(
            field=e.field,
            label=field_label(e.field),
            old_value=e.old_value,
            new_value=e.new_value,
            old_display=format_value(e.old_value, e.field, template_names),
            new_display=format_value(e.new_value, e.field, template_names),
        )
        for e in entries
    ]


def readable_changes(
    old: Any,
    new: Any,
    template_names: Optional[Mapping[str, str]] = None,
) -> List[ReadableChange]:
    """Diff two snapshots and attach labels and display strings."""
    return render_changes(diff_snapshots(old, new), template_names)
