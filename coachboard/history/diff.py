# -*- coding: utf-8 -*-
"""Snapshot diffing for program (budget) records.

Given the `old` and `new` state of the same record, produce the ordered list
of fields whose values differ. Field handling is table driven: administrative
fields are skipped and the weekly workout schedule nested in
`custom_attributes` is diffed day by day instead of as one opaque blob.

Fields are enumerated from `new` only, so a field dropped entirely from the
new snapshot is never reported.
"""

from __future__ import annotations

import copy
from typing import Any, Callable, Dict, List, Mapping, Optional

from .models import ChangeEntry

EXCLUDED_FIELDS = ("id", "created_at", "updated_at", "created_by")
SCHEDULE_FIELD = "custom_attributes"
WEEK_DAYS = ("sunday", "monday", "tuesday", "wednesday", "thursday", "friday", "saturday")

GOALS_FIELD = "workout_goals"
DAY_FIELD_PREFIX = "workout_day_"
REST_DAY = "rest day"
NO_EXERCISES = "no exercises"
DETAILS_UPDATED_SUFFIX = " (sets/reps updated)"

# A strategy returns the entries for one field, or None to fall through to the
# generic deep-equality comparison.
FieldStrategy = Callable[[str, Any, Any], Optional[List[ChangeEntry]]]


def deep_equal(a: Any, b: Any) -> bool:
    """Structural equality: dict key order ignored, list order significant.

    Booleans never compare equal to numbers (True != 1), matching how the
    snapshots round-trip through JSON.
    """
    if isinstance(a, bool) or isinstance(b, bool):
        return isinstance(a, bool) and isinstance(b, bool) and a == b
    if isinstance(a, Mapping) and isinstance(b, Mapping):
        if set(a.keys()) != set(b.keys()):
            return False
        return all(deep_equal(a[k], b[k]) for k in a)
    if isinstance(a, (list, tuple)) and isinstance(b, (list, tuple)):
        if len(a) != len(b):
            return False
        return all(deep_equal(x, y) for x, y in zip(a, b))
    if isinstance(a, (Mapping, list, tuple)) or isinstance(b, (Mapping, list, tuple)):
        return False
    return a == b


def _entry(field: str, old: Any, new: Any) -> ChangeEntry:
    return ChangeEntry(field=field, old_value=copy.deepcopy(old), new_value=copy.deepcopy(new))


def weekly_schedule_of(value: Any) -> Optional[Dict[str, Any]]:
    """Extract `data.weeklyWorkout` from a custom_attributes value."""
    if not isinstance(value, Mapping):
        return None
    data = value.get("data")
    if not isinstance(data, Mapping):
        return None
    weekly = data.get("weeklyWorkout")
    if isinstance(weekly, dict):
        return weekly
    # Falsy values mean no schedule; any other value is a schedule without days.
    return {} if weekly else None


def summarize_day(day: Any) -> str:
    if not isinstance(day, Mapping) or not day.get("isActive"):
        return REST_DAY
    exercises = day.get("exercises")
    if not isinstance(exercises, list) or not exercises:
        return NO_EXERCISES
    names = [
        str(e.get("name"))
        for e in exercises
        if isinstance(e, Mapping) and e.get("name")
    ]
    return f"{len(exercises)} exercises: {', '.join(names)}"


def _day_of(weekly: Optional[Mapping[str, Any]], day: str) -> Any:
    if not weekly:
        return None
    days = weekly.get("days")
    if not isinstance(days, Mapping):
        return None
    return days.get(day)


def diff_weekly_schedule(
    old_weekly: Optional[Mapping[str, Any]],
    new_weekly: Optional[Mapping[str, Any]],
) -> List[ChangeEntry]:
    changes: List[ChangeEntry] = []

    old_goals = str((old_weekly or {}).get("generalGoals") or "")
    new_goals = str((new_weekly or {}).get("generalGoals") or "")
    if old_goals != new_goals:
        changes.append(_entry(GOALS_FIELD, old_goals or "-", new_goals or "-"))

    for day in WEEK_DAYS:
        old_day = _day_of(old_weekly, day)
        new_day = _day_of(new_weekly, day)
        if old_day is None and new_day is None:
            continue
        if deep_equal(old_day, new_day):
            continue
        old_summary = summarize_day(old_day)
        new_summary = summarize_day(new_day)
        if old_summary == new_summary:
            new_summary += DETAILS_UPDATED_SUFFIX
        changes.append(_entry(f"{DAY_FIELD_PREFIX}{day}", old_summary, new_summary))

    return changes


def _skip(field: str, old: Any, new: Any) -> Optional[List[ChangeEntry]]:
    return []


def _schedule(field: str, old: Any, new: Any) -> Optional[List[ChangeEntry]]:
    old_weekly = weekly_schedule_of(old)
    new_weekly = weekly_schedule_of(new)
    if old_weekly is None and new_weekly is None:
        return None
    # An empty sub-diff suppresses the field rather than reporting an
    # unexplained custom_attributes change.
    return diff_weekly_schedule(old_weekly, new_weekly)


FIELD_STRATEGIES: Dict[str, FieldStrategy] = {name: _skip for name in EXCLUDED_FIELDS}
FIELD_STRATEGIES[SCHEDULE_FIELD] = _schedule


def diff_snapshots(old: Any, new: Any) -> List[ChangeEntry]:
    """Return the ordered changes between two snapshots of the same record.

    Returns an empty list when either side is missing. Never raises on
    malformed values; the worst case is an entry holding the raw structure.
    """
    if not isinstance(old, Mapping) or not isinstance(new, Mapping):
        return []

    changes: List[ChangeEntry] = []
    for field in new:
        old_value = old.get(field)
        new_value = new[field]
        strategy = FIELD_STRATEGIES.get(field)
        if strategy is not None:
            handled = strategy(field, old_value, new_value)
            if handled is not None:
                changes.extend(handled)
                continue
        if not deep_equal(old_value, new_value):
            changes.append(_entry(str(field), old_value, new_value))
    return changes
