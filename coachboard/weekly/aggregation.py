# -*- coding: utf-8 -*-
"""Weekly aggregation of daily check-ins and target resolution."""

from __future__ import annotations

import math
from dataclasses import dataclass
from datetime import date, datetime, timedelta
from typing import Any, Dict, Iterable, Mapping, Optional, Tuple

from .models import ProgramTargets, WeeklyAverages

# average field -> (check-in field, decimals)
METRICS: Dict[str, Tuple[str, int]] = {
    "calories": ("calories_daily", 1),
    "protein": ("protein_daily", 1),
    "carbs": ("carbs_daily", 1),
    "fat": ("fat_daily", 1),
    "fiber": ("fiber_daily", 1),
    "steps": ("steps_actual", 0),
    "weight": ("weight", 2),
    "waist": ("waist_circumference", 1),
}


def _parse_date(value: Any) -> Optional[date]:
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    if isinstance(value, str) and len(value) >= 10:
        try:
            return date.fromisoformat(value[:10])
        except ValueError:
            return None
    return None


def _get(record: Any, name: str) -> Any:
    if isinstance(record, Mapping):
        return record.get(name)
    return getattr(record, name, None)


def _round_half_up(value: float, decimals: int) -> float:
    factor = 10 ** decimals
    return math.floor(value * factor + 0.5) / factor


def week_bounds(day: Any, week_starts_on: str = "sunday") -> Tuple[date, date]:
    """Return the first and last calendar day of the week containing `day`."""
    d = _parse_date(day)
    if d is None:
        raise ValueError(f"Invalid date: {day!r}")
    offset = d.weekday() if week_starts_on == "monday" else (d.weekday() + 1) % 7
    start = d - timedelta(days=offset)
    return start, start + timedelta(days=6)


@dataclass
class _Mean:
    total: float = 0.0
    count: int = 0

    def add(self, value: float) -> None:
        self.total += value
        self.count += 1

    def result(self, decimals: int) -> Optional[float]:
        if not self.count:
            return None
        return _round_half_up(self.total / self.count, decimals)


def compute_weekly_averages(
    check_ins: Iterable[Any],
    week_start: Any = None,
    week_end: Any = None,
) -> WeeklyAverages:
    """Average each metric over the check-ins that logged it.

    Check-ins without a date, or dated outside [week_start, week_end] when
    bounds are given, are ignored. Each metric has its own denominator and a
    metric nobody logged averages to None, never 0.
    """
    start = _parse_date(week_start)
    end = _parse_date(week_end)
    means = {name: _Mean() for name in METRICS}
    counted = 0

    for ci in check_ins:
        day = _parse_date(_get(ci, "check_in_date"))
        if day is None:
            continue
        if (start and day < start) or (end and day > end):
            continue
        counted += 1
        for name, (source, _) in METRICS.items():
            value = _get(ci, source)
            if value is None or isinstance(value, bool):
                continue
            try:
                means[name].add(float(value))
            except (TypeError, ValueError):
                continue

    values = {name: means[name].result(decimals) for name, (_, decimals) in METRICS.items()}
    return WeeklyAverages(check_in_count=counted, **values)


def _target(value: Any) -> Optional[float]:
    # Unset targets are stored as 0 or missing; both read as "no target".
    if value is None or isinstance(value, bool):
        return None
    try:
        number = float(value)
    except (TypeError, ValueError):
        return None
    return number or None


def resolve_targets(budget: Optional[Mapping[str, Any]]) -> ProgramTargets:
    """Targets of the client's active program."""
    if not budget:
        return ProgramTargets()
    steps = _target(budget.get("steps_goal"))
    nutrition = budget.get("nutrition_targets")
    if not isinstance(nutrition, Mapping):
        return ProgramTargets(steps=steps)
    return ProgramTargets(
        calories=_target(nutrition.get("calories")),
        protein=_target(nutrition.get("protein")),
        carbs=_target(nutrition.get("carbs")),
        fat=_target(nutrition.get("fat")),
        fiber=_target(nutrition.get("fiber_min")),
        steps=steps,
    )
