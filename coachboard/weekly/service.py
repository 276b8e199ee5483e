# -*- coding: utf-8 -*-
"""Weekly summary service: compute the week, prefill the form, persist once per week.

Saving walks a fixed sequence of attempts, each "not found" or "conflict"
outcome selecting the next one:

    UPDATE_BY_ID     id from the caller or from the last save of this week
    UPDATE_BY_KEY    row matched by (client_id, week_start_date)
    INSERT           no row yet
    CONFLICT_UPDATE  insert lost the race; re-read the winner and update it

Two saves racing for the same week therefore end in one row (last write
wins), and a stale or deleted id falls back to the natural key.
"""

from __future__ import annotations

import logging
import sqlite3
import threading
from datetime import date
from enum import Enum
from typing import Any, Callable, Dict, Iterable, List, Mapping, Optional, Tuple

from ..config import settings
from .aggregation import compute_weekly_averages, resolve_targets, week_bounds
from .errors import StorageFailure, TransientConflict
from .models import ProgramTargets, WeeklyAverages, WeeklySummary, WeeklySummaryForm
from .storage import WeeklySummaryStore

logger = logging.getLogger(__name__)

CheckInReader = Callable[..., Iterable[Any]]
ProgramReader = Callable[[str], Optional[Mapping[str, Any]]]


class SaveStep(str, Enum):
    UPDATE_BY_ID = "update_by_id"
    UPDATE_BY_KEY = "update_by_key"
    INSERT = "insert"
    CONFLICT_UPDATE = "conflict_update"


class LastSavedWeekCache:
    """Remembers the last (client_id, week_start) saved and its row id."""

    def __init__(self) -> None:
        self._lock = threading.Lock()
        self._key: Optional[Tuple[str, str]] = None
        self._summary_id: Optional[str] = None

    def remember(self, client_id: str, week_start: str, summary_id: str) -> None:
        with self._lock:
            self._key = (client_id, week_start)
            self._summary_id = summary_id

    def lookup(self, client_id: str, week_start: str) -> Optional[str]:
        with self._lock:
            if self._key == (client_id, week_start):
                return self._summary_id
            return None

    def matches(self, client_id: str, week_start: str) -> bool:
        with self._lock:
            return self._key == (client_id, week_start)

    def forget(self, summary_id: str) -> None:
        with self._lock:
            if self._summary_id == summary_id:
                self._key = None
                self._summary_id = None

    def invalidate(self) -> None:
        with self._lock:
            self._key = None
            self._summary_id = None


def _iso(value: Any) -> str:
    return value.isoformat() if isinstance(value, date) else str(value)[:10]


class WeeklySummaryService:
    def __init__(
        self,
        store: WeeklySummaryStore,
        *,
        check_ins: Optional[CheckInReader] = None,
        active_program: Optional[ProgramReader] = None,
        cache: Optional[LastSavedWeekCache] = None,
    ) -> None:
        self.store = store
        self.cache = cache or LastSavedWeekCache()
        self._check_ins = check_ins
        self._active_program = active_program
        # Steps taken by the most recent save, in order.
        self.last_attempts: List[SaveStep] = []

    # -- context -----------------------------------------------------------

    def switch_context(self, client_id: str, week_start: Any) -> None:
        """Drop the cached save when the caller moves to another client or week."""
        if not self.cache.matches(client_id, _iso(week_start)):
            self.cache.invalidate()

    # -- compute -----------------------------------------------------------

    def week_of(self, day: Any) -> Tuple[str, str]:
        start, end = week_bounds(day, settings.week_starts_on)
        return start.isoformat(), end.isoformat()

    def compute(self, client_id: str, week_start: str, week_end: str) -> Tuple[ProgramTargets, WeeklyAverages]:
        check_ins: Iterable[Any] = []
        budget: Optional[Mapping[str, Any]] = None
        try:
            if self._check_ins is not None:
                check_ins = list(self._check_ins(client_id, start=week_start, end=week_end))
        except sqlite3.Error as exc:
            logger.error("Check-in read for %s failed: %s", client_id, exc)
            raise StorageFailure("read_check_ins", str(exc)) from exc
        try:
            if self._active_program is not None:
                budget = self._active_program(client_id)
        except sqlite3.Error as exc:
            logger.error("Active program read for %s failed: %s", client_id, exc)
            raise StorageFailure("read_active_program", str(exc)) from exc
        return resolve_targets(budget), compute_weekly_averages(check_ins, week_start, week_end)

    @staticmethod
    def build_form(
        targets: ProgramTargets,
        averages: WeeklyAverages,
        overrides: Optional[Mapping[str, Any]] = None,
    ) -> WeeklySummaryForm:
        """Prefill a form from targets and averages; non-null overrides win."""
        form: Dict[str, Any] = {
            "target_calories": targets.calories,
            "target_protein": targets.protein,
            "target_carbs": targets.carbs,
            "target_fat": targets.fat,
            "target_fiber": targets.fiber,
            "target_steps": targets.steps,
            "actual_calories_avg": averages.calories,
            "actual_protein_avg": averages.protein,
            "actual_carbs_avg": averages.carbs,
            "actual_fat_avg": averages.fat,
            "actual_fiber_avg": averages.fiber,
            "actual_steps_avg": averages.steps,
            "weekly_avg_weight": averages.weight,
            "waist_measurement": averages.waist,
            "updated_steps_goal": targets.steps,
            "updated_calories_target": targets.calories,
        }
        for key, value in (overrides or {}).items():
            if key in WeeklySummaryForm.model_fields and value is not None:
                form[key] = value
        return WeeklySummaryForm(**form)

    # -- persist -----------------------------------------------------------

    def save_weekly_summary(
        self,
        client_id: str,
        week_start: Any,
        week_end: Any,
        form: WeeklySummaryForm | Mapping[str, Any],
        summary_id: Optional[str] = None,
    ) -> WeeklySummary:
        week_start = _iso(week_start)
        week_end = _iso(week_end)
        self.switch_context(client_id, week_start)

        if isinstance(form, WeeklySummaryForm):
            fields: Dict[str, Any] = form.model_dump()
        else:
            fields = WeeklySummaryForm.model_validate(dict(form)).model_dump()
        fields["week_end_date"] = week_end

        known_id = summary_id or self.cache.lookup(client_id, week_start)
        step: Optional[SaveStep] = SaveStep.UPDATE_BY_ID if known_id else SaveStep.UPDATE_BY_KEY
        self.last_attempts = []
        saved: Optional[WeeklySummary] = None

        while step is not None:
            self.last_attempts.append(step)
            logger.debug("Weekly summary save %s/%s: %s", client_id, week_start, step.value)
            saved, step = self._attempt(step, client_id, week_start, fields, known_id)

        if saved is None:
            raise StorageFailure("save", f"no row for {client_id} / {week_start} after conflict")
        self.cache.remember(client_id, week_start, saved.id)
        return saved

    def _attempt(
        self,
        step: SaveStep,
        client_id: str,
        week_start: str,
        fields: Mapping[str, Any],
        known_id: Optional[str],
    ) -> Tuple[Optional[WeeklySummary], Optional[SaveStep]]:
        """Run one step; return (saved row, None) or (None, next step)."""
        if step is SaveStep.UPDATE_BY_ID:
            saved = self.store.update_by_id(known_id, client_id, week_start, fields) if known_id else None
            return (saved, None) if saved else (None, SaveStep.UPDATE_BY_KEY)

        if step is SaveStep.UPDATE_BY_KEY:
            saved = self.store.update_by_key(client_id, week_start, fields)
            return (saved, None) if saved else (None, SaveStep.INSERT)

        if step is SaveStep.INSERT:
            try:
                return self.store.insert(client_id, week_start, fields), None
            except TransientConflict:
                logger.info("Weekly summary %s/%s created concurrently; updating it", client_id, week_start)
                return None, SaveStep.CONFLICT_UPDATE

        existing = self.store.find_by_key(client_id, week_start)
        if existing is None:
            return None, None
        return self.store.update_by_id(existing.id, client_id, week_start, fields), None

    def delete_weekly_summary(self, summary_id: str) -> bool:
        deleted = self.store.delete(summary_id)
        self.cache.forget(summary_id)
        return deleted

    # -- reads -------------------------------------------------------------

    def get_weekly_summary(self, client_id: str, week_start: Any) -> Optional[WeeklySummary]:
        return self.store.find_by_key(client_id, _iso(week_start))

    def list_weekly_summaries(self, client_id: str) -> List[WeeklySummary]:
        return self.store.list_for_client(client_id)
