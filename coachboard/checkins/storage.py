# -*- coding: utf-8 -*-
"""Check-in storage helpers (SQLite)."""

from __future__ import annotations

from datetime import datetime
from typing import Any, Dict, List
from uuid import uuid4

from ..app_db import db_conn
from ..config import settings
from .models import DailyCheckIn

METRIC_COLUMNS = (
    "weight",
    "calories_daily",
    "protein_daily",
    "carbs_daily",
    "fat_daily",
    "fiber_daily",
    "steps_actual",
    "waist_circumference",
    "notes",
)


def _iso_now() -> str:
    return datetime.utcnow().isoformat()


def _row_to_check_in(row: Dict[str, Any]) -> DailyCheckIn:
    data = {k: row.get(k) for k in METRIC_COLUMNS}
    return DailyCheckIn(customer_id=row["customer_id"], check_in_date=row["check_in_date"], **data)


def upsert_check_in(*, customer_id: str, check_in_date: str, metrics: Dict[str, Any]) -> DailyCheckIn:
    """Insert the day's check-in or overwrite the metrics of the existing one."""
    values = [metrics.get(k) for k in METRIC_COLUMNS]
    now = _iso_now()
    columns = ", ".join(METRIC_COLUMNS)
    placeholders = ", ".join("?" for _ in METRIC_COLUMNS)
    assignments = ", ".join(f"{k} = excluded.{k}" for k in METRIC_COLUMNS)

    with db_conn(settings.app_db_path) as conn:
        conn.execute(
            f"""
            INSERT INTO daily_check_ins (id, customer_id, check_in_date, {columns}, created_at, updated_at)
            VALUES (?, ?, ?, {placeholders}, ?, ?)
            ON CONFLICT (customer_id, check_in_date) DO UPDATE SET {assignments}, updated_at = excluded.updated_at
            """,
            (str(uuid4()), customer_id, check_in_date, *values, now, now),
        )
        row = conn.execute(
            "SELECT * FROM daily_check_ins WHERE customer_id = ? AND check_in_date = ?",
            (customer_id, check_in_date),
        ).fetchone()
    return _row_to_check_in(dict(row))


def list_check_ins(customer_id: str, *, start: str, end: str) -> List[DailyCheckIn]:
    with db_conn(settings.app_db_path) as conn:
        rows = conn.execute(
            """
            SELECT * FROM daily_check_ins
            WHERE customer_id = ? AND check_in_date >= ? AND check_in_date <= ?
            ORDER BY check_in_date ASC
            """,
            (customer_id, start, end),
        ).fetchall()
    return [_row_to_check_in(dict(r)) for r in rows]
