# -*- coding: utf-8 -*-
"""App database (programs/history/check-ins/weekly summaries): SQLite helpers."""

from __future__ import annotations

import sqlite3
from contextlib import contextmanager
from pathlib import Path
from typing import Iterator


def connect(db_path: Path) -> sqlite3.Connection:
    db_path.parent.mkdir(parents=True, exist_ok=True)
    conn = sqlite3.connect(str(db_path), check_same_thread=False, timeout=10.0)
    conn.row_factory = sqlite3.Row
    conn.execute("PRAGMA foreign_keys = ON;")
    return conn


def init_app_db(db_path: Path) -> None:
    conn = connect(db_path)
    try:
        cur = conn.cursor()
        cur.execute(
            """
            CREATE TABLE IF NOT EXISTS templates (
                id TEXT PRIMARY KEY,
                kind TEXT NOT NULL,
                name TEXT NOT NULL,
                created_at TEXT NOT NULL
            );
            """
        )
        cur.execute(
            """
            CREATE TABLE IF NOT EXISTS budgets (
                id TEXT PRIMARY KEY,
                name TEXT NOT NULL,
                payload_json TEXT NOT NULL,
                created_by TEXT,
                created_at TEXT NOT NULL,
                updated_at TEXT NOT NULL
            );
            """
        )
        cur.execute(
            """
            CREATE TABLE IF NOT EXISTS budget_assignments (
                id TEXT PRIMARY KEY,
                budget_id TEXT NOT NULL,
                client_id TEXT NOT NULL,
                assigned_at TEXT NOT NULL,
                is_active INTEGER NOT NULL DEFAULT 1,
                FOREIGN KEY(budget_id) REFERENCES budgets(id) ON DELETE CASCADE
            );
            """
        )
        cur.execute(
            "CREATE INDEX IF NOT EXISTS idx_budget_assignments_client_active ON budget_assignments(client_id, is_active, assigned_at DESC);"
        )
        cur.execute(
            """
            CREATE TABLE IF NOT EXISTS budget_history (
                id TEXT PRIMARY KEY,
                budget_id TEXT NOT NULL,
                changed_at TEXT NOT NULL,
                changed_by TEXT,
                change_type TEXT NOT NULL,
                changes_json TEXT NOT NULL,
                snapshot_json TEXT,
                FOREIGN KEY(budget_id) REFERENCES budgets(id) ON DELETE CASCADE
            );
            """
        )
        cur.execute(
            "CREATE INDEX IF NOT EXISTS idx_budget_history_budget_changed ON budget_history(budget_id, changed_at DESC);"
        )
        cur.execute(
            """
            CREATE TABLE IF NOT EXISTS daily_check_ins (
                id TEXT PRIMARY KEY,
                customer_id TEXT NOT NULL,
                check_in_date TEXT NOT NULL,
                weight REAL,
                calories_daily REAL,
                protein_daily REAL,
                carbs_daily REAL,
                fat_daily REAL,
                fiber_daily REAL,
                steps_actual INTEGER,
                waist_circumference REAL,
                notes TEXT,
                created_at TEXT NOT NULL,
                updated_at TEXT NOT NULL,
                UNIQUE (customer_id, check_in_date)
            );
            """
        )
        cur.execute(
            """
            CREATE TABLE IF NOT EXISTS weekly_summaries (
                id TEXT PRIMARY KEY,
                client_id TEXT NOT NULL,
                week_start_date TEXT NOT NULL,
                week_end_date TEXT NOT NULL,
                target_calories REAL,
                target_protein REAL,
                target_carbs REAL,
                target_fat REAL,
                target_fiber REAL,
                target_steps REAL,
                actual_calories_avg REAL,
                actual_protein_avg REAL,
                actual_carbs_avg REAL,
                actual_fat_avg REAL,
                actual_fiber_avg REAL,
                actual_steps_avg REAL,
                weekly_avg_weight REAL,
                waist_measurement REAL,
                trainer_summary TEXT,
                action_plan TEXT,
                updated_steps_goal REAL,
                updated_calories_target REAL,
                created_at TEXT NOT NULL,
                updated_at TEXT NOT NULL,
                UNIQUE (client_id, week_start_date)
            );
            """
        )
        cur.execute(
            "CREATE INDEX IF NOT EXISTS idx_weekly_summaries_client_week ON weekly_summaries(client_id, week_start_date DESC);"
        )
        conn.commit()
    finally:
        conn.close()


@contextmanager
def db_conn(db_path: Path) -> Iterator[sqlite3.Connection]:
    conn = connect(db_path)
    try:
        yield conn
        conn.commit()
    finally:
        conn.close()
