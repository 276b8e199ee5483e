# -*- coding: utf-8 -*-
"""Weekly summary storage (SQLite).

The store offers point lookups by id and by natural key (client_id,
week_start_date), updates by either, and an insert that reports a lost race
on the natural key as `TransientConflict`. Every other sqlite error is raised
as `StorageFailure`.
"""

from __future__ import annotations

import logging
import sqlite3
from contextlib import contextmanager
from datetime import datetime
from pathlib import Path
from typing import Any, Dict, Iterator, List, Mapping, Optional
from uuid import uuid4

from ..app_db import db_conn
from ..config import settings
from .errors import StorageFailure, TransientConflict
from .models import WeeklySummary, WeeklySummaryForm

logger = logging.getLogger(__name__)

WRITABLE_FIELDS = ("week_end_date",) + tuple(WeeklySummaryForm.model_fields.keys())


def _iso_now() -> str:
    return datetime.utcnow().isoformat()


def _is_key_conflict(exc: sqlite3.IntegrityError) -> bool:
    msg = str(exc)
    return "UNIQUE constraint failed" in msg and "week_start_date" in msg


class WeeklySummaryStore:
    def __init__(self, db_path: Optional[Path] = None) -> None:
        self._db_path = db_path

    @property
    def db_path(self) -> Path:
        return self._db_path or settings.app_db_path

    @contextmanager
    def _conn(self, operation: str) -> Iterator[sqlite3.Connection]:
        try:
            with db_conn(self.db_path) as conn:
                yield conn
        except sqlite3.Error as exc:
            logger.error("Weekly summary %s failed: %s", operation, exc)
            raise StorageFailure(operation, str(exc)) from exc

    @staticmethod
    def _row(row: Optional[sqlite3.Row]) -> Optional[WeeklySummary]:
        return WeeklySummary.model_validate(dict(row)) if row else None

    @staticmethod
    def _values(fields: Mapping[str, Any]) -> Dict[str, Any]:
        return {k: fields.get(k) for k in WRITABLE_FIELDS if k in fields}

    def get_by_id(self, summary_id: str) -> Optional[WeeklySummary]:
        with self._conn("get_by_id") as conn:
            row = conn.execute("SELECT * FROM weekly_summaries WHERE id = ?", (summary_id,)).fetchone()
        return self._row(row)

    def find_by_key(self, client_id: str, week_start: str) -> Optional[WeeklySummary]:
        with self._conn("find_by_key") as conn:
            row = conn.execute(
                "SELECT * FROM weekly_summaries WHERE client_id = ? AND week_start_date = ?",
                (client_id, week_start),
            ).fetchone()
        return self._row(row)

    def list_for_client(self, client_id: str) -> List[WeeklySummary]:
        with self._conn("list_for_client") as conn:
            rows = conn.execute(
                "SELECT * FROM weekly_summaries WHERE client_id = ? ORDER BY week_start_date DESC",
                (client_id,),
            ).fetchall()
        return [WeeklySummary.model_validate(dict(r)) for r in rows]

    def _update(self, operation: str, where: str, params: tuple, fields: Mapping[str, Any]) -> Optional[WeeklySummary]:
        values = self._values(fields)
        values["updated_at"] = _iso_now()
        assignments = ", ".join(f"{k} = ?" for k in values)
        with self._conn(operation) as conn:
            cur = conn.execute(
                f"UPDATE weekly_summaries SET {assignments} WHERE {where}",
                (*values.values(), *params),
            )
            if cur.rowcount == 0:
                return None
            row = conn.execute(f"SELECT * FROM weekly_summaries WHERE {where}", params).fetchone()
        return self._row(row)

    def update_by_id(
        self, summary_id: str, client_id: str, week_start: str, fields: Mapping[str, Any]
    ) -> Optional[WeeklySummary]:
        """Update the row with this id if it belongs to (client_id, week_start).

        An id owned by another client or week matches nothing, like a deleted one.
        """
        return self._update(
            "update_by_id",
            "id = ? AND client_id = ? AND week_start_date = ?",
            (summary_id, client_id, week_start),
            fields,
        )

    def update_by_key(self, client_id: str, week_start: str, fields: Mapping[str, Any]) -> Optional[WeeklySummary]:
        """Update the row for (client_id, week_start); None when no row matched."""
        return self._update(
            "update_by_key",
            "client_id = ? AND week_start_date = ?",
            (client_id, week_start),
            fields,
        )

    def insert(self, client_id: str, week_start: str, fields: Mapping[str, Any]) -> WeeklySummary:
        values = self._values(fields)
        now = _iso_now()
        values.update(
            {
                "id": str(uuid4()),
                "client_id": client_id,
                "week_start_date": week_start,
                "created_at": now,
                "updated_at": now,
            }
        )
        columns = ", ".join(values)
        placeholders = ", ".join("?" for _ in values)
        try:
            with db_conn(self.db_path) as conn:
                conn.execute(
                    f"INSERT INTO weekly_summaries ({columns}) VALUES ({placeholders})",
                    tuple(values.values()),
                )
                row = conn.execute("SELECT * FROM weekly_summaries WHERE id = ?", (values["id"],)).fetchone()
        except sqlite3.IntegrityError as exc:
            if _is_key_conflict(exc):
                raise TransientConflict(client_id, week_start) from exc
            logger.error("Weekly summary insert failed: %s", exc)
            raise StorageFailure("insert", str(exc)) from exc
        except sqlite3.Error as exc:
            logger.error("Weekly summary insert failed: %s", exc)
            raise StorageFailure("insert", str(exc)) from exc
        return self._row(row)

    def delete(self, summary_id: str) -> bool:
        """Remove the row; deleting a missing id is a no-op returning False."""
        with self._conn("delete") as conn:
            cur = conn.execute("DELETE FROM weekly_summaries WHERE id = ?", (summary_id,))
        return cur.rowcount > 0
