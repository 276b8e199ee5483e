# -*- coding: utf-8 -*-
"""Program storage helpers (SQLite).

Every budget write records a `budget_history` row carrying the full old and
new snapshots, which the history module later diffs for display.
"""

from __future__ import annotations

import json
import logging
from datetime import datetime
from typing import Any, Dict, List, Optional
from uuid import uuid4

from fastapi import HTTPException

from ..app_db import db_conn
from ..config import settings
from ..history.diff import EXCLUDED_FIELDS, deep_equal

logger = logging.getLogger(__name__)

_COLUMN_FIELDS = ("id", "name", "created_by", "created_at", "updated_at")


def _iso_now() -> str:
    return datetime.utcnow().isoformat()


def _loads(raw: Optional[str]) -> Dict[str, Any]:
    if not raw:
        return {}
    try:
        value = json.loads(raw)
    except ValueError:
        return {}
    return value if isinstance(value, dict) else {}


def _row_to_budget(row: Dict[str, Any]) -> Dict[str, Any]:
    snapshot: Dict[str, Any] = {"id": row.get("id"), "name": row.get("name")}
    snapshot.update(_loads(row.get("payload_json")))
    snapshot["created_by"] = row.get("created_by")
    snapshot["created_at"] = row.get("created_at")
    snapshot["updated_at"] = row.get("updated_at")
    return snapshot


def _payload_of(snapshot: Dict[str, Any]) -> str:
    payload = {k: v for k, v in snapshot.items() if k not in _COLUMN_FIELDS}
    return json.dumps(payload, ensure_ascii=False)


def has_tracked_changes(old: Dict[str, Any], new: Dict[str, Any]) -> bool:
    keys = (set(old) | set(new)) - set(EXCLUDED_FIELDS)
    return any(not deep_equal(old.get(k), new.get(k)) for k in keys)


def _insert_history(
    conn,
    *,
    budget_id: str,
    change_type: str,
    changes: Dict[str, Any],
    snapshot: Dict[str, Any],
    changed_by: Optional[str],
    changed_at: str,
) -> None:
    conn.execute(
        """
        INSERT INTO budget_history (id, budget_id, changed_at, changed_by, change_type, changes_json, snapshot_json)
        VALUES (?, ?, ?, ?, ?, ?, ?)
        """,
        (
            str(uuid4()),
            budget_id,
            changed_at,
            changed_by,
            change_type,
            json.dumps(changes, ensure_ascii=False),
            json.dumps(snapshot, ensure_ascii=False),
        ),
    )


def create_template(*, kind: str, name: str) -> Dict[str, Any]:
    template_id = str(uuid4())
    with db_conn(settings.app_db_path) as conn:
        conn.execute(
            "INSERT INTO templates (id, kind, name, created_at) VALUES (?, ?, ?, ?)",
            (template_id, kind, name, _iso_now()),
        )
    return {"id": template_id, "kind": kind, "name": name}


def list_templates(kind: Optional[str] = None) -> List[Dict[str, Any]]:
    sql = "SELECT id, kind, name FROM templates"
    params: list[Any] = []
    if kind:
        sql += " WHERE kind = ?"
        params.append(kind)
    sql += " ORDER BY name ASC"
    with db_conn(settings.app_db_path) as conn:
        rows = conn.execute(sql, params).fetchall()
    return [dict(r) for r in rows]


def create_budget(payload: Dict[str, Any], *, created_by: Optional[str] = None) -> Dict[str, Any]:
    budget_id = str(uuid4())
    now = _iso_now()
    snapshot = dict(payload)
    snapshot.update({"id": budget_id, "created_by": created_by, "created_at": now, "updated_at": now})

    with db_conn(settings.app_db_path) as conn:
        conn.execute(
            """
            INSERT INTO budgets (id, name, payload_json, created_by, created_at, updated_at)
            VALUES (?, ?, ?, ?, ?, ?)
            """,
            (budget_id, snapshot.get("name") or "", _payload_of(snapshot), created_by, now, now),
        )
        _insert_history(
            conn,
            budget_id=budget_id,
            change_type="create",
            changes={},
            snapshot=snapshot,
            changed_by=created_by,
            changed_at=now,
        )
        row = conn.execute("SELECT * FROM budgets WHERE id = ?", (budget_id,)).fetchone()

    logger.info("Created budget %s", budget_id)
    return _row_to_budget(dict(row))


def get_budget(budget_id: str) -> Optional[Dict[str, Any]]:
    with db_conn(settings.app_db_path) as conn:
        row = conn.execute("SELECT * FROM budgets WHERE id = ?", (budget_id,)).fetchone()
    return _row_to_budget(dict(row)) if row else None


def update_budget(
    budget_id: str,
    changes: Dict[str, Any],
    *,
    changed_by: Optional[str] = None,
) -> Dict[str, Any]:
    with db_conn(settings.app_db_path) as conn:
        row = conn.execute("SELECT * FROM budgets WHERE id = ?", (budget_id,)).fetchone()
        if not row:
            raise HTTPException(status_code=404, detail="Budget not found")

        old = _row_to_budget(dict(row))
        new = dict(old)
        for key, value in changes.items():
            if key in EXCLUDED_FIELDS:
                continue
            new[key] = value

        if not has_tracked_changes(old, new):
            return old

        now = _iso_now()
        new["updated_at"] = now
        conn.execute(
            "UPDATE budgets SET name = ?, payload_json = ?, updated_at = ? WHERE id = ?",
            (new.get("name") or "", _payload_of(new), now, budget_id),
        )
        _insert_history(
            conn,
            budget_id=budget_id,
            change_type="update",
            changes={"old": old, "new": new},
            snapshot=new,
            changed_by=changed_by,
            changed_at=now,
        )
        updated = conn.execute("SELECT * FROM budgets WHERE id = ?", (budget_id,)).fetchone()

    logger.info("Updated budget %s", budget_id)
    return _row_to_budget(dict(updated))


def assign_budget(*, budget_id: str, client_id: str) -> Dict[str, Any]:
    assignment_id = str(uuid4())
    now = _iso_now()
    with db_conn(settings.app_db_path) as conn:
        exists = conn.execute("SELECT 1 FROM budgets WHERE id = ?", (budget_id,)).fetchone()
        if not exists:
            raise HTTPException(status_code=404, detail="Budget not found")
        # One active program per client.
        conn.execute(
            "UPDATE budget_assignments SET is_active = 0 WHERE client_id = ? AND is_active = 1",
            (client_id,),
        )
        conn.execute(
            """
            INSERT INTO budget_assignments (id, budget_id, client_id, assigned_at, is_active)
            VALUES (?, ?, ?, ?, 1)
            """,
            (assignment_id, budget_id, client_id, now),
        )
    return {"id": assignment_id, "budget_id": budget_id, "client_id": client_id, "assigned_at": now, "is_active": True}


def get_active_budget(client_id: str) -> Optional[Dict[str, Any]]:
    with db_conn(settings.app_db_path) as conn:
        row = conn.execute(
            """
            SELECT b.* FROM budget_assignments a
            JOIN budgets b ON b.id = a.budget_id
            WHERE a.client_id = ? AND a.is_active = 1
            ORDER BY a.assigned_at DESC
            LIMIT 1
            """,
            (client_id,),
        ).fetchone()
    return _row_to_budget(dict(row)) if row else None


def list_history_rows(budget_id: str) -> List[Dict[str, Any]]:
    with db_conn(settings.app_db_path) as conn:
        rows = conn.execute(
            "SELECT * FROM budget_history WHERE budget_id = ? ORDER BY changed_at DESC, rowid DESC",
            (budget_id,),
        ).fetchall()
    out: List[Dict[str, Any]] = []
    for row in rows:
        r = dict(row)
        out.append(
            {
                "id": r.get("id"),
                "budget_id": r.get("budget_id"),
                "changed_at": r.get("changed_at"),
                "changed_by": r.get("changed_by"),
                "change_type": r.get("change_type"),
                "changes": _loads(r.get("changes_json")),
                "snapshot": _loads(r.get("snapshot_json")) or None,
            }
        )
    return out
