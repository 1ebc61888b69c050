from __future__ import annotations

import os
import sqlite3
from contextlib import contextmanager
from dataclasses import dataclass
from datetime import datetime
from typing import Generator, List, Optional

from .models import TaskEntity
from .repositories import StoreError, TaskStore


@dataclass(frozen=True)
class _Cols:
    table: str = "tasks"
    id: str = "id"
    title: str = "title"
    description: str = "description"
    completed: str = "completed"
    created_at: str = "created_at"
    updated_at: str = "updated_at"


_COLS = _Cols()

# SQLite INTEGER is a signed 64-bit value; larger ids cannot be stored.
_MAX_ID = 2**63 - 1
_MIN_ID = -(2**63)


def _storable_id(task_id: int) -> bool:
    return _MIN_ID <= task_id <= _MAX_ID


class SQLiteTaskStore(TaskStore):
    """
    Lightweight SQLite store implementing the TaskStore interface.
    """

    def __init__(self, db_path: str) -> None:
        os.makedirs(os.path.dirname(db_path) or ".", exist_ok=True)
        self._db_path = db_path
        self._init_db()

    @contextmanager
    def _conn(self) -> Generator[sqlite3.Connection, None, None]:
        try:
            conn = sqlite3.connect(self._db_path)
        except sqlite3.Error as e:
            raise StoreError(f"cannot open task database {self._db_path}") from e
        conn.row_factory = sqlite3.Row
        try:
            yield conn
            conn.commit()
        except sqlite3.Error as e:
            # Closing without commit discards the pending transaction
            raise StoreError(str(e)) from e
        finally:
            conn.close()

    def _init_db(self) -> None:
        with self._conn() as conn:
            conn.execute(
                f"""
                CREATE TABLE IF NOT EXISTS {_COLS.table} (
                    {_COLS.id} INTEGER PRIMARY KEY AUTOINCREMENT,
                    {_COLS.title} TEXT NOT NULL,
                    {_COLS.description} TEXT NULL,
                    {_COLS.completed} INTEGER NOT NULL DEFAULT 0,
                    {_COLS.created_at} TEXT NOT NULL,
                    {_COLS.updated_at} TEXT NOT NULL
                )
                """
            )
            conn.execute(
                f"CREATE INDEX IF NOT EXISTS idx_{_COLS.table}_completed ON {_COLS.table}({_COLS.completed})"
            )

    def _row_to_entity(self, row: sqlite3.Row) -> TaskEntity:
        return {
            "id": int(row[_COLS.id]),
            "title": str(row[_COLS.title]),
            "description": row[_COLS.description],
            "completed": bool(row[_COLS.completed]),
            "created_at": datetime.fromisoformat(row[_COLS.created_at]),
            "updated_at": datetime.fromisoformat(row[_COLS.updated_at]),
        }

    def _select_one(self, conn: sqlite3.Connection, task_id: int) -> Optional[sqlite3.Row]:
        if not _storable_id(task_id):
            return None
        return conn.execute(f"SELECT * FROM {_COLS.table} WHERE {_COLS.id} = ?", (task_id,)).fetchone()

    def find_all(self) -> List[TaskEntity]:
        with self._conn() as conn:
            rows = conn.execute(f"SELECT * FROM {_COLS.table} ORDER BY {_COLS.id}").fetchall()
            return [self._row_to_entity(r) for r in rows]

    def find_by_id(self, task_id: int) -> Optional[TaskEntity]:
        with self._conn() as conn:
            row = self._select_one(conn, task_id)
            return self._row_to_entity(row) if row else None

    def find_by_completed(self, completed: bool) -> List[TaskEntity]:
        with self._conn() as conn:
            rows = conn.execute(
                f"SELECT * FROM {_COLS.table} WHERE {_COLS.completed} = ? ORDER BY {_COLS.id}",
                (1 if completed else 0,),
            ).fetchall()
            return [self._row_to_entity(r) for r in rows]

    def save(self, task: TaskEntity) -> TaskEntity:
        if task["id"] is not None and not _storable_id(task["id"]):
            raise StoreError(f"task id {task['id']} is outside the SQLite integer range")
        now = datetime.now().isoformat()
        completed = 1 if task["completed"] else 0
        with self._conn() as conn:
            existing = self._select_one(conn, task["id"]) if task["id"] is not None else None
            if existing is not None:
                conn.execute(
                    f"""
                    UPDATE {_COLS.table}
                    SET {_COLS.title} = ?, {_COLS.description} = ?, {_COLS.completed} = ?,
                        {_COLS.updated_at} = ?
                    WHERE {_COLS.id} = ?
                    """,
                    (task["title"], task["description"], completed, now, task["id"]),
                )
                task_id = task["id"]
            else:
                cur = conn.execute(
                    f"""
                    INSERT INTO {_COLS.table} ({_COLS.id}, {_COLS.title}, {_COLS.description},
                        {_COLS.completed}, {_COLS.created_at}, {_COLS.updated_at})
                    VALUES (?, ?, ?, ?, ?, ?)
                    """,
                    (task["id"], task["title"], task["description"], completed, now, now),
                )
                task_id = cur.lastrowid
            row = self._select_one(conn, task_id)
            assert row is not None
            return self._row_to_entity(row)

    def delete(self, task: TaskEntity) -> None:
        if task["id"] is None or not _storable_id(task["id"]):
            return
        with self._conn() as conn:
            conn.execute(f"DELETE FROM {_COLS.table} WHERE {_COLS.id} = ?", (task["id"],))
