"""SQLite storage backend for tasks.

Beginner terms:
- Migration: creating the table before normal reads/writes.
- CRUD: create, read, update, delete operations.
- Row factory: returns query rows as dict-like objects instead of tuples.
- Lazy connection: the database file is opened on first use, not on import.
"""

from __future__ import annotations

import logging
import sqlite3
import threading
from datetime import UTC, datetime
from pathlib import Path
from typing import Any, Protocol

from .models import Task
from .statuses import DEFAULT_PRIORITY, DEFAULT_STATUS

logger = logging.getLogger(__name__)

# Columns a partial update may touch; anything else is never interpolated into SQL.
_UPDATABLE_COLUMNS = ("title", "description", "status", "priority")


class TaskStorage(Protocol):
    def migrate(self) -> None: ...

    def list_tasks(self) -> list[Task]: ...

    def get_task(self, task_id: int) -> Task | None: ...

    def create_task(
        self,
        title: str,
        description: str | None = None,
        status: str | None = None,
        priority: str | None = None,
    ) -> Task: ...

    def update_task(
        self,
        task_id: int,
        *,
        title: str | None = None,
        description: str | None = None,
        status: str | None = None,
        priority: str | None = None,
    ) -> Task | None: ...

    def delete_task(self, task_id: int) -> bool: ...

    def close(self) -> None: ...


class SqliteTaskStorage:
    """SQLite-backed task storage holding a single, lazily opened connection.

    FastAPI runs sync handlers in a thread pool, so the connection is shared
    across threads and every statement is serialized through one lock.
    """

    def __init__(self, database_path: str | Path = "tasks.db") -> None:
        if not str(database_path):
            raise ValueError("database_path is required")
        self.database_path = str(database_path)
        self._lock = threading.Lock()
        self._conn: sqlite3.Connection | None = None

    def migrate(self) -> None:
        """Open the connection (creating the table if needed)."""
        with self._lock:
            self._connection()

    def list_tasks(self) -> list[Task]:
        """Return all tasks, newest first."""
        with self._lock:
            rows = (
                self._connection()
                .execute("SELECT * FROM tasks ORDER BY created_at DESC, id DESC")
                .fetchall()
            )
        return [self._row_to_task(row) for row in rows]

    def get_task(self, task_id: int) -> Task | None:
        with self._lock:
            row = self._fetch_row(self._connection(), task_id)
        if row is None:
            return None
        return self._row_to_task(row)

    def create_task(
        self,
        title: str,
        description: str | None = None,
        status: str | None = None,
        priority: str | None = None,
    ) -> Task:
        """Insert a row with server-assigned id and timestamps; return the stored record."""
        now = self._timestamp()
        with self._lock:
            conn = self._connection()
            cursor = conn.execute(
                """
                INSERT INTO tasks (title, description, status, priority, created_at, updated_at)
                VALUES (?, ?, ?, ?, ?, ?)
                """,
                (
                    title,
                    description or "",
                    status or DEFAULT_STATUS,
                    priority or DEFAULT_PRIORITY,
                    now,
                    now,
                ),
            )
            conn.commit()
            row = self._fetch_row(conn, cursor.lastrowid)
        if row is None:
            raise sqlite3.DatabaseError(f"Task {cursor.lastrowid} missing after insert")
        return self._row_to_task(row)

    def update_task(
        self,
        task_id: int,
        *,
        title: str | None = None,
        description: str | None = None,
        status: str | None = None,
        priority: str | None = None,
    ) -> Task | None:
        """Update supplied fields, keep the rest; None when no row has `task_id`."""
        supplied = dict(zip(_UPDATABLE_COLUMNS, (title, description, status, priority)))
        assignments = {column: value for column, value in supplied.items() if value is not None}
        assignments["updated_at"] = self._timestamp()
        set_clause = ", ".join(f"{column} = ?" for column in assignments)

        with self._lock:
            conn = self._connection()
            cursor = conn.execute(
                f"UPDATE tasks SET {set_clause} WHERE id = ?",
                (*assignments.values(), task_id),
            )
            conn.commit()
            if cursor.rowcount == 0:
                return None
            row = self._fetch_row(conn, task_id)
        if row is None:
            return None
        return self._row_to_task(row)

    def delete_task(self, task_id: int) -> bool:
        with self._lock:
            conn = self._connection()
            cursor = conn.execute("DELETE FROM tasks WHERE id = ?", (task_id,))
            conn.commit()
        return cursor.rowcount > 0

    def close(self) -> None:
        with self._lock:
            if self._conn is not None:
                self._conn.close()
                self._conn = None

    def _connection(self) -> sqlite3.Connection:
        """Return the shared connection, opening and migrating it on first use.

        Callers must hold `self._lock`.
        """
        if self._conn is None:
            conn = sqlite3.connect(self.database_path, check_same_thread=False)
            conn.row_factory = sqlite3.Row
            try:
                self._create_schema(conn)
            except sqlite3.Error:
                conn.close()
                raise
            self._conn = conn
            logger.info("task_store event=connected database_path=%s", self.database_path)
        return self._conn

    @staticmethod
    def _create_schema(conn: sqlite3.Connection) -> None:
        # AUTOINCREMENT keeps ids of deleted rows from being handed out again.
        conn.execute("""
            CREATE TABLE IF NOT EXISTS tasks (
                id INTEGER PRIMARY KEY AUTOINCREMENT,
                title TEXT NOT NULL,
                description TEXT NOT NULL DEFAULT '',
                status TEXT NOT NULL DEFAULT 'pending',
                priority TEXT NOT NULL DEFAULT 'medium',
                created_at TEXT NOT NULL,
                updated_at TEXT NOT NULL
            )
            """)
        conn.execute("""
            CREATE INDEX IF NOT EXISTS idx_tasks_created_at
            ON tasks(created_at DESC)
            """)
        conn.commit()

    @staticmethod
    def _fetch_row(conn: sqlite3.Connection, task_id: Any) -> sqlite3.Row | None:
        return conn.execute("SELECT * FROM tasks WHERE id = ?", (task_id,)).fetchone()

    @staticmethod
    def _timestamp() -> str:
        # Fixed-width ISO text so ORDER BY on the column is chronological.
        return datetime.now(tz=UTC).isoformat(timespec="microseconds")

    @staticmethod
    def _row_to_task(row: sqlite3.Row) -> Task:
        """Map one DB row to the canonical Task Pydantic model."""
        return Task(
            id=row["id"],
            title=row["title"],
            description=row["description"] or "",
            status=row["status"],
            priority=row["priority"],
            created_at=datetime.fromisoformat(row["created_at"]),
            updated_at=datetime.fromisoformat(row["updated_at"]),
        )
