from __future__ import annotations

import logging
import os
import sqlite3
from contextlib import contextmanager
from dataclasses import dataclass, field
from typing import Any, Dict, Generator, List, Sequence

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class _Cols:
    table: str = "todos"
    id: str = "id"
    title: str = "title"
    description: str = "description"
    priority: str = "priority"
    category: str = "category"
    completed: str = "completed"
    created_at: str = "created_at"


COLS = _Cols()

CREATE_TABLE_SQL = f"""
    CREATE TABLE IF NOT EXISTS {COLS.table} (
        {COLS.id} INTEGER PRIMARY KEY AUTOINCREMENT,
        {COLS.title} VARCHAR(255) NOT NULL,
        {COLS.description} VARCHAR(255) NOT NULL,
        {COLS.priority} VARCHAR(20) DEFAULT 'medium',
        {COLS.category} VARCHAR(50) DEFAULT 'general',
        {COLS.completed} BOOLEAN DEFAULT 0,
        {COLS.created_at} TIMESTAMP DEFAULT CURRENT_TIMESTAMP
    )
"""


class StoreError(Exception):
    """
    Raised when the record store rejects a statement or cannot be reached.

    The underlying sqlite3 error is chained as __cause__.
    """


# PUBLIC_INTERFACE
@dataclass(frozen=True)
class QueryResult:
    """
    Raw result of one statement.

    - rows: result rows as plain dicts keyed by column name
    - row_count: rows returned, or rows affected for statements that return none
    """

    rows: List[Dict[str, Any]] = field(default_factory=list)
    row_count: int = 0


# PUBLIC_INTERFACE
class SQLiteStore:
    """
    Data access layer over a single SQLite database file.

    Every call to execute() runs on its own connection and commits on success,
    so no connection is shared between requests.
    """

    def __init__(self, db_path: str) -> None:
        os.makedirs(os.path.dirname(db_path) or ".", exist_ok=True)
        self._db_path = db_path

    @property
    def db_path(self) -> str:
        return self._db_path

    @contextmanager
    def _conn(self) -> Generator[sqlite3.Connection, None, None]:
        conn = sqlite3.connect(self._db_path)
        conn.row_factory = sqlite3.Row
        try:
            yield conn
            conn.commit()
        finally:
            conn.close()

    # PUBLIC_INTERFACE
    def execute(self, statement: str, parameters: Sequence[Any] = ()) -> QueryResult:
        """
        Execute one parameterized statement and return its rows and row count.

        Raises:
            StoreError: if the connection or the statement fails.
        """
        try:
            with self._conn() as conn:
                cur = conn.execute(statement, tuple(parameters))
                if cur.description is None:
                    return QueryResult(rows=[], row_count=max(cur.rowcount, 0))
                rows = [dict(r) for r in cur.fetchall()]
                return QueryResult(rows=rows, row_count=len(rows))
        except sqlite3.Error as e:
            logger.error("Statement failed: %s", e)
            raise StoreError(str(e)) from e

    def init_schema(self) -> None:
        """Create the todos table if it does not exist yet."""
        self.execute(CREATE_TABLE_SQL)
