from __future__ import annotations

from datetime import datetime
from typing import Any, Dict, List, Optional

from fastapi import Request

from .db import COLS, SQLiteStore
from .models import TodoEntity
from .schemas import TodoCreate, TodoUpdate

_INSERT_SQL = f"""
    INSERT INTO {COLS.table} ({COLS.title}, {COLS.description}, {COLS.priority},
        {COLS.category}, {COLS.created_at})
    VALUES (?, ?, ?, ?, CURRENT_TIMESTAMP)
    RETURNING *
"""
_SELECT_ALL_SQL = f"SELECT * FROM {COLS.table} ORDER BY {COLS.id}"
_SELECT_ONE_SQL = f"SELECT * FROM {COLS.table} WHERE {COLS.id} = ?"
_UPDATE_SQL = f"""
    UPDATE {COLS.table}
    SET {COLS.title} = ?, {COLS.description} = ?, {COLS.priority} = ?,
        {COLS.category} = ?, {COLS.completed} = ?
    WHERE {COLS.id} = ?
"""
_DELETE_SQL = f"DELETE FROM {COLS.table} WHERE {COLS.id} = ?"


def _row_to_entity(row: Dict[str, Any]) -> TodoEntity:
    completed = row[COLS.completed]
    created_at = row[COLS.created_at]
    return {
        "id": int(row[COLS.id]),
        "title": row[COLS.title],
        "description": row[COLS.description],
        "priority": row[COLS.priority],
        "category": row[COLS.category],
        "completed": None if completed is None else bool(completed),
        "created_at": datetime.fromisoformat(created_at) if isinstance(created_at, str) else created_at,
    }  # type: ignore[typeddict-item]


# PUBLIC_INTERFACE
class TodoService:
    """
    CRUD operations on todos, one statement each.

    Store failures surface as StoreError and are translated to the generic
    error response by the application.
    """

    def __init__(self, store: SQLiteStore) -> None:
        self._store = store

    def create(self, data: TodoCreate) -> TodoEntity:
        """Insert a todo and return the stored row, including id and created_at."""
        result = self._store.execute(
            _INSERT_SQL,
            (data.title, data.description, data.priority, data.category),
        )
        return _row_to_entity(result.rows[0])

    def list(self) -> List[TodoEntity]:
        """Return every todo in ascending id order."""
        result = self._store.execute(_SELECT_ALL_SQL)
        return [_row_to_entity(r) for r in result.rows]

    def get(self, todo_id: int) -> Optional[TodoEntity]:
        """Return a todo by id, or None if not found."""
        result = self._store.execute(_SELECT_ONE_SQL, (todo_id,))
        return _row_to_entity(result.rows[0]) if result.rows else None

    def update(self, todo_id: int, data: TodoUpdate) -> int:
        """Overwrite all editable fields of a todo. Return the number of rows matched."""
        result = self._store.execute(
            _UPDATE_SQL,
            (data.title, data.description, data.priority, data.category, data.completed, todo_id),
        )
        return result.row_count

    def delete(self, todo_id: int) -> int:
        """Delete a todo by id. Return the number of rows removed."""
        result = self._store.execute(_DELETE_SQL, (todo_id,))
        return result.row_count


# PUBLIC_INTERFACE
def get_service(request: Request) -> TodoService:
    """
    FastAPI dependency returning a TodoService over the store injected into
    the application at startup.
    """
    return TodoService(request.app.state.store)
