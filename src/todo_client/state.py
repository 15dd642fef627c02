"""Client-side todo state: the fetched list, loading/error flags and filters.

"Done" removes a todo through the delete endpoint rather than flipping its
completed flag, so a finished todo disappears from every client.
"""
from __future__ import annotations

import logging
from typing import Any, Dict, List, Mapping, Optional

import httpx

from todo_api.models import DEFAULT_CATEGORY, DEFAULT_PRIORITY

from .api import TodoAPI

logger = logging.getLogger(__name__)

ALL = "all"

FETCH_FAILED = "Failed to fetch todos. Please check if the server is running."
CREATE_FAILED = "Failed to create todo. Please try again."
MARK_DONE_FAILED = "Failed to mark todo as done. Please try again."

Todo = Dict[str, Any]

# Transport and HTTP errors, plus bodies that are not JSON or lack expected fields
_FAILURES = (httpx.HTTPError, ValueError, KeyError, TypeError)


# PUBLIC_INTERFACE
class TodoState:
    """
    Holds the todo list shown by the client and derives its visible subset.

    At most one error message is kept; any successful operation clears it.
    """

    def __init__(self, api: TodoAPI) -> None:
        self.api = api
        self.todos: List[Todo] = []
        self.loading: bool = True
        self.error: Optional[str] = None
        self.search_term: str = ""
        self.filter_priority: str = ALL
        self.filter_category: str = ALL

    @property
    def total(self) -> int:
        return len(self.todos)

    def fetch_todos(self) -> None:
        """Load every todo, newest (highest id) first. On failure the previous list stays."""
        self.loading = True
        try:
            all_todos = self.api.get_all_todos()
            sorted_todos = sorted(all_todos, key=lambda t: t["id"], reverse=True)
        except _FAILURES as e:
            logger.error("Error fetching todos: %s", e)
            self.error = FETCH_FAILED
            return
        finally:
            self.loading = False
        self.todos = sorted_todos
        self.error = None

    def add_todo(self, todo_data: Mapping[str, Any]) -> Optional[Todo]:
        """Create a todo and put it at the top of the list. Return it, or None on failure."""
        try:
            new_todo = self.api.create_todo(todo_data)
            if not isinstance(new_todo, dict) or "id" not in new_todo:
                raise ValueError(f"Unexpected create response: {new_todo!r}")
        except _FAILURES as e:
            logger.error("Error creating todo: %s", e)
            self.error = CREATE_FAILED
            return None
        self.todos = [new_todo, *self.todos]
        self.error = None
        return new_todo

    def mark_as_done(self, todo_id: int) -> bool:
        """Delete a todo and drop it from the list. Return False on failure."""
        try:
            self.api.delete_todo(todo_id)
        except _FAILURES as e:
            logger.error("Error marking todo as done: %s", e)
            self.error = MARK_DONE_FAILED
            return False
        self.todos = [t for t in self.todos if t["id"] != todo_id]
        self.error = None
        return True

    def _matches(self, todo: Todo) -> bool:
        term = self.search_term.lower()
        matches_search = term in (todo.get("title") or "").lower() or term in (
            todo.get("description") or ""
        ).lower()
        matches_priority = self.filter_priority == ALL or (
            todo.get("priority") or DEFAULT_PRIORITY
        ) == self.filter_priority
        matches_category = self.filter_category == ALL or (
            todo.get("category") or DEFAULT_CATEGORY
        ) == self.filter_category
        return matches_search and matches_priority and matches_category

    def visible_todos(self) -> List[Todo]:
        """Todos passing the search term AND the priority filter AND the category filter."""
        return [t for t in self.todos if self._matches(t)]

    def clear_filters(self) -> None:
        self.search_term = ""
        self.filter_priority = ALL
        self.filter_category = ALL
