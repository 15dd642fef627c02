"""Form and list views for the todo client.

Views hold no todo data of their own: TodoForm collects field values and hands
them to a callback; TodoList turns a list of todos into text.
"""
from __future__ import annotations

from typing import Any, Callable, Dict, List, Mapping, Sequence

from todo_api.models import DEFAULT_CATEGORY, DEFAULT_PRIORITY, Category, Priority

PRIORITY_LABELS: Dict[str, str] = {
    Priority.HIGH.value: "High",
    Priority.MEDIUM.value: "Medium",
    Priority.LOW.value: "Low",
}

CATEGORY_LABELS: Dict[str, str] = {
    Category.GENERAL.value: "General",
    Category.WORK.value: "Work",
    Category.PERSONAL.value: "Personal",
    Category.SHOPPING.value: "Shopping",
    Category.HEALTH.value: "Health",
    Category.LEARNING.value: "Learning",
}

MISSING_FIELDS = "Please fill in both title and description"


class FormValidationError(ValueError):
    """Raised when the form is submitted with a blank required field."""


def _initial_data() -> Dict[str, str]:
    return {
        "title": "",
        "description": "",
        "priority": DEFAULT_PRIORITY,
        "category": DEFAULT_CATEGORY,
    }


# PUBLIC_INTERFACE
class TodoForm:
    """
    Controlled form for a new todo.

    Field values live in ``data``; submit() validates them, passes a copy to
    the callback and resets the form once the callback returns.
    """

    def __init__(self) -> None:
        self.data: Dict[str, str] = _initial_data()
        self.is_submitting: bool = False

    def handle_change(self, name: str, value: str) -> None:
        if name not in self.data:
            raise KeyError(f"Unknown form field: {name}")
        self.data[name] = value

    def reset(self) -> None:
        self.data = _initial_data()

    def submit(self, on_add: Callable[[Dict[str, str]], Any]) -> Any:
        """
        Validate the form and pass its values to on_add.

        Raises:
            FormValidationError: if title or description is blank. on_add is not called.
        """
        if not self.data["title"].strip() or not self.data["description"].strip():
            raise FormValidationError(MISSING_FIELDS)

        self.is_submitting = True
        try:
            result = on_add(dict(self.data))
        finally:
            self.is_submitting = False
        self.reset()
        return result


def priority_label(todo: Mapping[str, Any]) -> str:
    return PRIORITY_LABELS.get(todo.get("priority") or DEFAULT_PRIORITY, "Low")


def category_label(todo: Mapping[str, Any]) -> str:
    return CATEGORY_LABELS.get(todo.get("category") or DEFAULT_CATEGORY, "General")


# PUBLIC_INTERFACE
class TodoList:
    """Renders numbered todos, at most ``limit`` of them."""

    EMPTY_TITLE = "No todos yet"
    EMPTY_HINT = "Create your first todo with 'add'."

    def __init__(self, limit: int = 5) -> None:
        self.limit = limit

    def render_lines(self, todos: Sequence[Mapping[str, Any]]) -> List[str]:
        if not todos:
            return [self.EMPTY_TITLE, self.EMPTY_HINT]
        lines: List[str] = []
        for index, todo in enumerate(todos[: self.limit], start=1):
            lines.append(
                f"{index}. {todo['title']} [{priority_label(todo)}] [{category_label(todo)}] (id {todo['id']})"
            )
            lines.append(f"   {todo['description']}")
        return lines

    def render(self, todos: Sequence[Mapping[str, Any]]) -> str:
        return "\n".join(self.render_lines(todos))
