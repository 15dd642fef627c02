from __future__ import annotations

from datetime import datetime
from enum import Enum
from typing import Optional, TypedDict


class Priority(str, Enum):
    """Priority level of a todo."""

    LOW = "low"
    MEDIUM = "medium"
    HIGH = "high"


class Category(str, Enum):
    """Category a todo is filed under."""

    GENERAL = "general"
    WORK = "work"
    PERSONAL = "personal"
    SHOPPING = "shopping"
    HEALTH = "health"
    LEARNING = "learning"


DEFAULT_PRIORITY = Priority.MEDIUM.value
DEFAULT_CATEGORY = Category.GENERAL.value


# PUBLIC_INTERFACE
class TodoEntity(TypedDict):
    """
    A todo row as returned by the store.

    Fields:
    - id: Unique integer identifier assigned by the store, never reused
    - title: Short title (NOT NULL in the store)
    - description: Detailed description (NOT NULL in the store)
    - priority: One of low/medium/high; NULL only after an update that omitted it
    - category: One of the Category values; NULL only after an update that omitted it
    - completed: Completion flag; NULL only after an update that omitted it
    - created_at: Creation timestamp from the store clock
    """

    id: int
    title: str
    description: str
    priority: Optional[str]
    category: Optional[str]
    completed: Optional[bool]
    created_at: datetime
