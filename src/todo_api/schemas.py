from __future__ import annotations

from datetime import datetime
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field

from .models import DEFAULT_CATEGORY, DEFAULT_PRIORITY


# PUBLIC_INTERFACE
class TodoCreate(BaseModel):
    """
    Schema for creating a new Todo item.

    title and description are not checked here; the store's NOT NULL
    constraint rejects a missing one.
    """

    model_config = ConfigDict(
        json_schema_extra={
            "example": {
                "title": "Buy milk",
                "description": "2%",
                "priority": "low",
                "category": "shopping",
            }
        }
    )

    title: Optional[str] = Field(default=None, description="Short title for the todo item")
    description: Optional[str] = Field(default=None, description="Detailed description")
    priority: Optional[str] = Field(
        default=DEFAULT_PRIORITY, description="One of low, medium, high"
    )
    category: Optional[str] = Field(
        default=DEFAULT_CATEGORY,
        description="One of general, work, personal, shopping, health, learning",
    )


# PUBLIC_INTERFACE
class TodoUpdate(BaseModel):
    """
    Schema for overwriting a Todo item.

    Every field is written as sent; omitted fields are written as null.
    """

    model_config = ConfigDict(
        json_schema_extra={
            "example": {
                "title": "Buy oat milk",
                "description": "Barista edition",
                "priority": "high",
                "category": "shopping",
                "completed": True,
            }
        }
    )

    title: Optional[str] = Field(default=None, description="Short title for the todo item")
    description: Optional[str] = Field(default=None, description="Detailed description")
    priority: Optional[str] = Field(default=None, description="One of low, medium, high")
    category: Optional[str] = Field(default=None, description="Todo category")
    completed: Optional[bool] = Field(default=None, description="Completion status flag")


# PUBLIC_INTERFACE
class TodoOut(BaseModel):
    """
    Schema returned by the API for a Todo item.
    """

    model_config = ConfigDict(
        json_schema_extra={
            "example": {
                "id": 123,
                "title": "Buy milk",
                "description": "2%",
                "priority": "low",
                "category": "shopping",
                "completed": False,
                "created_at": "2025-01-25T10:15:30",
            }
        }
    )

    id: int = Field(..., description="Unique identifier of the todo item")
    title: str = Field(..., description="Short title for the todo item")
    description: str = Field(..., description="Detailed description")
    priority: Optional[str] = Field(default=None, description="Priority level")
    category: Optional[str] = Field(default=None, description="Todo category")
    completed: Optional[bool] = Field(default=None, description="Completion status flag")
    created_at: datetime = Field(..., description="Creation timestamp")


class MessageOut(BaseModel):
    """Confirmation returned by update and delete."""

    message: str = Field(..., description="Human-readable confirmation")
