from __future__ import annotations

import logging
from typing import List, Optional

from fastapi import APIRouter, Depends, Response, status

from ..schemas import MessageOut, TodoCreate, TodoOut, TodoUpdate
from ..service import TodoService, get_service

logger = logging.getLogger(__name__)

router = APIRouter(
    prefix="/todos",
    tags=["todos"],
)

_SERVER_ERROR = {500: {"description": "Store failure; body is the plain text 'Server Error'"}}


# PUBLIC_INTERFACE
@router.post(
    "",
    response_model=TodoOut,
    summary="Create Todo",
    description=(
        "Create a new Todo item and return the created resource. priority and category "
        "default to 'medium' and 'general' when omitted."
    ),
    responses={200: {"description": "Todo created"}, **_SERVER_ERROR},
)
def create_todo(payload: TodoCreate, service: TodoService = Depends(get_service)) -> TodoOut:
    """
    Create a new Todo.
    """
    created = service.create(payload)
    logger.info("Created todo %s", created["id"])
    return TodoOut(**created)


# PUBLIC_INTERFACE
@router.get(
    "",
    response_model=List[TodoOut],
    summary="List Todos",
    description="List every todo in ascending id order. There is no pagination.",
    responses={200: {"description": "List retrieved successfully"}, **_SERVER_ERROR},
)
def list_todos(service: TodoService = Depends(get_service)) -> List[TodoOut]:
    return [TodoOut(**it) for it in service.list()]


# PUBLIC_INTERFACE
@router.get(
    "/{todo_id}",
    response_model=Optional[TodoOut],
    summary="Get Todo",
    description="Get a single Todo item by ID. An unknown ID yields 200 with an empty body.",
    responses={200: {"description": "Todo found, or empty body if not found"}, **_SERVER_ERROR},
)
def get_todo(todo_id: int, service: TodoService = Depends(get_service)):
    """
    Retrieve a single Todo item by its ID.
    """
    item = service.get(todo_id)
    if item is None:
        return Response(status_code=status.HTTP_200_OK)
    return TodoOut(**item)


# PUBLIC_INTERFACE
@router.put(
    "/{todo_id}",
    response_model=MessageOut,
    summary="Replace Todo",
    description=(
        "Overwrite title, description, priority, category and completed. Omitted fields "
        "are written as null. Reports success even when no todo has the given ID."
    ),
    responses={200: {"description": "Todo updated"}, **_SERVER_ERROR},
)
def put_todo(todo_id: int, payload: TodoUpdate, service: TodoService = Depends(get_service)) -> MessageOut:
    matched = service.update(todo_id, payload)
    if not matched:
        logger.info("Update matched no todo with id %s", todo_id)
    return MessageOut(message="Todo updated successfully")


# PUBLIC_INTERFACE
@router.delete(
    "/{todo_id}",
    response_model=MessageOut,
    summary="Delete Todo",
    description="Delete a Todo item by ID. Reports success whether or not it existed.",
    responses={200: {"description": "Todo deleted"}, **_SERVER_ERROR},
)
def delete_todo(todo_id: int, service: TodoService = Depends(get_service)) -> MessageOut:
    removed = service.delete(todo_id)
    if not removed:
        logger.info("Delete matched no todo with id %s", todo_id)
    return MessageOut(message="Todo deleted successfully")
