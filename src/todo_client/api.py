from __future__ import annotations

import os
from typing import Any, Dict, List, Mapping, Optional

import httpx

DEFAULT_API_URL = "http://localhost:5000"


def get_api_url() -> str:
    """Base URL of the Todo Master API, from TODO_API_URL."""
    value = os.getenv("TODO_API_URL", "").strip()
    return value or DEFAULT_API_URL


# PUBLIC_INTERFACE
class TodoAPI:
    """
    Thin client over the Todo Master HTTP API.

    Each call returns the decoded response body. HTTP and transport errors
    (httpx.HTTPError) propagate unchanged; nothing is retried.
    """

    def __init__(self, base_url: Optional[str] = None, client: Optional[httpx.Client] = None) -> None:
        self._client = client or httpx.Client(
            base_url=base_url or get_api_url(),
            headers={"Content-Type": "application/json"},
        )

    def get_all_todos(self) -> List[Dict[str, Any]]:
        response = self._client.get("/todos")
        response.raise_for_status()
        return response.json()

    def create_todo(self, todo_data: Mapping[str, Any]) -> Dict[str, Any]:
        response = self._client.post("/todos", json=dict(todo_data))
        response.raise_for_status()
        return response.json()

    def update_todo(self, todo_id: int, todo_data: Mapping[str, Any]) -> Dict[str, Any]:
        response = self._client.put(f"/todos/{todo_id}", json=dict(todo_data))
        response.raise_for_status()
        return response.json()

    def delete_todo(self, todo_id: int) -> Dict[str, Any]:
        response = self._client.delete(f"/todos/{todo_id}")
        response.raise_for_status()
        return response.json()

    def close(self) -> None:
        self._client.close()

    def __enter__(self) -> "TodoAPI":
        return self

    def __exit__(self, *exc_info: Any) -> None:
        self.close()
