from datetime import datetime

from fastapi.testclient import TestClient

from todo_api.app import create_app
from todo_api.db import QueryResult, StoreError


def create_todo_payload(
    title="Test Task",
    description="Do something",
    priority=None,
    category=None,
):
    payload = {
        "title": title,
        "description": description,
    }
    if priority is not None:
        payload["priority"] = priority
    if category is not None:
        payload["category"] = category
    return payload


def assert_todo_shape(todo: dict):
    for key in ["id", "title", "description", "priority", "category", "completed", "created_at"]:
        assert key in todo
    assert isinstance(todo["id"], int)
    assert isinstance(todo["title"], str)
    assert isinstance(todo["description"], str)
    # FastAPI/Pydantic returns strings for datetime fields
    datetime.fromisoformat(todo["created_at"])


class FailingStore:
    """Store double whose every statement fails."""

    db_path = "unreachable"

    def __init__(self):
        self.calls = []

    def execute(self, statement, parameters=()):
        self.calls.append((statement, tuple(parameters)))
        raise StoreError("connection refused")


class RecordingStore:
    """Store double that records statements and returns canned results."""

    db_path = "recording"

    def __init__(self, result: QueryResult):
        self.result = result
        self.calls = []

    def execute(self, statement, parameters=()):
        self.calls.append((statement, tuple(parameters)))
        return self.result


class TestHealth:
    def test_health_check(self, client: TestClient, settings):
        res = client.get("/")
        assert res.status_code == 200
        data = res.json()
        assert data["message"] == "Healthy"
        assert data["database"] == settings.db_path


class TestTodosCRUD:
    def test_create_todo_with_all_fields(self, client: TestClient):
        payload = create_todo_payload(title="Buy milk", description="2%", priority="low", category="shopping")
        res = client.post("/todos", json=payload)
        assert res.status_code == 200
        todo = res.json()
        assert_todo_shape(todo)
        assert todo["title"] == "Buy milk"
        assert todo["description"] == "2%"
        assert todo["priority"] == "low"
        assert todo["category"] == "shopping"
        assert todo["completed"] is False

    def test_create_todo_defaults(self, client: TestClient):
        res = client.post("/todos", json=create_todo_payload(title="Minimal Todo", description="Minimal"))
        assert res.status_code == 200
        todo = res.json()
        assert todo["priority"] == "medium"
        assert todo["category"] == "general"
        assert todo["completed"] is False

        stored = client.get(f"/todos/{todo['id']}").json()
        assert stored["priority"] == "medium"
        assert stored["category"] == "general"

    def test_create_then_get_round_trip(self, client: TestClient):
        payload = create_todo_payload(title="Read book", description="Chapter 3", priority="high", category="learning")
        created = client.post("/todos", json=payload).json()

        res_get = client.get(f"/todos/{created['id']}")
        assert res_get.status_code == 200
        fetched = res_get.json()
        assert fetched == created
        for key, value in payload.items():
            assert fetched[key] == value

    def test_ids_are_not_reused(self, client: TestClient):
        first = client.post("/todos", json=create_todo_payload(title="First")).json()
        client.delete(f"/todos/{first['id']}")
        second = client.post("/todos", json=create_todo_payload(title="Second")).json()
        assert second["id"] > first["id"]

    def test_get_not_found_is_empty_success(self, client: TestClient):
        res = client.get("/todos/999999")
        assert res.status_code == 200
        assert res.text == ""

    def test_list_returns_every_todo_once(self, client: TestClient):
        assert client.get("/todos").json() == []

        created_ids = [
            client.post("/todos", json=create_todo_payload(title=f"Task {i}", description=f"Desc {i}")).json()["id"]
            for i in range(5)
        ]
        res = client.get("/todos")
        assert res.status_code == 200
        items = res.json()
        assert len(items) == 5
        assert [t["id"] for t in items] == sorted(created_ids)
        for item in items:
            assert_todo_shape(item)

    def test_put_overwrites_every_field(self, client: TestClient):
        tid = client.post("/todos", json=create_todo_payload(title="Initial", description="A")).json()["id"]

        new_payload = {
            "title": "Replaced",
            "description": "B",
            "priority": "high",
            "category": "work",
            "completed": True,
        }
        res_put = client.put(f"/todos/{tid}", json=new_payload)
        assert res_put.status_code == 200
        assert res_put.json() == {"message": "Todo updated successfully"}

        fetched = client.get(f"/todos/{tid}").json()
        for key, value in new_payload.items():
            assert fetched[key] == value

    def test_put_writes_omitted_fields_as_null(self, client: TestClient):
        tid = client.post(
            "/todos", json=create_todo_payload(title="Keep", description="Me", priority="high", category="work")
        ).json()["id"]

        res_put = client.put(f"/todos/{tid}", json={"title": "Keep", "description": "Me"})
        assert res_put.status_code == 200

        fetched = client.get(f"/todos/{tid}").json()
        assert fetched["priority"] is None
        assert fetched["category"] is None
        assert fetched["completed"] is None

    def test_put_not_found_still_succeeds(self, client: TestClient):
        client.post("/todos", json=create_todo_payload(title="Untouched"))
        before = client.get("/todos").json()

        res = client.put(
            "/todos/424242",
            json={"title": "Nope", "description": "x", "priority": "low", "category": "work", "completed": True},
        )
        assert res.status_code == 200
        assert res.json() == {"message": "Todo updated successfully"}
        assert client.get("/todos").json() == before

    def test_put_without_title_is_server_error(self, client: TestClient):
        tid = client.post("/todos", json=create_todo_payload(title="Titled")).json()["id"]

        res = client.put(f"/todos/{tid}", json={"description": "no title"})
        assert res.status_code == 500
        assert res.text == "Server Error"
        assert client.get(f"/todos/{tid}").json()["title"] == "Titled"

    def test_delete_todo(self, client: TestClient):
        tid = client.post("/todos", json=create_todo_payload(title="ToDelete")).json()["id"]

        res_del = client.delete(f"/todos/{tid}")
        assert res_del.status_code == 200
        assert res_del.json() == {"message": "Todo deleted successfully"}
        assert all(t["id"] != tid for t in client.get("/todos").json())

        # Deleting again still reports success
        res_del_again = client.delete(f"/todos/{tid}")
        assert res_del_again.status_code == 200
        assert res_del_again.json() == {"message": "Todo deleted successfully"}

    def test_buy_milk_scenario(self, client: TestClient):
        res = client.post(
            "/todos",
            json={"title": "Buy milk", "description": "2%", "priority": "low", "category": "shopping"},
        )
        assert res.status_code == 200
        body = res.json()
        assert "id" in body
        assert body["priority"] == "low"
        assert body["category"] == "shopping"
        assert body["completed"] is False

        res_del = client.delete(f"/todos/{body['id']}")
        assert res_del.json() == {"message": "Todo deleted successfully"}

        res_get = client.get(f"/todos/{body['id']}")
        assert res_get.status_code == 200
        assert res_get.text == ""


class TestErrors:
    def test_create_without_title_is_server_error(self, client: TestClient):
        res = client.post("/todos", json={"description": "Missing title"})
        assert res.status_code == 500
        assert res.text == "Server Error"
        assert client.get("/todos").json() == []

    def test_create_with_empty_body_is_server_error(self, client: TestClient):
        res = client.post("/todos", json={})
        assert res.status_code == 500
        assert res.text == "Server Error"

    def test_malformed_json_is_bad_request(self, client: TestClient):
        res = client.post("/todos", content="{not json", headers={"Content-Type": "application/json"})
        assert res.status_code == 400
        body = res.json()
        assert body.get("error") == "BadRequest"
        assert body.get("message") == "Malformed request body"
        assert isinstance(body.get("detail"), list)

    def test_non_integer_id_is_validation_error(self, client: TestClient):
        for res in (
            client.get("/todos/abc"),
            client.delete("/todos/1;DROP TABLE todos"),
            client.put("/todos/abc", json={"title": "x", "description": "y"}),
        ):
            assert res.status_code == 422
            body = res.json()
            assert body.get("error") == "ValidationError"
            assert body.get("message") == "Request validation failed"
            assert isinstance(body.get("detail"), list)

    def test_store_failure_is_generic_server_error(self, settings):
        store = FailingStore()
        client = TestClient(create_app(settings, store))

        for res in (
            client.get("/todos"),
            client.get("/todos/1"),
            client.post("/todos", json=create_todo_payload()),
            client.put("/todos/1", json=create_todo_payload()),
            client.delete("/todos/1"),
        ):
            assert res.status_code == 500
            assert res.text == "Server Error"
            assert "connection refused" not in res.text
        assert len(store.calls) == 5

    def test_injected_store_receives_parameterized_statements(self, settings):
        store = RecordingStore(QueryResult(rows=[], row_count=0))
        client = TestClient(create_app(settings, store))

        res = client.delete("/todos/7")
        assert res.status_code == 200
        statement, params = store.calls[0]
        assert statement.startswith("DELETE FROM todos")
        assert params == (7,)


class TestOpenAPI:
    def test_get_todo_schema_allows_empty_body(self, client: TestClient):
        schema = client.get("/openapi.json").json()
        ok = schema["paths"]["/todos/{todo_id}"]["get"]["responses"]["200"]
        body_schema = ok["content"]["application/json"]["schema"]
        assert {"type": "null"} in body_schema["anyOf"]
        assert {"$ref": "#/components/schemas/TodoOut"} in body_schema["anyOf"]


class TestCors:
    def test_any_origin_is_allowed(self, client: TestClient):
        res = client.get("/todos", headers={"Origin": "http://example.com"})
        assert res.status_code == 200
        assert "access-control-allow-origin" in res.headers
