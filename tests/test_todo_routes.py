"""
Route-level tests for /todos.
"""

import logging
from unittest.mock import AsyncMock, patch

import pytest
from bson import ObjectId
from pymongo.errors import OperationFailure

from database.mongo import TODOS
from database.todos import TodoRepository


class TestCreateTodo:
    @pytest.mark.asyncio
    async def test_creates_todo(self, client, db):
        text = "Test todo text"
        res = await client.post("/todos", json={"text": text})

        assert res.status_code == 200
        body = res.json()
        assert body["text"] == text
        assert body["completed"] is False
        assert body["completedAt"] is None

        stored = await db[TODOS].find({"text": text}).to_list(length=None)
        assert len(stored) == 1
        assert str(stored[0]["_id"]) == body["id"]

    @pytest.mark.asyncio
    async def test_trims_text(self, client):
        res = await client.post("/todos", json={"text": "  padded  "})
        assert res.status_code == 200
        assert res.json()["text"] == "padded"

    @pytest.mark.asyncio
    @pytest.mark.parametrize("payload", [{}, {"text": ""}, {"text": "   "}, {"text": 42}])
    async def test_rejects_invalid_body(self, client, db, payload):
        res = await client.post("/todos", json=payload)

        assert res.status_code == 400
        assert await db[TODOS].count_documents({}) == 2

    @pytest.mark.asyncio
    async def test_ignores_unknown_fields(self, client):
        res = await client.post(
            "/todos", json={"text": "sneaky", "completed": True, "completedAt": 1}
        )
        assert res.status_code == 200
        assert res.json()["completed"] is False
        assert res.json()["completedAt"] is None


class TestListTodos:
    @pytest.mark.asyncio
    async def test_lists_all(self, client):
        res = await client.get("/todos")
        assert res.status_code == 200
        assert len(res.json()["todos"]) == 2


class TestGetTodo:
    @pytest.mark.asyncio
    async def test_returns_todo(self, client, seed_todos):
        todo_id = str(seed_todos[0]["_id"])
        res = await client.get(f"/todos/{todo_id}")

        assert res.status_code == 200
        assert res.json()["todo"]["text"] == seed_todos[0]["text"]
        assert res.json()["todo"]["id"] == todo_id

    @pytest.mark.asyncio
    async def test_invalid_id(self, client):
        res = await client.get("/todos/123")
        assert res.status_code == 400

    @pytest.mark.asyncio
    async def test_not_found(self, client):
        res = await client.get(f"/todos/{ObjectId()}")
        assert res.status_code == 404
        assert res.content == b""


class TestDeleteTodo:
    @pytest.mark.asyncio
    async def test_removes_todo(self, client, db, seed_todos):
        todo_id = str(seed_todos[0]["_id"])
        res = await client.delete(f"/todos/{todo_id}")

        assert res.status_code == 200
        assert res.json()["todo"]["id"] == todo_id
        assert await db[TODOS].find_one({"_id": seed_todos[0]["_id"]}) is None

        again = await client.get(f"/todos/{todo_id}")
        assert again.status_code == 404

    @pytest.mark.asyncio
    async def test_invalid_id(self, client):
        res = await client.delete("/todos/123")
        assert res.status_code == 400

    @pytest.mark.asyncio
    async def test_not_found(self, client, db):
        res = await client.delete(f"/todos/{ObjectId()}")
        assert res.status_code == 404
        assert await db[TODOS].count_documents({}) == 2


class TestUpdateTodo:
    @pytest.mark.asyncio
    async def test_marks_completed(self, client, seed_todos):
        todo_id = str(seed_todos[0]["_id"])
        text = "This should be the new text"
        res = await client.patch(f"/todos/{todo_id}", json={"completed": True, "text": text})

        assert res.status_code == 200
        todo = res.json()["todo"]
        assert todo["text"] == text
        assert todo["completed"] is True
        assert isinstance(todo["completedAt"], int)

    @pytest.mark.asyncio
    async def test_clears_completed_at(self, client, seed_todos):
        todo_id = str(seed_todos[1]["_id"])
        text = "This should be the new text!!"
        res = await client.patch(f"/todos/{todo_id}", json={"completed": False, "text": text})

        assert res.status_code == 200
        todo = res.json()["todo"]
        assert todo["text"] == text
        assert todo["completed"] is False
        assert todo["completedAt"] is None

    @pytest.mark.asyncio
    async def test_omitted_completed_resets(self, client, seed_todos):
        todo_id = str(seed_todos[1]["_id"])
        res = await client.patch(f"/todos/{todo_id}", json={})

        assert res.status_code == 200
        todo = res.json()["todo"]
        assert todo["text"] == seed_todos[1]["text"]
        assert todo["completed"] is False
        assert todo["completedAt"] is None

    @pytest.mark.asyncio
    async def test_non_boolean_completed_rejected(self, client, seed_todos):
        todo_id = str(seed_todos[0]["_id"])
        res = await client.patch(f"/todos/{todo_id}", json={"completed": "yes"})
        assert res.status_code == 400

    @pytest.mark.asyncio
    async def test_blank_text_rejected(self, client, seed_todos):
        todo_id = str(seed_todos[0]["_id"])
        res = await client.patch(f"/todos/{todo_id}", json={"text": "  "})
        assert res.status_code == 400

    @pytest.mark.asyncio
    async def test_invalid_id(self, client):
        res = await client.patch("/todos/123", json={"completed": True})
        assert res.status_code == 400

    @pytest.mark.asyncio
    async def test_not_found(self, client):
        res = await client.patch(f"/todos/{ObjectId()}", json={"completed": True})
        assert res.status_code == 404


class TestStoreFailures:
    @pytest.mark.asyncio
    async def test_store_error_is_client_error(self, client):
        with patch.object(
            TodoRepository, "list_all",
            new_callable=AsyncMock, side_effect=OperationFailure("node is recovering"),
        ):
            res = await client.get("/todos")

        assert res.status_code == 400
        assert res.json()["error"] == "StoreError"

    @pytest.mark.asyncio
    async def test_store_error_on_update(self, client, seed_todos):
        todo_id = str(seed_todos[0]["_id"])
        with patch.object(
            TodoRepository, "update",
            new_callable=AsyncMock, side_effect=OperationFailure("write conflict"),
        ):
            res = await client.patch(f"/todos/{todo_id}", json={"completed": True})

        assert res.status_code == 400


class TestAccessLog:
    @pytest.mark.asyncio
    async def test_response_time_header(self, client):
        res = await client.get("/todos")
        assert float(res.headers["X-Response-Time-Ms"]) >= 0

    @pytest.mark.asyncio
    async def test_rejections_logged_at_info(self, client, caplog):
        with caplog.at_level(logging.INFO, logger="todo_api.access"):
            await client.get("/todos/123")

        records = [r for r in caplog.records if r.name == "todo_api.access"]
        assert len(records) == 1
        assert records[0].levelno == logging.INFO
        assert "GET /todos/123 400" in records[0].getMessage()
