"""
Todo API routes.
"""

from __future__ import annotations

from fastapi import APIRouter, Depends

from api.dependencies import get_todo_repository
from database.models import Todo
from database.todos import TodoRepository
from utils.errors import NotFound
from utils.schemas import TodoCreate, TodoEnvelope, TodoList, TodoUpdate

router = APIRouter(prefix="/todos", tags=["todos"])


@router.post("", response_model=Todo)
async def create_todo(
    req: TodoCreate,
    todos: TodoRepository = Depends(get_todo_repository),
) -> Todo:
    return await todos.create(req.text)


@router.get("", response_model=TodoList)
async def list_todos(todos: TodoRepository = Depends(get_todo_repository)) -> TodoList:
    return TodoList(todos=await todos.list_all())


@router.get("/{todo_id}", response_model=TodoEnvelope)
async def get_todo(
    todo_id: str,
    todos: TodoRepository = Depends(get_todo_repository),
) -> TodoEnvelope:
    todo = await todos.find_by_id(todo_id)
    if todo is None:
        raise NotFound("Todo", todo_id)
    return TodoEnvelope(todo=todo)


@router.delete("/{todo_id}", response_model=TodoEnvelope)
async def delete_todo(
    todo_id: str,
    todos: TodoRepository = Depends(get_todo_repository),
) -> TodoEnvelope:
    todo = await todos.delete_by_id(todo_id)
    if todo is None:
        raise NotFound("Todo", todo_id)
    return TodoEnvelope(todo=todo)


@router.patch("/{todo_id}", response_model=TodoEnvelope)
async def update_todo(
    todo_id: str,
    req: TodoUpdate,
    todos: TodoRepository = Depends(get_todo_repository),
) -> TodoEnvelope:
    """Replace ``text``/``completed``; ``completedAt`` is derived server-side."""
    todo = await todos.update(todo_id, text=req.text, completed=req.completed)
    if todo is None:
        raise NotFound("Todo", todo_id)
    return TodoEnvelope(todo=todo)
