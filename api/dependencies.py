"""
FastAPI dependencies (shared across routes).
"""

from __future__ import annotations

from fastapi import Request

from database.todos import TodoRepository
from database.users import UserRepository


def get_todo_repository(request: Request) -> TodoRepository:
    return TodoRepository(request.app.state.db)


def get_user_repository(request: Request) -> UserRepository:
    return UserRepository(request.app.state.db, request.app.state.settings)
