"""
Request and response schemas for the HTTP surface.

Request models list exactly the fields each endpoint accepts; anything
else in the body is ignored.
"""

from __future__ import annotations

from typing import List, Optional

from pydantic import BaseModel, ConfigDict, StrictBool, StrictStr

from database.models import Todo, User


class _Input(BaseModel):
    model_config = ConfigDict(extra="ignore")


# ── Todos ──────────────────────────────────────────────────────────────


class TodoCreate(_Input):
    text: Optional[StrictStr] = None


class TodoUpdate(_Input):
    text: Optional[StrictStr] = None
    completed: Optional[StrictBool] = None


class TodoEnvelope(BaseModel):
    todo: Todo


class TodoList(BaseModel):
    todos: List[Todo]


# ── Users ──────────────────────────────────────────────────────────────


class UserCredentials(_Input):
    email: Optional[StrictStr] = None
    password: Optional[StrictStr] = None


class UserOut(BaseModel):
    id: str
    email: str

    @classmethod
    def from_user(cls, user: User) -> "UserOut":
        return cls(id=user.id, email=user.email)
