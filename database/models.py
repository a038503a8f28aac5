"""
Typed views over the raw MongoDB documents held in ``todos`` and ``users``.
"""

from __future__ import annotations

from typing import Any, Dict, List, Optional

from pydantic import BaseModel, Field


class Todo(BaseModel):
    id: str
    text: str
    completed: bool = False
    completedAt: Optional[int] = None  # epoch milliseconds

    @classmethod
    def from_document(cls, doc: Dict[str, Any]) -> "Todo":
        return cls(
            id=str(doc["_id"]),
            text=doc["text"],
            completed=doc.get("completed", False),
            completedAt=doc.get("completedAt"),
        )


class TokenEntry(BaseModel):
    access: str
    token: str


class User(BaseModel):
    """
    Stored user record.

    ``password`` holds the bcrypt hash; it is excluded from every
    serialisation so it cannot leak through a response body.
    """

    id: str
    email: str
    password: str = Field(default="", exclude=True, repr=False)
    tokens: List[TokenEntry] = Field(default_factory=list, exclude=True, repr=False)

    @classmethod
    def from_document(cls, doc: Dict[str, Any]) -> "User":
        return cls(
            id=str(doc["_id"]),
            email=doc["email"],
            password=doc.get("password", ""),
            tokens=[TokenEntry(**entry) for entry in doc.get("tokens", [])],
        )
