"""
Todo repository — all store access for the ``todos`` collection.

Lookups return ``None`` when the id is well-formed but unmatched; callers
decide how to report that.
"""

from __future__ import annotations

import logging
import time
from typing import Any, Dict, List, Optional

from motor.motor_asyncio import AsyncIOMotorDatabase
from pymongo import ReturnDocument

from database.models import Todo
from database.mongo import TODOS
from utils.validators import clean_text, parse_object_id

logger = logging.getLogger(__name__)


def _now_ms() -> int:
    return int(time.time() * 1000)


class TodoRepository:
    def __init__(self, db: AsyncIOMotorDatabase):
        self._collection = db[TODOS]

    async def create(self, text: Optional[str]) -> Todo:
        doc: Dict[str, Any] = {
            "text": clean_text(text),
            "completed": False,
            "completedAt": None,
        }
        result = await self._collection.insert_one(doc)
        doc["_id"] = result.inserted_id
        logger.info("Created todo %s", result.inserted_id)
        return Todo.from_document(doc)

    async def list_all(self) -> List[Todo]:
        docs = await self._collection.find().to_list(length=None)
        return [Todo.from_document(doc) for doc in docs]

    async def find_by_id(self, todo_id: str) -> Optional[Todo]:
        oid = parse_object_id(todo_id)
        doc = await self._collection.find_one({"_id": oid})
        return Todo.from_document(doc) if doc else None

    async def update(
        self,
        todo_id: str,
        text: Optional[str] = None,
        completed: Optional[bool] = None,
    ) -> Optional[Todo]:
        """
        Apply a caller-supplied ``text``/``completed`` pair.

        ``completedAt`` is always derived here: stamped with the current
        time when ``completed`` is true, otherwise ``completed`` is forced
        to false and ``completedAt`` cleared.
        """
        oid = parse_object_id(todo_id)
        changes: Dict[str, Any] = {}
        if text is not None:
            changes["text"] = clean_text(text)
        if completed is True:
            changes["completed"] = True
            changes["completedAt"] = _now_ms()
        else:
            changes["completed"] = False
            changes["completedAt"] = None

        doc = await self._collection.find_one_and_update(
            {"_id": oid},
            {"$set": changes},
            return_document=ReturnDocument.AFTER,
        )
        return Todo.from_document(doc) if doc else None

    async def delete_by_id(self, todo_id: str) -> Optional[Todo]:
        oid = parse_object_id(todo_id)
        doc = await self._collection.find_one_and_delete({"_id": oid})
        if doc is None:
            return None
        logger.info("Deleted todo %s", oid)
        return Todo.from_document(doc)
