"""
Shared fixtures: an in-memory MongoDB seeded with two todos and two users.
"""

from dataclasses import dataclass, field
from typing import List, Optional

import httpx
import pytest
from bson import ObjectId
from mongomock_motor import AsyncMongoMockClient

from auth.jwt import create_token
from auth.password import hash_password
from config.settings import Settings
from database.mongo import TODOS, USERS, ensure_indexes
from main import create_app


@dataclass
class SeedUser:
    id: ObjectId
    email: str
    password: str
    tokens: List[str] = field(default_factory=list)

    @property
    def token(self) -> Optional[str]:
        return self.tokens[0] if self.tokens else None


@pytest.fixture
def settings() -> Settings:
    return Settings(
        mongodb_database="todo_test",
        jwt_secret="test-secret",
        bcrypt_rounds=4,
    )


@pytest.fixture
async def db(settings):
    database = AsyncMongoMockClient()[settings.mongodb_database]
    await ensure_indexes(database)
    return database


@pytest.fixture
async def seed_todos(db):
    todos = [
        {"_id": ObjectId(), "text": "First test todo", "completed": False, "completedAt": None},
        {"_id": ObjectId(), "text": "Second test todo", "completed": True, "completedAt": 333},
    ]
    await db[TODOS].insert_many([dict(t) for t in todos])
    return todos


@pytest.fixture
async def seed_users(db, settings):
    one = SeedUser(id=ObjectId(), email="andrew@example.com", password="userOnePass")
    two = SeedUser(id=ObjectId(), email="jen@example.com", password="userTwoPass")
    one.tokens.append(create_token(str(one.id), "auth", settings=settings))

    for user in (one, two):
        await db[USERS].insert_one(
            {
                "_id": user.id,
                "email": user.email,
                "password": await hash_password(user.password, settings),
                "tokens": [{"access": "auth", "token": t} for t in user.tokens],
            }
        )
    return [one, two]


@pytest.fixture
async def client(settings, db, seed_todos, seed_users):
    app = create_app(settings=settings, db=db)
    transport = httpx.ASGITransport(app=app)
    async with httpx.AsyncClient(transport=transport, base_url="http://test") as ac:
        yield ac
