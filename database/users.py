"""
User repository — signup, login and token bookkeeping for ``users``.

A user document looks like::

    {"_id": ObjectId, "email": str, "password": <bcrypt hash>,
     "tokens": [{"access": "auth", "token": str}, ...]}
"""

from __future__ import annotations

import logging
from typing import Optional, Tuple

from bson import ObjectId
from motor.motor_asyncio import AsyncIOMotorDatabase
from pymongo.errors import DuplicateKeyError

from auth.jwt import create_token, verify_token
from auth.password import hash_password, verify_password
from config.settings import Settings
from database.models import User
from database.mongo import USERS
from utils.errors import DuplicateEmail, InvalidCredentials, Unauthenticated
from utils.validators import check_password, normalize_email

logger = logging.getLogger(__name__)


class UserRepository:
    def __init__(self, db: AsyncIOMotorDatabase, settings: Settings):
        self._collection = db[USERS]
        self._settings = settings

    def _issue_token(self, user_id: ObjectId) -> dict:
        access = self._settings.token_access
        token = create_token(str(user_id), access, settings=self._settings)
        return {"access": access, "token": token}

    async def find_by_email(self, email: str) -> Optional[User]:
        doc = await self._collection.find_one({"email": email.strip().lower()})
        return User.from_document(doc) if doc else None

    async def signup(self, email: Optional[str], password: Optional[str]) -> Tuple[User, str]:
        """Store a new user with a hashed password and its first token."""
        email = normalize_email(email)
        password = check_password(password, self._settings.password_min_length)

        if await self._collection.find_one({"email": email}, {"_id": 1}):
            raise DuplicateEmail(email)

        user_id = ObjectId()
        entry = self._issue_token(user_id)
        doc = {
            "_id": user_id,
            "email": email,
            "password": await hash_password(password, self._settings),
            "tokens": [entry],
        }
        try:
            await self._collection.insert_one(doc)
        except DuplicateKeyError:
            raise DuplicateEmail(email)

        logger.info("Registered user %s", user_id)
        return User.from_document(doc), entry["token"]

    async def login(self, email: Optional[str], password: Optional[str]) -> Tuple[User, str]:
        """Check credentials and append a fresh token for this session."""
        if not email or password is None:
            raise InvalidCredentials()

        doc = await self._collection.find_one({"email": email.strip().lower()})
        if doc is None:
            raise InvalidCredentials()
        matches = await verify_password(password, doc.get("password", ""))
        if not matches:
            raise InvalidCredentials()

        entry = self._issue_token(doc["_id"])
        await self._collection.update_one(
            {"_id": doc["_id"]}, {"$push": {"tokens": entry}}
        )
        doc.setdefault("tokens", []).append(entry)

        logger.info("Login: %s", doc["_id"])
        return User.from_document(doc), entry["token"]

    async def find_by_token(self, token: Optional[str]) -> User:
        """
        Resolve a bearer token to its owner.

        The signature and expiry are checked first; the token must then
        still be present in the owner's ``tokens`` list.
        """
        claims = verify_token(token, settings=self._settings)
        if not ObjectId.is_valid(claims.user_id):
            raise Unauthenticated("Malformed token payload")

        doc = await self._collection.find_one(
            {
                "_id": ObjectId(claims.user_id),
                "tokens": {"$elemMatch": {"token": token, "access": claims.access}},
            }
        )
        if doc is None:
            raise Unauthenticated("Token not recognised")
        return User.from_document(doc)

    async def remove_token(self, user_id: str, token: str) -> None:
        await self._collection.update_one(
            {"_id": ObjectId(user_id)}, {"$pull": {"tokens": {"token": token}}}
        )
        logger.info("Logout: %s", user_id)
