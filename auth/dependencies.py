"""
FastAPI dependencies for authentication.

``get_current_user`` guards user-scoped routes: it reads the ``x-auth``
header, resolves it through the user repository and either hands the
owner to the route or short-circuits with an empty 401.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

from fastapi import Depends, Header
from pymongo.errors import PyMongoError

from api.dependencies import get_user_repository
from database.models import User
from database.users import UserRepository
from utils.errors import Unauthenticated

AUTH_HEADER = "x-auth"


@dataclass
class AuthContext:
    user: User
    token: str


async def get_auth_context(
    x_auth: Optional[str] = Header(default=None, alias=AUTH_HEADER),
    users: UserRepository = Depends(get_user_repository),
) -> AuthContext:
    """Resolve the presented token; raises ``Unauthenticated`` on any failure."""
    try:
        user = await users.find_by_token(x_auth)
    except PyMongoError as exc:
        raise Unauthenticated("Token lookup failed") from exc
    return AuthContext(user=user, token=x_auth)


async def get_current_user(ctx: AuthContext = Depends(get_auth_context)) -> User:
    return ctx.user
