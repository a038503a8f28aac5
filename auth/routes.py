"""
User API routes — signup, login, current user, logout.
"""

from __future__ import annotations

from fastapi import APIRouter, Depends, Response

from api.dependencies import get_user_repository
from auth.dependencies import AUTH_HEADER, AuthContext, get_auth_context, get_current_user
from database.models import User
from database.users import UserRepository
from utils.schemas import UserCredentials, UserOut

router = APIRouter(prefix="/users", tags=["users"])


@router.post("", response_model=UserOut)
async def signup(
    req: UserCredentials,
    response: Response,
    users: UserRepository = Depends(get_user_repository),
) -> UserOut:
    """Register a new user; the session token comes back in ``x-auth``."""
    user, token = await users.signup(req.email, req.password)
    response.headers[AUTH_HEADER] = token
    return UserOut.from_user(user)


@router.get("/me", response_model=UserOut)
async def me(user: User = Depends(get_current_user)) -> UserOut:
    return UserOut.from_user(user)


@router.post("/login", response_model=UserOut)
async def login(
    req: UserCredentials,
    response: Response,
    users: UserRepository = Depends(get_user_repository),
) -> UserOut:
    """Login with email + password."""
    user, token = await users.login(req.email, req.password)
    response.headers[AUTH_HEADER] = token
    return UserOut.from_user(user)


@router.delete("/me/token")
async def logout(
    ctx: AuthContext = Depends(get_auth_context),
    users: UserRepository = Depends(get_user_repository),
) -> Response:
    """Revoke the token used for this request."""
    await users.remove_token(ctx.user.id, ctx.token)
    return Response(status_code=200)
