"""
Salted password storage for user documents.

Only the bcrypt digest is ever written to ``users.password``. Hashing is
CPU-bound, so both helpers run bcrypt on a worker thread and the request
loop keeps serving other requests meanwhile. The work factor comes from
``Settings.bcrypt_rounds`` (env var: ``BCRYPT_ROUNDS``).
"""

from __future__ import annotations

import asyncio
from typing import Optional

import bcrypt

from config.settings import Settings, config


def _digest(password: str, rounds: int) -> str:
    return bcrypt.hashpw(password.encode(), bcrypt.gensalt(rounds=rounds)).decode()


def _matches(password: str, stored: str) -> bool:
    try:
        return bcrypt.checkpw(password.encode(), stored.encode())
    except (ValueError, TypeError):
        # Not a bcrypt digest (e.g. an empty or legacy field).
        return False


async def hash_password(password: str, settings: Optional[Settings] = None) -> str:
    """Return a fresh salted digest of ``password``."""
    settings = settings or config
    return await asyncio.to_thread(_digest, password, settings.bcrypt_rounds)


async def verify_password(password: str, stored: str) -> bool:
    """Exact (case-sensitive) check of ``password`` against a stored digest."""
    return await asyncio.to_thread(_matches, password, stored)
