"""
JWT-style token creation and verification.

Tokens are base64-encoded JSON payloads signed with HMAC-SHA256.
Secret key is loaded from ``config.jwt_secret`` (env var: ``JWT_SECRET``).
A valid signature only proves the token was issued by this service; the
caller must still find it in the owner's ``tokens`` list, which is how
tokens get revoked.
"""

from __future__ import annotations

import binascii
import hashlib
import hmac
import json
import secrets
import time
from base64 import b64decode, b64encode
from dataclasses import dataclass
from typing import Optional

from config.settings import Settings, config
from utils.errors import Unauthenticated


@dataclass(frozen=True)
class TokenClaims:
    user_id: str
    access: str
    exp: int
    jti: str = ""


def create_token(
    user_id: str,
    access: Optional[str] = None,
    settings: Optional[Settings] = None,
) -> str:
    """Create a signed token for ``user_id`` with access scope, expiry and nonce."""
    settings = settings or config
    payload = {
        "user_id": user_id,
        "access": access or settings.token_access,
        "exp": int(time.time()) + settings.jwt_expiry_seconds,
        "jti": secrets.token_hex(8),  # distinct per session, even within one second
    }
    raw = json.dumps(payload).encode()
    sig = hmac.new(settings.jwt_secret.encode(), raw, hashlib.sha256).hexdigest()
    return b64encode(raw).decode() + "." + sig


def verify_token(token: Optional[str], settings: Optional[Settings] = None) -> TokenClaims:
    """
    Verify signature and expiry and return the embedded claims.

    Raises ``Unauthenticated`` on malformed, tampered or expired tokens.
    """
    settings = settings or config
    if not token:
        raise Unauthenticated("Missing token")

    parts = token.split(".", 1)
    if len(parts) != 2:
        raise Unauthenticated("Malformed token")
    try:
        raw = b64decode(parts[0], validate=True)
    except (binascii.Error, ValueError):
        raise Unauthenticated("Malformed token")

    expected_sig = hmac.new(
        settings.jwt_secret.encode(), raw, hashlib.sha256
    ).hexdigest()
    if not hmac.compare_digest(parts[1].encode(), expected_sig.encode()):
        raise Unauthenticated("Bad token signature")

    try:
        payload = json.loads(raw)
        claims = TokenClaims(
            user_id=str(payload["user_id"]),
            access=str(payload["access"]),
            exp=int(payload["exp"]),
            jti=str(payload.get("jti", "")),
        )
    except (ValueError, KeyError, TypeError):
        raise Unauthenticated("Malformed token payload")

    if claims.exp < time.time():
        raise Unauthenticated("Token expired")
    return claims
