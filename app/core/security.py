"""Bearer-token authentication: every API call is scoped to the token's user."""

from __future__ import annotations

import uuid
from dataclasses import dataclass
from datetime import datetime, timedelta, timezone
from typing import Any

import jwt
from fastapi import Header

from app.core.config import settings
from app.core.exceptions import UnauthorizedError


@dataclass(frozen=True)
class CurrentUser:
    user_id: str
    email: str | None = None


def create_access_token(
    user_id: str,
    *,
    email: str | None = None,
    expires_in: timedelta | None = None,
) -> str:
    """Issue a signed access token for *user_id*."""
    now = datetime.now(timezone.utc)
    ttl = expires_in or timedelta(minutes=settings.jwt_access_token_ttl_minutes)
    payload: dict[str, Any] = {
        "sub": str(user_id),
        "iat": now,
        "exp": now + ttl,
        "jti": str(uuid.uuid4()),
    }
    if email:
        payload["email"] = email
    return jwt.encode(payload, settings.jwt_secret, algorithm=settings.jwt_algorithm)


def decode_access_token(token: str) -> dict[str, Any]:
    try:
        claims = jwt.decode(
            token,
            settings.jwt_secret,
            algorithms=[settings.jwt_algorithm],
            options={"require": ["sub", "exp"]},
        )
    except jwt.ExpiredSignatureError as exc:
        raise UnauthorizedError("Token has expired") from exc
    except jwt.PyJWTError as exc:
        raise UnauthorizedError("Invalid authentication token") from exc
    return claims


def _extract_bearer_token(authorization: str | None) -> str:
    if authorization is None or not authorization.strip():
        raise UnauthorizedError("No authenticated user found")
    parts = authorization.strip().split(" ", 1)
    if len(parts) != 2 or parts[0].lower() != "bearer" or not parts[1].strip():
        raise UnauthorizedError("Authorization header must use Bearer token")
    return parts[1].strip()


async def get_current_user(
    authorization: str | None = Header(default=None),
) -> CurrentUser:
    """FastAPI dependency: resolve the caller or fail with 401."""
    claims = decode_access_token(_extract_bearer_token(authorization))
    user_id = str(claims.get("sub") or "").strip()
    if not user_id:
        raise UnauthorizedError("Token claims are missing the user id")
    return CurrentUser(user_id=user_id, email=claims.get("email"))
