from __future__ import annotations

import jwt
from fastapi import Depends, HTTPException, Request, status
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from app.models.user import User
from app.services.auth_service import decode_token
from db.session import get_db


ACCESS_TOKEN_COOKIE = "access_token"

_bearer = HTTPBearer(auto_error=False)


def _token_from_request(
    request: Request, creds: HTTPAuthorizationCredentials | None
) -> str | None:
    # Browsers posting the edit form carry the token as a cookie instead
    if creds is not None and creds.scheme.lower() == "bearer":
        return creds.credentials
    return request.cookies.get(ACCESS_TOKEN_COOKIE)


async def _user_for_token(db: AsyncSession, token: str) -> User | None:
    try:
        claims = decode_token(token)
    except jwt.PyJWTError:
        return None

    subject = claims.get("sub")
    if not subject or claims.get("typ") == "refresh":
        return None

    result = await db.execute(select(User).where(User.email == subject))
    return result.scalar_one_or_none()


async def get_optional_user(
    request: Request,
    db: AsyncSession = Depends(get_db),
    creds: HTTPAuthorizationCredentials | None = Depends(_bearer),
) -> User | None:
    """Resolve the current `User` if the request carries a valid token.

    Args:
        request: Incoming request, used to read the token cookie.
        db: Async SQLAlchemy session.
        creds: Bearer token extracted from the Authorization header.

    Returns:
        The matching `User`, or None for anonymous or invalid credentials.
    """

    token = _token_from_request(request, creds)
    if token is None:
        return None
    return await _user_for_token(db, token)


async def get_current_user(
    user: User | None = Depends(get_optional_user),
) -> User:
    """Require an authenticated user, raising 401 otherwise."""

    if user is None:
        raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED)
    return user


def can_edit_species(user: User | None, author_id: int) -> bool:
    """Return whether `user` may edit a species record owned by `author_id`."""

    if user is None:
        return False
    return bool(user.admin) or user.id == author_id
