from __future__ import annotations

from datetime import datetime, timedelta, timezone
from typing import Any

import jwt

from core.settings import get_settings


def _encode(claims: dict[str, Any], lifetime: timedelta) -> str:
    settings = get_settings()
    payload = {**claims, "exp": datetime.now(timezone.utc) + lifetime}
    return jwt.encode(
        payload,
        settings.jwt_secret.get_secret_value(),
        algorithm=settings.jwt_algorithm,
    )


def create_access_token(subject: str) -> str:
    """Sign an access token for a user email.

    Access tokens authorize species edits, sent either as a Bearer header or
    as the ``access_token`` cookie of the HTML pages.
    """

    minutes = get_settings().access_token_expires_minutes
    return _encode({"sub": subject}, timedelta(minutes=minutes))


def create_refresh_token(subject: str) -> str:
    """Sign a refresh token, only accepted by ``POST /auth/refresh``."""

    days = get_settings().refresh_token_expires_days
    return _encode({"sub": subject, "typ": "refresh"}, timedelta(days=days))


def decode_token(token: str) -> dict[str, Any]:
    """Verify a token and return its claims.

    Raises:
        jwt.PyJWTError: Bad signature, expired, or missing ``sub``/``exp``.
    """

    settings = get_settings()
    return jwt.decode(
        token,
        settings.jwt_secret.get_secret_value(),
        algorithms=[settings.jwt_algorithm],
        options={"require": ["exp", "sub"]},
    )
