from __future__ import annotations

from pydantic import BaseModel, EmailStr


class RefreshRequest(BaseModel):
    refresh_token: str


class TokenResponse(BaseModel):
    access_token: str
    token_type: str = "bearer"


class AuthMeResponse(BaseModel):
    """Response model for authenticated identity info."""

    id: int
    sub: EmailStr
    full_name: str | None = None
    admin: bool
