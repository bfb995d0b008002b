from __future__ import annotations

import jwt
from fastapi import APIRouter, HTTPException, status

from app.deps import UserDep
from app.schemas.auth import AuthMeResponse, RefreshRequest, TokenResponse
from app.services.auth_service import create_access_token, decode_token


router = APIRouter()


@router.post("/refresh", response_model=TokenResponse)
async def refresh_token(payload: RefreshRequest) -> TokenResponse:
    """Exchange a valid refresh token for a new access token."""

    try:
        claims = decode_token(payload.refresh_token)
    except jwt.PyJWTError:
        raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED)
    if claims.get("typ") != "refresh":
        raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED)

    sub = claims.get("sub")
    if not sub:
        raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED)

    return TokenResponse(access_token=create_access_token(subject=sub))


@router.get("/me", response_model=AuthMeResponse)
async def get_me(current_user: UserDep) -> AuthMeResponse:
    """Return identity of the authenticated user.

    The id is the owner identifier stamped on the species records the user
    authors.
    """

    return AuthMeResponse(
        id=current_user.id,
        sub=current_user.email,
        full_name=current_user.full_name,
        admin=bool(current_user.admin),
    )
