from __future__ import annotations

import argparse
import asyncio
import sys
from pathlib import Path
from typing import NoReturn

from sqlalchemy import select

# Ensure the project root (parent of this file's directory) is on sys.path
PROJECT_ROOT = Path(__file__).resolve().parents[1]
if str(PROJECT_ROOT) not in sys.path:
    sys.path.insert(0, str(PROJECT_ROOT))

from app.core.logging import logger  # noqa: E402
from app.models.user import User  # noqa: E402
from app.services.auth_service import (  # noqa: E402
    create_access_token,
    create_refresh_token,
)
from db.session import AsyncSessionLocal  # noqa: E402


async def _ensure_user(email: str, full_name: str | None, admin: bool) -> User:
    """Create or update a catalog user.

    Args:
        email: Email address, used as the token subject.
        full_name: Optional display name.
        admin: Whether the user may edit every species record.

    Returns:
        The persisted user.
    """

    async with AsyncSessionLocal() as session:
        result = await session.execute(select(User).where(User.email == email))
        user: User | None = result.scalar_one_or_none()

        if user is None:
            user = User(email=email, full_name=full_name, admin=admin)
            session.add(user)
            logger.info("Created user: %s", email)
        else:
            user.admin = admin
            if full_name:
                user.full_name = full_name
            logger.info("Updated user: %s", email)
        await session.commit()
        await session.refresh(user)
        return user


def main() -> NoReturn:
    """Upsert a user and print access and refresh tokens for it."""
    parser = argparse.ArgumentParser(description=main.__doc__)
    parser.add_argument("email")
    parser.add_argument("--name", default=None)
    parser.add_argument("--admin", action="store_true")
    args = parser.parse_args()

    user = asyncio.run(_ensure_user(args.email, args.name, args.admin))
    print(f"user id: {user.id}")
    print(f"access token: {create_access_token(subject=user.email)}")
    print(f"refresh token: {create_refresh_token(user.email)}")
    raise SystemExit(0)


if __name__ == "__main__":
    main()
