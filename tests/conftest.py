import os
import sys
from pathlib import Path

import pytest
from fastapi import FastAPI
from httpx import AsyncClient, ASGITransport

# Ensure the project root is importable so `app.*` modules resolve
_PROJECT_DIR = Path(__file__).resolve().parents[1]
if str(_PROJECT_DIR) not in sys.path:
    sys.path.insert(0, str(_PROJECT_DIR))

# Settings are read once per process, before the app modules are imported
os.environ.setdefault("DEBUG", "true")
os.environ.setdefault("DB_ECHO", "false")
os.environ.setdefault("JWT_SECRET", "test-secret")

from app.main import create_app  # noqa: E402
from db.session import get_db  # noqa: E402
from tests.utils.fake_session import FakeSession  # noqa: E402


@pytest.fixture()
def app() -> FastAPI:
    return create_app()


@pytest.fixture()
async def async_client(app: FastAPI):
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://testserver") as client:
        yield client
    app.dependency_overrides.clear()


@pytest.fixture()
def fake_db(app: FastAPI) -> FakeSession:
    """In-memory session installed as the `get_db` dependency."""
    session = FakeSession()

    async def _override_get_db():
        yield session

    app.dependency_overrides[get_db] = _override_get_db
    return session


# Lightweight fallback for pytest-mock's 'mocker' fixture when the plugin isn't loaded
@pytest.fixture()
def mocker():
    from unittest.mock import AsyncMock, MagicMock, create_autospec, patch

    class _SimpleMocker:
        def __init__(self):
            self._patchers: list = []
            self.AsyncMock = AsyncMock
            self.MagicMock = MagicMock
            self.create_autospec = create_autospec

        def patch(self, target: str, *args, **kwargs):
            p = patch(target, *args, **kwargs)
            mocked = p.start()
            self._patchers.append(p)
            return mocked

    m = _SimpleMocker()
    try:
        yield m
    finally:
        for p in reversed(m._patchers):
            p.stop()
