from __future__ import annotations

from contextlib import asynccontextmanager
from typing import Sequence

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from app.routers.auth import router as auth_router
from app.routers.species import router as species_router
from app.routers.species_views import router as species_views_router
from core.settings import get_settings
from db.session import engine


@asynccontextmanager
async def lifespan(app: FastAPI):
    yield
    await engine.dispose()


def create_app(allowed_origins: Sequence[str] | None = None) -> FastAPI:
    """Build the species catalog application.

    Args:
        allowed_origins: CORS origins; defaults to ``CORS_ORIGINS`` from the
            environment.
    """

    settings = get_settings()
    app = FastAPI(title=settings.app_name, debug=settings.debug, lifespan=lifespan)
    app.add_middleware(
        CORSMiddleware,
        allow_origins=list(allowed_origins or settings.cors_origins),
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    app.include_router(auth_router, prefix="/auth", tags=["auth"])
    # Registered before /species/{species_id} so "view" is not read as an id
    app.include_router(species_views_router, prefix="/species/view", tags=["views"])
    app.include_router(species_router, prefix="/species", tags=["species"])

    @app.get("/health")
    async def health() -> dict[str, str]:
        return {"status": "ok"}

    return app


app = create_app()
