from __future__ import annotations

from pathlib import Path as FilePath
from typing import Annotated, NamedTuple

from fastapi import APIRouter, HTTPException, Path, Query, Request, status
from fastapi.responses import HTMLResponse, RedirectResponse, Response
from fastapi.templating import Jinja2Templates

from app.core.logging import logger
from app.deps import DbDep, OptionalUserDep
from app.models.species import Kingdom, Species
from app.models.user import User
from app.schemas.species import SpeciesForm
from app.schemas.ui import Notification
from app.services.species_card import SpeciesCard, summarize_description
from app.services.species_edit import EditStatus, submit_species_edit
from app.services.species_service import (
    get_species,
    list_species,
    update_species,
)
from core.settings import get_settings


router = APIRouter()

templates = Jinja2Templates(
    directory=str(FilePath(__file__).resolve().parents[1] / "templates")
)
templates.env.filters["summarize"] = lambda text: summarize_description(
    text, get_settings().description_preview_length
)

LISTING_URL = "/species/view"

# Record ids with an edit currently being saved by this process
_saving: set[int] = set()


class _Viewer(NamedTuple):
    # Plain values; a failed save rolls back and expires the session's users
    owner_id: int | None
    name: str | None
    admin: bool = False


def _viewer(user: User | None) -> _Viewer:
    if user is None:
        return _Viewer(None, None)
    return _Viewer(user.id, user.full_name or user.email, bool(user.admin))


def _render_listing(
    request: Request,
    species: list[Species],
    viewer: _Viewer,
    *,
    active: SpeciesCard | None = None,
    notifications: list[Notification] | None = None,
    status_code: int = status.HTTP_200_OK,
) -> HTMLResponse:
    cards = [
        active
        if active is not None and active.species.id == row.id
        else SpeciesCard(row, viewer.owner_id, admin=viewer.admin)
        for row in species
    ]
    return templates.TemplateResponse(
        request,
        "species/list.html",
        {
            "cards": cards,
            "kingdoms": list(Kingdom),
            "viewer": viewer,
            "notifications": notifications or [],
            "listing_url": LISTING_URL,
        },
        status_code=status_code,
    )


@router.get("", response_class=HTMLResponse)
async def species_listing(
    request: Request, db: DbDep, user: OptionalUserDep
) -> HTMLResponse:
    """Render all species as cards."""
    return _render_listing(request, await list_species(db), _viewer(user))


@router.get("/{species_id}", response_class=HTMLResponse)
async def species_card_panel(
    request: Request,
    db: DbDep,
    user: OptionalUserDep,
    species_id: Annotated[int, Path(ge=1)],
    panel: Annotated[str | None, Query(pattern="^(details|edit)$")] = None,
) -> HTMLResponse:
    """Render the listing with the details or edit dialog of one card open.

    The edit dialog is only served to the record's author or an admin (403).
    """

    species = await get_species(db, species_id)
    if species is None:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND)
    viewer = _viewer(user)
    card = SpeciesCard.from_panel(species, viewer.owner_id, panel, admin=viewer.admin)
    if card.edit_open and not card.can_edit:
        raise HTTPException(status_code=status.HTTP_403_FORBIDDEN)
    return _render_listing(request, await list_species(db), viewer, active=card)


@router.post("/{species_id}/edit", response_class=HTMLResponse)
async def submit_species_edit_form(
    request: Request,
    db: DbDep,
    user: OptionalUserDep,
    species_id: Annotated[int, Path(ge=1)],
) -> Response:
    """Handle the edit dialog form.

    Redirects to the listing (303) once saved so the page re-fetches the
    records. Invalid input re-renders the open dialog with field messages
    (422); a failed save re-renders it with a notification (400). A second
    submission for a record that is still being saved gets 409.
    """

    species = await get_species(db, species_id)
    if species is None:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND)

    viewer = _viewer(user)
    raw = dict(await request.form())
    card = SpeciesCard.from_panel(species, viewer.owner_id, "edit", admin=viewer.admin)
    notifications: list[Notification] = []

    if species_id in _saving:
        logger.info("Rejecting concurrent edit of species %s", species_id)
        card.enter_values(raw)
        notifications.append(
            Notification(
                title="Update in progress",
                description="This species is already being saved. Try again shortly.",
                variant="destructive",
            )
        )
        return _render_listing(
            request,
            await list_species(db),
            viewer,
            active=card,
            notifications=notifications,
            status_code=status.HTTP_409_CONFLICT,
        )

    async def persist(record_id: int, form: SpeciesForm) -> Species:
        return await update_species(db, record_id, form, editor=user)

    refreshed: list[bool] = []
    _saving.add(species_id)
    try:
        outcome = await submit_species_edit(
            card,
            raw,
            persist=persist,
            notify=notifications.append,
            refresh=lambda: refreshed.append(True),
        )
    finally:
        _saving.discard(species_id)

    if outcome.status is EditStatus.SAVED and refreshed:
        return RedirectResponse(url=LISTING_URL, status_code=status.HTTP_303_SEE_OTHER)

    code = (
        status.HTTP_422_UNPROCESSABLE_ENTITY
        if outcome.status is EditStatus.INVALID
        else status.HTTP_400_BAD_REQUEST
    )
    # Re-fetching also reloads rows expired by a rolled back save
    return _render_listing(
        request,
        await list_species(db),
        viewer,
        active=card,
        notifications=notifications,
        status_code=code,
    )
