from __future__ import annotations

from typing import Annotated

from fastapi import APIRouter, HTTPException, Path, status

from app.deps import DbDep, UserDep
from app.models.species import Species
from app.schemas.species import SpeciesForm, SpeciesRead
from app.services.species_service import (
    SpeciesConflictError,
    SpeciesNotFoundError,
    SpeciesPermissionError,
    SpeciesUpdateError,
    get_species as svc_get_species,
    list_species as svc_list_species,
    update_species as svc_update_species,
)


router = APIRouter()


@router.get("", response_model=list[SpeciesRead])
async def list_species(db: DbDep) -> list[Species]:
    """Return all species ordered by scientific name."""
    return await svc_list_species(db)


@router.get("/{species_id}", response_model=SpeciesRead)
async def get_species(
    db: DbDep, species_id: Annotated[int, Path(ge=1)]
) -> Species:
    """Return one species record. Returns 404 if not found."""

    species = await svc_get_species(db, species_id)
    if species is None:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND)
    return species


@router.put("/{species_id}", response_model=SpeciesRead)
async def update_species(
    user: UserDep,
    db: DbDep,
    payload: SpeciesForm,
    species_id: Annotated[int, Path(ge=1)],
) -> Species:
    """Replace all editable fields of a species record.

    Returns 404 if not found, 403 when the caller is neither the author nor
    an admin, 409 when the database rejects the row and 503 on other
    database failures.
    """

    try:
        return await svc_update_species(db, species_id, payload, editor=user)
    except SpeciesNotFoundError as exc:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(exc))
    except SpeciesPermissionError as exc:
        raise HTTPException(status_code=status.HTTP_403_FORBIDDEN, detail=str(exc))
    except SpeciesConflictError as exc:
        raise HTTPException(status_code=status.HTTP_409_CONFLICT, detail=str(exc))
    except SpeciesUpdateError as exc:
        raise HTTPException(
            status_code=status.HTTP_503_SERVICE_UNAVAILABLE, detail=str(exc)
        )
