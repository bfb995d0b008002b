from __future__ import annotations

from typing import Sequence

from sqlalchemy import Select, select
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from app.core.logging import logger
from app.models.species import Species
from app.models.user import User
from app.schemas.species import SpeciesForm
from app.services.activity_log_service import log_activity
from app.services.security import can_edit_species


class SpeciesUpdateError(Exception):
    """A species update was rejected or failed in the database.

    The message is meant to be shown to the user as is.
    """


class SpeciesNotFoundError(SpeciesUpdateError):
    pass


class SpeciesPermissionError(SpeciesUpdateError):
    pass


class SpeciesConflictError(SpeciesUpdateError):
    pass


def _error_message(exc: Exception) -> str:
    # Prefer the driver's message over SQLAlchemy's wrapped representation
    orig = getattr(exc, "orig", None)
    return str(orig) if orig is not None else str(exc)


async def list_species(db: AsyncSession) -> list[Species]:
    """Return all species ordered by scientific name."""
    stmt: Select[tuple[Species]] = select(Species).order_by(
        Species.scientific_name, Species.id
    )
    rows: Sequence[Species] = (await db.execute(stmt)).scalars().all()
    return list(rows)


async def get_species(db: AsyncSession, species_id: int) -> Species | None:
    return await db.get(Species, species_id)


async def update_species(
    db: AsyncSession,
    species_id: int,
    payload: SpeciesForm,
    *,
    editor: User | None,
) -> Species:
    """Overwrite every editable field of one species record.

    The row is addressed by its own id. The editor must be the record's
    author or an admin. An activity log entry listing the changed fields is
    written in the same transaction.

    Args:
        db: Async SQLAlchemy session.
        species_id: Primary key of the record to update.
        payload: Validated form data.
        editor: User performing the edit, None when anonymous.

    Returns:
        The refreshed `Species` row.

    Raises:
        SpeciesNotFoundError: No record with that id.
        SpeciesPermissionError: Editor is anonymous or not allowed.
        SpeciesConflictError: The database rejected the row (integrity error).
        SpeciesUpdateError: Any other database failure.
    """

    row = await db.get(Species, species_id)
    if row is None:
        raise SpeciesNotFoundError(f"Species {species_id} does not exist")
    if editor is None:
        raise SpeciesPermissionError("You must be signed in to edit species")
    if not can_edit_species(editor, row.author):
        raise SpeciesPermissionError("You can only edit species you have added")

    data = payload.model_dump()
    changed = sorted(k for k, v in data.items() if getattr(row, k) != v)
    for k, v in data.items():
        setattr(row, k, v)

    log_activity(
        db,
        actor_id=editor.id,
        action="species_updated",
        target_type="species",
        target_id=row.id,
        details={"changed": changed},
    )

    try:
        await db.commit()
    except IntegrityError as exc:
        await db.rollback()
        logger.warning("Species %s update rejected", species_id, exc_info=True)
        raise SpeciesConflictError(_error_message(exc)) from exc
    except (SQLAlchemyError, OSError) as exc:
        await db.rollback()
        logger.warning("Species %s update failed", species_id, exc_info=True)
        raise SpeciesUpdateError(_error_message(exc)) from exc

    await db.refresh(row)
    logger.info(
        "Species %s updated by user %s (changed: %s)",
        species_id,
        editor.id,
        ", ".join(changed) or "nothing",
    )
    return row
