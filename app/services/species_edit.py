"""Validated submission of the species edit form.

`submit_species_edit` is shared by the HTML edit dialog and its tests. It
validates the raw form input, hands valid data to a persistence callable
and reports the outcome through the notification and refresh callables it
is given, so the flow does not depend on how those are delivered.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import StrEnum
from typing import Any, Awaitable, Callable, Mapping

from pydantic import ValidationError

from app.core.logging import logger
from app.models.species import Species
from app.schemas.species import SpeciesForm
from app.schemas.ui import Notification
from app.services.species_card import FORM_FIELDS, SpeciesCard
from app.services.species_service import SpeciesUpdateError


Persist = Callable[[int, SpeciesForm], Awaitable[Species]]
Notify = Callable[[Notification], None]
Refresh = Callable[[], None]

FAILURE_TITLE = "Something went wrong."


class EditStatus(StrEnum):
    SAVED = "saved"
    INVALID = "invalid"
    FAILED = "failed"
    BUSY = "busy"


@dataclass
class EditOutcome:
    status: EditStatus
    species: Species | None = None
    field_errors: dict[str, str] = field(default_factory=dict)
    notification: Notification | None = None


def _message(error: Mapping[str, Any]) -> str:
    msg = str(error.get("msg", "Invalid value"))
    # Messages raised from our own validators are prefixed by pydantic
    return msg.removeprefix("Value error, ")


def validate_species_form(
    raw: Mapping[str, Any],
) -> tuple[SpeciesForm | None, dict[str, str]]:
    """Validate raw edit input.

    Args:
        raw: Field values as submitted, e.g. HTML form data.

    Returns:
        ``(form, {})`` when valid, otherwise ``(None, errors)`` where
        ``errors`` maps each failing field to its first message.
    """

    data = {k: raw[k] for k in FORM_FIELDS if k in raw}
    try:
        return SpeciesForm.model_validate(data), {}
    except ValidationError as exc:
        errors: dict[str, str] = {}
        for err in exc.errors():
            name = str(err["loc"][0]) if err.get("loc") else "__all__"
            errors.setdefault(name, _message(err))
        return None, errors


async def submit_species_edit(
    card: SpeciesCard,
    raw: Mapping[str, Any],
    *,
    persist: Persist,
    notify: Notify,
    refresh: Refresh,
) -> EditOutcome:
    """Validate and save the edit form of `card`.

    On success the card's form values become the saved (normalized) data,
    the card closes and `refresh` is called once. On a persistence error a
    destructive notification carrying the error message is sent and the
    card stays in edit mode with the values as entered.

    Args:
        card: Card whose edit dialog was submitted.
        raw: Submitted field values.
        persist: Saves a validated form for a record id.
        notify: Receives failure notifications.
        refresh: Asks the enclosing view to reload its records.

    Returns:
        EditOutcome describing what happened.
    """

    if card.submitting:
        logger.info("Ignoring edit of species %s: save in progress", card.species.id)
        return EditOutcome(EditStatus.BUSY)

    if not card.edit_open:
        card.open_edit()
    card.enter_values(raw)

    form, errors = validate_species_form(raw)
    if form is None:
        card.field_errors = errors
        return EditOutcome(EditStatus.INVALID, field_errors=errors)

    card.field_errors = {}
    card.begin_submit()
    try:
        saved = await persist(card.species.id, form)
    except SpeciesUpdateError as exc:
        card.submit_failed()
        notification = Notification(
            title=FAILURE_TITLE, description=str(exc), variant="destructive"
        )
        notify(notification)
        return EditOutcome(EditStatus.FAILED, notification=notification)
    except BaseException:
        # Leave the card editable if the save is cancelled or crashes
        card.submit_failed()
        raise

    card.species = saved
    card.submit_succeeded(form.model_dump())
    refresh()
    return EditOutcome(EditStatus.SAVED, species=saved)
