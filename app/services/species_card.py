from __future__ import annotations

"""UI state of a single species card.

A card shows at most one dialog at a time: the read-only details or the edit
form. While an edit is being saved the card is ``SUBMITTING`` and refuses
everything except the outcome of that save.
"""

from enum import StrEnum
from typing import Any, Mapping

from app.models.species import Species


class CardMode(StrEnum):
    CLOSED = "closed"
    VIEWING = "viewing"
    EDITING = "editing"
    SUBMITTING = "submitting"


class InvalidCardTransition(Exception):
    """Raised when a card event is not allowed in its current mode."""

    def __init__(self, mode: CardMode, event: str) -> None:
        super().__init__(f"Cannot {event} while card is {mode.value}")
        self.mode = mode
        self.event = event


# Query parameter values used by the listing page to reopen a dialog
PANEL_MODES: dict[str, CardMode] = {
    "details": CardMode.VIEWING,
    "edit": CardMode.EDITING,
}


FORM_FIELDS = (
    "scientific_name",
    "common_name",
    "kingdom",
    "total_population",
    "image",
    "description",
)


def display_values(values: Mapping[str, Any], partial: bool = False) -> dict[str, str]:
    """Render form values as input strings; absent values become ``""``.

    With `partial`, only the fields present in `values` are returned.
    """
    names = [k for k in FORM_FIELDS if k in values] if partial else FORM_FIELDS
    return {k: "" if values.get(k) is None else str(values[k]) for k in names}


def form_values_from_species(species: Species) -> dict[str, str]:
    """Initial edit form values for a record."""
    return display_values({k: getattr(species, k) for k in FORM_FIELDS})


def summarize_description(text: str | None, limit: int = 150) -> str:
    """Shorten a description for the card face.

    An ellipsis is appended only when the text was actually cut.
    """
    if not text:
        return ""
    if len(text) <= limit:
        return text.strip()
    return text[:limit].strip() + "..."


class SpeciesCard:
    """Card for one species record as seen by one viewer.

    Args:
        species: The record to display.
        owner_id: Id of the viewing user, None for anonymous viewers.
        mode: Initial mode, ``CLOSED`` unless a dialog is being restored.
        admin: Whether the viewer is an admin.
    """

    def __init__(
        self,
        species: Species,
        owner_id: int | None = None,
        mode: CardMode = CardMode.CLOSED,
        *,
        admin: bool = False,
    ) -> None:
        self.species = species
        self.owner_id = owner_id
        self.admin = admin
        self.mode = mode
        self.form_values: dict[str, str] = form_values_from_species(species)
        self.field_errors: dict[str, str] = {}

    @classmethod
    def from_panel(
        cls,
        species: Species,
        owner_id: int | None,
        panel: str | None,
        *,
        admin: bool = False,
    ) -> "SpeciesCard":
        mode = PANEL_MODES.get(panel or "", CardMode.CLOSED)
        return cls(species, owner_id, mode, admin=admin)

    @property
    def can_edit(self) -> bool:
        """Whether the viewer may edit this record: its author or an admin."""
        if self.owner_id is None:
            return False
        return self.admin or self.owner_id == self.species.author

    @property
    def details_open(self) -> bool:
        return self.mode is CardMode.VIEWING

    @property
    def edit_open(self) -> bool:
        return self.mode in (CardMode.EDITING, CardMode.SUBMITTING)

    @property
    def submitting(self) -> bool:
        return self.mode is CardMode.SUBMITTING

    def _require(self, event: str, *allowed: CardMode) -> None:
        if self.mode not in allowed:
            raise InvalidCardTransition(self.mode, event)

    def open_details(self) -> None:
        self._require("open details", CardMode.CLOSED, CardMode.VIEWING, CardMode.EDITING)
        self.mode = CardMode.VIEWING

    def open_edit(self) -> None:
        self._require("open edit", CardMode.CLOSED, CardMode.VIEWING, CardMode.EDITING)
        self.mode = CardMode.EDITING

    def close(self) -> None:
        self._require("close", CardMode.CLOSED, CardMode.VIEWING, CardMode.EDITING)
        self.mode = CardMode.CLOSED

    def enter_values(self, raw: Mapping[str, Any]) -> None:
        """Record what the user typed into the edit form."""
        self.form_values = {**self.form_values, **display_values(raw, partial=True)}

    def begin_submit(self) -> None:
        self._require("submit", CardMode.EDITING)
        self.mode = CardMode.SUBMITTING

    def submit_failed(self) -> None:
        self._require("finish submit", CardMode.SUBMITTING)
        self.mode = CardMode.EDITING

    def submit_succeeded(self, values: dict[str, Any]) -> None:
        """Close the editor and show the saved values on the next open."""
        self._require("finish submit", CardMode.SUBMITTING)
        self.form_values = display_values(values)
        self.field_errors = {}
        self.mode = CardMode.CLOSED
