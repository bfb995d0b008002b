"""Pydantic schemas for data rendered by the species pages."""

from __future__ import annotations

from typing import Literal

from pydantic import BaseModel


class Notification(BaseModel):
    """Transient toast shown on top of the species listing.

    Args:
        title: Short headline.
        description: Detail text, e.g. the backend error message.
        variant: ``"destructive"`` for failures, ``"default"`` otherwise.
    """

    title: str
    description: str | None = None
    variant: Literal["default", "destructive"] = "default"
