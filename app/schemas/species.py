from __future__ import annotations

from typing import Any

from pydantic import BaseModel, ConfigDict, Field, HttpUrl, TypeAdapter, field_validator

from app.models.species import Kingdom


# Image URLs end up in href and src attributes: http(s) only
_URL = TypeAdapter(HttpUrl)


class SpeciesForm(BaseModel):
    """Validated input for editing a species record.

    Every field of the record is carried, updates are never partial.
    Surrounding whitespace is stripped from all text; blank optional text
    becomes ``None`` so the database never stores empty strings.
    """

    model_config = ConfigDict(str_strip_whitespace=True)

    scientific_name: str = Field(min_length=1, max_length=255)
    common_name: str | None = Field(default=None, max_length=255)
    kingdom: Kingdom = Kingdom.ANIMALIA
    total_population: int | None = Field(default=None, ge=1)
    image: str | None = None
    description: str | None = None

    @field_validator("total_population", mode="before")
    @classmethod
    def blank_population_is_absent(cls, v: Any) -> Any:
        # bool is an int subclass and would otherwise be read as 0 or 1
        if isinstance(v, bool):
            raise ValueError("Total population must be a whole number")
        # HTML number inputs submit "" when left empty
        if isinstance(v, str):
            v = v.strip()
            return v or None
        return v

    @field_validator("common_name", "description", "image")
    @classmethod
    def blank_is_absent(cls, v: str | None) -> str | None:
        return v or None

    @field_validator("image")
    @classmethod
    def validate_image_url(cls, v: str | None) -> str | None:
        if v is None:
            return None
        try:
            _URL.validate_python(v)
        except ValueError:
            raise ValueError("Image must be a valid URL")
        # Keep the URL as typed (trimmed) rather than the normalized form
        return v


class SpeciesRead(BaseModel):
    id: int
    scientific_name: str
    common_name: str | None = None
    kingdom: Kingdom
    total_population: int | None = None
    image: str | None = None
    description: str | None = None
    author: int

    model_config = {"from_attributes": True}
