from __future__ import annotations

from enum import StrEnum

from sqlalchemy import BigInteger, CheckConstraint, Enum, ForeignKey, String, Text
from sqlalchemy.orm import Mapped, mapped_column, relationship

from app.models import Base, TimestampMixin
from app.models.user import User


class Kingdom(StrEnum):
    ANIMALIA = "Animalia"
    PLANTAE = "Plantae"
    FUNGI = "Fungi"
    PROTISTA = "Protista"
    ARCHAEA = "Archaea"
    BACTERIA = "Bacteria"


class Species(TimestampMixin, Base):
    """Species record shown as a card in the catalog.

    Attributes:
        id: Primary key.
        scientific_name: Binomial name, never blank.
        common_name: Vernacular name, ``None`` when unknown.
        kingdom: Taxonomic kingdom.
        total_population: Estimated number of living individuals (>= 1).
        image: URL of an illustrative picture.
        description: Free text description.
        author: Id of the user who created (and owns) the record.
    """

    __tablename__ = "species"
    __table_args__ = (
        CheckConstraint(
            "length(trim(scientific_name)) > 0", name="ck_species_scientific_name"
        ),
        CheckConstraint(
            "total_population IS NULL OR total_population >= 1",
            name="ck_species_total_population",
        ),
    )

    id: Mapped[int] = mapped_column(primary_key=True, autoincrement=True)
    scientific_name: Mapped[str] = mapped_column(String(255), index=True)
    common_name: Mapped[str | None] = mapped_column(String(255), nullable=True)
    kingdom: Mapped[Kingdom] = mapped_column(
        Enum(
            Kingdom,
            name="kingdom_type",
            values_callable=lambda e: [m.value for m in e],
        ),
        nullable=False,
        default=Kingdom.ANIMALIA,
        server_default=Kingdom.ANIMALIA.value,
    )
    total_population: Mapped[int | None] = mapped_column(BigInteger, nullable=True)
    image: Mapped[str | None] = mapped_column(Text, nullable=True)
    description: Mapped[str | None] = mapped_column(Text, nullable=True)

    author: Mapped[int] = mapped_column(
        ForeignKey(User.id), nullable=False, index=True
    )
    owner: Mapped[User] = relationship(User)
