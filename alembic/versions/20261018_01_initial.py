"""initial species catalog schema

Revision ID: 20261018_01_initial
Revises:
Create Date: 2026-10-18

"""

from __future__ import annotations

from alembic import op
import sqlalchemy as sa
from sqlalchemy.dialects import postgresql


# revision identifiers, used by Alembic.
revision = "20261018_01_initial"
down_revision = None
branch_labels = None
depends_on = None


KINGDOMS = ("Animalia", "Plantae", "Fungi", "Protista", "Archaea", "Bacteria")


def _timestamps() -> list[sa.Column]:
    return [
        sa.Column(
            "created_at",
            sa.DateTime(timezone=True),
            server_default=sa.text("now()"),
            nullable=False,
        ),
        sa.Column(
            "updated_at",
            sa.DateTime(timezone=True),
            server_default=sa.text("now()"),
            nullable=False,
        ),
    ]


def upgrade() -> None:
    kingdom_type = postgresql.ENUM(*KINGDOMS, name="kingdom_type")
    kingdom_type.create(op.get_bind(), checkfirst=True)

    op.create_table(
        "users",
        sa.Column("id", sa.Integer(), primary_key=True, autoincrement=True),
        sa.Column("email", sa.String(length=320), nullable=False),
        sa.Column("full_name", sa.String(length=255), nullable=True),
        sa.Column(
            "admin", sa.Boolean(), nullable=False, server_default=sa.text("false")
        ),
        *_timestamps(),
    )
    op.create_index("ix_users_email", "users", ["email"], unique=True)

    op.create_table(
        "species",
        sa.Column("id", sa.Integer(), primary_key=True, autoincrement=True),
        sa.Column("scientific_name", sa.String(length=255), nullable=False),
        sa.Column("common_name", sa.String(length=255), nullable=True),
        sa.Column(
            "kingdom",
            postgresql.ENUM(*KINGDOMS, name="kingdom_type", create_type=False),
            nullable=False,
            server_default="Animalia",
        ),
        sa.Column("total_population", sa.BigInteger(), nullable=True),
        sa.Column("image", sa.Text(), nullable=True),
        sa.Column("description", sa.Text(), nullable=True),
        sa.Column(
            "author",
            sa.Integer(),
            sa.ForeignKey("users.id"),
            nullable=False,
        ),
        *_timestamps(),
        sa.CheckConstraint(
            "length(trim(scientific_name)) > 0", name="ck_species_scientific_name"
        ),
        sa.CheckConstraint(
            "total_population IS NULL OR total_population >= 1",
            name="ck_species_total_population",
        ),
    )
    op.create_index("ix_species_scientific_name", "species", ["scientific_name"])
    op.create_index("ix_species_author", "species", ["author"])

    op.create_table(
        "activity_logs",
        sa.Column("id", sa.Integer(), primary_key=True, autoincrement=True),
        sa.Column(
            "actor_id", sa.Integer(), sa.ForeignKey("users.id"), nullable=True
        ),
        sa.Column("action", sa.String(length=64), nullable=False),
        sa.Column("target_type", sa.String(length=64), nullable=False),
        sa.Column("target_id", sa.Integer(), nullable=True),
        sa.Column("details", sa.JSON(), nullable=True),
        *_timestamps(),
    )
    op.create_index("ix_activity_logs_actor_id", "activity_logs", ["actor_id"])
    op.create_index("ix_activity_logs_action", "activity_logs", ["action"])
    op.create_index("ix_activity_logs_target_type", "activity_logs", ["target_type"])
    op.create_index("ix_activity_logs_target_id", "activity_logs", ["target_id"])


def downgrade() -> None:
    op.drop_table("activity_logs")
    op.drop_table("species")
    op.drop_table("users")
    postgresql.ENUM(name="kingdom_type").drop(op.get_bind(), checkfirst=True)
