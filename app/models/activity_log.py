from __future__ import annotations

from sqlalchemy import JSON, ForeignKey, String
from sqlalchemy.orm import Mapped, mapped_column, relationship

from app.models import Base, TimestampMixin
from app.models.user import User


class ActivityLog(TimestampMixin, Base):
    """Audit log entry for changes made to catalog records.

    Args:
        actor_id: Optional id of the user that performed the action.
        action: Machine-friendly action label (e.g. ``"species_updated"``).
        target_type: Logical target type of the action (e.g. ``"species"``).
        target_id: Optional primary key of the target entity.
        details: Optional JSON payload such as ``{"changed": ["common_name"]}``.
    """

    __tablename__ = "activity_logs"

    id: Mapped[int] = mapped_column(primary_key=True, autoincrement=True)

    actor_id: Mapped[int | None] = mapped_column(
        ForeignKey(User.id), nullable=True, index=True
    )
    actor: Mapped[User | None] = relationship(User)

    action: Mapped[str] = mapped_column(String(64), nullable=False, index=True)
    target_type: Mapped[str] = mapped_column(String(64), nullable=False, index=True)
    target_id: Mapped[int | None] = mapped_column(nullable=True, index=True)

    details: Mapped[dict | None] = mapped_column(JSON, nullable=True)
