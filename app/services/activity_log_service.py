from __future__ import annotations

"""Service helpers for creating activity log entries.

Species edits record an audit row through `log_activity` instead of
constructing ``ActivityLog`` rows directly.
"""

from typing import Any

from sqlalchemy.ext.asyncio import AsyncSession

from app.models.activity_log import ActivityLog


def log_activity(
    db: AsyncSession,
    *,
    actor_id: int | None,
    action: str,
    target_type: str,
    target_id: int | None = None,
    details: dict[str, Any] | None = None,
) -> ActivityLog:
    """Add a single ``ActivityLog`` entry to the caller's transaction.

    Args:
        db: Async SQLAlchemy session.
        actor_id: Optional user id that performed the action.
        action: Machine-readable action label (e.g. ``"species_updated"``).
        target_type: Logical target type (e.g. ``"species"``).
        target_id: Optional primary key of the affected entity.
        details: Optional JSON-serializable dict with extra context.

    Returns:
        The ``ActivityLog`` instance added to the session. The caller commits.
    """

    entry = ActivityLog(
        actor_id=actor_id,
        action=action,
        target_type=target_type,
        target_id=target_id,
        details=details or None,
    )
    db.add(entry)
    return entry
