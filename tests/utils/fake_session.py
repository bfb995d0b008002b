from __future__ import annotations

from typing import Any

from app.models.activity_log import ActivityLog
from app.models.species import Species
from app.services.species_card import FORM_FIELDS


class _FakeResult:
    def __init__(self, rows):
        self._rows = list(rows)

    def scalars(self):
        class _Scalars:
            def __init__(self, rows):
                self._rows = list(rows)

            def all(self):
                return list(self._rows)

        return _Scalars(self._rows)

    def scalar_one_or_none(self):
        return self._rows[0] if self._rows else None


class FakeSession:
    """In-memory stand-in for the AsyncSession used by the species services.

    Committed field values are snapshotted so `rollback` restores rows the
    way a real session reloads them after a failed transaction. Set
    `commit_error` to make the next commit raise.
    """

    def __init__(self, species: list[Species] | None = None):
        self.species: dict[int, Species] = {}
        self._committed: dict[int, dict[str, Any]] = {}
        self.activity: list[ActivityLog] = []
        self._pending: list[Any] = []
        self.commit_error: Exception | None = None
        self.commits = 0
        self.rollbacks = 0
        for row in species or []:
            self.put(row)

    def put(self, row: Species) -> Species:
        self.species[row.id] = row
        self._snapshot(row)
        return row

    def _snapshot(self, row: Species) -> None:
        self._committed[row.id] = {k: getattr(row, k) for k in FORM_FIELDS}

    async def execute(self, _stmt):  # type: ignore[no-untyped-def]
        # list_species orders by scientific name; mimic deterministic ordering
        rows = sorted(self.species.values(), key=lambda s: (s.scientific_name, s.id))
        return _FakeResult(rows)

    async def get(self, model, obj_id: int):  # type: ignore[no-untyped-def]
        if model is Species:
            return self.species.get(obj_id)
        return None

    def add(self, obj: Any) -> None:
        self._pending.append(obj)

    async def commit(self) -> None:
        if self.commit_error is not None:
            error, self.commit_error = self.commit_error, None
            raise error
        for obj in self._pending:
            if isinstance(obj, ActivityLog):
                obj.id = len(self.activity) + 1
                self.activity.append(obj)
        self._pending.clear()
        for row in self.species.values():
            self._snapshot(row)
        self.commits += 1

    async def rollback(self) -> None:
        self._pending.clear()
        for species_id, values in self._committed.items():
            for k, v in values.items():
                setattr(self.species[species_id], k, v)
        self.rollbacks += 1

    async def refresh(self, _obj: Any) -> None:
        # Objects are already live Python instances; nothing to do.
        return None
