# type: ignore
# pyright: reportMissingImports=false, reportGeneralTypeErrors=false
"""Data-access layer for availability slots and weekly schedules."""
from datetime import datetime
from typing import Any, Optional

from studio.repositories.document_store import DocumentStore

AVAILABILITY = "crew_availability"
WEEKLY_SCHEDULES = "crew_schedules"


class AvailabilityRepository:
    def __init__(self, store: DocumentStore):
        self._store = store

    # ── Read ──

    def get(self, slot_id: str) -> Optional[dict[str, Any]]:
        return self._store.get(AVAILABILITY, slot_id)

    def overlapping(
        self,
        crew_member_id: str,
        start: datetime,
        end: datetime,
        types: Optional[tuple[str, ...]] = None,
    ) -> list[dict[str, Any]]:
        """Slots of one member whose interval intersects [start, end)."""
        where = [
            ("crew_member_id", "==", crew_member_id),
            ("start_time", "<", end),
            ("end_time", ">", start),
        ]
        if types:
            where.append(("type", "in", list(types)))
        return self._store.query(AVAILABILITY, where=where, order_by="start_time")

    def within(self, crew_member_id: str, start: datetime, end: datetime) -> list[dict[str, Any]]:
        """Slots of one member lying entirely inside [start, end]."""
        return self._store.query(
            AVAILABILITY,
            where=[
                ("crew_member_id", "==", crew_member_id),
                ("start_time", ">=", start),
                ("end_time", "<=", end),
            ],
            order_by="start_time",
        )

    def upcoming_available(self, crew_member_id: str, after: datetime) -> Optional[dict[str, Any]]:
        found = self._store.query(
            AVAILABILITY,
            where=[
                ("crew_member_id", "==", crew_member_id),
                ("type", "==", "available"),
                ("start_time", ">=", after),
            ],
            order_by="start_time",
            limit=1,
        )
        return found[0] if found else None

    def get_schedule(self, crew_member_id: str) -> Optional[dict[str, Any]]:
        return self._store.get(WEEKLY_SCHEDULES, crew_member_id)

    # ── Write ──

    def add(self, data: dict[str, Any]) -> dict[str, Any]:
        return self._store.add(AVAILABILITY, data)

    def update(self, slot_id: str, changes: dict[str, Any]) -> Optional[dict[str, Any]]:
        return self._store.update(AVAILABILITY, slot_id, changes)

    def delete(self, slot_id: str) -> bool:
        return self._store.delete(AVAILABILITY, slot_id)

    def save_schedule(self, crew_member_id: str, schedule: dict[str, Any]) -> dict[str, Any]:
        return self._store.set(WEEKLY_SCHEDULES, crew_member_id, schedule)

    # ── Bulk / internal ──

    def delete_for_member(self, crew_member_id: str) -> int:
        self._store.delete(WEEKLY_SCHEDULES, crew_member_id)
        return self._store.delete_where(AVAILABILITY, [("crew_member_id", "==", crew_member_id)])
