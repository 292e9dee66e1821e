# type: ignore
# pyright: reportMissingImports=false, reportGeneralTypeErrors=false
"""
Service: crew availability - slot writes with double-booking detection,
weekly schedules, calendars and crew search for a time window.
"""

from datetime import datetime
from typing import Any, Optional

from studio.core.clock import ensure_utc, parse_datetime, to_iso, utcnow
from studio.core.config import settings
from studio.core.logging import get_logger
from studio.metrics import AVAILABILITY_CONFLICTS, AVAILABILITY_SLOTS_CREATED
from studio.models.domain import BLOCKING_SLOT_TYPES, WEEKDAYS, display_text
from studio.repositories.availability_repository import AvailabilityRepository
from studio.repositories.crew_repository import CrewRepository
from studio.services.intervals import pairwise_overlaps, percentage, total_hours

logger = get_logger(__name__)

WEEKDAY_HOURS = {"start": "09:00", "end": "17:00", "available": True}
WEEKEND_HOURS = {"start": "10:00", "end": "16:00", "available": True}


def default_weekly_hours() -> dict[str, dict[str, Any]]:
    return {day: dict(WEEKDAY_HOURS if i < 5 else WEEKEND_HOURS) for i, day in enumerate(WEEKDAYS)}


class SlotConflictError(Exception):
    """A slot write overlaps existing slots of the same crew member."""

    def __init__(self, conflicts: list[dict[str, Any]]):
        kinds = sorted({c["conflict_type"] for c in conflicts})
        super().__init__(f"Conflicts detected: {', '.join(kinds)}")
        self.conflicts = conflicts


class AvailabilityService:
    """Business logic for availability slots and calendars."""

    def __init__(self, availability_repo: AvailabilityRepository, crew_repo: CrewRepository) -> None:
        self._slots = availability_repo
        self._crew = crew_repo

    def _member(self, crew_member_id: str) -> dict[str, Any]:
        member = self._crew.get(crew_member_id)
        if member is None:
            raise KeyError(f"Crew member '{crew_member_id}' not found")
        return member

    def _conflict(self, member: dict[str, Any], slots: list[dict[str, Any]]) -> dict[str, Any]:
        return {
            "crew_member_id": member["id"],
            "crew_member_name": display_text(member.get("name")),
            "conflicting_slots": slots,
            "conflict_type": "double_booking",
        }

    def _reject_overlaps(
        self,
        member: dict[str, Any],
        start: datetime,
        end: datetime,
        exclude_id: Optional[str] = None,
    ) -> None:
        clashing = [
            s for s in self._slots.overlapping(member["id"], start, end) if s["id"] != exclude_id
        ]
        if clashing:
            AVAILABILITY_CONFLICTS.inc()
            logger.warning(
                "Slot rejected: member=%s overlaps %d slots", member["id"], len(clashing)
            )
            raise SlotConflictError([self._conflict(member, clashing)])

    # ── Slots ──

    def create_slot(self, data: dict[str, Any]) -> dict[str, Any]:
        """Store a slot. Raises ValueError, KeyError or SlotConflictError."""
        start, end = ensure_utc(data["start_time"]), ensure_utc(data["end_time"])
        if start >= end:
            raise ValueError("Start time must be before end time")
        member = self._member(data["crew_member_id"])
        self._reject_overlaps(member, start, end)

        slot = self._slots.add({**data, "start_time": start.isoformat(), "end_time": end.isoformat()})
        AVAILABILITY_SLOTS_CREATED.labels(type=slot["type"]).inc()
        logger.info(
            "Slot created: member=%s, type=%s, %s -> %s",
            member["id"], slot["type"], slot["start_time"], slot["end_time"],
        )
        return slot

    def update_slot(self, slot_id: str, changes: dict[str, Any]) -> dict[str, Any]:
        slot = self.get_slot(slot_id)
        start = ensure_utc(changes["start_time"]) if changes.get("start_time") else parse_datetime(slot["start_time"])
        end = ensure_utc(changes["end_time"]) if changes.get("end_time") else parse_datetime(slot["end_time"])
        if start >= end:
            raise ValueError("Start time must be before end time")
        member = self._member(slot["crew_member_id"])
        self._reject_overlaps(member, start, end, exclude_id=slot_id)

        changes = {**changes, "start_time": start.isoformat(), "end_time": end.isoformat()}
        logger.info("Slot updated: id=%s", slot_id)
        return self._slots.update(slot_id, changes)

    def delete_slot(self, slot_id: str) -> dict[str, Any]:
        if not self._slots.delete(slot_id):
            raise KeyError(f"Availability slot '{slot_id}' not found")
        logger.info("Slot deleted: id=%s", slot_id)
        return {"status": "deleted", "id": slot_id}

    def get_slot(self, slot_id: str) -> dict[str, Any]:
        slot = self._slots.get(slot_id)
        if slot is None:
            raise KeyError(f"Availability slot '{slot_id}' not found")
        return slot

    # ── Weekly schedule ──

    def get_schedule(self, crew_member_id: str) -> dict[str, Any]:
        self._member(crew_member_id)
        stored = self._slots.get_schedule(crew_member_id)
        if stored:
            return stored
        return {
            "crew_member_id": crew_member_id,
            "timezone": settings.STUDIO_TIMEZONE,
            "days": default_weekly_hours(),
            "is_default": True,
        }

    def set_schedule(
        self,
        crew_member_id: str,
        days: dict[str, dict[str, Any]],
        timezone_name: Optional[str] = None,
    ) -> dict[str, Any]:
        self._member(crew_member_id)
        merged = default_weekly_hours()
        merged.update(days)
        schedule = {
            "crew_member_id": crew_member_id,
            "timezone": timezone_name or settings.STUDIO_TIMEZONE,
            "days": merged,
            "is_default": False,
        }
        logger.info("Weekly schedule saved: member=%s", crew_member_id)
        return self._slots.save_schedule(crew_member_id, schedule)

    # ── Calendars ──

    def get_calendar(self, crew_member_id: str, start: datetime, end: datetime) -> dict[str, Any]:
        """Slots inside the window plus hour totals and detected double bookings."""
        start, end = ensure_utc(start), ensure_utc(end)
        if start >= end:
            raise ValueError("Start time must be before end time")
        member = self._member(crew_member_id)
        slots = self._slots.within(crew_member_id, start, end)

        available = total_hours(slots, "available")
        busy = total_hours(slots, "busy")
        upcoming = self._slots.upcoming_available(crew_member_id, utcnow())
        conflicts = [self._conflict(member, [a, b]) for a, b in pairwise_overlaps(slots)]

        return {
            "crew_member_id": crew_member_id,
            "crew_member_name": display_text(member.get("name")),
            "range": {"start": to_iso(start), "end": to_iso(end)},
            "schedule": self.get_schedule(crew_member_id),
            "slots": slots,
            "total_available_hours": round(available, 2),
            "total_busy_hours": round(busy, 2),
            "availability_percentage": percentage(available, available + busy),
            "utilization_percentage": percentage(busy, available + busy),
            "next_available_slot": upcoming["start_time"] if upcoming else None,
            "conflicts": conflicts,
        }

    def all_calendars(self, start: datetime, end: datetime) -> list[dict[str, Any]]:
        return [self.get_calendar(m["id"], start, end) for m in self._crew.list_ordered()]

    def find_available(
        self,
        start: datetime,
        end: datetime,
        skills: Optional[list[str]] = None,
    ) -> list[dict[str, Any]]:
        """Crew free for the whole window, best availability first."""
        start, end = ensure_utc(start), ensure_utc(end)
        if start >= end:
            raise ValueError("Start time must be before end time")
        wanted = [s.strip().lower() for s in skills or [] if s.strip()]
        members = self._crew.with_any_skill(wanted) if wanted else self._crew.list_ordered()

        candidates = []
        for member in members:
            calendar = self.get_calendar(member["id"], start, end)
            if calendar["conflicts"]:
                continue
            if self._slots.overlapping(member["id"], start, end, types=BLOCKING_SLOT_TYPES):
                continue
            candidates.append({
                "crew_member": member,
                "availability_percentage": calendar["availability_percentage"],
                "total_available_hours": calendar["total_available_hours"],
                "next_available_slot": calendar["next_available_slot"],
            })
        candidates.sort(key=lambda c: c["availability_percentage"], reverse=True)
        logger.info("Available crew search: %d of %d members free", len(candidates), len(members))
        return candidates
