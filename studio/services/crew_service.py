# type: ignore
# pyright: reportMissingImports=false, reportGeneralTypeErrors=false
"""
Service: crew member management - CRUD, ordering, search and stats.
"""

from typing import Any

from studio.core.logging import get_logger
from studio.metrics import CREW_MEMBERS_TOTAL
from studio.models.domain import LANGUAGES, display_text
from studio.repositories.availability_repository import AvailabilityRepository
from studio.repositories.crew_repository import CrewRepository

logger = get_logger(__name__)


class CrewService:
    """Business logic for crew members."""

    def __init__(self, crew_repo: CrewRepository, availability_repo: AvailabilityRepository) -> None:
        self._crew = crew_repo
        self._availability = availability_repo

    # ── Commands ──

    def create_member(self, data: dict[str, Any]) -> dict[str, Any]:
        if data.get("order") is None:
            data["order"] = self._crew.count()
        member = self._crew.add(data)
        CREW_MEMBERS_TOTAL.set(self._crew.count())
        logger.info("Crew member created: id=%s, name=%s", member["id"], display_text(member.get("name")))
        return member

    def update_member(self, member_id: str, changes: dict[str, Any]) -> dict[str, Any]:
        updated = self._crew.update(member_id, changes)
        if updated is None:
            raise KeyError(f"Crew member '{member_id}' not found")
        logger.info("Crew member updated: id=%s, fields=%s", member_id, sorted(changes))
        return updated

    def delete_member(self, member_id: str) -> dict[str, Any]:
        """Delete a member together with their availability slots and schedule."""
        if self._crew.get(member_id) is None:
            raise KeyError(f"Crew member '{member_id}' not found")
        slots_removed = self._availability.delete_for_member(member_id)
        self._crew.delete(member_id)
        CREW_MEMBERS_TOTAL.set(self._crew.count())
        logger.info("Crew member deleted: id=%s, slots_removed=%d", member_id, slots_removed)
        return {"status": "deleted", "id": member_id, "slots_removed": slots_removed}

    def reorder(self, ids: list[str]) -> list[dict[str, Any]]:
        """Set ``order`` to each id's position in ``ids``."""
        missing = [i for i in ids if self._crew.get(i) is None]
        if missing:
            raise KeyError(f"Crew members not found: {', '.join(missing)}")
        for index, member_id in enumerate(ids):
            self._crew.update(member_id, {"order": index})
        logger.info("Crew reordered: %d members", len(ids))
        return self._crew.list_ordered()

    # ── Queries ──

    def get_member(self, member_id: str) -> dict[str, Any]:
        member = self._crew.get(member_id)
        if member is None:
            raise KeyError(f"Crew member '{member_id}' not found")
        return member

    def list_members(self) -> list[dict[str, Any]]:
        return self._crew.list_ordered()

    def by_skills(self, skills: list[str]) -> list[dict[str, Any]]:
        skills = [s.strip().lower() for s in skills if s.strip()]
        if not skills:
            return self._crew.list_ordered()
        return self._crew.with_any_skill(skills)

    def search(self, term: str) -> list[dict[str, Any]]:
        """Case-insensitive substring match on names, roles and skills."""
        needle = term.strip().lower()
        if not needle:
            return self._crew.list_ordered()

        def _hit(member: dict[str, Any]) -> bool:
            for field in ("name", "role"):
                values = member.get(field) or {}
                if any(needle in (values.get(lang) or "").lower() for lang in LANGUAGES):
                    return True
            return any(needle in skill.lower() for skill in member.get("skills") or [])

        return [m for m in self._crew.list_ordered() if _hit(m)]

    def get_stats(self) -> dict[str, Any]:
        members = self._crew.list_ordered()
        by_skills: dict[str, int] = {}
        for member in members:
            for skill in member.get("skills") or []:
                by_skills[skill] = by_skills.get(skill, 0) + 1
        return {"total": len(members), "by_skills": by_skills}
