# type: ignore
# pyright: reportMissingImports=false, reportGeneralTypeErrors=false
"""
Service: project lifecycle.

Status state machine:
    draft ─► shooting_scheduled ─► in_editing ─► delivered ─► archived
    shooting_scheduled ─► draft          (reschedule)
    any non-archived ─► archived ─► draft (restore)
"""

from typing import Any, Optional

from studio.core.clock import utcnow_iso
from studio.core.config import settings
from studio.core.logging import get_logger
from studio.metrics import PROJECT_STATUS_CHANGES, PROJECTS_TOTAL
from studio.models.domain import ALLOWED_TRANSITIONS, PROJECT_STATUSES, display_text, slugify
from studio.repositories.contact_repository import ContactRepository
from studio.repositories.crew_repository import CrewRepository
from studio.repositories.project_repository import ProjectRepository
from studio.repositories.template_repository import TemplateRepository

logger = get_logger(__name__)


class ProjectService:
    """Business logic for projects."""

    def __init__(
        self,
        project_repo: ProjectRepository,
        crew_repo: CrewRepository,
        contact_repo: ContactRepository,
        template_repo: TemplateRepository,
    ) -> None:
        self._projects = project_repo
        self._crew = crew_repo
        self._contacts = contact_repo
        self._templates = template_repo

    def _unique_slug(self, title: dict[str, Any]) -> str:
        base = slugify(display_text(title, fallback="project"))
        slug, n = base, 2
        while self._projects.slug_exists(slug):
            slug = f"{base}-{n}"
            n += 1
        return slug

    def _check_crew(self, ids: list[str]) -> list[str]:
        unique = list(dict.fromkeys(ids))
        missing = [i for i in unique if self._crew.get(i) is None]
        if missing:
            raise ValueError(f"Unknown crew members: {', '.join(missing)}")
        return unique

    # ── Commands ──

    def create_project(self, data: dict[str, Any]) -> dict[str, Any]:
        data["crew_members"] = self._check_crew(data.get("crew_members") or [])
        record = {
            **data,
            "slug": self._unique_slug(data.get("title") or {}),
            "status": "draft",
            "client_satisfaction": None,
            "completed_at": None,
        }
        project = self._projects.add(record)
        PROJECTS_TOTAL.set(self._projects.count())
        logger.info("Project created: id=%s, slug=%s", project["id"], project["slug"])
        return project

    def update_project(self, project_id: str, changes: dict[str, Any]) -> dict[str, Any]:
        updated = self._projects.update(project_id, changes)
        if updated is None:
            raise KeyError(f"Project '{project_id}' not found")
        logger.info("Project updated: id=%s, fields=%s", project_id, sorted(changes))
        return updated

    def delete_project(self, project_id: str) -> dict[str, Any]:
        if self._projects.get(project_id) is None:
            raise KeyError(f"Project '{project_id}' not found")
        for contact in self._contacts.list_contacts(project_id=project_id):
            self._contacts.update(contact["id"], {"project_id": None})
        tasks_removed = self._templates.delete_tasks_for_project(project_id)
        self._projects.delete(project_id)
        PROJECTS_TOTAL.set(self._projects.count())
        logger.info("Project deleted: id=%s, tasks_removed=%d", project_id, tasks_removed)
        return {"status": "deleted", "id": project_id, "tasks_removed": tasks_removed}

    def change_status(
        self,
        project_id: str,
        new_status: str,
        changed_by: str = "admin",
        notes: Optional[str] = None,
    ) -> dict[str, Any]:
        """Move a project along the state machine. Raises KeyError / ValueError."""
        project = self.get_project(project_id)
        current = project["status"]
        if new_status == current:
            raise ValueError(f"Project is already '{current}'")
        if new_status not in ALLOWED_TRANSITIONS.get(current, set()):
            raise ValueError(
                f"Cannot transition from '{current}' to '{new_status}'. "
                f"Allowed: {sorted(ALLOWED_TRANSITIONS.get(current, set()))}"
            )

        now = utcnow_iso()
        changes: dict[str, Any] = {"status": new_status}
        if new_status == "delivered":
            changes["completed_at"] = now
        updated = self._projects.update(project_id, changes)
        self._projects.record_status_change({
            "project_id": project_id,
            "from_status": current,
            "to_status": new_status,
            "changed_by": changed_by,
            "notes": notes,
            "timestamp": now,
        })
        PROJECT_STATUS_CHANGES.labels(from_status=current, to_status=new_status).inc()
        logger.info("Project %s status: %s -> %s (by %s)", project_id, current, new_status, changed_by)
        return updated

    def assign_crew(self, project_id: str, crew_ids: list[str]) -> dict[str, Any]:
        self.get_project(project_id)
        crew = self._check_crew(crew_ids)
        logger.info("Project %s crew set: %d members", project_id, len(crew))
        return self._projects.update(project_id, {"crew_members": crew})

    def rate(self, project_id: str, rating: int, feedback: Optional[str] = None) -> dict[str, Any]:
        self.get_project(project_id)
        satisfaction = {"rating": rating, "feedback": feedback, "rated_at": utcnow_iso()}
        logger.info("Project %s rated %d", project_id, rating)
        return self._projects.update(project_id, {"client_satisfaction": satisfaction})

    # ── Queries ──

    def get_project(self, project_id: str) -> dict[str, Any]:
        project = self._projects.get(project_id)
        if project is None:
            raise KeyError(f"Project '{project_id}' not found")
        return project

    def list_projects(self, status: Optional[str] = None, event_type: Optional[str] = None) -> list[dict[str, Any]]:
        return self._projects.list_projects(status=status, event_type=event_type)

    def status_history(self, project_id: str, limit: Optional[int] = None) -> list[dict[str, Any]]:
        self.get_project(project_id)
        return self._projects.status_history(project_id, limit or settings.DEFAULT_HISTORY_LIMIT)

    def contacts_for_project(self, project_id: str) -> list[dict[str, Any]]:
        self.get_project(project_id)
        return self._contacts.list_contacts(project_id=project_id)

    # ── Status reporting ──

    def status_timeline(self, project_id: str) -> list[dict[str, Any]]:
        """Every transition of one project, oldest first."""
        self.get_project(project_id)
        return self._projects.status_history(project_id, oldest_first=True)

    def status_statistics(self) -> dict[str, Any]:
        counts = {status: self._projects.count_by_status(status) for status in PROJECT_STATUSES}
        return {"total": sum(counts.values()), "by_status": counts}

    def recent_status_changes(self, limit: Optional[int] = None) -> list[dict[str, Any]]:
        return self._projects.recent_status_changes(limit or settings.RECENT_STATUS_CHANGES_LIMIT)

    def projects_in_statuses(self, statuses: list[str]) -> list[dict[str, Any]]:
        """Projects in any of the given statuses, most recently touched first."""
        unknown = [s for s in statuses if s not in PROJECT_STATUSES]
        if unknown:
            raise ValueError(f"Unknown statuses: {', '.join(unknown)}")
        return self._projects.in_statuses(list(dict.fromkeys(statuses)))
