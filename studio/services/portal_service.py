# type: ignore
# pyright: reportMissingImports=false, reportGeneralTypeErrors=false
"""
Service: client portal - client invitations, public share links, the
client-facing project view with milestone progress, and project messages.
"""

from typing import Any, Optional

from studio.core.clock import utcnow_iso
from studio.core.logging import get_logger
from studio.models.domain import display_text
from studio.repositories.crew_repository import CrewRepository
from studio.repositories.portal_repository import PortalRepository
from studio.repositories.project_repository import ProjectRepository
from studio.repositories.template_repository import TemplateRepository

logger = get_logger(__name__)


class PortalService:
    def __init__(
        self,
        portal_repo: PortalRepository,
        project_repo: ProjectRepository,
        crew_repo: CrewRepository,
        template_repo: TemplateRepository,
    ) -> None:
        self._portal = portal_repo
        self._projects = project_repo
        self._crew = crew_repo
        self._templates = template_repo

    def _project(self, project_id: str) -> dict[str, Any]:
        project = self._projects.get(project_id)
        if project is None:
            raise KeyError(f"Project '{project_id}' not found")
        return project

    # ── Clients ──

    def invite_client(self, data: dict[str, Any]) -> dict[str, Any]:
        """Create a client or extend an existing one's project list."""
        for project_id in data["projects"]:
            self._project(project_id)
        email = data["email"].lower()
        existing = self._portal.client_by_email(email)
        if existing:
            projects = list(dict.fromkeys(existing.get("projects", []) + data["projects"]))
            logger.info("Client %s granted projects %s", existing["id"], data["projects"])
            return self._portal.update_client(existing["id"], {"projects": projects})
        client = self._portal.add_client({
            **data,
            "email": email,
            "projects": list(dict.fromkeys(data["projects"])),
            "invited_at": utcnow_iso(),
        })
        logger.info("Client invited: id=%s, projects=%d", client["id"], len(client["projects"]))
        return client

    def clients_for_project(self, project_id: str) -> list[dict[str, Any]]:
        self._project(project_id)
        return self._portal.clients_for_project(project_id)

    # ── Public access ──

    def set_public_access(self, project_id: str, enabled: bool) -> dict[str, Any]:
        self._project(project_id)
        logger.info("Public access for project %s: %s", project_id, "on" if enabled else "off")
        return self._portal.save_public_access(project_id, {
            "project_id": project_id,
            "status": "active" if enabled else "disabled",
        })

    def can_view(self, project_id: str, client_id: Optional[str]) -> bool:
        if client_id:
            client = self._portal.get_client(client_id)
            if client and project_id in (client.get("projects") or []):
                return True
        access = self._portal.get_public_access(project_id)
        return bool(access and access.get("status") == "active")

    # ── Client view ──

    def project_view(self, project_id: str, client_id: Optional[str] = None) -> dict[str, Any]:
        """The client-facing project page. Raises KeyError / PermissionError."""
        project = self._project(project_id)
        if not self.can_view(project_id, client_id):
            raise PermissionError(f"No access to project '{project_id}'")

        milestones = self._templates.tasks_for_project(project_id)
        completed = sum(1 for m in milestones if m.get("status") == "completed")
        crew = [self._crew.get(member_id) for member_id in project.get("crew_members") or []]
        return {
            "project_id": project_id,
            "title": project.get("title"),
            "status": project.get("status"),
            "event_type": project.get("event_type"),
            "event_date": project.get("event_date"),
            "location": project.get("location"),
            "crew": [display_text(c.get("name")) for c in crew if c],
            "milestones": [
                {
                    "id": m["id"],
                    "title": m["title"],
                    "type": m.get("type"),
                    "status": m.get("status"),
                    "due_date": m.get("due_date"),
                    "completed_at": m.get("completed_at"),
                }
                for m in milestones
            ],
            "progress": round(completed / len(milestones) * 100) if milestones else 0,
        }

    # ── Messages ──

    def post_message(self, project_id: str, data: dict[str, Any]) -> dict[str, Any]:
        self._project(project_id)
        client_id = data.get("client_id")
        if not self.can_view(project_id, client_id):
            raise PermissionError(f"No access to project '{project_id}'")
        client = self._portal.get_client(client_id) if client_id else None
        sender = f"{client['first_name']} {client.get('last_name', '')}".strip() if client else "Client"
        message = self._portal.add_message({
            "project_id": project_id,
            "client_id": client_id,
            "from": sender,
            "to": "Team",
            "subject": data["subject"],
            "content": data["content"],
            "type": data.get("type", "note"),
            "date": utcnow_iso(),
            "read": False,
        })
        logger.info("Portal message on project %s from %s", project_id, sender)
        return message

    def messages(self, project_id: str) -> list[dict[str, Any]]:
        self._project(project_id)
        return self._portal.messages_for_project(project_id)
