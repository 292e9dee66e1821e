# type: ignore
# pyright: reportMissingImports=false, reportGeneralTypeErrors=false
"""
Service: contact messages - intake, triage and conversion to projects.
"""

from typing import Any, Optional

from studio.core.clock import parse_datetime
from studio.core.logging import get_logger
from studio.metrics import CONTACTS_RECEIVED, UNREAD_CONTACTS
from studio.models.domain import CONTACT_EVENT_LABELS, CONTACT_TO_PROJECT_EVENT
from studio.repositories.contact_repository import AdminUserRepository, ContactRepository
from studio.services.project_service import ProjectService

logger = get_logger(__name__)


class ContactService:
    """Business logic for contact messages and admin users."""

    def __init__(
        self,
        contact_repo: ContactRepository,
        admin_repo: AdminUserRepository,
        project_service: ProjectService,
    ) -> None:
        self._contacts = contact_repo
        self._admins = admin_repo
        self._projects = project_service

    def _refresh_unread(self) -> None:
        UNREAD_CONTACTS.set(self._contacts.unread_count())

    # ── Intake ──

    def submit(self, form: dict[str, Any]) -> dict[str, Any]:
        """Store a contact form submission as a new, unread message."""
        form.pop("consent", None)
        record = {
            **form,
            "status": "new",
            "is_read": False,
            "project_id": None,
            "email_sent": False,
        }
        contact = self._contacts.add(record)
        CONTACTS_RECEIVED.labels(source=contact.get("source", "contact_form")).inc()
        self._refresh_unread()
        logger.info("Contact received: id=%s, event_type=%s", contact["id"], contact.get("event_type"))
        return contact

    # ── Triage ──

    def get_contact(self, contact_id: str) -> dict[str, Any]:
        contact = self._contacts.get(contact_id)
        if contact is None:
            raise KeyError(f"Contact message '{contact_id}' not found")
        return contact

    def list_contacts(
        self,
        status: Optional[str] = None,
        source: Optional[str] = None,
        unassigned: bool = False,
    ) -> list[dict[str, Any]]:
        return self._contacts.list_contacts(status=status, source=source, unassigned=unassigned)

    def unread_count(self) -> int:
        return self._contacts.unread_count()

    def mark_read(self, contact_id: str) -> dict[str, Any]:
        self.get_contact(contact_id)
        updated = self._contacts.update(contact_id, {"is_read": True})
        self._refresh_unread()
        return updated

    def update_status(self, contact_id: str, status: str) -> dict[str, Any]:
        self.get_contact(contact_id)
        updated = self._contacts.update(contact_id, {"status": status})
        logger.info("Contact %s status -> %s", contact_id, status)
        return updated

    def delete_contact(self, contact_id: str) -> dict[str, Any]:
        if not self._contacts.delete(contact_id):
            raise KeyError(f"Contact message '{contact_id}' not found")
        self._refresh_unread()
        return {"status": "deleted", "id": contact_id}

    def assign_to_project(self, contact_id: str, project_id: str) -> dict[str, Any]:
        self.get_contact(contact_id)
        self._projects.get_project(project_id)
        logger.info("Contact %s assigned to project %s", contact_id, project_id)
        return self._contacts.update(contact_id, {"project_id": project_id})

    def remove_from_project(self, contact_id: str) -> dict[str, Any]:
        self.get_contact(contact_id)
        return self._contacts.update(contact_id, {"project_id": None})

    def convert_to_project(self, contact_id: str) -> dict[str, Any]:
        """Open a draft project from an inquiry and link the inquiry to it."""
        contact = self.get_contact(contact_id)
        if contact.get("project_id"):
            raise ValueError(f"Contact '{contact_id}' is already linked to project '{contact['project_id']}'")

        event_type = contact.get("event_type") or "otros"
        label = CONTACT_EVENT_LABELS.get(event_type, event_type)
        event_date = parse_datetime(contact.get("event_date"))
        project = self._projects.create_project({
            "title": {"es": f"{label} - {contact['name']}", "en": "", "pt": ""},
            "description": {"es": contact.get("message") or "", "en": "", "pt": ""},
            "event_type": CONTACT_TO_PROJECT_EVENT.get(event_type, "other"),
            "event_date": event_date.isoformat() if event_date else None,
            "location": contact.get("location"),
            "featured": False,
            "tags": [],
            "client": {
                "name": contact["name"],
                "email": contact.get("email"),
                "phone": contact.get("phone"),
                "confidential": True,
            },
            "crew_members": [],
            "timeline": None,
            "source_contact_id": contact_id,
        })
        contact = self._contacts.update(
            contact_id, {"project_id": project["id"], "status": "in_progress", "is_read": True}
        )
        self._refresh_unread()
        logger.info("Contact %s converted to project %s", contact_id, project["id"])
        return {"contact": contact, "project": project}

    # ── Admin users ──

    def create_admin(self, data: dict[str, Any]) -> dict[str, Any]:
        data["email"] = data["email"].lower()
        if self._admins.email_taken(data["email"]):
            raise ValueError(f"Admin user '{data['email']}' already exists")
        admin = self._admins.add(data)
        logger.info("Admin user created: %s", admin["email"])
        return admin

    def list_admins(self) -> list[dict[str, Any]]:
        return self._admins.list_users()

    def update_admin(self, user_id: str, changes: dict[str, Any]) -> dict[str, Any]:
        updated = self._admins.update(user_id, changes)
        if updated is None:
            raise KeyError(f"Admin user '{user_id}' not found")
        return updated
