# type: ignore
# pyright: reportMissingImports=false, reportGeneralTypeErrors=false
"""Data-access layer for contact messages and admin users."""
from typing import Any, Optional

from studio.repositories.document_store import DocumentStore

CONTACT_MESSAGES = "contact_messages"
ADMIN_USERS = "admin_users"


class ContactRepository:
    def __init__(self, store: DocumentStore):
        self._store = store

    # ── Read ──

    def get(self, contact_id: str) -> Optional[dict[str, Any]]:
        return self._store.get(CONTACT_MESSAGES, contact_id)

    def list_contacts(
        self,
        status: Optional[str] = None,
        source: Optional[str] = None,
        project_id: Optional[str] = None,
        unassigned: bool = False,
    ) -> list[dict[str, Any]]:
        where = []
        if status:
            where.append(("status", "==", status))
        if source:
            where.append(("source", "==", source))
        if project_id:
            where.append(("project_id", "==", project_id))
        if unassigned:
            where.append(("project_id", "==", None))
        return self._store.query(CONTACT_MESSAGES, where=where, order_by="created_at", descending=True)

    def unread_count(self) -> int:
        return self._store.count(CONTACT_MESSAGES, where=[("is_read", "==", False)])

    # ── Write ──

    def add(self, data: dict[str, Any]) -> dict[str, Any]:
        return self._store.add(CONTACT_MESSAGES, data)

    def update(self, contact_id: str, changes: dict[str, Any]) -> Optional[dict[str, Any]]:
        return self._store.update(CONTACT_MESSAGES, contact_id, changes)

    def delete(self, contact_id: str) -> bool:
        return self._store.delete(CONTACT_MESSAGES, contact_id)


class AdminUserRepository:
    def __init__(self, store: DocumentStore):
        self._store = store

    def get(self, user_id: str) -> Optional[dict[str, Any]]:
        return self._store.get(ADMIN_USERS, user_id)

    def list_users(self) -> list[dict[str, Any]]:
        return self._store.query(ADMIN_USERS, order_by="email")

    def contact_subscribers(self) -> list[dict[str, Any]]:
        return self._store.query(
            ADMIN_USERS,
            where=[
                ("is_active", "==", True),
                ("email_notifications.contact_messages", "==", True),
            ],
        )

    def email_taken(self, email: str) -> bool:
        return self._store.count(ADMIN_USERS, where=[("email", "==", email)]) > 0

    def add(self, data: dict[str, Any]) -> dict[str, Any]:
        return self._store.add(ADMIN_USERS, data)

    def update(self, user_id: str, changes: dict[str, Any]) -> Optional[dict[str, Any]]:
        return self._store.update(ADMIN_USERS, user_id, changes)

    def delete(self, user_id: str) -> bool:
        return self._store.delete(ADMIN_USERS, user_id)
