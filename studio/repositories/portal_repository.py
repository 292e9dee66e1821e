# type: ignore
# pyright: reportMissingImports=false, reportGeneralTypeErrors=false
"""Data-access layer for the client portal: clients, public links, messages."""
from typing import Any, Optional

from studio.repositories.document_store import DocumentStore

CLIENTS = "clients"
PUBLIC_ACCESS = "public_access"
PROJECT_MESSAGES = "project_messages"


class PortalRepository:
    def __init__(self, store: DocumentStore):
        self._store = store

    # ── Clients ──

    def get_client(self, client_id: str) -> Optional[dict[str, Any]]:
        return self._store.get(CLIENTS, client_id)

    def client_by_email(self, email: str) -> Optional[dict[str, Any]]:
        found = self._store.query(CLIENTS, where=[("email", "==", email)], limit=1)
        return found[0] if found else None

    def clients_for_project(self, project_id: str) -> list[dict[str, Any]]:
        return self._store.query(CLIENTS, where=[("projects", "array-contains", project_id)], order_by="email")

    def add_client(self, data: dict[str, Any]) -> dict[str, Any]:
        return self._store.add(CLIENTS, data)

    def update_client(self, client_id: str, changes: dict[str, Any]) -> Optional[dict[str, Any]]:
        return self._store.update(CLIENTS, client_id, changes)

    # ── Public access ──

    def get_public_access(self, project_id: str) -> Optional[dict[str, Any]]:
        return self._store.get(PUBLIC_ACCESS, project_id)

    def save_public_access(self, project_id: str, data: dict[str, Any]) -> dict[str, Any]:
        return self._store.set(PUBLIC_ACCESS, project_id, data)

    # ── Messages ──

    def add_message(self, data: dict[str, Any]) -> dict[str, Any]:
        return self._store.add(PROJECT_MESSAGES, data)

    def messages_for_project(self, project_id: str) -> list[dict[str, Any]]:
        return self._store.query(
            PROJECT_MESSAGES, where=[("project_id", "==", project_id)], order_by="date", descending=True
        )
