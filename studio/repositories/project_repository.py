# type: ignore
# pyright: reportMissingImports=false, reportGeneralTypeErrors=false
"""Data-access layer for projects and their status history."""
from typing import Any, Optional

from studio.repositories.document_store import DocumentStore

PROJECTS = "projects"
STATUS_HISTORY = "project_status_history"


class ProjectRepository:
    def __init__(self, store: DocumentStore):
        self._store = store

    # ── Read ──

    def get(self, project_id: str) -> Optional[dict[str, Any]]:
        return self._store.get(PROJECTS, project_id)

    def list_projects(self, status: Optional[str] = None, event_type: Optional[str] = None) -> list[dict[str, Any]]:
        where = []
        if status:
            where.append(("status", "==", status))
        if event_type:
            where.append(("event_type", "==", event_type))
        return self._store.query(PROJECTS, where=where, order_by="created_at", descending=True)

    def slug_exists(self, slug: str) -> bool:
        return self._store.count(PROJECTS, where=[("slug", "==", slug)]) > 0

    def with_crew_member(self, member_id: str) -> list[dict[str, Any]]:
        return self._store.query(PROJECTS, where=[("crew_members", "array-contains", member_id)])

    def count(self) -> int:
        return self._store.count(PROJECTS)

    def in_statuses(self, statuses: list[str]) -> list[dict[str, Any]]:
        return self._store.query(
            PROJECTS, where=[("status", "in", statuses)], order_by="updated_at", descending=True
        )

    def count_by_status(self, status: str) -> int:
        return self._store.count(PROJECTS, where=[("status", "==", status)])

    def status_history(
        self, project_id: str, limit: Optional[int] = None, oldest_first: bool = False
    ) -> list[dict[str, Any]]:
        return self._store.query(
            STATUS_HISTORY,
            where=[("project_id", "==", project_id)],
            order_by="timestamp",
            descending=not oldest_first,
            limit=limit,
        )

    def recent_status_changes(self, limit: int) -> list[dict[str, Any]]:
        return self._store.query(STATUS_HISTORY, order_by="timestamp", descending=True, limit=limit)

    # ── Write ──

    def add(self, data: dict[str, Any]) -> dict[str, Any]:
        return self._store.add(PROJECTS, data)

    def update(self, project_id: str, changes: dict[str, Any]) -> Optional[dict[str, Any]]:
        return self._store.update(PROJECTS, project_id, changes)

    def delete(self, project_id: str) -> bool:
        self._store.delete_where(STATUS_HISTORY, [("project_id", "==", project_id)])
        return self._store.delete(PROJECTS, project_id)

    def record_status_change(self, entry: dict[str, Any]) -> dict[str, Any]:
        return self._store.add(STATUS_HISTORY, entry)
