# type: ignore
# pyright: reportMissingImports=false, reportGeneralTypeErrors=false
"""Data-access layer for task templates, generated project tasks and applications."""
from typing import Any, Optional

from studio.repositories.document_store import DocumentStore

TEMPLATES = "task_templates"
PROJECT_TASKS = "project_tasks"
APPLICATIONS = "template_applications"


class TemplateRepository:
    def __init__(self, store: DocumentStore):
        self._store = store

    # ── Templates ──

    def get(self, template_id: str) -> Optional[dict[str, Any]]:
        return self._store.get(TEMPLATES, template_id)

    def find(
        self,
        category: Optional[str] = None,
        status: Optional[str] = None,
        tag: Optional[str] = None,
    ) -> list[dict[str, Any]]:
        where = []
        if category:
            where.append(("category", "==", category))
        if status:
            where.append(("status", "==", status))
        if tag:
            where.append(("tags", "array-contains", tag))
        return self._store.query(TEMPLATES, where=where, order_by="name")

    def add(self, data: dict[str, Any]) -> dict[str, Any]:
        return self._store.add(TEMPLATES, data)

    def update(self, template_id: str, changes: dict[str, Any]) -> Optional[dict[str, Any]]:
        return self._store.update(TEMPLATES, template_id, changes)

    def delete(self, template_id: str) -> bool:
        return self._store.delete(TEMPLATES, template_id)

    # ── Project tasks ──

    def add_task(self, task: dict[str, Any]) -> dict[str, Any]:
        return self._store.add(PROJECT_TASKS, task, doc_id=task.get("id"))

    def get_task(self, task_id: str) -> Optional[dict[str, Any]]:
        return self._store.get(PROJECT_TASKS, task_id)

    def tasks_for_project(self, project_id: str) -> list[dict[str, Any]]:
        return self._store.query(PROJECT_TASKS, where=[("project_id", "==", project_id)], order_by="order")

    def update_task(self, task_id: str, changes: dict[str, Any]) -> Optional[dict[str, Any]]:
        return self._store.update(PROJECT_TASKS, task_id, changes)

    def delete_tasks_for_project(self, project_id: str) -> int:
        return self._store.delete_where(PROJECT_TASKS, [("project_id", "==", project_id)])

    # ── Applications ──

    def record_application(self, entry: dict[str, Any]) -> dict[str, Any]:
        return self._store.add(APPLICATIONS, entry)

    def applications_for_project(self, project_id: str) -> list[dict[str, Any]]:
        return self._store.query(
            APPLICATIONS, where=[("project_id", "==", project_id)], order_by="applied_at", descending=True
        )
