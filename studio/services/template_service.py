# type: ignore
# pyright: reportMissingImports=false, reportGeneralTypeErrors=false
"""
Service: task templates - reusable milestone checklists per event category,
applied to projects as dated project tasks.
"""

import re
import uuid
from datetime import datetime, timedelta
from typing import Any, Optional

from studio.core.clock import ensure_utc, parse_datetime, utcnow, utcnow_iso
from studio.core.logging import get_logger
from studio.metrics import TEMPLATES_APPLIED
from studio.repositories.project_repository import ProjectRepository
from studio.repositories.template_repository import TemplateRepository

logger = get_logger(__name__)

_VARIABLE = re.compile(r"\{(\w+)\}")

# (title, milestone type, estimated days, priority, required)
_CONFIRMED = ("Fecha confirmada", "fecha_confirmada", 1, "high", True)
_SHOT = ("Shooting finalizado", "shooting_finalizado", 1, "high", True)
_PHOTOS_OUT = ("Imágenes entregadas", "imagenes_entregadas", 1, "high", True)
_VIDEO_EDIT = ("Videos editados", "videos_editados", 10, "medium", False)
_VIDEO_OUT = ("Videos entregados", "videos_entregados", 1, "high", False)


def _crew(days: int, priority: str) -> tuple:
    return ("Crew armado", "crew_armado", days, priority, True)


def _editing(days: int) -> tuple:
    return ("Imágenes editadas", "imagenes_editadas", days, "medium", True)


PREDEFINED_TASKS: dict[str, list[tuple]] = {
    "wedding": [_CONFIRMED, _crew(3, "high"), _SHOT, _editing(7), _PHOTOS_OUT, _VIDEO_EDIT, _VIDEO_OUT],
    "corporate": [_CONFIRMED, _crew(2, "high"), _SHOT, _editing(5), _PHOTOS_OUT],
    "birthday": [_CONFIRMED, _crew(2, "medium"), _SHOT, _editing(3), _PHOTOS_OUT],
    "quinceanera": [_CONFIRMED, _crew(3, "high"), _SHOT, _editing(7), _PHOTOS_OUT, _VIDEO_EDIT, _VIDEO_OUT],
    "photoshoot": [_CONFIRMED, _crew(1, "medium"), _SHOT, _editing(3), _PHOTOS_OUT],
    "cultural": [_CONFIRMED, _crew(2, "medium"), _SHOT, _editing(5), _PHOTOS_OUT],
    "custom": [_CONFIRMED, _crew(2, "medium"), _SHOT],
}

CATEGORY_NAMES: dict[str, str] = {
    "wedding": "Casamiento",
    "corporate": "Corporativo",
    "birthday": "Cumpleaños",
    "quinceanera": "Quince años",
    "photoshoot": "Photoshoot",
    "cultural": "Cultural",
    "custom": "Personalizado",
}


def predefined_tasks(category: str) -> list[dict[str, Any]]:
    if category not in PREDEFINED_TASKS:
        raise KeyError(f"No predefined template for category '{category}'")
    return [
        {
            "id": f"{category}-{i}",
            "title": title,
            "description": "",
            "type": kind,
            "order": i,
            "estimated_days": days,
            "priority": priority,
            "required": required,
            "dependencies": [f"{category}-{i - 1}"] if i > 1 else [],
            "variables": [],
        }
        for i, (title, kind, days, priority, required) in enumerate(PREDEFINED_TASKS[category], start=1)
    ]


def substitute(text: str, variables: dict[str, Any]) -> str:
    """Replace ``{name}`` placeholders; unknown placeholders are left as written."""
    return _VARIABLE.sub(
        lambda m: str(variables[m.group(1)]) if m.group(1) in variables else m.group(0), text
    )


def _normalise_tasks(tasks: list[dict[str, Any]]) -> list[dict[str, Any]]:
    normalised = []
    for index, task in enumerate(tasks, start=1):
        task = dict(task)
        task["id"] = task.get("id") or f"task-{uuid.uuid4().hex[:8]}"
        if task.get("order") is None:
            task["order"] = index
        normalised.append(task)

    ids = [t["id"] for t in normalised]
    if len(ids) != len(set(ids)):
        raise ValueError("Task ids must be unique within a template")
    for task in normalised:
        unknown = [d for d in task.get("dependencies") or [] if d not in ids]
        if unknown:
            raise ValueError(f"Task '{task['id']}' depends on unknown tasks: {unknown}")
        if task["id"] in (task.get("dependencies") or []):
            raise ValueError(f"Task '{task['id']}' cannot depend on itself")
    return sorted(normalised, key=lambda t: t["order"])


class TemplateService:
    """Business logic for task templates."""

    def __init__(self, template_repo: TemplateRepository, project_repo: ProjectRepository) -> None:
        self._templates = template_repo
        self._projects = project_repo

    # ── Templates ──

    def create_template(self, data: dict[str, Any]) -> dict[str, Any]:
        tasks = _normalise_tasks(data.pop("tasks", []))
        record = {
            **data,
            "tasks": tasks,
            "status": "active",
            "version": 1,
            "estimated_duration": sum(t.get("estimated_days", 0) for t in tasks),
            "usage_count": 0,
            "last_used": None,
        }
        template = self._templates.add(record)
        logger.info("Template created: id=%s, category=%s, tasks=%d",
                    template["id"], template["category"], len(tasks))
        return template

    def create_from_predefined(self, category: str, name: Optional[str] = None, created_by: str = "admin") -> dict[str, Any]:
        return self.create_template({
            "name": name or f"{CATEGORY_NAMES[category]} estándar",
            "description": f"Plantilla predefinida para {CATEGORY_NAMES[category].lower()}",
            "category": category,
            "tasks": predefined_tasks(category),
            "default_priority": "medium",
            "created_by": created_by,
            "tags": [category, "predefined"],
            "is_public": True,
            "notes": None,
        })

    def get_template(self, template_id: str) -> dict[str, Any]:
        template = self._templates.get(template_id)
        if template is None:
            raise KeyError(f"Template '{template_id}' not found")
        return template

    def list_templates(self, category: Optional[str] = None, status: Optional[str] = None,
                       tag: Optional[str] = None) -> list[dict[str, Any]]:
        return self._templates.find(category=category, status=status, tag=tag)

    def update_template(self, template_id: str, changes: dict[str, Any]) -> dict[str, Any]:
        template = self.get_template(template_id)
        if "tasks" in changes and changes["tasks"] is not None:
            changes["tasks"] = _normalise_tasks(changes["tasks"])
            changes["estimated_duration"] = sum(t.get("estimated_days", 0) for t in changes["tasks"])
            changes["version"] = template.get("version", 1) + 1
        logger.info("Template updated: id=%s, fields=%s", template_id, sorted(changes))
        return self._templates.update(template_id, changes)

    def delete_template(self, template_id: str) -> dict[str, Any]:
        if not self._templates.delete(template_id):
            raise KeyError(f"Template '{template_id}' not found")
        return {"status": "deleted", "id": template_id}

    # ── Application ──

    def apply_template(
        self,
        template_id: str,
        project_id: str,
        variables: Optional[dict[str, Any]] = None,
        applied_by: str = "admin",
        start_date: Optional[datetime] = None,
    ) -> dict[str, Any]:
        """Generate dated project tasks from a template."""
        template = self.get_template(template_id)
        if template.get("status") != "active":
            raise ValueError(f"Template '{template_id}' is {template.get('status')}, only active templates can be applied")
        if self._projects.get(project_id) is None:
            raise KeyError(f"Project '{project_id}' not found")

        variables = variables or {}
        start = ensure_utc(start_date) if start_date else utcnow()
        id_map = {t["id"]: str(uuid.uuid4()) for t in template["tasks"]}

        tasks = []
        elapsed = 0
        for task in sorted(template["tasks"], key=lambda t: t["order"]):
            elapsed += task.get("estimated_days", 0)
            tasks.append(self._templates.add_task({
                "id": id_map[task["id"]],
                "project_id": project_id,
                "template_id": template_id,
                "template_task_id": task["id"],
                "title": substitute(task["title"], variables),
                "description": substitute(task.get("description") or "", variables),
                "type": task.get("type", "custom"),
                "order": task["order"],
                "priority": task.get("priority") or template.get("default_priority", "medium"),
                "required": task.get("required", True),
                "estimated_days": task.get("estimated_days", 0),
                "dependencies": [id_map[d] for d in task.get("dependencies") or [] if d in id_map],
                "status": "pending",
                "due_date": (start + timedelta(days=elapsed)).isoformat(),
                "completed_at": None,
            }))

        now = utcnow_iso()
        self._templates.update(template_id, {
            "usage_count": template.get("usage_count", 0) + 1,
            "last_used": now,
        })
        application = self._templates.record_application({
            "template_id": template_id,
            "template_version": template.get("version", 1),
            "project_id": project_id,
            "applied_by": applied_by,
            "applied_at": now,
            "variables": variables,
            "task_ids": [t["id"] for t in tasks],
        })
        TEMPLATES_APPLIED.labels(category=template.get("category", "custom")).inc()
        logger.info("Template %s applied to project %s: %d tasks", template_id, project_id, len(tasks))
        return {"application": application, "tasks": tasks}

    def applications(self, project_id: str) -> list[dict[str, Any]]:
        return self._templates.applications_for_project(project_id)

    # ── Project tasks ──

    def project_tasks(self, project_id: str) -> list[dict[str, Any]]:
        now = utcnow()
        tasks = self._templates.tasks_for_project(project_id)
        for task in tasks:
            due = parse_datetime(task.get("due_date"))
            task["overdue"] = (
                task.get("status") not in ("completed", "skipped") and due is not None and due < now
            )
        return tasks

    def update_task_status(self, task_id: str, status: str) -> dict[str, Any]:
        if self._templates.get_task(task_id) is None:
            raise KeyError(f"Task '{task_id}' not found")
        changes: dict[str, Any] = {"status": status}
        changes["completed_at"] = utcnow_iso() if status == "completed" else None
        logger.info("Task %s -> %s", task_id, status)
        return self._templates.update_task(task_id, changes)
