# type: ignore
# pyright: reportMissingImports=false, reportGeneralTypeErrors=false
"""Service: FAQs and per-project social posts."""

from typing import Any, Optional

from studio.core.logging import get_logger
from studio.repositories.content_repository import ContentRepository
from studio.repositories.project_repository import ProjectRepository

logger = get_logger(__name__)


class ContentService:
    def __init__(self, content_repo: ContentRepository, project_repo: ProjectRepository) -> None:
        self._content = content_repo
        self._projects = project_repo

    # ── FAQs ──

    def create_faq(self, data: dict[str, Any]) -> dict[str, Any]:
        faq = self._content.add_faq(data)
        logger.info("FAQ created: id=%s, category=%s", faq["id"], faq["category"])
        return faq

    def get_faq(self, faq_id: str) -> dict[str, Any]:
        faq = self._content.get_faq(faq_id)
        if faq is None:
            raise KeyError(f"FAQ '{faq_id}' not found")
        return faq

    def list_faqs(self, category: Optional[str] = None, published_only: bool = True) -> list[dict[str, Any]]:
        return self._content.find_faqs(category=category, published_only=published_only)

    def update_faq(self, faq_id: str, changes: dict[str, Any]) -> dict[str, Any]:
        updated = self._content.update_faq(faq_id, changes)
        if updated is None:
            raise KeyError(f"FAQ '{faq_id}' not found")
        return updated

    def delete_faq(self, faq_id: str) -> dict[str, Any]:
        if not self._content.delete_faq(faq_id):
            raise KeyError(f"FAQ '{faq_id}' not found")
        return {"status": "deleted", "id": faq_id}

    # ── Social posts ──

    def create_post(self, data: dict[str, Any]) -> dict[str, Any]:
        if self._projects.get(data["project_id"]) is None:
            raise KeyError(f"Project '{data['project_id']}' not found")
        if data.get("order") is None:
            data["order"] = len(self._content.posts_for_project(data["project_id"]))
        post = self._content.add_post(data)
        logger.info("Social post created: id=%s, project=%s", post["id"], post["project_id"])
        return post

    def posts_for_project(self, project_id: str) -> list[dict[str, Any]]:
        return self._content.posts_for_project(project_id)

    def update_post(self, post_id: str, changes: dict[str, Any]) -> dict[str, Any]:
        updated = self._content.update_post(post_id, changes)
        if updated is None:
            raise KeyError(f"Social post '{post_id}' not found")
        return updated

    def delete_post(self, post_id: str) -> dict[str, Any]:
        if not self._content.delete_post(post_id):
            raise KeyError(f"Social post '{post_id}' not found")
        return {"status": "deleted", "id": post_id}

    def reorder_posts(self, project_id: str, ids: list[str]) -> list[dict[str, Any]]:
        current = {p["id"] for p in self._content.posts_for_project(project_id)}
        foreign = [i for i in ids if i not in current]
        if foreign:
            raise ValueError(f"Posts not in project '{project_id}': {', '.join(foreign)}")
        for index, post_id in enumerate(ids):
            self._content.update_post(post_id, {"order": index})
        return self._content.posts_for_project(project_id)
