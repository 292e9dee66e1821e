# type: ignore
# pyright: reportMissingImports=false, reportGeneralTypeErrors=false
"""Data-access layer for FAQs and social posts."""
from typing import Any, Optional

from studio.repositories.document_store import DocumentStore

FAQS = "faqs"
SOCIAL_POSTS = "social_posts"


class ContentRepository:
    def __init__(self, store: DocumentStore):
        self._store = store

    # ── FAQs ──

    def get_faq(self, faq_id: str) -> Optional[dict[str, Any]]:
        return self._store.get(FAQS, faq_id)

    def find_faqs(self, category: Optional[str] = None, published_only: bool = False) -> list[dict[str, Any]]:
        where = []
        if category:
            where.append(("category", "==", category))
        if published_only:
            where.append(("is_published", "==", True))
        return self._store.query(FAQS, where=where, order_by="order")

    def add_faq(self, data: dict[str, Any]) -> dict[str, Any]:
        return self._store.add(FAQS, data)

    def update_faq(self, faq_id: str, changes: dict[str, Any]) -> Optional[dict[str, Any]]:
        return self._store.update(FAQS, faq_id, changes)

    def delete_faq(self, faq_id: str) -> bool:
        return self._store.delete(FAQS, faq_id)

    # ── Social posts ──

    def posts_for_project(self, project_id: str) -> list[dict[str, Any]]:
        return self._store.query(SOCIAL_POSTS, where=[("project_id", "==", project_id)], order_by="order")

    def add_post(self, data: dict[str, Any]) -> dict[str, Any]:
        return self._store.add(SOCIAL_POSTS, data)

    def update_post(self, post_id: str, changes: dict[str, Any]) -> Optional[dict[str, Any]]:
        return self._store.update(SOCIAL_POSTS, post_id, changes)

    def delete_post(self, post_id: str) -> bool:
        return self._store.delete(SOCIAL_POSTS, post_id)
