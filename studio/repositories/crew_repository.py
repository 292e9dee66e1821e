# type: ignore
# pyright: reportMissingImports=false, reportGeneralTypeErrors=false
"""Data-access layer for crew members."""
from typing import Any, Optional

from studio.repositories.document_store import DocumentStore

CREW_MEMBERS = "crew_members"


class CrewRepository:
    def __init__(self, store: DocumentStore):
        self._store = store

    # ── Read ──

    def get(self, member_id: str) -> Optional[dict[str, Any]]:
        return self._store.get(CREW_MEMBERS, member_id)

    def list_ordered(self) -> list[dict[str, Any]]:
        return self._store.query(CREW_MEMBERS, order_by="order")

    def with_any_skill(self, skills: list[str]) -> list[dict[str, Any]]:
        return self._store.query(
            CREW_MEMBERS, where=[("skills", "array-contains-any", skills)], order_by="order"
        )

    def count(self) -> int:
        return self._store.count(CREW_MEMBERS)

    # ── Write ──

    def add(self, data: dict[str, Any]) -> dict[str, Any]:
        return self._store.add(CREW_MEMBERS, data)

    def update(self, member_id: str, changes: dict[str, Any]) -> Optional[dict[str, Any]]:
        return self._store.update(CREW_MEMBERS, member_id, changes)

    def delete(self, member_id: str) -> bool:
        return self._store.delete(CREW_MEMBERS, member_id)
