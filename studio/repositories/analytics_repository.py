# type: ignore
# pyright: reportMissingImports=false, reportGeneralTypeErrors=false
"""Data-access layer for raw analytics events and daily summaries."""
from datetime import datetime
from typing import Any, Optional

from studio.repositories.document_store import DocumentStore

EVENTS = "analytics_events"
SUMMARIES = "analytics_summaries"


class AnalyticsRepository:
    def __init__(self, store: DocumentStore):
        self._store = store

    # ── Events ──

    def add_event(self, event: dict[str, Any]) -> dict[str, Any]:
        return self._store.add(EVENTS, event)

    def events_between(
        self,
        start: datetime,
        end: datetime,
        project_id: Optional[str] = None,
        event_type: Optional[str] = None,
    ) -> list[dict[str, Any]]:
        where = [("timestamp", ">=", start), ("timestamp", "<=", end)]
        if project_id:
            where.append(("project_id", "==", project_id))
        if event_type:
            where.append(("event_type", "==", event_type))
        return self._store.query(EVENTS, where=where, order_by="timestamp", descending=True)

    def events_for_project(self, project_id: str) -> list[dict[str, Any]]:
        return self._store.query(EVENTS, where=[("project_id", "==", project_id)])

    def events_since(self, since: datetime) -> list[dict[str, Any]]:
        return self._store.query(
            EVENTS, where=[("timestamp", ">=", since)], order_by="timestamp", descending=True
        )

    # ── Summaries ──

    def save_summary(self, summary_date: str, summary: dict[str, Any]) -> dict[str, Any]:
        """Summaries are keyed by their ISO date, so re-running a day replaces it."""
        return self._store.set(SUMMARIES, summary_date, summary)

    def summaries_between(self, start_date: str, end_date: str) -> list[dict[str, Any]]:
        return self._store.query(
            SUMMARIES,
            where=[("date", ">=", start_date), ("date", "<=", end_date)],
            order_by="date",
            descending=True,
        )
