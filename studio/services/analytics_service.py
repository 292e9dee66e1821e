# type: ignore
# pyright: reportMissingImports=false, reportGeneralTypeErrors=false
"""
Service: site analytics - event intake, daily rollups, dashboards and export.
"""

from datetime import date, datetime, time, timedelta, timezone
from typing import Any, Optional

from studio.core.clock import ensure_utc, to_iso, utcnow
from studio.core.config import settings
from studio.core.logging import get_logger
from studio.metrics import ANALYTICS_EVENTS, SUMMARIES_ROLLED_UP
from studio.repositories.analytics_repository import AnalyticsRepository
from studio.services.aggregation import (
    aggregate_events,
    events_to_csv,
    merge_summaries,
    parse_traffic_source,
    project_breakdown,
)

logger = get_logger(__name__)

DASHBOARD_RANGES: dict[str, int] = {"7d": 7, "30d": 30, "90d": 90}
RECENT_EVENTS_LIMIT = 10


def day_bounds(day: date) -> tuple[datetime, datetime]:
    start = datetime.combine(day, time.min, tzinfo=timezone.utc)
    return start, start + timedelta(days=1) - timedelta(microseconds=1)


class AnalyticsService:
    """Business logic for site analytics."""

    def __init__(self, analytics_repo: AnalyticsRepository) -> None:
        self._analytics = analytics_repo

    # ── Intake ──

    def record_event(self, data: dict[str, Any]) -> dict[str, Any]:
        landing_url = data.pop("landing_url", None)
        referrer = data.pop("referrer", None)
        event_data = dict(data.get("event_data") or {})
        if landing_url or referrer:
            for key, value in parse_traffic_source(landing_url, referrer).items():
                event_data.setdefault(key, value)

        timestamp = ensure_utc(data["timestamp"]) if data.get("timestamp") else utcnow()
        event = self._analytics.add_event({
            **data,
            "event_data": event_data,
            "timestamp": timestamp.isoformat(),
        })
        ANALYTICS_EVENTS.labels(event_type=event["event_type"]).inc()
        logger.debug("Analytics event: type=%s, session=%s", event["event_type"], event["session_id"])
        return event

    # ── Rollups ──

    def rollup_day(self, day: Optional[date] = None) -> dict[str, Any]:
        """Aggregate one UTC day (yesterday by default) and store the summary."""
        day = day or (utcnow().date() - timedelta(days=1))
        start, end = day_bounds(day)
        events = self._analytics.events_between(start, end)
        summary = aggregate_events(events, start, end, period="daily")
        saved = self._analytics.save_summary(day.isoformat(), summary)
        SUMMARIES_ROLLED_UP.inc()
        logger.info("Analytics rollup: day=%s, events=%d, visitors=%d",
                    day.isoformat(), len(events), summary["unique_visitors"])
        return saved

    def summaries(self, start_date: date, end_date: date) -> list[dict[str, Any]]:
        if start_date > end_date:
            raise ValueError("start_date must not be after end_date")
        return self._analytics.summaries_between(start_date.isoformat(), end_date.isoformat())

    def dashboard(self, range_key: str = "30d") -> dict[str, Any]:
        """Totals over the last 7, 30 or 90 days of stored summaries."""
        if range_key not in DASHBOARD_RANGES:
            raise ValueError(f"range must be one of {sorted(DASHBOARD_RANGES)}")
        end_date = utcnow().date()
        start_date = end_date - timedelta(days=DASHBOARD_RANGES[range_key] - 1)
        summaries = self._analytics.summaries_between(start_date.isoformat(), end_date.isoformat())
        return {
            "range": range_key,
            "start_date": start_date.isoformat(),
            "end_date": end_date.isoformat(),
            **merge_summaries(summaries),
        }

    # ── Live / per-project ──

    def project_analytics(self, project_id: str) -> dict[str, Any]:
        return project_breakdown(project_id, self._analytics.events_for_project(project_id))

    def realtime(self, minutes: Optional[int] = None) -> dict[str, Any]:
        window = minutes or settings.REALTIME_WINDOW_MINUTES
        since = utcnow() - timedelta(minutes=window)
        events = self._analytics.events_since(since)
        by_type: dict[str, int] = {}
        for event in events:
            by_type[event["event_type"]] = by_type.get(event["event_type"], 0) + 1
        return {
            "window_minutes": window,
            "since": to_iso(since),
            "active_users": len({e["session_id"] for e in events if e.get("session_id")}),
            "events": len(events),
            "events_by_type": by_type,
            "recent_events": events[:RECENT_EVENTS_LIMIT],
        }

    def export(self, start: datetime, end: datetime, fmt: str = "json") -> Any:
        start, end = ensure_utc(start), ensure_utc(end)
        if start > end:
            raise ValueError("start must not be after end")
        events = self._analytics.events_between(start, end)
        logger.info("Analytics export: format=%s, events=%d", fmt, len(events))
        if fmt == "csv":
            return events_to_csv(events)
        if fmt == "json":
            return events
        raise ValueError("format must be 'csv' or 'json'")
