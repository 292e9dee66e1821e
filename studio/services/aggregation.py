# type: ignore
# pyright: reportMissingImports=false, reportGeneralTypeErrors=false
"""
Analytics rollups over raw events.
Pure functions: no I/O, no metrics, no logging.
"""

import csv
import io
from datetime import datetime
from typing import Any, Iterable, Optional
from urllib.parse import parse_qs, urlparse

from studio.core.clock import to_iso

UTM_KEYS: tuple[str, ...] = ("utm_source", "utm_medium", "utm_campaign", "utm_content", "utm_term")

# referrer-domain fragment → (traffic_source, traffic_medium), first match wins
REFERRER_RULES: tuple[tuple[tuple[str, ...], str, str], ...] = (
    (("google",), "google", "organic"),
    (("facebook", "fb.com"), "facebook", "social"),
    (("instagram",), "instagram", "social"),
    (("twitter", "x.com"), "twitter", "social"),
    (("linkedin",), "linkedin", "social"),
    (("youtube",), "youtube", "social"),
    (("tiktok",), "tiktok", "social"),
)

BREAKDOWN_FIELDS: dict[str, str] = {
    "traffic_sources": "traffic_source",
    "traffic_mediums": "traffic_medium",
    "utm_sources": "utm_source",
    "utm_campaigns": "utm_campaign",
    "referrer_domains": "referrer_domain",
}

MEDIA_COUNTERS: dict[str, str] = {
    "view": "views",
    "play": "plays",
    "pause": "pauses",
    "complete": "completes",
    "zoom": "zooms",
}

CSV_HEADERS: list[str] = [
    "Event Type", "Project ID", "Session ID", "Device Type", "Language",
    "Timestamp", "Interaction Type", "Media ID", "Media Type",
]

TOP_PROJECTS_LIMIT = 10
TOP_MEDIA_LIMIT = 5


def _domain(url: str) -> str:
    try:
        return urlparse(url).hostname or ""
    except ValueError:
        return ""


def parse_traffic_source(landing_url: Optional[str], referrer: Optional[str]) -> dict[str, Any]:
    """Classify where a visit came from. UTM parameters beat the referrer."""
    parsed = urlparse(landing_url or "")
    params = parse_qs(parsed.query)
    utm = {key: params[key][0] if key in params else None for key in UTM_KEYS}
    referrer = referrer or ""
    referrer_domain = _domain(referrer) if referrer else ""

    source, medium, campaign = "direct", "none", ""
    if utm["utm_source"]:
        source = utm["utm_source"]
        medium = utm["utm_medium"] or "unknown"
        campaign = utm["utm_campaign"] or ""
    elif referrer:
        source, medium = "referral", "referral"
        for fragments, rule_source, rule_medium in REFERRER_RULES:
            if any(f in referrer_domain for f in fragments):
                source, medium = rule_source, rule_medium
                break

    return {
        "traffic_source": source,
        "traffic_medium": medium,
        "traffic_campaign": campaign,
        **utm,
        "referrer": referrer,
        "referrer_domain": referrer_domain,
        "landing_page": parsed.path or "/",
        "full_url": landing_url or "",
    }


def _bump(counter: dict[str, int], key: Optional[str], amount: int = 1) -> None:
    if key:
        counter[key] = counter.get(key, 0) + amount


def empty_media_breakdown() -> dict[str, int]:
    return {name: 0 for name in MEDIA_COUNTERS.values()}


def media_counter(interaction_type: Optional[str]) -> str:
    """Unknown or missing interaction types count as views."""
    return MEDIA_COUNTERS.get(interaction_type or "view", "views")


def aggregate_events(
    events: Iterable[dict[str, Any]],
    start: datetime,
    end: datetime,
    period: str = "daily",
) -> dict[str, Any]:
    """Roll a batch of raw events up into one summary document."""
    sessions: set[str] = set()
    durations: list[float] = []
    totals = {"total_views": 0, "project_views": 0, "cta_clicks": 0, "media_interactions": 0, "crew_interactions": 0}
    media = empty_media_breakdown()
    projects: dict[str, dict[str, Any]] = {}
    devices = {"desktop": 0, "mobile": 0, "tablet": 0, "unknown": 0}
    languages: dict[str, int] = {}
    breakdowns: dict[str, dict[str, int]] = {name: {} for name in BREAKDOWN_FIELDS}

    for event in events:
        data = event.get("event_data") or {}
        kind = event.get("event_type")
        if event.get("session_id"):
            sessions.add(event["session_id"])
        _bump(devices, event.get("device_type") or "unknown")
        _bump(languages, event.get("user_language"))
        for name, field in BREAKDOWN_FIELDS.items():
            _bump(breakdowns[name], data.get(field))

        if kind == "page_view":
            totals["total_views"] += 1
        elif kind == "project_view":
            totals["project_views"] += 1
            project_id = event.get("project_id")
            if project_id:
                stats = projects.setdefault(project_id, {
                    "project_id": project_id,
                    "title": data.get("project_title") or "Unknown Project",
                    "views": 0,
                })
                stats["views"] += 1
        elif kind == "media_interaction":
            totals["media_interactions"] += 1
            media[media_counter(data.get("interaction_type"))] += 1
        elif kind == "cta_interaction":
            totals["cta_clicks"] += 1
        elif kind == "crew_interaction":
            totals["crew_interactions"] += 1
        elif kind == "session_end" and isinstance(data.get("session_duration"), (int, float)):
            durations.append(float(data["session_duration"]))

    views = totals["total_views"]
    visitors = len(sessions)
    top_projects = sorted(projects.values(), key=lambda p: p["views"], reverse=True)[:TOP_PROJECTS_LIMIT]

    return {
        "date": start.date().isoformat(),
        "period": period,
        "start": to_iso(start),
        "end": to_iso(end),
        **totals,
        "unique_visitors": visitors,
        "avg_time_on_page": round(sum(durations) / len(durations), 2) if durations else 0,
        "media_breakdown": media,
        "top_projects": top_projects,
        "device_breakdown": devices,
        "language_breakdown": languages,
        **breakdowns,
        "conversion_rate": round(totals["cta_clicks"] / views * 100, 2) if views else 0,
        "bounce_rate": round(max(views - visitors, 0) / views * 100, 2) if views else 0,
    }


def merge_summaries(summaries: list[dict[str, Any]]) -> dict[str, Any]:
    """Dashboard totals: counters summed, breakdowns merged, time on page averaged."""
    merged: dict[str, Any] = {
        "total_views": 0,
        "unique_visitors": 0,
        "cta_clicks": 0,
        "media_interactions": 0,
        "crew_interactions": 0,
        "project_views": 0,
        "media_breakdown": empty_media_breakdown(),
        "device_breakdown": {"desktop": 0, "mobile": 0, "tablet": 0, "unknown": 0},
        "language_breakdown": {},
        **{name: {} for name in BREAKDOWN_FIELDS},
    }
    times: list[float] = []
    projects: dict[str, dict[str, Any]] = {}

    for summary in summaries:
        for key in ("total_views", "unique_visitors", "cta_clicks", "media_interactions",
                    "crew_interactions", "project_views"):
            merged[key] += summary.get(key) or 0
        for key in ("media_breakdown", "device_breakdown", "language_breakdown", *BREAKDOWN_FIELDS):
            for name, count in (summary.get(key) or {}).items():
                _bump(merged[key], name, count)
        if summary.get("avg_time_on_page"):
            times.append(summary["avg_time_on_page"])
        for project in summary.get("top_projects") or []:
            entry = projects.setdefault(project["project_id"], {**project, "views": 0})
            entry["views"] += project.get("views", 0)

    views = merged["total_views"]
    merged["average_time_on_page"] = round(sum(times) / len(times)) if times else 0
    merged["top_projects"] = sorted(projects.values(), key=lambda p: p["views"], reverse=True)[:TOP_PROJECTS_LIMIT]
    merged["conversion_rate"] = round(merged["cta_clicks"] / views * 100, 2) if views else 0
    merged["days"] = len(summaries)
    return merged


def project_breakdown(project_id: str, events: list[dict[str, Any]]) -> dict[str, Any]:
    """Per-project counters plus the most interacted-with media."""
    sessions = {e["session_id"] for e in events if e.get("session_id")}
    views = sum(1 for e in events if e.get("event_type") == "project_view")
    cta = sum(1 for e in events if e.get("event_type") == "cta_interaction")
    crew = sum(1 for e in events if e.get("event_type") == "crew_interaction")
    media_breakdown = empty_media_breakdown()
    media: dict[str, dict[str, Any]] = {}

    for event in events:
        if event.get("event_type") != "media_interaction":
            continue
        data = event.get("event_data") or {}
        interaction = data.get("interaction_type") or "view"
        media_breakdown[media_counter(interaction)] += 1
        media_id = data.get("media_id")
        if not media_id:
            continue
        entry = media.setdefault(media_id, {
            "media_id": media_id,
            "media_type": data.get("media_type") or "unknown",
            "interactions": 0,
            "interaction_types": [],
        })
        entry["interactions"] += 1
        if interaction not in entry["interaction_types"]:
            entry["interaction_types"].append(interaction)

    top_media = sorted(media.values(), key=lambda m: m["interactions"], reverse=True)[:TOP_MEDIA_LIMIT]
    return {
        "project_id": project_id,
        "views": views,
        "unique_visitors": len(sessions),
        "media_interactions": sum(media_breakdown.values()),
        "crew_interactions": crew,
        "cta_clicks": cta,
        "conversion_rate": round(cta / views * 100, 2) if views else 0,
        "media_breakdown": media_breakdown,
        "top_media": [{**m, "interaction_types": ", ".join(m["interaction_types"])} for m in top_media],
    }


def events_to_csv(events: Iterable[dict[str, Any]]) -> str:
    buffer = io.StringIO()
    writer = csv.writer(buffer, quoting=csv.QUOTE_ALL, lineterminator="\n")
    writer.writerow(CSV_HEADERS)
    for event in events:
        data = event.get("event_data") or {}
        writer.writerow([
            event.get("event_type") or "",
            event.get("project_id") or "",
            event.get("session_id") or "",
            event.get("device_type") or "",
            event.get("user_language") or "",
            event.get("timestamp") or "",
            data.get("interaction_type") or "",
            data.get("media_id") or "",
            data.get("media_type") or "",
        ])
    return buffer.getvalue()
