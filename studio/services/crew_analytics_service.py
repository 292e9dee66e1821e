# type: ignore
# pyright: reportMissingImports=false, reportGeneralTypeErrors=false
"""
Service: crew assignment analytics - success rates, pairings and delivery
timeliness computed by scanning projects.
"""

from typing import Any, Optional

from studio.core.clock import parse_datetime, utcnow
from studio.core.logging import get_logger
from studio.models.domain import display_text
from studio.repositories.crew_repository import CrewRepository
from studio.repositories.project_repository import ProjectRepository

logger = get_logger(__name__)

TOP_CREW_LIMIT = 5
TOP_TEAMS_LIMIT = 5
TREND_MONTHS = 12


def _rate(part: int, whole: int) -> float:
    return round(part / whole * 100, 2) if whole else 0.0


def _mean(values: list[float]) -> float:
    return round(sum(values) / len(values), 2) if values else 0.0


def _delivered(project: dict[str, Any]) -> bool:
    return project.get("status") == "delivered"


def _rating(project: dict[str, Any]) -> Optional[float]:
    rating = (project.get("client_satisfaction") or {}).get("rating")
    return rating if rating else None


def _crew(project: dict[str, Any]) -> list[str]:
    return project.get("crew_members") or []


def _on_time(project: dict[str, Any]) -> bool:
    """Delivered no later than the planned end date; unknown dates count as late."""
    timeline = project.get("timeline") or {}
    completed = parse_datetime(project.get("completed_at"))
    due = parse_datetime(timeline.get("end_date"))
    return _delivered(project) and completed is not None and due is not None and completed <= due


def _days_between(start: Any, end: Any) -> Optional[float]:
    start, end = parse_datetime(start), parse_datetime(end)
    if start is None or end is None:
        return None
    return (end - start).total_seconds() / 86400


def _planned_duration(project: dict[str, Any]) -> Optional[float]:
    timeline = project.get("timeline") or {}
    return _days_between(timeline.get("start_date"), timeline.get("end_date"))


def _category_stats(projects: list[dict[str, Any]]) -> dict[str, dict[str, Any]]:
    stats: dict[str, dict[str, Any]] = {}
    for project in projects:
        entry = stats.setdefault(project.get("event_type") or "other", {
            "projects": 0, "successful": 0, "ratings": [], "crew": [],
        })
        entry["projects"] += 1
        entry["successful"] += int(_delivered(project))
        if _rating(project):
            entry["ratings"].append(_rating(project))
        for member_id in _crew(project):
            if member_id not in entry["crew"]:
                entry["crew"].append(member_id)
    return stats


def _month_keys(count: int) -> list[str]:
    now = utcnow()
    year, month = now.year, now.month
    keys = []
    for _ in range(count):
        keys.append(f"{year:04d}-{month:02d}")
        month -= 1
        if month == 0:
            year, month = year - 1, 12
    return list(reversed(keys))


class CrewAnalyticsService:
    """Read-only analytics over crew assignments."""

    def __init__(self, crew_repo: CrewRepository, project_repo: ProjectRepository) -> None:
        self._crew = crew_repo
        self._projects = project_repo

    def _name(self, member_id: str) -> str:
        member = self._crew.get(member_id)
        return display_text(member.get("name")) if member else "Unknown"

    def member_metrics(self, crew_member_id: str) -> dict[str, Any]:
        member = self._crew.get(crew_member_id)
        if member is None:
            raise KeyError(f"Crew member '{crew_member_id}' not found")
        projects = self._projects.with_crew_member(crew_member_id)

        total = len(projects)
        delivered = [p for p in projects if _delivered(p)]
        success_rate = _rate(len(delivered), total)
        ratings = [r for r in (_rating(p) for p in projects) if r]
        average_rating = _mean(ratings)

        partners: dict[str, dict[str, int]] = {}
        for project in projects:
            crew = _crew(project)
            if len(crew) < 2:
                continue
            for partner_id in crew:
                if partner_id == crew_member_id:
                    continue
                entry = partners.setdefault(partner_id, {"projects": 0, "successful": 0})
                entry["projects"] += 1
                entry["successful"] += int(_delivered(project))
        preferred_partners = sorted(
            (
                {
                    "partner_id": partner_id,
                    "partner_name": self._name(partner_id),
                    "projects_together": stats["projects"],
                    "success_rate": _rate(stats["successful"], stats["projects"]),
                }
                for partner_id, stats in partners.items()
            ),
            key=lambda p: p["projects_together"],
            reverse=True,
        )

        category_performance = [
            {
                "category": category,
                "projects": stats["projects"],
                "success_rate": _rate(stats["successful"], stats["projects"]),
                "average_rating": _mean(stats["ratings"]),
            }
            for category, stats in _category_stats(projects).items()
        ]

        on_time = sum(1 for p in delivered if _on_time(p))
        on_time_rate = _rate(on_time, len(delivered))
        completion_days = [
            d for d in (
                _days_between((p.get("timeline") or {}).get("start_date"), p.get("completed_at"))
                for p in delivered
            ) if d is not None
        ]

        client_emails = [
            ((p.get("client") or {}).get("email") or "").lower() for p in projects
        ]
        known = [e for e in client_emails if e]
        repeat = sum(1 for e in known if known.count(e) > 1)

        return {
            "crew_member_id": crew_member_id,
            "crew_member_name": display_text(member.get("name")),
            "total_assignments": total,
            "completed_assignments": len(delivered),
            "success_rate": success_rate,
            "average_project_rating": average_rating,
            "team_collaboration": {
                "solo_projects": sum(1 for p in projects if len(_crew(p)) == 1),
                "team_projects": sum(1 for p in projects if len(_crew(p)) > 1),
                "average_team_size": _mean([len(_crew(p)) or 1 for p in projects]) if projects else 1,
                "preferred_partners": preferred_partners,
            },
            "category_performance": category_performance,
            "time_performance": {
                "on_time_deliveries": on_time,
                "late_deliveries": len(delivered) - on_time,
                "average_completion_time": _mean(completion_days),
                "efficiency_score": round(success_rate * 0.4 + on_time_rate * 0.3 + average_rating * 10 * 0.3),
            },
            "client_satisfaction": {
                "average_rating": average_rating,
                "positive_reviews": sum(1 for r in ratings if r >= 4),
                "negative_reviews": sum(1 for r in ratings if r <= 2),
                "repeat_client_rate": _rate(repeat, len(known)),
            },
        }

    def team_metrics(self, member_ids: list[str]) -> dict[str, Any]:
        """How a set of crew members performs on projects they all worked on."""
        team = sorted(set(member_ids))
        if len(team) < 2:
            raise ValueError("A team needs at least two distinct crew members")
        missing = [m for m in team if self._crew.get(m) is None]
        if missing:
            raise KeyError(f"Crew members not found: {', '.join(missing)}")

        projects = [
            p for p in self._projects.list_projects() if set(team).issubset(_crew(p))
        ]
        ratings = [r for r in (_rating(p) for p in projects) if r]
        durations = [d for d in (_planned_duration(p) for p in projects) if d is not None]
        return {
            "team_id": "-".join(team),
            "team_members": [{"id": m, "name": self._name(m)} for m in team],
            "total_projects": len(projects),
            "success_rate": _rate(sum(1 for p in projects if _delivered(p)), len(projects)),
            "average_rating": _mean(ratings),
            "project_types": list(dict.fromkeys(p.get("event_type") or "other" for p in projects)),
            "average_project_duration": _mean(durations),
            "client_satisfaction": _mean(ratings),
        }

    def overall(self) -> dict[str, Any]:
        members = self._crew.list_ordered()
        projects = self._projects.list_projects()

        performance = []
        for member in members:
            assigned = [p for p in projects if member["id"] in _crew(p)]
            delivered = sum(1 for p in assigned if _delivered(p))
            performance.append({
                "id": member["id"],
                "name": display_text(member.get("name")),
                "success_rate": _rate(delivered, len(assigned)),
                "projects_completed": delivered,
            })

        combos: dict[tuple[str, ...], dict[str, int]] = {}
        for project in projects:
            crew = _crew(project)
            if len(crew) < 2:
                continue
            entry = combos.setdefault(tuple(sorted(crew)), {"projects": 0, "successful": 0})
            entry["projects"] += 1
            entry["successful"] += int(_delivered(project))
        best_teams = sorted(
            (
                {
                    "members": list(key),
                    "projects_together": stats["projects"],
                    "success_rate": _rate(stats["successful"], stats["projects"]),
                }
                for key, stats in combos.items()
            ),
            key=lambda t: (t["success_rate"], t["projects_together"]),
            reverse=True,
        )[:TOP_TEAMS_LIMIT]

        delivered = [p for p in projects if _delivered(p)]
        durations = [d for d in (_planned_duration(p) for p in projects) if d is not None]

        logger.info("Crew analytics computed: members=%d, projects=%d", len(members), len(projects))
        return {
            "overall_metrics": {
                "total_crew_members": len(members),
                "total_assignments": sum(len(_crew(p)) for p in projects),
                "average_success_rate": _mean([c["success_rate"] for c in performance]),
                "top_performing_crew": sorted(
                    performance, key=lambda c: c["success_rate"], reverse=True
                )[:TOP_CREW_LIMIT],
                "best_team_combinations": best_teams,
            },
            "category_analysis": [
                {
                    "category": category,
                    "total_projects": stats["projects"],
                    "average_success_rate": _rate(stats["successful"], stats["projects"]),
                    "preferred_crew_members": stats["crew"],
                }
                for category, stats in _category_stats(projects).items()
            ],
            "time_analysis": {
                "average_project_duration": _mean(durations),
                "on_time_delivery_rate": _rate(sum(1 for p in delivered if _on_time(p)), len(delivered)),
                "efficiency_trends": self._efficiency_trends(delivered),
            },
        }

    def _efficiency_trends(self, delivered: list[dict[str, Any]]) -> list[dict[str, Any]]:
        """On-time delivery rate per calendar month, oldest first."""
        buckets: dict[str, list[bool]] = {key: [] for key in _month_keys(TREND_MONTHS)}
        for project in delivered:
            completed = parse_datetime(project.get("completed_at"))
            if completed is None:
                continue
            key = f"{completed.year:04d}-{completed.month:02d}"
            if key in buckets:
                buckets[key].append(_on_time(project))
        return [
            {
                "period": key,
                "deliveries": len(flags),
                "efficiency_score": _rate(sum(flags), len(flags)),
            }
            for key, flags in buckets.items()
        ]
