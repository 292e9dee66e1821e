# type: ignore
# pyright: reportMissingImports=false, reportGeneralTypeErrors=false
"""
Service: crew portfolios.

A "work" is one published media item (social post) of a project the crew
member is assigned to. Project counters in the stats count distinct projects.
"""

from typing import Any, Optional

from studio.core.config import settings
from studio.models.domain import display_text
from studio.repositories.content_repository import ContentRepository
from studio.repositories.crew_repository import CrewRepository
from studio.repositories.project_repository import ProjectRepository

IN_PROGRESS_STATUSES = ("shooting_scheduled", "in_editing")
TOP_CATEGORIES_LIMIT = 5
RECENT_WORKS_LIMIT = 6
PREVIEW_MEDIA_LIMIT = 3


class CrewPortfolioService:
    def __init__(
        self,
        crew_repo: CrewRepository,
        project_repo: ProjectRepository,
        content_repo: ContentRepository,
    ) -> None:
        self._crew = crew_repo
        self._projects = project_repo
        self._content = content_repo

    def _member(self, member_id: str) -> dict[str, Any]:
        member = self._crew.get(member_id)
        if member is None:
            raise KeyError(f"Crew member '{member_id}' not found")
        return member

    def _works_for(self, member: dict[str, Any]) -> list[dict[str, Any]]:
        role = display_text(member.get("role"), fallback="Miembro del equipo")
        works: list[dict[str, Any]] = []
        for project in self._projects.with_crew_member(member["id"]):
            media = self._content.posts_for_project(project["id"])
            preview = [m["url"] for m in media[:PREVIEW_MEDIA_LIMIT]]
            rating = (project.get("client_satisfaction") or {}).get("rating")
            for item in media:
                works.append({
                    "id": f"{project['id']}-{item['id']}",
                    "project_id": project["id"],
                    "title": display_text(project.get("title"), fallback="Sin título"),
                    "category": project.get("event_type") or "other",
                    "type": item.get("type"),
                    "url": item.get("url"),
                    "description": display_text(project.get("description"), fallback=""),
                    "date": project.get("event_date"),
                    "client": (project.get("client") or {}).get("name"),
                    "location": project.get("location"),
                    "status": project.get("status"),
                    "crew_role": role,
                    "rating": rating,
                    "images": preview,
                })
        dated = sorted((w for w in works if w["date"]), key=lambda w: w["date"], reverse=True)
        return dated + [w for w in works if not w["date"]]

    # ── Queries ──

    def works(self, member_id: str, category: Optional[str] = None) -> list[dict[str, Any]]:
        """Media works of a member, newest event first."""
        works = self._works_for(self._member(member_id))
        if category:
            works = [w for w in works if w["category"] == category]
        return works

    def featured_works(self, member_id: str, limit: Optional[int] = None) -> list[dict[str, Any]]:
        delivered = [w for w in self.works(member_id) if w["status"] == "delivered"]
        return delivered[: limit or settings.FEATURED_WORKS_LIMIT]

    def stats(self, member_id: str) -> dict[str, Any]:
        return self._stats(self._works_for(self._member(member_id)))

    def all_with_stats(self) -> list[dict[str, Any]]:
        return [
            {**member, "stats": self._stats(self._works_for(member))}
            for member in self._crew.list_ordered()
        ]

    @staticmethod
    def _stats(works: list[dict[str, Any]]) -> dict[str, Any]:
        projects: dict[str, dict[str, Any]] = {}
        categories: dict[str, int] = {}
        for work in works:
            projects.setdefault(work["project_id"], work)
            categories[work["category"]] = categories.get(work["category"], 0) + 1

        ratings = [w["rating"] for w in projects.values() if w["rating"]]
        top = sorted(categories.items(), key=lambda kv: kv[1], reverse=True)[:TOP_CATEGORIES_LIMIT]
        return {
            "total_projects": len(projects),
            "completed_projects": sum(1 for w in projects.values() if w["status"] == "delivered"),
            "in_progress_projects": sum(1 for w in projects.values() if w["status"] in IN_PROGRESS_STATUSES),
            "total_works": len(works),
            "average_rating": round(sum(ratings) / len(ratings), 2) if ratings else 0,
            "top_categories": [{"category": c, "count": n} for c, n in top],
            "recent_works": works[:RECENT_WORKS_LIMIT],
        }
