# type: ignore
"""
Tests for crew assignment analytics: per-member metrics, team pairings
and the studio-wide overview.
"""
from datetime import datetime, timezone

import pytest
from fastapi.testclient import TestClient

from main import app

client = TestClient(app)


# ── Helpers ───────────────────────────────────────────────────────────────
def _member(name):
    resp = client.post("/api/v1/crew", json={"name": {"es": name}})
    assert resp.status_code == 201, resp.text
    return resp.json()["id"]


def _project(title, crew, event_type, client_email, end_date, start_date="2019-12-01T00:00:00Z"):
    resp = client.post("/api/v1/projects", json={
        "title": {"es": title},
        "event_type": event_type,
        "crew_members": crew,
        "client": {"name": "Cliente", "email": client_email},
        "timeline": {"start_date": start_date, "end_date": end_date},
    })
    assert resp.status_code == 201, resp.text
    return resp.json()["id"]


def _deliver(project_id, rating=None):
    for status in ("shooting_scheduled", "in_editing", "delivered"):
        resp = client.post(f"/api/v1/projects/{project_id}/status", json={"status": status})
        assert resp.status_code == 200, resp.text
    if rating:
        client.post(f"/api/v1/projects/{project_id}/rating", json={"rating": rating})


@pytest.fixture
def portfolio():
    """Three members; one on-time and one late delivery plus an open project."""
    ana, bruno, carla = _member("Ana"), _member("Bruno"), _member("Carla")
    on_time = _project("Boda Sol", [ana, bruno], "wedding", "sol@example.com", "2099-01-01T00:00:00Z")
    late = _project("Gala", [ana], "corporate", "sol@example.com", "2020-01-01T00:00:00Z")
    _project("Boda Luna", [ana, bruno, carla], "wedding", "luna@example.com", "2099-06-01T00:00:00Z")
    _deliver(on_time, rating=5)
    _deliver(late, rating=3)
    return {"ana": ana, "bruno": bruno, "carla": carla}


# ── Member metrics ────────────────────────────────────────────────────────
class TestMemberMetrics:
    def test_assignment_counts(self, portfolio):
        m = client.get(f"/api/v1/crew-analytics/members/{portfolio['ana']}").json()
        assert m["crew_member_name"] == "Ana"
        assert m["total_assignments"] == 3
        assert m["completed_assignments"] == 2
        assert m["success_rate"] == 66.67
        assert m["average_project_rating"] == 4.0

    def test_collaboration(self, portfolio):
        team = client.get(f"/api/v1/crew-analytics/members/{portfolio['ana']}").json()["team_collaboration"]
        assert team["solo_projects"] == 1
        assert team["team_projects"] == 2
        assert team["average_team_size"] == 2.0
        first = team["preferred_partners"][0]
        assert first["partner_id"] == portfolio["bruno"]
        assert first["partner_name"] == "Bruno"
        assert first["projects_together"] == 2
        assert first["success_rate"] == 50.0

    def test_categories(self, portfolio):
        cats = client.get(f"/api/v1/crew-analytics/members/{portfolio['ana']}").json()["category_performance"]
        by_name = {c["category"]: c for c in cats}
        assert by_name["wedding"]["projects"] == 2
        assert by_name["wedding"]["success_rate"] == 50.0
        assert by_name["wedding"]["average_rating"] == 5.0
        assert by_name["corporate"]["success_rate"] == 100.0

    def test_time_and_satisfaction(self, portfolio):
        m = client.get(f"/api/v1/crew-analytics/members/{portfolio['ana']}").json()
        assert m["time_performance"]["on_time_deliveries"] == 1
        assert m["time_performance"]["late_deliveries"] == 1
        assert m["time_performance"]["efficiency_score"] == 54
        sat = m["client_satisfaction"]
        assert sat["positive_reviews"] == 1
        assert sat["negative_reviews"] == 0
        assert sat["repeat_client_rate"] == 66.67

    def test_member_without_projects(self):
        idle = _member("Diego")
        m = client.get(f"/api/v1/crew-analytics/members/{idle}").json()
        assert m["total_assignments"] == 0
        assert m["success_rate"] == 0.0
        assert m["team_collaboration"]["average_team_size"] == 1

    def test_unknown_member(self):
        assert client.get("/api/v1/crew-analytics/members/ghost").status_code == 404


# ── Teams ─────────────────────────────────────────────────────────────────
class TestTeamMetrics:
    def test_pair(self, portfolio):
        ids = f"{portfolio['bruno']},{portfolio['ana']}"
        team = client.get("/api/v1/crew-analytics/teams", params={"member_ids": ids}).json()
        assert team["team_id"] == "-".join(sorted([portfolio["ana"], portfolio["bruno"]]))
        assert team["total_projects"] == 2
        assert team["success_rate"] == 50.0
        assert team["average_rating"] == 5.0
        assert team["project_types"] == ["wedding"]

    def test_needs_two_members(self, portfolio):
        ids = f"{portfolio['ana']},{portfolio['ana']}"
        assert client.get("/api/v1/crew-analytics/teams", params={"member_ids": ids}).status_code == 400

    def test_unknown_member(self, portfolio):
        ids = f"{portfolio['ana']},ghost"
        assert client.get("/api/v1/crew-analytics/teams", params={"member_ids": ids}).status_code == 404


# ── Overview ──────────────────────────────────────────────────────────────
class TestOverall:
    def test_overall_metrics(self, portfolio):
        data = client.get("/api/v1/crew-analytics/overall").json()
        overall = data["overall_metrics"]
        assert overall["total_crew_members"] == 3
        assert overall["total_assignments"] == 6
        assert overall["top_performing_crew"][0]["id"] == portfolio["ana"]
        best = overall["best_team_combinations"][0]
        assert best["members"] == sorted([portfolio["ana"], portfolio["bruno"]])
        assert best["success_rate"] == 100.0

    def test_time_analysis(self, portfolio):
        time_analysis = client.get("/api/v1/crew-analytics/overall").json()["time_analysis"]
        assert time_analysis["on_time_delivery_rate"] == 50.0
        trends = time_analysis["efficiency_trends"]
        assert len(trends) == 12
        now = datetime.now(timezone.utc)
        assert trends[-1]["period"] == f"{now.year:04d}-{now.month:02d}"
        assert trends[-1]["deliveries"] == 2
        assert trends[-1]["efficiency_score"] == 50.0
        assert all(t["deliveries"] == 0 for t in trends[:-1])

    def test_categories(self, portfolio):
        cats = client.get("/api/v1/crew-analytics/overall").json()["category_analysis"]
        wedding = next(c for c in cats if c["category"] == "wedding")
        assert wedding["total_projects"] == 2
        assert set(wedding["preferred_crew_members"]) == set(portfolio.values())

    def test_empty_studio(self):
        data = client.get("/api/v1/crew-analytics/overall").json()
        assert data["overall_metrics"]["total_crew_members"] == 0
        assert data["time_analysis"]["on_time_delivery_rate"] == 0.0


# ── Crew portfolio ────────────────────────────────────────────────────────
def _post_media(project_id, n, type_="image"):
    for i in range(n):
        resp = client.post("/api/v1/social-posts", json={
            "project_id": project_id, "type": type_, "url": f"https://cdn.studio.example/{project_id}/{i}.jpg",
        })
        assert resp.status_code == 201, resp.text


@pytest.fixture
def showcase():
    """Ana: a delivered wedding with two media items, an upcoming corporate shoot
    with one (shared with Bruno) and a project without media."""
    resp = client.post("/api/v1/crew", json={"name": {"es": "Ana"}, "role": {"es": "Fotógrafa"}})
    ana = resp.json()["id"]
    bruno = _member("Bruno")
    wedding = client.post("/api/v1/projects", json={
        "title": {"es": "Boda Sol"}, "event_type": "wedding", "crew_members": [ana],
        "event_date": "2026-05-01T00:00:00Z", "client": {"name": "Sol"},
    }).json()["id"]
    corporate = client.post("/api/v1/projects", json={
        "title": {"es": "Gala"}, "event_type": "corporate", "crew_members": [ana, bruno],
        "event_date": "2026-06-01T00:00:00Z",
    }).json()["id"]
    _project("Sin media", [ana], "wedding", "x@example.com", "2099-01-01T00:00:00Z")
    _post_media(wedding, 2)
    _post_media(corporate, 1, type_="video")
    _deliver(wedding, rating=5)
    client.post(f"/api/v1/projects/{corporate}/status", json={"status": "shooting_scheduled"})
    return {"ana": ana, "bruno": bruno, "wedding": wedding, "corporate": corporate}


class TestCrewPortfolio:
    def test_works_newest_event_first(self, showcase):
        works = client.get(f"/api/v1/crew-portfolio/{showcase['ana']}/works").json()
        assert [w["project_id"] for w in works] == [showcase["corporate"], showcase["wedding"], showcase["wedding"]]
        assert works[0]["type"] == "video"
        assert works[1]["title"] == "Boda Sol"
        assert works[1]["client"] == "Sol"
        assert works[1]["crew_role"] == "Fotógrafa"
        assert works[1]["rating"] == 5
        assert len(works[1]["images"]) == 2

    def test_works_by_category(self, showcase):
        works = client.get(f"/api/v1/crew-portfolio/{showcase['ana']}/works", params={"category": "wedding"}).json()
        assert {w["project_id"] for w in works} == {showcase["wedding"]}

    def test_featured_only_delivered(self, showcase):
        featured = client.get(f"/api/v1/crew-portfolio/{showcase['ana']}/featured").json()
        assert len(featured) == 2
        assert all(w["status"] == "delivered" for w in featured)
        limited = client.get(f"/api/v1/crew-portfolio/{showcase['ana']}/featured", params={"limit": 1}).json()
        assert len(limited) == 1

    def test_stats(self, showcase):
        stats = client.get(f"/api/v1/crew-portfolio/{showcase['ana']}/stats").json()
        assert stats["total_projects"] == 2
        assert stats["completed_projects"] == 1
        assert stats["in_progress_projects"] == 1
        assert stats["total_works"] == 3
        assert stats["average_rating"] == 5.0
        assert stats["top_categories"] == [{"category": "wedding", "count": 2}, {"category": "corporate", "count": 1}]
        assert len(stats["recent_works"]) == 3

    def test_all_members_with_stats(self, showcase):
        members = {m["id"]: m for m in client.get("/api/v1/crew-portfolio").json()}
        assert members[showcase["bruno"]]["stats"]["total_works"] == 1
        assert members[showcase["bruno"]]["stats"]["average_rating"] == 0

    def test_unknown_member(self):
        assert client.get("/api/v1/crew-portfolio/ghost/works").status_code == 404
        assert client.get("/api/v1/crew-portfolio/ghost/stats").status_code == 404
