# type: ignore
"""
Tests for the Studio Portal API: system, crew, projects, contact intake
and the document store underneath them.

Run:  pytest -v --cov=studio --cov-report=term-missing
"""
import json
import logging
import sys
from datetime import datetime, timedelta, timezone

import pytest
from fastapi.testclient import TestClient

from main import app
from studio.core.dependencies import get_store
from studio.core.logging import JSONFormatter, get_logger

client = TestClient(app)


# ── Helpers ───────────────────────────────────────────────────────────────
def _member_payload(**overrides):
    base = {
        "name": {"es": "Ana Pérez", "en": "Ana Perez"},
        "role": {"es": "Fotógrafa", "en": "Photographer"},
        "skills": ["Photography", " Drone "],
    }
    base.update(overrides)
    return base


def _create_member(**overrides):
    resp = client.post("/api/v1/crew", json=_member_payload(**overrides))
    assert resp.status_code == 201, resp.text
    return resp.json()


def _create_project(**overrides):
    base = {"title": {"es": "Boda Ana y Juan"}, "event_type": "wedding"}
    base.update(overrides)
    resp = client.post("/api/v1/projects", json=base)
    assert resp.status_code == 201, resp.text
    return resp.json()


def _contact_payload(**overrides):
    base = {
        "name": "Lucía",
        "email": "lucia@example.com",
        "message": "Queremos cotizar la cobertura de nuestra boda.",
        "event_type": "casamiento",
        "event_date": "2026-12-12",
        "consent": True,
    }
    base.update(overrides)
    return base


def _submit_contact(**overrides):
    resp = client.post("/api/v1/contacts", json=_contact_payload(**overrides))
    assert resp.status_code == 201, resp.text
    return resp.json()


# ── System ────────────────────────────────────────────────────────────────
class TestSystem:
    def test_health(self):
        _create_member()
        resp = client.get("/health")
        assert resp.status_code == 200
        body = resp.json()
        assert body["status"] == "ok"
        assert body["service"] == "studio-portal"
        assert body["crew_members"] == 1
        assert body["projects"] == 0

    def test_ready(self):
        resp = client.get("/health/ready")
        assert resp.status_code == 200
        assert resp.json()["status"] == "ok"

    def test_metrics_exposed(self):
        resp = client.get("/metrics")
        assert resp.status_code == 200
        assert "studio_contacts_received_total" in resp.text
        assert "studio_availability_conflicts_total" in resp.text

    def test_request_id_echoed(self):
        resp = client.get("/health", headers={"X-Request-ID": "abc-123"})
        assert resp.headers["X-Request-ID"] == "abc-123"

    def test_request_id_generated(self):
        resp = client.get("/health")
        assert resp.headers.get("X-Request-ID")

    def test_metrics_labelled_by_route_template(self):
        client.get("/api/v1/crew/does-not-exist")
        text = client.get("/metrics").text
        assert 'endpoint="/api/v1/crew/{member_id}"' in text
        assert "does-not-exist" not in text


# ── Logging ───────────────────────────────────────────────────────────────
class TestLogging:
    def test_json_record_fields(self):
        record = logging.LogRecord("studio.test", logging.INFO, __file__, 1, "Project %s saved", ("p1",), None)
        record.project_id = "p1"
        entry = json.loads(JSONFormatter().format(record))
        assert entry["message"] == "Project p1 saved"
        assert entry["level"] == "INFO"
        assert entry["project_id"] == "p1"
        assert datetime.fromisoformat(entry["timestamp"]).tzinfo is not None
        assert "request_id" not in entry

    def test_exception_details(self):
        try:
            raise ValueError("bad slot")
        except ValueError:
            record = logging.LogRecord("studio.test", logging.ERROR, __file__, 1, "failed", (), sys.exc_info())
        entry = json.loads(JSONFormatter().format(record))
        assert entry["error"] == "bad slot"
        assert entry["error_type"] == "ValueError"

    def test_module_loggers_nest_under_studio(self):
        assert get_logger("studio.services.x").name == "studio.services.x"
        assert get_logger("main").name == "studio.main"
        assert get_logger().name == "studio"


# ── Crew ──────────────────────────────────────────────────────────────────
class TestCrew:
    def test_create_normalises_skills_and_order(self):
        first = _create_member()
        second = _create_member(name={"es": "Bruno"})
        assert first["skills"] == ["photography", "drone"]
        assert first["order"] == 0
        assert second["order"] == 1

    def test_name_requires_a_translation(self):
        resp = client.post("/api/v1/crew", json=_member_payload(name={"es": "", "en": ""}))
        assert resp.status_code == 422

    def test_get_missing_returns_404(self):
        assert client.get("/api/v1/crew/nope").status_code == 404

    def test_partial_update(self):
        member = _create_member()
        resp = client.patch(f"/api/v1/crew/{member['id']}", json={"portrait": "https://cdn/x.jpg"})
        assert resp.status_code == 200
        assert resp.json()["portrait"] == "https://cdn/x.jpg"
        assert resp.json()["name"]["es"] == "Ana Pérez"

    def test_reorder(self):
        a = _create_member()
        b = _create_member(name={"es": "Bruno"})
        resp = client.put("/api/v1/crew/reorder", json={"ids": [b["id"], a["id"]]})
        assert resp.status_code == 200
        assert [m["id"] for m in resp.json()] == [b["id"], a["id"]]

    def test_reorder_unknown_id(self):
        a = _create_member()
        resp = client.put("/api/v1/crew/reorder", json={"ids": [a["id"], "ghost"]})
        assert resp.status_code == 404

    def test_search_matches_name_role_and_skill(self):
        _create_member()
        _create_member(name={"es": "Bruno"}, role={"es": "Editor"}, skills=["video"])
        assert len(client.get("/api/v1/crew/search", params={"q": "ANA"}).json()) == 1
        assert len(client.get("/api/v1/crew/search", params={"q": "editor"}).json()) == 1
        assert len(client.get("/api/v1/crew/search", params={"q": "dro"}).json()) == 1
        assert client.get("/api/v1/crew/search", params={"q": "zzz"}).json() == []

    def test_filter_by_any_skill(self):
        _create_member()
        _create_member(name={"es": "Bruno"}, skills=["video"])
        _create_member(name={"es": "Carla"}, skills=["makeup"])
        resp = client.get("/api/v1/crew", params={"skills": "video,drone"})
        assert {m["name"]["es"] for m in resp.json()} == {"Ana Pérez", "Bruno"}

    def test_stats(self):
        _create_member()
        _create_member(name={"es": "Bruno"}, skills=["photography"])
        stats = client.get("/api/v1/crew/stats").json()
        assert stats["total"] == 2
        assert stats["by_skills"] == {"photography": 2, "drone": 1}

    def test_delete_removes_availability(self):
        member = _create_member()
        start = datetime(2030, 1, 1, 10, tzinfo=timezone.utc)
        client.post("/api/v1/availability", json={
            "crew_member_id": member["id"],
            "start_time": start.isoformat(),
            "end_time": (start + timedelta(hours=2)).isoformat(),
        })
        resp = client.delete(f"/api/v1/crew/{member['id']}")
        assert resp.status_code == 200
        assert resp.json()["slots_removed"] == 1
        assert client.get(f"/api/v1/crew/{member['id']}").status_code == 404


# ── Projects ──────────────────────────────────────────────────────────────
class TestProjects:
    def test_create_starts_as_draft_with_slug(self):
        project = _create_project()
        assert project["status"] == "draft"
        assert project["slug"] == "boda-ana-y-juan"
        assert project["completed_at"] is None

    def test_slug_is_unique(self):
        _create_project()
        assert _create_project()["slug"] == "boda-ana-y-juan-2"

    def test_unknown_crew_rejected(self):
        resp = client.post("/api/v1/projects", json={"title": {"es": "X"}, "crew_members": ["ghost"]})
        assert resp.status_code == 400

    def test_filter_by_status(self):
        p = _create_project()
        _create_project(title={"es": "Otro"})
        client.post(f"/api/v1/projects/{p['id']}/status", json={"status": "shooting_scheduled"})
        resp = client.get("/api/v1/projects", params={"status": "shooting_scheduled"})
        assert [x["id"] for x in resp.json()] == [p["id"]]

    def test_full_lifecycle_records_history(self):
        p = _create_project()
        for status in ("shooting_scheduled", "in_editing", "delivered"):
            resp = client.post(f"/api/v1/projects/{p['id']}/status", json={"status": status, "changed_by": "sofia"})
            assert resp.status_code == 200, resp.text
        assert resp.json()["completed_at"] is not None

        history = client.get(f"/api/v1/projects/{p['id']}/status-history").json()
        assert len(history) == 3
        assert history[0]["to_status"] == "delivered"
        assert history[-1]["from_status"] == "draft"
        assert history[0]["changed_by"] == "sofia"

    def test_illegal_transition(self):
        p = _create_project()
        resp = client.post(f"/api/v1/projects/{p['id']}/status", json={"status": "delivered"})
        assert resp.status_code == 400
        assert "Cannot transition" in resp.json()["detail"]

    def test_same_status_rejected(self):
        p = _create_project()
        resp = client.post(f"/api/v1/projects/{p['id']}/status", json={"status": "draft"})
        assert resp.status_code == 400

    def test_archive_and_restore(self):
        p = _create_project()
        assert client.post(f"/api/v1/projects/{p['id']}/status", json={"status": "archived"}).status_code == 200
        assert client.post(f"/api/v1/projects/{p['id']}/status", json={"status": "draft"}).status_code == 200

    def test_unknown_status_value(self):
        p = _create_project()
        resp = client.post(f"/api/v1/projects/{p['id']}/status", json={"status": "done"})
        assert resp.status_code == 422

    def test_assign_crew_dedupes(self):
        m = _create_member()
        p = _create_project()
        resp = client.put(f"/api/v1/projects/{p['id']}/crew", json={"crew_member_ids": [m["id"], m["id"]]})
        assert resp.status_code == 200
        assert resp.json()["crew_members"] == [m["id"]]

    def test_rating_bounds(self):
        p = _create_project()
        assert client.post(f"/api/v1/projects/{p['id']}/rating", json={"rating": 6}).status_code == 422
        resp = client.post(f"/api/v1/projects/{p['id']}/rating", json={"rating": 5, "feedback": "Excelente"})
        assert resp.json()["client_satisfaction"]["rating"] == 5

    def test_delete_unlinks_contacts(self):
        p = _create_project()
        c = _submit_contact()
        client.post(f"/api/v1/contacts/{c['id']}/assign", json={"project_id": p["id"]})
        assert client.delete(f"/api/v1/projects/{p['id']}").status_code == 200
        assert client.get(f"/api/v1/contacts/{c['id']}").json()["project_id"] is None

    def test_update_null_title_keeps_title(self):
        p = _create_project()
        resp = client.patch(f"/api/v1/projects/{p['id']}", json={"title": None, "location": "Mendoza"})
        assert resp.status_code == 200
        assert resp.json()["title"]["es"] == "Boda Ana y Juan"
        assert resp.json()["location"] == "Mendoza"

    def test_delete_removes_generated_tasks(self):
        p = _create_project()
        template = client.post("/api/v1/templates/predefined", json={"category": "wedding"}).json()
        applied = client.post(f"/api/v1/templates/{template['id']}/apply", json={
            "project_id": p["id"], "start_date": "2026-05-01T00:00:00+00:00",
        })
        assert applied.status_code == 201, applied.text
        assert client.get(f"/api/v1/projects/{p['id']}/tasks").json()

        resp = client.delete(f"/api/v1/projects/{p['id']}")
        assert resp.json()["tasks_removed"] == len(applied.json()["tasks"])
        assert get_store().count("project_tasks") == 0


class TestProjectStatusReporting:
    @pytest.fixture
    def projects(self):
        draft = _create_project(title={"es": "Uno"})
        scheduled = _create_project(title={"es": "Dos"})
        editing = _create_project(title={"es": "Tres"})
        client.post(f"/api/v1/projects/{scheduled['id']}/status", json={"status": "shooting_scheduled"})
        for status in ("shooting_scheduled", "in_editing"):
            client.post(f"/api/v1/projects/{editing['id']}/status", json={"status": status})
        return draft["id"], scheduled["id"], editing["id"]

    def test_statistics(self, projects):
        stats = client.get("/api/v1/projects/status-statistics").json()
        assert stats["total"] == 3
        assert stats["by_status"] == {
            "draft": 1, "shooting_scheduled": 1, "in_editing": 1, "delivered": 0, "archived": 0,
        }

    def test_recent_changes(self, projects):
        changes = client.get("/api/v1/projects/status-changes", params={"limit": 2}).json()
        assert len(changes) == 2
        assert changes[0]["project_id"] == projects[2]
        assert changes[0]["to_status"] == "in_editing"

    def test_by_status_range(self, projects):
        resp = client.get(
            "/api/v1/projects/by-status", params=[("status", "shooting_scheduled"), ("status", "in_editing")]
        )
        assert [p["id"] for p in resp.json()] == [projects[2], projects[1]]

    def test_by_status_unknown(self):
        assert client.get("/api/v1/projects/by-status", params={"status": "done"}).status_code == 400
        assert client.get("/api/v1/projects/by-status").status_code == 422

    def test_timeline_oldest_first(self, projects):
        timeline = client.get(f"/api/v1/projects/{projects[2]}/status-timeline").json()
        assert [t["to_status"] for t in timeline] == ["shooting_scheduled", "in_editing"]
        assert client.get("/api/v1/projects/ghost/status-timeline").status_code == 404


# ── Contacts ──────────────────────────────────────────────────────────────
class TestContactIntake:
    def test_submit_creates_unread_message(self):
        contact = _submit_contact()
        assert contact["status"] == "new"
        assert contact["is_read"] is False
        assert contact["project_id"] is None
        assert contact["source"] == "contact_form"

    def test_submission_records_failed_email_without_providers(self):
        contact = _submit_contact()
        stored = client.get(f"/api/v1/contacts/{contact['id']}").json()
        assert stored["email_sent"] is False
        assert stored["email_error"]
        assert stored["email_results"] == [
            {"admin": "info@studio.example", "success": False, "error": "All email services failed"}
        ]

    @pytest.mark.parametrize("overrides", [
        {"consent": False},
        {"message": "corto"},
        {"email": "not-an-email"},
        {"name": ""},
        {"event_type": "fiesta"},
        {"services": ["catering"]},
    ])
    def test_invalid_submissions(self, overrides):
        resp = client.post("/api/v1/contacts", json=_contact_payload(**overrides))
        assert resp.status_code == 422

    def test_unread_count_and_mark_read(self):
        c = _submit_contact()
        _submit_contact(name="Pedro")
        assert client.get("/api/v1/contacts/unread-count").json() == {"unread": 2}
        assert client.post(f"/api/v1/contacts/{c['id']}/read").json()["is_read"] is True
        assert client.get("/api/v1/contacts/unread-count").json() == {"unread": 1}

    def test_status_update_and_filter(self):
        c = _submit_contact()
        _submit_contact(name="Pedro")
        resp = client.patch(f"/api/v1/contacts/{c['id']}/status", json={"status": "completed"})
        assert resp.json()["status"] == "completed"
        listed = client.get("/api/v1/contacts", params={"status": "completed"}).json()
        assert [x["id"] for x in listed] == [c["id"]]

    def test_assign_and_remove(self):
        c = _submit_contact()
        p = _create_project()
        assert client.post(f"/api/v1/contacts/{c['id']}/assign", json={"project_id": "ghost"}).status_code == 404
        client.post(f"/api/v1/contacts/{c['id']}/assign", json={"project_id": p["id"]})
        assert [x["id"] for x in client.get(f"/api/v1/projects/{p['id']}/contacts").json()] == [c["id"]]
        assert client.get("/api/v1/contacts", params={"unassigned": True}).json() == []
        client.delete(f"/api/v1/contacts/{c['id']}/assign")
        assert len(client.get("/api/v1/contacts", params={"unassigned": True}).json()) == 1

    def test_convert_to_project(self):
        c = _submit_contact(location="Punta del Este")
        resp = client.post(f"/api/v1/contacts/{c['id']}/convert")
        assert resp.status_code == 201
        project = resp.json()["project"]
        assert project["status"] == "draft"
        assert project["event_type"] == "wedding"
        assert project["title"]["es"] == "Casamiento - Lucía"
        assert project["client"]["email"] == "lucia@example.com"
        assert project["event_date"].startswith("2026-12-12")
        assert resp.json()["contact"]["project_id"] == project["id"]
        assert resp.json()["contact"]["status"] == "in_progress"
        assert client.post(f"/api/v1/contacts/{c['id']}/convert").status_code == 400

    def test_delete(self):
        c = _submit_contact()
        assert client.delete(f"/api/v1/contacts/{c['id']}").status_code == 200
        assert client.delete(f"/api/v1/contacts/{c['id']}").status_code == 404


class TestAdminUsers:
    def test_create_and_reject_duplicate(self):
        payload = {"email": "Sofia@Studio.example", "name": "Sofía"}
        resp = client.post("/api/v1/admin-users", json=payload)
        assert resp.status_code == 201
        assert resp.json()["email"] == "sofia@studio.example"
        assert resp.json()["email_notifications"] == {"contact_messages": True}
        assert client.post("/api/v1/admin-users", json=payload).status_code == 400

    def test_update_preferences(self):
        user = client.post("/api/v1/admin-users", json={"email": "a@studio.example", "name": "A"}).json()
        resp = client.patch(
            f"/api/v1/admin-users/{user['id']}",
            json={"email_notifications": {"contact_messages": False}},
        )
        assert resp.json()["email_notifications"]["contact_messages"] is False


# ── Document store ────────────────────────────────────────────────────────
class TestDocumentStore:
    def setup_method(self):
        self.store = get_store()

    def test_add_get_update_delete(self):
        doc = self.store.add("things", {"name": "a"})
        assert self.store.get("things", doc["id"])["name"] == "a"
        updated = self.store.update("things", doc["id"], {"name": "b"})
        assert updated["name"] == "b"
        assert updated["created_at"] == doc["created_at"]
        assert self.store.delete("things", doc["id"]) is True
        assert self.store.delete("things", doc["id"]) is False
        assert self.store.update("things", doc["id"], {"name": "c"}) is None

    def test_set_upserts_and_keeps_created_at(self):
        first = self.store.set("things", "k", {"v": 1})
        second = self.store.set("things", "k", {"v": 2})
        assert second["v"] == 2
        assert second["created_at"] == first["created_at"]
        assert self.store.count("things") == 1

    def test_query_operators(self):
        self.store.add("things", {"n": 1, "tags": ["a"], "meta": {"kind": "x"}})
        self.store.add("things", {"n": 2, "tags": ["b"], "meta": {"kind": "y"}})
        self.store.add("things", {"n": 3, "tags": ["a", "c"], "meta": {"kind": "x"}})
        assert len(self.store.query("things", [("n", ">=", 2)])) == 2
        assert len(self.store.query("things", [("n", "in", [1, 3])])) == 2
        assert len(self.store.query("things", [("tags", "array-contains", "a")])) == 2
        assert len(self.store.query("things", [("tags", "array-contains-any", ["b", "c"])])) == 2
        assert len(self.store.query("things", [("meta.kind", "==", "x"), ("n", "!=", 1)])) == 1

    def test_order_and_limit(self):
        for n in (2, 3, 1):
            self.store.add("things", {"n": n})
        self.store.add("things", {"other": True})
        ordered = self.store.query("things", order_by="n", descending=True)
        assert [d.get("n") for d in ordered] == [3, 2, 1, None]
        assert [d["n"] for d in self.store.query("things", order_by="n", limit=2)] == [1, 2]

    def test_datetime_comparison_across_offsets(self):
        self.store.add("things", {"at": "2026-03-01T12:00:00-03:00"})
        cutoff = datetime(2026, 3, 1, 14, 30, tzinfo=timezone.utc)
        assert self.store.query("things", [("at", "<", cutoff)]) == []
        assert len(self.store.query("things", [("at", ">", cutoff)])) == 1

    def test_datetimes_serialised_as_iso(self):
        when = datetime(2026, 1, 1, 9, tzinfo=timezone.utc)
        doc = self.store.add("things", {"at": when})
        assert doc["at"] == "2026-01-01T09:00:00+00:00"
