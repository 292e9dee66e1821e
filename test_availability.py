# type: ignore
"""
Tests for crew availability: interval helpers, double-booking detection,
weekly schedules, calendars and the available-crew search.
"""
from datetime import datetime, timedelta, timezone

from fastapi.testclient import TestClient

from main import app
from studio.core.dependencies import get_store
from studio.services.intervals import overlaps, pairwise_overlaps, percentage, total_hours

client = TestClient(app)

BASE = datetime(2030, 6, 3, 9, 0, tzinfo=timezone.utc)


# ── Helpers ───────────────────────────────────────────────────────────────
def _iso(hours: float) -> str:
    return (BASE + timedelta(hours=hours)).isoformat()


def _create_member(name="Ana", skills=("photography",)):
    resp = client.post("/api/v1/crew", json={"name": {"es": name}, "skills": list(skills)})
    assert resp.status_code == 201, resp.text
    return resp.json()


def _slot(member_id, start_h, end_h, type_="busy", **extra):
    payload = {"crew_member_id": member_id, "start_time": _iso(start_h), "end_time": _iso(end_h), "type": type_}
    payload.update(extra)
    return client.post("/api/v1/availability", json=payload)


def _window(start_h, end_h):
    return {"start": _iso(start_h), "end": _iso(end_h)}


# ── Interval helpers ──────────────────────────────────────────────────────
class TestIntervals:
    def test_touching_intervals_do_not_overlap(self):
        a, b, c = BASE, BASE + timedelta(hours=1), BASE + timedelta(hours=2)
        assert overlaps(a, b, b, c) is False
        assert overlaps(a, c, b, c) is True

    def test_containment_overlaps(self):
        assert overlaps(BASE, BASE + timedelta(hours=4), BASE + timedelta(hours=1), BASE + timedelta(hours=2))

    def test_percentage_handles_zero(self):
        assert percentage(0, 0) == 0.0
        assert percentage(1, 3) == 33.33

    def test_total_hours_by_type(self):
        slots = [
            {"start_time": _iso(0), "end_time": _iso(2), "type": "busy"},
            {"start_time": _iso(3), "end_time": _iso(3.5), "type": "busy"},
            {"start_time": _iso(4), "end_time": _iso(8), "type": "available"},
        ]
        assert total_hours(slots, "busy") == 2.5
        assert total_hours(slots, "available") == 4.0
        assert total_hours(slots, "unavailable") == 0

    def test_pairwise_overlaps(self):
        slots = [
            {"id": "a", "start_time": _iso(0), "end_time": _iso(2)},
            {"id": "b", "start_time": _iso(1), "end_time": _iso(3)},
            {"id": "c", "start_time": _iso(3), "end_time": _iso(4)},
        ]
        pairs = pairwise_overlaps(slots)
        assert [(x["id"], y["id"]) for x, y in pairs] == [("a", "b")]


# ── Slots ─────────────────────────────────────────────────────────────────
class TestSlots:
    def test_create_defaults_to_busy(self):
        member = _create_member()
        resp = client.post("/api/v1/availability", json={
            "crew_member_id": member["id"], "start_time": _iso(0), "end_time": _iso(2),
        })
        assert resp.status_code == 201
        assert resp.json()["type"] == "busy"
        assert resp.json()["start_time"] == "2030-06-03T09:00:00+00:00"

    def test_offsets_normalised_to_utc(self):
        member = _create_member()
        resp = client.post("/api/v1/availability", json={
            "crew_member_id": member["id"],
            "start_time": "2030-06-03T09:00:00-03:00",
            "end_time": "2030-06-03T11:00:00-03:00",
        })
        assert resp.json()["start_time"] == "2030-06-03T12:00:00+00:00"

    def test_start_must_precede_end(self):
        member = _create_member()
        resp = _slot(member["id"], 2, 2)
        assert resp.status_code == 400
        assert resp.json()["detail"] == "Start time must be before end time"

    def test_unknown_member(self):
        assert _slot("ghost", 0, 1).status_code == 404

    def test_overlap_rejected_with_conflicts(self):
        member = _create_member()
        first = _slot(member["id"], 0, 2).json()
        resp = _slot(member["id"], 1, 3, type_="available")
        assert resp.status_code == 409
        detail = resp.json()["detail"]
        assert detail["message"] == "Conflicts detected: double_booking"
        conflict = detail["conflicts"][0]
        assert conflict["crew_member_id"] == member["id"]
        assert conflict["crew_member_name"] == "Ana"
        assert conflict["conflict_type"] == "double_booking"
        assert [s["id"] for s in conflict["conflicting_slots"]] == [first["id"]]

    def test_back_to_back_slots_allowed(self):
        member = _create_member()
        assert _slot(member["id"], 0, 2).status_code == 201
        assert _slot(member["id"], 2, 4).status_code == 201

    def test_other_members_do_not_conflict(self):
        a = _create_member()
        b = _create_member(name="Bruno")
        assert _slot(a["id"], 0, 2).status_code == 201
        assert _slot(b["id"], 0, 2).status_code == 201

    def test_update_ignores_itself(self):
        member = _create_member()
        slot = _slot(member["id"], 0, 2).json()
        resp = client.patch(f"/api/v1/availability/slots/{slot['id']}", json={"end_time": _iso(3)})
        assert resp.status_code == 200
        assert resp.json()["end_time"] == _iso(3)

    def test_update_null_type_keeps_stored_type(self):
        member = _create_member()
        slot = _slot(member["id"], 0, 2).json()
        resp = client.patch(f"/api/v1/availability/slots/{slot['id']}", json={"type": None, "reason": "Boda"})
        assert resp.status_code == 200
        stored = client.get(f"/api/v1/availability/slots/{slot['id']}").json()
        assert stored["type"] == "busy"
        assert stored["reason"] == "Boda"
        assert _slot(member["id"], 1, 3).status_code == 409

    def test_update_into_overlap_rejected(self):
        member = _create_member()
        _slot(member["id"], 0, 2)
        later = _slot(member["id"], 3, 4).json()
        resp = client.patch(f"/api/v1/availability/slots/{later['id']}", json={"start_time": _iso(1)})
        assert resp.status_code == 409

    def test_update_inverted_window(self):
        member = _create_member()
        slot = _slot(member["id"], 0, 2).json()
        resp = client.patch(f"/api/v1/availability/slots/{slot['id']}", json={"end_time": _iso(-1)})
        assert resp.status_code == 400

    def test_delete(self):
        member = _create_member()
        slot = _slot(member["id"], 0, 2).json()
        assert client.delete(f"/api/v1/availability/slots/{slot['id']}").status_code == 200
        assert client.get(f"/api/v1/availability/slots/{slot['id']}").status_code == 404

    def test_invalid_type(self):
        member = _create_member()
        assert _slot(member["id"], 0, 1, type_="vacation").status_code == 422


# ── Weekly schedule ───────────────────────────────────────────────────────
class TestSchedule:
    def test_default_schedule(self):
        member = _create_member()
        schedule = client.get(f"/api/v1/availability/schedule/{member['id']}").json()
        assert schedule["is_default"] is True
        assert schedule["days"]["monday"] == {"start": "09:00", "end": "17:00", "available": True}
        assert schedule["days"]["sunday"] == {"start": "10:00", "end": "16:00", "available": True}

    def test_set_schedule_merges_with_defaults(self):
        member = _create_member()
        resp = client.put(f"/api/v1/availability/schedule/{member['id']}", json={
            "days": {"Saturday": {"available": False}},
            "timezone": "America/Sao_Paulo",
        })
        assert resp.status_code == 200
        schedule = client.get(f"/api/v1/availability/schedule/{member['id']}").json()
        assert schedule["is_default"] is False
        assert schedule["timezone"] == "America/Sao_Paulo"
        assert schedule["days"]["saturday"]["available"] is False
        assert schedule["days"]["monday"]["start"] == "09:00"

    def test_unknown_weekday(self):
        member = _create_member()
        resp = client.put(f"/api/v1/availability/schedule/{member['id']}", json={"days": {"funday": {}}})
        assert resp.status_code == 422

    def test_schedule_for_unknown_member(self):
        assert client.get("/api/v1/availability/schedule/ghost").status_code == 404


# ── Calendars ─────────────────────────────────────────────────────────────
class TestCalendar:
    def test_totals_and_percentages(self):
        member = _create_member()
        _slot(member["id"], 0, 6, type_="available")
        _slot(member["id"], 6, 8, type_="busy")
        _slot(member["id"], 8, 9, type_="unavailable")
        _slot(member["id"], 30, 32, type_="busy")

        cal = client.get(f"/api/v1/availability/calendar/{member['id']}", params=_window(0, 24)).json()
        assert cal["crew_member_name"] == "Ana"
        assert len(cal["slots"]) == 3
        assert cal["total_available_hours"] == 6.0
        assert cal["total_busy_hours"] == 2.0
        assert cal["availability_percentage"] == 75.0
        assert cal["utilization_percentage"] == 25.0
        assert cal["next_available_slot"] == _iso(0)
        assert cal["conflicts"] == []
        assert cal["schedule"]["is_default"] is True

    def test_empty_window(self):
        member = _create_member()
        cal = client.get(f"/api/v1/availability/calendar/{member['id']}", params=_window(0, 24)).json()
        assert cal["availability_percentage"] == 0.0
        assert cal["next_available_slot"] is None

    def test_reports_overlaps_already_in_storage(self):
        member = _create_member()
        store = get_store()
        for start_h, end_h in ((0, 2), (1, 3)):
            store.add("crew_availability", {
                "crew_member_id": member["id"], "start_time": _iso(start_h),
                "end_time": _iso(end_h), "type": "busy",
            })
        cal = client.get(f"/api/v1/availability/calendar/{member['id']}", params=_window(0, 24)).json()
        assert len(cal["conflicts"]) == 1
        assert len(cal["conflicts"][0]["conflicting_slots"]) == 2

    def test_inverted_window(self):
        member = _create_member()
        resp = client.get(f"/api/v1/availability/calendar/{member['id']}", params=_window(5, 1))
        assert resp.status_code == 400

    def test_all_calendars(self):
        _create_member()
        _create_member(name="Bruno")
        resp = client.get("/api/v1/availability/calendars", params=_window(0, 24))
        assert [c["crew_member_name"] for c in resp.json()] == ["Ana", "Bruno"]


# ── Available crew search ─────────────────────────────────────────────────
class TestFindAvailable:
    def test_busy_members_excluded(self):
        free = _create_member(name="Ana")
        busy = _create_member(name="Bruno")
        _slot(busy["id"], 1, 3, type_="busy")
        result = client.get("/api/v1/availability/available", params=_window(0, 4)).json()
        assert [c["crew_member"]["id"] for c in result] == [free["id"]]

    def test_unavailable_blocks_too(self):
        member = _create_member()
        _slot(member["id"], 0, 1, type_="unavailable")
        assert client.get("/api/v1/availability/available", params=_window(0, 4)).json() == []

    def test_available_slots_do_not_block_and_rank_first(self):
        plain = _create_member(name="Ana")
        open_ = _create_member(name="Bruno")
        _slot(open_["id"], 0, 4, type_="available")
        result = client.get("/api/v1/availability/available", params=_window(0, 4)).json()
        assert [c["crew_member"]["id"] for c in result] == [open_["id"], plain["id"]]
        assert result[0]["availability_percentage"] == 100.0

    def test_adjacent_busy_slot_does_not_block(self):
        member = _create_member()
        _slot(member["id"], 4, 6, type_="busy")
        result = client.get("/api/v1/availability/available", params=_window(0, 4)).json()
        assert [c["crew_member"]["id"] for c in result] == [member["id"]]

    def test_skill_filter(self):
        _create_member(name="Ana", skills=["photography"])
        video = _create_member(name="Bruno", skills=["video"])
        result = client.get(
            "/api/v1/availability/available", params={**_window(0, 4), "skills": "VIDEO"}
        ).json()
        assert [c["crew_member"]["id"] for c in result] == [video["id"]]
