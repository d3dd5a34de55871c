from datetime import date

import pytest
from fastapi import HTTPException

from app.modules.calendar.service import month_grid, month_range


def test_month_range_handles_leap_february():
    assert month_range(2028, 2) == (date(2028, 2, 1), date(2028, 2, 29))
    assert month_range(2026, 12) == (date(2026, 12, 1), date(2026, 12, 31))


def test_month_range_rejects_bad_month():
    with pytest.raises(HTTPException) as exc:
        month_range(2026, 13)
    assert exc.value.status_code == 422


def test_month_grid_starts_on_sunday():
    weeks = month_grid(2026, 10)  # 1 October 2026 is a Thursday
    assert all(len(week) == 7 for week in weeks)
    assert weeks[0][:4] == [None, None, None, None]
    assert weeks[0][4] == date(2026, 10, 1)
    days = [d for week in weeks for d in week if d is not None]
    assert days[0] == date(2026, 10, 1)
    assert days[-1] == date(2026, 10, 31)
    assert len(days) == 31


def test_month_view_includes_tasks_and_events_in_range(client, household, fake):
    fake.seed("tasks", {"household_id": household.id, "title": "Pay rent", "due_date": "2026-10-01", "completed": False})
    fake.seed("tasks", {"household_id": household.id, "title": "Late", "due_date": "2026-11-01", "completed": False})
    fake.seed("tasks", {"household_id": household.id, "title": "Undated", "due_date": None, "completed": False})
    fake.seed("tasks", {"household_id": "elsewhere", "title": "Foreign", "due_date": "2026-10-05", "completed": False})

    created = client.post(
        "/api/v1/calendar/events",
        json={"title": "Dinner party", "event_date": "2026-10-31T19:30:00", "event_location": "Home"},
        headers=household.member_headers,
    )
    assert created.status_code == 201
    client.post("/api/v1/calendar/events", json={"title": "Early", "event_date": "2026-10-02T08:00:00"},
                headers=household.owner_headers)
    client.post("/api/v1/calendar/events", json={"title": "Next month", "event_date": "2026-11-01T00:00:00"},
                headers=household.owner_headers)

    resp = client.get("/api/v1/calendar", params={"year": 2026, "month": 10}, headers=household.member_headers)
    assert resp.status_code == 200
    body = resp.json()
    assert body["start_date"] == "2026-10-01"
    assert body["end_date"] == "2026-10-31"
    assert [t["title"] for t in body["tasks"]] == ["Pay rent"]
    assert [e["title"] for e in body["events"]] == ["Early", "Dinner party"]
    assert body["events"][1]["creator"]["full_name"] == "Max Member"
    assert body["events"][1]["event_location"] == "Home"


def test_month_view_rejects_invalid_month(client, household):
    resp = client.get("/api/v1/calendar", params={"year": 2026, "month": 14}, headers=household.member_headers)
    assert resp.status_code == 422


@pytest.mark.parametrize("params", [
    {"year": 2026, "month": 0},
    {"year": 0, "month": 3},
    {"year": 10000, "month": 1},
])
def test_month_view_rejects_out_of_range_values(client, household, params):
    resp = client.get("/api/v1/calendar", params=params, headers=household.member_headers)
    assert resp.status_code == 422


def test_delete_event(client, household, fake):
    event = client.post("/api/v1/calendar/events", json={"title": "Vet", "event_date": "2026-10-12T10:00:00"},
                        headers=household.owner_headers).json()
    resp = client.delete(f"/api/v1/calendar/events/{event['id']}", headers=household.member_headers)
    assert resp.status_code == 204
    assert fake.rows("calendar_events") == []
    assert client.get(f"/api/v1/calendar/events/{event['id']}", headers=household.member_headers).status_code == 404


def test_events_from_other_households_are_not_deletable(client, household, fake):
    event = fake.seed("calendar_events", {"household_id": "elsewhere", "title": "Theirs",
                                          "event_date": "2026-10-12T10:00:00", "created_by": "someone"})
    resp = client.delete(f"/api/v1/calendar/events/{event['id']}", headers=household.owner_headers)
    assert resp.status_code == 404
    assert len(fake.rows("calendar_events")) == 1


def test_list_events_between_dates(client, household):
    for day in ("05", "15", "25"):
        client.post("/api/v1/calendar/events", json={"title": f"Day {day}", "event_date": f"2026-10-{day}T12:00:00"},
                    headers=household.owner_headers)
    resp = client.get("/api/v1/calendar/events", params={"start": "2026-10-10", "end": "2026-10-25"},
                      headers=household.owner_headers)
    assert [e["title"] for e in resp.json()] == ["Day 15", "Day 25"]
