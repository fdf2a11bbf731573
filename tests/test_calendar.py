"""
Tests for scheduling outfits on the calendar.
"""
from datetime import date

from closet.models import CalendarEntry


def test_schedule_outfit(client, auth_headers, make_item, make_outfit):
    outfit = make_outfit([make_item(color="#FF0000")["id"], make_item(color="#0000FF")["id"]], name="Date night")

    response = client.put("/calendar/2024-05-03", json={"outfit_id": outfit["id"]}, headers=auth_headers)
    assert response.status_code == 200
    event = response.json()
    assert event["date"] == "2024-05-03"
    assert event["title"] == "Date night"
    assert event["color"] == "#800080"


def test_one_outfit_per_day(client, auth_headers, make_item, make_outfit):
    first = make_outfit([make_item(name="A")["id"]], name="First")
    second = make_outfit([make_item(name="B")["id"]], name="Second")

    client.put("/calendar/2024-05-03", json={"outfit_id": first["id"]}, headers=auth_headers)
    client.put("/calendar/2024-05-03", json={"outfit_id": second["id"]}, headers=auth_headers)

    events = client.get("/calendar", headers=auth_headers).json()
    assert len(events) == 1
    assert events[0]["title"] == "Second"


def test_list_in_date_order_within_range(client, auth_headers, make_item, make_outfit):
    outfit = make_outfit([make_item()["id"]])
    for day in ["2024-06-10", "2024-06-01", "2024-07-01"]:
        client.put(f"/calendar/{day}", json={"outfit_id": outfit["id"]}, headers=auth_headers)

    events = client.get("/calendar?start=2024-06-01&end=2024-06-30", headers=auth_headers).json()
    assert [e["date"] for e in events] == ["2024-06-01", "2024-06-10"]


def test_reversed_range_rejected(client, auth_headers):
    response = client.get("/calendar?start=2024-06-30&end=2024-06-01", headers=auth_headers)
    assert response.status_code == 400


def test_favorites_only(client, auth_headers, make_item, make_outfit):
    plain = make_outfit([make_item(name="A")["id"]], name="Plain")
    loved = make_outfit([make_item(name="B")["id"]], name="Loved")
    client.post(f"/outfits/{loved['id']}/favorite", headers=auth_headers)

    client.put("/calendar/2024-01-01", json={"outfit_id": plain["id"]}, headers=auth_headers)
    client.put("/calendar/2024-01-02", json={"outfit_id": loved["id"]}, headers=auth_headers)

    events = client.get("/calendar?favorites_only=true", headers=auth_headers).json()
    assert [e["title"] for e in events] == ["Loved"]


def test_missing_outfit_shown_as_unknown(client, auth_headers, db_session):
    me = client.get("/auth/me", headers=auth_headers).json()
    db_session.add(CalendarEntry(user_id=me["id"], date=date(2024, 2, 29), outfit_id=9999))
    db_session.commit()

    events = client.get("/calendar", headers=auth_headers).json()
    assert events[0]["title"] == "Unknown Outfit"
    assert events[0]["color"] == "#3174AD"


def test_cannot_schedule_foreign_outfit(client, register, make_item, make_outfit):
    outfit = make_outfit([make_item()["id"]])
    other = register(email="other@example.com")
    response = client.put("/calendar/2024-05-03", json={"outfit_id": outfit["id"]}, headers=other)
    assert response.status_code == 404


def test_remove_entry(client, auth_headers, make_item, make_outfit):
    outfit = make_outfit([make_item()["id"]])
    event = client.put("/calendar/2024-05-03", json={"outfit_id": outfit["id"]}, headers=auth_headers).json()

    assert client.delete(f"/calendar/entries/{event['id']}", headers=auth_headers).status_code == 204
    assert client.get("/calendar", headers=auth_headers).json() == []
    assert client.delete(f"/calendar/entries/{event['id']}", headers=auth_headers).status_code == 404


def test_deleting_outfit_clears_its_days(client, auth_headers, make_item, make_outfit):
    outfit = make_outfit([make_item()["id"]])
    client.put("/calendar/2024-05-03", json={"outfit_id": outfit["id"]}, headers=auth_headers)

    client.delete(f"/outfits/{outfit['id']}", headers=auth_headers)
    assert client.get("/calendar", headers=auth_headers).json() == []
