#tests/api/test_calendar_api.py
from fastapi.testclient import TestClient


def event_payload(**overrides):
    payload = {
        "type": "schedule",
        "title": "Offsite",
        "date": "2026-10-20T00:00:00",
        "start_time": "09:00",
        "end_time": "17:00",
        "location": "HQ",
        "content": "Planning day",
        "attendee_ids": [],
    }
    payload.update(overrides)
    return payload


def test_create_and_get_event(client: TestClient, admin_token_headers: dict, test_user):
    response = client.post("/calendar/", json=event_payload(attendee_ids=[test_user.id]), headers=admin_token_headers)
    assert response.status_code == 201
    event = response.json()
    assert event["title"] == "Offsite"
    assert [a["user_id"] for a in event["attendees"]] == [test_user.id]
    assert event["attendees"][0]["user"]["name"] == test_user.name

    fetched = client.get(f"/calendar/{event['id']}")
    assert fetched.status_code == 200
    assert fetched.json()["location"] == "HQ"


def test_create_event_requires_admin(client: TestClient):
    assert client.post("/calendar/", json=event_payload()).status_code == 401


def test_create_event_invalid_payload(client: TestClient, admin_token_headers: dict):
    assert client.post("/calendar/", json=event_payload(type="party"), headers=admin_token_headers).status_code == 422
    assert client.post("/calendar/", json=event_payload(start_time="25:00"), headers=admin_token_headers).status_code == 422
    assert client.post("/calendar/", json=event_payload(attendee_ids=[999999]), headers=admin_token_headers).status_code == 400


def test_list_events_by_month(client: TestClient, admin_token_headers: dict):
    client.post("/calendar/", json=event_payload(title="Oct", date="2026-10-05T00:00:00"), headers=admin_token_headers)
    client.post("/calendar/", json=event_payload(title="Nov", date="2026-11-05T00:00:00"), headers=admin_token_headers)

    october = client.get("/calendar/", params={"year": 2026, "month": 10}).json()
    assert [e["title"] for e in october] == ["Oct"]
    everything = client.get("/calendar/").json()
    assert [e["title"] for e in everything] == ["Oct", "Nov"]
    assert client.get("/calendar/", params={"year": 2026, "month": 13}).status_code == 422


def test_update_event_replaces_attendees(client: TestClient, admin_token_headers: dict, make_user):
    first = make_user("First")
    second = make_user("Second")
    event = client.post(
        "/calendar/",
        json=event_payload(type="meeting", purpose="Sync", attendee_ids=[first.id]),
        headers=admin_token_headers,
    ).json()

    response = client.patch(
        f"/calendar/{event['id']}",
        json={"result": "Agreed", "attendee_ids": [second.id]},
        headers=admin_token_headers,
    )
    assert response.status_code == 200
    data = response.json()
    assert data["result"] == "Agreed"
    assert data["purpose"] == "Sync"
    assert [a["user_id"] for a in data["attendees"]] == [second.id]


def test_delete_event(client: TestClient, admin_token_headers: dict):
    event = client.post("/calendar/", json=event_payload(), headers=admin_token_headers).json()
    assert client.delete(f"/calendar/{event['id']}", headers=admin_token_headers).status_code == 200
    assert client.get(f"/calendar/{event['id']}").status_code == 404
