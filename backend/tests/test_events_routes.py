import pytest
from datetime import date


@pytest.fixture
def owner(workflow):
    return workflow.register("Owner", "owner@example.com", "password123", date(1985, 2, 3))


def test_create_event_success(client, owner):
    payload = {
        "userId": owner.id,
        "eventName": "New Event",
        "venue": "123 Main St",
        "dateTime": "2025-05-01T10:00:00Z"
    }

    response = client.post("/api/events", json=payload)

    assert response.status_code == 201
    data = response.get_json()
    assert data["id"] == 1
    assert data["userId"] == owner.id
    assert data["eventName"] == "New Event"
    assert data["venue"] == "123 Main St"
    assert data["dateTime"] == "2025-05-01T10:00:00+00:00"


def test_create_event_invalid_input(client, owner):
    payload = {
        "userId": owner.id,
        "eventName": "New Event"
        # Missing venue, dateTime
    }
    response = client.post("/api/events", json=payload)

    assert response.status_code == 400
    fields = {d["field"] for d in response.get_json()["details"]}
    assert fields == {"venue", "dateTime"}


def test_create_event_bad_datetime(client, owner):
    response = client.post("/api/events", json={
        "userId": owner.id,
        "eventName": "New Event",
        "venue": "Hall",
        "dateTime": "next tuesday"
    })
    assert response.status_code == 400


def test_list_events_sorted_ascending(client, owner):
    for name, when in [("Second", "2025-03-01T09:00:00Z"), ("First", "2025-01-01T09:00:00Z")]:
        client.post("/api/events", json={
            "userId": owner.id, "eventName": name, "venue": "Hall", "dateTime": when
        })

    response = client.get(f"/api/events/{owner.id}")

    assert response.status_code == 200
    assert [e["eventName"] for e in response.get_json()] == ["First", "Second"]


def test_list_events_empty(client):
    response = client.get("/api/events/12345")
    assert response.status_code == 200
    assert response.get_json() == []


def test_delete_event(client, owner):
    created = client.post("/api/events", json={
        "userId": owner.id, "eventName": "Temp", "venue": "Hall", "dateTime": "2025-01-01T09:00:00Z"
    }).get_json()

    response = client.delete(f"/api/events/{created['id']}")
    assert response.status_code == 200

    response = client.delete(f"/api/events/{created['id']}")
    assert response.status_code == 404
    assert response.get_json()["error"] == "Event not found"


@pytest.mark.parametrize("user_id", [True, "1", 1.5])
def test_create_event_rejects_non_integer_user_id(client, owner, user_id):
    response = client.post("/api/events", json={
        "userId": user_id, "eventName": "Party", "venue": "Hall", "dateTime": "2025-01-01T09:00:00Z"
    })

    assert response.status_code == 400
    assert client.get(f"/api/events/{owner.id}").get_json() == []
