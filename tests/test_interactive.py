import pytest

from asa_service.services import interactive

LOCATIONS = [
    {"name": "Obelisk", "category": "obelisk", "latitude": 25.5, "longitude": 25.6},
    {"name": "Metal", "category": "resource", "latitude": 35.2, "longitude": 45.8},
    {"name": "Rex Valley", "category": "creature", "latitude": 40.1, "longitude": 55.3},
]


def test_nearest_filters_by_radius_and_category():
    found = interactive.nearest(LOCATIONS, 30, 40, radius=20)
    assert [f["name"] for f in found] == ["Metal", "Obelisk", "Rex Valley"]
    assert found[0]["distance"] == 7.79
    assert interactive.nearest(LOCATIONS, 30, 40, radius=20, category="OBELISK")[0]["name"] == "Obelisk"
    assert interactive.nearest(LOCATIONS, 30, 40, radius=1) == []
    assert len(interactive.nearest(LOCATIONS, 30, 40, radius=50, limit=2)) == 2


@pytest.mark.parametrize(
    "mode,minutes,difficulty",
    [("walking", 100, "hard"), ("flying", 25, "hard"), ("vehicle", 40, "hard")],
)
def test_plan_route(mode, minutes, difficulty):
    route = interactive.plan_route((0, 0), (30, 40), mode)
    assert route["distance"] == 50
    assert route["estimated_minutes"] == minutes
    assert route["difficulty"] == difficulty
    assert [w["name"] for w in route["waypoints"]] == ["Start", "Destination"]


def test_route_difficulty_thresholds():
    assert interactive.route_difficulty(5) == "easy"
    assert interactive.route_difficulty(15) == "medium"
    assert interactive.route_difficulty(20.5) == "hard"


def test_interactive_map_and_user_locations(client, populated):
    data = client.get("/api/interactive-maps/the-island/interactive").get_json()["data"]
    assert data["map"]["slug"] == "the-island"
    assert data["locations"] == [] and data["user_locations"] == [] and data["routes"] == []

    payload = {"user_id": "u1", "name": "My Base", "latitude": 50, "longitude": 50, "notes": "cliff"}
    resp = client.post("/api/interactive-maps/the-island/user-locations", json=payload)
    assert resp.status_code == 201
    row = resp.get_json()["data"]
    assert row["category"] == "custom"
    assert row["is_public"] is False

    anonymous = client.get("/api/interactive-maps/the-island/interactive").get_json()["data"]
    assert anonymous["user_locations"] == []
    owner = client.get("/api/interactive-maps/the-island/interactive?user_id=u1").get_json()["data"]
    assert [u["name"] for u in owner["user_locations"]] == ["My Base"]


def test_user_location_validation(client, populated):
    resp = client.post("/api/interactive-maps/the-island/user-locations", json={"user_id": "u1"})
    assert resp.status_code == 400
    assert resp.get_json()["code"] == "required"
    payload = {"user_id": "u1", "name": "x", "latitude": 1, "longitude": 2}
    assert client.post("/api/interactive-maps/nowhere/user-locations", json=payload).status_code == 404


def test_route_endpoint(client, populated):
    body = {"start": {"lat": 0, "lng": 0}, "end": {"lat": 6, "lng": 8}, "travel_mode": "swimming"}
    data = client.post("/api/interactive-maps/the-island/route", json=body).get_json()["data"]
    assert data["distance"] == 10
    assert data["estimated_minutes"] == 15
    assert data["difficulty"] == "easy"
    assert client.post("/api/interactive-maps/the-island/route", json={"start": {"lat": 0}}).status_code == 400
    body["travel_mode"] = "teleport"
    assert client.post("/api/interactive-maps/the-island/route", json=body).status_code == 400
    body["travel_mode"] = "walking"
    assert client.post("/api/interactive-maps/nowhere/route", json=body).status_code == 404


def test_nearest_endpoint_mock(mock_client):
    body = mock_client.get("/api/interactive-maps/ragnarok/nearest?lat=30&lng=40&radius=10").get_json()
    assert body["center"] == {"lat": 30.0, "lng": 40.0}
    assert body["radius"] == 10.0
    assert body["count"] == 1
    assert body["data"][0]["name"] == "Metal Rich Mountain"
    assert body["data"][0]["distance"] == 7.79
    assert mock_client.get("/api/interactive-maps/ragnarok/nearest?lat=30").status_code == 400
    assert mock_client.get("/api/interactive-maps/ragnarok/nearest?lat=1&lng=1&radius=-1").status_code == 400
    assert mock_client.get("/api/interactive-maps/nowhere/nearest?lat=1&lng=1").status_code == 404


def test_locations_by_category_mock(mock_client):
    body = mock_client.get("/api/interactive-maps/ragnarok/locations/resource?rarity=common").get_json()
    assert body["category"] == "resource"
    assert [r["name"] for r in body["data"]] == ["Metal Rich Mountain"]
    assert mock_client.get("/api/interactive-maps/ragnarok/locations/creature?difficulty=easy").get_json()["count"] == 0
