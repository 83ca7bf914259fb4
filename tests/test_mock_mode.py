"""Behaviour when the service runs without a database."""

from asa_service.mock_data import MOCK_MESSAGE


def test_responses_carry_mock_message(mock_client):
    body = mock_client.get("/api/creatures").get_json()
    assert body["success"] is True
    assert body["message"] == MOCK_MESSAGE
    assert body["pagination"]["total"] == 4
    assert [c["slug"] for c in body["data"]] == ["argentavis", "dodo", "dragon", "rex"]


def test_health_reports_mock_source(mock_client):
    resp = mock_client.get("/api/health")
    body = resp.get_json()
    assert resp.status_code == 200
    assert body["status"] == "ok"
    assert body["database"] == {"connected": False, "status": "skipped", "details": None}
    assert body["services"]["data_source"] == "mock"
    assert body["services"]["population_jobs"] == "disabled"


def test_same_filter_semantics_as_database(mock_client):
    tameable = mock_client.get("/api/creatures?tameable=true&sort=health").get_json()["data"]
    assert [c["slug"] for c in tameable] == ["rex", "argentavis", "dodo"]
    expansions = mock_client.get("/api/maps?type=Expansion").get_json()["data"]
    assert [m["slug"] for m in expansions] == ["scorched-earth"]
    page = mock_client.get("/api/maps?page=2&limit=2").get_json()["pagination"]
    assert page == {"page": 2, "limit": 2, "total": 5, "pages": 3, "hasNext": True, "hasPrev": True}


def test_search_ranks_name_prefix_first(mock_client):
    body = mock_client.get("/api/creatures/search?q=ar").get_json()
    # description matches follow, alphabetically
    assert [c["slug"] for c in body["data"]] == ["argentavis", "dragon", "rex"]


def test_mock_children_and_regions(mock_client):
    spots = mock_client.get("/api/maps/the-island/base-spots?rating_min=8").get_json()["data"]
    assert [s["name"] for s in spots] == ["Hidden Lake"]
    regions = mock_client.get("/api/regions?map=the-island&biome=snow").get_json()["data"]
    assert [r["name"] for r in regions] == ["Snowy Mountains"]
    assert mock_client.get("/api/regions?map_id=3").get_json()["pagination"]["total"] == 2
    assert mock_client.get("/api/regions/2").get_json()["data"]["map_name"] == "The Island"
    assert mock_client.get("/api/regions").status_code == 400


def test_mock_taming(mock_client):
    data = mock_client.get("/api/taming/rex/optimal").get_json()["data"]
    assert data["recommended"]["food_name"] == "Exceptional Kibble"
    assert [f["food_name"] for f in data["alternatives"]] == ["Prime Meat", "Raw Meat"]
    resp = mock_client.post("/api/taming/calculate", json={"creature": "dodo", "level": 30, "food": "mejoberry"})
    assert resp.get_json()["data"]["requirements"]["quantity"] == 9


def test_admin_writes_unavailable(mock_client):
    for path in ("/api/admin/populate-data", "/api/admin/sync-data", "/api/admin/reset-database"):
        resp = mock_client.post(path, json={})
        assert resp.status_code == 503
        assert resp.get_json() == {"success": False, "error": "Database not available"}
    assert mock_client.get("/api/admin/jobs").status_code == 503


def test_admin_status_and_stats_in_mock_mode(mock_client):
    status = mock_client.get("/api/admin/population-status").get_json()["data"]
    assert status["status"]["status"] == "mock"
    assert status["counts"]["maps"] == 5
    stats = mock_client.get("/api/admin/stats").get_json()
    assert stats["data"]["creatures"] == 4
    assert stats["total_records"] == sum(stats["data"].values())


def test_admin_maintenance_answers_from_mock_data(mock_client):
    resp = mock_client.post("/api/admin/validate-database")
    assert resp.status_code == 200
    body = resp.get_json()
    assert body["message"] == MOCK_MESSAGE
    assert set(body["data"]) == {"maps", "creatures", "map_regions", "resources"}
    assert body["data"]["maps"] == {"total": 5, "valid": 5, "issues": 0}
    assert body["data"]["creatures"]["total"] == 4
    assert body["total_records"] == sum(t["total"] for t in body["data"].values())

    resp = mock_client.post("/api/admin/refresh-indexes")
    assert resp.status_code == 200
    body = resp.get_json()
    assert body["message"] == MOCK_MESSAGE
    assert body["data"]["refreshed"] is False


def test_out_of_range_page_rejected(mock_client):
    resp = mock_client.get("/api/maps?page=99999999999999999999")
    assert resp.status_code == 400
    assert resp.get_json()["field"] == "page"
