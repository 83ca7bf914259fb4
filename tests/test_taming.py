from asa_service.services import taming

RAW_MEAT = {"food_name": "Raw Meat", "effectiveness": 70.0, "quantity_for_level_1": 34, "taming_time_minutes": 94}
KIBBLE = {"food_name": "Exceptional Kibble", "effectiveness": 100.0, "quantity_for_level_1": 10, "taming_time_minutes": 32}
PRIME = {"food_name": "Prime Meat", "effectiveness": 100.0, "quantity_for_level_1": 12, "taming_time_minutes": 40}


def test_reference_level_returns_base_costs():
    result = taming.calculate({"name": "Rex"}, RAW_MEAT, 30)
    assert result["requirements"]["quantity"] == 34
    assert result["requirements"]["time_minutes"] == 94
    assert result["requirements"]["narcotics_needed"] == 19
    assert result["calculations"]["level_multiplier"] == 1.0
    assert result["formula_verified"] is False


def test_higher_level_scales_up():
    result = taming.calculate({"name": "Rex"}, KIBBLE, 60)
    assert result["calculations"]["level_multiplier"] == 1.8025
    assert result["requirements"]["quantity"] == 19
    assert result["requirements"]["time_minutes"] == 58
    assert result["requirements"]["narcotics_needed"] == 24
    assert result["creature"] == "Rex" and result["food"] == "Exceptional Kibble"


def test_optimal_foods_ranking():
    ranked = taming.optimal_foods([RAW_MEAT, PRIME, KIBBLE])
    assert ranked["recommended"]["food_name"] == "Exceptional Kibble"
    assert [f["food_name"] for f in ranked["alternatives"]] == ["Prime Meat", "Raw Meat"]
    assert ranked["total_options"] == 3
    assert taming.optimal_foods([]) == {"recommended": None, "alternatives": [], "total_options": 0}


def test_taming_list_and_detail(client, populated):
    resp = client.get("/api/taming")
    body = resp.get_json()
    assert resp.status_code == 200
    assert body["count"] == 2
    rex = next(r for r in body["data"] if r["slug"] == "rex")
    assert rex["preferred_foods"] == ["Exceptional Kibble", "Raw Meat"]
    assert rex["kibble"] == "Exceptional Kibble"

    detail = client.get("/api/taming/rex").get_json()["data"]
    assert detail["tameable"] is True
    assert [f["food_name"] for f in detail["foods"]] == ["Exceptional Kibble", "Raw Meat"]


def test_untameable_creature(client, populated):
    body = client.get("/api/taming/dragon").get_json()
    assert body["data"] == {
        "creature": "dragon",
        "name": "Dragon",
        "tameable": False,
        "message": "This creature cannot be tamed",
    }
    assert client.get("/api/taming/nope").status_code == 404


def test_optimal_endpoint(client, populated):
    data = client.get("/api/taming/rex/optimal").get_json()["data"]
    assert data["creature"] == "rex"
    assert data["recommended"]["food_name"] == "Exceptional Kibble"
    assert data["total_options"] == 2


def test_calculate_endpoint(client, populated):
    resp = client.post("/api/taming/calculate", json={"creature": "Rex", "level": 30, "food": "raw meat"})
    assert resp.status_code == 200
    data = resp.get_json()["data"]
    assert data["requirements"]["quantity"] == 34
    assert data["formula_verified"] is False


def test_calculate_rejects_bad_input(client, populated):
    resp = client.post("/api/taming/calculate", json={"creature": "rex", "food": "Raw Meat"})
    assert resp.status_code == 400
    assert resp.get_json()["field"] == "level"
    assert client.post("/api/taming/calculate", json={"creature": "rex", "level": 0, "food": "x"}).status_code == 400
    assert client.post("/api/taming/calculate", json={"creature": "rex", "level": True, "food": "x"}).status_code == 400
    assert client.post("/api/taming/calculate", data="nope", content_type="text/plain").status_code == 400


def test_calculate_unknown_creature_or_food(client, populated):
    resp = client.post("/api/taming/calculate", json={"creature": "nope", "level": 10, "food": "Raw Meat"})
    assert resp.status_code == 404
    resp = client.post("/api/taming/calculate", json={"creature": "rex", "level": 10, "food": "Berries"})
    assert resp.status_code == 404
    assert resp.get_json()["error"] == "No taming data for 'Berries' on Rex"
