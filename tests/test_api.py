"""Read endpoints against a database filled from the offline scrapers."""


def test_root_and_docs(client):
    body = client.get("/").get_json()
    assert body["success"] is True
    assert body["documentation"] == "/api/docs"
    assert "GET /api/creatures" in body["endpoints"]
    docs = client.get("/api/docs").get_json()
    assert "taming" in docs["endpoints"]
    assert "message" not in docs


def test_unknown_endpoint_lists_available(client):
    resp = client.get("/api/does-not-exist")
    assert resp.status_code == 404
    body = resp.get_json()
    assert body["success"] is False
    assert body["path"] == "/api/does-not-exist"
    assert "GET /api/health" in body["available_endpoints"]


def test_health_reports_database(client, populated):
    resp = client.get("/api/health")
    body = resp.get_json()
    assert resp.status_code == 200
    assert body["status"] == "ok"
    assert body["database"]["connected"] is True
    assert body["database"]["details"]["schema_version"] == "3.1.0"
    assert body["database"]["details"]["counts"]["maps"] == 12
    assert body["services"]["data_source"] == "database"
    assert body["environment"] == "test"


def test_map_pagination(client, populated):
    body = client.get("/api/maps?page=2&limit=5").get_json()
    assert len(body["data"]) == 5
    assert body["pagination"] == {"page": 2, "limit": 5, "total": 12, "pages": 3, "hasNext": True, "hasPrev": True}
    last = client.get("/api/maps?page=3&limit=5").get_json()
    assert len(last["data"]) == 2
    assert last["pagination"]["hasNext"] is False
    beyond = client.get("/api/maps?page=9&limit=5").get_json()
    assert beyond["data"] == []
    assert beyond["pagination"]["total"] == 12


def test_limit_is_capped_and_page_validated(client, populated):
    assert client.get("/api/maps?limit=500").get_json()["pagination"]["limit"] == 100
    resp = client.get("/api/maps?page=0")
    assert resp.status_code == 400
    assert resp.get_json()["field"] == "page"
    assert client.get("/api/maps?limit=abc").status_code == 400
    huge = client.get("/api/maps?page=99999999999999999999")
    assert huge.status_code == 400
    assert huge.get_json()["field"] == "page"
    assert client.get("/api/regions?map_id=99999999999999999999").status_code == 400


def test_map_filters(client, populated):
    body = client.get("/api/maps?type=EXPANSION").get_json()
    assert {m["slug"] for m in body["data"]} == {"scorched-earth", "aberration", "extinction", "genesis-1", "genesis-2"}
    assert client.get("/api/maps?expansion=true").get_json()["pagination"]["total"] == 5
    assert client.get("/api/maps?official=false").get_json()["data"] == []
    assert client.get("/api/maps?official=maybe").status_code == 400


def test_map_detail(client, populated):
    data = client.get("/api/maps/the-island").get_json()["data"]
    assert data["name"] == "The Island"
    assert data["release_date"] == "2015-06-02"
    resp = client.get("/api/maps/nowhere")
    assert resp.status_code == 404
    assert resp.get_json()["error"] == "Map 'nowhere' not found"


def test_map_children(client, populated):
    caves = client.get("/api/maps/the-island/caves").get_json()
    assert caves["map"] == "the-island"
    assert caves["count"] == 2
    assert [c["name"] for c in caves["data"]] == ["Artifact of the Hunter Cave", "Lava Cave"]
    assert client.get("/api/maps/the-island/caves?type=LAVA").get_json()["count"] == 1
    assert client.get("/api/maps/the-island/resources").get_json()["count"] == 13
    assert client.get("/api/maps/the-island/resources?type=metal").get_json()["data"][0]["name"] == "Metal Node"
    drops = client.get("/api/maps/the-island/supply-drops?quality=red").get_json()["data"]
    assert drops[0]["level_requirement"] == 70
    assert client.get("/api/maps/the-island/obelisks").get_json()["count"] == 3
    assert client.get("/api/maps/the-island/base-spots").get_json()["data"] == []
    assert client.get("/api/maps/nowhere/caves").status_code == 404


def test_creature_list_filters_and_sorting(client, populated):
    body = client.get("/api/creatures").get_json()
    assert [c["slug"] for c in body["data"]] == ["dodo", "dragon", "rex"]
    tameable = client.get("/api/creatures?tameable=true").get_json()["data"]
    assert [c["slug"] for c in tameable] == ["dodo", "rex"]
    by_health = client.get("/api/creatures?sort=health").get_json()["data"]
    assert [c["slug"] for c in by_health] == ["rex", "dodo", "dragon"]
    passive = client.get("/api/creatures?temperament=PASSIVE").get_json()["data"]
    assert [c["slug"] for c in passive] == ["dodo"]
    assert client.get("/api/creatures?sort=speed").status_code == 400


def test_creature_search(client, populated):
    body = client.get("/api/creatures/search?q=re").get_json()
    assert body["query"] == "re"
    assert [c["slug"] for c in body["data"]] == ["rex"]
    assert body["count"] == 1
    by_description = client.get("/api/creatures/search?q=flightless").get_json()["data"]
    assert [c["slug"] for c in by_description] == ["dodo"]
    resp = client.get("/api/creatures/search?q=r")
    assert resp.status_code == 400
    assert resp.get_json()["error"] == "Search query must be at least 2 characters long"


def test_creature_search_escapes_wildcards(client, populated):
    assert client.get("/api/creatures/search?q=%25%25").get_json()["data"] == []


def test_creature_detail(client, populated):
    data = client.get("/api/creatures/rex").get_json()["data"]
    assert data["description"] == "Apex predator of the island"
    assert data["wiki_url"] == "https://wiki.test/wiki/Rex"
    assert [s["stat_name"] for s in data["stats"]] == ["health", "melee_damage"]
    assert data["taming"]["preferred_foods"] == ["Exceptional Kibble", "Raw Meat"]
    assert len(data["taming_foods"]) == 2
    resp = client.get("/api/creatures/nope")
    assert resp.status_code == 404
    assert resp.get_json()["error"] == "Creature 'nope' not found"


def test_regions_require_map(client, populated):
    resp = client.get("/api/regions")
    assert resp.status_code == 400
    body = resp.get_json()
    assert body["field"] == "map"
    assert "Example: /api/regions?map=the-island" in body["error"]


def test_regions_for_map(client, populated):
    body = client.get("/api/regions?map=the-island").get_json()
    assert [r["name"] for r in body["data"]] == ["Redwood Forest", "Snowy Mountains"]
    assert body["data"][0]["map_slug"] == "the-island"
    assert body["pagination"]["total"] == 2
    arctic = client.get("/api/regions?map=genesis-1&biome=arctic").get_json()["data"]
    assert [r["name"] for r in arctic] == ["Frozen Spires"]
    assert client.get("/api/regions?map=nowhere").status_code == 404


def test_region_detail(client, populated):
    region_id = client.get("/api/regions?map=the-island").get_json()["data"][0]["id"]
    data = client.get(f"/api/regions/{region_id}").get_json()["data"]
    assert data["map_slug"] == "the-island"
    assert data["map_name"] == "The Island"
    resp = client.get("/api/regions/99999")
    assert resp.status_code == 404
    assert resp.get_json()["error"] == "Region with id '99999' not found"
    assert client.get("/api/regions/99999999999999999999").status_code == 404


def test_search(client, populated):
    body = client.get("/api/search?q=rex&type=creature").get_json()
    assert body["data"]["query"] == "rex"
    assert body["data"]["type"] == "creature"
    assert [r["slug"] for r in body["data"]["results"]] == ["rex"]
    assert body["pagination"]["total"] == 1
    snowy = client.get("/api/search?q=snowy").get_json()["data"]["results"]
    assert snowy == [
        {
            "result_type": "region",
            "id": snowy[0]["id"],
            "name": "Snowy Mountains",
            "slug": None,
            "description": "Snowy Mountains region on The Island",
            "map_slug": "the-island",
            "category": "snow",
        }
    ]
    assert client.get("/api/search?q=x").status_code == 400
    assert client.get("/api/search?q=rex&type=items").status_code == 400
