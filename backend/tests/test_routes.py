"""HTTP-level tests with stores, auth and the events API replaced by local fakes."""

from fakes import FakeIncidentStore, make_incident, make_trip


def test_health_and_root(client):
    assert client.get("/health").json()["status"] == "ok"
    response = client.get("/", follow_redirects=False)
    assert response.status_code in (302, 307)
    assert response.headers["location"] == "/docs"


def test_list_incidents_falls_back(client):
    response = client.get("/incidents", params={"location": "paris"})
    assert response.status_code == 200
    rows = response.json()
    assert rows
    assert all("paris" in r["location"].lower() for r in rows)


def test_list_incidents_category_and_verified(client, incident_store):
    incident_store.items = {
        "a": make_incident(id="a", category="Taxi Scam", verified=True),
        "b": make_incident(id="b", category="ATM Fraud", verified=True),
    }
    response = client.get("/incidents", params=[("category", "ATM Fraud"), ("verified_only", "true")])
    assert [r["id"] for r in response.json()] == ["b"]


def test_unknown_category_param_rejected(client):
    assert client.get("/incidents", params={"category": "Nope"}).status_code == 422


def test_trip_incidents_endpoint(client, incident_store):
    incident_store.items = {f"i{n}": make_incident(id=f"i{n}") for n in range(5)}
    ok = client.get("/incidents/trip", params={"destination": "Paris", "arrival": "2024-06-05", "departure": "2024-06-20"})
    assert len(ok.json()) == 5
    bad = client.get("/incidents/trip", params={"destination": "Paris", "arrival": "soon", "departure": "2024-06-20"})
    assert bad.status_code == 400


def test_sample_and_map_layers(client, incident_store):
    assert len(client.get("/incidents/sample", params={"count": 5}).json()) == 5

    incident_store.items = {"a": make_incident(id="a"), "b": make_incident(id="b", latitude=None, longitude=None)}
    pins = client.get("/incidents/markers", params={"resolution": 7}).json()
    assert [p["id"] for p in pins] == ["a"]
    assert pins[0]["zone_id"]

    clusters = client.get("/incidents/clusters").json()
    assert clusters[0]["count"] == 1

    inside = client.get("/incidents/bbox", params={"min_lat": 48, "max_lat": 49, "min_lng": 2, "max_lng": 3}).json()
    assert [p["id"] for p in inside] == ["a"]
    flipped = client.get("/incidents/bbox", params={"min_lat": 49, "max_lat": 48, "min_lng": 2, "max_lng": 3})
    assert flipped.status_code == 400


def test_report_incident(client, incident_store):
    response = client.post("/report_incident", json={
        "title": "Fake taxi",
        "location": "Rome, Italy",
        "category": "Taxi Scam",
        "latitude": 41.9,
        "longitude": 12.5,
    })
    assert response.status_code == 201
    body = response.json()
    assert body["verified"] is False
    assert body["user_id"] == "user-1"
    assert body["id"] in incident_store.items

    mine = client.get("/incidents/user/user-1").json()
    assert [r["id"] for r in mine] == [body["id"]]


def test_report_incident_validation(client, incident_store):
    response = client.post("/report_incident", json={"title": "   ", "location": "Rome"})
    assert response.status_code == 422
    assert "Please provide a title" in response.text
    assert incident_store.items == {}


def test_report_incident_store_failure(client, incident_service):
    incident_service.store = FakeIncidentStore(fail=True)
    response = client.post("/report_incident", json={"title": "x", "location": "Rome, Italy"})
    assert response.status_code == 502
    assert response.json()["detail"] == "boom"


def test_update_and_delete_incident(client, incident_store):
    incident_store.items = {"inc-1": make_incident(user_id="user-1", verified=False)}
    response = client.put("/incidents/inc-1", json={"title": "Meter off", "verified": True})
    assert response.status_code == 200
    assert response.json()["title"] == "Meter off"
    assert response.json()["verified"] is False
    assert incident_store.items["inc-1"]["verified"] is False

    assert client.delete("/incidents/inc-1").status_code == 204
    assert client.put("/incidents/inc-1", json={"title": "x"}).status_code == 404
    assert client.delete("/incidents/inc-1").status_code == 404


def test_other_users_incident_is_hidden(client, incident_store):
    incident_store.items = {"inc-1": make_incident(user_id="owner", verified=False)}
    hijack = client.put("/incidents/inc-1", json={"verified": True, "title": "hijacked"})
    assert hijack.status_code == 404
    assert incident_store.items["inc-1"]["title"] == "Taxi Scam in Paris, France"
    assert incident_store.items["inc-1"]["verified"] is False

    assert client.delete("/incidents/inc-1").status_code == 404
    assert "inc-1" in incident_store.items


def test_update_races_with_delete(client, incident_store, incident_service, monkeypatch):
    incident_store.items = {"inc-1": make_incident(user_id="user-1")}
    original = incident_service.get_incident

    def fetch_then_vanish(incident_id):
        record = original(incident_id)
        incident_store.items.clear()
        return record

    monkeypatch.setattr(incident_service, "get_incident", fetch_then_vanish)
    response = client.put("/incidents/inc-1", json={"title": "x"})
    assert response.status_code == 404
    assert response.json()["detail"] == "Incident not found"


def test_trip_crud(client, trip_store, incident_store):
    created = client.post("/trips", json={
        "destination": "Paris, France",
        "arrival_date": "2024-06-05",
        "departure_date": "2024-06-20",
    })
    assert created.status_code == 201
    trip_id = created.json()["id"]

    assert [t["id"] for t in client.get("/trips").json()] == [trip_id]
    assert [t["id"] for t in client.get("/trips/ongoing").json()] == [trip_id]
    assert client.get("/trips/upcoming").json() == []

    incident_store.items = {f"i{n}": make_incident(id=f"i{n}") for n in range(5)}
    assert len(client.get(f"/trips/{trip_id}/incidents").json()) == 5

    prefs = client.put(f"/trips/{trip_id}/preferences", json={"weather": True})
    assert prefs.json()["notification_preferences"]["weather"] is True

    bad = client.put(f"/trips/{trip_id}", json={"departure_date": "2024-06-01"})
    assert bad.status_code == 400

    assert client.delete(f"/trips/{trip_id}").status_code == 204
    assert client.get(f"/trips/{trip_id}").status_code == 404


def test_trip_dates_validated(client):
    response = client.post("/trips", json={
        "destination": "Paris", "arrival_date": "2024-06-20", "departure_date": "2024-06-05",
    })
    assert response.status_code == 422


def test_other_users_trip_is_hidden(client, trip_store):
    trip_store.items = {"t": make_trip(id="t", user_id="user-2")}
    assert client.get("/trips/t").status_code == 404
    assert client.delete("/trips/t").status_code == 404
    assert "t" in trip_store.items


def test_malformed_trip_is_not_found(client, trip_store):
    trip_store.items = {"bad": {"id": "bad", "user_id": "user-1"}}
    assert client.get("/trips/bad").status_code == 404


def test_me_requires_bearer_token(client):
    assert client.get("/user/me").status_code == 401
    assert client.post("/user/logout").status_code == 401


def test_events_fall_back_to_generated(client):
    events = client.get("/events", params={"location": "Barcelona, Spain", "limit": 3}).json()
    assert len(events) == 3
    assert all(e["source"] == "generated" for e in events)
    assert client.get("/events/categories").json() == []


def test_taxonomy_endpoints(client):
    cats = client.get("/taxonomy/categories").json()
    assert len(cats["categories"]) == 11
    assert cats["categories"][-1]["name"] == "Other"
    countries = client.get("/taxonomy/countries").json()["countries"]
    assert len(countries) == 30


def test_prefix_and_cors_helpers():
    from travelsafe.main import _api_prefix, _cors_settings

    assert _api_prefix("api") == "/api"
    assert _api_prefix("/api/") == "/api"
    assert _api_prefix("  ") == ""
    assert _cors_settings("https://a.example, https://b.example")["allow_origins"] == [
        "https://a.example", "https://b.example",
    ]
    assert "allow_origin_regex" in _cors_settings(None)
