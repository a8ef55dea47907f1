from agriai.models import Field

SEED = "/api/v1/seed/seed-db"


def test_seed_counts(client, auth_headers):
    r = client.post(SEED, headers=auth_headers)
    assert r.status_code == 201, r.text
    data = r.json()["data"]
    assert {k: v for k, v in data.items() if k != "message"} == {
        "fields": 3,
        "spectralHealth": 9,
        "soilHealth": 9,
        "temporalAnalysis": 6,
        "alerts": 9,
        "riskPredictions": 6,
    }


def test_reseed_replaces_previous_data(client, auth_headers, db):
    client.post(SEED, headers=auth_headers)
    client.post(SEED, headers=auth_headers)

    fields = client.get("/api/v1/fields/get-fields", headers=auth_headers).json()["data"]["fields"]
    assert sorted(f["fieldId"] for f in fields) == ["A-1", "A-2", "B-1"]
    assert db.query(Field).count() == 3

    summary = client.get("/api/v1/alerts/summary", headers=auth_headers).json()["data"]
    assert summary["summary"]["totalAlerts"] == 9


def test_seeded_soil_scores_are_derived(client, auth_headers):
    client.post(SEED, headers=auth_headers)
    data = client.get("/api/v1/soil-health/field/A-1/overview", headers=auth_headers).json()["data"]
    scores = {z["zoneId"]: (z["healthScore"], z["healthStatus"]) for z in data["soilOverview"]}
    assert scores == {"A-1": (83, "excellent"), "A-2": (81, "excellent"), "B-1": (68, "good")}


def test_seeded_temporal_points_have_trends(client, auth_headers):
    client.post(SEED, headers=auth_headers)
    data = client.get("/api/v1/temporal-analysis/field/A-1", headers=auth_headers).json()["data"]
    newest = data["data"][0]
    assert newest["vegetationHealth"] == 78
    assert newest["trendData"] == {"vegetationTrend": "increasing", "moistureTrend": "increasing"}


def test_seed_leaves_other_users_alone(client, auth_headers, other_headers, field_payload):
    r = client.post("/api/v1/fields/create-field", json={**field_payload, "fieldId": "Z-1"}, headers=other_headers)
    assert r.status_code == 201

    client.post(SEED, headers=auth_headers)

    fields = client.get("/api/v1/fields/get-fields", headers=other_headers).json()["data"]["fields"]
    assert [f["fieldId"] for f in fields] == ["Z-1"]


def test_seed_requires_auth(client):
    assert client.post(SEED).status_code == 401


def test_examples(client, auth_headers):
    r = client.get("/api/v1/seed/examples", headers=auth_headers)
    assert r.status_code == 200
    data = r.json()["data"]
    assert data["soilHealth"][0]["healthScore"] == 83
    assert data["soilHealth"][0]["healthStatus"] == "excellent"
    assert "Corn" in data["cropTypes"]
    assert len(data["fields"]) == 3
