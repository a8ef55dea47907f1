URL = "/api/v1/risk-predictions"


def prediction(**overrides):
    payload = {
        "fieldId": "A-1",
        "zoneId": "A-1",
        "riskLevel": "low",
        "riskType": "drought",
        "probability": 25,
        "aiConfidence": 92,
        "coordinates": {"x": 10, "y": 15},
    }
    payload.update(overrides)
    return payload


def post(client, headers, payload):
    r = client.post(URL + "/", json=payload, headers=headers)
    assert r.status_code == 201, r.text
    return r.json()["data"]


def test_create_defaults_time_horizon(client, auth_headers, field):
    data = post(client, auth_headers, prediction())
    assert data["timeHorizon"] == "1week"
    assert data["coordinates"] == {"x": 10, "y": 15}
    assert data["fieldId"] == "A-1"


def test_create_requires_fields(client, auth_headers, field):
    payload = prediction()
    del payload["aiConfidence"]
    r = client.post(URL + "/", json=payload, headers=auth_headers)
    assert r.status_code == 400
    assert r.json()["message"] == (
        "Required fields: fieldId, zoneId, riskLevel, riskType, probability, aiConfidence"
    )


def test_probability_out_of_range(client, auth_headers, field):
    r = client.post(URL + "/", json=prediction(probability=120), headers=auth_headers)
    assert r.status_code == 400


def test_list_filters(client, auth_headers, field):
    post(client, auth_headers, prediction())
    post(client, auth_headers, prediction(riskLevel="high", riskType="disease", probability=78, timeHorizon="3days"))

    data = client.get(URL + "/field/A-1", params={"riskLevel": "high"}, headers=auth_headers).json()["data"]
    assert [p["riskType"] for p in data["riskPredictions"]] == ["disease"]

    data = client.get(URL + "/field/A-1", params={"timeHorizon": "1week"}, headers=auth_headers).json()["data"]
    assert [p["riskType"] for p in data["riskPredictions"]] == ["drought"]


def test_zone_map_keeps_newest_per_cell(client, auth_headers, field):
    post(client, auth_headers, prediction(probability=20, predictionDate="2024-06-01T00:00:00Z"))
    post(client, auth_headers, prediction(riskLevel="medium", probability=55, predictionDate="2024-06-05T00:00:00Z"))
    post(client, auth_headers, prediction(zoneId="B-1", coordinates={"x": 30, "y": 40}))
    post(client, auth_headers, prediction(riskLevel="high", timeHorizon="1month"))

    data = client.get(URL + "/field/A-1/map", headers=auth_headers).json()["data"]
    assert data["timeHorizon"] == "1week"
    assert data["totalZones"] == 2
    cells = {(z["coordinates"]["x"], z["coordinates"]["y"]): z for z in data["riskZoneMap"]}
    assert cells[(10, 15)]["riskLevel"] == "medium"
    assert data["riskDistribution"] == {"high": 0, "medium": 1, "low": 2}


def test_summary(client, auth_headers, field):
    post(client, auth_headers, prediction(probability=25, aiConfidence=90))
    post(client, auth_headers, prediction(riskLevel="high", riskType="disease", probability=78, aiConfidence=89))
    post(client, auth_headers, prediction(riskLevel="medium", riskType="disease", probability=50, aiConfidence=80))

    data = client.get(URL + "/field/A-1/summary", headers=auth_headers).json()["data"]
    assert data["summary"] == {
        "totalPredictions": 3,
        "highRiskZones": 1,
        "mediumRiskZones": 1,
        "lowRiskZones": 1,
        "avgProbability": 51,
        "avgAiConfidence": 86.33,
    }
    types = {t["riskType"]: t for t in data["riskTypes"]}
    assert types["disease"] == {"riskType": "disease", "count": 2, "avgProbability": 64}


def test_high_risk_zones_by_probability(client, auth_headers, field):
    post(client, auth_headers, prediction(riskLevel="high", probability=60))
    post(client, auth_headers, prediction(riskLevel="high", probability=90))
    post(client, auth_headers, prediction(riskLevel="medium", probability=99))

    data = client.get(URL + "/field/A-1/high-risk", headers=auth_headers).json()["data"]
    assert [z["probability"] for z in data["highRiskZones"]] == [90, 60]


def test_recommendations_sorted_by_priority(client, auth_headers, field):
    post(client, auth_headers, prediction(recommendations=[
        {"action": "Monitor moisture", "priority": "low"},
        {"action": "Check irrigation lines", "priority": "medium"},
    ]))
    post(client, auth_headers, prediction(riskLevel="high", riskType="disease", probability=78, recommendations=[
        {"action": "Apply fungicide", "priority": "high", "description": "Within 48 hours"},
        {"action": "Scout leaves", "priority": "medium"},
    ]))

    data = client.get(URL + "/field/A-1/recommendations", headers=auth_headers).json()["data"]
    recs = data["recommendations"]
    assert [r["action"] for r in recs] == [
        "Apply fungicide", "Scout leaves", "Check irrigation lines", "Monitor moisture",
    ]
    assert recs[0]["riskType"] == "disease"
    assert recs[0]["probability"] == 78

    data = client.get(URL + "/field/A-1/recommendations", params={"riskType": "drought"},
                      headers=auth_headers).json()["data"]
    assert len(data["recommendations"]) == 2


def test_foreign_field_hidden(client, auth_headers, other_headers, field):
    post(client, auth_headers, prediction())
    r = client.get(URL + "/field/A-1/summary", headers=other_headers)
    assert r.status_code == 404
