URL = "/api/v1/spectral-health"


def reading(zone="A-1", percentage=85, ndvi=0.82, **extra):
    return {
        "fieldId": "A-1",
        "zoneId": zone,
        "ndviValue": ndvi,
        "healthPercentage": percentage,
        "coordinates": {"x": 10, "y": 15},
        "sensorData": {"vegetationIndex": 0.82, "moistureIndex": 0.75, "temperatureIndex": 0.68},
        **extra,
    }


def post(client, headers, payload):
    r = client.post(URL + "/create-data", json=payload, headers=headers)
    assert r.status_code == 201, r.text
    return r.json()["data"]


def test_status_follows_percentage(client, auth_headers, field):
    assert post(client, auth_headers, reading(percentage=85))["healthStatus"] == "excellent"
    assert post(client, auth_headers, reading(percentage=60))["healthStatus"] == "good"
    assert post(client, auth_headers, reading(percentage=38, healthStatus="excellent"))["healthStatus"] == "poor"


def test_created_record_shape(client, auth_headers, field):
    data = post(client, auth_headers, reading())
    assert data["fieldId"] == "A-1"
    assert data["coordinates"] == {"x": 10, "y": 15}
    assert data["sensorData"]["moistureIndex"] == 0.75


def test_missing_required(client, auth_headers, field):
    payload = reading()
    del payload["ndviValue"]
    r = client.post(URL + "/create-data", json=payload, headers=auth_headers)
    assert r.status_code == 400
    assert r.json()["message"] == "Required fields: fieldId, zoneId, ndviValue, healthPercentage"


def test_ndvi_out_of_range(client, auth_headers, field):
    r = client.post(URL + "/create-data", json=reading(ndvi=1.5), headers=auth_headers)
    assert r.status_code == 400


def test_map_has_one_entry_per_zone(client, auth_headers, field):
    post(client, auth_headers, reading(percentage=50, measurementDate="2024-06-01T00:00:00Z"))
    post(client, auth_headers, reading(percentage=90, measurementDate="2024-06-02T00:00:00Z"))
    post(client, auth_headers, reading(zone="A-2", percentage=70))

    data = client.get(URL + "/field/A-1/map", headers=auth_headers).json()["data"]
    assert data["totalZones"] == 2
    zones = {z["zoneId"]: z for z in data["spectralMap"]}
    assert zones["A-1"]["healthPercentage"] == 90


def test_zone_history_empty_is_not_an_error(client, auth_headers, field):
    r = client.get(URL + "/field/A-1/zone/Z-9", headers=auth_headers)
    assert r.status_code == 200
    assert r.json()["data"]["data"] == []


def test_summary(client, auth_headers, field):
    post(client, auth_headers, reading(percentage=85, ndvi=0.8))
    post(client, auth_headers, reading(zone="A-2", percentage=38, ndvi=0.4))

    data = client.get(URL + "/field/A-1/summary", headers=auth_headers).json()["data"]
    assert data["totalZones"] == 2
    assert data["averageHealthPercentage"] == 61.5
    assert data["averageNdviValue"] == 0.6
    assert data["healthStatusDistribution"] == {"excellent": 1, "poor": 1}


def test_update_recomputes_status(client, auth_headers, field):
    rec = post(client, auth_headers, reading(percentage=85))
    r = client.put(f"{URL}/update-data/{rec['id']}", json={"healthPercentage": 55}, headers=auth_headers)
    assert r.status_code == 200
    data = r.json()["data"]
    assert data["healthPercentage"] == 55
    assert data["healthStatus"] == "fair"
    assert data["ndviValue"] == 0.82


def test_update_unknown_and_foreign(client, auth_headers, other_headers, field):
    r = client.put(f"{URL}/update-data/999", json={"healthPercentage": 55}, headers=auth_headers)
    assert r.status_code == 404
    assert r.json()["message"] == "Spectral health data not found"

    rec = post(client, auth_headers, reading())
    r = client.put(f"{URL}/update-data/{rec['id']}", json={"healthPercentage": 55}, headers=other_headers)
    assert r.status_code == 403
    assert r.json()["message"] == "Access denied"
