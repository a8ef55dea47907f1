def test_root_uses_envelope(client):
    body = client.get("/").json()
    assert body["statusCode"] == 200
    assert body["success"] is True
    assert body["message"] == "AgriAI Backend API is running!"


def test_health(client):
    body = client.get("/health").json()
    assert body["data"]["status"] == "OK"
    assert "timestamp" in body["data"]


def test_healthz_pings_database(client):
    r = client.get("/healthz")
    assert r.status_code == 200
    assert r.json()["data"] == {"ok": True, "db": "up"}


def test_unknown_route_uses_error_envelope(client):
    r = client.get("/api/v1/nope")
    assert r.status_code == 404
    body = r.json()
    assert body["success"] is False
    assert body["data"] is None
    assert body["errors"] == []


def test_protected_route_requires_token(client):
    r = client.get("/api/v1/fields/get-fields")
    assert r.status_code == 401
    assert r.json()["message"] == "Unauthorized request"
