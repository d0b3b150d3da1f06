"""API tests for service endpoints."""


def test_health(client):
    response = client.get("/health")

    assert response.status_code == 200
    body = response.json()
    assert body["status"] == "healthy"
    assert body["environment"] == "test"
    assert body["checks"]["matching_rules"] == "loaded"
    assert body["checks"]["analytics_scheduler"] == "stopped"


def test_root(client):
    body = client.get("/").json()

    assert body["service"] == "Triage Desk"
    assert body["docs"] == "/docs"


def test_correlation_id_is_echoed(client):
    response = client.get("/health", headers={"X-Correlation-ID": "abc-123"})

    assert response.headers["X-Correlation-ID"] == "abc-123"
