"""
tests/test_health.py -- Integration tests for GET /api/health.

Covers:
  - 200 response with status, version, and components fields
  - components.database reports 'ok' against the live test engine
  - No authentication required
"""

from __future__ import annotations

from api.main import API_VERSION


def test_health_returns_200_with_components(api_client):
    """Health endpoint returns 200 with status, version, and components."""
    client, _, _ = api_client
    resp = client.get("/api/health")
    assert resp.status_code == 200
    data = resp.json()
    assert data["status"] == "healthy"
    assert data["version"] == API_VERSION
    assert data["components"]["app"] == "ok"
    assert data["components"]["database"] == "ok"


def test_health_no_auth_required(api_client):
    """Health endpoint is accessible without any authentication headers."""
    client, _, _ = api_client
    resp = client.get("/api/health", headers={})
    assert resp.status_code == 200
    assert resp.headers["access-control-allow-origin"] == "*"


def test_health_reports_database_error(api_client, monkeypatch):
    """A failing connectivity probe flips the database component to 'error'."""
    client, _, _ = api_client
    monkeypatch.setattr("api.main.check_db_connected", lambda engine: False)
    data = client.get("/api/health").json()
    assert data["status"] == "healthy"
    assert data["components"]["database"] == "error"
