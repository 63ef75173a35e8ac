"""Tests for service info and health check endpoints."""

import pytest


class TestHealthEndpoints:
    """Tests for health check endpoints."""

    @pytest.mark.parametrize("path", ["/health", "/api/health"])
    def test_health_check(self, client, path):
        """Health endpoint should return 200 with status."""
        response = client.get(path)
        assert response.status_code == 200
        data = response.json()
        assert data["status"] == "ok"
        assert data["version"] == "1.0.0"

    def test_health_response_structure(self, client):
        data = client.get("/health").json()
        assert set(data.keys()) == {"status", "version", "timestamp"}

    def test_health_needs_no_token(self, client):
        response = client.get("/health", headers={"Authorization": "Bearer garbage"})
        assert response.status_code == 200


class TestServiceInfo:
    def test_anonymous(self, client):
        response = client.get("/")

        assert response.status_code == 200
        data = response.json()
        assert data["message"] == "AutoStyle API"
        assert data["endpoints"] == {"users": "/api/users", "orders": "/api/orders"}
        assert data["authenticated_as"] is None

    def test_with_token(self, client, issue_token):
        response = client.get("/", headers={"Authorization": f"Bearer {issue_token()}"})
        assert response.json()["authenticated_as"] == "ann@example.com"

    def test_bad_token_treated_as_anonymous(self, client):
        response = client.get("/", headers={"Authorization": "Bearer garbage"})

        assert response.status_code == 200
        assert response.json()["authenticated_as"] is None

    @pytest.mark.parametrize("path", ["/api/", "/api"])
    def test_only_served_at_root(self, client, path):
        assert client.get(path).status_code == 404
        assert client.get("/api/health").status_code == 200
