"""
E2E tests for ping endpoint
"""

import pytest
from datetime import datetime
from tests.e2e.e2e_test_base import E2ETestBase


class TestPing(E2ETestBase):
    """Tests for the ping endpoint"""

    def test_ping_endpoint_returns_pong(self):
        response = self.client.get("/ping")

        assert response.status_code == 200
        data = response.json()
        assert data["message"] == "pong"
        assert data["status"] == "ok"
        assert data["environment"]

    def test_ping_endpoint_timestamp_format(self):
        """Test that ping endpoint returns valid ISO format timestamp"""
        response = self.client.get("/ping")

        assert response.status_code == 200
        timestamp_str = response.json()["timestamp"]
        try:
            parsed_timestamp = datetime.fromisoformat(timestamp_str)
            assert parsed_timestamp.tzinfo is not None
        except ValueError:
            pytest.fail(f"Timestamp '{timestamp_str}' is not valid ISO format")

    def test_request_id_is_echoed(self):
        response = self.client.get("/ping", headers={"X-Request-ID": "req-123"})

        assert response.status_code == 200
        assert response.headers["X-Request-ID"] == "req-123"

    def test_request_id_is_generated_when_missing(self):
        response = self.client.get("/ping")

        assert response.headers.get("X-Request-ID")

    def test_ping_makes_no_upstream_calls(self):
        for _ in range(3):
            response = self.client.get("/ping")
            assert response.status_code == 200

        assert self.admin_api.method_calls == []
        assert self.storage.method_calls == []

    def test_unknown_route_uses_error_envelope(self):
        response = self.client.get("/api/does-not-exist")

        assert response.status_code == 404
        assert response.json() == {"error": "Not Found"}
